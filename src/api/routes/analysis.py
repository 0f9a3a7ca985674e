"""Analysis endpoints."""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from api.deps import get_analysis_service
from core.logging_config import get_logger
from domain.analysis import AnalysisService
from services.clipboard import format_clipboard_summary
from services.exports import EXPORT_FORMATS, export_report

router = APIRouter()
LOGGER = get_logger(__name__)


class AnalysisRequest(BaseModel):
    """The two pasted text blobs."""

    invite_text: str = Field(default="", description="'<address> <amount>' lines")
    referrer_text: str = Field(default="", description="One referrer address per line")


class InspectRequest(BaseModel):
    address: str


@router.post("")
async def run_analysis(
    payload: AnalysisRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> Dict[str, Any]:
    """
    Match referrers against the invite schedule.

    Returns:
        Report with buckets, duplicate groups and summary counts.
    """
    report = service.analyze_text(payload.invite_text, payload.referrer_text)
    return report.as_dict()


@router.post("/export")
async def export_analysis(
    payload: AnalysisRequest,
    fmt: str = Query(default="csv", alias="format", description=f"One of: {', '.join(EXPORT_FORMATS)}"),
    service: AnalysisService = Depends(get_analysis_service),
) -> Response:
    """
    Run the analysis and download it as CSV, XLSX or the summary CSV.

    Unknown formats raise ExportError, handled globally as a 400.
    """
    report = service.analyze_text(payload.invite_text, payload.referrer_text)
    content = export_report(report, fmt, token=service.settings.reward_token)
    export_format = EXPORT_FORMATS[fmt.lower()]
    LOGGER.info(f"Exported analysis as {export_format.name} ({report.total_referrers} referrers)")
    return Response(
        content=content,
        media_type=export_format.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_format.filename}"'},
    )


@router.post("/clipboard", response_class=PlainTextResponse)
async def clipboard_summary(
    payload: AnalysisRequest,
    amount: Optional[int] = Query(default=None, ge=0, description="Only list this bucket"),
    service: AnalysisService = Depends(get_analysis_service),
) -> str:
    """Run the analysis and return the copy-to-clipboard text."""
    report = service.analyze_text(payload.invite_text, payload.referrer_text)
    return format_clipboard_summary(
        report,
        token=service.settings.reward_token,
        selected_amount=amount,
        rules=service.rules,
    )


@router.post("/inspect")
async def inspect_address(
    payload: InspectRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> Dict[str, Any]:
    """Show how a single address is normalized and fingerprinted."""
    return service.inspect_address(payload.address).to_dict()

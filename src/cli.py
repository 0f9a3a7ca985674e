#!/usr/bin/env python3
"""Command Line Interface for the Referral Reward Matcher.

Usage:
    cd src
    python cli.py analyze invite.txt referrers.txt            # Print clipboard summary
    python cli.py analyze invite.txt referrers.txt -f xlsx -o out.xlsx
    python cli.py fingerprint 0x11E******393F                 # Inspect one address
    python cli.py server                                      # Start API server
    python cli.py info                                        # Show configuration
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from core.config import get_settings
from core.exceptions import ReferralMatcherError
from core.logging_config import get_logger, setup_logging

LOGGER = get_logger(__name__)
SETTINGS = get_settings()

OUTPUT_FORMATS = ("summary", "json", "csv", "xlsx", "summary-csv")

app = typer.Typer(help="Referral Reward Matcher CLI")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Referral Reward Matcher - match masked referrer addresses against a reward schedule."""
    log_level = "DEBUG" if verbose else SETTINGS.log_level
    setup_logging(level=log_level, json_format=SETTINGS.log_format == "json")


def _read_text(path: Path) -> str:
    if str(path) == "-":
        return typer.get_text_stream("stdin").read()
    return path.read_text(encoding="utf-8")


# =============================================================================
# Analysis Commands
# =============================================================================


@app.command("analyze")
def analyze_files(
    invite_path: Path = typer.Argument(..., help="Invite schedule ('<address> <amount>' per line)"),
    referrer_path: Path = typer.Argument(..., help="Referrer addresses, one per line ('-' for stdin)"),
    output_format: str = typer.Option("summary", "--format", "-f", help=f"One of: {', '.join(OUTPUT_FORMATS)}"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
    amount: Optional[int] = typer.Option(None, "--amount", help="Only list this bucket in the summary"),
) -> None:
    """Match referrers against the invite schedule and report the result."""
    from domain.analysis import AnalysisService
    from services.clipboard import format_clipboard_summary
    from services.exports import export_report

    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        typer.secho(f"✗ Unknown format '{output_format}'. Choose one of: {', '.join(OUTPUT_FORMATS)}", fg="red")
        raise typer.Exit(1)

    try:
        service = AnalysisService(SETTINGS)
        report = service.analyze_text(_read_text(invite_path), _read_text(referrer_path))

        if output_format == "summary":
            content = format_clipboard_summary(
                report,
                token=SETTINGS.reward_token,
                selected_amount=amount,
                rules=service.rules,
            )
        elif output_format == "json":
            content = json.dumps(report.as_dict(), indent=2)
        else:
            content = export_report(report, output_format, token=SETTINGS.reward_token)
    except (OSError, ReferralMatcherError) as e:
        typer.secho(f"✗ Analysis failed: {e}", fg="red")
        raise typer.Exit(1)

    if isinstance(content, bytes):
        if output is None:
            typer.secho("✗ Binary formats need --output", fg="red")
            raise typer.Exit(1)
        output.write_bytes(content)
    elif output is not None:
        output.write_text(content, encoding="utf-8")
    else:
        typer.echo(content)

    if output is not None:
        typer.secho(f"✓ Wrote {output_format} report to {output}", fg="green")
        typer.echo(f"  {report.summary()}")


@app.command("fingerprint")
def fingerprint_address(
    address: str = typer.Argument(..., help="Address to inspect"),
) -> None:
    """Show how one address is normalized, fingerprinted and masked."""
    from domain.analysis import AnalysisService

    inspection = AnalysisService(SETTINGS).inspect_address(address)
    typer.echo(f"Raw:         {inspection.raw}")
    typer.echo(f"Normalized:  {inspection.normalized}")
    if inspection.is_valid:
        typer.echo(f"Fingerprint: {inspection.fingerprint}")
    else:
        typer.secho("Fingerprint: (too short to match)", fg="yellow")
    typer.echo(f"Display:     {inspection.display}")
    typer.echo(f"Masked:      {'yes' if inspection.is_masked else 'no'}")


# =============================================================================
# Server Commands
# =============================================================================


@app.command("server")
def run_server(
    host: Optional[str] = typer.Option(None, help="Host to bind to"),
    port: Optional[int] = typer.Option(None, help="Port to bind to"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    import uvicorn

    host = host or SETTINGS.api_host
    port = port or SETTINGS.api_port
    typer.echo(f"Starting API server on {host}:{port}...")
    uvicorn.run("api.app:app", host=host, port=port, reload=reload)


# =============================================================================
# Utility Commands
# =============================================================================


@app.command("info")
def show_info() -> None:
    """Show application configuration info."""
    typer.echo("Referral Reward Matcher Configuration:")
    typer.echo(f"  Environment: {SETTINGS.environment}")
    typer.echo(f"  Log Level: {SETTINGS.log_level}")
    typer.echo(
        f"  Fingerprint: first {SETTINGS.fingerprint_prefix_length} + last {SETTINGS.fingerprint_suffix_length}"
    )
    typer.echo(f"  Normalization: {SETTINGS.normalization_mode}")
    typer.echo(f"  Reward Tiers: {', '.join(str(t) for t in SETTINGS.reward_tiers)}")
    typer.echo(f"  Reward Token: {SETTINGS.reward_token}")


if __name__ == "__main__":
    app()

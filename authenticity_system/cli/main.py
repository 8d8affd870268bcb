"""Interactive CLI for product authenticity verification using Typer and Rich."""

import asyncio
import json
import sys
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from authenticity_system.config.settings import settings
from authenticity_system.config.logging import get_logger
from authenticity_system.config.scoring_policy import DEFAULT_POLICY

app = typer.Typer(
    help="Product Authenticity CLI - score product photos for counterfeit risk",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")

RISK_STYLES = {
    "low": "green",
    "medium": "yellow",
    "high": "red",
}


@app.command()
def status() -> None:
    """
    Display system status and configuration.

    Shows API configuration, probe limits and logging settings.
    """
    logger.info("Displaying system status")

    table = Table(title="Authenticity System Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=15)
    table.add_column("Details", style="yellow")

    python_version = f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    table.add_row("Environment", "✓ Ready", python_version)

    vision_status = "✓ Configured" if settings.gemini_api_key else "⚠ Not Configured"
    vision_details = f"{settings.gemini_model} (max tokens: {settings.vision_max_output_tokens})"
    table.add_row("Vision (Gemini)", vision_status, vision_details)

    search_status = "✓ Configured" if settings.serper_api_key else "⚠ Not Configured"
    search_details = (
        f"timeout {settings.presence_timeout_seconds:g}s, "
        f"max {settings.presence_max_results} results"
    )
    table.add_row("Web Presence", search_status, search_details)

    log_details = f"Level: {settings.log_level}, Format: {settings.log_format}"
    table.add_row("Logging", "✓ Active", log_details)

    console.print(table)


@app.command()
def policy() -> None:
    """Display the active scoring policy (weights and thresholds)."""
    weights = Table(title="Dimension Weights", show_header=True, header_style="bold magenta")
    weights.add_column("Dimension", style="cyan")
    weights.add_column("Weight", style="green", justify="right")
    for name, value in DEFAULT_POLICY.weights.model_dump().items():
        weights.add_row(name.replace("_", " ").title(), f"{value:.2f}")
    console.print(weights)

    tiers = Table(title="Risk Tiers", show_header=True, header_style="bold magenta")
    tiers.add_column("Tier", style="cyan")
    tiers.add_column("Rule", style="yellow")
    tiers.add_row(
        "low",
        f"overall ≥ {DEFAULT_POLICY.low_risk_min_score} and "
        f"suspicious ≤ {DEFAULT_POLICY.low_risk_max_suspicious}",
    )
    tiers.add_row(
        "medium",
        f"overall ≥ {DEFAULT_POLICY.medium_risk_min_score} and "
        f"suspicious ≤ {DEFAULT_POLICY.medium_risk_max_suspicious}",
    )
    tiers.add_row("high", "otherwise")
    tiers.add_row("reward", f"low and overall ≥ {DEFAULT_POLICY.reward_min_score}")
    console.print(tiers)


@app.command()
def verify(
    image_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON response"),
) -> None:
    """
    Verify a product photograph.

    Args:
        image_path: Path to a JPEG/PNG/WEBP photo of the product
        as_json: Print the camelCase JSON response instead of a summary
    """
    from authenticity_system.agents.verification import VerificationAgent

    logger.info(f"Verifying {image_path.name}")

    start_time = time.time()
    result = asyncio.run(VerificationAgent().verify(image_path.read_bytes()))
    elapsed = time.time() - start_time

    if as_json:
        console.print_json(json.dumps(result.to_response(), ensure_ascii=False))
    elif not result.success:
        console.print(f"\n[red]✗[/red] {result.error}")
        if result.details:
            console.print(f"[dim]{result.details}[/dim]")
    else:
        _print_result(result)
        console.print(f"\n[dim]Completed in {elapsed:.2f}s[/dim]")

    if not result.success:
        logger.error(f"Verification failed: {result.details}")
        raise typer.Exit(1)

    logger.info(
        f"Verification finished: {result.risk_level.value} risk, "
        f"{result.confidence}% confidence"
    )


def _print_result(result) -> None:
    style = RISK_STYLES[result.risk_level.value]
    info = result.extracted_info

    console.print(Panel(
        f"{result.message}\n[dim]{result.risk_description}[/dim]",
        title=f"{info.brand_name} - {info.product_name}",
        border_style=style,
    ))

    scores = Table(title="Score Breakdown", show_header=True, header_style="bold magenta")
    scores.add_column("Dimension", style="cyan")
    scores.add_column("Score", justify="right")
    for name, value in result.scoring.dimension_scores().items():
        scores.add_row(name.replace("_", " ").title(), str(value))
    scores.add_row("[bold]Overall[/bold]", f"[bold {style}]{result.confidence}[/bold {style}]")
    console.print(scores)

    if result.degraded_extraction:
        console.print("[yellow]⚠ Model output was not valid JSON; attributes are partial[/yellow]")

    for heading, lines in (
        ("Analysis", result.analysis),
        ("Warnings", result.warnings),
        ("Recommendations", result.recommendations),
    ):
        if lines:
            console.print(f"\n[bold]{heading}[/bold]")
            for line in lines:
                console.print(f"  • {line}")

    reward = "[green]eligible[/green]" if result.reward_eligible else "[dim]not eligible[/dim]"
    console.print(f"\nReward: {reward}")


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Product Authenticity System[/bold]")
    console.print("Version: 0.1.0")


if __name__ == "__main__":
    app()

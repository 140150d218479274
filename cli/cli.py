"""CLI for the load engine.

Developer CLI to score a local events file offline, exercising the same
pipeline code path as callers embedding the engine.
"""

import datetime as dt
import json
from pathlib import Path

import typer
from loguru import logger
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from load_engine.config.settings import Settings
from load_engine.core.logger import setup_logger
from load_engine.domain.enums import ConditionPreset, RiskLevel
from load_engine.domain.models import (
    ActivityContributor,
    LoadContributor,
    MealContributor,
    SleepContributor,
    SymptomObservation,
)
from load_engine.domain.presets import PRESET_PROFILES, configuration_for_preset
from load_engine.pipeline.load_pipeline import LoadReport, run_load_pipeline

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="load-engine",
    help="Load engine CLI - score daily load and recovery from an events file",
    add_completion=False,
)

DATE_FORMATS = ["%Y-%m-%d"]

RISK_STYLES = {
    RiskLevel.SAFE: "green",
    RiskLevel.CAUTION: "yellow",
    RiskLevel.HIGH: "dark_orange",
    RiskLevel.CRITICAL: "bold red",
}


class EventsDocument(BaseModel):
    """On-disk events file: per-category event lists plus optional reflections."""

    activities: list[ActivityContributor] = Field(default_factory=list)
    meals: list[MealContributor] = Field(default_factory=list)
    sleep: list[SleepContributor] = Field(default_factory=list)
    symptoms: list[SymptomObservation] = Field(default_factory=list)
    reflections: dict[dt.date, float] = Field(default_factory=dict)

    @property
    def contributors(self) -> list[LoadContributor]:
        return [*self.activities, *self.meals, *self.sleep]


def _load_events(events_file: Path) -> EventsDocument:
    return EventsDocument.model_validate_json(events_file.read_text(encoding="utf-8"))


def _exit_with_error(message: str, code: int = 1) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code)


def _render_report(report: LoadReport) -> None:
    table = Table(title="Daily load")
    table.add_column("Date")
    table.add_column("Raw", justify="right")
    table.add_column("Decayed", justify="right")
    table.add_column("Felt", justify="right")
    table.add_column("Risk")
    table.add_column("Top driver")

    for day in report.days:
        score = day.score
        shares = {
            "activity": day.breakdown.activity_percentage,
            "meal": day.breakdown.meal_percentage,
            "sleep": day.breakdown.sleep_percentage,
            "symptom": day.breakdown.symptom_percentage,
        }
        driver, share = max(shares.items(), key=lambda item: item[1])
        table.add_row(
            score.date.isoformat(),
            f"{score.raw_load:.1f}",
            f"{score.decayed_load:.1f}",
            "-" if score.felt_load is None else f"{score.felt_load:.1f}",
            Text(score.risk_level.description, style=RISK_STYLES[score.risk_level]),
            f"{driver} ({share:.0f}%)" if share > 0 else "-",
        )

    console.print(table)

    peak = report.peak
    if peak is not None:
        counts = ", ".join(f"{level.description}: {count}" for level, count in report.days_by_risk.items())
        console.print(
            Panel(
                Text(f"Peak {peak.score.decayed_load:.1f} on {peak.date.isoformat()}", style="bold"),
                subtitle=counts,
                border_style=RISK_STYLES[peak.score.risk_level],
            )
        )


def _report_as_json(report: LoadReport) -> str:
    payload = [
        {
            "score": {
                **day.score.model_dump(mode="json"),
                "risk_level": day.score.risk_level.name.lower(),
                "risk_description": day.score.risk_level.description,
            },
            "breakdown": day.breakdown.model_dump(mode="json"),
        }
        for day in report.days
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)


@app.command()
def score(
    events_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON events file"),
    start: dt.datetime = typer.Option(..., "--start", "-s", formats=DATE_FORMATS, help="First day (YYYY-MM-DD)"),
    end: dt.datetime = typer.Option(..., "--end", "-e", formats=DATE_FORMATS, help="Last day (YYYY-MM-DD)"),
    preset: ConditionPreset | None = typer.Option(None, "--preset", "-p", help="Condition preset (overrides LOAD_CONDITION_PRESET)"),
    initial_load: float = typer.Option(0.0, "--initial-load", help="Load carried into the first day"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Score every day from START to END for the events in EVENTS_FILE.

    Examples:
        # Score a week with the standard preset
        load-engine score events.json --start 2025-01-01 --end 2025-01-07

        # Score with ME/CFS settings and print JSON
        load-engine score events.json -s 2025-01-01 -e 2025-01-07 --preset mecfs --json
    """
    try:
        settings = Settings()
    except ValidationError as e:
        _exit_with_error(f"Invalid settings: {e}")

    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)

    try:
        events = _load_events(events_file)
    except (OSError, ValidationError) as e:
        logger.exception(f"Failed to load events from {events_file}")
        _exit_with_error(f"Could not read events file {events_file}: {e}")

    if preset is not None:
        configuration = configuration_for_preset(preset)
    else:
        configuration = settings.to_configuration()

    report = run_load_pipeline(
        contributors=events.contributors,
        symptoms=events.symptoms,
        start=start.date(),
        end=end.date(),
        configuration=configuration,
        initial_load=initial_load,
        reflections_by_date=events.reflections,
        tz=settings.tzinfo,
    )

    if as_json:
        typer.echo(_report_as_json(report))
        return
    _render_report(report)


@app.command()
def presets() -> None:
    """List condition presets with their resolved configuration."""
    table = Table(title="Condition presets")
    table.add_column("Preset")
    table.add_column("Name")
    table.add_column("Thresholds (safe/caution/high)")
    table.add_column("Symptom x", justify="right")
    table.add_column("Decay", justify="right")

    for preset, profile in PRESET_PROFILES.items():
        configuration = configuration_for_preset(preset)
        thresholds = configuration.thresholds
        table.add_row(
            preset.value,
            profile.display_name,
            f"{thresholds.safe:g}/{thresholds.caution:g}/{thresholds.high:g}",
            f"{configuration.symptom_multiplier:g}",
            f"{configuration.decay_rate:g}",
        )

    console.print(table)


if __name__ == "__main__":
    app()

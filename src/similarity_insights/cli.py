"""Console script for similarity_insights."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, NoReturn

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .analytics import (
    analyze_student_patterns,
    compute_course_analytics,
    detect_red_flags,
    generate_intervention_recommendations,
    summarize_queue,
)
from .config import ConfigError, ConfigLoader, ScoringWeights
from .output import (
    export_analytics_csv,
    export_interventions_csv,
    export_priority_ranking_csv,
)
from .submissions import RecordValidationError, SubmissionLoader, SubmissionLoadError, SubmissionRecord
from .triage import rank_submissions
from .utils import get_logger, safe_filename, setup_logging, write_text_report

DATA_DIR_ENV_VAR = "SIMILARITY_INSIGHTS_DATA_DIR"

app = typer.Typer(help="Course similarity analytics, interventions and grading triage.")
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

DataDirOption = typer.Option(
    ...,
    "--data-dir",
    "-d",
    envvar=DATA_DIR_ENV_VAR,
    help=f"Course data directory with folder_structure.json (or set {DATA_DIR_ENV_VAR}).",
)
OutputOption = typer.Option(
    None,
    "--output",
    "-o",
    help="Write a CSV export to this file (or into this directory).",
)
JsonOption = typer.Option(False, "--json", help="Emit JSON instead of a table.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    """Course similarity analytics, interventions and grading triage."""
    load_dotenv()
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)


def _load(data_dir: Path) -> list[SubmissionRecord]:
    logger.debug(f"Loading submissions from {data_dir}")
    try:
        return SubmissionLoader(data_dir.expanduser()).load_all()
    except (SubmissionLoadError, RecordValidationError) as e:
        _fail(str(e))


def _export(output: Path | None, data_dir: Path, suffix: str, render: Callable[[], str]) -> None:
    if output is None:
        return
    if output.is_dir():
        output = output / f"{safe_filename(data_dir.resolve().name)}_{suffix}.csv"
    path = write_text_report(output, render())
    err_console.print(f"Exported: {path}")


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def analytics(
    data_dir: Path = DataDirOption,
    output: Path | None = OutputOption,
    as_json: bool = JsonOption,
) -> None:
    """Show course-wide similarity analytics."""
    submissions = _load(data_dir)
    result = compute_course_analytics(submissions)

    if as_json:
        _echo_json(result.to_dict())
    else:
        table = Table(title="Course Analytics")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        table.add_row("Total Submissions", str(result.total_submissions))
        table.add_row("Average Similarity", f"{result.average_similarity:.1f}%")
        table.add_row("Median Similarity", f"{result.median_similarity:g}%")
        table.add_row("High Risk (>40%)", str(result.high_risk_count))
        table.add_row("Integrity Issues", str(result.integrity_issues_count))
        table.add_row(
            "Proper Citation Rate", f"{result.citation_patterns.proper_citation_rate:.1f}%"
        )
        console.print(table)

        if result.common_sources:
            sources = Table(title="Common Sources")
            sources.add_column("Source")
            sources.add_column("Type")
            sources.add_column("Students", justify="right")
            sources.add_column("Avg Similarity", justify="right")
            for source in result.common_sources:
                sources.add_row(
                    source.source_name,
                    source.source_type.value,
                    str(source.occurrence_count),
                    f"{source.average_similarity:.1f}%",
                )
            console.print(sources)

    _export(output, data_dir, "analytics", lambda: export_analytics_csv(result))


@app.command()
def interventions(
    data_dir: Path = DataDirOption,
    output: Path | None = OutputOption,
    as_json: bool = JsonOption,
) -> None:
    """List students needing intervention, most urgent first."""
    submissions = _load(data_dir)
    recommendations = generate_intervention_recommendations(analyze_student_patterns(submissions))

    if as_json:
        _echo_json([rec.to_dict() for rec in recommendations])
    else:
        counts = summarize_queue(recommendations)
        console.print(
            " | ".join(f"{priority.value}: {count}" for priority, count in counts.items())
        )
        table = Table(title="Intervention Queue")
        table.add_column("#", justify="right")
        table.add_column("Priority")
        table.add_column("Student")
        table.add_column("Similarity", justify="right")
        table.add_column("Action")
        for idx, rec in enumerate(recommendations, start=1):
            table.add_row(
                str(idx),
                rec.priority.value,
                rec.student.student_name,
                f"{rec.student.similarity:g}%",
                rec.action,
            )
        console.print(table)

    _export(
        output, data_dir, "interventions", lambda: export_interventions_csv(recommendations)
    )


@app.command()
def triage(
    data_dir: Path = DataDirOption,
    weights_file: Path | None = typer.Option(
        None, "--weights", "-w", help="YAML file overriding the scoring weights."
    ),
    limit: int = typer.Option(50, "--limit", "-n", min=0, help="Number of entries to keep (0 = all)."),
    output: Path | None = OutputOption,
    as_json: bool = JsonOption,
) -> None:
    """Rank submissions into a grading worklist."""
    weights = ScoringWeights()
    if weights_file is not None:
        try:
            weights = ConfigLoader().load_weights(weights_file)
        except (ConfigError, FileNotFoundError) as e:
            _fail(str(e))

    submissions = _load(data_dir)
    entries = rank_submissions(submissions, weights, limit=limit or None)

    if as_json:
        _echo_json({"weights": weights.to_dict(), "submissions": [e.to_dict() for e in entries]})
    else:
        table = Table(title="Grading Priority Queue")
        table.add_column("Rank", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Student")
        table.add_column("Submission")
        table.add_column("Similarity", justify="right")
        table.add_column("Flags", justify="right")
        for entry in entries:
            table.add_row(
                str(entry.priority_rank),
                f"{entry.priority_score:.1f}",
                entry.author,
                entry.title,
                "" if entry.similarity is None else f"{entry.similarity:g}%",
                str(entry.flags),
            )
        console.print(table)

    _export(output, data_dir, "triage", lambda: export_priority_ranking_csv(entries))


@app.command("red-flags")
def red_flags(
    data_dir: Path = DataDirOption,
    as_json: bool = JsonOption,
) -> None:
    """Show the integrity watchlist and suspicious shared sources."""
    submissions = _load(data_dir)
    course = compute_course_analytics(submissions)
    flags = detect_red_flags(analyze_student_patterns(submissions), course.common_sources)

    if as_json:
        _echo_json(flags.to_dict())
        return

    if flags.total == 0:
        console.print("No red flags detected")
        return

    console.print(f"{flags.total} potential academic integrity concern(s) detected")
    for student in flags.watchlist:
        console.print(
            f"  watchlist: {student.student_name} - {student.similarity:g}% similarity, "
            f"{student.integrity_issues_count} integrity issue(s)"
        )
    for source in flags.suspicious_sources:
        console.print(
            f"  shared source: {source.source_name} - used by {source.occurrence_count} students, "
            f"{source.average_similarity:.1f}% avg similarity, typically uncited"
        )


if __name__ == "__main__":
    app()

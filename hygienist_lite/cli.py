"""
hygienist-lite: CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Run the pure core (recommendation engine / adherence analytics).
  5. Report result to stdout.

Install and run::

    pip install -e .
    hygienist-lite --help
    hygienist-lite validate-config
    hygienist-lite questions
    hygienist-lite recommend --answer Q1=yes --answer Q2=cavity
    hygienist-lite recommend --interactive
    hygienist-lite recommend -a Q1=no -a Q3=yes --save-to patient-1
    hygienist-lite summarize --patient patient-1 --window 30
    hygienist-lite daily --patient patient-1
    hygienist-lite patients --filter low-achievement --sort consecutive --desc
    hygienist-lite follow-up --patient patient-1 --note "Recheck gums"
"""

from __future__ import annotations

import json
from datetime import date
from typing import Optional

import typer

app = typer.Typer(
    name="hygienist-lite",
    help="Toothbrush recommendation and brushing adherence tracking for dental hygienists.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pathlib import Path

    from hygienist_lite.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from hygienist_lite.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_engine_or_exit(config):
    from hygienist_lite.config import resolve_path
    from hygienist_lite.recommendations.engine import RecommendationEngine
    from hygienist_lite.recommendations.loader import QuestionnaireConfigError, load_rules

    try:
        rules = load_rules(resolve_path(config.questionnaire.rules_file))
    except (FileNotFoundError, QuestionnaireConfigError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    return RecommendationEngine(rules)


def _bundle_path(config, bundle_path: Optional[str]):
    from hygienist_lite.config import resolve_path

    return resolve_path(bundle_path or config.storage.bundle_path)


def _load_bundle_or_exit(config, bundle_path: Optional[str]):
    from hygienist_lite.storage.bundle import BundleError, load_bundle

    path = _bundle_path(config, bundle_path)
    try:
        return load_bundle(path)
    except (FileNotFoundError, BundleError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _update_and_save_or_exit(config, bundle_path: Optional[str], update, *args):
    """Load the bundle, apply ``update(bundle, *args)`` and write it back."""
    from hygienist_lite.storage.bundle import BundleError, save_bundle

    bundle = _load_bundle_or_exit(config, bundle_path)
    try:
        bundle = update(bundle, *args)
    except BundleError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    save_bundle(bundle, _bundle_path(config, bundle_path))
    return bundle


def _parse_as_of_or_exit(as_of: Optional[str]) -> Optional[date]:
    from hygienist_lite.utils.time_utils import parse_iso_date

    if as_of is None:
        return None
    try:
        return parse_iso_date(as_of)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Questionnaire:    {config.questionnaire.rules_file}")
    typer.echo(f"  Bundle path:      {config.storage.bundle_path}")
    typer.echo(f"  Window days:      {config.analytics.window_days}")
    typer.echo(f"  Low achievement:  < {config.analytics.low_achievement_threshold:.2f}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("questions")
def questions(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the questionnaire decision tree."""
    from hygienist_lite.reporting.formatters import format_questionnaire

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _load_engine_or_exit(config)

    typer.echo(format_questionnaire(engine.rules))
    if engine.disclaimer:
        typer.echo("")
        typer.echo(f"  * {engine.disclaimer}")


@app.command("recommend")
def recommend(
    answer: Optional[list[str]] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Answer as QUESTION_ID=VALUE (e.g. Q1=yes). Repeatable; later answers win.",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Ask the questions one at a time.",
    ),
    save_to: Optional[str] = typer.Option(
        None,
        "--save-to",
        help="Patient id to record the recommended brush type on.",
    ),
    bundle_path: Optional[str] = typer.Option(None, "--bundle", help="Override bundle path."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Recommend a toothbrush type from questionnaire answers.

    \b
    Exit codes:
      0  recommendation printed
      1  bad input or configuration
      2  answers incomplete or not recognised (no recommendation)

    With ``--save-to`` the brush type is written onto that patient in the
    bundle.
    """
    from hygienist_lite.models.questionnaire import QuestionAnswer
    from hygienist_lite.reporting.formatters import format_recommendation

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    engine = _load_engine_or_exit(config)

    if interactive:
        result = _run_interactive(engine)
    else:
        answers: list[QuestionAnswer] = []
        for raw in answer or []:
            qid, sep, value = raw.partition("=")
            if not sep or not qid.strip() or not value.strip():
                typer.echo(f"[ERROR] Invalid answer '{raw}'. Expected QUESTION_ID=VALUE.", err=True)
                raise typer.Exit(code=1)
            answers.append(QuestionAnswer(question_id=qid.strip(), answer=value.strip()))
        result = engine.recommend(answers)

    if result is None:
        typer.echo("[INCOMPLETE] Answers do not reach a recommendation yet.")
        raise typer.Exit(code=2)

    typer.echo(format_recommendation(result, engine.disclaimer))

    if save_to:
        from hygienist_lite.storage.bundle import assign_brush_type

        _update_and_save_or_exit(config, bundle_path, assign_brush_type, save_to, result.brush_type)
        typer.echo("")
        typer.echo(f"[SAVED] {save_to}: brush type set to {result.brush_type.value}.")


def _run_interactive(engine):
    from hygienist_lite.recommendations.session import IntakeSession

    session = IntakeSession(engine)
    while not session.is_complete:
        node = session.current_question
        if node is None:
            return None
        typer.echo("")
        typer.echo(f"Question {session.step_number}: {node.text}")
        for opt in node.options:
            typer.echo(f"  {opt.value:<14} {opt.label}")
        while not session.answer(typer.prompt("Answer").strip()):
            choices = ", ".join(opt.value for opt in node.options)
            typer.echo(f"  Please answer one of: {choices}")
    return session.result


@app.command("summarize")
def summarize_patient(
    patient: str = typer.Option(..., "--patient", "-p", help="Patient id."),
    window: Optional[int] = typer.Option(
        None, "--window", "-w", min=1, help="Analysis window in days (default from config)."
    ),
    as_of: Optional[str] = typer.Option(
        None, "--as-of", help="Last date of the window (YYYY-MM-DD). Defaults to today."
    ),
    bundle_path: Optional[str] = typer.Option(None, "--bundle", help="Override bundle path."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print adherence metrics for one patient."""
    from hygienist_lite.analytics.metrics import summarize
    from hygienist_lite.reporting.formatters import format_metrics_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    reference_date = _parse_as_of_or_exit(as_of)
    bundle = _load_bundle_or_exit(config, bundle_path)

    record = bundle.find_patient(patient)
    if record is None:
        typer.echo(f"[ERROR] Patient '{patient}' not found in bundle.", err=True)
        raise typer.Exit(code=1)

    window_days = window or config.analytics.window_days
    metrics = summarize(
        bundle.events_for_patient(patient),
        window_days=window_days,
        reference_date=reference_date,
    )
    typer.echo(format_metrics_summary(metrics, title=f"{record.name} ({record.id}), last {window_days} days"))


@app.command("daily")
def daily(
    patient: str = typer.Option(..., "--patient", "-p", help="Patient id."),
    days: Optional[int] = typer.Option(
        None, "--days", "-d", min=1, help="Number of days (default: analytics window)."
    ),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Last date (YYYY-MM-DD)."),
    bundle_path: Optional[str] = typer.Option(None, "--bundle", help="Override bundle path."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the per-day brushing series for one patient."""
    from hygienist_lite.analytics.daily import build_daily_series
    from hygienist_lite.reporting.formatters import format_daily_series

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    reference_date = _parse_as_of_or_exit(as_of)
    bundle = _load_bundle_or_exit(config, bundle_path)

    if bundle.find_patient(patient) is None:
        typer.echo(f"[ERROR] Patient '{patient}' not found in bundle.", err=True)
        raise typer.Exit(code=1)

    series = build_daily_series(
        bundle.events_for_patient(patient),
        days=days or config.analytics.window_days,
        reference_date=reference_date,
    )
    typer.echo(format_daily_series(series))


@app.command("patients")
def patients(
    filter_: str = typer.Option(
        "all",
        "--filter",
        help="all | no-activity | low-achievement | follow-up",
    ),
    sort: str = typer.Option(
        "name",
        "--sort",
        help="name | last-log | achievement-7d | consecutive | next-appointment",
    ),
    descending: bool = typer.Option(False, "--desc", help="Sort descending."),
    bundle_path: Optional[str] = typer.Option(None, "--bundle", help="Override bundle path."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List patients with adherence flags, filtered and sorted."""
    from hygienist_lite.analytics.roster import (
        RosterFilter,
        RosterSortKey,
        build_overviews,
        filter_overviews,
        sort_overviews,
    )
    from hygienist_lite.reporting.formatters import format_roster_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        flag = RosterFilter(filter_)
        key = RosterSortKey(sort)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    bundle = _load_bundle_or_exit(config, bundle_path)
    threshold = config.analytics.low_achievement_threshold

    overviews = build_overviews(
        bundle.patients, bundle.logs, window_days=config.analytics.window_days
    )
    rows = sort_overviews(
        filter_overviews(overviews, flag, low_achievement_threshold=threshold),
        key,
        descending=descending,
    )
    typer.echo(
        format_roster_table(
            rows,
            low_achievement_threshold=threshold,
            window_days=config.analytics.window_days,
        )
    )
    typer.echo("")
    typer.echo(f"  {len(rows)} of {len(overviews)} patient(s) shown.")


@app.command("follow-up")
def follow_up(
    patient: str = typer.Option(..., "--patient", "-p", help="Patient id."),
    flag: bool = typer.Option(
        True, "--set/--clear", help="Set or clear the follow-up flag."
    ),
    note: Optional[str] = typer.Option(None, "--note", help="Follow-up note."),
    bundle_path: Optional[str] = typer.Option(None, "--bundle", help="Override bundle path."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Set or clear a patient's follow-up flag and note in the bundle."""
    from hygienist_lite.storage.bundle import set_follow_up

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    _update_and_save_or_exit(config, bundle_path, set_follow_up, patient, flag, note)
    typer.echo(f"[SAVED] {patient}: follow-up {'set' if flag else 'cleared'}.")
    if note:
        typer.echo(f"  Note: {note}")


if __name__ == "__main__":
    app()

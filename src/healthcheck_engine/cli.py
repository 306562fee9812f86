"""Simulate a health check-in session end-to-end from a scripted answer list.

Drives :class:`HealthCheckEngine` through consent, every question, and the
final summary, printing each exchange and a rich score table.

Usage::

    # Built-in script (high stress, short sleep, sedentary)
    healthcheck-simulate

    # Own answers, one per line (the first line is the consent reply)
    healthcheck-simulate --answers answers.txt

    # Inline answers and a different profile
    healthcheck-simulate --name Sam --sleep 7.5 --steps 9000 \\
        --answer yes --answer 3 --answer work ...

    # Include progress updates
    healthcheck-simulate -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from healthcheck_engine.config import load_settings
from healthcheck_engine.engine import HealthCheckEngine
from healthcheck_engine.models.profile import (
    BiometricSnapshot,
    MedicalBaseline,
    UserProfile,
)
from healthcheck_engine.models.session import EngineResponse
from healthcheck_engine.models.summary import SessionSummary

# Consent reply followed by one answer per catalog question.
DEFAULT_SCRIPT: list[str] = [
    "yes, let's go",
    "8",
    "work deadlines and money",
    "3",
    "yes",
    "5",
    "0",
    "none really",
    "2",
    "6",
    "not really, no",
    "2",
    "weekly",
    "2",
    "no",
    "0",
]


class Reporter:
    """Verbosity-aware console output using rich."""

    def __init__(self, console: Console, *, quiet: bool = False, verbose: bool = False) -> None:
        self.console = console
        self.quiet = quiet
        self.verbose = verbose

    def assistant(self, text: str) -> None:
        if self.quiet:
            return
        self.console.print(f"[bold cyan]Assistant:[/] {escape(text)}", highlight=False)

    def user(self, text: str) -> None:
        if self.quiet:
            return
        self.console.print(f"[bold green]User:[/] {escape(text)}", highlight=False)

    def progress(self, response: EngineResponse) -> None:
        if self.quiet or not self.verbose or response.progress is None:
            return
        p = response.progress
        self.console.print(
            f"    [dim]{p.category} {p.question_index}/{p.total_questions} "
            f"({p.percent_complete}%)[/]"
        )

    def summary(self, summary: SessionSummary) -> None:
        if self.quiet:
            return
        self.console.rule("[bold]Session Summary")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Category")
        table.add_column("Score", justify="right")
        scores = summary.scores
        for label, value in (
            ("Stress Management", scores.stress_score),
            ("Sleep Quality", scores.sleep_score),
            ("Physical Activity", scores.activity_score),
            ("Social Connection", scores.loneliness_score),
            ("Lifestyle Factors", scores.lifestyle_score),
            ("Overall", scores.overall_score),
        ):
            table.add_row(label, f"{value}/10")
        self.console.print(table)
        self.console.print(f"  Assessment: {summary.overall_assessment}")

        for tier, style in (("critical", "red"), ("warnings", "yellow"), ("notices", "blue")):
            for flag in getattr(summary.red_flags, tier):
                self.console.print(f"  [{style}]{tier}[/] {escape(flag)}", highlight=False)

        if summary.recommendations:
            self.console.print("\n  Recommendations:")
            for rec in summary.recommendations:
                self.console.print(f"   - {escape(rec)}", highlight=False)


def read_script(args: argparse.Namespace) -> list[str]:
    """Answers from --answers FILE, repeated --answer, or the built-in script."""
    if args.answers:
        # Blank lines are kept: they send an empty answer
        return Path(args.answers).read_text(encoding="utf-8").splitlines()
    if args.answer:
        return list(args.answer)
    return list(DEFAULT_SCRIPT)


def build_profile(args: argparse.Namespace) -> UserProfile:
    return UserProfile(
        display_name=args.name,
        biometrics=BiometricSnapshot(
            sleep_hours_last_night=args.sleep,
            resting_heart_rate=args.heart_rate,
            daily_steps=args.steps,
        ),
        baseline=MedicalBaseline(baseline_stress_level=args.baseline_stress),
    )


def run_simulation(profile: UserProfile, script: list[str], reporter: Reporter) -> bool:
    """Replay ``script`` against a fresh engine.  Returns True if it finished."""
    engine = HealthCheckEngine(profile)
    reporter.assistant(engine.start_session())

    for utterance in script:
        reporter.user(utterance)
        response = engine.process_response(utterance)
        reporter.assistant(response.message_text)
        reporter.progress(response)
        if response.finished:
            reporter.summary(response.summary)
            return True

    reporter.assistant(
        f"(script ended at question {engine.current_state().position + 1} "
        f"of {engine.current_state().total_questions})"
    )
    return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate a health check-in session from scripted answers.",
    )
    parser.add_argument("--name", default="Amit", help="Display name (default: Amit)")
    parser.add_argument(
        "--sleep", type=float, default=5.5,
        help="Wearable sleep hours last night (default: 5.5)",
    )
    parser.add_argument(
        "--steps", type=int, default=1200,
        help="Wearable step count today (default: 1200)",
    )
    parser.add_argument(
        "--heart-rate", type=int, default=72,
        help="Resting heart rate in bpm (default: 72)",
    )
    parser.add_argument(
        "--baseline-stress", type=int, default=3,
        help="Baseline stress level 1-10 (default: 3)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--answers",
        help="File with one answer per line (blank lines send an empty answer); "
             "the first line answers the consent prompt",
    )
    source.add_argument(
        "--answer", action="append",
        help="One answer (repeatable); the first answers the consent prompt",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Print progress updates after each answer",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Suppress all print output (exit code still reflects completion)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Console-script entry point: ``healthcheck-simulate``."""
    args = build_parser().parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Suppress SDK logger output in quiet mode
    if args.quiet:
        logging.getLogger("healthcheck_engine").setLevel(logging.CRITICAL)

    reporter = Reporter(Console(), quiet=args.quiet, verbose=args.verbose)
    finished = run_simulation(build_profile(args), read_script(args), reporter)
    return 0 if finished else 1


if __name__ == "__main__":
    sys.exit(main())

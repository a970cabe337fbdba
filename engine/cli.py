"""
Command-line entry point for the BUILD tracker engine.

Every subcommand works against the local JSON store and prints its result
as JSON on stdout. Errors go to stderr with exit code 1.

Examples:
    build-tracker log "UPPER_A - DB Flat Bench Press" --set 20:12:2 --set 20:12:2
    build-tracker status "UPPER_A - DB Flat Bench Press" --rep-range 8-12 --rir-target 2-3
    build-tracker deload check
    build-tracker readiness bench
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass, is_dataclass
from pathlib import Path
from typing import Any, List, Optional

import sentry_sdk
from pydantic import BaseModel

from application.exceptions import TrackerError
from application.ports import TrainingStore
from application.use_cases import LogSessionUseCase, RecordChecksUseCase
from domain.models import DeloadType, ExerciseDefinition, MobilityResponse, PainSeverity, WorkoutSet
from engine.core import (
    DeloadService,
    PerformanceAnalyzer,
    PhaseService,
    ProgressionService,
    ReadinessService,
    UnlockEvaluator,
)
from engine.settings import Settings, get_settings
from infrastructure.store import JsonFileKeyValueStore, KeyValueTrainingStore

logger = logging.getLogger(__name__)


# =============================================================================
# Wiring
# =============================================================================


@dataclass
class Engine:
    """All engine components bound to one store."""

    store: TrainingStore
    phase: PhaseService
    progression: ProgressionService
    analyzer: PerformanceAnalyzer
    deload: DeloadService
    unlocks: UnlockEvaluator
    readiness: ReadinessService
    log_session: LogSessionUseCase
    checks: RecordChecksUseCase


def build_engine(store: TrainingStore) -> Engine:
    phase = PhaseService(store)
    analyzer = PerformanceAnalyzer(store)
    return Engine(
        store=store,
        phase=phase,
        progression=ProgressionService(store, phase),
        analyzer=analyzer,
        deload=DeloadService(store, phase),
        unlocks=UnlockEvaluator(store, phase),
        readiness=ReadinessService(store),
        log_session=LogSessionUseCase(store, analyzer=analyzer),
        checks=RecordChecksUseCase(store),
    )


def open_store(settings: Settings, data_file: Optional[Path] = None) -> KeyValueTrainingStore:
    path = data_file.expanduser() if data_file else settings.data_path
    return KeyValueTrainingStore(
        JsonFileKeyValueStore(path),
        history_limit=settings.history_limit,
        check_history_limit=settings.check_history_limit,
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.0,
        )
        logger.info("Sentry initialized for build-tracker")


# =============================================================================
# Argument parsing
# =============================================================================


def parse_set(value: str) -> WorkoutSet:
    """Parse "WEIGHT:REPS[:RIR]" into a WorkoutSet."""
    parts = value.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Invalid set '{value}', expected WEIGHT:REPS[:RIR]")
    try:
        weight = float(parts[0])
        reps = int(parts[1])
        rir = float(parts[2]) if len(parts) == 3 and parts[2] != "" else None
        return WorkoutSet(weight=weight, reps=reps, rir=rir)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid set '{value}': {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="build-tracker",
        description="Progression and periodization decisions for the BUILD training log",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        help="JSON store location (default: BUILD_TRACKER_DATA_FILE or ~/.build-tracker/store.json)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    phase = sub.add_parser("phase", help="Show or set the training phase")
    phase.add_argument("action", nargs="?", choices=["show", "set"], default="show")
    phase.add_argument("value", nargs="?", help="building, maintenance or recovery")

    log = sub.add_parser("log", help="Log a session for an exercise")
    log.add_argument("exercise_key", help='e.g. "UPPER_A - DB Flat Bench Press"')
    log.add_argument("--set", dest="sets", action="append", type=parse_set, required=True,
                     metavar="W:R[:RIR]", help="One logged set; repeat for each set")
    log.add_argument("--pain", dest="pain_location", metavar="LOCATION",
                     help="Where pain was felt (e.g. shoulder)")
    log.add_argument("--severity", choices=[s.value for s in PainSeverity])

    status = sub.add_parser("status", help="Progression status and next weight")
    status.add_argument("exercise_key")
    status.add_argument("--rep-range", required=True, help='e.g. "8-12" or "30-60s"')
    status.add_argument("--rir-target", help='e.g. "2-3"; omit for timed holds')
    status.add_argument("--increment", type=float, default=2.5, help="Load step in kg")

    analyze = sub.add_parser("analyze", help="Check an exercise for regression or form breakdown")
    analyze.add_argument("exercise_key")
    analyze.add_argument("--set", dest="sets", action="append", type=parse_set, default=[],
                         metavar="W:R[:RIR]", help="In-progress set to analyze instead of the last session")

    deload = sub.add_parser("deload", help="Deload triggers and lifecycle")
    deload.add_argument("action", nargs="?", default="check",
                        choices=["check", "start", "end", "postpone", "status"])
    deload.add_argument("--type", dest="deload_type", default=DeloadType.STANDARD.value,
                        choices=[t.value for t in DeloadType])

    unlock = sub.add_parser("unlock", help="Evaluate unlock criteria for a harder exercise")
    unlock.add_argument("target")
    unlock.add_argument("prerequisite", help="Exercise key of the current exercise")
    unlock.add_argument("--record", action="store_true", help="Record the unlock if criteria are met")

    unlock_next = sub.add_parser("unlock-next", help="Find the next unlockable exercise in a slot")
    unlock_next.add_argument("slot", help='e.g. "UPPER_A_SLOT_1"')
    unlock_next.add_argument("current", help="Exercise key of the current exercise")
    unlock_next.add_argument("--record", action="store_true", help="Record the unlock if one is found")

    mobility = sub.add_parser("mobility", help="Record a mobility self-check")
    mobility.add_argument("criteria_key")
    mobility.add_argument("response", choices=[r.value for r in MobilityResponse])

    readiness = sub.add_parser("readiness", help="Readiness for equipment transitions")
    readiness.add_argument("target", nargs="?", help="Target key (default: all)")

    return parser


# =============================================================================
# Commands
# =============================================================================


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value):
        return _to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def run_command(engine: Engine, args: argparse.Namespace) -> Any:
    """Execute one parsed subcommand and return its JSON-able result."""
    command = args.command

    if command == "phase":
        if args.action == "set":
            if not args.value:
                _fail("phase set requires a value")
            engine.phase.set_phase(args.value)
        return {
            "phase": engine.phase.get_phase().value,
            "progression": asdict(engine.phase.get_progression_behavior()),
            "deload_sensitivity": engine.phase.get_deload_sensitivity().value,
            "deload_threshold_weeks": engine.phase.get_deload_threshold_weeks(),
            "unlock_priority": engine.phase.get_unlock_priority().value,
        }

    if command == "log":
        result = engine.log_session.execute(
            args.exercise_key,
            args.sets,
            pain_location=args.pain_location,
            pain_severity=args.severity,
        )
        if not result.success:
            _fail("; ".join(result.validation_errors) or result.error or "Failed to log session")
        return {
            "entry": result.entry,
            "history_length": result.history_length,
            "performance": result.performance,
        }

    if command == "status":
        exercise = ExerciseDefinition(
            name=args.exercise_key,
            rep_range=args.rep_range,
            rir_target=args.rir_target,
            increment=args.increment,
        )
        return engine.progression.recommend_next_weight(args.exercise_key, exercise)

    if command == "analyze":
        return engine.analyzer.analyze_exercise_performance(args.exercise_key, args.sets)

    if command == "deload":
        return _run_deload(engine.deload, engine.store, args)

    if command == "unlock":
        evaluation = engine.unlocks.evaluate_unlock_with_phase_priority(args.target, args.prerequisite)
        recorded = False
        if args.record and evaluation.unlocked:
            engine.unlocks.record_unlock(args.target, evaluation)
            recorded = True
        return {"target": args.target, "evaluation": evaluation, "recorded": recorded}

    if command == "unlock-next":
        suggestion = engine.unlocks.find_next_unlock(args.slot, args.current)
        if suggestion is None:
            return {"slot": args.slot, "suggestion": None, "recorded": False}
        if args.record:
            engine.unlocks.record_unlock(suggestion.exercise_name, suggestion.evaluation)
        return {"slot": args.slot, "suggestion": suggestion, "recorded": bool(args.record)}

    if command == "mobility":
        result = engine.checks.record_mobility(args.criteria_key, args.response)
        if not result.success:
            _fail(result.error or "Failed to record mobility check")
        return {"check": result.check, "consecutive_confirmations": result.consecutive_confirmations}

    if command == "readiness":
        if args.target:
            return engine.readiness.get_readiness(args.target)
        return engine.readiness.get_all_readiness()

    _fail(f"Unknown command: {command}")


def _run_deload(deload: DeloadService, store: TrainingStore, args: argparse.Namespace) -> Any:
    if args.action == "check":
        return deload.should_trigger_deload()
    if args.action == "start":
        return deload.start_deload(args.deload_type)
    if args.action == "end":
        return deload.end_deload()
    if args.action == "postpone":
        return deload.postpone_deload()
    return {
        "state": store.get_deload_state(),
        "days_remaining": deload.get_days_remaining(),
    }


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _init_sentry(settings)

    try:
        engine = build_engine(open_store(settings, args.data_file))
        result = run_command(engine, args)
    except TrackerError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"Invalid value: {e}")

    print(json.dumps(_to_jsonable(result), indent=2, default=str))


if __name__ == "__main__":
    main()

"""
Application Use Cases for the BUILD tracker engine.

This package contains application-level use cases that orchestrate domain
records and the training store. Use cases are the entry points for
user-initiated writes; the read-only evaluators live in engine.core.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result objects, not raise, for expected failures

Usage:
    from application.use_cases import LogSessionUseCase, RecordChecksUseCase

    # Log a session
    log_use_case = LogSessionUseCase(store=store, analyzer=analyzer)
    result = log_use_case.execute(
        exercise_key="UPPER_A - DB Flat Bench Press",
        sets=[WorkoutSet(weight=20, reps=12, rir=2)],
    )

    # Record a mobility self-check
    checks = RecordChecksUseCase(store=store)
    result = checks.record_mobility("bench_overhead_mobility", "yes")
"""

from application.use_cases.log_session import LogSessionResult, LogSessionUseCase
from application.use_cases.record_checks import RecordCheckResult, RecordChecksUseCase

__all__ = [
    # LogSession
    "LogSessionUseCase",
    "LogSessionResult",
    # RecordChecks
    "RecordChecksUseCase",
    "RecordCheckResult",
]

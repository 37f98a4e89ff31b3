from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from javacomp.services.phase_runner import PhaseOutcome


NO_OUTPUT_PLACEHOLDER = "(No output)"


class FailureReason(str, Enum):
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"


@dataclass(frozen=True, slots=True)
class Failure:
    reason: FailureReason
    message: str


@dataclass(frozen=True, slots=True)
class Success:
    output: str


CompileResult = Failure | Success


def classify(compile_outcome: PhaseOutcome, run_outcome: PhaseOutcome | None = None) -> CompileResult:
    # Any compiler stderr counts as failure, warnings included.
    if compile_outcome.stderr:
        return Failure(FailureReason.COMPILE_ERROR, f"Compilation Error:\n{compile_outcome.stderr}")
    if run_outcome is None:
        raise ValueError("run_outcome is required when compilation produced no stderr")
    if run_outcome.stderr:
        return Failure(FailureReason.RUNTIME_ERROR, f"Runtime Error:\n{run_outcome.stderr}")
    return Success(output=run_outcome.stdout or NO_OUTPUT_PLACEHOLDER)

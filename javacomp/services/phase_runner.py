from __future__ import annotations

import os
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import structlog

from javacomp.core.errors import SpawnError


logger = structlog.get_logger(__name__)

_KILL_GRACE_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class PhaseOutcome:
    stdout: str
    stderr: str
    timed_out: bool
    exit_error: bool
    exit_code: int | None
    duration_ms: int


def _truncate(s: bytes, max_bytes: int) -> str:
    if len(s) <= max_bytes:
        return s.decode("utf-8", errors="replace")
    head = s[: max(0, max_bytes - 32)]
    suffix = b"\n...[truncated]"
    return (head + suffix).decode("utf-8", errors="replace")


def _kill_process_group(proc: subprocess.Popen[bytes]) -> None:
    try:
        if os.name == "posix":
            os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except PermissionError:
        pass
    proc.kill()


def _drain_after_kill(proc: subprocess.Popen[bytes]) -> tuple[bytes, bytes]:
    # A process outside the killed group can still hold the pipes open.
    try:
        return proc.communicate(timeout=_KILL_GRACE_SECONDS)
    except subprocess.TimeoutExpired as exc:
        out, err = exc.stdout or b"", exc.stderr or b""
    for stream in (proc.stdout, proc.stderr):
        if stream is not None:
            stream.close()
    proc.wait()
    return out, err


def run_phase(
    command: str,
    args: Sequence[str],
    working_directory: str | Path,
    timeout_ms: int,
    *,
    max_output_bytes: int = 1_000_000,
) -> PhaseOutcome:
    """Run one external process to completion or until ``timeout_ms`` elapses.

    Notes:
    - The child runs in its own session so the whole process group can be killed
      on timeout; it is always reaped before returning.
    - A timeout or non-zero exit is reported in the outcome, never raised. When the
      process wrote nothing to stderr a short message is synthesized instead.
    - Only a failure to launch the executable raises (``SpawnError``).
    """
    cmd: list[str] = [command, *args]
    start = time.perf_counter()

    try:
        proc = subprocess.Popen(  # nosec: B603 (argv list, no shell)
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=str(working_directory),
            text=False,
            start_new_session=os.name == "posix",
        )
    except OSError as exc:
        raise SpawnError(command, exc.strerror or str(exc)) from exc

    try:
        out, err = proc.communicate(timeout=timeout_ms / 1000.0)
        timed_out = False
    except subprocess.TimeoutExpired:
        timed_out = True
        _kill_process_group(proc)
        out, err = _drain_after_kill(proc)

    duration_ms = int((time.perf_counter() - start) * 1000)

    stdout = _truncate(out or b"", max_output_bytes)
    stderr = _truncate(err or b"", max_output_bytes)
    exit_code = None if timed_out else proc.returncode
    exit_error = not timed_out and exit_code != 0

    if timed_out:
        logger.warning("phase_timed_out", command=command, timeout_ms=timeout_ms)
        if not stderr:
            stderr = f"{command} timed out after {timeout_ms} ms"
    elif exit_error and not stderr:
        stderr = f"{command} exited with status {exit_code}"

    logger.info(
        "phase_finished",
        command=command,
        exit_code=exit_code,
        timed_out=timed_out,
        duration_ms=duration_ms,
    )
    return PhaseOutcome(
        stdout=stdout,
        stderr=stderr,
        timed_out=timed_out,
        exit_error=exit_error,
        exit_code=exit_code,
        duration_ms=duration_ms,
    )

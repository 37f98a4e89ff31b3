from __future__ import annotations

import time
from pathlib import Path
from shutil import which

import pytest

from javacomp.core.errors import SpawnError
from javacomp.services.phase_runner import run_phase


def test_captures_stdout_and_stderr(tmp_path: Path) -> None:
    outcome = run_phase("sh", ["-c", "echo out; echo err >&2"], tmp_path, 5_000)

    assert outcome.stdout == "out\n"
    assert outcome.stderr == "err\n"
    assert outcome.exit_code == 0
    assert outcome.exit_error is False
    assert outcome.timed_out is False
    assert outcome.duration_ms >= 0


def test_runs_in_working_directory(tmp_path: Path) -> None:
    (tmp_path / "marker.txt").write_text("here", encoding="utf-8")

    outcome = run_phase("cat", ["marker.txt"], tmp_path, 5_000)

    assert outcome.stdout == "here"


def test_nonzero_exit_with_stderr_keeps_process_message(tmp_path: Path) -> None:
    outcome = run_phase("sh", ["-c", "echo broken >&2; exit 2"], tmp_path, 5_000)

    assert outcome.exit_error is True
    assert outcome.exit_code == 2
    assert outcome.stderr == "broken\n"


def test_nonzero_exit_without_stderr_synthesizes_message(tmp_path: Path) -> None:
    outcome = run_phase("sh", ["-c", "exit 3"], tmp_path, 5_000)

    assert outcome.exit_error is True
    assert outcome.stderr == "sh exited with status 3"


def test_timeout_kills_process_group_and_keeps_partial_output(tmp_path: Path) -> None:
    start = time.monotonic()
    outcome = run_phase("sh", ["-c", "echo partial; sleep 5; echo late"], tmp_path, 300)
    elapsed = time.monotonic() - start

    assert outcome.timed_out is True
    assert outcome.exit_code is None
    assert outcome.exit_error is False
    assert outcome.stdout == "partial\n"
    assert outcome.stderr == "sh timed out after 300 ms"
    assert elapsed < 4


def test_stdin_is_closed(tmp_path: Path) -> None:
    outcome = run_phase("cat", [], tmp_path, 2_000)

    assert outcome.timed_out is False
    assert outcome.stdout == ""


def test_output_is_truncated(tmp_path: Path) -> None:
    outcome = run_phase(
        "sh",
        ["-c", "head -c 5000 /dev/zero | tr '\\0' x"],
        tmp_path,
        5_000,
        max_output_bytes=100,
    )

    assert outcome.stdout.endswith("...[truncated]")
    assert len(outcome.stdout) <= 100


def test_missing_binary_raises_spawn_error(tmp_path: Path) -> None:
    with pytest.raises(SpawnError) as excinfo:
        run_phase(str(tmp_path / "no-such-javac"), ["Main.java"], tmp_path, 1_000)

    assert excinfo.value.command.endswith("no-such-javac")


@pytest.mark.skipif(which("setsid") is None, reason="setsid not available")
def test_timeout_is_bounded_when_detached_grandchild_holds_pipes(tmp_path: Path) -> None:
    start = time.monotonic()
    outcome = run_phase("sh", ["-c", "setsid sleep 8 & sleep 30"], tmp_path, 300)
    elapsed = time.monotonic() - start

    assert outcome.timed_out is True
    assert outcome.exit_code is None
    assert outcome.stderr == "sh timed out after 300 ms"
    assert elapsed < 4

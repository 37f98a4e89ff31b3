from __future__ import annotations

from typing import Callable

import structlog

from javacomp.core.config import Settings
from javacomp.services.class_name import resolve_class_name
from javacomp.services.classifier import CompileResult, Failure, classify
from javacomp.services.phase_runner import PhaseOutcome, run_phase
from javacomp.services.workspace import provisioned_workspace, write_source


logger = structlog.get_logger(__name__)

SOURCE_EXTENSION = ".java"

PhaseRunner = Callable[..., PhaseOutcome]


def compile_and_run(
    source_text: str,
    settings: Settings,
    *,
    runner: PhaseRunner = run_phase,
) -> CompileResult:
    """Compile ``source_text`` with the configured compiler and run the resulting class.

    The workspace is removed before this returns or raises. ``FilesystemError`` and
    ``SpawnError`` propagate to the caller; every other outcome is a ``CompileResult``.
    """
    with provisioned_workspace(settings.scratch_root) as workspace:
        log = logger.bind(workspace_id=workspace.id)

        class_name = resolve_class_name(source_text, default=settings.default_class_name)
        file_name = f"{class_name}{SOURCE_EXTENSION}"
        write_source(workspace, file_name, source_text)

        compile_outcome = runner(
            settings.compiler_command,
            [file_name],
            workspace.root,
            settings.compile_timeout_ms,
            max_output_bytes=settings.max_output_bytes,
        )
        run_outcome: PhaseOutcome | None = None
        if not compile_outcome.stderr:
            run_outcome = runner(
                settings.runtime_command,
                [class_name],
                workspace.root,
                settings.run_timeout_ms,
                max_output_bytes=settings.max_output_bytes,
            )

        result = classify(compile_outcome, run_outcome)
        log.info(
            "request_classified",
            class_name=class_name,
            result=result.reason.value if isinstance(result, Failure) else "success",
        )
        return result

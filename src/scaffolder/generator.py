"""Main scaffolding orchestrator.

Takes a ``GenerationRequest``, asks the planner for the ordered action list,
and executes the actions one at a time against the project tree.  Every
action ends in exactly one of created / applied / skipped / failed; a failure
is recorded and the remaining actions still run.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from jinja2 import TemplateError

from src.config import Config

from .actions import FileOps, PatchError
from .models import (
    ActionKind,
    ActionResult,
    ActionStatus,
    FileAction,
    GenerationReport,
    GenerationRequest,
)
from .planner import ScaffoldPlanner
from .templates import TemplateRenderer


OBJECT_SKIP_MESSAGE = "Skipping action for object type."


def missing_file_message(path: str) -> str:
    return f"File {path} does not exist. Skipping action."


class SchemaGenerator:
    """Plans and applies the files for one schema of a feature.

    Example::

        gen = SchemaGenerator(Config(project_root=Path("apps/web")))
        report = await gen.run(GenerationRequest(feature="blog", name="author"))
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.renderer = TemplateRenderer(self.config.template_dir)
        self.planner = ScaffoldPlanner(self.renderer, self.config.features_dir)

    # -- Public API --------------------------------------------------------

    def plan(self, request: GenerationRequest) -> list[FileAction]:
        return self.planner.plan(request)

    async def run(
        self, request: GenerationRequest, *, dry_run: bool = False
    ) -> GenerationReport:
        """Execute the plan for *request* sequentially.

        Args:
            request: The feature/name/type triple to generate.
            dry_run: Evaluate every action against the current tree without
                writing anything.

        Returns:
            A report with one result per planned action, in execution order.
        """
        ops = FileOps(self.config.project_root, dry_run=dry_run)
        context = request.context()
        report = GenerationReport(request=request, dry_run=dry_run)

        for action in self.plan(request):
            result = await self._execute(action, request, context, ops)
            report.results.append(result)

        return report

    # -- Execution ---------------------------------------------------------

    async def _execute(
        self,
        action: FileAction,
        request: GenerationRequest,
        context: dict,
        ops: FileOps,
    ) -> ActionResult:
        reason = self._skip_reason(action, request, ops)
        if reason is not None:
            return _result(action, ActionStatus.SKIPPED, reason)

        try:
            status, message = await asyncio.to_thread(
                self._apply, action, context, ops
            )
        except (OSError, ValueError, PatchError, TemplateError) as exc:
            # ValueError covers UnicodeDecodeError from non-UTF-8 targets.
            return _result(action, ActionStatus.FAILED, str(exc))
        return _result(action, status, message)

    def _skip_reason(
        self, action: FileAction, request: GenerationRequest, ops: FileOps
    ) -> str | None:
        """Why *action* does not apply, or ``None`` when it should run.

        A missing target file is reported before the object-type gate.
        """
        if action.requires_file and not ops.exists(action.path):
            return missing_file_message(action.path)
        if action.non_object_only and request.is_object:
            return OBJECT_SKIP_MESSAGE
        return None

    def _apply(
        self, action: FileAction, context: dict, ops: FileOps
    ) -> tuple[ActionStatus, str]:
        if action.kind == ActionKind.ADD:
            return ops.create_file(
                action.path,
                lambda: self.renderer.render(action.template, context),
                skip_if_exists=action.skip_if_exists,
            )

        if action.kind == ActionKind.MODIFY:
            if action.inline is not None:
                text = action.inline
            else:
                text = self.renderer.render(action.template, context)
            return ops.insert_at(action.path, action.pattern, text)

        return ops.add_to_barrel(
            action.path, action.barrel_import, action.barrel_export
        )


def _result(action: FileAction, status: ActionStatus, message: str = "") -> ActionResult:
    return ActionResult(
        action_id=action.id,
        kind=action.kind,
        path=action.path,
        status=status,
        message=message,
    )


async def generate(
    feature: str,
    name: str,
    schema_type: str = "document",
    project_root: str | Path = ".",
    *,
    dry_run: bool = False,
) -> GenerationReport:
    """Convenience wrapper: build a request and run it under *project_root*."""
    request = GenerationRequest(feature=feature, name=name, type=schema_type)
    generator = SchemaGenerator(Config(project_root=Path(project_root)))
    return await generator.run(request, dry_run=dry_run)

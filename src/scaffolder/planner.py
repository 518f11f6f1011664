"""Scaffold planner: turns a generation request into ordered file actions.

For a ``(feature, name, type)`` request the plan covers, in order:

1. the schema file and the feature's schema barrel;
2. the data loaders (``_data/load.ts``);
3. the GROQ queries (``_data/queries.ts``);
4. the query hooks (``_data/hooks.ts``);
5. the ``use-<name>`` hook and the hooks barrel;
6. the ``<name>-context`` context/provider modules and the contexts barrel.

Groups 2-6 only apply to documents and singletons; for objects their actions
are still planned and are reported as skipped.  Within every group that
shares a file, the patch actions come before the "create if absent" action,
so the first entity of a feature gets a fresh file from its template and
later entities patch it.  These orderings are declared through
``FileAction.depends_on`` and enforced by :func:`order_actions`.
"""

from __future__ import annotations

from typing import Any

from .models import ActionKind, FileAction, GenerationRequest
from .templates import TemplateRenderer


class PlanError(Exception):
    """Raised when a plan's declared dependencies cannot be satisfied."""


# ---------------------------------------------------------------------------
# Anchors
# ---------------------------------------------------------------------------

SANITY_TYPES_ANCHOR = r"\} from '@/sanity\.types'"
QUERIES_ANCHOR = r"\} from '\./queries'"
END_OF_FILE_ANCHOR = r"\s*\Z"


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


class ScaffoldPlanner:
    """Builds the ordered action list for one generation request."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        features_dir: str = "features",
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.features_dir = features_dir.strip("/")

    def plan(self, request: GenerationRequest) -> list[FileAction]:
        """Return every action for *request* in execution order."""
        ctx = request.context()
        ctx["root"] = f"{self.features_dir}/{request.feature_kebab}"

        actions: list[FileAction] = []
        actions += self._schema_actions(ctx)
        actions += self._loader_actions(ctx)
        actions += self._query_actions(ctx)
        actions += self._query_hook_actions(ctx)
        actions += self._hook_actions(ctx)
        actions += self._context_actions(ctx)
        return order_actions(actions)

    # -- Groups ------------------------------------------------------------

    def _schema_actions(self, ctx: dict[str, Any]) -> list[FileAction]:
        barrel = "{{ root }}/_data/schemas/index.ts"
        return [
            self._add(
                ctx, "schema",
                "{{ root }}/_data/schemas/{{ name_kebab }}.ts",
                "_data/schemas/{{ type }}-schema.ts.j2",
                non_object_only=False,
                description="Schema definition",
            ),
            self._barrel(
                ctx, "schema-barrel-patch", barrel,
                "import {{ name_camel }} from './{{ name_kebab }}'",
                "{{ name_camel }}",
                depends_on=("schema",),
                non_object_only=False,
            ),
            self._add(
                ctx, "schema-barrel", barrel, "_data/schemas/index.ts.j2",
                skip_if_exists=True,
                non_object_only=False,
                depends_on=("schema-barrel-patch",),
                description="Schema barrel",
            ),
        ]

    def _loader_actions(self, ctx: dict[str, Any]) -> list[FileAction]:
        path = "{{ root }}/_data/load.ts"
        return [
            self._modify(
                ctx, "load-types-import", path, SANITY_TYPES_ANCHOR,
                inline="  {{ name_pascal }}QueryResult,\n} from '@/sanity.types'",
            ),
            self._modify(
                ctx, "load-queries-import", path, QUERIES_ANCHOR,
                inline="  {{ name_camel }}Query,\n} from './queries'",
                depends_on=("load-types-import",),
            ),
            self._modify(
                ctx, "load-append", path, END_OF_FILE_ANCHOR,
                template="_data/load-partial.ts.j2",
                depends_on=("load-queries-import",),
            ),
            self._add(
                ctx, "load", path, "_data/load.ts.j2",
                skip_if_exists=True,
                depends_on=("load-types-import", "load-queries-import", "load-append"),
                description="Data loaders",
            ),
        ]

    def _query_actions(self, ctx: dict[str, Any]) -> list[FileAction]:
        path = "{{ root }}/_data/queries.ts"
        return [
            self._modify(
                ctx, "queries-append", path, END_OF_FILE_ANCHOR,
                template="_data/queries-partial.ts.j2",
            ),
            self._add(
                ctx, "queries", path, "_data/queries.ts.j2",
                skip_if_exists=True,
                depends_on=("queries-append",),
                description="Queries",
            ),
        ]

    def _query_hook_actions(self, ctx: dict[str, Any]) -> list[FileAction]:
        path = "{{ root }}/_data/hooks.ts"
        return [
            self._modify(
                ctx, "query-hooks-types-import", path, SANITY_TYPES_ANCHOR,
                inline="  {{ name_pascal }}QueryResult,\n} from '@/sanity.types'",
            ),
            self._modify(
                ctx, "query-hooks-queries-import", path, QUERIES_ANCHOR,
                inline="  {{ name_camel }}Query,\n} from './queries'",
                depends_on=("query-hooks-types-import",),
            ),
            self._modify(
                ctx, "query-hooks-append", path, END_OF_FILE_ANCHOR,
                template="_data/hooks-partial.ts.j2",
                depends_on=("query-hooks-queries-import",),
            ),
            self._add(
                ctx, "query-hooks", path, "_data/hooks.ts.j2",
                skip_if_exists=True,
                depends_on=(
                    "query-hooks-types-import",
                    "query-hooks-queries-import",
                    "query-hooks-append",
                ),
                description="Query hooks",
            ),
        ]

    def _hook_actions(self, ctx: dict[str, Any]) -> list[FileAction]:
        barrel = "{{ root }}/hooks/index.ts"
        return [
            self._add(
                ctx, "use-hook", "{{ root }}/hooks/use-{{ name_kebab }}.ts",
                "hooks/use-hook.ts.j2",
                skip_if_exists=True,
                description="use{{ name_pascal }} hook",
            ),
            self._barrel(
                ctx, "hooks-barrel-patch", barrel,
                "import use{{ name_pascal }} from './use-{{ name_kebab }}'",
                "use{{ name_pascal }}",
                depends_on=("use-hook",),
            ),
            self._add(
                ctx, "hooks-barrel", barrel, "hooks/index.ts.j2",
                skip_if_exists=True,
                depends_on=("hooks-barrel-patch",),
                description="Hooks barrel",
            ),
        ]

    def _context_actions(self, ctx: dict[str, Any]) -> list[FileAction]:
        base = "{{ root }}/contexts/{{ name_kebab }}-context"
        barrel = "{{ root }}/contexts/index.ts"
        return [
            self._add(
                ctx, "context", f"{base}/context.ts", "contexts/context.ts.j2",
                description="{{ name_pascal }} context",
            ),
            self._add(
                ctx, "provider-index", f"{base}/provider/index.tsx",
                "contexts/providers/index.tsx.j2",
                depends_on=("context",),
                description="Provider entry point",
            ),
            self._add(
                ctx, "preview-provider", f"{base}/provider/preview-provider.tsx",
                "contexts/providers/preview-provider.tsx.j2",
                depends_on=("context",),
                description="Preview provider",
            ),
            self._add(
                ctx, "provider", f"{base}/provider/provider.tsx",
                "contexts/providers/provider.tsx.j2",
                depends_on=("context",),
                description="Provider",
            ),
            self._barrel(
                ctx, "contexts-barrel-patch", barrel,
                "import {{ name_pascal }}Provider from './{{ name_kebab }}-context/provider'",
                "{{ name_pascal }}Provider",
                depends_on=("provider-index",),
            ),
            self._add(
                ctx, "contexts-barrel", barrel, "contexts/index.ts.j2",
                skip_if_exists=True,
                depends_on=("contexts-barrel-patch",),
                description="Contexts barrel",
            ),
        ]

    # -- Action constructors -----------------------------------------------

    def _render(self, value: str, ctx: dict[str, Any]) -> str:
        return self.renderer.render_string(value, ctx)

    def _add(
        self,
        ctx: dict[str, Any],
        action_id: str,
        path: str,
        template: str,
        *,
        skip_if_exists: bool = False,
        non_object_only: bool = True,
        depends_on: tuple[str, ...] = (),
        description: str = "",
    ) -> FileAction:
        return FileAction(
            id=action_id,
            kind=ActionKind.ADD,
            path=self._render(path, ctx),
            template=self._render(template, ctx),
            skip_if_exists=skip_if_exists,
            non_object_only=non_object_only,
            depends_on=depends_on,
            description=self._render(description, ctx),
        )

    def _modify(
        self,
        ctx: dict[str, Any],
        action_id: str,
        path: str,
        pattern: str,
        *,
        inline: str | None = None,
        template: str | None = None,
        depends_on: tuple[str, ...] = (),
    ) -> FileAction:
        return FileAction(
            id=action_id,
            kind=ActionKind.MODIFY,
            path=self._render(path, ctx),
            pattern=pattern,
            inline=self._render(inline, ctx) if inline is not None else None,
            template=template,
            requires_file=True,
            non_object_only=True,
            depends_on=depends_on,
        )

    def _barrel(
        self,
        ctx: dict[str, Any],
        action_id: str,
        path: str,
        import_line: str,
        binding: str,
        *,
        non_object_only: bool = True,
        depends_on: tuple[str, ...] = (),
    ) -> FileAction:
        return FileAction(
            id=action_id,
            kind=ActionKind.BARREL,
            path=self._render(path, ctx),
            barrel_import=self._render(import_line, ctx),
            barrel_export=self._render(binding, ctx),
            requires_file=True,
            non_object_only=non_object_only,
            depends_on=depends_on,
        )


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def order_actions(actions: list[FileAction]) -> list[FileAction]:
    """Return *actions* in an order that satisfies every ``depends_on``.

    The sort is stable: among the actions whose dependencies are met, the one
    declared first always runs first, so an already valid list comes back
    unchanged.

    Raises:
        PlanError: On duplicate ids, unknown dependencies, or cycles.
    """
    by_id: dict[str, FileAction] = {}
    for action in actions:
        if action.id in by_id:
            raise PlanError(f"Duplicate action id: {action.id}")
        by_id[action.id] = action

    for action in actions:
        for dep in action.depends_on:
            if dep not in by_id:
                raise PlanError(f"Action {action.id!r} depends on unknown action {dep!r}")

    ordered: list[FileAction] = []
    done: set[str] = set()
    pending = list(actions)
    while pending:
        for index, action in enumerate(pending):
            if all(dep in done for dep in action.depends_on):
                ordered.append(action)
                done.add(action.id)
                del pending[index]
                break
        else:
            cycle = ", ".join(a.id for a in pending)
            raise PlanError(f"Circular dependencies between actions: {cycle}")
    return ordered

"""Schema scaffolder -- adds a schema and its data layer to a feature.

Given a feature name, a schema name and a schema type (document, singleton
or object), the scaffolder creates and patches the files of the feature's
data layer: the schema definition and schema barrel, and (for documents and
singletons) the loaders, queries, query hooks, the ``use-<name>`` hook, and
the ``<name>-context`` context/provider modules together with their barrels.

Quick usage::

    from src.config import Config
    from src.scaffolder import GenerationRequest, SchemaGenerator

    generator = SchemaGenerator(Config(project_root=Path("apps/web")))
    report = await generator.run(
        GenerationRequest(feature="blog", name="author", type="document")
    )
"""

from src.scaffolder.generator import SchemaGenerator, generate
from src.scaffolder.models import (
    ActionKind,
    ActionResult,
    ActionStatus,
    FileAction,
    GenerationReport,
    GenerationRequest,
    SchemaType,
)
from src.scaffolder.planner import PlanError, ScaffoldPlanner, order_actions
from src.scaffolder.templates import TemplateRenderer

__all__ = [
    "ActionKind",
    "ActionResult",
    "ActionStatus",
    "FileAction",
    "GenerationReport",
    "GenerationRequest",
    "PlanError",
    "ScaffoldPlanner",
    "SchemaGenerator",
    "SchemaType",
    "TemplateRenderer",
    "generate",
    "order_actions",
]

"""Pydantic v2 models for the schema scaffolder.

Defines the generation request collected from the operator, the planned file
actions derived from it, and the per-action results gathered while a plan is
executed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .templates import camel_case, kebab_case, pascal_case


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class SchemaType(str, Enum):
    """Kind of schema being generated. Objects only get a schema file."""
    DOCUMENT = "document"
    SINGLETON = "singleton"
    OBJECT = "object"


class ActionKind(str, Enum):
    """How a planned action mutates its target file."""
    ADD = "add"
    MODIFY = "modify"
    BARREL = "barrel"


class ActionStatus(str, Enum):
    """Terminal state of an executed action."""
    CREATED = "created"
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class GenerationRequest(BaseModel):
    """The ``(feature, name, type)`` triple a single generation pass runs for."""

    feature: str = Field(..., min_length=1, description="Owning feature, e.g. 'blog'")
    name: str = Field(..., min_length=1, description="Schema name, e.g. 'author'")
    type: SchemaType = Field(default=SchemaType.DOCUMENT, description="Schema type")

    @property
    def feature_kebab(self) -> str:
        return kebab_case(self.feature)

    @property
    def name_kebab(self) -> str:
        return kebab_case(self.name)

    @property
    def name_camel(self) -> str:
        return camel_case(self.name)

    @property
    def name_pascal(self) -> str:
        return pascal_case(self.name)

    @property
    def is_object(self) -> bool:
        return self.type == SchemaType.OBJECT

    def context(self) -> dict[str, Any]:
        """Return the Jinja2 context used for templates and templated paths."""
        return {
            "feature": self.feature,
            "name": self.name,
            "type": self.type.value,
            "feature_kebab": self.feature_kebab,
            "name_kebab": self.name_kebab,
            "name_camel": self.name_camel,
            "name_pascal": self.name_pascal,
            "is_document": self.type == SchemaType.DOCUMENT,
            "is_singleton": self.type == SchemaType.SINGLETON,
            "is_object": self.is_object,
        }


# ---------------------------------------------------------------------------
# Planned actions
# ---------------------------------------------------------------------------

class FileAction(BaseModel):
    """A single planned operation against exactly one target file.

    ``add`` actions render ``template`` into ``path``.  ``modify`` actions
    replace the first match of ``pattern`` with the rendered ``inline``
    snippet (or ``template``).  ``barrel`` actions add ``barrel_import`` and
    ``barrel_export`` to an index module unless they are already there.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique id within a plan")
    kind: ActionKind
    path: str = Field(..., description="Target path relative to the project root")
    template: Optional[str] = Field(default=None, description="Template file name")
    inline: Optional[str] = Field(default=None, description="Inline template string")
    pattern: Optional[str] = Field(default=None, description="Anchor regex (modify only)")
    barrel_import: Optional[str] = Field(default=None, description="Import line (barrel only)")
    barrel_export: Optional[str] = Field(default=None, description="Exported binding (barrel only)")
    skip_if_exists: bool = Field(default=False)
    requires_file: bool = Field(
        default=False, description="Skip with a reason when the target file is missing"
    )
    non_object_only: bool = Field(
        default=False, description="Skip with a reason for object schemas"
    )
    depends_on: tuple[str, ...] = Field(default=(), description="Ids that must run first")
    description: str = Field(default="")


class ActionResult(BaseModel):
    """Outcome of one executed (or dry-run) action."""
    action_id: str
    kind: ActionKind
    path: str
    status: ActionStatus
    message: str = ""


class GenerationReport(BaseModel):
    """Everything a generation pass did, in execution order."""

    request: GenerationRequest
    results: list[ActionResult] = Field(default_factory=list)
    dry_run: bool = False

    def _with_status(self, status: ActionStatus) -> list[ActionResult]:
        return [r for r in self.results if r.status == status]

    @property
    def created(self) -> list[ActionResult]:
        return self._with_status(ActionStatus.CREATED)

    @property
    def applied(self) -> list[ActionResult]:
        return self._with_status(ActionStatus.APPLIED)

    @property
    def skipped(self) -> list[ActionResult]:
        return self._with_status(ActionStatus.SKIPPED)

    @property
    def failed(self) -> list[ActionResult]:
        return self._with_status(ActionStatus.FAILED)

    @property
    def touched_paths(self) -> list[str]:
        """Distinct paths that were created or patched, in first-touch order."""
        seen: dict[str, None] = {}
        for r in self.results:
            if r.status in (ActionStatus.CREATED, ActionStatus.APPLIED):
                seen.setdefault(r.path, None)
        return list(seen)

    @property
    def success(self) -> bool:
        """``True`` when every action reached created, applied, or skipped."""
        return not self.failed

"""Schema scaffolder configuration.

Typed configuration for the generator.  Settings use a Pydantic v2 model so
they are validated at construction time and can be serialised to/from JSON
or read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Global scaffolder configuration.

    Created once by the CLI entry point (from a JSON file, the environment,
    and command-line overrides) and handed to ``SchemaGenerator``.
    """

    project_root: Path = Field(default=Path("."), description="Root all target paths are relative to")
    features_dir: str = Field(default="features", min_length=1)
    template_dir: Optional[Path] = Field(
        default=None, description="Template directory; defaults to the bundled templates"
    )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def features_path(self) -> Path:
        """Directory holding one subdirectory per feature."""
        return self.project_root / self.features_dir

    def feature_path(self, feature_kebab: str) -> Path:
        return self.features_path / feature_kebab

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SCHEMA_GEN_ROOT, SCHEMA_GEN_FEATURES_DIR, SCHEMA_GEN_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCHEMA_GEN_ROOT"):
            kwargs["project_root"] = Path(os.environ["SCHEMA_GEN_ROOT"])
        if os.environ.get("SCHEMA_GEN_FEATURES_DIR"):
            kwargs["features_dir"] = os.environ["SCHEMA_GEN_FEATURES_DIR"]
        if os.environ.get("SCHEMA_GEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["SCHEMA_GEN_TEMPLATE_DIR"])
        return cls(**kwargs)

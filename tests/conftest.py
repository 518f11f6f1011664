"""Shared pytest fixtures for the schema scaffolder test suite.

Provides reusable fixtures for:
- Temporary project roots
- Config / generator / renderer instances pointed at them
- Generation requests for the document, singleton and object cases
- Snapshotting a generated tree
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config import Config
from src.scaffolder import GenerationRequest, SchemaGenerator, TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project root (auto-cleanup)."""
    root = tmp_path / "web"
    root.mkdir()
    yield root


@pytest.fixture
def config(project_root: Path) -> Config:
    return Config(project_root=project_root)


# ---------------------------------------------------------------------------
# Scaffolder components
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the bundled templates."""
    return TemplateRenderer()


@pytest.fixture
def generator(config: Config) -> SchemaGenerator:
    return SchemaGenerator(config)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def author_request() -> GenerationRequest:
    return GenerationRequest(feature="blog", name="author", type="document")


@pytest.fixture
def post_request() -> GenerationRequest:
    return GenerationRequest(feature="blog", name="post", type="document")


@pytest.fixture
def settings_request() -> GenerationRequest:
    return GenerationRequest(feature="blog", name="blog settings", type="singleton")


@pytest.fixture
def tag_request() -> GenerationRequest:
    return GenerationRequest(feature="blog", name="tag", type="object")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def snapshot_tree(root: Path) -> dict[str, str]:
    """Map every file under *root* (relative posix path) to its content."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot():
    return snapshot_tree


DOCUMENT_PATHS = [
    "features/blog/_data/schemas/author.ts",
    "features/blog/_data/schemas/index.ts",
    "features/blog/_data/load.ts",
    "features/blog/_data/queries.ts",
    "features/blog/_data/hooks.ts",
    "features/blog/hooks/use-author.ts",
    "features/blog/hooks/index.ts",
    "features/blog/contexts/author-context/context.ts",
    "features/blog/contexts/author-context/provider/index.tsx",
    "features/blog/contexts/author-context/provider/preview-provider.tsx",
    "features/blog/contexts/author-context/provider/provider.tsx",
    "features/blog/contexts/index.ts",
]


@pytest.fixture
def document_paths() -> list[str]:
    """Every path a ``blog``/``author`` document request addresses."""
    return list(DOCUMENT_PATHS)

"""Integration tests for whole-feature scaffolding.

These run the real planner, templates and file operations against a
temporary project root and check the resulting tree, across several
generation passes for the same feature.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config import Config
from src.scaffolder import ActionStatus, GenerationRequest, SchemaGenerator


def _read(root: Path, rel: str) -> str:
    return (root / rel).read_text(encoding="utf-8")


@pytest.mark.integration
class TestBlogFeature:
    """The ``blog`` feature built up one schema at a time."""

    async def test_author_document_creates_full_tree(self, generator, project_root, snapshot, document_paths):
        report = await generator.run(
            GenerationRequest(feature="blog", name="author", type="document")
        )

        assert report.success
        assert sorted(snapshot(project_root)) == sorted(document_paths)
        for rel in (
            "features/blog/_data/schemas/author.ts",
            "features/blog/hooks/use-author.ts",
            "features/blog/contexts/author-context/context.ts",
        ):
            assert rel in report.touched_paths

    async def test_tag_object_only_touches_schemas(self, generator, project_root, snapshot):
        await generator.run(GenerationRequest(feature="blog", name="author", type="document"))
        before = snapshot(project_root)

        report = await generator.run(GenerationRequest(feature="blog", name="tag", type="object"))
        after = snapshot(project_root)

        assert report.success
        assert report.touched_paths == [
            "features/blog/_data/schemas/tag.ts",
            "features/blog/_data/schemas/index.ts",
        ]
        changed = {p for p in after if before.get(p) != after[p]}
        assert changed == {
            "features/blog/_data/schemas/tag.ts",
            "features/blog/_data/schemas/index.ts",
        }
        schemas = after["features/blog/_data/schemas/index.ts"]
        assert "import tag from './tag'" in schemas
        assert "  tag,\n" in schemas

    async def test_rerun_does_not_duplicate_barrel_entries(self, generator, project_root):
        request = GenerationRequest(feature="blog", name="author", type="document")
        await generator.run(request)
        report = await generator.run(request)

        statuses = {r.action_id: r.status for r in report.results}
        for action_id in ("schema-barrel-patch", "hooks-barrel-patch", "contexts-barrel-patch"):
            assert statuses[action_id] == ActionStatus.SKIPPED

        assert _read(project_root, "features/blog/_data/schemas/index.ts").count(
            "import author from './author'"
        ) == 1
        assert _read(project_root, "features/blog/hooks/index.ts").count("useAuthor,") == 1
        assert _read(project_root, "features/blog/contexts/index.ts").count("AuthorProvider,") == 1

    async def test_rerun_appends_loader_again(self, generator, project_root):
        # Regex-anchored patches of the shared data modules are not deduplicated.
        request = GenerationRequest(feature="blog", name="author", type="document")
        await generator.run(request)
        await generator.run(request)

        load = _read(project_root, "features/blog/_data/load.ts")
        assert load.count("export function loadAuthor(") == 2
        assert load.count("  AuthorQueryResult,\n") == 2

    async def test_rerun_keeps_existing_hook(self, generator, project_root):
        request = GenerationRequest(feature="blog", name="author", type="document")
        await generator.run(request)
        hook = project_root / "features/blog/hooks/use-author.ts"
        hook.write_text("// customised\n", encoding="utf-8")
        context = project_root / "features/blog/contexts/author-context/context.ts"
        context.write_text("// customised\n", encoding="utf-8")

        await generator.run(request)

        assert hook.read_text(encoding="utf-8") == "// customised\n"
        assert context.read_text(encoding="utf-8") != "// customised\n"

    async def test_three_entities(self, generator, project_root):
        for name, schema_type in (("author", "document"), ("post", "document"), ("settings", "singleton")):
            report = await generator.run(
                GenerationRequest(feature="blog", name=name, type=schema_type)
            )
            assert report.success

        hooks_barrel = _read(project_root, "features/blog/hooks/index.ts")
        assert hooks_barrel.index("useSettings,") < hooks_barrel.index("usePost,") < hooks_barrel.index("useAuthor,")
        queries = _read(project_root, "features/blog/_data/queries.ts")
        assert queries.count("defineQuery(`") == 3


@pytest.mark.integration
async def test_features_are_independent(project_root, snapshot):
    generator = SchemaGenerator(Config(project_root=project_root, features_dir="src/features"))
    await generator.run(GenerationRequest(feature="blog", name="author"))
    await generator.run(GenerationRequest(feature="shop", name="product"))

    files = snapshot(project_root)
    assert "src/features/blog/_data/schemas/index.ts" in files
    assert "product" not in files["src/features/blog/_data/schemas/index.ts"]
    assert "author" not in files["src/features/shop/_data/schemas/index.ts"]

"""Tests for the template renderer and case helpers.

Covers:
- kebab/camel/pascal case conversion
- Rendering bundled template files and inline strings
- Strict undefined handling
- Bundled template set and missing templates
"""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from src.scaffolder.models import GenerationRequest
from src.scaffolder.templates import (
    TemplateRenderer,
    camel_case,
    kebab_case,
    pascal_case,
    split_words,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Case helpers
# ---------------------------------------------------------------------------


class TestSplitWords:
    def test_camel(self):
        assert split_words("blogPost") == ["blog", "Post"]

    def test_acronym(self):
        assert split_words("HTMLParser") == ["HTML", "Parser"]

    def test_separators(self):
        assert split_words("site_settings-page now") == ["site", "settings", "page", "now"]

    def test_empty(self):
        assert split_words("") == []


class TestKebabCase:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("author", "author"),
            ("Blog Post", "blog-post"),
            ("blogPost", "blog-post"),
            ("BlogPost", "blog-post"),
            ("site_settings", "site-settings"),
            ("already-kebab", "already-kebab"),
            ("  padded  ", "padded"),
        ],
    )
    def test_conversions(self, value, expected):
        assert kebab_case(value) == expected


class TestPascalCase:
    def test_from_kebab(self):
        assert pascal_case("blog-post") == "BlogPost"

    def test_from_spaces(self):
        assert pascal_case("blog settings") == "BlogSettings"

    def test_acronym_is_title_cased(self):
        assert pascal_case("HTML page") == "HtmlPage"

    def test_single_word(self):
        assert pascal_case("author") == "Author"


class TestCamelCase:
    def test_from_kebab(self):
        assert camel_case("blog-post") == "blogPost"

    def test_from_pascal(self):
        assert camel_case("BlogPost") == "blogPost"

    def test_empty(self):
        assert camel_case("") == ""


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TestTemplateRenderer:
    def test_renders_document_schema(self, renderer):
        ctx = GenerationRequest(feature="blog", name="blog post").context()
        out = renderer.render("_data/schemas/document-schema.ts.j2", ctx)
        assert "const blogPost = defineType({" in out
        assert "name: 'blogPost'" in out
        assert "type: 'document'" in out
        assert out.endswith("export default blogPost\n")

    def test_renders_object_schema(self, renderer):
        ctx = GenerationRequest(feature="blog", name="tag", type="object").context()
        out = renderer.render("_data/schemas/object-schema.ts.j2", ctx)
        assert "type: 'object'" in out

    def test_schema_barrel_contains_first_entity(self, renderer):
        ctx = GenerationRequest(feature="blog", name="author").context()
        out = renderer.render("_data/schemas/index.ts.j2", ctx)
        assert out == "import author from './author'\n\nexport {\n  author,\n}\n"

    def test_singleton_loader_takes_no_slug(self, renderer):
        ctx = GenerationRequest(feature="blog", name="settings", type="singleton").context()
        out = renderer.render("_data/load.ts.j2", ctx)
        assert "export function loadSettings() {" in out
        assert "slug" not in out

    def test_document_loader_takes_slug(self, renderer):
        ctx = GenerationRequest(feature="blog", name="author").context()
        out = renderer.render("_data/load.ts.j2", ctx)
        assert "export function loadAuthor(slug: string) {" in out
        assert "} from './queries'\n\nexport function loadAuthor" in out

    def test_partials_start_with_blank_line(self, renderer):
        ctx = GenerationRequest(feature="blog", name="author").context()
        for name in ("load", "queries", "hooks"):
            out = renderer.render(f"_data/{name}-partial.ts.j2", ctx)
            assert out.startswith("\n\nexport ")
            assert out.endswith("\n")

    def test_provider_value_braces(self, renderer):
        ctx = GenerationRequest(feature="blog", name="author").context()
        out = renderer.render("contexts/providers/provider.tsx.j2", ctx)
        assert "<AuthorContext.Provider value={{ author }}>" in out

    def test_render_string_with_filters(self, renderer):
        out = renderer.render_string("{{ value | kebab_case }}/{{ value | pascal_case }}", {"value": "blog post"})
        assert out == "blog-post/BlogPost"

    def test_undefined_variable_raises(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render_string("{{ missing }}", {})

    def test_bundled_template_set(self, renderer):
        templates = sorted(
            p.relative_to(renderer.template_dir).as_posix()
            for p in renderer.template_dir.rglob("*.j2")
        )
        assert "_data/schemas/index.ts.j2" in templates
        assert "contexts/providers/preview-provider.tsx.j2" in templates
        assert len(templates) == 17

    def test_missing_template_raises(self, renderer):
        with pytest.raises(TemplateNotFound):
            renderer.render("hooks/missing.ts.j2", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "x.j2").write_text("hi {{ name }}\n", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("x.j2", {"name": "there"}) == "hi there\n"

"""Jinja2 template rendering for schema scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``src/scaffolder/templates/`` directory and renders them with the context of
a generation request.  Supports single-file rendering and string-based rendering
for inline snippets and templated target paths.

The case helpers used for paths and identifiers live here too, and are
registered as the ``kebab_case``, ``camel_case`` and ``pascal_case`` filters.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------

# Acronym runs, capitalised words, lowercase/digit runs.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def split_words(value: str) -> list[str]:
    """Split an identifier or phrase into words.

    Examples::

        split_words("blogPost")     -> ["blog", "Post"]
        split_words("HTML parser")  -> ["HTML", "parser"]
        split_words("site_settings") -> ["site", "settings"]
    """
    return _WORD_RE.findall(value)


def kebab_case(value: str) -> str:
    """``'Blog Post'`` / ``'blogPost'`` -> ``'blog-post'``."""
    return "-".join(w.lower() for w in split_words(value))


def pascal_case(value: str) -> str:
    """``'blog-post'`` / ``'blog_post'`` -> ``'BlogPost'``."""
    return "".join(w[:1].upper() + w[1:].lower() for w in split_words(value))


def camel_case(value: str) -> str:
    """``'blog-post'`` / ``'Blog Post'`` -> ``'blogPost'``."""
    pascal = pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for schema scaffolding.

    Templates are addressed by their path relative to the template directory
    (e.g. ``"_data/schemas/index.ts.j2"``).  Undefined variables raise instead
    of rendering as empty strings, so a typo in a template surfaces as a
    failed action rather than a silently broken file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["kebab_case"] = kebab_case
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["camel_case"] = camel_case

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template file with the provided context.

        Args:
            template_path: Path relative to the template directory.
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Used for the small snippets inserted by patch actions and for the
        templated target paths of a plan.
        """
        template = self.env.from_string(template_string)
        return template.render(**context)

"""Structured editing of barrel (``index.ts``) modules.

A barrel module aggregates sibling modules behind one import path::

    import author from './author'
    import post from './post'

    export {
      author,
      post,
    }

Rather than splicing text at the first match of a regex, the module is parsed
into its import bindings and the entries of its first ``export { ... }``
block.  New entries are added only when absent and the module is then
serialised again, so generating the same entity twice leaves the barrel
unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


_EXPORT_BLOCK_RE = re.compile(r"export\s*\{([^}]*)\}", re.S)

# ``import foo from './foo'`` and ``import { a, b as c } from './x'``
_DEFAULT_IMPORT_RE = re.compile(r"^\s*import\s+([A-Za-z_$][\w$]*)\s*(?:,|\s+from\b)", re.M)
_NAMED_IMPORT_RE = re.compile(r"^\s*import\s+(?:[\w$]+\s*,\s*)?\{([^}]*)\}\s*from\b", re.M)


@dataclass
class Barrel:
    """Parsed barrel module.

    ``prefix`` holds everything before the first export block (the import
    section, comments, anything else) verbatim; ``suffix`` everything after
    it.
    """

    prefix: str
    exports: list[str] = field(default_factory=list)
    suffix: str = "\n"
    has_export_block: bool = True

    # -- Parsing -----------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "Barrel":
        match = _EXPORT_BLOCK_RE.search(text)
        if match is None:
            return cls(prefix=text, exports=[], suffix="", has_export_block=False)
        entries = [e.strip() for e in match.group(1).split(",")]
        return cls(
            prefix=text[: match.start()],
            exports=[e for e in entries if e],
            suffix=text[match.end():],
        )

    # -- Queries -----------------------------------------------------------

    @property
    def imported(self) -> set[str]:
        """Local bindings introduced by the import statements."""
        names = set(_DEFAULT_IMPORT_RE.findall(self.prefix))
        for group in _NAMED_IMPORT_RE.findall(self.prefix):
            for spec in group.split(","):
                spec = spec.strip()
                if spec:
                    names.add(spec.split(" as ")[-1].strip())
        return names

    @property
    def exported(self) -> set[str]:
        """Local names listed in the export block (``a as b`` counts as ``a``)."""
        return {e.split(" as ")[0].strip() for e in self.exports}

    # -- Mutation ----------------------------------------------------------

    def add_import(self, line: str, binding: str) -> bool:
        """Prepend *line* unless *binding* is already imported."""
        if binding in self.imported:
            return False
        self.prefix = line.rstrip("\n") + "\n" + self.prefix
        return True

    def add_export(self, name: str) -> bool:
        """Add *name* as the first export entry unless already exported."""
        if name in self.exported:
            return False
        self.exports.insert(0, name)
        return True

    # -- Serialisation -----------------------------------------------------

    def render(self) -> str:
        if not self.exports and not self.has_export_block:
            return self.prefix
        block = "export {\n" + "".join(f"  {e},\n" for e in self.exports) + "}"
        if self.has_export_block:
            return self.prefix + block + self.suffix
        # No block to extend: append one after the existing content.
        head = self.prefix.rstrip("\n")
        return (head + "\n\n" if head else "") + block + "\n"


def add_to_barrel(text: str, import_line: str, binding: str) -> tuple[str, bool]:
    """Return ``(new_text, changed)`` with *binding* imported and exported."""
    barrel = Barrel.parse(text)
    imported = barrel.add_import(import_line, binding)
    exported = barrel.add_export(binding)
    if not (imported or exported):
        return text, False
    return barrel.render(), True

"""File operations executed by the scaffolder.

``FileOps`` is the only place that touches the project tree.  It offers the
three primitives a plan is built from:

- ``create_file``: write rendered content, optionally leaving existing files
  alone;
- ``insert_at``: replace the first match of an anchor regex with a rendered
  snippet (the snippet repeats the anchor where it must survive);
- ``add_to_barrel``: add an import/export pair to a barrel module unless
  already present.

All methods are synchronous; the generator runs them through
``asyncio.to_thread``.  In dry-run mode every method computes its outcome
against the current tree but writes nothing.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from .barrel import add_to_barrel
from .models import ActionStatus


class PatchError(Exception):
    """Raised when a patch anchor cannot be found in its target file."""

    def __init__(self, path: str, pattern: str) -> None:
        self.path = path
        self.pattern = pattern
        super().__init__(f"Pattern {pattern!r} not found in {path}")


class FileOps:
    """Create and patch files relative to a project root."""

    def __init__(self, root: str | Path, *, dry_run: bool = False) -> None:
        self.root = Path(root)
        self.dry_run = dry_run

    def resolve(self, rel_path: str) -> Path:
        return self.root / rel_path

    def exists(self, rel_path: str) -> bool:
        return self.resolve(rel_path).is_file()

    # -- Primitives --------------------------------------------------------

    def create_file(
        self,
        rel_path: str,
        content: str | Callable[[], str],
        *,
        skip_if_exists: bool = False,
    ) -> tuple[ActionStatus, str]:
        """Write *content* to *rel_path*, creating parent directories.

        *content* may be a callable; it is only called once the file is known
        to be written, so a skipped create never renders anything.

        Returns ``(SKIPPED, reason)`` when *skip_if_exists* is set and the file
        is already there, ``(CREATED, "")`` otherwise (existing files are
        overwritten).
        """
        target = self.resolve(rel_path)
        if skip_if_exists and target.exists():
            return ActionStatus.SKIPPED, f"File {rel_path} already exists."
        if callable(content):
            content = content()
        if not self.dry_run:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return ActionStatus.CREATED, ""

    def insert_at(self, rel_path: str, pattern: str, text: str) -> tuple[ActionStatus, str]:
        """Replace the first match of *pattern* in *rel_path* with *text*.

        Raises:
            FileNotFoundError: If the target file does not exist.
            PatchError: If *pattern* does not occur in the file.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        target = self.resolve(rel_path)
        original = target.read_text(encoding="utf-8")
        match = re.search(pattern, original)
        if match is None:
            raise PatchError(rel_path, pattern)
        updated = original[: match.start()] + text + original[match.end():]
        if not self.dry_run:
            target.write_text(updated, encoding="utf-8")
        return ActionStatus.APPLIED, ""

    def add_to_barrel(
        self, rel_path: str, import_line: str, binding: str
    ) -> tuple[ActionStatus, str]:
        """Import and export *binding* in the barrel at *rel_path* if absent.

        Raises:
            FileNotFoundError: If the barrel does not exist.
            UnicodeDecodeError: If the barrel is not valid UTF-8.
        """
        target = self.resolve(rel_path)
        original = target.read_text(encoding="utf-8")
        updated, changed = add_to_barrel(original, import_line, binding)
        if not changed:
            return ActionStatus.SKIPPED, f"{binding} is already exported from {rel_path}."
        if not self.dry_run:
            target.write_text(updated, encoding="utf-8")
        return ActionStatus.APPLIED, ""

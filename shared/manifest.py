"""
package.json access for the setup flow.

The manifest is read once, mutated in memory and written back explicitly
with the indentation and trailing newline it was read with.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from shared.errors import EnvironmentSetupError, ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

DEPENDENCY_SECTIONS = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
    "peerDependencies",
)

COMMITLINT_KEY = "commitlint"

_INDENT_RE = re.compile(r'^\{\s*?\n([ \t]+)\S', re.MULTILINE)


def _detect_indent(text: str) -> str:
    match = _INDENT_RE.search(text)
    return match.group(1) if match else "  "


class Manifest:
    """In-memory package.json with formatting hints for write-back."""

    def __init__(
        self,
        path: Path,
        data: Dict[str, Any],
        indent: str = "  ",
        trailing_newline: bool = True,
    ):
        self.path = Path(path)
        self.data = data
        self.indent = indent
        self.trailing_newline = trailing_newline
        self.dirty = False

    @classmethod
    def load(cls, path: Path) -> "Manifest":
        """Read and parse ``path``.

        Raises:
            EnvironmentSetupError: the file does not exist.
            ManifestError: the file is unreadable, not JSON or not an object.
        """
        path = Path(path)
        if not path.is_file():
            raise EnvironmentSetupError(
                f"No {path.name} found in {path.parent}.",
                suggestion="Run the command from your project root or pass --project-dir.",
            )
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Failed to read {path}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestError(
                f"Failed to read {path}: {e}",
                suggestion="Fix the JSON syntax and rerun.",
            ) from e
        if not isinstance(data, dict):
            raise ManifestError(f"Failed to read {path}: top-level value must be an object")

        logger.debug("Loaded manifest %s", path)
        return cls(
            path,
            data,
            indent=_detect_indent(text),
            trailing_newline=text.endswith("\n"),
        )

    def has_dependency(self, name: str) -> bool:
        """True when ``name`` is declared in any dependency section."""
        for section in DEPENDENCY_SECTIONS:
            deps = self.data.get(section)
            if isinstance(deps, dict) and deps.get(name):
                return True
        return False

    def missing(self, names: Iterable[str]) -> List[str]:
        """Names not yet declared, in order and without duplicates."""
        return [name for name in dict.fromkeys(names) if not self.has_dependency(name)]

    @property
    def commitlint_config(self) -> Optional[Any]:
        return self.data.get(COMMITLINT_KEY)

    @property
    def has_commitlint_config(self) -> bool:
        # An empty object still counts as a declared config.
        return self.commitlint_config not in (None, False, "", 0)

    def set_commitlint_config(self, block: Dict[str, Any]) -> None:
        self.data[COMMITLINT_KEY] = block
        self.dirty = True

    def dumps(self) -> str:
        text = json.dumps(self.data, indent=self.indent, ensure_ascii=False)
        return text + "\n" if self.trailing_newline else text

    def save(self) -> None:
        """Write the manifest back to disk.

        Raises:
            ManifestError: the file could not be written.
        """
        try:
            self.path.write_text(self.dumps(), encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"Failed to write {self.path}: {e}") from e
        self.dirty = False
        logger.debug("Wrote manifest %s", self.path)

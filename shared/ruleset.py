"""
The rule set published by the shared commitlint config package.

Static data only: the rules are enforced by commitlint itself. The setup
tool uses it to show what the shared config checks and to render a
standalone config file that extends the package.
"""

import json
from enum import IntEnum
from typing import Any, Dict, List, NamedTuple


class Severity(IntEnum):
    """commitlint rule levels."""
    DISABLED = 0
    WARNING = 1
    ERROR = 2


class Rule(NamedTuple):
    name: str
    severity: Severity
    applicable: str
    value: Any = None
    note: str = ""


EXTENDS = "@commitlint/config-conventional"

HELP_URL = "https://github.com/projectashik/cbashik-commitlint#commit-message-format"

HEADER_PATTERN = r"^(\w*)(?:\(([^\)]*)\))?: (.*)$"
HEADER_CORRESPONDENCE = ["type", "scope", "subject"]

COMMIT_TYPES: Dict[str, str] = {
    "feat": "A new feature",
    "fix": "A bug fix",
    "docs": "Documentation only changes",
    "style": "Changes that do not affect the meaning of the code",
    "refactor": "A code change that neither fixes a bug nor adds a feature",
    "perf": "A code change that improves performance",
    "test": "Adding missing tests or correcting existing tests",
    "build": "Changes that affect the build system or external dependencies",
    "ci": "Changes to CI configuration files and scripts",
    "chore": "Other changes that don't modify src or test files",
    "revert": "Reverts a previous commit",
    "hotfix": "Critical fixes that need immediate deployment",
    "release": "Release commits",
}

RULES: List[Rule] = [
    # Header
    Rule("header-max-length", Severity.ERROR, "always", 100),
    Rule("header-min-length", Severity.ERROR, "always", 10),
    # Type
    Rule("type-enum", Severity.ERROR, "always", list(COMMIT_TYPES)),
    Rule("type-case", Severity.ERROR, "always", "lower-case"),
    Rule("type-empty", Severity.ERROR, "never"),
    # Scope
    Rule("scope-case", Severity.ERROR, "always", "lower-case"),
    Rule("scope-max-length", Severity.ERROR, "always", 20),
    # Subject
    Rule(
        "subject-case",
        Severity.ERROR,
        "never",
        ["sentence-case", "start-case", "pascal-case", "upper-case"],
    ),
    Rule("subject-empty", Severity.ERROR, "never"),
    Rule("subject-full-stop", Severity.ERROR, "never", "."),
    Rule("subject-min-length", Severity.ERROR, "always", 3),
    Rule("subject-max-length", Severity.ERROR, "always", 80),
    # Body
    Rule("body-leading-blank", Severity.WARNING, "always"),
    Rule("body-max-line-length", Severity.ERROR, "always", 100),
    Rule("body-min-length", Severity.DISABLED, "always", 0, "Optional body"),
    # Footer
    Rule("footer-leading-blank", Severity.WARNING, "always"),
    Rule("footer-max-line-length", Severity.ERROR, "always", 100),
    # Trailers
    Rule("signed-off-by", Severity.DISABLED, "never", note="Not required"),
    Rule("trailer-exists", Severity.DISABLED, "never", note="Not required"),
]


def rule_config(rule: Rule) -> List[Any]:
    """commitlint's ``[level, applicable, value]`` triple for ``rule``."""
    entry: List[Any] = [int(rule.severity), rule.applicable]
    if rule.value is not None:
        entry.append(rule.value)
    return entry


def commitlint_block(shared_package: str) -> Dict[str, Any]:
    """Config object that defers every rule to ``shared_package``."""
    return {"extends": [shared_package]}


def render_config_module(shared_package: str) -> str:
    """Contents of a standalone ``commitlint.config.js``."""
    extends = json.dumps(commitlint_block(shared_package)["extends"])
    return f"module.exports = {{\n  extends: {extends},\n}};\n"

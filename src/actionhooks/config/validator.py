"""
config/validator.py: JSON Schema validation for action hook config files.

Usage:
    from actionhooks.config.validator import validate_config_file

    issues = validate_config_file(Path("~/.config/actionhooks/config.yml"))
    for issue in issues:
        print(issue)

Schema errors are reported with severity "error". Entries that are
schema-valid but can never match (blank key, no commands) are reported as
"warning".
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------

_SCHEMAS_DIR = Path(__file__).parent / "schemas"
_CONFIG_SCHEMA = "config.schema.json"


@dataclass
class ConfigIssue:
    """A single validation finding for a config file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "actionHooks[0]/key"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema(name: str = _CONFIG_SCHEMA) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _unmatchable_hooks(doc: dict[str, Any], file: Path) -> list[ConfigIssue]:
    issues: list[ConfigIssue] = []
    for index, entry in enumerate(doc.get("actionHooks") or []):
        if not isinstance(entry, dict):
            continue
        location = f"actionHooks[{index}]"
        if not str(entry.get("key") or "").strip():
            issues.append(
                ConfigIssue(
                    file=file,
                    message="key is blank; this hook will never match",
                    path=location,
                    severity="warning",
                )
            )
        elif not str(entry.get("before") or "").strip() and not str(entry.get("after") or "").strip():
            issues.append(
                ConfigIssue(
                    file=file,
                    message="neither before nor after is set; this hook will never match",
                    path=location,
                    severity="warning",
                )
            )
    return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_config_document(doc: Any, file: Path) -> list[ConfigIssue]:
    """Validate an already-parsed config document."""
    validator = Draft202012Validator(_load_schema())

    issues = [
        ConfigIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]
    if isinstance(doc, dict):
        issues.extend(_unmatchable_hooks(doc, file))
    return issues


def validate_config_file(config_path: Path, *, strict: bool = False) -> list[ConfigIssue]:
    """
    Validate a YAML config file against the config JSON Schema.

    Args:
        config_path: Path to the YAML file to validate.
        strict:      If ``True``, warnings are escalated to errors.

    Returns:
        A list of :class:`ConfigIssue` objects (empty on success).
    """
    try:
        with config_path.open() as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        return [ConfigIssue(file=config_path, message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return [ConfigIssue(file=config_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ConfigIssue(file=config_path, message="File is empty or contains only whitespace")
        ]

    issues = validate_config_document(raw, config_path)
    if strict:
        for issue in issues:
            if issue.severity == "warning":
                issue.severity = "error"

    logger.debug("Validated %s: %d issue(s)", config_path, len(issues))
    return issues

# Validation helpers for no-translate pattern configuration.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple
import re


_SAFE_LANGUAGE_ID = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")

# Shapes prone to catastrophic backtracking. Accepted, but reported.
_RISKY_INDICATORS = [
    (re.compile(r"(\.\*){2,}"), "Multiple .* in sequence"),
    (re.compile(r"(\.\+){2,}"), "Multiple .+ in sequence"),
    (re.compile(r"\(\.\*\)[+*]"), "Nested quantifiers with .*"),
    (re.compile(r"\(\.\+\)[+*]"), "Nested quantifiers with .+"),
]


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def is_safe_language_id(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    trimmed = value.strip()
    if not trimmed or ".." in trimmed:
        return False
    if "/" in trimmed or "\\" in trimmed:
        return False
    return bool(_SAFE_LANGUAGE_ID.match(trimmed))


def validate_regex(pattern: str) -> Tuple[bool, str]:
    """
    Check that a pattern compiles.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not pattern:
        return False, "Empty pattern"
    try:
        re.compile(pattern)
    except re.error as e:
        return False, f"Invalid regex syntax: {e}"
    return True, ""


def risky_regex_reason(pattern: str) -> Optional[str]:
    for indicator, message in _RISKY_INDICATORS:
        if indicator.search(pattern):
            return message
    return None


def validate_patterns(data: Any) -> ValidationResult:
    result = ValidationResult()
    if not data:
        result.errors.append("empty_patterns")
        return result
    if not isinstance(data, Mapping):
        result.errors.append("invalid_patterns")
        return result

    for language_id, raw_patterns in data.items():
        if not is_safe_language_id(language_id):
            result.errors.append(f"invalid_language:{language_id}")
            continue
        if isinstance(raw_patterns, (str, bytes)) or not isinstance(
            raw_patterns, (list, tuple, set, frozenset)
        ):
            result.errors.append(f"invalid_pattern_list:{language_id}")
            continue
        if not raw_patterns:
            result.warnings.append(f"empty_language:{language_id}")
            continue
        for idx, raw in enumerate(raw_patterns):
            if not isinstance(raw, str):
                result.errors.append(f"invalid_regex:{language_id}:{idx}")
                continue
            trimmed = raw.strip()
            if not trimmed:
                result.warnings.append(f"blank_pattern:{language_id}:{idx}")
                continue
            is_valid, _ = validate_regex(trimmed)
            if not is_valid:
                result.errors.append(f"invalid_regex:{language_id}:{idx}")
                continue
            if risky_regex_reason(trimmed):
                result.warnings.append(f"risky_regex:{language_id}:{idx}")
    return result

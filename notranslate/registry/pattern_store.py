"""Pattern Store for no-translate patterns (YAML-based).

Two layouts are supported:

- a single YAML file mapping language ids to pattern lists::

    fr:
      - "mon nom est (.+)"
    de:
      patterns:
        - "mein Name ist (.+)"

- a directory of ``<lang>.yaml`` files, each with a ``patterns`` list and an
  optional ``id`` overriding the file name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging
import os

import yaml

from notranslate.errors import ConfigurationError, UnknownLanguageError
from notranslate.patterns.pattern_index import NoTranslatePatternSet, build_pattern_set
from notranslate.patterns.validation import is_safe_language_id

logger = logging.getLogger(__name__)


@dataclass
class LanguageRef:
    language_id: str
    path: str
    count: int


class PatternStore:
    def __init__(self, base_path: str):
        self.base_path = base_path

    @property
    def is_directory(self) -> bool:
        return os.path.isdir(self.base_path)

    def _normalize_path(self, path: str) -> str:
        normalized = os.path.abspath(path)
        return normalized.lower() if os.name == "nt" else normalized

    def _is_within_base_dir(self, path: str) -> bool:
        base = self._normalize_path(self.base_path)
        target = self._normalize_path(path)
        if target == base:
            return True
        return target.startswith(base + os.sep)

    @staticmethod
    def _coerce_patterns(value: Any) -> List[str]:
        if isinstance(value, dict):
            value = value.get("patterns")
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None]
        raise ConfigurationError(f"Invalid pattern list: {value!r}")

    def _read_yaml(self, path: str) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid pattern YAML: {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid pattern YAML: {path}")
        return data

    def _language_id_for(self, path: str, data: Dict[str, Any]) -> Optional[str]:
        fallback_id = os.path.splitext(os.path.basename(path))[0]
        raw_id = str(data.get("id") or "").strip()
        if is_safe_language_id(raw_id):
            return raw_id
        if is_safe_language_id(fallback_id):
            return fallback_id
        return None

    def list_languages(self) -> List[LanguageRef]:
        result: List[LanguageRef] = []
        if not self.is_directory:
            if not os.path.isfile(self.base_path):
                return result
            for language_id, value in self._read_yaml(self.base_path).items():
                language_id = str(language_id)
                if not is_safe_language_id(language_id):
                    continue
                result.append(
                    LanguageRef(
                        language_id=language_id,
                        path=self.base_path,
                        count=len(self._coerce_patterns(value)),
                    )
                )
            return result

        for name in sorted(os.listdir(self.base_path)):
            if not name.endswith((".yaml", ".yml")):
                continue
            path = os.path.join(self.base_path, name)
            data = self._read_yaml(path)
            language_id = self._language_id_for(path, data)
            if not language_id:
                logger.warning(f"[PatternStore] Ignoring file with unsafe language id: {name}")
                continue
            result.append(
                LanguageRef(
                    language_id=language_id,
                    path=path,
                    count=len(self._coerce_patterns(data)),
                )
            )
        return result

    def resolve_language_path(self, language_id: str) -> Optional[str]:
        if not self.is_directory or not is_safe_language_id(language_id):
            return None
        for ext in (".yaml", ".yml"):
            candidate = os.path.join(self.base_path, f"{language_id}{ext}")
            if os.path.exists(candidate) and self._is_within_base_dir(candidate):
                return candidate
        for ref in self.list_languages():
            if ref.language_id == language_id:
                return ref.path
        return None

    def load_language(self, language_id: str) -> List[str]:
        if not self.is_directory:
            data = self._read_yaml(self.base_path) if os.path.isfile(self.base_path) else {}
            if language_id not in data:
                raise FileNotFoundError(f"Patterns not found: {language_id}")
            return self._coerce_patterns(data[language_id])
        path = self.resolve_language_path(language_id)
        if not path:
            raise FileNotFoundError(f"Patterns not found: {language_id}")
        return self._coerce_patterns(self._read_yaml(path))

    def load(self) -> Dict[str, List[str]]:
        if not os.path.exists(self.base_path):
            raise ConfigurationError(f"Pattern configuration not found: {self.base_path}")

        if not self.is_directory:
            data = self._read_yaml(self.base_path)
            return {
                str(language_id): self._coerce_patterns(value)
                for language_id, value in data.items()
            }

        patterns: Dict[str, List[str]] = {}
        for ref in self.list_languages():
            if ref.language_id in patterns:
                logger.warning(
                    f"[PatternStore] Duplicate language id {ref.language_id!r} in {ref.path}, merging"
                )
            patterns.setdefault(ref.language_id, []).extend(
                self._coerce_patterns(self._read_yaml(ref.path))
            )
        return patterns

    def build(self) -> NoTranslatePatternSet:
        return build_pattern_set(self.load())

    def build_language(self, language_id: str) -> NoTranslatePatternSet:
        """Build a set holding only ``language_id``; other languages are not compiled."""
        if not os.path.exists(self.base_path):
            raise ConfigurationError(f"Pattern configuration not found: {self.base_path}")
        try:
            patterns = self.load_language(language_id)
        except FileNotFoundError:
            raise UnknownLanguageError(language_id) from None
        return build_pattern_set({language_id: patterns})

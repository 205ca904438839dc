"""
Persistent list layout preferences ("cards" or "list") per list page.

Rendering code talks to ``ViewPreferenceStore``; the backing store can be
swapped (in-memory, JSON file, a user profile table) without touching it.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

import jsonschema

logger = logging.getLogger(__name__)

CARDS = 'cards'
LIST = 'list'
VIEW_TYPES = (CARDS, LIST)
DEFAULT_VIEW = CARDS

GUITARS_VIEW_KEY = 'guitars-view-preference'
MODELS_VIEW_KEY = 'models-view-preference'
MANUFACTURERS_VIEW_KEY = 'manufacturers-view-preference'
PRODUCT_LINES_VIEW_KEY = 'product-lines-view-preference'

MAX_KEY_LENGTH = 100

PREFERENCES_SCHEMA = {
    "type": "object",
    "propertyNames": {"type": "string", "minLength": 1, "maxLength": MAX_KEY_LENGTH},
    "additionalProperties": {"type": "string", "enum": list(VIEW_TYPES)}
}


def validate_view(view: str) -> str:
    if view not in VIEW_TYPES:
        raise ValueError(f"Invalid view '{view}'; expected one of {list(VIEW_TYPES)}")
    return view


def validate_key(key: str) -> str:
    if not isinstance(key, str) or not key.strip():
        raise ValueError("Preference key must be a non-empty string")
    if len(key) > MAX_KEY_LENGTH:
        raise ValueError(f"Preference key must be at most {MAX_KEY_LENGTH} characters")
    return key


class ViewPreferenceStore(ABC):
    """Typed get/set of the last chosen layout for a list page."""

    def __init__(self, default_view: str = DEFAULT_VIEW):
        self.default_view = validate_view(default_view)

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def _write(self, key: str, view: str) -> None:
        ...

    def get(self, key: str) -> str:
        """Stored view for key, or the default when missing or unreadable."""
        try:
            stored = self._read(key)
        except Exception as e:
            logger.warning(f"Failed to load view preference '{key}': {e}")
            return self.default_view
        if stored in VIEW_TYPES:
            return stored
        return self.default_view

    def set(self, key: str, view: str) -> str:
        """
        Remember the view for key.

        Raises:
            ValueError: If key is empty or too long, or view is not 'cards' or 'list'
        """
        validate_key(key)
        validate_view(view)
        try:
            self._write(key, view)
        except Exception as e:
            logger.warning(f"Failed to save view preference '{key}': {e}")
        return view


class MemoryPreferenceStore(ViewPreferenceStore):
    """Preferences held for the life of the process."""

    def __init__(self, default_view: str = DEFAULT_VIEW):
        super().__init__(default_view)
        self._values: Dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def _write(self, key: str, view: str) -> None:
        self._values[key] = view


class JsonFilePreferenceStore(ViewPreferenceStore):
    """Preferences kept in a small JSON document on disk."""

    def __init__(self, path, default_view: str = DEFAULT_VIEW):
        super().__init__(default_view)
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            document = json.load(f)
        jsonschema.validate(document, PREFERENCES_SCHEMA)
        return document

    def _read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def _write(self, key: str, view: str) -> None:
        try:
            document = self._load()
        except (json.JSONDecodeError, jsonschema.ValidationError) as e:
            logger.warning(f"Discarding unreadable preferences file {self.path}: {e}")
            document = {}
        document[key] = view
        jsonschema.validate(document, PREFERENCES_SCHEMA)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

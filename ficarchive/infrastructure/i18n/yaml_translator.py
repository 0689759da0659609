"""YAML message catalog adapter for the Translator port."""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from ficarchive.domain.shared.error import ConfigurationError
from ficarchive.domain.shared.port.translator import Translator

logger = logging.getLogger(__name__)

PACKAGED_LOCALES = Path(__file__).resolve().parents[2] / "locales"

_PLACEHOLDER = re.compile(r"%\{(\w+)\}")


def interpolate(message: str, params: dict[str, Any]) -> str:
    """Fill ``%{name}`` placeholders; unknown names are left untouched."""
    return _PLACEHOLDER.sub(
        lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0),
        message,
    )


class YamlTranslator(Translator):
    """Looks messages up in ``<locales_dir>/<locale>.yml``.

    The file is nested by dotted key under a top-level locale key::

        en:
          application:
            not_allowed: "Sorry, you're not allowed to do that."
    """

    def __init__(self, locale: str = "en", locales_dir: Path | str | None = None) -> None:
        self._locale = locale
        directory = Path(locales_dir) if locales_dir else PACKAGED_LOCALES
        self._messages = self._load(directory / f"{locale}.yml")

    def _load(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            raise ConfigurationError(f"Locale file not found: {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if self._locale not in data:
            raise ConfigurationError(f"Locale file {path} has no '{self._locale}' root key")
        return data[self._locale]

    def _lookup(self, key: str) -> str | None:
        node: Any = self._messages
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def translate(self, key: str, default: str | None = None, **params: Any) -> str:
        message = self._lookup(key)
        if message is None:
            if default is None:
                logger.warning("Missing translation: %s.%s", self._locale, key)
                return f"translation missing: {self._locale}.{key}"
            message = default
        return interpolate(message, params)

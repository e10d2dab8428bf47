"""
Error registry: maps FKS codes to the status, log level and client message
used when a FragekastenError escapes a request handler.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict

import yaml

from fragekasten.core.errors import CODE_PATTERN

logger = logging.getLogger(__name__)

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ErrorEntry:
    code: str
    status: int
    level: int
    message: str
    hint: str = ""


class RegistryValidationError(Exception):
    """Raised when registry.yaml has structural errors."""


class ErrorRegistry:
    def __init__(self) -> None:
        self._entries: Dict[str, ErrorEntry] = {}

    def load(self, path: str | None = None) -> None:
        if path is None:
            path = os.path.join(os.path.dirname(__file__), "registry.yaml")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        data.pop("schema_version", None)
        entries: Dict[str, ErrorEntry] = {}
        for code, raw in data.items():
            if not CODE_PATTERN.match(code):
                raise RegistryValidationError(f"Invalid code format: {code!r}")
            if not isinstance(raw, dict) or not {"status", "level", "message"} <= raw.keys():
                raise RegistryValidationError(f"{code}: needs status, level and message")
            if raw["level"] not in _LEVELS:
                raise RegistryValidationError(f"{code}: unknown level {raw['level']!r}")
            status = int(raw["status"])
            if not 400 <= status <= 599:
                raise RegistryValidationError(f"{code}: {status} is not an error status")

            entries[code] = ErrorEntry(
                code=code,
                status=status,
                level=getattr(logging, raw["level"]),
                message=raw["message"],
                hint=raw.get("hint", ""),
            )

        self._entries = entries
        logger.info("error_registry_loaded", extra={"count": len(entries)})

    def get(self, code: str) -> ErrorEntry | None:
        return self._entries.get(code)


error_registry = ErrorRegistry()

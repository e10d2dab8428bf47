"""
Error code system.

FragekastenError is the base exception for all structured errors.
Raise it with an error code from the registry, and the error handler
will produce a structured JSON response with a safe message.

Usage:
    from fragekasten.core.errors import FragekastenError
    raise FragekastenError("FKS-DB-001", detail="disk I/O error")
"""

from __future__ import annotations

import re

CODE_PATTERN = re.compile(r"^FKS-[A-Z]{2,6}-\d{3}$")


class FragekastenError(Exception):
    """Structured application error tied to the error registry.

    Args:
        code: Registry error code, e.g. "FKS-DB-001".
        detail: Internal-only detail message (never exposed to clients).
        context: Arbitrary key-value context for structured logging.
    """

    def __init__(
        self,
        code: str,
        detail: str | None = None,
        context: dict | None = None,
    ) -> None:
        if not CODE_PATTERN.match(code):
            raise ValueError(f"Invalid error code format: {code!r}")
        self.code = code
        self.detail = detail
        self.context = context or {}
        super().__init__(f"{code}: {detail}" if detail else code)

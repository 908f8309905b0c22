"""Base exception for linetally.

Only startup problems (bad root, bad configuration) and opt-in strict reads
raise these; per-file failures during a scan are logged and counted instead.
"""

from typing import Dict, Optional


class LineTallyError(Exception):
    """Base exception for all linetally errors.

    ``details`` holds the offending path, key or reason as strings; ``str()``
    appends them so the CLI can report the error on one line.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({details_str})"

"""
Custom logging filters for graphql_search.

This module provides a filter that masks application keys and other
credentials before a record reaches any handler.
"""

import logging
import re
from typing import Iterable, List, Optional, Pattern, Tuple

MASK = "***MASKED***"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    def __init__(self, secrets: Optional[Iterable[str]] = None) -> None:
        """
        Initialize sensitive data filter.

        Args:
            secrets: Literal values (e.g. a known application key) to mask
                wherever they appear
        """
        super().__init__()

        self.secrets = [s for s in (secrets or ()) if s]

        self.patterns: List[Tuple[Pattern[str], str]] = [
            # X-Application-Key header in dict or header-line form
            (
                re.compile(
                    r"""(x-application-key['"]?\s*[:=]\s*['"]?)([^\s'",}]+)""",
                    re.IGNORECASE,
                ),
                rf"\1{MASK}",
            ),
            # API keys and tokens
            (
                re.compile(
                    r"""((?:api|application)[_-]?key|token|secret)(['"]?\s*[:=]\s*['"]?)([a-zA-Z0-9+/=_-]{8,})""",
                    re.IGNORECASE,
                ),
                rf"\1\2{MASK}",
            ),
            (re.compile(r"(bearer\s+)([a-zA-Z0-9+/=._-]{8,})", re.IGNORECASE), rf"\1{MASK}"),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE), rf"\1:{MASK}@"),
        ]

    def mask(self, message: str) -> str:
        for secret in self.secrets:
            message = message.replace(secret, MASK)
        for pattern, replacement in self.patterns:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True

"""Exceptions raised by warikan.

Validation problems (bad amounts, months, payer names) are plain
ValueError; everything below is for failures outside the caller's input.
"""


class WarikanError(Exception):
    """Base class for warikan errors."""


class NotFoundError(WarikanError, LookupError):
    """A required ledger entity (e.g. the shared card account) is missing."""


class ConfigError(WarikanError):
    """Required configuration is missing or invalid."""


class ApiError(WarikanError):
    """An external API answered with a non-200 status."""

    def __init__(self, service: str, status_code: int, body: str) -> None:
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(f"{service} API Error ({status_code}): {body}")

from __future__ import annotations


class RepertoireError(Exception):
    """Base class for repertoire-sheets failures."""


class EmptyRepertoireError(RepertoireError, ValueError):
    """Raised when a full load recorded no songs at all."""


class ConfigError(RepertoireError, ValueError):
    pass


class SheetFetchError(RepertoireError):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"Could not fetch sheet source {source!r}: {message}")
        self.source = source

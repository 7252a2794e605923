"""Base error definitions for distpack packages."""

from typing import Any, Dict


class DistpackError(Exception):
    """Base exception for all distpack errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(DistpackError):
    """Configuration is invalid or missing."""
    pass


class ToolNotFoundError(DistpackError):
    """Required external tool is not available."""
    pass

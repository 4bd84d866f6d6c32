"""
Domain errors

Value strings never raise (malformed input degrades to the zero result).
These exceptions cover the file and configuration layer only.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(DomainError):
    """Parser configuration is invalid"""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(code="INVALID_CONFIG", message=message, details=details)


class EffectFileNotFoundError(DomainError):
    """Effect definition file doesn't exist"""
    def __init__(self, path: str):
        super().__init__(
            code="EFFECT_NOT_FOUND",
            message=f"Effect file '{path}' not found",
            details={"path": path}
        )


class EffectParseError(DomainError):
    """Effect definition is not UTF-8 text or not well-formed XML"""
    def __init__(self, source: str, reason: str):
        super().__init__(
            code="EFFECT_PARSE_ERROR",
            message=f"Failed to parse effect '{source}': {reason}",
            details={"source": source, "reason": reason}
        )


class NoEmittersError(DomainError):
    """Effect definition contains no <Emitter> element"""
    def __init__(self, source: str):
        super().__init__(
            code="NO_EMITTERS",
            message=f"Effect '{source}' contains no emitters",
            details={"source": source}
        )

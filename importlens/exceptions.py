"""Custom exceptions for importlens.

Malformed source never raises: it degrades to diagnostics. These exceptions
cover caller mistakes that extraction cannot recover from.
"""


class ImportLensError(Exception):
    """Base class for importlens errors.

    Attributes:
        message: Human-readable error description
        details: Dict with context for debugging (language ids, extensions)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedLanguageError(ImportLensError):
    """Raised when no grammar is registered for a language id or extension."""

    def __init__(self, language: str, supported: list[str] | None = None):
        supported = supported or []
        message = f"Language not supported: {language!r}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message, {"language": language, "supported": supported})
        self.language = language

"""Exceptions raised outside the network clients."""


class RendererError(Exception):
    """Base exception for manifest renderer errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SettingsError(RendererError):
    """Raised when renderer settings cannot be loaded or are invalid."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)


class ExportError(RendererError):
    """Raised when a content export file cannot be loaded."""

    pass

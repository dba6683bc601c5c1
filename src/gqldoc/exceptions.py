"""Custom exceptions for gqldoc."""


class GqldocError(Exception):
    """Base exception for all gqldoc errors."""

    pass


class ParseError(GqldocError):
    """Raised when schema files cannot be read or parsed."""

    pass


class ConfigError(GqldocError):
    """Raised when a configuration file is invalid."""

    pass


class RenderError(GqldocError):
    """Base class for failures while rendering a document."""

    pass


class MarkupConversionError(RenderError):
    """Raised when a description cannot be converted from Markdown."""

    pass


class AnchorLookupError(RenderError, KeyError):
    """Raised when a cross-reference names something that was never registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class SinkWriteError(RenderError):
    """Raised when the output destination refuses a write."""

    pass

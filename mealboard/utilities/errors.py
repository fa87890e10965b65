"""Exceptions raised by the dashboard export engine."""


class DashboardRenderError(Exception):
    """Base class for failures that abort a whole render."""


class AssetDecodeError(DashboardRenderError):
    """An embedded image payload could not be decoded as PNG or JPEG."""

    def __init__(self, message: str, mime_type: str = ""):
        super().__init__(message)
        self.mime_type = mime_type


class DocumentSerializationError(DashboardRenderError):
    """ReportLab failed to produce the final document bytes."""


class LayoutOverflowError(Exception):
    """Resolved column layout is taller than the printable body."""

    def __init__(self, overflow_pt: float):
        super().__init__(f"Column layout exceeds printable height by {overflow_pt:.2f}pt")
        self.overflow_pt = overflow_pt


__all__ = ['DashboardRenderError', 'AssetDecodeError', 'DocumentSerializationError', 'LayoutOverflowError']

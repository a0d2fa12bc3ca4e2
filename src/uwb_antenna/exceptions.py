"""
Exception types raised by the uwb_antenna pipelines.
"""


class UWBAntennaError(Exception):
    """Base class for all uwb_antenna errors."""


class ValidationError(UWBAntennaError, ValueError):
    """
    Raised when an antenna record or a pipeline parameter is malformed.

    Attributes:
        diagnostics: List of individual problems found during validation
    """

    def __init__(self, diagnostics):
        if isinstance(diagnostics, str):
            diagnostics = [diagnostics]
        self.diagnostics = list(diagnostics)
        super().__init__("Invalid antenna record: " + "; ".join(self.diagnostics))


class InsufficientDataError(UWBAntennaError, ValueError):
    """Raised when a computation needs more frequency samples than provided."""

class SenseiError(Exception):
    """Base class for every failure surfaced to the UI."""


class UnreadableInput(SenseiError):
    """The uploaded file could not be read or encoded."""


class AnalysisError(SenseiError):
    pass


class MissingInput(AnalysisError, ValueError):
    """Neither a file nor text was supplied."""


class ConfigurationError(AnalysisError):
    """No Gemini credential is configured."""


class ServiceError(AnalysisError):
    """The Gemini call failed or returned nothing."""


class FormatError(AnalysisError):
    """The reply is not a valid learning package."""


class RenderError(SenseiError):
    """A diagram engine rejected the chart text. Never leaves sensei.diagram."""

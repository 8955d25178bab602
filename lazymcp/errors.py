# ABOUTME: Exception hierarchy raised by the tool services.
# ABOUTME: The tool layer turns any ToolError into an error-flagged result for the caller.


class ToolError(Exception):
    """Base class for failures that are reported back to the tool caller."""


class MissingConfiguration(ToolError):
    """A required setting (e.g. the weather API key) is not configured."""


class MissingClientIP(ToolError):
    """No explicit location or IP was given and the caller's IP is unknown."""


class LocationResolutionFailed(ToolError):
    """The IP-based location lookup failed."""


class UpstreamFetchFailed(ToolError):
    """The request to a third-party API failed at the transport level."""


class UpstreamStatusFailed(ToolError):
    """A third-party API answered with a non-success status."""


class MalformedUpstreamPayload(ToolError):
    """A third-party API answered with a body that could not be parsed."""


class DomainError(ToolError):
    """An arithmetic operation is undefined for its inputs."""


class InvalidExpression(ToolError):
    """An expression could not be parsed or uses something unsupported."""

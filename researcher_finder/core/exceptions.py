"""
Error taxonomy for the service.

Only external-call failures are expected and recoverable. Request
validation failures are reported as HTTP 400 by the API layer, and anything
else surfaces as HTTP 500.
"""

from typing import Iterable, Optional


class ResearcherFinderError(Exception):
    """Base class for all service errors."""


class ConfigurationMissing(ResearcherFinderError):
    """A required external-service configuration value is absent."""

    def __init__(self, missing_keys: Iterable[str]):
        self.missing_keys = list(missing_keys)
        super().__init__(
            "Missing required configuration: " + ", ".join(self.missing_keys)
        )


class UpstreamCallFailure(ResearcherFinderError):
    """An external call (translate/embed/search/justify) failed or timed out."""

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        self.step = step
        self.cause = cause
        detail = f"{type(cause).__name__}: {cause}" if cause else "no result"
        super().__init__(f"{step} call failed ({detail})")


class MalformedUpstreamResponse(ResearcherFinderError):
    """Generated text did not contain the expected JSON structure."""

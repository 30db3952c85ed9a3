"""
Error types raised at the I/O boundaries of the assistant.

Only the generation call and the document export can fail. Missing
preferences or a missing itinerary are normal states, not errors.
"""


class TravelAssistantError(Exception):
    """Base class for assistant errors."""


class BackendError(TravelAssistantError):
    """The language-generation call failed, timed out or returned nothing usable."""


class ExportError(TravelAssistantError):
    """The rendered document could not be encoded."""

    def __init__(self, message: str = "document export failed"):
        super().__init__(message)


class TurnInProgressError(TravelAssistantError):
    """A reply is still being generated for this session."""

"""Error taxonomy for the interviewer service."""


class InterviewerError(Exception):
    """Base class for interviewer errors."""


class UpstreamAuthError(InterviewerError):
    """The model provider rejected our credentials."""


class UpstreamTransportError(InterviewerError):
    """The model call failed before a usable response came back."""


class ServiceUnavailable(InterviewerError):
    """A turn could not be completed. Carries no upstream detail."""

    public_message = "Failed to get response from AI service"

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)

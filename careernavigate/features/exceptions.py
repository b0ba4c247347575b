"""Exceptions raised by the feature panels."""


class FeatureError(Exception):
    """Base exception for feature-level errors."""

    pass


class MissingInputError(FeatureError):
    """Raised before any request when required user input is absent.

    Examples:
    - Empty chat message
    - Cover letter without job title or company
    - Networking note without a company name
    """

    pass


class ConversationBusyError(FeatureError):
    """Raised when a request is submitted while another one is in flight."""

    pass


class AnalysisError(FeatureError):
    """Raised when a resume analysis cannot produce feedback.

    The resume record stays stored with ``feedback=None``; ``resume_id``
    identifies it.
    """

    def __init__(self, message: str, resume_id: str = ""):
        super().__init__(message)
        self.resume_id = resume_id

"""
Error types shared by the services, repositories and routers
"""


class TextGenerationError(Exception):
    """Base class for failures of the text-generation provider."""


class RateLimited(TextGenerationError):
    """Provider signalled throttling; worth retrying after a wait."""


class UpstreamError(TextGenerationError):
    """Network failure, non-success status or missing provider configuration."""


class MalformedResponse(TextGenerationError):
    """Provider replied but the reply could not be read as plain text."""


class SessionNotFound(Exception):
    def __init__(self, session_id: str):
        super().__init__(f"No active session found for '{session_id}'")
        self.session_id = session_id


class InsufficientData(Exception):
    """No canvas answers have been recorded yet."""


class DuplicateEmail(Exception):
    pass


class UserNotFound(Exception):
    pass


class InvalidCredential(Exception):
    pass


class InvalidToken(Exception):
    """Token is expired, malformed or carries a bad signature."""

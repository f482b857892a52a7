"""
Error taxonomy for lease signing.

Client side (signing session):
- SessionLoadError - session fetch failed, only closing is possible
- IncompleteFieldsError / ConsentRequiredError / MissingSignatureError - local validation
- SubmissionError - server rejected the submission, state is kept for a retry

Server side:
- SignRequestError - rendered as {"message": ...} with its status code
"""


class SigningError(Exception):
    """Base exception for signing errors. `message` is shown to the signer."""

    default_message = "Signing failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class SessionLoadError(SigningError):
    default_message = "Unable to load signing session"


class IncompleteFieldsError(SigningError):
    default_message = "Please complete all signature and initial fields."


class ConsentRequiredError(SigningError):
    default_message = "Please agree to sign electronically."


class MissingSignatureError(SigningError):
    default_message = "Please provide your signature."


class SubmissionError(SigningError):
    default_message = "Failed to submit signature"


class SubmissionInProgressError(SigningError):
    default_message = "Submission already in progress"


class SignRequestError(Exception):
    """Raised by the signing workflow; mapped to an HTTP response."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

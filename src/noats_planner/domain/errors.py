"""Error taxonomy shared by services and routes."""


class PlannerError(Exception):
    """Base error carrying the HTTP mapping for a failed request."""

    status_code: int = 500
    error: str = "Server error"
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict[str, str]:
        """Return the uniform error body sent to clients."""
        return {"error": self.error, "message": self.message}


class InvalidInputError(PlannerError):
    """Request is missing content needed to do any work."""

    status_code = 400
    error = "Invalid input"
    default_message = "The request is missing required information."


class UnsupportedInputError(PlannerError):
    """Request content is of a kind we cannot process."""

    status_code = 415
    error = "Unsupported input"
    default_message = "This kind of upload is not supported."


class UpstreamFormatError(PlannerError):
    """Model reply could not be parsed as the expected JSON."""

    status_code = 502
    default_message = (
        "Our assistant returned an unexpected response. Please try again."
    )


class UpstreamUnavailableError(PlannerError):
    """Model provider failed, timed out, or returned nothing."""

    status_code = 503
    default_message = (
        "Our assistant is temporarily unavailable. Please try again shortly."
    )

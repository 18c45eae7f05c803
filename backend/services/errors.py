"""Error kinds surfaced to API callers.

Every error carries the HTTP status it maps to and a message that is safe
to show to the client.
"""


class AnalysisError(RuntimeError):
    """Base class for failures of a single analysis request."""

    status_code: int = 500
    default_message: str = "Analysis failed. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self, include_diagnostics: bool = False) -> dict:
        return {"error": self.message}


class MissingInputError(AnalysisError):
    """Raised when the resume or job description is absent or blank."""

    status_code = 400

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(
            "Resume and job description are required. "
            f"Missing: {', '.join(self.missing_fields)}"
        )


class InputTooLongError(AnalysisError):
    status_code = 400

    def __init__(self, field: str, limit: int) -> None:
        self.field = field
        self.limit = limit
        super().__init__(f"{field} too long (max {limit} chars)")


class MissingCredentialError(AnalysisError):
    """Raised before any outbound call when no provider key is configured."""

    status_code = 500
    default_message = (
        "API key not configured. Please set GEMINI_API_KEY in the environment."
    )


class ProviderHTTPError(AnalysisError):
    """Raised when the model provider rejects or fails the request."""

    status_code = 500
    default_message = "Gemini API error"

    def __init__(self, message: str | None = None, upstream_status: int | None = None) -> None:
        self.upstream_status = upstream_status
        super().__init__(message)


class EmptyProviderContentError(AnalysisError):
    status_code = 500
    default_message = "The AI service returned an empty response. Please try again."


class RecoveryFailure(AnalysisError):
    """Raised when no JSON object could be recovered from the model output.

    ``excerpt`` holds a bounded prefix of the cleaned output, for diagnostics only.
    """

    status_code = 500
    default_message = "Failed to parse AI response. Please try again."

    def __init__(self, excerpt: str = "", message: str | None = None) -> None:
        self.excerpt = excerpt
        super().__init__(message)

    def to_payload(self, include_diagnostics: bool = False) -> dict:
        payload = super().to_payload(include_diagnostics)
        if include_diagnostics:
            payload["rawExcerpt"] = self.excerpt
        return payload


class ResultShapeError(AnalysisError):
    """Raised in strict mode when the parsed result is not an AnalysisResult."""

    status_code = 500
    default_message = "AI response did not match the expected analysis format."

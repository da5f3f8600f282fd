"""
Error types for the image-to-prompt assistant.

Every error raised by the intake and model-call layers derives from
ImageAssistantError and carries a short user-facing message plus the HTTP
status the web layer should answer with.

Failures raised by the hosted-model SDK are remapped by classify_error()
into the TransportError family. Classification is case-insensitive substring
matching on the lower-level error text in a fixed priority order, so it
inherits the instability of third-party error wording: a provider changing
its messages silently shifts errors into the generic bucket.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

ANALYSIS = "analysis"
GENERATION = "generation"

# Raw messages longer than this are never shown to the user.
MAX_CLEAN_MESSAGE_LENGTH = 200


class ImageAssistantError(Exception):
    """Base exception for all project-specific errors."""

    status_code = 500
    default_message = "An unknown error occurred."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class MissingCredentialError(ImageAssistantError):
    status_code = 400
    default_message = "API key is missing."


class InvalidImageEncodingError(ImageAssistantError):
    status_code = 400
    default_message = "Invalid image data format."


class UnsupportedImageTypeError(ImageAssistantError):
    status_code = 400
    default_message = "Invalid file type. Please upload a PNG, JPG, or WEBP image."


class EmptyImageError(ImageAssistantError):
    status_code = 400
    default_message = "Uploaded image is empty."


class ImageTooLargeError(ImageAssistantError):
    """Raised when an upload exceeds the hard size limit.

    Attributes:
        size: Size of the rejected upload in bytes.
    """

    status_code = 413

    def __init__(self, message: str | None = None, *, size: int = 0):
        super().__init__(message)
        self.size = size


class EmptyPromptError(ImageAssistantError):
    status_code = 400
    default_message = "Prompt is required."


# ---------------------------------------------------------------------------
# Model output errors
# ---------------------------------------------------------------------------


class MalformedModelOutputError(ImageAssistantError):
    status_code = 502
    default_message = "The AI model returned an invalid response format. Please try again."


class EmptyModelOutputError(ImageAssistantError):
    status_code = 502
    default_message = "The model returned an empty response."


class NoImageReturnedError(ImageAssistantError):
    status_code = 502
    default_message = "The model did not return any images."


class EmptyImagePayloadError(ImageAssistantError):
    status_code = 502
    default_message = "Invalid image data received from the model."


# ---------------------------------------------------------------------------
# Classified transport errors
# ---------------------------------------------------------------------------


class TransportError(ImageAssistantError):
    """A failure raised by the hosted-model call, after classification.

    Attributes:
        operation: ANALYSIS or GENERATION.
        detail: The raw lower-level error text, kept for diagnostics only.
    """

    messages: dict[str, str] = {}

    def __init__(self, message: str | None = None, *, operation: str = ANALYSIS, detail: str = ""):
        super().__init__(message or self.messages.get(operation))
        self.operation = operation
        self.detail = detail


class UnauthorizedError(TransportError):
    status_code = 401
    default_message = "Invalid API key. Please check your Gemini API key in Advanced Settings."


class RateLimitedError(TransportError):
    status_code = 429
    default_message = "API rate limit exceeded. Please wait a moment and try again."


class NetworkFailureError(TransportError):
    status_code = 502
    default_message = "Network error. Please check your internet connection and try again."


class RequestTimeoutError(TransportError):
    status_code = 504
    messages = {
        ANALYSIS: "Request timed out. The image analysis is taking too long. Please try with a smaller image.",
        GENERATION: "Request timed out. Image generation is taking too long. Please try again.",
    }


class OversizedInputError(TransportError):
    status_code = 413
    messages = {
        ANALYSIS: "Image is too large. Please try with a smaller image (under 4MB).",
        GENERATION: "The prompt is too long. Please try a shorter description.",
    }


class ContentPolicyRejectedError(TransportError):
    status_code = 422
    default_message = "The prompt was blocked by content policy. Please try a different description."


class UnknownTransportError(TransportError):
    status_code = 500
    messages = {
        ANALYSIS: "Failed to analyze the image. Please try again or contact support if the problem persists.",
        GENERATION: "Failed to generate the image. Please try again or contact support if the problem persists.",
    }


_UNAUTHORIZED_KEYWORDS = ("api key", "unauthorized", "403", "401")
_RATE_LIMIT_KEYWORDS = ("quota", "rate limit", "429")
_NETWORK_KEYWORDS = ("network", "fetch", "connection")
_TIMEOUT_KEYWORDS = ("timeout", "timed out")
_CONTENT_POLICY_KEYWORDS = ("content policy", "safety", "blocked")

_PROGRAMMING_ERRORS = (TypeError, AttributeError, KeyError, IndexError)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _is_oversized(text: str, operation: str) -> bool:
    if operation == GENERATION:
        return "prompt" in text and "too long" in text
    return "image" in text and "size" in text


def _keyword_match(text: str, operation: str) -> type[TransportError] | None:
    if _contains_any(text, _UNAUTHORIZED_KEYWORDS):
        return UnauthorizedError
    if _contains_any(text, _RATE_LIMIT_KEYWORDS):
        return RateLimitedError
    if _contains_any(text, _NETWORK_KEYWORDS):
        return NetworkFailureError
    if _contains_any(text, _TIMEOUT_KEYWORDS):
        return RequestTimeoutError
    if operation == GENERATION and _contains_any(text, _CONTENT_POLICY_KEYWORDS):
        return ContentPolicyRejectedError
    if _is_oversized(text, operation):
        return OversizedInputError
    return None


def _is_clean_message(exc: BaseException, detail: str) -> bool:
    if not detail or isinstance(exc, _PROGRAMMING_ERRORS):
        return False
    return (
        len(detail) < MAX_CLEAN_MESSAGE_LENGTH
        and "stack" not in detail.lower()
        and "TypeError" not in detail
    )


def classify_error(exc: BaseException, operation: str = ANALYSIS) -> TransportError:
    """Map a raised SDK/transport failure to a user-facing TransportError.

    httpx timeout and network exception types are honored before keyword
    matching; after that the first keyword rule that matches wins. Unmatched
    errors keep their own message when it is short and clean, otherwise the
    per-operation generic message is used.
    """
    if isinstance(exc, TransportError):
        return exc

    detail = str(exc)
    if isinstance(exc, httpx.TimeoutException):
        error_cls: type[TransportError] | None = RequestTimeoutError
    elif isinstance(exc, httpx.NetworkError):
        error_cls = NetworkFailureError
    else:
        error_cls = _keyword_match(detail.lower(), operation)

    if error_cls is not None:
        logger.debug(f"Classified {operation} error as {error_cls.__name__}: {detail}")
        return error_cls(operation=operation, detail=detail)

    message = detail if _is_clean_message(exc, detail) else None
    return UnknownTransportError(message, operation=operation, detail=detail)

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Errors raised by `RestApiCaller` while executing a REST call.

Every error carries the context a caller needs to decide whether to retry,
log or surface the failure. Branch on the exception class (or on `kind`).
Transport level failures (timeouts, connection errors, cancellation) are
not part of this hierarchy and reach the caller exactly as the transport raised them.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from rest_requests.http_util import HTTPStatusCode, StatusCode

if TYPE_CHECKING:
    from rest_requests.transport.base import HTTPResponseLike


class RestErrorKind(str, Enum):
    BAD_RESPONSE = "bad_response"
    INVALID_MIME_TYPE = "invalid_mime_type"
    INVALID_QUERY_PARAMETER = "invalid_query_parameter"
    MALFORMED_RESPONSE = "malformed_response"
    FAILED_REST_CALL = "failed_rest_call"
    UNEXPECTED_HTTP_STATUS_CODE = "unexpected_http_status_code"


class RestError(Exception):
    """Base class of every failure reported by the dispatch pipeline"""

    kind: RestErrorKind

    @property
    def recovery_suggestion(self) -> Optional[str]:
        return None


def _response_url(response: Any) -> str:
    url = getattr(response, "url", None)
    return str(url) if url is not None else "n/a"


class BadResponseError(RestError):
    """The transport returned something that is not a structured HTTP response"""

    kind = RestErrorKind.BAD_RESPONSE

    def __init__(self, response: Any, data: bytes):
        self.response = response
        self.data = data
        super().__init__("Received an unsupported or invalid response from the server.")

    def __repr__(self) -> str:
        return "BadResponseError(url=%s, size=%d)" % (
            _response_url(self.response),
            len(self.data),
        )


class InvalidMimeTypeError(RestError):
    """The response `Content-Type` is missing or not a known MIME type"""

    kind = RestErrorKind.INVALID_MIME_TYPE

    def __init__(self, mime_type: Optional[str]):
        self.mime_type = mime_type
        super().__init__(f"Unexpected content type: {mime_type or 'unknown'}.")

    def __repr__(self) -> str:
        return f"InvalidMimeTypeError(mime={self.mime_type!r})"


class InvalidQueryParameterError(RestError):
    """Query parameters could not be encoded into a valid URL"""

    kind = RestErrorKind.INVALID_QUERY_PARAMETER

    def __init__(self) -> None:
        super().__init__("Failed to encode query parameters.")

    @property
    def recovery_suggestion(self) -> Optional[str]:
        return "Verify parameter values and percent-encode reserved characters."

    def __repr__(self) -> str:
        return "InvalidQueryParameterError()"


class MalformedResponseError(RestError):
    """A response body was present but the deserializer failed on it"""

    kind = RestErrorKind.MALFORMED_RESPONSE

    def __init__(
        self, response: "HTTPResponseLike", data: bytes, underlying: BaseException
    ):
        self.response = response
        self.data = data
        self.underlying = underlying
        super().__init__(f"Failed to decode response: {underlying}")

    @property
    def recovery_suggestion(self) -> Optional[str]:
        return (
            "Confirm the response schema matches the expected model "
            "and enable network tracing to inspect the payload."
        )

    def __repr__(self) -> str:
        return "MalformedResponseError(status=%s, size=%d, underlying=%r)" % (
            self.response.status_code,
            len(self.data),
            self.underlying,
        )


class FailedRestCallError(RestError):
    """The server answered with a non success status"""

    kind = RestErrorKind.FAILED_REST_CALL

    def __init__(
        self,
        response: "HTTPResponseLike",
        status: StatusCode,
        error_payload: Any = None,
    ):
        self.response = response
        self.status = status
        self.error_payload = error_payload
        super().__init__(f"Server returned an error (status: {int(status)}).")

    def __repr__(self) -> str:
        return "FailedRestCallError(status=%d, url=%s, payload=%r)" % (
            self.status,
            _response_url(self.response),
            self.error_payload,
        )


class UnexpectedHttpStatusCodeError(RestError):
    """The status code is not one of `RestOptions.expected_status_codes`"""

    kind = RestErrorKind.UNEXPECTED_HTTP_STATUS_CODE

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Unexpected HTTP status code: {status_code}.")

    @property
    def recovery_suggestion(self) -> Optional[str]:
        return "Add the status code to RestOptions.expected_status_codes if it is legitimate."

    def __repr__(self) -> str:
        return f"UnexpectedHttpStatusCodeError({self.status_code})"


RETRYABLE_STATUS_CODES = frozenset(
    {
        HTTPStatusCode.REQUEST_TIMEOUT,
        HTTPStatusCode.TOO_MANY_REQUESTS,
    }
)


def is_retryable(error: BaseException) -> bool:
    """
    Classify an error raised by a REST call for caller side retries.
    Only server errors, 408 and 429 answers are worth another attempt.
    """
    if isinstance(error, FailedRestCallError):
        return error.status >= 500 or error.status in RETRYABLE_STATUS_CODES
    return False


__all__ = [
    "RestErrorKind",
    "RestError",
    "BadResponseError",
    "InvalidMimeTypeError",
    "InvalidQueryParameterError",
    "MalformedResponseError",
    "FailedRestCallError",
    "UnexpectedHttpStatusCodeError",
    "RETRYABLE_STATUS_CODES",
    "is_retryable",
]

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from enum import Enum
from http import HTTPStatus
from typing import Union

HTTPStatusCode = HTTPStatus
"""
Alias for the standard library status table.
"""

StatusCode = Union[HTTPStatusCode, int]
"""
Status of a call. Codes missing from the status table (499, 520, ...) stay plain ints.
"""


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class MimeType(str, Enum):
    APPLICATION_JSON = "application/json"
    TEXT_PLAIN = "text/plain"
    APPLICATION_OCTET_STREAM = "application/octet-stream"
    APPLICATION_PROBLEM_JSON = "application/problem+json"
    VOID = "*/*"


class HTTPHeaderKeys(str, Enum):
    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"
    AUTHORIZATION = "Authorization"
    COOKIE = "Cookie"
    SET_COOKIE = "Set-Cookie"


class StatusType(str, Enum):
    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECTION = "redirection"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


def status_type(status: int) -> StatusType:
    """
    Classify a status code by its hundreds digit.
    """
    if 100 <= status < 200:
        return StatusType.INFORMATIONAL
    if 200 <= status < 300:
        return StatusType.SUCCESS
    if 300 <= status < 400:
        return StatusType.REDIRECTION
    if 400 <= status < 500:
        return StatusType.CLIENT_ERROR
    if 500 <= status < 600:
        return StatusType.SERVER_ERROR
    raise ValueError(f"{status} is not a valid HTTP status code")


def is_success(status: int) -> bool:
    return status_type(status) is StatusType.SUCCESS


def is_client_error(status: int) -> bool:
    return status_type(status) is StatusType.CLIENT_ERROR


def is_server_error(status: int) -> bool:
    return status_type(status) is StatusType.SERVER_ERROR


def to_status_code(status: int) -> StatusCode:
    """
    Map a raw status code to the status table.
    Codes in the 100-599 range that the table does not know are returned unchanged,
    anything outside that range raises `ValueError`.
    """
    status_type(status)
    try:
        return HTTPStatusCode(status)
    except ValueError:
        return status


def parse_mime_type(content_type: str | None) -> MimeType | None:
    """
    Resolve a `Content-Type` header value against the known MIME table.
    Parameters such as `; charset=utf-8` are ignored.
    """
    if content_type is None:
        return None
    essence = content_type.split(";", 1)[0].strip().lower()
    try:
        return MimeType(essence)
    except ValueError:
        return None


__all__ = [
    "HTTPMethod",
    "HTTPStatusCode",
    "StatusCode",
    "HTTPHeaderKeys",
    "MimeType",
    "StatusType",
    "status_type",
    "is_success",
    "is_client_error",
    "is_server_error",
    "to_status_code",
    "parse_mime_type",
]

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import json
import logging
from typing import Iterable, Optional

from rest_requests.http_util import HTTPHeaderKeys
from rest_requests.interceptors.base import URLRequestInterceptor
from rest_requests.transport.base import RestRequest, RestResponse

logger = logging.getLogger(__name__)


def pretty_printed_json(data: Optional[bytes]) -> Optional[str]:
    """
    Format a body as indented JSON.
    Returns None for an empty body and the raw debug representation when the body is not JSON.
    """
    if not data:
        return None
    try:
        obj = json.loads(data)
    except (ValueError, UnicodeDecodeError):
        return repr(data)
    return json.dumps(obj, indent=2, ensure_ascii=False)


def _pretty_headers(headers: Iterable[tuple[str, str]]) -> str:
    grouped: dict[str, list[str]] = {}
    for key, value in headers:
        grouped.setdefault(key, []).append(value)
    return json.dumps(
        {k: v[0] if len(v) == 1 else v for k, v in grouped.items()},
        indent=2,
        ensure_ascii=False,
    )


class LogNetworkInterceptor(URLRequestInterceptor):
    """
    Logs every request and response.

    Without network tracing only the method, URL and status are logged at INFO.
    With tracing, headers, cookies and the body are logged at DEBUG as well.
    """

    NO_BODY = "none"

    def __init__(self, enable_network_tracing: bool = False):
        self.enable_network_tracing = enable_network_tracing

    def _tracing(self) -> bool:
        return self.enable_network_tracing and logger.isEnabledFor(logging.DEBUG)

    def invoke_request(self, request: RestRequest) -> RestRequest:
        logger.info("Will invoke request: %s %s", request.method, request.url)

        if self._tracing():
            logger.debug(
                "HTTP request headers: %s", _pretty_headers(request.headers.multi_items())
            )
            logger.debug(
                "HTTP request cookies: %s",
                request.headers.get(HTTPHeaderKeys.COOKIE.value, self.NO_BODY),
            )
            logger.debug(
                "HTTP request body: %s", pretty_printed_json(request.body) or self.NO_BODY
            )
        return request

    def receive_response(self, data: bytes, response: RestResponse) -> None:
        logger.info("Did receive response: %s -> %s", response.url, response.status_code)

        if self._tracing():
            logger.debug(
                "HTTP response headers: %s",
                _pretty_headers(response.headers.multi_items()),
            )
            logger.debug(
                "HTTP response cookies: %s",
                response.headers.get_list(HTTPHeaderKeys.SET_COOKIE.value) or self.NO_BODY,
            )
            logger.debug("HTTP response body: %s", pretty_printed_json(data) or self.NO_BODY)

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import base64

from rest_requests.http_util import HTTPHeaderKeys
from rest_requests.transport.base import RestRequest


class URLRequestAuthorizer:
    """Base class for objects stamping authentication material onto a request"""

    def configure_authorization_header(self, request: RestRequest) -> RestRequest:
        raise NotImplementedError


class NoneAuthorizer(URLRequestAuthorizer):

    def configure_authorization_header(self, request: RestRequest) -> RestRequest:
        return request


class BasicRequestAuthorizer(URLRequestAuthorizer):
    """Basic authentication, the header value is computed once at construction"""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

        credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
        self._header_value = f"Basic {credentials}"

    @property
    def header_value(self) -> str:
        return self._header_value

    def configure_authorization_header(self, request: RestRequest) -> RestRequest:
        request.set_header(HTTPHeaderKeys.AUTHORIZATION.value, self._header_value)
        return request


class BearerRequestAuthorizer(URLRequestAuthorizer):
    """
    Bearer authentication.
    `token` is read on every call, assign a new one to rotate it.
    """

    def __init__(self, token: str):
        self.token = token

    def configure_authorization_header(self, request: RestRequest) -> RestRequest:
        request.set_header(HTTPHeaderKeys.AUTHORIZATION.value, f"Bearer {self.token}")
        return request

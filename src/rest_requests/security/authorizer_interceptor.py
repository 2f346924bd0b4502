# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from rest_requests.interceptors.base import URLRequestInterceptor
from rest_requests.security.authorizers import URLRequestAuthorizer
from rest_requests.transport.base import RestRequest


class AuthorizerInterceptor(URLRequestInterceptor):

    def __init__(self, authorizer: URLRequestAuthorizer):
        self.authorizer = authorizer

    def invoke_request(self, request: RestRequest) -> RestRequest:
        return self.authorizer.configure_authorization_header(request)

    def __repr__(self) -> str:
        return f"AuthorizerInterceptor({type(self.authorizer).__name__})"

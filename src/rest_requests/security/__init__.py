# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Request authorizers and TLS pinning.

`PublicKeyServerPinning` lives in `rest_requests.security.public_key_pinning`
and needs the `pinning` extra.
"""

from .authorizer_interceptor import AuthorizerInterceptor
from .authorizers import (
    BasicRequestAuthorizer,
    BearerRequestAuthorizer,
    NoneAuthorizer,
    URLRequestAuthorizer,
)
from .pinning import ca_pinning_ssl_context

__all__ = [
    "AuthorizerInterceptor",
    "BasicRequestAuthorizer",
    "BearerRequestAuthorizer",
    "NoneAuthorizer",
    "URLRequestAuthorizer",
    "ca_pinning_ssl_context",
]

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Request interceptors.

`TracePropagationInterceptor` lives in `rest_requests.interceptors.otel` and
needs the `otel` extra.
"""

from .base import URLRequestInterceptor
from .log_network import LogNetworkInterceptor, pretty_printed_json

__all__ = [
    "URLRequestInterceptor",
    "LogNetworkInterceptor",
    "pretty_printed_json",
]

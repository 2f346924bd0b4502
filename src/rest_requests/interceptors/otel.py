# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from opentelemetry import trace
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from rest_requests.interceptors.base import URLRequestInterceptor
from rest_requests.transport.base import RestRequest


class TracePropagationInterceptor(URLRequestInterceptor):
    """Propagates the current span to the server through W3C trace context headers"""

    def __init__(self) -> None:
        self._propagator = TraceContextTextMapPropagator()

    def invoke_request(self, request: RestRequest) -> RestRequest:

        span = trace.get_current_span()

        if span.get_span_context().is_valid:
            headers: dict[str, str] = {}
            self._propagator.inject(headers)

            for key, value in headers.items():
                request.set_header(key, value)

        return request

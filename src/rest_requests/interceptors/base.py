# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from rest_requests.transport.base import RestRequest, RestResponse


class URLRequestInterceptor:
    """
    Hook pair around every request sent by a `RestApiCaller`.

    `invoke_request` runs before sending, in registration order, and may mutate
    the draft request. `receive_response` runs after receiving, in reverse
    registration order, and only observes.
    """

    def invoke_request(self, request: RestRequest) -> RestRequest:
        raise NotImplementedError

    def receive_response(self, data: bytes, response: RestResponse) -> None:
        """Does nothing unless overridden"""
        return None

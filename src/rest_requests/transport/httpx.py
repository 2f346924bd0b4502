# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import ssl
import time
from http.cookiejar import CookieJar
from typing import Awaitable, Callable, Optional

import httpx

from rest_requests.config import RestSettings, load_rest_settings
from rest_requests.transport.base import RestRequest, RestResponse, Transport

logger = logging.getLogger(__name__)


class HTTPXTransport(Transport):
    """
    Transport backed by a long lived `httpx.AsyncClient`.

    Connection pooling, TLS and redirects are handled by httpx.
    httpx exceptions (timeouts, network errors, cancellation) propagate unchanged.
    """

    def __init__(
        self,
        settings: Optional[RestSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        cookie_store: Optional[CookieJar] = None,
        verify: Optional[ssl.SSLContext | bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        public_key_pinning: Optional[
            Callable[[httpx.Response], Awaitable[None]]
        ] = None,
    ):
        self.settings = settings or load_rest_settings()
        response_hooks = [public_key_pinning] if public_key_pinning is not None else []

        if client is not None:
            self._client = client
            self._client.event_hooks["response"].extend(response_hooks)
            return

        if verify is None:
            if self.settings.ca_bundle:
                verify = ssl.create_default_context(cafile=self.settings.ca_bundle)
            else:
                verify = self.settings.verify_ssl

        headers = {}
        if self.settings.user_agent:
            headers["User-Agent"] = self.settings.user_agent

        self._client = httpx.AsyncClient(
            timeout=self.settings.timeout,
            follow_redirects=self.settings.follow_redirects,
            verify=verify,
            cookies=cookie_store,
            headers=headers,
            transport=transport,
            event_hooks={"response": response_hooks},
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: RestRequest) -> tuple[bytes, RestResponse]:
        start_time = time.time()

        timeout = (
            request.timeout if request.timeout is not None else self.settings.timeout
        )

        response = await self._client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
            timeout=timeout,
        )

        elapsed_time = time.time() - start_time
        logger.debug(
            "Transport finished %s %s in %.3fs", request.method, request.url, elapsed_time
        )

        return response.content, RestResponse(
            status_code=response.status_code,
            headers=response.headers,
            url=response.url,
            elapsed_time=elapsed_time,
        )

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["HTTPXTransport"]

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

import httpx


@dataclass
class RestRequest:
    """
    Mutable draft of an outgoing request.
    Interceptors receive it in order and may change any field before it is sent.
    """

    url: httpx.URL
    method: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Optional[bytes] = None
    timeout: Optional[float] = None

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any value stored under the same name in any case"""
        self.headers[name] = value


@dataclass(frozen=True)
class RestResponse:
    status_code: int
    headers: httpx.Headers
    url: httpx.URL
    elapsed_time: Optional[float] = None

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)


@runtime_checkable
class HTTPResponseLike(Protocol):
    """What the dispatch pipeline needs from a transport response"""

    status_code: int
    headers: Any
    url: Any


class Transport(Protocol):
    """
    The only suspension point of a REST call.
    Implementations raise their own exceptions on transport failure.
    """

    async def send(self, request: RestRequest) -> tuple[bytes, Any]: ...

    async def aclose(self) -> None: ...


__all__ = [
    "RestRequest",
    "RestResponse",
    "HTTPResponseLike",
    "Transport",
]

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from .base import HTTPResponseLike, RestRequest, RestResponse, Transport
from .httpx import HTTPXTransport

__all__ = [
    "HTTPResponseLike",
    "HTTPXTransport",
    "RestRequest",
    "RestResponse",
    "Transport",
]

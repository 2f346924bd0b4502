# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import ssl
from typing import Iterable

logger = logging.getLogger(__name__)


def ca_pinning_ssl_context(certificates: Iterable[str | bytes]) -> ssl.SSLContext:
    """
    Build an SSL context that trusts only the given CA certificates.

    Each certificate is PEM text or DER bytes. Pass the result as `verify`
    to `HTTPXTransport` so servers whose chain does not end in one of them
    are rejected during the handshake.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = True
    context.verify_mode = ssl.CERT_REQUIRED

    count = 0
    for certificate in certificates:
        context.load_verify_locations(cadata=certificate)
        count += 1

    if count == 0:
        raise ValueError("At least one pinned CA certificate is required")

    logger.info("Initialized CA pinning with %d certificate(s)", count)
    return context

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import base64
import hashlib
import logging
from typing import Iterable

import httpx
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

logger = logging.getLogger(__name__)


class PublicKeyPinningError(httpx.ConnectError):
    """The server presented a public key outside of the pinned set"""


def public_key_pin(certificate: bytes | str) -> str:
    """
    Pin of a certificate public key: base64 SHA-256 of its DER SubjectPublicKeyInfo.

    Accepts PEM text or DER bytes. The format is the one used by HPKP and
    `curl --pinnedpubkey sha256//...`.
    """
    if isinstance(certificate, str):
        cert = x509.load_pem_x509_certificate(certificate.encode())
    elif certificate.lstrip().startswith(b"-----BEGIN"):
        cert = x509.load_pem_x509_certificate(certificate)
    else:
        cert = x509.load_der_x509_certificate(certificate)

    spki = cert.public_key().public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)
    return base64.b64encode(hashlib.sha256(spki).digest()).decode()


class PublicKeyServerPinning:
    """
    httpx response hook rejecting servers whose certificate key is not pinned.

    The peer certificate is read from the TLS connection of each response before
    its body is consumed. Responses without TLS information are rejected.

        pinning = PublicKeyServerPinning(["r/mIkG3eEpVdm+u/ko/cwxzOMo1bk4TyHIlByibiA5E="])
        transport = HTTPXTransport(public_key_pinning=pinning)
    """

    def __init__(self, pinned_public_keys: Iterable[str]):
        self.pinned_public_keys = frozenset(pinned_public_keys)
        if not self.pinned_public_keys:
            raise ValueError("At least one pinned public key is required")

    @classmethod
    def from_certificates(
        cls, certificates: Iterable[bytes | str]
    ) -> "PublicKeyServerPinning":
        return cls(public_key_pin(certificate) for certificate in certificates)

    def _peer_certificate(self, response: httpx.Response) -> bytes | None:
        network_stream = response.extensions.get("network_stream")
        if network_stream is None:
            return None
        ssl_object = network_stream.get_extra_info("ssl_object")
        if ssl_object is None:
            return None
        return ssl_object.getpeercert(binary_form=True)

    async def __call__(self, response: httpx.Response) -> None:
        certificate = self._peer_certificate(response)
        if certificate is None:
            logger.error(
                "No server certificate available for %s, cancelling request",
                response.request.url,
            )
            raise PublicKeyPinningError(
                "No server certificate to verify against pinned public keys",
                request=response.request,
            )

        if public_key_pin(certificate) not in self.pinned_public_keys:
            logger.error(
                "Public key of %s is not pinned, cancelling request",
                response.request.url.host,
            )
            raise PublicKeyPinningError(
                "Server public key is not pinned", request=response.request
            )

        logger.debug("Public key of %s is pinned", response.request.url.host)


__all__ = ["PublicKeyPinningError", "PublicKeyServerPinning", "public_key_pin"]

# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Pytest configuration and fixtures for rest_requests tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import NameOID

from rest_requests import HTTPXTransport, RestApiCaller, RestSettings

BASE_URL = "https://api.example.com/v1"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> RestSettings:
    """Default settings, independent of the environment."""
    return RestSettings()


@pytest.fixture
def make_caller(settings: RestSettings) -> Callable[..., RestApiCaller]:
    """Build a `RestApiCaller` whose transport answers through `handler`."""

    def factory(handler: Handler, **kwargs: Any) -> RestApiCaller:
        transport = HTTPXTransport(
            settings=settings,
            cookie_store=kwargs.get("cookie_store"),
            transport=httpx.MockTransport(handler),
        )
        kwargs.setdefault("settings", settings)
        return RestApiCaller(kwargs.pop("base_url", BASE_URL), transport, **kwargs)

    return factory


@dataclass
class Certificate:
    common_name: str
    pem: str
    der: bytes


def make_ca_certificate(common_name: str) -> Certificate:
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )
    return Certificate(
        common_name=common_name,
        pem=cert.public_bytes(Encoding.PEM).decode(),
        der=cert.public_bytes(Encoding.DER),
    )


@pytest.fixture(scope="session")
def ca_certificate() -> Certificate:
    """Self-signed CA certificate generated for the test session."""
    return make_ca_certificate("rest-requests test CA")


@pytest.fixture(scope="session")
def other_certificate() -> Certificate:
    """A second, unrelated CA certificate."""
    return make_ca_certificate("unrelated CA")

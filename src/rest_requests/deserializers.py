# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from functools import lru_cache
from typing import Any, Generic, Optional, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter

from rest_requests.http_util import MimeType
from rest_requests.options import DateDecodingStrategy

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@lru_cache(maxsize=256)
def _cached_type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def type_adapter_for(response_type: Any) -> TypeAdapter[Any]:
    """
    Shared `TypeAdapter` for `response_type`, the core schema is built once per type.
    Unhashable annotations get a fresh adapter.
    """
    try:
        hash(response_type)
    except TypeError:
        return TypeAdapter(response_type)
    return _cached_type_adapter(response_type)


class Deserializer(Protocol[T_co]):
    """Converts the bytes returned by the server into a value"""

    @property
    def accept_header(self) -> str:
        """The `Accept` header value sent with the request"""
        ...

    def deserialize(self, data: bytes) -> T_co: ...


class DecodableDeserializer(Generic[T]):
    """
    Decodes JSON bodies into `response_type` using pydantic.

    `response_type` can be anything pydantic validates: models, dataclasses,
    TypedDicts, builtin containers. Decode failures raise `pydantic.ValidationError`.
    """

    accept_header = MimeType.APPLICATION_JSON.value

    def __init__(
        self,
        response_type: type[T] | Any,
        date_decoding_strategy: DateDecodingStrategy = DateDecodingStrategy.ISO8601,
    ):
        self.response_type = response_type
        self.date_decoding_strategy = date_decoding_strategy
        self._adapter: TypeAdapter[T] = type_adapter_for(response_type)

    def deserialize(self, data: bytes) -> T:
        return self._adapter.validate_json(
            data,
            strict=self.date_decoding_strategy is DateDecodingStrategy.ISO8601,
        )


class VoidDeserializer:
    """For calls where the server is expected to send no body"""

    accept_header = MimeType.VOID.value

    def deserialize(self, data: bytes) -> None:
        if data:
            raise ValueError(f"Expected an empty body, received {len(data)} bytes")
        return None


class DataDeserializer:
    """Passes the raw body through"""

    accept_header = MimeType.APPLICATION_OCTET_STREAM.value

    def deserialize(self, data: bytes) -> bytes:
        return data


class ProblemDetails(BaseModel):
    """RFC 7807 `application/problem+json` error body, usable as error deserializer target"""

    model_config = ConfigDict(extra="allow")

    type: str = "about:blank"
    title: Optional[str] = None
    status: Optional[int] = None
    detail: Optional[str] = None
    instance: Optional[str] = None


__all__ = [
    "Deserializer",
    "DecodableDeserializer",
    "VoidDeserializer",
    "DataDeserializer",
    "ProblemDetails",
    "type_adapter_for",
]

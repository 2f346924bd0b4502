# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from rest_requests.http_util import to_status_code

DEFAULT_REQUEST_TIMEOUT_SECONDS = 60.0


class DateDecodingStrategy(str, Enum):
    """
    How date values in response payloads are decoded.

    The strategy selects the pydantic validation mode of the whole payload, so it
    also governs every other field: `ISO8601` validates in strict mode and
    `TIMESTAMP` in lax mode.
    """

    ISO8601 = "iso8601"
    """
    Dates must be ISO-8601 strings. Strict mode: no field is coerced,
    e.g. `"1"` is rejected for an `int` field.
    """

    TIMESTAMP = "timestamp"
    """
    Numeric unix timestamps (seconds or milliseconds) are accepted as well.
    Lax mode: compatible values are coerced on every field, e.g. `"1"` for an `int`.
    """


def _frozen_mapping(
    field_name: str, value: Optional[Mapping[str, str]]
) -> Optional[dict[str, str]]:
    if value is None:
        return None
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise TypeError(f"{field_name} must map str to str, got {key!r}: {item!r}")
    return dict(value)


@dataclass(frozen=True)
class RestOptions:
    """
    Options that apply to a single REST invocation.

    Use `RestOptions` to override headers, query parameters, expected status codes
    or the timeout without touching the `RestApiCaller` configuration.
    Instances are immutable, use `with_changes` to derive a copy.
    """

    http_headers: Optional[Mapping[str, str]] = None
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    query_parameters: Optional[Mapping[str, str]] = None
    expected_status_codes: Optional[Iterable[int]] = field(default=None)
    """
    When set, any status outside of this set raises `UnexpectedHttpStatusCodeError`.
    When None every code accepted by the pipeline is allowed.
    """
    date_decoding_strategy: DateDecodingStrategy = DateDecodingStrategy.ISO8601

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "http_headers", _frozen_mapping("http_headers", self.http_headers)
        )
        object.__setattr__(
            self,
            "query_parameters",
            _frozen_mapping("query_parameters", self.query_parameters),
        )
        if self.expected_status_codes is not None:
            object.__setattr__(
                self,
                "expected_status_codes",
                frozenset(
                    to_status_code(code)
                    for code in self.expected_status_codes
                ),
            )
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")

    def with_changes(self, **changes: Any) -> "RestOptions":
        return replace(self, **changes)


__all__ = [
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DateDecodingStrategy",
    "RestOptions",
]

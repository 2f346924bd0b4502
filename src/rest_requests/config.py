# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from typing import Optional

from rest_requests.utils.env_parse_utils import (
    get_env_bool,
    get_env_float,
    get_env_str,
)

ENV_PREFIX = "REST_REQUESTS_"


@dataclass
class RestSettings:
    """Transport level defaults shared by every call of a `RestApiCaller`"""

    timeout: float = 60.0
    verify_ssl: bool = True
    ca_bundle: Optional[str] = None
    follow_redirects: bool = True
    network_trace: bool = False
    user_agent: Optional[str] = None

    @classmethod
    def from_env(cls) -> "RestSettings":
        """Read settings from `REST_REQUESTS_*` environment variables at call time"""
        timeout = get_env_float(ENV_PREFIX + "TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            verify_ssl=get_env_bool(ENV_PREFIX + "VERIFY_SSL", cls.verify_ssl),
            ca_bundle=get_env_str(ENV_PREFIX + "CA_BUNDLE"),
            follow_redirects=get_env_bool(
                ENV_PREFIX + "FOLLOW_REDIRECTS", cls.follow_redirects
            ),
            network_trace=get_env_bool(ENV_PREFIX + "NETWORK_TRACE", cls.network_trace),
            user_agent=get_env_str(ENV_PREFIX + "USER_AGENT"),
        )


def load_rest_settings() -> RestSettings:
    return RestSettings.from_env()


__all__ = ["ENV_PREFIX", "RestSettings", "load_rest_settings"]

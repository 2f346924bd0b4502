# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, TypeVar

from rest_requests.errors import is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryConfig:
    """Configuration for caller side retries of REST calls."""

    def __init__(
        self,
        max_retries: int = 3,
        initial_delay: float = 1.0,
        max_delay: float = 30.0,
        backoff_factor: float = 2.0,
        jitter: bool = True,
    ):
        """
        Args:
            max_retries: Maximum number of retry attempts after the first call
            initial_delay: Delay in seconds before the first retry
            max_delay: Upper bound in seconds for any single delay
            backoff_factor: Multiplier applied to the delay after each retry
            jitter: Add +-25% randomness to each delay
        """
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor
        self.jitter = jitter


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    retry_config: Optional[RetryConfig] = None,
    should_retry: Callable[[Exception], bool] = is_retryable,
    on_retry_callback: Optional[Callable[[int, Exception, float], None]] = None,
) -> T:
    """
    Run `fn` again with exponential backoff while it raises errors accepted by `should_retry`.

    `RestApiCaller` never retries on its own, wrap calls with this helper when needed:

        result = await retry_with_backoff(lambda: caller.get("items", list[Item]))

    Returns:
        The result of the first successful attempt

    Raises:
        The last error when it is not retryable or when retries are exhausted
    """
    if retry_config is None:
        retry_config = RetryConfig()

    delay = retry_config.initial_delay
    retry_count = 0

    while True:
        try:
            return await fn()
        except Exception as e:
            if not should_retry(e):
                raise

            if retry_count >= retry_config.max_retries:
                logger.error("Max retries (%s) exceeded: %s", retry_config.max_retries, e)
                raise

            if retry_count > 0:
                delay = min(delay * retry_config.backoff_factor, retry_config.max_delay)

            sleep_for = delay
            if retry_config.jitter:
                jitter_amount = delay * 0.25
                sleep_for = max(delay + random.uniform(-jitter_amount, jitter_amount), 0.0)

            logger.warning(
                "Retry %s/%s after error: %s. Retrying in %.2fs",
                retry_count + 1,
                retry_config.max_retries,
                e,
                sleep_for,
            )

            if on_retry_callback:
                on_retry_callback(retry_count, e, sleep_for)

            retry_count += 1
            await asyncio.sleep(sleep_for)

"""Shared HTTP client utilities (requests session + retrying transport).

We keep HTTP setup centralized so every endpoint goes through the same
retry policy.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import requests

from geomaps.domain.config.retry import RetryConfig
from geomaps.infrastructure.backoff import BackoffAdapter, BackoffPolicy

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "geomaps/0.1"


def backoff_policy_from_config(retry: RetryConfig) -> BackoffPolicy:
    """Build the transport policy from validated retry settings."""
    return BackoffPolicy(
        max_tries=retry.max_tries,
        initial_wait=retry.initial_delay,
        jitter=retry.jitter,
    )


def backoff_policy_from_dict(config: Dict[str, Any]) -> BackoffPolicy:
    """Parse a backoff policy from a plain dict (aliases as in RetryConfig).

    Raises:
        pydantic.ValidationError: On an unknown key or an out-of-range value
    """
    return backoff_policy_from_config(RetryConfig.model_validate(config))


def create_session(
    policy: Optional[BackoffPolicy] = None,
    *,
    cancel_event: Optional[threading.Event] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> requests.Session:
    """Create a session whose http(s) traffic goes through ``BackoffAdapter``."""
    policy = policy or BackoffPolicy()
    adapter = BackoffAdapter(policy=policy, cancel_event=cancel_event)

    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers["User-Agent"] = user_agent
    logger.debug(f"Created HTTP session (max_tries={policy.max_tries}, initial_wait={policy.initial_wait})")
    return session

"""Retrying transport: exponential backoff with jitter around one exchange.

The retry loop is driven by tenacity. Everything that changes during a call
(attempt counter, current wait) is created inside ``Backoff.call`` so that a
single ``Backoff`` or ``BackoffAdapter`` can be shared between threads.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import requests
from requests.adapters import BaseAdapter, HTTPAdapter
from tenacity import RetryCallState, Retrying, retry_if_exception, stop_after_attempt

from geomaps.infrastructure.errors import RequestCancelled, ServerError
from geomaps.infrastructure.signing import redact_url

logger = logging.getLogger(__name__)

SERVER_ERROR_THRESHOLD = 500


@dataclass(frozen=True)
class BackoffPolicy:
    """Retry policy for the retrying transport.

    Attributes:
        max_tries: Upper bound on exchange attempts for one logical call
        initial_wait: First wait in seconds; also the base unit for jitter
        jitter: Half-width of the random term added after each doubling,
            as a fraction of ``initial_wait`` (0.5 gives +/- 0.5 base units)
        sleep: Called with the wait in seconds between attempts
        rng: Random source for jitter
    """

    max_tries: int = 5
    initial_wait: float = 1.0
    jitter: float = 0.5
    sleep: Callable[[float], None] = time.sleep
    rng: random.Random = field(default_factory=random.Random, compare=False)

    def __post_init__(self):
        if self.max_tries < 1:
            raise ValueError("max_tries must be >= 1")
        if self.initial_wait < 0:
            raise ValueError("initial_wait must be non-negative")
        if self.jitter < 0:
            raise ValueError("jitter must be non-negative")


def is_retryable(exception: BaseException) -> bool:
    """Transport failures and 5xx responses are retried, nothing else.

    Every ``requests.RequestException`` counts as a transport failure,
    ``requests.HTTPError`` included: an exchange that calls
    ``raise_for_status()`` itself will have its 4xx responses retried too.
    """
    if isinstance(exception, ServerError):
        return True
    return isinstance(exception, (requests.exceptions.RequestException, ConnectionError))


class _DoublingWait:
    """Wait strategy for one call: initial_wait, then wait * 2 + jitter."""

    def __init__(self, policy: BackoffPolicy):
        self._policy = policy
        self._next_wait = policy.initial_wait

    def __call__(self, retry_state: RetryCallState) -> float:
        wait = self._next_wait
        spread = self._policy.jitter * self._policy.initial_wait
        jitter = (self._policy.rng.random() * 2 - 1) * spread  # [-spread, +spread)
        self._next_wait = max(0.0, wait * 2 + jitter)
        return wait


def _describe(args: tuple) -> str:
    if args and hasattr(args[0], "method") and hasattr(args[0], "url"):
        return f"{args[0].method} {redact_url(str(args[0].url))}"
    return "request"


class Backoff:
    """Retry loop around a single request/response exchange.

    ``exchange`` is anything that performs one request and either returns a
    ``requests.Response`` or raises. Responses with status >= 500 are turned
    into ``ServerError`` and retried along with transport errors; any other
    response (4xx included) is returned as-is on the spot.
    """

    def __init__(
        self,
        policy: Optional[BackoffPolicy] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.policy = policy or BackoffPolicy()
        self.cancel_event = cancel_event

    def _check_cancelled(self, label: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.info(f"Cancelled {label}")
            raise RequestCancelled(f"{label} cancelled")

    def call(self, exchange: Callable[..., requests.Response], *args: Any, **kwargs: Any) -> requests.Response:
        """Run ``exchange(*args, **kwargs)`` until it succeeds or tries run out.

        Returns:
            The first response with a status below 500

        Raises:
            ServerError: Every attempt got a 5xx; wraps the last response
            requests.RequestException: Every attempt failed; the last error
            RequestCancelled: The cancellation event was set
        """
        policy = self.policy
        label = _describe(args)
        attempts = 0

        def _attempt() -> requests.Response:
            nonlocal attempts
            attempts += 1
            response = exchange(*args, **kwargs)
            if response.status_code >= SERVER_ERROR_THRESHOLD:
                # Read and release the body so the pooled connection is free
                # for the next attempt; .content stays readable afterwards.
                response.content
                response.close()
                raise ServerError(response)
            return response

        def _before(retry_state: RetryCallState) -> None:
            self._check_cancelled(label)

        def _before_sleep(retry_state: RetryCallState) -> None:
            self._check_cancelled(label)
            exception = retry_state.outcome.exception() if retry_state.outcome else None
            wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
            logger.warning(
                f"{label} failed (attempt {retry_state.attempt_number}/{policy.max_tries}): "
                f"{exception}. Retrying in {wait:.2f}s"
            )

        retrying = Retrying(
            stop=stop_after_attempt(policy.max_tries),
            wait=_DoublingWait(policy),
            retry=retry_if_exception(is_retryable),
            reraise=True,
            sleep=policy.sleep,
            before=_before,
            before_sleep=_before_sleep,
        )

        try:
            return retrying(_attempt)
        except Exception as e:
            if is_retryable(e):
                logger.error(f"{label} failed after {attempts} attempt(s): {e}")
            raise


class BackoffAdapter(BaseAdapter):
    """requests transport adapter that retries through ``Backoff``.

    Mount it on a session to give every request bounded exponential backoff:

        session.mount("https://", BackoffAdapter())
    """

    def __init__(
        self,
        transport: Optional[BaseAdapter] = None,
        policy: Optional[BackoffPolicy] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        super().__init__()
        self.transport = transport or HTTPAdapter()
        self.backoff = Backoff(policy, cancel_event=cancel_event)

    @property
    def policy(self) -> BackoffPolicy:
        return self.backoff.policy

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        return self.backoff.call(self.transport.send, request, **kwargs)

    def close(self) -> None:
        self.transport.close()

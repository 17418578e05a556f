# ================================================================================
# Wait Engine Module
# ================================================================================
#
# This module provides the polling mechanism every element and browser action
# is built on. A wait evaluates a condition against the driver session at a
# fixed interval until it returns a truthy value or the timeout elapses.
#
# Key Features:
#   - Fixed-interval busy polling on the calling thread
#   - Named wait policies (default, probe, page_load)
#   - Transient errors (element not found yet) are retried, others propagate
#   - Timeout errors carry the condition description and last transient error
#
# Usage:
#   engine = WaitEngine(session)
#   handle = engine.until(visibility_of(locator))
#   engine.until(document_ready(), policy="page_load")
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, Union

from loguru import logger

from .exceptions import ElementNotFoundError, WaitTimeoutError


T = TypeVar("T")


@dataclass(frozen=True)
class WaitPolicy:
    """
    Timing policy for a wait.

    Attributes:
        timeout: Total time budget in seconds
        poll_interval: Fixed pause between polls in seconds
        ignored_exceptions: Exception types treated as "not yet" while polling
    """
    timeout: float = 20.0
    poll_interval: float = 0.5
    ignored_exceptions: Tuple[Type[BaseException], ...] = field(
        default=(ElementNotFoundError,)
    )

    def with_timeout(self, timeout: Optional[float]) -> "WaitPolicy":
        """Copy of this policy with a different timeout (None keeps it)."""
        if timeout is None:
            return self
        return replace(self, timeout=timeout)


# Pre-configured policies
DEFAULT_POLICY = WaitPolicy(timeout=20.0, poll_interval=0.5)

# Existence/visibility probes that are expected to fail often
PROBE_POLICY = WaitPolicy(timeout=2.0, poll_interval=0.5)

# Document/script readiness, decoupled from element waits
PAGE_LOAD_POLICY = WaitPolicy(timeout=10.0, poll_interval=0.5)

WAIT_POLICIES: Dict[str, WaitPolicy] = {
    "default": DEFAULT_POLICY,
    "probe": PROBE_POLICY,
    "page_load": PAGE_LOAD_POLICY,
}


@dataclass
class WaitCondition:
    """
    Predicate over the driver session with a description for error messages.

    The predicate returns a truthy value once satisfied; that value becomes
    the result of the wait.
    """
    predicate: Callable[[Any], Any]
    description: str

    def __call__(self, session: Any) -> Any:
        return self.predicate(session)

    def __str__(self) -> str:
        return self.description


def wait_until(
    session: Any,
    condition: Callable[[Any], T],
    policy: WaitPolicy = DEFAULT_POLICY,
    description: Optional[str] = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Poll a condition until it returns a truthy value.

    Args:
        session: Driver session passed to the condition
        condition: Callable returning a truthy result when satisfied
        policy: Timeout, poll interval and ignored exception types
        description: Text used in logs and the timeout message
        clock: Monotonic time source
        sleep: Sleep function

    Returns:
        The first truthy value returned by the condition

    Raises:
        WaitTimeoutError: The condition was not satisfied within the timeout
    """
    description = description or str(condition)
    deadline = clock() + policy.timeout
    attempt = 0
    last_error: Optional[BaseException] = None

    while True:
        attempt += 1
        try:
            result = condition(session)
            if result:
                if attempt > 1:
                    logger.debug(f"Wait satisfied after {attempt} polls: {description}")
                return result
        except policy.ignored_exceptions as e:
            last_error = e

        remaining = deadline - clock()
        if remaining <= 0:
            message = f"Timed out after {policy.timeout}s waiting for: {description}"
            if last_error is not None:
                message += f". Last error: {last_error}"
            logger.debug(message)
            raise WaitTimeoutError(message)

        sleep(min(policy.poll_interval, remaining))


class WaitEngine:
    """
    Wait engine bound to one driver session.

    Example:
        engine = WaitEngine(session, policies={"default": WaitPolicy(timeout=5)})
        engine.until(visibility_of("#search"))
        engine.until(presence_of("#banner"), policy="probe", timeout=1)
    """

    def __init__(
        self,
        session: Any,
        policies: Optional[Dict[str, WaitPolicy]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize WaitEngine.

        Args:
            session: Driver session the conditions are evaluated against
            policies: Overrides for the named policies in WAIT_POLICIES
            clock: Monotonic time source
            sleep: Sleep function
        """
        self.session = session
        self.policies = {**WAIT_POLICIES, **(policies or {})}
        self._clock = clock
        self._sleep = sleep

    def policy(self, name: Union[str, WaitPolicy]) -> WaitPolicy:
        if isinstance(name, WaitPolicy):
            return name
        try:
            return self.policies[name]
        except KeyError:
            raise ValueError(f"Unknown wait policy: {name}") from None

    def until(
        self,
        condition: Callable[[Any], T],
        policy: Union[str, WaitPolicy] = "default",
        timeout: Optional[float] = None,
        description: Optional[str] = None,
    ) -> T:
        """
        Wait for a condition using a named policy.

        Args:
            condition: Condition to poll
            policy: Policy name or WaitPolicy instance
            timeout: Override for the policy timeout in seconds
            description: Override for the condition description

        Returns:
            The first truthy value returned by the condition
        """
        return wait_until(
            self.session,
            condition,
            policy=self.policy(policy).with_timeout(timeout),
            description=description,
            clock=self._clock,
            sleep=self._sleep,
        )


__all__ = [
    "WaitPolicy",
    "WaitCondition",
    "WaitEngine",
    "wait_until",
    "DEFAULT_POLICY",
    "PROBE_POLICY",
    "PAGE_LOAD_POLICY",
    "WAIT_POLICIES",
]

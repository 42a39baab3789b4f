"""
Utility functions for remote calls and error handling.

Provides the error taxonomy and helpers for async remote interactions:
- Timeout enforcement
- Stale-response detection (request sequencing)
- Optional-value unwrapping
"""
import asyncio
from typing import Any, Awaitable, Optional, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EvalynError(Exception):
    """Base exception for every failure reported to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EvalynError):
    """Invalid user input; no remote call was made."""
    pass


class RemoteCallError(EvalynError):
    """Transport or service failure of a remote call (timeouts included)."""
    pass


class NotFoundError(EvalynError):
    """The remote service has no record for the requested identifier."""
    pass


class MalformedPayloadError(EvalynError):
    """A remote payload could not be decoded."""
    pass


async def call_with_timeout(awaitable: Awaitable[T], timeout: Optional[float]) -> T:
    """
    Await a remote call, converting failures into RemoteCallError.

    Args:
        awaitable: The pending remote call
        timeout: Seconds before giving up, or None to wait forever

    Returns:
        The call result

    Raises:
        RemoteCallError: On timeout or any transport/service failure
        NotFoundError, MalformedPayloadError: Passed through unchanged
    """
    try:
        if timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Remote call timed out after {timeout}s")
        raise RemoteCallError(f"Request timed out after {timeout}s")
    except EvalynError:
        raise
    except Exception as e:
        raise RemoteCallError(str(e) or type(e).__name__) from e


class RequestSequencer:
    """
    Hands out increasing tickets so that only the latest request may
    publish its outcome.

    Each flow invocation calls ``next()`` before suspending on its remote
    call and checks ``is_current(ticket)`` after resuming. An earlier,
    slower response then cannot overwrite a later, faster one.
    """

    def __init__(self, name: str):
        self.name = name
        self._latest = 0

    def next(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, ticket: int) -> bool:
        current = ticket == self._latest
        if not current:
            logger.debug(f"[{self.name}] Discarding stale response #{ticket} (latest #{self._latest})")
        return current

    @property
    def latest(self) -> int:
        return self._latest


def unwrap_optional(value: Any) -> Any:
    """
    Unwrap a remote optional.

    The service encodes optionals either as a plain nullable value or as an
    array of zero or one element. Both collapse to ``None`` or the value.

    Raises:
        MalformedPayloadError: If an array holds more than one element
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        if len(value) == 0:
            return None
        if len(value) == 1:
            return value[0]
        raise MalformedPayloadError(f"Optional holds {len(value)} values")
    return value

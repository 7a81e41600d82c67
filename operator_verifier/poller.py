"""Poll a condition until it is satisfied, fails, or times out."""

import logging
import time
from typing import Callable

from .errors import NotFoundError, PollTimeoutError

logger = logging.getLogger(__name__)


def poll_immediate(
    interval: float,
    timeout: float,
    condition: Callable[[], bool],
    description: str = "condition",
) -> None:
    """
    Evaluate condition right away, then at most once per interval.
    
    Args:
        interval: Seconds between evaluations
        timeout: Seconds before giving up
        condition: Returns True once satisfied; raising aborts the poll,
            except for NotFoundError which counts as not yet satisfied
        description: Used in log lines and the timeout error
        
    Raises:
        ValueError: interval or timeout is not positive
        PollTimeoutError: condition was not satisfied in time
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")
    
    deadline = time.monotonic() + timeout
    attempt = 0
    
    while True:
        attempt += 1
        try:
            if condition():
                logger.debug(f"{description} satisfied after {attempt} attempt(s)")
                return
        except NotFoundError as e:
            logger.debug(f"{description}: {e}, retrying")
        
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise PollTimeoutError(timeout, description)
        
        time.sleep(min(interval, remaining))

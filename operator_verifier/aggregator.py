"""Wait for sub-controller status conditions on the operator object."""

import logging
import threading
from typing import Dict, List, Optional

from .context import VerifierContext
from .errors import AggregateError
from .models import OperatorStatus
from .poller import poll_immediate

logger = logging.getLogger(__name__)


def _controller_converged(ctx: VerifierContext, controller_name: str, expected: Dict[str, str]) -> bool:
    operator = OperatorStatus.from_crd(ctx.store.get_operator(ctx.operator_name))
    
    if operator.deleting:
        logger.debug(f"{operator.name} is being deleted, waiting")
        return False
    
    return operator.conditions_match(controller_name, expected)


def verify_operator_status_condition(
    ctx: VerifierContext,
    controller_names: List[str],
    expected: Dict[str, str],
) -> None:
    """
    Poll the operator status until every named sub-controller's conditions
    match the expected statuses.
    
    Each controller is polled in its own thread with the context's interval
    and timeout. All threads are joined before returning.
    
    Args:
        ctx: Verifier context
        controller_names: Sub-controller names, the prefixes of their condition types
        expected: Condition suffix -> expected status, e.g. {"Available": "True"}
        
    Raises:
        AggregateError: one entry per controller that failed or timed out
    """
    errors: List[Optional[Exception]] = [None] * len(controller_names)
    
    def watch(index: int) -> None:
        name = controller_names[index]
        try:
            poll_immediate(
                ctx.poll_interval,
                ctx.poll_timeout,
                lambda: _controller_converged(ctx, name, expected),
                description=f"{name} conditions {expected}",
            )
        except Exception as e:
            errors[index] = e
    
    threads = [
        threading.Thread(target=watch, args=(index,), name=f"status-{name}", daemon=True)
        for index, name in enumerate(controller_names)
    ]
    
    logger.info(f"Waiting for {', '.join(controller_names)} to reach {expected}")
    
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    
    failed = {
        name: err
        for name, err in zip(controller_names, errors)
        if err is not None
    }
    if failed:
        raise AggregateError(failed)
    
    logger.info(f"All of {', '.join(controller_names)} reached {expected}")

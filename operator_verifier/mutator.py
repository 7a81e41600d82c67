"""Conflict-safe read-modify-write updates of the operator object."""

import copy
import logging
import random
import time
from dataclasses import dataclass
from typing import Optional, Dict, Any, Callable, List

from .config import (
    DEPLOYMENT_CONFIG_FIELDS,
    DEFAULT_OPERATOR_SPEC,
    RETRY_STEPS,
    RETRY_DURATION_SECONDS,
    RETRY_FACTOR,
    RETRY_JITTER,
)
from .context import VerifierContext
from .errors import ConflictError
from .models import OperatorStatus

logger = logging.getLogger(__name__)

Mutation = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


@dataclass
class Backoff:
    """Attempt budget and sleep schedule between conflicting writes."""
    steps: int = RETRY_STEPS
    duration: float = RETRY_DURATION_SECONDS
    factor: float = RETRY_FACTOR
    jitter: float = RETRY_JITTER
    
    def delay(self, attempt: int) -> float:
        """Seconds to sleep after the given (1-based) failed attempt."""
        delay = self.duration * (self.factor ** (attempt - 1))
        if self.jitter > 0:
            delay += random.uniform(0, delay * self.jitter)
        return delay


DEFAULT_RETRY = Backoff()


def retry_on_conflict(
    read: Callable[[], Dict[str, Any]],
    mutate: Mutation,
    write: Callable[[Dict[str, Any]], Dict[str, Any]],
    backoff: Backoff = DEFAULT_RETRY,
) -> Dict[str, Any]:
    """
    Run read -> mutate -> write, restarting the whole cycle on conflict.
    
    mutate receives a private copy of the freshly read object and returns
    the object to write, or None when there is nothing to change.
    
    Returns:
        The written object, or the current one if mutate made no change
        
    Raises:
        ConflictError: every attempt conflicted
        Any error from read, mutate or write other than a conflict
    """
    if backoff.steps < 1:
        raise ValueError(f"backoff needs at least one step, got {backoff.steps}")
    
    last_error = None
    
    for attempt in range(1, backoff.steps + 1):
        current = read()
        updated = mutate(copy.deepcopy(current))
        if updated is None:
            return current
        
        try:
            return write(updated)
        except ConflictError as e:
            last_error = e
            logger.warning(f"Attempt {attempt}/{backoff.steps}: {e}")
        
        if attempt < backoff.steps:
            time.sleep(backoff.delay(attempt))
    
    raise last_error


def _config_field(deployment_name: str) -> str:
    try:
        return DEPLOYMENT_CONFIG_FIELDS[deployment_name]
    except KeyError:
        raise ValueError(f"unsupported deployment name: {deployment_name}") from None


def set_override_args(deployment_name: str, args: List[str]) -> Mutation:
    """Replace a deployment's override block with the given args."""
    spec_field = _config_field(deployment_name)
    
    def mutate(operator: Dict[str, Any]) -> Dict[str, Any]:
        operator.setdefault("spec", {})[spec_field] = {"overrideArgs": list(args)}
        return operator
    
    return mutate


def set_override_resources(deployment_name: str, resources: Dict[str, Dict[str, str]]) -> Mutation:
    """Replace a deployment's override block with the given limits/requests."""
    spec_field = _config_field(deployment_name)
    
    def mutate(operator: Dict[str, Any]) -> Dict[str, Any]:
        operator.setdefault("spec", {})[spec_field] = {
            "overrideResources": copy.deepcopy(resources)
        }
        return operator
    
    return mutate


def clear_overrides(operator: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Drop every deployment override block; None when none are set."""
    configured = OperatorStatus.from_crd(operator).deployment_configs
    if not configured:
        return None

    for deployment_name, config in configured.items():
        logger.debug(
            f"Clearing {deployment_name} overrides: args={config.override_args} "
            f"resources={config.override_resources}"
        )
        del operator["spec"][DEPLOYMENT_CONFIG_FIELDS[deployment_name]]
    return operator


def restore_default_spec(operator: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Reset spec to the default managed state; None when already there."""
    if operator.get("spec") == DEFAULT_OPERATOR_SPEC:
        return None
    operator["spec"] = copy.deepcopy(DEFAULT_OPERATOR_SPEC)
    return operator


def update_operator(ctx: VerifierContext, mutate: Mutation, backoff: Backoff = DEFAULT_RETRY) -> Dict[str, Any]:
    """Apply a mutation to the operator object named in ctx."""
    return retry_on_conflict(
        read=lambda: ctx.store.get_operator(ctx.operator_name),
        mutate=mutate,
        write=ctx.store.update_operator,
        backoff=backoff,
    )


def add_override_args(ctx: VerifierContext, deployment_name: str, args: List[str]) -> Dict[str, Any]:
    """Set override args for one operand deployment."""
    logger.info(f"Setting override args for {deployment_name}: {args}")
    return update_operator(ctx, set_override_args(deployment_name, args))


def add_override_resources(
    ctx: VerifierContext,
    deployment_name: str,
    resources: Dict[str, Dict[str, str]],
) -> Dict[str, Any]:
    """Set override resources for one operand deployment."""
    logger.info(f"Setting override resources for {deployment_name}: {resources}")
    return update_operator(ctx, set_override_resources(deployment_name, resources))


def remove_overrides(ctx: VerifierContext) -> Dict[str, Any]:
    """Remove the overrides of all operand deployments in one update."""
    logger.info("Removing all operand overrides")
    return update_operator(ctx, clear_overrides)


def reset_operator_state(ctx: VerifierContext) -> Dict[str, Any]:
    """Restore the operator spec to its default managed state."""
    logger.info(f"Resetting {ctx.operator_name} to its default state")
    return update_operator(ctx, restore_default_spec)

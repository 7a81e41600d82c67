"""Shared settings passed to every verifier component."""

from dataclasses import dataclass

from .config import (
    OPERATOR_NAME,
    OPERAND_NAMESPACE,
    POLL_INTERVAL_SECONDS,
    POLL_TIMEOUT_SECONDS,
)
from .store import ResourceStore


@dataclass
class VerifierContext:
    """Store handle plus the names and timings a verification run uses."""
    store: ResourceStore
    operator_name: str = OPERATOR_NAME
    operand_namespace: str = OPERAND_NAMESPACE
    poll_interval: float = POLL_INTERVAL_SECONDS
    poll_timeout: float = POLL_TIMEOUT_SECONDS

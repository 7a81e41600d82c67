"""Utility functions for quantity parsing and container inspection."""

from decimal import Decimal
from typing import Dict, List, Optional, Set

from kubernetes.utils import parse_quantity as _parse_quantity

from .errors import StructuralError


def parse_quantity(resource_name: str, quantity) -> Decimal:
    """
    Parse a Kubernetes quantity to an exact Decimal.
    
    Examples:
        "100m" -> Decimal("0.1")
        "128Mi" -> Decimal("134217728")
        "1E" -> Decimal("1000000000000000000")
    
    Raises:
        StructuralError: the value is not a valid quantity
    """
    try:
        return _parse_quantity(quantity)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise StructuralError(
            f"invalid quantity {quantity!r} for resource {resource_name}: {e}"
        ) from e


def quantities_match(resource_name: str, actual: Optional[str], desired: str) -> bool:
    """Compare two quantities of the named resource for exact equality by value."""
    if actual is None or actual == "":
        return False
    
    return parse_quantity(resource_name, actual) == parse_quantity(resource_name, desired)


def first_container(deployment):
    """Return the first container of a deployment's pod template."""
    name = deployment.metadata.name if deployment.metadata else ""
    
    try:
        containers = deployment.spec.template.spec.containers
    except AttributeError:
        containers = None
    
    if not containers:
        raise StructuralError(
            f"{name} deployment spec does not have container information"
        )
    return containers[0]


def container_args(deployment) -> Set[str]:
    """Return the first container's args as a set."""
    return set(first_container(deployment).args or [])


def get_container_resources(deployment) -> Dict[str, Dict[str, str]]:
    """
    Extract resource requests and limits from a deployment's first container.
    
    Returns:
        {
            "requests": {"cpu": "100m", "memory": "128Mi"},
            "limits": {"cpu": "500m", "memory": "256Mi"}
        }
    """
    result = {"requests": {}, "limits": {}}
    
    resources = first_container(deployment).resources
    if resources:
        if resources.requests:
            result["requests"] = {k: str(v) for k, v in resources.requests.items()}
        if resources.limits:
            result["limits"] = {k: str(v) for k, v in resources.limits.items()}
    
    return result


def resources_match(actual: Dict[str, Dict[str, str]], desired: Dict[str, Dict[str, str]]) -> bool:
    """
    Check that every limit and request in desired is present in actual
    with an equal quantity.
    """
    for section in ("limits", "requests"):
        for resource_name, quantity in (desired.get(section) or {}).items():
            if not quantities_match(
                resource_name,
                actual.get(section, {}).get(resource_name),
                quantity,
            ):
                return False
    return True


def missing_args(actual: Set[str], args: List[str]) -> List[str]:
    """Return the args not present in actual, in their original order."""
    return [arg for arg in args if arg not in actual]

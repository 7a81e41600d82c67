"""Helpers for the operator's OLM Subscription."""

import logging
from typing import Dict, Any

from .config import CLOUD_CREDENTIALS_ENV, OPERATOR_NAMESPACE
from .context import VerifierContext
from .errors import StructuralError, NotFoundError

logger = logging.getLogger(__name__)


def get_operator_subscription(ctx: VerifierContext, namespace: str = OPERATOR_NAMESPACE) -> str:
    """
    Return the name of the first Subscription in the operator namespace.
    
    Raises:
        NotFoundError: no Subscription exists
        StructuralError: the first Subscription has no metadata.name
    """
    subscriptions = ctx.store.list_subscriptions(namespace)
    if not subscriptions:
        raise NotFoundError("Subscription", "", namespace)
    
    name = (subscriptions[0].get("metadata") or {}).get("name")
    if not isinstance(name, str) or not name:
        raise StructuralError(
            "could not parse metadata.name from the first subscription object found"
        )
    return name


def patch_subscription_with_cloud_credential(
    ctx: VerifierContext,
    secret_name: str,
    namespace: str = OPERATOR_NAMESPACE,
) -> Dict[str, Any]:
    """Inject the cloud credentials secret name into the Subscription's env."""
    name = get_operator_subscription(ctx, namespace)
    patch = {
        "spec": {
            "config": {
                "env": [
                    {"name": CLOUD_CREDENTIALS_ENV, "value": secret_name},
                ],
            },
        },
    }
    
    logger.info(f"Patching subscription {namespace}/{name} with {CLOUD_CREDENTIALS_ENV}={secret_name}")
    return ctx.store.patch_subscription(namespace, name, patch)

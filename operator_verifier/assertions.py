"""Poll-based assertions on operand deployments and issued certificates."""

import logging
from typing import Dict, List

from .certs import verify_tls_secret
from .config import CERTIFICATE_READY_CONDITION, CONDITION_TRUE
from .context import VerifierContext
from .models import Condition
from .poller import poll_immediate
from .utils import container_args, get_container_resources, missing_args, resources_match

logger = logging.getLogger(__name__)


def verify_deployment_args(
    ctx: VerifierContext,
    deployment_name: str,
    args: List[str],
    added: bool,
) -> None:
    """
    Wait until the deployment's first container args contain all of args
    (added=True) or stop containing all of them (added=False).
    
    Raises:
        StructuralError: the deployment has no containers
        PollTimeoutError: the args never reached the wanted state
    """
    def check() -> bool:
        deployment = ctx.store.get_deployment(ctx.operand_namespace, deployment_name)
        missing = missing_args(container_args(deployment), args)
        
        if added:
            if missing:
                logger.debug(f"{deployment_name} is still missing args {missing}")
            return not missing
        return bool(missing)
    
    state = "present in" if added else "absent from"
    poll_immediate(
        ctx.poll_interval,
        ctx.poll_timeout,
        check,
        description=f"args {args} to be {state} deployment {deployment_name}",
    )


def verify_deployment_resources(
    ctx: VerifierContext,
    deployment_name: str,
    resources: Dict[str, Dict[str, str]],
    added: bool,
) -> None:
    """
    Wait until the deployment's first container resources equal every
    asserted limit and request (added=True), or differ from them
    (added=False).
    
    Raises:
        StructuralError: the deployment has no containers
        PollTimeoutError: the resources never reached the wanted state
    """
    def check() -> bool:
        deployment = ctx.store.get_deployment(ctx.operand_namespace, deployment_name)
        matches = resources_match(get_container_resources(deployment), resources)
        return matches if added else not matches
    
    state = "applied to" if added else "absent from"
    poll_immediate(
        ctx.poll_interval,
        ctx.poll_timeout,
        check,
        description=f"resources {resources} to be {state} deployment {deployment_name}",
    )


def wait_for_certificate_readiness(ctx: VerifierContext, cert_name: str, namespace: str) -> None:
    """Wait until the Certificate's Ready condition is True."""
    def check() -> bool:
        cert = ctx.store.get_certificate(namespace, cert_name)
        conditions = (cert.get("status") or {}).get("conditions") or []
        
        for condition in map(Condition.from_crd, conditions):
            if condition.type == CERTIFICATE_READY_CONDITION:
                return condition.status == CONDITION_TRUE
        return False
    
    poll_immediate(
        ctx.poll_interval,
        ctx.poll_timeout,
        check,
        description=f"certificate {namespace}/{cert_name} to become ready",
    )


def verify_certificate(ctx: VerifierContext, secret_name: str, namespace: str, hostname: str) -> None:
    """
    Wait until the TLS secret holds a valid, unexpired certificate issued
    for hostname.
    
    Raises:
        CertificateError: the secret's certificate is not parseable
        PollTimeoutError: the secret never became valid
    """
    def check() -> bool:
        secret = ctx.store.get_secret(namespace, secret_name)
        return verify_tls_secret(secret, hostname)
    
    poll_immediate(
        ctx.poll_interval,
        ctx.poll_timeout,
        check,
        description=f"secret {namespace}/{secret_name} to hold a certificate for {hostname}",
    )

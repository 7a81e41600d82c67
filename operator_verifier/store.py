"""Client for the API objects the verifier reads and writes."""

import logging
from typing import Optional, Dict, Any, List

from kubernetes import client
from kubernetes.client.rest import ApiException

from .config import (
    OPERATOR_GROUP,
    OPERATOR_VERSION,
    OPERATOR_PLURAL,
    OPERATOR_KIND,
    CERTIFICATE_GROUP,
    CERTIFICATE_VERSION,
    CERTIFICATE_PLURAL,
    SUBSCRIPTION_GROUP,
    SUBSCRIPTION_VERSION,
    SUBSCRIPTION_PLURAL,
)
from .errors import NotFoundError, ConflictError, StoreError

logger = logging.getLogger(__name__)


def translate_api_exception(
    e: ApiException,
    kind: str,
    name: str,
    namespace: str = "",
    resource_version: Optional[str] = None,
) -> Exception:
    """Map an ApiException onto the verifier's error types."""
    if e.status == 404:
        return NotFoundError(kind, name, namespace)
    if e.status == 409:
        return ConflictError(kind, name, resource_version)
    target = f"{namespace}/{name}" if namespace else name
    return StoreError(f"error accessing {kind} {target}: {e.status} {e.reason}", e.status)


class ResourceStore:
    """Thin wrapper over the Kubernetes APIs used by the verifier."""
    
    def __init__(self, custom_api=None, apps_api=None, core_api=None):
        """
        Initialize the store.
        
        Args:
            custom_api: CustomObjectsApi instance (created if omitted)
            apps_api: AppsV1Api instance (created if omitted)
            core_api: CoreV1Api instance (created if omitted)
        """
        self.custom_api = custom_api or client.CustomObjectsApi()
        self.apps_api = apps_api or client.AppsV1Api()
        self.core_api = core_api or client.CoreV1Api()
    
    def get_operator(self, name: str) -> Dict[str, Any]:
        """
        Get the cluster-scoped CertManager object.
        
        Raises:
            NotFoundError: the object does not exist
            StoreError: any other API failure
        """
        try:
            return self.custom_api.get_cluster_custom_object(
                group=OPERATOR_GROUP,
                version=OPERATOR_VERSION,
                plural=OPERATOR_PLURAL,
                name=name
            )
        except ApiException as e:
            raise translate_api_exception(e, OPERATOR_KIND, name) from e
    
    def update_operator(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the CertManager object.
        
        The body must carry the metadata.resourceVersion it was read at; the
        API server rejects the write with a conflict if the object changed
        since then.
        
        Returns:
            The updated object, carrying its new resourceVersion
        """
        metadata = body.get("metadata", {})
        name = metadata.get("name", "")
        resource_version = metadata.get("resourceVersion")
        if not resource_version:
            raise StoreError(f"refusing unconditional update of {OPERATOR_KIND} {name}")
        
        try:
            updated = self.custom_api.replace_cluster_custom_object(
                group=OPERATOR_GROUP,
                version=OPERATOR_VERSION,
                plural=OPERATOR_PLURAL,
                name=name,
                body=body
            )
        except ApiException as e:
            raise translate_api_exception(
                e, OPERATOR_KIND, name, resource_version=resource_version
            ) from e
        
        logger.debug(
            f"Updated {OPERATOR_KIND} {name}: resourceVersion "
            f"{resource_version} -> {updated.get('metadata', {}).get('resourceVersion')}"
        )
        return updated
    
    def get_deployment(self, namespace: str, name: str):
        """Get an apps/v1 Deployment."""
        try:
            return self.apps_api.read_namespaced_deployment(name=name, namespace=namespace)
        except ApiException as e:
            raise translate_api_exception(e, "Deployment", name, namespace) from e
    
    def get_certificate(self, namespace: str, name: str) -> Dict[str, Any]:
        """Get a cert-manager Certificate."""
        try:
            return self.custom_api.get_namespaced_custom_object(
                group=CERTIFICATE_GROUP,
                version=CERTIFICATE_VERSION,
                namespace=namespace,
                plural=CERTIFICATE_PLURAL,
                name=name
            )
        except ApiException as e:
            raise translate_api_exception(e, "Certificate", name, namespace) from e
    
    def get_secret(self, namespace: str, name: str):
        """Get a core/v1 Secret."""
        try:
            return self.core_api.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as e:
            raise translate_api_exception(e, "Secret", name, namespace) from e
    
    def list_subscriptions(self, namespace: str) -> List[Dict[str, Any]]:
        """List OLM Subscription objects in a namespace."""
        try:
            response = self.custom_api.list_namespaced_custom_object(
                group=SUBSCRIPTION_GROUP,
                version=SUBSCRIPTION_VERSION,
                namespace=namespace,
                plural=SUBSCRIPTION_PLURAL
            )
        except ApiException as e:
            raise translate_api_exception(e, "Subscription", "", namespace) from e
        return response.get("items", [])
    
    def patch_subscription(self, namespace: str, name: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Merge-patch an OLM Subscription."""
        try:
            return self.custom_api.patch_namespaced_custom_object(
                group=SUBSCRIPTION_GROUP,
                version=SUBSCRIPTION_VERSION,
                namespace=namespace,
                plural=SUBSCRIPTION_PLURAL,
                name=name,
                body=patch
            )
        except ApiException as e:
            raise translate_api_exception(e, "Subscription", name, namespace) from e

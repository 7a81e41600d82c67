"""Tests for the Kubernetes API wrapper."""

from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException

from operator_verifier.config import OPERATOR_GROUP, OPERATOR_PLURAL, OPERATOR_VERSION
from operator_verifier.errors import ConflictError, NotFoundError, StoreError
from operator_verifier.store import ResourceStore, translate_api_exception


@pytest.fixture
def custom_api():
    return MagicMock()


@pytest.fixture
def apps_api():
    return MagicMock()


@pytest.fixture
def core_api():
    return MagicMock()


@pytest.fixture
def resource_store(custom_api, apps_api, core_api):
    return ResourceStore(custom_api=custom_api, apps_api=apps_api, core_api=core_api)


class TestTranslateApiException:
    """Tests for ApiException translation."""

    def test_not_found(self):
        err = translate_api_exception(ApiException(status=404, reason="Not Found"), "Secret", "tls", "default")

        assert isinstance(err, NotFoundError)
        assert str(err) == "Secret default/tls not found"

    def test_conflict(self):
        err = translate_api_exception(
            ApiException(status=409, reason="Conflict"), "CertManager", "cluster", resource_version="7"
        )

        assert isinstance(err, ConflictError)
        assert err.resource_version == "7"

    def test_other(self):
        err = translate_api_exception(ApiException(status=500, reason="Internal"), "CertManager", "cluster")

        assert isinstance(err, StoreError)
        assert err.status == 500


class TestResourceStore:
    """Tests for ResourceStore."""

    def test_get_operator(self, resource_store, custom_api):
        custom_api.get_cluster_custom_object.return_value = {"metadata": {"name": "cluster"}}

        assert resource_store.get_operator("cluster") == {"metadata": {"name": "cluster"}}
        custom_api.get_cluster_custom_object.assert_called_once_with(
            group=OPERATOR_GROUP,
            version=OPERATOR_VERSION,
            plural=OPERATOR_PLURAL,
            name="cluster",
        )

    def test_get_operator_not_found(self, resource_store, custom_api):
        custom_api.get_cluster_custom_object.side_effect = ApiException(status=404)

        with pytest.raises(NotFoundError):
            resource_store.get_operator("cluster")

    def test_update_operator(self, resource_store, custom_api):
        body = {"metadata": {"name": "cluster", "resourceVersion": "5"}, "spec": {}}
        custom_api.replace_cluster_custom_object.return_value = {
            "metadata": {"name": "cluster", "resourceVersion": "6"}
        }

        updated = resource_store.update_operator(body)

        assert updated["metadata"]["resourceVersion"] == "6"
        custom_api.replace_cluster_custom_object.assert_called_once_with(
            group=OPERATOR_GROUP,
            version=OPERATOR_VERSION,
            plural=OPERATOR_PLURAL,
            name="cluster",
            body=body,
        )

    def test_update_operator_conflict(self, resource_store, custom_api):
        custom_api.replace_cluster_custom_object.side_effect = ApiException(status=409)

        with pytest.raises(ConflictError) as exc_info:
            resource_store.update_operator({"metadata": {"name": "cluster", "resourceVersion": "5"}})

        assert exc_info.value.resource_version == "5"

    def test_update_operator_requires_resource_version(self, resource_store, custom_api):
        with pytest.raises(StoreError, match="unconditional"):
            resource_store.update_operator({"metadata": {"name": "cluster"}})

        custom_api.replace_cluster_custom_object.assert_not_called()

    def test_get_deployment_not_found(self, resource_store, apps_api):
        apps_api.read_namespaced_deployment.side_effect = ApiException(status=404)

        with pytest.raises(NotFoundError) as exc_info:
            resource_store.get_deployment("cert-manager", "cert-manager")

        assert exc_info.value.kind == "Deployment"
        assert exc_info.value.namespace == "cert-manager"

    def test_get_secret_forbidden(self, resource_store, core_api):
        core_api.read_namespaced_secret.side_effect = ApiException(status=403, reason="Forbidden")

        with pytest.raises(StoreError, match="403"):
            resource_store.get_secret("default", "tls")

    def test_get_certificate(self, resource_store, custom_api):
        custom_api.get_namespaced_custom_object.return_value = {"metadata": {"name": "example"}}

        resource_store.get_certificate("default", "example")

        kwargs = custom_api.get_namespaced_custom_object.call_args.kwargs
        assert kwargs["group"] == "cert-manager.io"
        assert kwargs["plural"] == "certificates"
        assert kwargs["namespace"] == "default"

    def test_list_subscriptions(self, resource_store, custom_api):
        custom_api.list_namespaced_custom_object.return_value = {"items": [{"metadata": {"name": "a"}}]}

        assert resource_store.list_subscriptions("cert-manager-operator") == [{"metadata": {"name": "a"}}]

    def test_list_subscriptions_empty_response(self, resource_store, custom_api):
        custom_api.list_namespaced_custom_object.return_value = {}

        assert resource_store.list_subscriptions("cert-manager-operator") == []

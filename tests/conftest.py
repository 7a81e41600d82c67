"""Shared fixtures: an in-memory API store and deployment builders."""

import copy
import threading

import pytest
from kubernetes import client

from operator_verifier.context import VerifierContext
from operator_verifier.errors import ConflictError, NotFoundError


class FakeStore:
    """In-memory stand-in for ResourceStore with resourceVersion checks."""

    def __init__(self):
        self._lock = threading.Lock()
        self.operators = {}
        self.deployments = {}
        self.certificates = {}
        self.secrets = {}
        self.subscriptions = {}
        self.get_calls = 0
        self.update_calls = 0
        self.injected_conflicts = 0
        self.patches = []

    def add_operator(self, name="cluster", spec=None, conditions=None, deletion_timestamp=None):
        metadata = {"name": name, "resourceVersion": "1"}
        if deletion_timestamp:
            metadata["deletionTimestamp"] = deletion_timestamp
        self.operators[name] = {
            "apiVersion": "operator.openshift.io/v1alpha1",
            "kind": "CertManager",
            "metadata": metadata,
            "spec": spec if spec is not None else {"managementState": "Managed"},
            "status": {"conditions": conditions or []},
        }
        return self.operators[name]

    def set_conditions(self, conditions, name="cluster"):
        with self._lock:
            self.operators[name]["status"]["conditions"] = conditions

    def get_operator(self, name):
        with self._lock:
            self.get_calls += 1
            if name not in self.operators:
                raise NotFoundError("CertManager", name)
            return copy.deepcopy(self.operators[name])

    def update_operator(self, body):
        with self._lock:
            self.update_calls += 1
            name = body["metadata"]["name"]
            if name not in self.operators:
                raise NotFoundError("CertManager", name)
            current = self.operators[name]
            version = body["metadata"].get("resourceVersion")
            if self.injected_conflicts > 0:
                self.injected_conflicts -= 1
                raise ConflictError("CertManager", name, version)
            if version != current["metadata"]["resourceVersion"]:
                raise ConflictError("CertManager", name, version)
            stored = copy.deepcopy(body)
            stored["metadata"]["resourceVersion"] = str(int(version) + 1)
            stored["status"] = current.get("status", {})
            self.operators[name] = stored
            return copy.deepcopy(stored)

    def get_deployment(self, namespace, name):
        key = (namespace, name)
        if key not in self.deployments:
            raise NotFoundError("Deployment", name, namespace)
        return self.deployments[key]

    def get_certificate(self, namespace, name):
        key = (namespace, name)
        if key not in self.certificates:
            raise NotFoundError("Certificate", name, namespace)
        return self.certificates[key]

    def get_secret(self, namespace, name):
        key = (namespace, name)
        if key not in self.secrets:
            raise NotFoundError("Secret", name, namespace)
        return self.secrets[key]

    def list_subscriptions(self, namespace):
        return self.subscriptions.get(namespace, [])

    def patch_subscription(self, namespace, name, patch):
        self.patches.append((namespace, name, patch))
        return {"metadata": {"name": name, "namespace": namespace}}


def make_deployment(name, args=None, limits=None, requests=None, containers=True):
    """Build a V1Deployment with a single container."""
    container_list = []
    if containers:
        container_list.append(
            client.V1Container(
                name=name,
                image="quay.io/jetstack/cert-manager-controller:v1.14.0",
                args=args,
                resources=client.V1ResourceRequirements(limits=limits, requests=requests),
            )
        )
    return client.V1Deployment(
        metadata=client.V1ObjectMeta(name=name, namespace="cert-manager"),
        spec=client.V1DeploymentSpec(
            selector=client.V1LabelSelector(match_labels={"app": name}),
            template=client.V1PodTemplateSpec(
                spec=client.V1PodSpec(containers=container_list),
            ),
        ),
    )


@pytest.fixture
def store():
    fake = FakeStore()
    fake.add_operator()
    return fake


@pytest.fixture
def ctx(store):
    return VerifierContext(store=store, poll_interval=0.01, poll_timeout=0.3)

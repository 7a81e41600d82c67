"""Tests for the OLM subscription helpers."""

import pytest

from operator_verifier.errors import NotFoundError, StructuralError
from operator_verifier.subscription import (
    get_operator_subscription,
    patch_subscription_with_cloud_credential,
)

NAMESPACE = "cert-manager-operator"


def test_get_operator_subscription_returns_first(ctx, store):
    store.subscriptions[NAMESPACE] = [
        {"metadata": {"name": "openshift-cert-manager-operator"}},
        {"metadata": {"name": "other"}},
    ]

    assert get_operator_subscription(ctx) == "openshift-cert-manager-operator"


def test_get_operator_subscription_none(ctx, store):
    with pytest.raises(NotFoundError):
        get_operator_subscription(ctx)


def test_get_operator_subscription_without_name(ctx, store):
    store.subscriptions[NAMESPACE] = [{"metadata": {}}]

    with pytest.raises(StructuralError):
        get_operator_subscription(ctx)


def test_patch_subscription_with_cloud_credential(ctx, store):
    store.subscriptions[NAMESPACE] = [{"metadata": {"name": "openshift-cert-manager-operator"}}]

    patch_subscription_with_cloud_credential(ctx, "aws-creds")

    assert store.patches == [(
        NAMESPACE,
        "openshift-cert-manager-operator",
        {"spec": {"config": {"env": [{"name": "CLOUD_CREDENTIALS_SECRET_NAME", "value": "aws-creds"}]}}},
    )]

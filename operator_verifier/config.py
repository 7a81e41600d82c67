"""Configuration settings for the operator verifier."""

# Operator CRD settings
OPERATOR_GROUP = "operator.openshift.io"
OPERATOR_VERSION = "v1alpha1"
OPERATOR_PLURAL = "certmanagers"
OPERATOR_KIND = "CertManager"
OPERATOR_NAME = "cluster"

# cert-manager CRD settings
CERTIFICATE_GROUP = "cert-manager.io"
CERTIFICATE_VERSION = "v1"
CERTIFICATE_PLURAL = "certificates"

# OLM subscription settings
SUBSCRIPTION_GROUP = "operators.coreos.com"
SUBSCRIPTION_VERSION = "v1alpha1"
SUBSCRIPTION_PLURAL = "subscriptions"
OPERATOR_NAMESPACE = "cert-manager-operator"

# Operand deployments
OPERAND_NAMESPACE = "cert-manager"
CONTROLLER_DEPLOYMENT = "cert-manager"
WEBHOOK_DEPLOYMENT = "cert-manager-webhook"
CAINJECTOR_DEPLOYMENT = "cert-manager-cainjector"

# Spec field holding the override block of each operand deployment
DEPLOYMENT_CONFIG_FIELDS = {
    CONTROLLER_DEPLOYMENT: "controllerConfig",
    WEBHOOK_DEPLOYMENT: "webhookConfig",
    CAINJECTOR_DEPLOYMENT: "cainjectorConfig",
}

# Sub-controller names, used as the prefix of status condition types
CONTROLLER_STATUS_NAME = "cert-manager-controller-deployment"
WEBHOOK_STATUS_NAME = "cert-manager-webhook-deployment"
CAINJECTOR_STATUS_NAME = "cert-manager-cainjector-deployment"
ALL_STATUS_NAMES = [CONTROLLER_STATUS_NAME, WEBHOOK_STATUS_NAME, CAINJECTOR_STATUS_NAME]

STATUS_NAME_BY_DEPLOYMENT = {
    CONTROLLER_DEPLOYMENT: CONTROLLER_STATUS_NAME,
    WEBHOOK_DEPLOYMENT: WEBHOOK_STATUS_NAME,
    CAINJECTOR_DEPLOYMENT: CAINJECTOR_STATUS_NAME,
}

# Condition statuses
CONDITION_TRUE = "True"
CONDITION_FALSE = "False"
CONDITION_UNKNOWN = "Unknown"

VALID_OPERATOR_STATUS_CONDITIONS = {
    "Available": CONDITION_TRUE,
    "Degraded": CONDITION_FALSE,
    "Progressing": CONDITION_FALSE,
}

INVALID_OPERATOR_STATUS_CONDITIONS = {
    "Available": CONDITION_FALSE,
    "Degraded": CONDITION_TRUE,
}

CERTIFICATE_READY_CONDITION = "Ready"

# Default operator spec restored between scenarios
DEFAULT_OPERATOR_SPEC = {"managementState": "Managed"}

# Poll settings (seconds)
POLL_INTERVAL_SECONDS = 1
POLL_TIMEOUT_SECONDS = 300

# Conflict retry settings
RETRY_STEPS = 5
RETRY_DURATION_SECONDS = 0.01
RETRY_FACTOR = 2.0
RETRY_JITTER = 0.1

# TLS secret keys
TLS_CERT_KEY = "tls.crt"
TLS_PRIVATE_KEY_KEY = "tls.key"

# Env var injected into the operator subscription for cloud credentials
CLOUD_CREDENTIALS_ENV = "CLOUD_CREDENTIALS_SECRET_NAME"

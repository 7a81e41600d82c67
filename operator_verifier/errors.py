"""Error types raised by the operator verifier."""

from typing import Dict, Optional


class VerifierError(Exception):
    """Base class for all verifier errors."""


class NotFoundError(VerifierError):
    """The requested object does not exist (yet)."""

    def __init__(self, kind: str, name: str, namespace: str = ""):
        self.kind = kind
        self.name = name
        self.namespace = namespace
        target = f"{namespace}/{name}" if namespace else name
        super().__init__(f"{kind} {target} not found")


class ConflictError(VerifierError):
    """A write was rejected because the object changed since it was read."""

    def __init__(self, kind: str, name: str, resource_version: Optional[str] = None):
        self.kind = kind
        self.name = name
        self.resource_version = resource_version
        super().__init__(
            f"conflict updating {kind} {name} at resourceVersion {resource_version}"
        )


class StoreError(VerifierError):
    """Any other failure reported by the API server."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class PollTimeoutError(VerifierError):
    """The polled condition was not satisfied before the timeout."""

    def __init__(self, timeout: float, description: str = "condition"):
        self.timeout = timeout
        super().__init__(f"timed out after {timeout}s waiting for {description}")


class StructuralError(VerifierError):
    """An object is malformed in a way retrying cannot fix."""


class CertificateError(VerifierError):
    """TLS material could not be parsed."""


class AggregateError(VerifierError):
    """Failures of several concurrent pollers, keyed by sub-controller name."""

    def __init__(self, errors: Dict[str, Exception]):
        self.errors = dict(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [f"{name}: {err}" for name, err in self.errors.items()]
        if len(parts) == 1:
            return parts[0]
        return "[" + ", ".join(parts) + "]"

    def __len__(self) -> int:
        return len(self.errors)

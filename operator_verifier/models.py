"""Parsed views of the CertManager operator object."""

from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field

from .config import DEPLOYMENT_CONFIG_FIELDS


@dataclass
class Condition:
    """A single status condition."""
    type: str
    status: str
    reason: str = ""
    message: str = ""
    
    @classmethod
    def from_crd(cls, obj: Dict[str, Any]) -> "Condition":
        """Create Condition from a status.conditions entry."""
        return cls(
            type=obj.get("type", ""),
            status=obj.get("status", ""),
            reason=obj.get("reason", ""),
            message=obj.get("message", ""),
        )


@dataclass
class DeploymentConfig:
    """Override block for one operand deployment."""
    override_args: List[str] = field(default_factory=list)
    override_resources: Dict[str, Dict[str, str]] = field(default_factory=dict)
    
    @classmethod
    def from_crd(cls, obj: Dict[str, Any]) -> "DeploymentConfig":
        return cls(
            override_args=list(obj.get("overrideArgs") or []),
            override_resources=dict(obj.get("overrideResources") or {}),
        )


@dataclass
class OperatorStatus:
    """Parsed CertManager object as seen by the condition pollers."""
    name: str
    deletion_timestamp: Optional[str] = None
    conditions: List[Condition] = field(default_factory=list)
    deployment_configs: Dict[str, DeploymentConfig] = field(default_factory=dict)
    
    @classmethod
    def from_crd(cls, crd_object: Dict[str, Any]) -> "OperatorStatus":
        """Create OperatorStatus from CRD object."""
        metadata = crd_object.get("metadata", {})
        spec = crd_object.get("spec") or {}
        status = crd_object.get("status") or {}
        
        configs = {}
        for deployment_name, spec_field in DEPLOYMENT_CONFIG_FIELDS.items():
            if spec.get(spec_field) is not None:
                configs[deployment_name] = DeploymentConfig.from_crd(spec[spec_field])
        
        return cls(
            name=metadata.get("name", ""),
            deletion_timestamp=metadata.get("deletionTimestamp"),
            conditions=[Condition.from_crd(c) for c in status.get("conditions") or []],
            deployment_configs=configs,
        )
    
    @property
    def deleting(self) -> bool:
        return self.deletion_timestamp is not None
    
    def conditions_match(self, controller_name: str, expected: Dict[str, str]) -> bool:
        """
        Check the conditions belonging to a sub-controller.
        
        The condition type has the controller name stripped from its front;
        conditions whose remaining suffix is not in expected are ignored.
        """
        for condition in self.conditions:
            suffix = condition.type.removeprefix(controller_name)
            if suffix in expected and condition.status != expected[suffix]:
                return False
        return True

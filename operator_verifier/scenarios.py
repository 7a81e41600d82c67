"""Override scenarios run against a live cluster."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from .aggregator import verify_operator_status_condition
from .assertions import verify_deployment_args, verify_deployment_resources
from .config import (
    ALL_STATUS_NAMES,
    CONTROLLER_DEPLOYMENT,
    WEBHOOK_DEPLOYMENT,
    CAINJECTOR_DEPLOYMENT,
    STATUS_NAME_BY_DEPLOYMENT,
    VALID_OPERATOR_STATUS_CONDITIONS,
    INVALID_OPERATOR_STATUS_CONDITIONS,
)
from .context import VerifierContext
from .errors import VerifierError
from .mutator import add_override_args, add_override_resources, reset_operator_state

logger = logging.getLogger(__name__)

VALID_CONTROLLER_ARGS = [
    "--dns01-recursive-nameservers=10.10.10.10:53",
    "--dns01-recursive-nameservers-only",
    "--enable-certificate-owner-ref",
    "--v=3",
]
# Controller-only flags, rejected by the webhook and cainjector
CONTROLLER_ONLY_ARGS = VALID_CONTROLLER_ARGS[:3]

VALID_RESOURCES = {
    "limits": {"cpu": "500m", "memory": "128Mi"},
    "requests": {"cpu": "20m", "memory": "64Mi"},
}
INVALID_RESOURCES = {
    "limits": {"ephemeral-storage": "2Gi"},
    "requests": {"ephemeral-storage": "1Gi"},
}


@dataclass
class OverrideScenario:
    """One override applied to one operand deployment."""
    name: str
    deployment: str
    valid: bool
    args: List[str] = field(default_factory=list)
    resources: Dict[str, Dict[str, str]] = field(default_factory=dict)
    
    @property
    def expected_conditions(self) -> Dict[str, str]:
        if self.valid:
            return VALID_OPERATOR_STATUS_CONDITIONS
        return INVALID_OPERATOR_STATUS_CONDITIONS


def default_scenarios() -> List[OverrideScenario]:
    """The override suite: valid and invalid args and resources per operand."""
    scenarios = [
        OverrideScenario("valid controller args", CONTROLLER_DEPLOYMENT, True, args=VALID_CONTROLLER_ARGS),
        OverrideScenario("valid webhook args", WEBHOOK_DEPLOYMENT, True, args=["--v=3"]),
        OverrideScenario("valid cainjector args", CAINJECTOR_DEPLOYMENT, True, args=["--v=3"]),
        OverrideScenario("invalid controller args", CONTROLLER_DEPLOYMENT, False, args=["--invalid-args=foo"]),
        OverrideScenario("invalid webhook args", WEBHOOK_DEPLOYMENT, False, args=CONTROLLER_ONLY_ARGS),
        OverrideScenario("invalid cainjector args", CAINJECTOR_DEPLOYMENT, False, args=CONTROLLER_ONLY_ARGS),
    ]
    for deployment, label in (
        (CONTROLLER_DEPLOYMENT, "controller"),
        (WEBHOOK_DEPLOYMENT, "webhook"),
        (CAINJECTOR_DEPLOYMENT, "cainjector"),
    ):
        scenarios.append(
            OverrideScenario(f"valid {label} resources", deployment, True, resources=VALID_RESOURCES)
        )
    for deployment, label in (
        (CONTROLLER_DEPLOYMENT, "controller"),
        (WEBHOOK_DEPLOYMENT, "webhook"),
        (CAINJECTOR_DEPLOYMENT, "cainjector"),
    ):
        scenarios.append(
            OverrideScenario(f"invalid {label} resources", deployment, False, resources=INVALID_RESOURCES)
        )
    return scenarios


class OverridesRunner:
    """Runs override scenarios, resetting the operator around each one."""
    
    def __init__(self, ctx: VerifierContext):
        self.ctx = ctx
    
    def reset(self) -> None:
        """Restore the default operator state and wait for it to be available."""
        reset_operator_state(self.ctx)
        verify_operator_status_condition(
            self.ctx, ALL_STATUS_NAMES, VALID_OPERATOR_STATUS_CONDITIONS
        )
    
    def run_scenario(self, scenario: OverrideScenario) -> None:
        """Apply one override and check the operand reflects it."""
        status_name = STATUS_NAME_BY_DEPLOYMENT[scenario.deployment]
        
        if scenario.args:
            add_override_args(self.ctx, scenario.deployment, scenario.args)
        else:
            add_override_resources(self.ctx, scenario.deployment, scenario.resources)
        
        verify_operator_status_condition(self.ctx, [status_name], scenario.expected_conditions)
        
        if scenario.args:
            verify_deployment_args(self.ctx, scenario.deployment, scenario.args, scenario.valid)
        else:
            verify_deployment_resources(self.ctx, scenario.deployment, scenario.resources, scenario.valid)
    
    def run(self, scenarios: Optional[List[OverrideScenario]] = None) -> List[Dict[str, Any]]:
        """
        Run scenarios in order.
        
        Returns:
            One result dict per scenario with name, status and error
        """
        scenarios = scenarios if scenarios is not None else default_scenarios()
        results = []
        
        try:
            for scenario in scenarios:
                result = {"name": scenario.name, "status": "passed", "error": ""}
                logger.info(f"Scenario: {scenario.name}")

                try:
                    self.reset()
                    self.run_scenario(scenario)
                except VerifierError as e:
                    logger.error(f"Scenario {scenario.name} failed: {e}")
                    result["status"] = "failed"
                    result["error"] = str(e)
                except Exception as e:
                    logger.error(f"Unexpected error in scenario {scenario.name}: {e!r}")
                    result["status"] = "error"
                    result["error"] = repr(e)

                results.append(result)
        finally:
            self.reset()

        passed = sum(1 for r in results if r["status"] == "passed")
        logger.info(f"{passed}/{len(results)} scenario(s) passed")
        return results

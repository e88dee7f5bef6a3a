"""
Rule appliers, one per rule kind a template can declare.
"""
from typing import List

from ..MODELS.circuit_template import TemplateRules
from .base import CircuitBuilder, Rule
from .create_services import CreateServices
from .set_management_type import SetManagementType
from .set_metadata import SetMetadata


def rules_for(rules: TemplateRules) -> List[Rule]:
    """
    Returns the appliers for the rules present, in application order.
    """
    appliers: List[Rule] = []
    if rules.set_management_type is not None:
        appliers.append(SetManagementType(rules.set_management_type))
    if rules.create_services is not None:
        appliers.append(CreateServices(rules.create_services))
    if rules.set_metadata is not None:
        appliers.append(SetMetadata(rules.set_metadata))
    return appliers


__all__ = ["CircuitBuilder", "Rule", "CreateServices", "SetManagementType", "SetMetadata", "rules_for"]

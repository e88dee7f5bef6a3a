"""
The set-management-type rule.
"""
from ..MODELS.circuit_template import SetManagementTypeRule
from .base import CircuitBuilder, Rule


class SetManagementType(Rule):
    """
    Sets the circuit management type.
    """
    name = "set-management-type"

    def __init__(self, rule: SetManagementTypeRule):
        self.rule = rule

    def apply(self, builder: CircuitBuilder, resolver):
        builder.circuit_management_type = self.rule.management_type

"""
Shared pieces for rule appliers.
"""
import json
from typing import List, Optional

from ..MANAGERS.argument_resolver import ArgumentResolver
from ..MODELS.circuit_definition import CreateCircuit, SplinterNode, SplinterService
from ..UTILS.placeholder import Value


def encode_value(value: Value) -> str:
    """
    Service arguments are strings; lists travel as JSON arrays.
    """
    if isinstance(value, list):
        return json.dumps(value)
    return value


class CircuitBuilder:
    """
    Collects the pieces of a circuit while rules are applied.
    """
    def __init__(self):
        self.circuit_id: Optional[str] = None
        self.circuit_management_type: Optional[str] = None
        self.nodes: List[str] = []
        self.roster: List[SplinterService] = []
        self.members: List[SplinterNode] = []
        self.application_metadata: bytes = b""

    def build(self) -> CreateCircuit:
        return CreateCircuit(
            circuit_id=self.circuit_id,
            roster=self.roster,
            members=self.members,
            circuit_management_type=self.circuit_management_type,
            application_metadata=self.application_metadata,
        )


class Rule:
    """
    Base class for rule appliers.
    """
    name = ""

    def apply(self, builder: CircuitBuilder, resolver: ArgumentResolver):
        raise NotImplementedError

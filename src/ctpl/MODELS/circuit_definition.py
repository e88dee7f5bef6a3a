"""
Models for the circuit-creation payload produced by rendering a template.
"""
import hashlib
import json
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class AuthorizationType(str, Enum):
    TRUST_AUTHORIZATION = "TRUST_AUTHORIZATION"


class PersistenceType(str, Enum):
    ANY_PERSISTENCE = "ANY_PERSISTENCE"


class DurabilityType(str, Enum):
    NO_DURABILITY = "NO_DURABILITY"


class RouteType(str, Enum):
    ANY_ROUTE = "ANY_ROUTE"


class SplinterNode(BaseModel):
    """
    A member node of the circuit and the endpoint it is reachable on.
    """
    node_id: str
    endpoint: str


class ServiceArgument(BaseModel):
    key: str
    value: str


class SplinterService(BaseModel):
    """
    A service instance in the circuit roster.
    """
    service_id: str
    service_type: str
    allowed_nodes: List[str] = []
    arguments: List[ServiceArgument] = []

    def argument(self, key: str) -> Optional[str]:
        for arg in self.arguments:
            if arg.key == key:
                return arg.value
        return None


class CreateCircuit(BaseModel):
    """
    Fully resolved instructions for creating a circuit.
    """
    circuit_id: Optional[str] = None
    roster: List[SplinterService] = []
    members: List[SplinterNode] = []
    authorization_type: AuthorizationType = AuthorizationType.TRUST_AUTHORIZATION
    persistence: PersistenceType = PersistenceType.ANY_PERSISTENCE
    durability: DurabilityType = DurabilityType.NO_DURABILITY
    routes: RouteType = RouteType.ANY_ROUTE
    circuit_management_type: Optional[str] = None
    application_metadata: bytes = Field(default=b"")

    def service(self, service_id: str) -> Optional[SplinterService]:
        for svc in self.roster:
            if svc.service_id == service_id:
                return svc
        return None

    def metadata(self) -> Dict[str, Any]:
        """
        Decodes the JSON application metadata.

        :return: The metadata mapping, empty when none was set.
        """
        if not self.application_metadata:
            return {}
        return json.loads(self.application_metadata.decode("utf-8"))

    def to_dict(self, decode_metadata: bool = False) -> Dict[str, Any]:
        """
        Returns a JSON-compatible representation.

        :param decode_metadata: Show the metadata as a mapping instead of a string.
        """
        data = self.model_dump(mode="json")
        if decode_metadata:
            data["application_metadata"] = self.metadata()
        return data

    def circuit_hash(self) -> str:
        """
        Returns the hex SHA-256 digest of the canonical JSON encoding.
        """
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

"""
The create-services rule: one service per circuit node.
"""
from typing import List

from ..MANAGERS.argument_resolver import ArgumentResolver
from ..MODELS.circuit_definition import ServiceArgument, SplinterService
from ..MODELS.circuit_template import ALL_OTHER_SERVICES, NODES_ARGUMENT, CreateServicesRule
from ..UTILS.errors import TemplateRenderError
from ..UTILS.log import get_logger
from ..UTILS.service_ids import next_service_id
from .base import CircuitBuilder, Rule, encode_value

logger = get_logger(__name__)


class CreateServices(Rule):
    """
    Creates a service of the configured type for every node in NODES.
    Service ids count up from ``first-service``; each service sees the ids
    of the others through $(ALL_OTHER_SERVICES).
    """
    name = "create-services"

    def __init__(self, rule: CreateServicesRule):
        self.rule = rule

    def service_ids(self, count: int) -> List[str]:
        """
        Allocates ``count`` consecutive service ids.

        :param count: Number of ids.
        :return: The ids, starting with ``first-service``.
        :raises TemplateRenderError: If the id space runs out.
        """
        ids = []
        current = self.rule.first_service
        for i in range(count):
            if i > 0:
                try:
                    current = next_service_id(current)
                except ValueError as e:
                    raise TemplateRenderError(f"Cannot allocate {count} service ids: {e}") from e
            ids.append(current)
        return ids

    def apply(self, builder: CircuitBuilder, resolver: ArgumentResolver):
        nodes = resolver.resolve_list(NODES_ARGUMENT)
        if not nodes:
            raise TemplateRenderError(f"Argument {NODES_ARGUMENT} must name at least one node")
        duplicates = sorted({n for n in nodes if nodes.count(n) > 1})
        if duplicates:
            raise TemplateRenderError(f"Duplicate node id(s) in {NODES_ARGUMENT}: {', '.join(duplicates)}")

        builder.nodes = nodes
        ids = self.service_ids(len(nodes))

        for service_id, node_id in zip(ids, nodes):
            others = [other for other in ids if other != service_id]
            service_resolver = resolver.with_builtins({ALL_OTHER_SERVICES: others})
            arguments = [
                ServiceArgument(key=arg.key, value=encode_value(service_resolver.interpolate(arg.value)))
                for arg in self.rule.service_args
            ]
            builder.roster.append(SplinterService(
                service_id=service_id,
                service_type=self.rule.service_type,
                allowed_nodes=[node_id],
                arguments=arguments,
            ))
            logger.debug("Created %s service %s on node %s", self.rule.service_type, service_id, node_id)

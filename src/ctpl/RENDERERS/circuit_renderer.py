# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Rendering of circuit templates into circuit-creation payloads.
"""
from typing import Mapping, Optional

from ..MANAGERS.argument_resolver import ArgumentResolver
from ..MODELS.circuit_definition import CreateCircuit, SplinterNode
from ..MODELS.circuit_template import NODES_ARGUMENT, CircuitTemplate
from ..RULES import CircuitBuilder, rules_for
from ..UTILS.errors import TemplateRenderError
from ..UTILS.log import get_logger
from ..UTILS.placeholder import Value

logger = get_logger(__name__)


class CircuitRenderer:
    """
    Renders a template with a concrete set of arguments.
    """
    def __init__(self, template: CircuitTemplate):
        """
        Initializes the renderer.

        :param template: A parsed circuit template.
        """
        self.template = template
        self.rules = rules_for(template.rules)

    def render(self,
               arguments: Optional[Mapping[str, Value]] = None,
               circuit_id: Optional[str] = None,
               node_endpoints: Optional[Mapping[str, str]] = None) -> CreateCircuit:
        """
        Substitutes the arguments into the template and applies its rules.

        :param arguments: Argument values, strings or lists of strings.
        :param circuit_id: Identifier of the circuit being created.
        :param node_endpoints: Endpoint of each node, used to fill in members.
        :return: The fully resolved circuit-creation payload.
        :raises TemplateRenderError: If the arguments cannot satisfy the template.
        """
        resolver = ArgumentResolver(self.template, arguments)
        builder = CircuitBuilder()
        builder.circuit_id = circuit_id

        for rule in self.rules:
            logger.debug("Applying rule %s", rule.name)
            rule.apply(builder, resolver)

        if node_endpoints is not None:
            nodes = builder.nodes
            if not nodes and self.template.argument(NODES_ARGUMENT) is not None:
                nodes = resolver.resolve_list(NODES_ARGUMENT)
            missing = [node for node in nodes if node not in node_endpoints]
            if missing:
                raise TemplateRenderError(f"No endpoint given for node(s): {', '.join(missing)}")
            builder.members = [SplinterNode(node_id=node, endpoint=node_endpoints[node]) for node in nodes]

        circuit = builder.build()
        logger.info(
            "Rendered template %s: %d service(s), management type %s",
            self.template.name or "<unnamed>", len(circuit.roster), circuit.circuit_management_type,
        )
        return circuit

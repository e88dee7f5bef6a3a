"""
The set-metadata rule.
"""
import json

from ..MANAGERS.argument_resolver import ArgumentResolver
from ..MODELS.circuit_template import SetMetadataRule
from .base import CircuitBuilder, Rule


class SetMetadata(Rule):
    """
    Renders the metadata pairs and stores them, encoded, as application metadata.
    """
    name = "set-metadata"

    def __init__(self, rule: SetMetadataRule):
        self.rule = rule

    def apply(self, builder: CircuitBuilder, resolver: ArgumentResolver):
        metadata = {}
        for pair in self.rule.metadata:
            metadata[pair.key] = resolver.interpolate(pair.value)
        # only json is accepted by SetMetadataRule
        builder.application_metadata = json.dumps(metadata).encode("utf-8")

"""
Converter producing a human-readable summary of a circuit template.
"""
from jinja2 import Template
from ..MODELS.circuit_template import CircuitTemplate

SUMMARY_TEMPLATE = """\
Template: {{ name or '<unnamed>' }} (version {{ version }})
{% if management_type %}Management type: {{ management_type }}
{% endif %}
Arguments:
{% for arg in args %}  {{ arg.name }}{{ ' (required)' if arg.required else '' }}{% if arg.default is not none %} [default: {{ arg.default }}]{% endif %}
{% if arg.description %}      {{ arg.description }}
{% endif %}{% else %}  (none)
{% endfor %}
Rules:
{% for rule in rules %}  - {{ rule }}
{% else %}  (none)
{% endfor %}
{% if services %}Services: {{ services.service_type }} per node, starting at {{ services.first_service }}
{% for arg in services.service_args %}  {{ arg.key }} = {{ arg.value }}
{% endfor %}{% endif %}
{% if metadata %}Metadata ({{ metadata.encoding }}):
{% for pair in metadata.metadata %}  {{ pair.key }} = {{ pair.value }}
{% endfor %}{% endif %}"""


class TemplateSummaryConverter:
    """
    Renders a circuit template as a text summary.
    """

    def __init__(self, template: CircuitTemplate):
        """
        Initializes the summary converter.

        :param template: The parsed circuit template.
        """
        self.template = template
        self.jinja_template = Template(SUMMARY_TEMPLATE, trim_blocks=False, keep_trailing_newline=True)

    def convert(self) -> str:
        """
        Generates the summary text.

        :return: The summary.
        """
        rules = self.template.rules
        present = [alias for alias, rule in (
            ("set-management-type", rules.set_management_type),
            ("create-services", rules.create_services),
            ("set-metadata", rules.set_metadata),
        ) if rule is not None]

        return self.jinja_template.render(
            name=self.template.name,
            version=self.template.version,
            management_type=rules.set_management_type.management_type if rules.set_management_type else None,
            args=self.template.args,
            rules=present,
            services=rules.create_services,
            metadata=rules.set_metadata,
        )

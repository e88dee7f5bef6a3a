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
Unit tests for the circuit template parser and models.
"""
import pytest
from ctpl.MODELS.circuit_template import CircuitTemplate
from ctpl.PARSERS.template_parser import TemplateParser
from ctpl.UTILS.errors import (
    TemplateParseError,
    TemplateValidationError,
    UnknownRuleError,
    UnsupportedVersionError,
)

MINIMAL = """
version: v1
args:
    - name: NODES
      required: true
rules:
    set-management-type:
        management-type: "chess"
"""


def template_with(args="", rules=""):
    return "version: v1\nargs:\n" + (args or "    []\n") + "rules:\n" + (rules or "    {}\n")


class TestTemplateParser:
    """Tests for TemplateParser."""

    def test_parse_gameroom(self, gameroom_path):
        """The bundled gameroom template parses with every rule present."""
        template = TemplateParser().parse(gameroom_path)
        assert template.name == "gameroom"
        assert template.version == "v1"
        assert template.argument_names() == ["ADMIN_KEYS", "NODES", "SIGNER_PUB_KEY", "GAMEROOM_NAME"]
        assert template.required_arguments() == ["NODES", "GAMEROOM_NAME"]
        assert template.argument("ADMIN_KEYS").default == "$(SIGNER_PUB_KEY)"
        assert template.argument("ADMIN_KEYS").description.startswith("Public keys used")

        rules = template.rules
        assert rules.set_management_type.management_type == "gameroom"
        assert rules.create_services.service_type == "scabbard"
        assert rules.create_services.first_service == "a000"
        assert [a.key for a in rules.create_services.service_args] == ["admin_keys", "peer_services"]
        assert rules.create_services.service_args[0].value == ["$(ADMIN_KEYS)"]
        assert rules.create_services.service_args[1].value == "$(ALL_OTHER_SERVICES)"
        assert rules.set_metadata.encoding == "json"
        assert [m.key for m in rules.set_metadata.metadata] == ["scabbard_admin_keys", "alias"]

    def test_placeholders(self, gameroom_template):
        assert gameroom_template.placeholders() == [
            "SIGNER_PUB_KEY", "ADMIN_KEYS", "ALL_OTHER_SERVICES", "GAMEROOM_NAME",
        ]

    def test_parse_from_string_minimal(self):
        template = TemplateParser().parse_from_string(MINIMAL, name="chess")
        assert template.name == "chess"
        assert template.rules.create_services is None
        assert template.rules.set_management_type.management_type == "chess"

    def test_parse_missing_file(self):
        with pytest.raises(FileNotFoundError):
            TemplateParser().parse("non_existent_template_12345.yaml")

    def test_to_dict_uses_document_keys(self, gameroom_template):
        data = gameroom_template.to_dict()
        assert set(data) == {"version", "args", "rules"}
        assert data["rules"]["create-services"]["first-service"] == "a000"
        reparsed = TemplateParser().parse_from_dict(data, name="gameroom")
        assert reparsed == gameroom_template

    def test_scalars_become_text(self):
        content = template_with(
            args="    - name: NODES\n      required: true\n    - name: PORT\n      default: 8080\n",
            rules="    set-metadata:\n        encoding: json\n        metadata:\n            - key: enabled\n              value: true\n",
        )
        template = TemplateParser().parse_from_string(content)
        assert template.argument("PORT").default == "8080"
        assert template.rules.set_metadata.metadata[0].value == "true"


class TestTemplateParseErrors:
    """Tests for parse and validation failures."""

    @pytest.mark.parametrize("content", ["", "   \n", "# only a comment\n"])
    def test_empty_document(self, content):
        with pytest.raises(TemplateParseError, match="empty"):
            TemplateParser().parse_from_string(content)

    def test_not_a_mapping(self):
        with pytest.raises(TemplateParseError, match="mapping"):
            TemplateParser().parse_from_string("- a\n- b\n")

    def test_invalid_yaml(self):
        with pytest.raises(TemplateParseError, match="Invalid YAML"):
            TemplateParser().parse_from_string("version: [v1\nargs: {")

    def test_missing_keys(self):
        with pytest.raises(TemplateParseError, match="args, rules"):
            TemplateParser().parse_from_string("version: v1\n")

    def test_unknown_top_level_key(self):
        with pytest.raises(TemplateParseError, match="extra"):
            TemplateParser().parse_from_string("version: v1\nargs: []\nrules: {}\nextra: 1\n")

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedVersionError) as exc:
            TemplateParser().parse_from_string("version: v2\nargs: []\nrules: {}\n")
        assert exc.value.version == "v2"
        assert isinstance(exc.value, TemplateParseError)

    def test_unknown_rule(self):
        content = template_with(rules="    create-network:\n        name: x\n")
        with pytest.raises(UnknownRuleError) as exc:
            TemplateParser().parse_from_string(content)
        assert exc.value.rule == "create-network"

    def test_required_argument_with_default(self):
        content = template_with(args="    - name: NODES\n      required: true\n      default: a,b\n")
        with pytest.raises(TemplateValidationError, match="required"):
            TemplateParser().parse_from_string(content)

    def test_duplicate_argument(self):
        content = template_with(args="    - name: A\n    - name: A\n")
        with pytest.raises(TemplateValidationError, match="more than once"):
            TemplateParser().parse_from_string(content)

    def test_undeclared_placeholder_in_rules(self):
        content = template_with(
            rules="    set-metadata:\n        encoding: json\n        metadata:\n            - key: alias\n              value: $(NAME)\n",
        )
        with pytest.raises(TemplateValidationError, match=r"\$\(NAME\)"):
            TemplateParser().parse_from_string(content)

    def test_undeclared_placeholder_in_default(self):
        content = template_with(args="    - name: A\n      default: $(B)\n")
        with pytest.raises(TemplateValidationError, match=r"\$\(B\)"):
            TemplateParser().parse_from_string(content)

    def test_invalid_first_service(self):
        content = template_with(
            args="    - name: NODES\n      required: true\n",
            rules="    create-services:\n        service-type: scabbard\n        first-service: a-0\n",
        )
        with pytest.raises(TemplateValidationError, match="first-service"):
            TemplateParser().parse_from_string(content)

    def test_create_services_needs_nodes(self):
        content = template_with(
            rules="    create-services:\n        service-type: scabbard\n        first-service: a000\n",
        )
        with pytest.raises(TemplateValidationError, match="NODES"):
            TemplateParser().parse_from_string(content)

    def test_unsupported_encoding(self):
        content = template_with(rules="    set-metadata:\n        encoding: protobuf\n        metadata: []\n")
        with pytest.raises(TemplateValidationError, match="encoding"):
            TemplateParser().parse_from_string(content)

    def test_invalid_argument_name(self):
        content = template_with(args="    - name: 'BAD NAME'\n")
        with pytest.raises(TemplateValidationError, match="argument name"):
            TemplateParser().parse_from_string(content)

    def test_wrong_type_reports_location(self):
        content = template_with(args="    - name: A\n      required: maybe\n")
        with pytest.raises(TemplateParseError, match=r"args\.0\.required"):
            TemplateParser().parse_from_string(content)

    def test_parse_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            TemplateParser().parse_from_string("")


class TestCircuitTemplateModel:
    """Tests for building templates directly from Python."""

    def test_construct_by_field_name(self):
        template = CircuitTemplate(
            version="v1",
            args=[{"name": "NODES", "required": True}],
            rules={"create_services": {"service_type": "scabbard", "first_service": "b000"}},
        )
        assert template.rules.create_services.first_service == "b000"
        assert template.rules.create_services.service_args == []


class TestTemplateInvariants:
    """Tests for placeholder tokens, duplicate keys and the from_data entry point."""

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"version: v1\nargs: []\nrules: {}\n# \xff\xfe\n")
        with pytest.raises(TemplateParseError, match="Cannot read template"):
            TemplateParser().parse(str(path))

    @pytest.mark.parametrize("value", ["$(GAMEROOM-NAME)", "room $(1ST)", "$()", "[$(A B)]"])
    def test_malformed_placeholder(self, value):
        content = template_with(
            args="    - name: GAMEROOM_NAME\n",
            rules="    set-metadata:\n        encoding: json\n        metadata:\n"
                  "            - key: alias\n              value: '" + value + "'\n",
        )
        with pytest.raises(TemplateValidationError, match="Malformed placeholder"):
            TemplateParser().parse_from_string(content)

    def test_malformed_placeholder_in_default(self):
        content = template_with(args="    - name: A\n      default: '$(B-C)'\n")
        with pytest.raises(TemplateValidationError, match=r"\$\(B-C\)"):
            TemplateParser().parse_from_string(content)

    def test_duplicate_metadata_key(self):
        content = template_with(
            args="    - name: A\n",
            rules="    set-metadata:\n        encoding: json\n        metadata:\n"
                  "            - key: alias\n              value: first\n"
                  "            - key: alias\n              value: $(A)\n",
        )
        with pytest.raises(TemplateValidationError, match="Duplicate key 'alias'"):
            TemplateParser().parse_from_string(content)

    def test_duplicate_service_arg_key(self):
        content = template_with(
            args="    - name: NODES\n      required: true\n",
            rules="    create-services:\n        service-type: scabbard\n        first-service: a000\n"
                  "        service-args:\n"
                  "        - key: admin_keys\n          value: a\n"
                  "        - key: admin_keys\n          value: b\n",
        )
        with pytest.raises(TemplateValidationError, match="Duplicate key 'admin_keys'"):
            TemplateParser().parse_from_string(content)

    def test_from_data_raises_domain_errors(self):
        data = {"version": "v1", "args": [{"name": "A", "required": True, "default": "x"}], "rules": {}}
        with pytest.raises(TemplateValidationError, match="required"):
            CircuitTemplate.from_data(data)

    def test_from_data_reports_schema_location(self):
        with pytest.raises(TemplateParseError, match="rules"):
            CircuitTemplate.from_data({"version": "v1", "args": []})

    def test_from_data_names_template(self):
        template = CircuitTemplate.from_data({"version": "v1", "args": [], "rules": {}}, name="empty")
        assert template.name == "empty"

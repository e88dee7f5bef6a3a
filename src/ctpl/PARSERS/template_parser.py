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
Parsers for circuit template YAML files.
"""
import os
from typing import Any, Dict, Optional

import yaml

from ..MODELS.circuit_template import CircuitTemplate
from ..UTILS.errors import TemplateParseError
from ..UTILS.log import get_logger

logger = get_logger(__name__)

REQUIRED_KEYS = ("version", "args", "rules")


class TemplateParser:
    """
    Parser for circuit template files.
    """
    def parse(self, template_path: str) -> CircuitTemplate:
        """
        Parses a template file from a path. The file stem becomes the template name.

        :param template_path: Path to the template file.
        :return: Parsed template.
        """
        try:
            with open(template_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise TemplateParseError(f"Cannot read template {template_path}: {e}") from e
        name = os.path.splitext(os.path.basename(template_path))[0]
        logger.debug("Parsing template %s from %s", name, template_path)
        return self.parse_from_string(content, name=name)

    def parse_from_string(self, content: str, name: Optional[str] = None) -> CircuitTemplate:
        """
        Parses a template from a string.

        :param content: YAML content of the template.
        :param name: Name to give the template.
        :return: Parsed template.
        :raises TemplateParseError: If the content is not a valid template.
        """
        try:
            data = yaml.safe_load(content)
        except (yaml.YAMLError, ValueError) as e:
            raise TemplateParseError(f"Invalid YAML: {e}") from e
        return self.parse_from_dict(data, name=name)

    def parse_from_dict(self, data: Any, name: Optional[str] = None) -> CircuitTemplate:
        """
        Builds a template from already-loaded document data.

        :param data: The document mapping.
        :param name: Name to give the template.
        :return: Parsed template.
        :raises TemplateParseError: If the data is not a valid template.
        """
        if data is None:
            raise TemplateParseError("Template is empty")
        if not isinstance(data, dict):
            raise TemplateParseError(f"Template must be a mapping, got {type(data).__name__}")

        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise TemplateParseError(f"Template is missing required key(s): {', '.join(missing)}")
        unknown = [str(key) for key in data if key not in REQUIRED_KEYS]
        if unknown:
            raise TemplateParseError(f"Unknown top-level key(s): {', '.join(unknown)}")

        document: Dict[str, Any] = dict(data)
        if document["args"] is None:
            document["args"] = []
        if document["rules"] is None:
            document["rules"] = {}

        return CircuitTemplate.from_data(document, name=name)

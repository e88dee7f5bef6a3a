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
Models for circuit template documents: declared arguments and rules.
"""
import re
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..UTILS.errors import (
    TemplateParseError,
    TemplateValidationError,
    UnknownRuleError,
    UnsupportedVersionError,
)
from ..UTILS.placeholder import find_malformed_placeholders, find_placeholders
from ..UTILS.service_ids import is_valid_service_id

SUPPORTED_VERSIONS = ("v1",)
SUPPORTED_ENCODINGS = ("json",)

ALL_OTHER_SERVICES = "ALL_OTHER_SERVICES"
BUILTIN_PLACEHOLDERS = (ALL_OTHER_SERVICES,)

NODES_ARGUMENT = "NODES"

ARGUMENT_NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def _to_text(value: Any) -> Any:
    """
    YAML hands back ints, floats and bools for unquoted scalars; templates
    only deal in text.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, list):
        return [_to_text(v) for v in value]
    return value


class TemplateModel(BaseModel):
    """
    Base for template models: hyphenated YAML keys, unknown keys rejected.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class ArgumentDefinition(TemplateModel):
    """
    An argument the template accepts.
    """
    name: str
    required: bool = False
    default: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not ARGUMENT_NAME_PATTERN.match(value):
            raise TemplateValidationError(f"Invalid argument name: {value!r}")
        return value

    @field_validator("default", mode="before")
    @classmethod
    def _default_to_text(cls, value: Any) -> Any:
        return _to_text(value)

    @model_validator(mode="after")
    def _required_has_no_default(self) -> "ArgumentDefinition":
        if self.required and self.default is not None:
            raise TemplateValidationError(
                f"Argument {self.name} is required and cannot have a default"
            )
        return self


class RuleArgument(TemplateModel):
    """
    A key/value pair in a service-args or metadata list.
    """
    key: str
    value: Union[str, List[str]]

    @field_validator("value", mode="before")
    @classmethod
    def _value_to_text(cls, value: Any) -> Any:
        return _to_text(value)


def _reject_duplicate_keys(pairs: List[RuleArgument], rule: str) -> List[RuleArgument]:
    seen = set()
    for pair in pairs:
        if pair.key in seen:
            raise TemplateValidationError(f"Duplicate key '{pair.key}' in {rule}")
        seen.add(pair.key)
    return pairs


class SetManagementTypeRule(TemplateModel):
    management_type: str = Field(alias="management-type", min_length=1)


class CreateServicesRule(TemplateModel):
    """
    Creates one service of ``service_type`` per node.
    """
    service_type: str = Field(alias="service-type", min_length=1)
    service_args: List[RuleArgument] = Field(default_factory=list, alias="service-args")
    first_service: str = Field(alias="first-service")

    @field_validator("service_args")
    @classmethod
    def _unique_service_args(cls, value: List[RuleArgument]) -> List[RuleArgument]:
        return _reject_duplicate_keys(value, "create-services.service-args")

    @field_validator("first_service", mode="before")
    @classmethod
    def _check_first_service(cls, value: Any) -> Any:
        value = _to_text(value)
        if not is_valid_service_id(value):
            raise TemplateValidationError(
                f"first-service {value!r} must be 4 characters from 0-9, a-z, A-Z"
            )
        return value


class SetMetadataRule(TemplateModel):
    encoding: str
    metadata: List[RuleArgument] = Field(default_factory=list)

    @field_validator("metadata")
    @classmethod
    def _unique_metadata(cls, value: List[RuleArgument]) -> List[RuleArgument]:
        return _reject_duplicate_keys(value, "set-metadata.metadata")

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        if value not in SUPPORTED_ENCODINGS:
            raise TemplateValidationError(
                f"Unsupported metadata encoding {value!r} (supported: {', '.join(SUPPORTED_ENCODINGS)})"
            )
        return value


class TemplateRules(TemplateModel):
    """
    The rule set of a template. Every rule is optional.
    """
    set_management_type: Optional[SetManagementTypeRule] = Field(default=None, alias="set-management-type")
    create_services: Optional[CreateServicesRule] = Field(default=None, alias="create-services")
    set_metadata: Optional[SetMetadataRule] = Field(default=None, alias="set-metadata")

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_rules(cls, data: Any) -> Any:
        if isinstance(data, dict):
            known = set()
            for name, field in cls.model_fields.items():
                known.add(name)
                if field.alias:
                    known.add(field.alias)
            for rule in data:
                if rule not in known:
                    raise UnknownRuleError(str(rule))
        return data

    def rule_arguments(self) -> List[RuleArgument]:
        """
        All key/value pairs across rules, service args first.
        """
        pairs: List[RuleArgument] = []
        if self.create_services:
            pairs.extend(self.create_services.service_args)
        if self.set_metadata:
            pairs.extend(self.set_metadata.metadata)
        return pairs


class CircuitTemplate(TemplateModel):
    """
    A parsed and structurally validated circuit template.
    """
    version: str
    args: List[ArgumentDefinition] = Field(default_factory=list)
    rules: TemplateRules
    name: Optional[str] = None

    @field_validator("version", mode="before")
    @classmethod
    def _check_version(cls, value: Any) -> Any:
        value = _to_text(value)
        if value not in SUPPORTED_VERSIONS:
            raise UnsupportedVersionError(str(value), SUPPORTED_VERSIONS)
        return value

    @model_validator(mode="after")
    def _check_arguments(self) -> "CircuitTemplate":
        seen = set()
        for arg in self.args:
            if arg.name in seen:
                raise TemplateValidationError(f"Argument {arg.name} is declared more than once")
            seen.add(arg.name)

        values = [arg.default for arg in self.args] + [pair.value for pair in self.rules.rule_arguments()]
        for value in values:
            malformed = find_malformed_placeholders(value)
            if malformed:
                raise TemplateValidationError(f"Malformed placeholder {malformed[0]}")

        for name in self.placeholders():
            if name not in seen and name not in BUILTIN_PLACEHOLDERS:
                raise TemplateValidationError(
                    f"Placeholder $({name}) does not refer to a declared argument"
                )

        if self.rules.create_services is not None and NODES_ARGUMENT not in seen:
            raise TemplateValidationError(
                f"create-services requires the template to declare a {NODES_ARGUMENT} argument"
            )
        return self

    def argument(self, name: str) -> Optional[ArgumentDefinition]:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None

    def argument_names(self) -> List[str]:
        return [arg.name for arg in self.args]

    def required_arguments(self) -> List[str]:
        return [arg.name for arg in self.args if arg.required]

    def placeholders(self) -> List[str]:
        """
        Distinct placeholder names used in rules and argument defaults,
        in order of first appearance.
        """
        names: List[str] = []
        for arg in self.args:
            names.extend(find_placeholders(arg.default))
        for pair in self.rules.rule_arguments():
            names.extend(find_placeholders(pair.value))
        return list(dict.fromkeys(names))

    def to_dict(self) -> Dict[str, Any]:
        """
        Returns the template in its document form (hyphenated keys).
        """
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"name"})

    @classmethod
    def from_data(cls, data: Any, name: Optional[str] = None) -> "CircuitTemplate":
        """
        Builds a template from document data, raising the library's own errors.

        :param data: Mapping with version, args and rules.
        :param name: Name to give the template.
        :return: The validated template.
        :raises TemplateParseError: If the data breaks the template schema or invariants.
        """
        if not isinstance(data, dict):
            raise TemplateParseError(f"Template must be a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate({**data, "name": name})
        except ValidationError as e:
            raise translate_validation_error(e) from e


def translate_validation_error(error: ValidationError) -> TemplateParseError:
    """
    Surfaces our own exception when a validator raised one, otherwise
    summarises the first pydantic error with its location.
    """
    details = error.errors()
    for detail in details:
        original = (detail.get("ctx") or {}).get("error")
        if isinstance(original, TemplateParseError):
            return original

    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    if location:
        return TemplateParseError(f"Invalid template at {location}: {message}")
    return TemplateParseError(f"Invalid template: {message}")

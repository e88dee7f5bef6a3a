"""
Exceptions raised while loading, validating and rendering circuit templates.
"""
from typing import Iterable


class TemplateError(Exception):
    """
    Base class for every circuit template error.
    """


class TemplateParseError(TemplateError, ValueError):
    """
    The template document could not be parsed into a valid structure.
    """


class UnsupportedVersionError(TemplateParseError):
    """
    The template declares a schema version this library does not understand.
    """
    def __init__(self, version: str, supported: Iterable[str]):
        self.version = version
        self.supported = sorted(supported)
        super().__init__(
            f"Unsupported template version '{version}' (supported: {', '.join(self.supported)})"
        )


class UnknownRuleError(TemplateParseError):
    """
    The template names a rule kind this library does not know how to apply.
    """
    def __init__(self, rule: str):
        self.rule = rule
        super().__init__(f"Unknown rule '{rule}'")


class TemplateValidationError(TemplateParseError):
    """
    The template parsed but breaks one of its structural invariants.
    """


class TemplateRenderError(TemplateError):
    """
    The template could not be rendered with the supplied arguments.
    """


class MissingArgumentError(TemplateRenderError):
    """
    One or more required arguments were not supplied.
    """
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(f"Missing required argument(s): {', '.join(self.names)}")


class UnknownArgumentError(TemplateRenderError):
    """
    An argument was supplied that the template does not declare.
    """
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(f"Argument(s) not declared by template: {', '.join(self.names)}")


class UnresolvedPlaceholderError(TemplateRenderError, KeyError):
    """
    A placeholder could not be resolved to a value.
    """
    def __init__(self, name: str, reason: str = "no value available"):
        self.name = name
        self.reason = reason
        super().__init__(f"Unable to resolve placeholder $({name}): {reason}")

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return self.args[0]


class TemplateNotFoundError(TemplateError, FileNotFoundError):
    """
    No template with the requested name exists on the search path.
    """
    def __init__(self, name: str, paths: Iterable[str]):
        self.name = name
        self.paths = list(paths)
        super().__init__(f"Template '{name}' not found in: {', '.join(self.paths) or '<no paths>'}")

    def __str__(self) -> str:
        return self.args[0]

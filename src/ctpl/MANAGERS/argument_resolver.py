"""
Resolution of template arguments against supplied values, defaults and built-ins.
"""
from typing import Dict, List, Mapping, Optional, Set

from ..MODELS.circuit_template import CircuitTemplate
from ..UTILS.errors import MissingArgumentError, UnknownArgumentError, UnresolvedPlaceholderError
from ..UTILS.log import get_logger
from ..UTILS.placeholder import PlaceholderInterpolator, Value, split_list

logger = get_logger(__name__)


class ArgumentResolver:
    """
    Resolves argument names to values for one rendering of a template.
    """
    def __init__(self,
                 template: CircuitTemplate,
                 supplied: Optional[Mapping[str, Value]] = None,
                 builtins: Optional[Mapping[str, Value]] = None):
        """
        Initializes the resolver and checks the supplied arguments.

        :param template: The template whose arguments are resolved.
        :param supplied: Argument values given by the caller.
        :param builtins: Values for built-in placeholders.
        :raises UnknownArgumentError: If a supplied name is not declared.
        :raises MissingArgumentError: If a required argument is not supplied.
        """
        self.template = template
        self.supplied: Dict[str, Value] = {}
        for name, value in (supplied or {}).items():
            self.supplied[name] = list(value) if isinstance(value, (list, tuple)) else str(value)
        self.builtins: Dict[str, Value] = dict(builtins or {})

        declared = set(template.argument_names())
        unknown = [name for name in self.supplied if name not in declared]
        if unknown:
            raise UnknownArgumentError(unknown)

        missing = [name for name in template.required_arguments() if name not in self.supplied]
        if missing:
            raise MissingArgumentError(missing)

    def with_builtins(self, builtins: Mapping[str, Value]) -> "ArgumentResolver":
        """
        Returns a resolver sharing this one's arguments with extra built-ins.
        """
        child = ArgumentResolver.__new__(ArgumentResolver)
        child.template = self.template
        child.supplied = self.supplied
        child.builtins = {**self.builtins, **builtins}
        return child

    def resolve(self, name: str) -> Value:
        """
        Returns the value of an argument or built-in.

        :param name: The placeholder name.
        :return: The resolved value.
        :raises UnresolvedPlaceholderError: If no value can be found.
        """
        return self._resolve(name, set())

    def resolve_list(self, name: str) -> List[str]:
        return split_list(self.resolve(name))

    def interpolate(self, value: Value) -> Value:
        """
        Substitutes every placeholder in the value.
        """
        return PlaceholderInterpolator.interpolate(value, self.resolve)

    def _resolve(self, name: str, resolving: Set[str]) -> Value:
        if name in self.supplied:
            return self.supplied[name]

        definition = self.template.argument(name)
        if definition is not None:
            if definition.default is None:
                raise UnresolvedPlaceholderError(name, "argument was not supplied and has no default")
            if name in resolving:
                raise UnresolvedPlaceholderError(name, "default refers back to itself")
            resolving.add(name)
            value = PlaceholderInterpolator.interpolate(
                definition.default, lambda other: self._resolve(other, resolving)
            )
            resolving.discard(name)
            logger.debug("Argument %s resolved from default", name)
            return value

        if name in self.builtins:
            return self.builtins[name]

        raise UnresolvedPlaceholderError(name, "not a declared argument or built-in")

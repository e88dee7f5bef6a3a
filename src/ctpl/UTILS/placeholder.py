"""
Utilities for $(NAME) placeholder substitution in template values.
"""
import re
from typing import Callable, List, Union

from .errors import UnresolvedPlaceholderError

Value = Union[str, List[str]]

# Group 1: placeholder name
PLACEHOLDER_PATTERN = re.compile(r'\$\(([A-Za-z_][A-Za-z0-9_]*)\)')
# Any $(...) token, well formed or not
PLACEHOLDER_TOKEN_PATTERN = re.compile(r'\$\(([^)]*)\)')


def find_placeholders(value: Union[Value, None]) -> List[str]:
    """
    Returns placeholder names in order of appearance.

    :param value: A string, a list of strings, or None.
    :return: The names found, duplicates included.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return PLACEHOLDER_PATTERN.findall(value)
    names = []
    for item in value:
        names.extend(find_placeholders(item))
    return names


def find_malformed_placeholders(value: Union[Value, None]) -> List[str]:
    """
    Returns $(...) tokens whose name is not a valid identifier, e.g. '$(GAME-NAME)'.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [match.group(0) for match in PLACEHOLDER_TOKEN_PATTERN.finditer(value)
                if not PLACEHOLDER_PATTERN.fullmatch(match.group(0))]
    tokens = []
    for item in value:
        tokens.extend(find_malformed_placeholders(item))
    return tokens


def split_list(value: Value) -> List[str]:
    """
    Turns a value into a list; strings are split on commas and blank items dropped.
    """
    items = value if isinstance(value, list) else value.split(",")
    return [item.strip() for item in items if item and item.strip()]


def is_placeholder(value: str) -> bool:
    """
    True when the whole string is a single placeholder.
    """
    return isinstance(value, str) and PLACEHOLDER_PATTERN.fullmatch(value) is not None


class PlaceholderInterpolator:
    """
    Substitutes $(NAME) placeholders in strings and lists of strings.

    A string that is exactly one placeholder takes the looked-up value as-is,
    so it may become a list. Embedded placeholders are replaced textually and
    list values are joined with commas. A list item that is exactly one
    placeholder is split on commas, and list items resolving to lists are
    spliced into the result.
    """
    @staticmethod
    def interpolate(value: Value, lookup: Callable[[str], Value]) -> Value:
        """
        Interpolates placeholders in the value using the lookup callable.

        :param value: The string or list containing $(NAME) placeholders.
        :param lookup: Returns the value for a placeholder name.
        :return: The interpolated value.
        :raises UnresolvedPlaceholderError: If the lookup cannot resolve a name.
        """
        if isinstance(value, list):
            result: List[str] = []
            for item in value:
                rendered = PlaceholderInterpolator.interpolate(item, lookup)
                if is_placeholder(item) and isinstance(rendered, str):
                    rendered = split_list(rendered)
                if isinstance(rendered, list):
                    result.extend(rendered)
                else:
                    result.append(rendered)
            return result

        if not isinstance(value, str):
            raise TypeError(f"Cannot interpolate value of type {type(value).__name__}")

        match = PLACEHOLDER_PATTERN.fullmatch(value)
        if match:
            return PlaceholderInterpolator._lookup(match.group(1), lookup)

        def replace(match):
            """
            Internal replacement function for re.sub.
            """
            resolved = PlaceholderInterpolator._lookup(match.group(1), lookup)
            if isinstance(resolved, list):
                return ",".join(resolved)
            return resolved

        return PLACEHOLDER_PATTERN.sub(replace, value)

    @staticmethod
    def _lookup(name: str, lookup: Callable[[str], Value]) -> Value:
        try:
            return lookup(name)
        except UnresolvedPlaceholderError:
            raise
        except KeyError:
            raise UnresolvedPlaceholderError(name) from None

"""
Parsers for template argument values given on the command line or in files.
"""
from typing import Dict, Iterable

from dotenv import dotenv_values


class ArgumentParser:
    """
    Turns KEY=VALUE pairs and .env-style files into argument mappings.
    """
    @staticmethod
    def parse_pairs(pairs: Iterable[str]) -> Dict[str, str]:
        """
        Parses KEY=VALUE strings. Later pairs override earlier ones.

        Args:
            pairs (Iterable[str]): Strings of the form KEY=VALUE.

        Returns:
            Dict[str, str]: The argument values.

        Raises:
            ValueError: If a pair has no '=' or an empty key.
        """
        arguments = {}
        for pair in pairs:
            if '=' not in pair:
                raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
            key, value = pair.split('=', 1)
            key = key.strip()
            if not key:
                raise ValueError(f"Empty argument name in {pair!r}")
            arguments[key] = value.strip()
        return arguments

    @staticmethod
    def parse_file(args_path: str) -> Dict[str, str]:
        """
        Parses an .env-style file of argument values.
        Keys declared without a value are dropped.

        Args:
            args_path (str): Path to the file.

        Returns:
            Dict[str, str]: The argument values.
        """
        with open(args_path, 'r') as f:
            values = dotenv_values(stream=f)
        return {key: value for key, value in values.items() if value is not None}

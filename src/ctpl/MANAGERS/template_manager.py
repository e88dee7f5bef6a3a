"""
Discovery of circuit templates by name across a list of directories.
"""
import os
from typing import Dict, List, Optional

from ..MODELS.circuit_template import CircuitTemplate
from ..PARSERS.template_parser import TemplateParser
from ..UTILS.config import Settings
from ..UTILS.errors import TemplateNotFoundError
from ..UTILS.log import get_logger

logger = get_logger(__name__)

TEMPLATE_EXTENSIONS = (".yaml", ".yml")


class TemplateManager:
    """
    Finds and loads templates from a search path. When two directories hold a
    template with the same name, the earlier directory wins.
    """
    def __init__(self, paths: Optional[List[str]] = None):
        """
        Initializes the manager.

        :param paths: Directories to search, in order. Defaults to the configured paths.
        """
        self.paths = list(paths) if paths is not None else Settings.from_environ().template_paths
        self.parser = TemplateParser()

    def _scan(self) -> Dict[str, str]:
        found: Dict[str, str] = {}
        for directory in self.paths:
            if not os.path.isdir(directory):
                logger.debug("Skipping missing template directory %s", directory)
                continue
            for entry in sorted(os.listdir(directory)):
                stem, ext = os.path.splitext(entry)
                path = os.path.join(directory, entry)
                if ext in TEMPLATE_EXTENSIONS and os.path.isfile(path) and stem not in found:
                    found[stem] = path
        return found

    def list_templates(self) -> List[str]:
        """
        Returns the names of all templates on the search path.
        """
        return sorted(self._scan())

    def find(self, name: str) -> str:
        """
        Returns the path of the named template.

        :param name: Template name (file stem).
        :return: Path to the template file.
        :raises TemplateNotFoundError: If no directory holds the template.
        """
        path = self._scan().get(name)
        if path is None:
            raise TemplateNotFoundError(name, self.paths)
        return path

    @staticmethod
    def is_path(name_or_path: str) -> bool:
        separators = [sep for sep in (os.sep, os.altsep) if sep]
        return any(sep in name_or_path for sep in separators) or \
            os.path.splitext(name_or_path)[1] in TEMPLATE_EXTENSIONS

    def load(self, name_or_path: str) -> CircuitTemplate:
        """
        Loads a template by name, or directly when given a path. An argument
        with a directory separator or a template extension is treated as a path.

        :param name_or_path: Template name or path to a template file.
        :return: Parsed template.
        :raises TemplateNotFoundError: If the template does not exist.
        """
        if self.is_path(name_or_path):
            if not os.path.isfile(name_or_path):
                raise TemplateNotFoundError(name_or_path, [os.path.dirname(name_or_path) or os.curdir])
            return self.parser.parse(name_or_path)
        path = self.find(name_or_path)
        logger.info("Loading template %s from %s", name_or_path, path)
        return self.parser.parse(path)

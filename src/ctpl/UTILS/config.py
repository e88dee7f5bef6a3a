"""
Runtime settings, read from the process environment.
"""
import os
from typing import List, Mapping, Optional
from pydantic import BaseModel, Field, field_validator

from .log import is_valid_level

TEMPLATE_PATH_ENV = "CTPL_TEMPLATE_PATH"
LOG_LEVEL_ENV = "CTPL_LOG_LEVEL"

BUNDLED_TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "TEMPLATES")
SYSTEM_TEMPLATE_DIR = "/usr/share/splinter/circuit-templates"


class Settings(BaseModel):
    """
    Settings shared by the template manager and the CLI.
    """
    template_paths: List[str] = Field(default_factory=lambda: [BUNDLED_TEMPLATE_DIR, SYSTEM_TEMPLATE_DIR])
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        # unknown names fall back to WARNING
        value = value.strip().upper()
        return value if value and is_valid_level(value) else "WARNING"

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Builds settings from environment variables.

        ``CTPL_TEMPLATE_PATH`` holds extra template directories separated by
        ``os.pathsep``; they are searched before the default directories.

        :param environ: Mapping to read from, ``os.environ`` by default.
        :return: The settings.
        """
        environ = os.environ if environ is None else environ
        paths = [p for p in environ.get(TEMPLATE_PATH_ENV, "").split(os.pathsep) if p]
        defaults = cls()
        return cls(
            template_paths=paths + [p for p in defaults.template_paths if p not in paths],
            log_level=environ.get(LOG_LEVEL_ENV, defaults.log_level),
        )

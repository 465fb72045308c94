"""next-affected configuration.

NextAffectedConfig is the project configuration object, frozen after creation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from next_affected._errors import ConfigError

CONFIG_FILE_NAME = "next-affected.config.json"

DEFAULT_PAGES_DIRECTORIES: tuple[str, ...] = ("pages", "src/pages", "app", "src/app")
DEFAULT_EXCLUDED_EXTENSIONS: tuple[str, ...] = (".css", ".scss", ".less", ".svg", ".png", ".jpg")


@dataclass(frozen=True, slots=True)
class NextAffectedConfig:
    """Configuration for one next-affected run.

    Attributes:
        pages_directories: Page root directories relative to the project root.
            Order matters: the first directory that prefixes a page path is
            the one its route is derived from.
        excluded_extensions: File suffixes (each starting with ``.``) that are
            never traversed, e.g. stylesheets and images.
        excluded_paths: Directories or files, relative to the project root,
            whose modules are never traversed.

    """

    pages_directories: tuple[str, ...] = DEFAULT_PAGES_DIRECTORIES
    excluded_extensions: tuple[str, ...] = DEFAULT_EXCLUDED_EXTENSIONS
    excluded_paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples so the config stays hashable.
        for name in ("pages_directories", "excluded_extensions", "excluded_paths"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        for ext in self.excluded_extensions:
            if not ext.startswith("."):
                msg = f"Excluded extension {ext!r} must start with '.'"
                raise ConfigError(msg)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NextAffectedConfig:
        """Build a config from its persisted (camelCase) form.

        Missing keys fall back to defaults.

        Raises:
            ConfigError: If a value is not a list of strings.

        """
        kwargs: dict[str, tuple[str, ...]] = {}
        for key, attr in _PERSISTED_KEYS.items():
            if key not in data:
                continue
            value = data[key]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                msg = f"Config key {key!r} must be a list of strings, got {value!r}"
                raise ConfigError(msg)
            kwargs[attr] = tuple(value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, list[str]]:
        """Return the persisted (camelCase) form, suitable for JSON."""
        return {key: list(getattr(self, attr)) for key, attr in _PERSISTED_KEYS.items()}


# Persisted key -> attribute name
_PERSISTED_KEYS: dict[str, str] = {
    "pagesDirectories": "pages_directories",
    "excludedExtensions": "excluded_extensions",
    "excludedPaths": "excluded_paths",
}

"""Registry of temporal field paths per document type.

This module loads the resource path table from YAML once and exposes it
as an immutable mapping. Lookups are strict: an unregistered document
type is an error, never a silent no-op.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from core.constants import RESOURCE_PATHS_FILE_NAME
from core.errors import RegistryError, UnknownResourceTypeError
from core.types import PathSpec
from schema.path_resolver import parse_path_spec

DEFAULT_RESOURCE_PATHS_FILE = Path(__file__).resolve().parent / RESOURCE_PATHS_FILE_NAME


class PathSpecRegistry:
    """Immutable mapping from resource type to temporal path specs."""

    def __init__(self, table: Mapping[str, tuple[str, ...]]) -> None:
        self._raw_paths = MappingProxyType(dict(table))
        self._specs = MappingProxyType(
            {
                resource_type: tuple(parse_path_spec(path) for path in paths)
                for resource_type, paths in table.items()
            }
        )

    def lookup(self, resource_type: str) -> tuple[PathSpec, ...]:
        """Return parsed path specs for a resource type.

        Args:
            resource_type: Value of the document's ``resourceType`` field.

        Returns:
            Path specs, possibly empty for types without temporal fields.

        Raises:
            UnknownResourceTypeError: If the type is not registered.
        """
        try:
            return self._specs[resource_type]
        except KeyError as error:
            raise UnknownResourceTypeError(
                f'No paths defined for "{resource_type}" resource type. '
                "Add the type to the temporal path table before shifting."
            ) from error

    def raw_paths(self, resource_type: str) -> tuple[str, ...]:
        """Return dotted path strings as written in the table."""
        self.lookup(resource_type)
        return self._raw_paths[resource_type]

    def resource_types(self) -> list[str]:
        """Return sorted registered resource type names."""
        return sorted(self._specs)

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._specs


def load_registry(paths_file: Path) -> PathSpecRegistry:
    """Build a registry from a YAML path table.

    Args:
        paths_file: YAML file mapping type names to lists of dotted paths.

    Returns:
        Registry holding the validated table.

    Raises:
        RegistryError: If the file is missing, unparseable, or malformed.
    """
    try:
        payload = yaml.safe_load(paths_file.read_text(encoding="utf-8"))
    except OSError as error:
        raise RegistryError(
            f"Failed to read temporal path table at {paths_file}: {error}. "
            "Check the file path and permissions."
        ) from error
    except yaml.YAMLError as error:
        raise RegistryError(
            f"Failed to parse temporal path table at {paths_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    return PathSpecRegistry(_validate_table(payload, paths_file))


@lru_cache(maxsize=1)
def default_registry() -> PathSpecRegistry:
    """Return the registry built from the packaged path table."""
    return load_registry(DEFAULT_RESOURCE_PATHS_FILE)


def resolve_registry(paths_file: Path | None) -> PathSpecRegistry:
    """Return the override registry when configured, else the default."""
    if paths_file is None:
        return default_registry()
    return load_registry(paths_file)


def _validate_table(payload: object, paths_file: Path) -> dict[str, tuple[str, ...]]:
    """Check a loaded path table and convert it to registry input."""
    if not isinstance(payload, dict):
        raise RegistryError(
            f"Invalid temporal path table at {paths_file}: "
            f"expected a mapping of resource types, got {type(payload).__name__}."
        )
    table: dict[str, tuple[str, ...]] = {}
    for resource_type, paths in payload.items():
        if not isinstance(resource_type, str):
            raise RegistryError(
                f"Invalid temporal path table at {paths_file}: "
                f"resource type keys must be strings, got {resource_type!r}."
            )
        if paths is None:
            paths = []
        if not isinstance(paths, list) or not all(isinstance(path, str) for path in paths):
            raise RegistryError(
                f"Invalid temporal paths for {resource_type} in {paths_file}: "
                "expected a list of dotted path strings."
            )
        table[resource_type] = tuple(paths)
    return table

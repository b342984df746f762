"""Document-level temporal field rewriting.

This module walks one parsed FHIR document, resolves every registered
temporal path, and replaces matched values through a caller-supplied
rewrite callable. Bundles are walked entry by entry, at any depth.
"""

from __future__ import annotations

from typing import Any, Callable

from core.constants import BUNDLE_RESOURCE_TYPE, NARRATIVE_PATH, RESOURCE_TYPE_FIELD
from core.errors import UnknownResourceTypeError
from schema.path_registry import PathSpecRegistry, default_registry
from schema.path_resolver import resolve

Rewrite = Callable[[str, Any], Any]


def transform_document(
    document: dict[str, Any],
    rewrite: Rewrite,
    registry: PathSpecRegistry | None = None,
) -> dict[str, Any]:
    """Rewrite every temporal value of a document in place.

    Args:
        document: Parsed JSON document with a ``resourceType`` field.
        rewrite: Callable receiving the resolved path and current value,
            returning the replacement value.
        registry: Path table to consult, the packaged one when omitted.

    Returns:
        The same document object, mutated.

    Raises:
        UnknownResourceTypeError: If a document type is not registered.
    """
    registry = registry or default_registry()
    resource_type = document.get(RESOURCE_TYPE_FIELD)
    if resource_type == BUNDLE_RESOURCE_TYPE:
        for entry in document.get("entry") or []:
            resource = entry.get("resource") if isinstance(entry, dict) else None
            if isinstance(resource, dict):
                transform_document(resource, rewrite, registry)
        return document
    if not isinstance(resource_type, str):
        raise UnknownResourceTypeError(
            f"Document has no string {RESOURCE_TYPE_FIELD!r} field; "
            "cannot determine which temporal paths apply."
        )
    path_specs = registry.lookup(resource_type)
    _rewrite_narrative(document, rewrite)

    def rewrite_match(container: dict[str, Any], key: str, value: Any, path: str) -> None:
        if value:
            container[key] = rewrite(path, value)

    for path_spec in path_specs:
        resolve(document, path_spec, rewrite_match)
    return document


def _rewrite_narrative(document: dict[str, Any], rewrite: Rewrite) -> None:
    """Rewrite a resource's narrative div when present."""
    narrative = document.get("text")
    if isinstance(narrative, dict) and narrative.get("div"):
        narrative["div"] = rewrite(NARRATIVE_PATH, narrative["div"])

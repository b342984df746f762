"""Path spec parsing and resolution.

This module interprets the small dotted path grammar used by the
temporal path table. An empty segment descends into every element of
an array; all other segments step into a named field.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

from core.errors import RegistryError
from core.types import PathMatch, PathSpec

ARRAY_DESCENT_SEGMENT = ""

Visitor = Callable[[dict[str, Any], str, Any, str], None]


def parse_path_spec(text: str) -> PathSpec:
    """Parse a dotted path string into path segments.

    Args:
        text: Path such as ``participant..period.start``.

    Returns:
        Tuple of segments, with ``""`` marking array descent.

    Raises:
        RegistryError: If the path is empty or does not end in a field name.
    """
    if not isinstance(text, str) or not text.strip():
        raise RegistryError(
            f"Invalid temporal path {text!r}: expected a non-empty dotted string."
        )
    segments = tuple(text.split("."))
    if segments[-1] == ARRAY_DESCENT_SEGMENT:
        raise RegistryError(
            f"Invalid temporal path {text!r}: the last segment must be a field name."
        )
    return segments


def resolve(document: Any, path_spec: PathSpec, visit: Visitor) -> None:
    """Call ``visit`` once for every concrete location a path addresses.

    Missing intermediate nodes, scalars in the middle of a path, and
    array descent on non-arrays end the branch without a match.

    Args:
        document: Parsed JSON document.
        path_spec: Parsed path segments.
        visit: Callback receiving container, key, value, and resolved path.
    """
    if not path_spec:
        raise RegistryError("Temporal path cannot be empty.")
    _resolve_segments(document, path_spec, visit, ())


def iter_matches(document: Any, path_spec: PathSpec) -> Iterator[PathMatch]:
    """Yield every concrete match of a path spec.

    Args:
        document: Parsed JSON document.
        path_spec: Parsed path segments.

    Returns:
        Iterator of path matches in document order.
    """
    matches: list[PathMatch] = []

    def collect(container: dict[str, Any], key: str, value: Any, path: str) -> None:
        matches.append(PathMatch(container=container, key=key, value=value, path=path))

    resolve(document, path_spec, collect)
    return iter(matches)


def _resolve_segments(
    node: Any,
    segments: PathSpec,
    visit: Visitor,
    consumed: tuple[str, ...],
) -> None:
    """Walk the remaining segments below one node, visiting present leaves."""
    segment, remaining = segments[0], segments[1:]
    if remaining and not isinstance(node, (dict, list)):
        return
    if segment == ARRAY_DESCENT_SEGMENT:
        if not isinstance(node, list):
            return
        for index, element in enumerate(node):
            _resolve_segments(element, remaining, visit, consumed + (str(index),))
        return
    if not isinstance(node, dict) or segment not in node:
        return
    if not remaining:
        visit(node, segment, node[segment], ".".join(consumed + (segment,)))
        return
    _resolve_segments(node[segment], remaining, visit, consumed + (segment,))

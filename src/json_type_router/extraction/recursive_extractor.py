"""Exhaustive search for sub-documents inside a JSON tree."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from json_type_router.schema_catalog.catalog_models import SchemaDocument
from json_type_router.schema_validation.validator_adapter import (
    CompiledSchema,
    SchemaValidatorAdapter,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

Node = Any
Predicate = Callable[[Node], bool]


class MaxDepthExceeded(Exception):
    """Raised when a tree nests deeper than the configured limit."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Document nesting exceeds the maximum depth of {max_depth}.")


def is_container(node: Node) -> bool:
    """Return True for JSON objects and arrays."""
    if isinstance(node, (str, bytes)):
        return False
    return isinstance(node, (Mapping, Sequence))


def iter_children(node: Node) -> Iterator[Node]:
    """Yield array elements or object field values in document order."""
    if isinstance(node, Mapping):
        yield from node.values()
    elif is_container(node):
        yield from node


def extract(
    root: Node, predicate: Predicate, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> tuple[Node, ...]:
    """Return every container in ``root`` accepted by ``predicate``.

    The walk is depth-first and pre-order: a node is tested before its
    children, and the search keeps descending below nodes that already
    matched, so nested matches are reported after their matching ancestor.
    Scalars are never offered to ``predicate``.

    Raises:
      MaxDepthExceeded: If containers nest deeper than ``max_depth``.
    """
    if max_depth < 0:
        raise ValueError("max_depth must not be negative.")
    return tuple(_collect(root, predicate, max_depth=max_depth))


def extract_matches(
    root: Node,
    target: SchemaDocument | CompiledSchema,
    *,
    adapter: SchemaValidatorAdapter | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[Node, ...]:
    """Return every sub-document of ``root`` satisfying ``target``."""
    resolved_adapter = adapter or SchemaValidatorAdapter()
    compiled = (
        target if isinstance(target, CompiledSchema) else resolved_adapter.compile(target)
    )
    matches = extract(
        root,
        lambda node: resolved_adapter.matches(compiled, node),
        max_depth=max_depth,
    )
    LOGGER.debug("Found %d %s documents", len(matches), compiled.schema.tag.label)
    return matches


def _collect(root: Node, predicate: Predicate, *, max_depth: int) -> list[Node]:
    if not is_container(root):
        return []
    results: list[Node] = []
    # Children are pushed in reverse so they pop in document order.
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            raise MaxDepthExceeded(max_depth)
        if predicate(node):
            results.append(node)
        children = [child for child in iter_children(node) if is_container(child)]
        stack.extend((child, depth + 1) for child in reversed(children))
    return results

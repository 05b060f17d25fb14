# ABOUTME: Builds the refinement hierarchy from a flat list of metadata items.
# ABOUTME: Folds `refines` chains into each root item's children, breaking cycles.

import logging
from collections import deque
from dataclasses import dataclass, field, replace

from opfmeta.metadata.types import MetadataItem

logger = logging.getLogger(__name__)


def group_by_property(items: list[MetadataItem]) -> dict[str, list[MetadataItem]]:
    """Group items by property, preserving order within each group."""
    grouped: dict[str, list[MetadataItem]] = {}
    for item in items:
        grouped.setdefault(item.property, []).append(item)
    return grouped


@dataclass
class _Frame:
    """An item being materialized and the refining items still to visit."""

    item: MetadataItem
    pending: deque[MetadataItem]
    built: list[MetadataItem] = field(default_factory=list)
    # Whether this frame put its item's id into the chain.
    holds_id: bool = False


def resolve_hierarchy(items: list[MetadataItem]) -> list[MetadataItem]:
    """Fold refining items into the children of the items they refine.

    An item is a root when it refines nothing, or refines an id that no item
    carries (it may target a manifest item or link instead). A refining item
    is skipped when its id is already carried by one of the refined item's
    ancestors, so each cycle edge is omitted. Items caught in a refinement
    cycle that never reaches a root are dropped.

    Returns:
        The root items, in input order, with children populated.
    """
    ids = {item.id for item in items if item.id is not None}
    by_refines: dict[str, list[MetadataItem]] = {}
    for item in items:
        if item.refines is not None:
            by_refines.setdefault(item.refines, []).append(item)

    roots = [item for item in items if item.refines is None or item.refines not in ids]
    return [_materialize(root, by_refines) for root in roots]


def _materialize(root: MetadataItem, by_refines: dict[str, list[MetadataItem]]) -> MetadataItem:
    # Depth-first with an explicit stack; refinement chains can be arbitrarily long.
    # `chain` holds the ids of the ancestors of the item being pushed.
    chain: set[str] = set()

    def push(item: MetadataItem) -> _Frame:
        if item.id is None:
            return _Frame(item, deque())
        refined_by: deque[MetadataItem] = deque()
        for candidate in by_refines.get(item.id, []):
            if candidate.id in chain:
                logger.debug("Breaking refinement cycle at #%s", candidate.id)
                continue
            refined_by.append(candidate)
        holds_id = item.id not in chain
        chain.add(item.id)
        return _Frame(item, refined_by, holds_id=holds_id)

    stack = [push(root)]
    while True:
        frame = stack[-1]
        if frame.pending:
            stack.append(push(frame.pending.popleft()))
            continue

        stack.pop()
        if frame.holds_id:
            chain.discard(frame.item.id)
        existing = [child for refined_by in frame.item.children.values() for child in refined_by]
        done = replace(frame.item, children=group_by_property(existing + frame.built))
        if not stack:
            return done
        stack[-1].built.append(done)


def partition_items(
    roots: list[MetadataItem],
) -> tuple[dict[str, list[MetadataItem]], dict[str, dict[str, list[MetadataItem]]]]:
    """Split resolved roots into global items and items refining external targets.

    Returns:
        (global_items, refine_items): global items grouped by property, and
        the remaining items grouped by refined id then by property.
    """
    global_roots = [root for root in roots if root.refines is None]
    refining: dict[str, list[MetadataItem]] = {}
    for root in roots:
        if root.refines is not None:
            refining.setdefault(root.refines, []).append(root)
    refine_items = {target: group_by_property(items) for target, items in refining.items()}
    return group_by_property(global_roots), refine_items

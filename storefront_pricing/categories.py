"""
Category tree helpers for navigation: building the tree from flat rows,
flattening it back, and path/level bookkeeping.
"""

import logging
from typing import Optional

from storefront_pricing.models import Category

logger = logging.getLogger(__name__)


def build_category_tree(categories: list[Category]) -> list[Category]:
    """
    Build a tree from flat category rows.

    Categories whose parent is not in the list are dropped. Every level is
    ordered by sort_order. The input models are left untouched.

    Args:
        categories: Flat list of categories linked by parent_id

    Returns:
        Root categories with nested children
    """
    nodes = {}
    for category in categories:
        nodes[category.id] = category.model_copy(update={"children": []})

    roots = []
    for node in nodes.values():
        if not node.parent_id:
            roots.append(node)
            continue
        parent = nodes.get(node.parent_id)
        if parent is None:
            logger.debug(f"Dropping category {node.id!r}: parent {node.parent_id!r} not found")
            continue
        parent.children.append(node)

    def sort_level(level: list[Category]) -> list[Category]:
        level.sort(key=lambda c: c.sort_order)
        for child in level:
            sort_level(child.children)
        return level

    return sort_level(roots)


def flatten_category_tree(tree: list[Category]) -> list[Category]:
    """Depth-first listing of a tree with level set from depth and children stripped."""
    flat = []

    def visit(nodes: list[Category], depth: int) -> None:
        for node in nodes:
            flat.append(node.model_copy(update={"level": depth, "children": []}))
            visit(node.children, depth + 1)

    visit(tree, 0)
    return flat


def get_all_category_ids(category_id: str, categories: list[Category]) -> list[str]:
    """Return the category id followed by the ids of all its descendants."""
    children_by_parent: dict[str, list[str]] = {}
    for category in categories:
        if category.parent_id:
            children_by_parent.setdefault(category.parent_id, []).append(category.id)

    result = [category_id]
    seen = {category_id}
    stack = list(reversed(children_by_parent.get(category_id, [])))
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        result.append(current)
        stack.extend(reversed(children_by_parent.get(current, [])))
    return result


def build_category_path(slug: str, parent: Optional[Category] = None) -> str:
    if parent is None:
        return slug
    if parent.path:
        return f"{parent.path}/{slug}"
    return f"{parent.slug}/{slug}"


def calculate_category_level(parent: Optional[Category] = None) -> int:
    return parent.level + 1 if parent is not None else 0


def get_category_breadcrumbs(path: str) -> list[str]:
    return [segment for segment in (path or "").split("/") if segment]


def validate_category_hierarchy(
    category_id: str,
    new_parent_id: Optional[str],
    categories: list[Category],
) -> bool:
    """Reject moves that would make a category its own ancestor."""
    if not new_parent_id:
        return True
    if category_id == new_parent_id:
        return False
    return new_parent_id not in get_all_category_ids(category_id, categories)[1:]

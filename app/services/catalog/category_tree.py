from collections import defaultdict
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence


def index_by_parent(categories: Sequence[Mapping[str, Any]]) -> Dict[Hashable, List[Mapping[str, Any]]]:
    """Group categories by parent_id, keeping input order inside each group"""
    children = defaultdict(list)
    for category in categories:
        children[category.get("parent_id")].append(category)
    return children


def build_category_tree(
    categories: Sequence[Mapping[str, Any]],
    root_parent: Optional[Hashable] = None,
) -> List[Dict[str, Any]]:
    """Nest a flat list of category records into a forest.

    Every record whose parent_id equals root_parent becomes a top-level node,
    and its descendants are attached under a ``children`` key. Leaves carry no
    ``children`` key at all. Siblings keep their relative input order.

    Records whose parent never resolves back to root_parent are left out.
    A parent chain that loops back onto an id already on the current path is
    cut there: the revisited node is emitted once more as a leaf.

    Works with an explicit stack, so deep hierarchies do not hit the
    interpreter recursion limit.
    """
    children_of = index_by_parent(categories)

    forest: List[Dict[str, Any]] = []
    on_path = set()
    if root_parent is not None:
        on_path.add(root_parent)

    # (node owning the sibling list, sibling list, pending records)
    stack = [(None, forest, iter(children_of.get(root_parent, ())))]

    while stack:
        owner, siblings, pending = stack[-1]
        record = next(pending, None)

        if record is None:
            stack.pop()
            if owner is not None:
                on_path.discard(owner.get("id"))
                if siblings:
                    owner["children"] = siblings
            continue

        node = dict(record)
        node.pop("children", None)
        siblings.append(node)

        node_id = record.get("id")
        if node_id in on_path:
            continue

        on_path.add(node_id)
        stack.append((node, [], iter(children_of.get(node_id, ()))))

    return forest

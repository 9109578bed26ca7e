"""Flattening of nested Elasticsearch field mappings into leaf descriptors."""

from typing import Any, Dict, List


def flatten_mapping(tree: Dict[str, Any], parent: str = "") -> List[str]:
    """Walk a mapping tree and emit ``path:value`` leaf descriptors.

    Objects are descended into, arrays are skipped and every scalar
    becomes a leaf. For a field ``user`` declared as
    ``{"name": {"type": "string"}}`` the leaf is ``user.name.type:string``.

    Args:
        tree: Parsed JSON object (typically a ``properties`` object)
        parent: Dotted path of ``tree`` inside the mapping

    Returns:
        Leaf descriptors in document order
    """
    leaves: List[str] = []
    for key, child in tree.items():
        child_path = key if not parent else f"{parent}.{key}"

        if isinstance(child, dict):
            leaves.extend(flatten_mapping(child, child_path))
        elif isinstance(child, list):
            # arrays are not supported
            continue
        else:
            leaves.append(f"{child_path}:{_scalar_text(child)}")

    return leaves


def _scalar_text(value: Any) -> str:
    """Render a JSON scalar the way it appears in the document."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

"""Dot-path navigation over JSON-like trees."""

from typing import Any, List, Optional
from ..models.binary_payload import BinaryPayload
from ..types import UnsupportedValueError


class _Missing:
    """Marker for a path that does not resolve to a value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

_SCALARS = (str, int, float, bool, type(None))


def _as_index(segment: str) -> Optional[int]:
    if not (segment.isascii() and segment.isdigit()):
        return None
    return int(segment)


class PathUtils:
    """
    get/set/unset over trees of dicts, lists and scalars.

    Paths are dot-separated; every segment is a literal key. List nodes
    accept decimal index segments. Leaves may also be BinaryPayload
    objects, which are treated as opaque scalars.
    """

    @staticmethod
    def split(path: str) -> List[str]:
        """Split a dot path into its segments."""
        return path.split(".")

    @staticmethod
    def get(tree: Any, path: str) -> Any:
        """
        Read the value at a path.

        Args:
            tree: Root of the tree
            path: Dot-separated path

        Returns:
            The stored value, or MISSING if any segment is absent
        """
        node = tree
        for segment in PathUtils.split(path):
            if isinstance(node, dict):
                if segment not in node:
                    return MISSING
                node = node[segment]
            elif isinstance(node, list):
                index = _as_index(segment)
                if index is None or index >= len(node):
                    return MISSING
                node = node[index]
            else:
                return MISSING
        return node

    @staticmethod
    def set(tree: Any, path: str, value: Any) -> Any:
        """
        Write a value at a path, creating intermediate maps as needed.

        Intermediate scalars are replaced by new maps. The tree is mutated
        in place and returned.

        Raises:
            UnsupportedValueError: If the root is not a container, or a list
                node is addressed with a non-index segment
        """
        if not isinstance(tree, (dict, list)):
            raise UnsupportedValueError(
                f"Cannot set '{path}' on a {type(tree).__name__} value",
                context={"path": path}
            )

        segments = PathUtils.split(path)
        node = tree
        for position, segment in enumerate(segments):
            last = position == len(segments) - 1

            if isinstance(node, list):
                index = _as_index(segment)
                if index is None or index > len(node):
                    raise UnsupportedValueError(
                        f"Cannot address list with segment '{segment}' in path '{path}'",
                        context={"path": path}
                    )
                if index == len(node):
                    node.append({})
                if last:
                    node[index] = value
                    break
                if not isinstance(node[index], (dict, list)):
                    node[index] = {}
                node = node[index]
            else:
                if last:
                    node[segment] = value
                    break
                child = node.get(segment)
                if not isinstance(child, (dict, list)):
                    child = {}
                    node[segment] = child
                node = child

        return tree

    @staticmethod
    def unset(tree: Any, path: str) -> Any:
        """
        Remove the value at a path. No-op if the path is absent.

        The tree is mutated in place and returned.
        """
        segments = PathUtils.split(path)
        parent = PathUtils.get(tree, ".".join(segments[:-1])) if len(segments) > 1 else tree
        leaf = segments[-1]

        if isinstance(parent, dict):
            parent.pop(leaf, None)
        elif isinstance(parent, list):
            index = _as_index(leaf)
            if index is not None and index < len(parent):
                del parent[index]
        return tree

    @staticmethod
    def clone(value: Any, _path: str = "") -> Any:
        """
        Deep-copy a JSON-like tree.

        Maps and sequences are rebuilt; scalars and payloads are shared.

        Raises:
            UnsupportedValueError: For values outside the JSON value model
        """
        if isinstance(value, dict):
            copied = {}
            for key, child in value.items():
                if not isinstance(key, str):
                    raise UnsupportedValueError(
                        f"Non-string key {key!r} at '{_path or '<root>'}'",
                        context={"path": _path}
                    )
                child_path = f"{_path}.{key}" if _path else key
                copied[key] = PathUtils.clone(child, child_path)
            return copied

        if isinstance(value, (list, tuple)):
            return [
                PathUtils.clone(item, f"{_path}.{i}" if _path else str(i))
                for i, item in enumerate(value)
            ]

        if isinstance(value, (_SCALARS, BinaryPayload)):
            return value

        raise UnsupportedValueError(
            f"Unsupported value of type {type(value).__name__} at '{_path or '<root>'}'",
            context={"path": _path}
        )

"""Provider profile documents.

User-information responses have no fixed schema, so the parsed JSON is held
as a tree of ``ProfileNode`` values. Each node is tagged with its
``NodeKind``; lookups by path either return a node or raise
``PathNotFoundError``, so a missing or mistyped field is always an explicit
failure rather than a ``None`` that travels further.
"""

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Sequence, Tuple, Union

PathSegment = Union[str, int]
Path = Union[str, Sequence[PathSegment]]


class NodeKind(enum.Enum):
    """Kinds of JSON values a profile node can hold."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAP = "map"


class PathNotFoundError(LookupError):
    """Raised when a path does not resolve inside a profile document."""

    def __init__(self, path: Tuple[PathSegment, ...], reason: str):
        super().__init__(f"{format_path(path)}: {reason}")
        self.path = path
        self.reason = reason


def parse_path(path: Path) -> Tuple[PathSegment, ...]:
    """Split a path into segments.

    ``"emails.0.value"`` becomes ``("emails", "0", "value")``; a sequence of
    segments is used as is, which allows keys that contain dots.
    """
    if isinstance(path, str):
        if not path:
            return ()
        return tuple(path.split("."))
    return tuple(path)


def format_path(path: Sequence[PathSegment]) -> str:
    return ".".join(str(segment) for segment in path) or "<root>"


@dataclass(frozen=True)
class ProfileNode:
    """One JSON value of a profile document, tagged with its kind.

    Sequences are stored as tuples of nodes and maps as tuples of
    ``(key, node)`` pairs in document order.
    """

    kind: NodeKind
    value: Any = None

    @classmethod
    def from_json(cls, data: Any) -> "ProfileNode":
        """Build a node tree from decoded JSON."""
        if data is None:
            return cls(NodeKind.NULL)
        # bool is a subclass of int, test it first
        if isinstance(data, bool):
            return cls(NodeKind.BOOLEAN, data)
        if isinstance(data, (int, float)):
            return cls(NodeKind.NUMBER, data)
        if isinstance(data, str):
            return cls(NodeKind.STRING, data)
        if isinstance(data, dict):
            return cls(
                NodeKind.MAP,
                tuple((str(key), cls.from_json(item)) for key, item in data.items())
            )
        if isinstance(data, (list, tuple)):
            return cls(NodeKind.SEQUENCE, tuple(cls.from_json(item) for item in data))
        raise TypeError(f"Unsupported JSON value of type {type(data).__name__}")

    @property
    def is_null(self) -> bool:
        return self.kind is NodeKind.NULL

    @property
    def is_scalar(self) -> bool:
        return self.kind not in (NodeKind.SEQUENCE, NodeKind.MAP)

    def child(self, segment: PathSegment) -> "ProfileNode":
        """Step one segment down; raises ``KeyError``/``IndexError``/``TypeError``."""
        if self.kind is NodeKind.MAP:
            key = str(segment)
            for name, node in self.value:
                if name == key:
                    return node
            raise KeyError(key)
        if self.kind is NodeKind.SEQUENCE:
            try:
                index = int(segment)
            except ValueError:
                raise TypeError(f"sequence index expected, got {segment!r}") from None
            if index < 0:
                raise IndexError(index)
            return self.value[index]
        raise TypeError(f"cannot descend into a {self.kind.value}")

    def select(self, path: Path) -> "ProfileNode":
        """Resolve a path relative to this node.

        Raises:
            PathNotFoundError: If any segment is missing or the path walks
                into a scalar
        """
        segments = parse_path(path)
        node = self
        for depth, segment in enumerate(segments):
            try:
                node = node.child(segment)
            except KeyError:
                raise PathNotFoundError(segments[:depth + 1], "key not found") from None
            except IndexError:
                raise PathNotFoundError(segments[:depth + 1], "index out of range") from None
            except TypeError as e:
                raise PathNotFoundError(segments[:depth + 1], str(e)) from None
        return node

    def to_python(self) -> Any:
        """Convert back into plain JSON-compatible Python values."""
        if self.kind is NodeKind.MAP:
            return {key: node.to_python() for key, node in self.value}
        if self.kind is NodeKind.SEQUENCE:
            return [node.to_python() for node in self.value]
        return self.value

    def to_text(self) -> str:
        """Render the value as claim text.

        Booleans become ``true``/``false``, integral numbers drop the
        decimal point and sequences or maps are rendered as compact JSON.
        """
        if self.kind is NodeKind.STRING:
            return self.value
        if self.kind is NodeKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is NodeKind.NUMBER:
            if isinstance(self.value, float) and self.value.is_integer():
                return str(int(self.value))
            return str(self.value)
        if self.kind is NodeKind.NULL:
            return ""
        return json.dumps(self.to_python(), separators=(",", ":"), ensure_ascii=False)


class ProviderProfile:
    """Parsed user-information document with path-based field access."""

    def __init__(self, root: ProfileNode):
        if root.kind is not NodeKind.MAP:
            raise TypeError(f"profile document must be a map, got {root.kind.value}")
        self.root = root

    @classmethod
    def from_json(cls, data: Any) -> "ProviderProfile":
        return cls(ProfileNode.from_json(data))

    def select(self, path: Path) -> ProfileNode:
        """Resolve a path; raises ``PathNotFoundError`` when it does not exist."""
        return self.root.select(path)

    def get(self, path: Path, default: Any = None) -> Any:
        """Return the plain Python value at ``path`` or ``default``."""
        try:
            return self.select(path).to_python()
        except PathNotFoundError:
            return default

    def __contains__(self, path: Path) -> bool:
        try:
            self.select(path)
        except PathNotFoundError:
            return False
        return True

    def keys(self) -> Iterator[str]:
        return (key for key, _ in self.root.value)

    def to_dict(self) -> Dict[str, Any]:
        return self.root.to_python()

    def __repr__(self) -> str:
        return f"ProviderProfile({self.to_dict()!r})"


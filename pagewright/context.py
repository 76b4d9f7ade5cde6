"""Context resolution for Pagewright templates.

This module holds the data side of template rendering: looking up
dot-separated paths against layered contexts, and the value semantics the
renderer relies on (truthiness and stringification).

Key pieces:
- Scope: Immutable, innermost-first stack of mapping layers.
- resolve: Resolve a dotted path against a Scope or plain mapping.
- is_truthy: Condition semantics used by #if / #unless and helpers.
- stringify: Convert resolved values to interpolation text.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

__all__ = ["Scope", "is_truthy", "resolve", "stringify"]


class Scope:
    """Layered template context.

    Layers are stored innermost-first. A lookup of the first path segment
    returns the value from the first layer that contains the key, so an
    inner layer shadows outer layers without ever modifying them.

    Attributes:
        layers: Tuple of mappings, innermost first.
    """

    __slots__ = ("layers",)

    def __init__(self, layers: tuple[Mapping[str, Any], ...] = ()):
        self.layers = layers

    @classmethod
    def of(cls, context: Scope | Mapping[str, Any] | None) -> Scope:
        """Wrap a mapping as a single-layer scope (scopes pass through)."""
        if isinstance(context, Scope):
            return context
        if context is None:
            return cls()
        return cls((context,))

    def child(self, layer: Mapping[str, Any]) -> Scope:
        """Return a new scope with ``layer`` as the innermost layer."""
        return Scope((layer, *self.layers))

    def lookup(self, key: str) -> Any:
        for layer in self.layers:
            if key in layer:
                return layer[key]
        return None

    def resolve(self, path: str) -> Any:
        """Resolve a dot-separated path against this scope.

        Args:
            path: Path such as ``"user.profile.name"``.

        Returns:
            The resolved value, or None if any segment is missing or a
            non-mapping value is reached before the last segment.
        """
        if not path:
            return None
        head, *rest = path.split(".")
        current = self.lookup(head)
        for key in rest:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"Scope({len(self.layers)} layers)"


def resolve(context: Scope | Mapping[str, Any] | None, path: str) -> Any:
    """Resolve a dotted path against a scope or mapping.

    Never raises for missing data.

    Examples:
        >>> resolve({"a": {"b": "x"}}, "a.b")
        'x'

        >>> resolve({}, "a.b") is None
        True
    """
    return Scope.of(context).resolve(path)


def is_truthy(value: Any) -> bool:
    """Return the template truthiness of ``value``.

    None, False, zero, NaN, empty strings and empty collections are falsy.
    """
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def stringify(value: Any) -> str:
    """Convert a value to the text inserted into rendered output.

    Args:
        value: Any resolved context value or helper result.

    Returns:
        ``""`` for None, ``"true"``/``"false"`` for booleans, integral floats
        without a fractional part, comma-joined lists, compact JSON for
        mappings, and ``str()`` for everything else.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(
            dict(value), ensure_ascii=False, separators=(",", ":"), default=str
        )
    return str(value)

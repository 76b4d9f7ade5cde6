"""Template rendering engine for Pagewright.

Templates use a small handlebars-like markup:

- ``{{path.to.value}}``: interpolation
- ``{{#each items}}...{{/each}}``: iteration, exposing ``@index``,
  ``@first`` and ``@last`` plus the fields of each item
- ``{{#if flag}}...{{else}}...{{/if}}`` and ``{{#unless flag}}...{{/unless}}``
- ``{{helper arg "literal" 5}}``: helper calls

Rendering runs four ordered passes over the template text (each blocks,
if/unless blocks, helper calls, interpolations). Block bodies are rendered
recursively as independent templates. Every rendered fragment is parked in
a per-render store behind a placeholder token, so no later pass (and no
enclosing level) ever re-reads output produced from data. Placeholders are
expanded once, at the end of the top-level call.

Key pieces:
- render: Render a template string against a context.
- TemplateSyntaxError: Raised for unterminated or stray block markers.
- TemplateRecursionError: Raised when block nesting exceeds ``max_depth``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .context import Scope, is_truthy, stringify
from .helpers import Helper, default_helpers

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "TemplateError",
    "TemplateRecursionError",
    "TemplateSyntaxError",
    "render",
]

DEFAULT_MAX_DEPTH = 64

EACH_RE = re.compile(
    r"\{\{#each\s+([^\s}]+)\s*\}\}(.*?)\{\{/each\}\}", re.DOTALL
)
IF_RE = re.compile(
    r"\{\{#if\s+([^}]+?)\s*\}\}(.*?)(?:\{\{else\}\}(.*?))?\{\{/if\}\}", re.DOTALL
)
UNLESS_RE = re.compile(
    r"\{\{#unless\s+([^}]+?)\s*\}\}(.*?)\{\{/unless\}\}", re.DOTALL
)
HELPER_RE = re.compile(r"\{\{(\w+)\s+([^}]+)\}\}")
VARIABLE_RE = re.compile(r"\{\{([^#/}][^}]*)\}\}")
BLOCK_TAG_RE = re.compile(
    r"\{\{\s*(?:#(?:each|if|unless)\b[^}]*|/(?:each|if|unless)\s*|else\s*)\}\}"
)
ARG_RE = re.compile(r'"[^"]*"|\'[^\']*\'|\S+')
NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

# Private-use code points delimiting parked fragments. Occurrences in the
# template source are parked as literal text before the first pass.
_PLACEHOLDER = "\ue000{}\ue001"
_PLACEHOLDER_RE = re.compile("\ue000(\\d+)\ue001")
_SENTINEL_RE = re.compile("[\ue000\ue001]")


class TemplateError(Exception):
    """Base class for template rendering errors."""


class TemplateSyntaxError(TemplateError):
    """Block markers are unterminated, stray or improperly nested.

    Attributes:
        tag: The offending tag as written in the template.
    """

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unmatched block tag {tag!r}")


class TemplateRecursionError(TemplateError):
    """Block nesting went deeper than the configured ceiling.

    Attributes:
        max_depth: The ceiling that was exceeded.
    """

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Template blocks nested deeper than {max_depth} levels")


class _Render:
    """State for one top-level render call."""

    def __init__(self, helpers: Mapping[str, Helper], max_depth: int):
        self.helpers = helpers
        self.max_depth = max_depth
        # (text, nested): nested fragments hold block output that may itself
        # contain placeholders; the rest are final text.
        self.fragments: list[tuple[str, bool]] = []

    def park(self, text: str, nested: bool = False) -> str:
        self.fragments.append((text, nested))
        return _PLACEHOLDER.format(len(self.fragments) - 1)

    def expand(self, text: str) -> str:
        return _PLACEHOLDER_RE.sub(self._expand_match, text)

    def _expand_match(self, match: re.Match) -> str:
        text, nested = self.fragments[int(match.group(1))]
        return self.expand(text) if nested else text

    def template(self, template: str, scope: Scope, depth: int) -> str:
        """Run the four passes over ``template``; placeholders stay unexpanded."""
        if depth > self.max_depth:
            raise TemplateRecursionError(self.max_depth)

        def each_block(match: re.Match) -> str:
            items = scope.resolve(match.group(1))
            if not isinstance(items, list):
                return ""
            body = match.group(2)
            last = len(items) - 1
            parts = []
            for index, item in enumerate(items):
                layer = dict(item) if isinstance(item, Mapping) else {}
                layer["@index"] = index
                layer["@first"] = index == 0
                layer["@last"] = index == last
                parts.append(self.template(body, scope.child(layer), depth + 1))
            return self.park("".join(parts), nested=True)

        def if_block(match: re.Match) -> str:
            if is_truthy(scope.resolve(match.group(1))):
                body = match.group(2)
            else:
                body = match.group(3) or ""
            return self.park(self.template(body, scope, depth + 1), nested=True)

        def unless_block(match: re.Match) -> str:
            if is_truthy(scope.resolve(match.group(1))):
                return ""
            output = self.template(match.group(2), scope, depth + 1)
            return self.park(output, nested=True)

        def helper_call(match: re.Match) -> str:
            helper = self.helpers.get(match.group(1))
            if helper is None:
                return self.park(match.group(0))
            tokens = ARG_RE.findall(match.group(2))
            args = [self.argument(token, scope) for token in tokens]
            return self.park(stringify(helper(*args)))

        def variable(match: re.Match) -> str:
            return self.park(stringify(scope.resolve(match.group(1).strip())))

        result = EACH_RE.sub(each_block, template)
        result = IF_RE.sub(if_block, result)
        result = UNLESS_RE.sub(unless_block, result)
        stray = BLOCK_TAG_RE.search(result)
        if stray:
            raise TemplateSyntaxError(stray.group(0))
        result = HELPER_RE.sub(helper_call, result)
        return VARIABLE_RE.sub(variable, result)

    @staticmethod
    def argument(token: str, scope: Scope) -> Any:
        if len(token) >= 2 and token[0] == token[-1] and token[0] in "\"'":
            return token[1:-1]
        if NUMBER_RE.fullmatch(token):
            return float(token) if "." in token else int(token)
        return scope.resolve(token)


def render(
    template: str,
    context: Scope | Mapping[str, Any] | None,
    helpers: Mapping[str, Helper] | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Render a template string against a context.

    Args:
        template: Template source text.
        context: Data to resolve paths against (mapping or Scope).
        helpers: Helper functions by name. Defaults to the built-in set;
            pass ``{}`` for none.
        max_depth: Maximum block nesting depth.

    Returns:
        Rendered string. Missing values render as empty strings and unknown
        helper tags are kept verbatim.

    Raises:
        TemplateSyntaxError: If a rendered template contains an unterminated
            or stray block marker.
        TemplateRecursionError: If blocks nest deeper than ``max_depth``.
    """
    state = _Render(default_helpers if helpers is None else helpers, max_depth)
    source = _SENTINEL_RE.sub(lambda match: state.park(match.group(0)), template)
    return state.expand(state.template(source, Scope.of(context), 0))

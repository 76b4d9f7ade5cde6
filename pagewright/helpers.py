"""Template helpers for Pagewright.

Helpers are plain functions invoked from template tags such as
``{{truncate description 80}}``. They receive already-resolved arguments
and return a value that the renderer stringifies.

Arguments that are absent from a tag, or that resolve to a missing path,
arrive as None; helpers treat None as "use the default".

Key pieces:
- HelperRegistry: Read-only name -> function mapping with override merging.
- default_helpers: The built-in registry.
"""

from __future__ import annotations

import json as _json
import math
from collections.abc import Callable, Iterator, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .context import is_truthy, stringify
from .utils import parse_date, slugify as _slugify

Helper = Callable[..., Any]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
}
ZERO_DECIMAL_CURRENCIES = {"JPY"}


class HelperRegistry(Mapping[str, Helper]):
    """Read-only mapping of helper names to functions.

    Registries are never mutated after construction; ``merged`` returns a
    new registry so the shared default set stays untouched.
    """

    def __init__(self, helpers: Mapping[str, Helper] | None = None):
        self._helpers: dict[str, Helper] = dict(helpers or {})

    def __getitem__(self, name: str) -> Helper:
        return self._helpers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._helpers)

    def __len__(self) -> int:
        return len(self._helpers)

    def merged(self, overrides: Mapping[str, Helper] | None) -> HelperRegistry:
        """Return a new registry with ``overrides`` layered over this one.

        Args:
            overrides: Caller-supplied helpers; same-named entries win.

        Returns:
            A new HelperRegistry.
        """
        if not overrides:
            return HelperRegistry(self._helpers)
        return HelperRegistry({**self._helpers, **overrides})

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"HelperRegistry({len(self._helpers)} helpers)"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def format_date(date_string: Any, style: str | None = None) -> str:
    """Format a date as ``January 15, 2024`` (long) or ``Jan 15, 2024`` (short)."""
    parsed = parse_date(date_string)
    if parsed is None:
        return "Invalid Date"
    month = parsed.strftime("%b" if style == "short" else "%B")
    return f"{month} {parsed.day}, {parsed.year}"


def format_currency(amount: Any, currency: str | None = None) -> str:
    """Format an amount as en-US currency.

    Args:
        amount: Numeric amount (numbers or numeric strings). None means the
            price is negotiated and renders as ``"Custom"``.
        currency: ISO 4217 code, USD by default.

    Returns:
        Formatted string such as ``"$1,234.50"`` or ``"-€5.00"``.
    """
    if amount is None:
        return "Custom"
    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code}\u00a0")
    number = _to_number(amount)
    if number is None or math.isnan(number):
        return f"{symbol}NaN"
    decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    sign = "-" if number < 0 else ""
    if math.isinf(number):
        return f"{sign}{symbol}\u221e"
    # Half cents round away from zero, on the decimal text of the amount.
    rounded = Decimal(str(abs(number))).quantize(
        Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP
    )
    return f"{sign}{symbol}{rounded:,.{decimals}f}"


def pluralize(count: Any, singular: Any, plural: Any = None) -> str:
    """Pick the singular form when ``count`` is exactly 1."""
    if _is_number(count) and count == 1:
        return stringify(singular)
    if plural:
        return stringify(plural)
    return f"{stringify(singular)}s"


def truncate(text: Any, length: Any = None) -> str:
    """Shorten text to ``length`` characters, appending ``...`` when cut."""
    if text is None:
        return ""
    text = stringify(text)
    limit = _to_number(length)
    if limit is None or not math.isfinite(limit):
        limit = 100.0
    limit = max(int(limit), 0)
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def json(value: Any) -> str:
    """Serialize a value as pretty-printed JSON, e.g. for JSON-LD blocks."""
    return _json.dumps(value, indent=2, ensure_ascii=False, default=str)


def stars(rating: Any) -> str:
    """Render a five-symbol star rating such as ``★★★½☆``."""
    number = _to_number(rating)
    if number is None or math.isnan(number):
        number = 0.0
    number = min(max(number, 0.0), 5.0)
    full = math.floor(number)
    half = 1 if number - full >= 0.5 else 0
    empty = 5 - full - half
    return "★" * full + ("½" if half else "") + "☆" * empty


def checkmark(value: Any) -> str:
    return "✓" if is_truthy(value) else "✗"


def slugify(text: Any) -> str:
    if text is None:
        return ""
    return _slugify(stringify(text))


def eq(a: Any, b: Any) -> bool:
    """Strict equality: numbers compare numerically, no bool/number mixing."""
    if _is_number(a) and _is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def gt(a: Any, b: Any) -> bool:
    try:
        return bool(a > b)
    except TypeError:
        return False


def lt(a: Any, b: Any) -> bool:
    try:
        return bool(a < b)
    except TypeError:
        return False


default_helpers = HelperRegistry(
    {
        "formatDate": format_date,
        "formatCurrency": format_currency,
        "pluralize": pluralize,
        "truncate": truncate,
        "json": json,
        "stars": stars,
        "checkmark": checkmark,
        "slugify": slugify,
        "eq": eq,
        "gt": gt,
        "lt": lt,
    }
)

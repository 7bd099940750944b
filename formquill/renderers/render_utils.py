"""Utility helpers shared across renderer components."""

from __future__ import annotations

from reportlab.lib.colors import Color, HexColor


def normalize_hex(value: object, fallback: str = "#000000") -> str:
    """Return ``value`` as ``#rrggbb``, or ``fallback`` when it is not a hex colour."""
    token = str(value or "").strip()
    if not token:
        return fallback
    if not token.startswith("#"):
        token = f"#{token}"
    digits = token[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6 or any(ch not in "0123456789abcdefABCDEF" for ch in digits):
        return fallback
    return f"#{digits.lower()}"


def to_color(value: object, fallback: str = "#000000", alpha: float | None = None) -> Color:
    """Build a reportlab colour from a hex string."""
    color = HexColor(normalize_hex(value, fallback))
    if alpha is not None:
        red, green, blue = color.rgb()
        return Color(red, green, blue, alpha=alpha)
    return color


def docx_color(value: object, fallback: str = "#000000") -> str:
    """Hex colour without ``#`` as WordprocessingML expects it."""
    return normalize_hex(value, fallback)[1:].upper()


def truncate(text: str, max_chars: int) -> str:
    """Shorten ``text`` to ``max_chars`` characters, marking the cut with ``..``."""
    if max_chars <= 0:
        return ""
    if len(text) <= max_chars:
        return text
    return f"{text[:max(0, max_chars - 2)]}.."

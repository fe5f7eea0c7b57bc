"""Input helpers shared by the interactive commands."""
from __future__ import annotations

from typing import Optional

_QUOTES = ('"', "'")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        return text[1:-1]
    return text


def prompt(text: str, default: Optional[str] = None) -> str:
    """Return the stripped answer to ``text`` or ``default`` when left empty.

    Quotes around the answer are dropped, so pasted paths work as typed.
    """
    answer = _unquote(input(text).strip())
    return answer or (default or "")


def prompt_float(text: str, default: Optional[float] = None) -> Optional[float]:
    """Ask until a number is entered; a comma is accepted as decimal mark."""
    while True:
        answer = input(text).strip()
        if not answer:
            return default
        try:
            return float(answer.replace(",", "."))
        except ValueError:
            print("❌ Not a number, try again.")

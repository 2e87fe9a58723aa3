"""
Parser for three-component coordinate literals.

Accepted forms (brackets optional):
    "(1, 2, 3)"  "[1; 2; 3]"  "1 2 3"  "(1,5; 2,5; 3)"  "1.5e-3,2,3"

A ';' separator (or whitespace) allows ',' as decimal separator.
"""

from __future__ import annotations
import logging
import math
import re
from typing import Optional, Tuple

from ..config.schemas import FormatConfig
from ..errors import ParseError

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?')
_BRACKETS = {"(": ")", "[": "]", "{": "}"}


def _strip_brackets(text: str) -> str:
    if text and text[0] in _BRACKETS:
        if not text.endswith(_BRACKETS[text[0]]):
            raise ParseError(f"Unbalanced brackets in {text!r}")
        return text[1:-1].strip()
    return text


def _split(body: str, config: Optional[FormatConfig]) -> list[str]:
    if config is not None and config.component_separator is not None:
        return body.split(config.component_separator)
    if ";" in body:
        return body.split(";")
    if config is not None and config.decimal_separator == ",":
        return body.split()
    if "," in body:
        return body.split(",")
    return body.split()


def _to_float(part: str, original: str) -> float:
    token = part.strip().replace(",", ".")
    if not _NUMBER.fullmatch(token):
        raise ParseError(f"Could not parse {part.strip()!r} as a number in {original!r}")
    value = float(token)
    if not math.isfinite(value):
        raise ParseError(f"Component {part.strip()!r} is not finite in {original!r}")
    return value


def parse_item3d(text: str, config: Optional[FormatConfig] = None) -> Tuple[float, float, float]:
    """
    Parse text into exactly three finite floats.

    Args:
        text: Coordinate literal, e.g. "(1, 2, 3)"
        config: Optional format config fixing the separators

    Returns:
        Tuple (x, y, z)

    Raises:
        ParseError: if the text does not hold exactly three numbers
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected a string, got {type(text).__name__}")

    body = _strip_brackets(text.strip())
    parts = _split(body, config)
    if len(parts) != 3:
        raise ParseError(f"Expected 3 components, got {len(parts)} in {text!r}")

    x, y, z = (_to_float(p, text) for p in parts)
    logger.debug("Parsed %r -> (%r, %r, %r)", text, x, y, z)
    return x, y, z

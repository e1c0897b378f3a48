from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
import re

# Longest numeric prefix, the way a browser's parseFloat/parseInt read input.
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:E[+-]?\d+)?", re.IGNORECASE)
_INT_PREFIX = re.compile(r"[+-]?\d+")


def parse_float(token: Optional[str]) -> Optional[float]:
    """
    Read a float from the start of ``token``; ``None`` when nothing numeric leads it.

    Overflowing literals such as ``1E400`` read as infinity, the way a browser does.
    """
    if token is None:
        return None
    match = _FLOAT_PREFIX.match(token.strip())
    if match is None:
        return None
    return float(match.group(0))


def parse_int(token: Optional[str]) -> Optional[int]:
    if token is None:
        return None
    match = _INT_PREFIX.match(token.strip())
    if match is None:
        return None
    return int(match.group(0))


@dataclass(frozen=True)
class Line:
    """
    One script line.

    ``tokens`` is empty for blank lines; otherwise ``tokens[0]`` is the
    upper-cased command name and the rest are its operands.
    """

    index: int
    text: str
    tokens: Tuple[str, ...] = ()

    @property
    def is_blank(self) -> bool:
        return not self.tokens

    @property
    def command(self) -> str:
        return self.tokens[0] if self.tokens else ""

    @property
    def operands(self) -> Tuple[str, ...]:
        return self.tokens[1:]

    def operand(self, position: int) -> Optional[str]:
        """Operand token by 1-based position, ``None`` when missing."""
        if position < 1 or position >= len(self.tokens):
            return None
        return self.tokens[position]

    def number_operand(self, position: int = 1) -> float:
        # Missing or malformed operands read as zero.
        value = parse_float(self.operand(position))
        return value if value is not None else 0.0

    def optional_number(self, position: int = 1) -> Optional[float]:
        return parse_float(self.operand(position))

    def integer_operand(self, position: int = 1) -> Optional[int]:
        return parse_int(self.operand(position))


def parse(text: str) -> List[Line]:
    """
    Split a script into lines, keeping blank ones as positional placeholders.

    Every line is trimmed and upper-cased before being split on whitespace.
    """
    lines: List[Line] = []
    for index, raw in enumerate(text.split("\n")):
        normalized = raw.strip().upper()
        lines.append(Line(index=index, text=raw.strip(), tokens=tuple(normalized.split())))
    return lines


def is_blank_script(text: str) -> bool:
    return not text.strip()

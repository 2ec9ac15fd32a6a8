from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple


class TokenType(Enum):
    NUMBER = "number"
    UNIT = "unit"
    NONE = "none"  # unrecognized character


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str = ""


_NUMBER_CHARS = frozenset("0123456789.")


def is_number_char(c: str) -> bool:
    return c in _NUMBER_CHARS


def is_unit_char(c: str) -> bool:
    return c.isalpha()


def clean_input(text: str) -> str:
    """
    Normalizes raw input before scanning:
    - strips surrounding whitespace
    - lowercases everything (unit symbols are case-insensitive)
    - drops internal whitespace, so "1 H 30 m" scans like "1h30m"
    """
    return "".join(text.strip().lower().split())


@dataclass(frozen=True)
class TokenStream:
    tokens: Tuple[Token, ...]

    @property
    def clean_tokens(self) -> Tuple[Token, ...]:
        return tuple(t for t in self.tokens if t.type is not TokenType.NONE)

    @property
    def has_garbage(self) -> bool:
        return any(t.type is TokenType.NONE for t in self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)


def _read_run(text: str, pos: int, pred: Callable[[str], bool]) -> int:
    end = pos
    while end < len(text) and pred(text[end]):
        end += 1
    return end


def scan(text: str) -> List[Token]:
    """Scans already-cleaned text, one token per step."""
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        c = text[pos]
        if is_number_char(c):
            end = _read_run(text, pos, is_number_char)
            tokens.append(Token(TokenType.NUMBER, text[pos:end]))
        elif is_unit_char(c):
            end = _read_run(text, pos, is_unit_char)
            tokens.append(Token(TokenType.UNIT, text[pos:end]))
        else:
            end = pos + 1
            tokens.append(Token(TokenType.NONE))
        pos = end
    return tokens


def tokenize(text: str) -> TokenStream:
    return TokenStream(tokens=tuple(scan(clean_input(text))))

"""Token stream shared by the tokenizer and the notation parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class San:
    text: str


@dataclass(slots=True, frozen=True)
class Comment:
    text: str


@dataclass(slots=True, frozen=True)
class ParenOpen:
    pass


@dataclass(slots=True, frozen=True)
class ParenClose:
    pass


@dataclass(slots=True, frozen=True)
class Nag:
    code: int


@dataclass(slots=True, frozen=True)
class Header:
    tag: str
    value: str


@dataclass(slots=True, frozen=True)
class Outcome:
    result: str


Token = San | Comment | ParenOpen | ParenClose | Nag | Header | Outcome

RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})

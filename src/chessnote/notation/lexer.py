"""PGN tokenizer producing the token stream consumed by the parser."""

from __future__ import annotations

import logging
import re

from chessnote.notation.tokens import (
    RESULT_TOKENS,
    Comment,
    Header,
    Nag,
    Outcome,
    ParenClose,
    ParenOpen,
    San,
    Token,
)

_LOGGER = logging.getLogger(__name__)

_HEADER_RE = re.compile(r'\[\s*(\w+)\s+"((?:[^"\\]|\\.)*)"\s*\]')
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")
_SUFFIX_GLYPH_RE = re.compile(r"^(.*?[^!?])([!?]+)$")
_WORD_STOP = frozenset("{}();[]$")

_SUFFIX_NAGS: dict[str, int] = {
    "!": 1,
    "?": 2,
    "!!": 3,
    "??": 4,
    "!?": 5,
    "?!": 6,
}

_GLYPH_NAGS: dict[str, int] = {
    **_SUFFIX_NAGS,
    "=": 10,
    "∞": 13,
    "+=": 14,
    "+/=": 14,
    "⩲": 14,
    "=+": 15,
    "=/+": 15,
    "⩱": 15,
    "±": 16,
    "+/-": 16,
    "∓": 17,
    "-/+": 17,
    "+-": 18,
    "-+": 19,
}


def tokenize(text: str) -> list[Token]:
    """Split PGN text into header, move, comment, glyph and result tokens."""
    tokens: list[Token] = []
    idx = 0
    total = len(text)

    while idx < total:
        ch = text[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "%" and (idx == 0 or text[idx - 1] == "\n"):
            end = text.find("\n", idx)
            idx = total if end < 0 else end
            continue

        if ch == "[":
            match = _HEADER_RE.match(text, idx)
            if match is None:
                _LOGGER.debug("Ignoring stray '[' at offset %d", idx)
                idx += 1
                continue
            tag, raw_value = match.groups()
            value = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            tokens.append(Header(tag, value))
            idx = match.end()
            continue

        if ch == "{":
            end = text.find("}", idx + 1)
            if end < 0:
                tokens.append(Comment(text[idx + 1 :]))
                idx = total
            else:
                tokens.append(Comment(text[idx + 1 : end]))
                idx = end + 1
            continue

        if ch == ";":
            end = text.find("\n", idx + 1)
            if end < 0:
                end = total
            tokens.append(Comment(text[idx + 1 : end]))
            idx = end
            continue

        if ch == "(":
            tokens.append(ParenOpen())
            idx += 1
            continue

        if ch == ")":
            tokens.append(ParenClose())
            idx += 1
            continue

        if ch == "$":
            end = idx + 1
            while end < total and text[end].isdigit():
                end += 1
            if end > idx + 1:
                tokens.append(Nag(int(text[idx + 1 : end])))
            idx = end
            continue

        if ch in _WORD_STOP:
            idx += 1
            continue

        end = idx
        while end < total and not text[end].isspace() and text[end] not in _WORD_STOP:
            end += 1
        _append_word(tokens, text[idx:end])
        idx = end

    return tokens


def _append_word(tokens: list[Token], word: str) -> None:
    if word in RESULT_TOKENS:
        tokens.append(Outcome(word))
        return
    if word in _GLYPH_NAGS:
        tokens.append(Nag(_GLYPH_NAGS[word]))
        return

    word = _MOVE_NUMBER_RE.sub("", word)
    if not word or word.isdigit():
        return

    glyph = None
    match = _SUFFIX_GLYPH_RE.match(word)
    if match is not None:
        word, glyph = match.groups()

    tokens.append(San(word))
    if glyph is None:
        return
    if glyph in _SUFFIX_NAGS:
        tokens.append(Nag(_SUFFIX_NAGS[glyph]))
    else:
        _LOGGER.debug("Dropping unknown move suffix %r after %r", glyph, word)

"""Move and position annotations with their numeric glyph codes."""

from __future__ import annotations

from enum import StrEnum


class Annotation(StrEnum):
    """Annotation glyphs attached to tree nodes.

    The seven *basic* members are mutually exclusive move-quality markers;
    the *advantage* members describe the resulting position.
    """

    BRILLIANT = "!!"
    GOOD = "!"
    INTERESTING = "!?"
    DUBIOUS = "?!"
    MISTAKE = "?"
    BLUNDER = "??"
    BEST = "Best"
    WHITE_WINNING = "+-"
    WHITE_ADVANTAGE = "±"
    WHITE_EDGE = "⩲"
    EQUAL = "="
    UNCLEAR = "∞"
    BLACK_EDGE = "⩱"
    BLACK_ADVANTAGE = "∓"
    BLACK_WINNING = "-+"
    NOVELTY = "N"

    @property
    def nag(self) -> int:
        """Numeric annotation glyph code (``$n`` in PGN)."""
        return _ANNOTATION_NAG[self]

    @property
    def group(self) -> str | None:
        """``"basic"``, ``"advantage"`` or ``None``."""
        return _ANNOTATION_GROUP.get(self)

    @property
    def is_basic(self) -> bool:
        return self in BASIC_ANNOTATIONS

    @property
    def label(self) -> str:
        return _ANNOTATION_LABEL[self]

    @property
    def color_hex(self) -> str:
        """Hex colour string for UI display."""
        return _ANNOTATION_COLOR.get(self, _NEUTRAL_COLOR)

    def sort_key(self) -> int:
        """Total order used when a node's annotation list is kept sorted."""
        return self.nag


BASIC_ANNOTATIONS: frozenset[Annotation] = frozenset(
    {
        Annotation.BRILLIANT,
        Annotation.GOOD,
        Annotation.INTERESTING,
        Annotation.DUBIOUS,
        Annotation.MISTAKE,
        Annotation.BLUNDER,
        Annotation.BEST,
    }
)

# Severity of the negative markers; everything else ranks 0.
_SEVERITY: dict[Annotation, int] = {
    Annotation.DUBIOUS: 1,
    Annotation.MISTAKE: 2,
    Annotation.BLUNDER: 3,
}

_ANNOTATION_NAG: dict[Annotation, int] = {
    Annotation.GOOD: 1,
    Annotation.MISTAKE: 2,
    Annotation.BRILLIANT: 3,
    Annotation.BLUNDER: 4,
    Annotation.INTERESTING: 5,
    Annotation.DUBIOUS: 6,
    Annotation.BEST: 8,
    Annotation.EQUAL: 10,
    Annotation.UNCLEAR: 13,
    Annotation.WHITE_EDGE: 14,
    Annotation.BLACK_EDGE: 15,
    Annotation.WHITE_ADVANTAGE: 16,
    Annotation.BLACK_ADVANTAGE: 17,
    Annotation.WHITE_WINNING: 18,
    Annotation.BLACK_WINNING: 19,
    Annotation.NOVELTY: 146,
}

_NAG_ANNOTATION: dict[int, Annotation] = {
    nag: annotation for annotation, nag in _ANNOTATION_NAG.items()
}

_ANNOTATION_GROUP: dict[Annotation, str] = {
    **{annotation: "basic" for annotation in BASIC_ANNOTATIONS},
    Annotation.WHITE_WINNING: "advantage",
    Annotation.WHITE_ADVANTAGE: "advantage",
    Annotation.WHITE_EDGE: "advantage",
    Annotation.EQUAL: "advantage",
    Annotation.UNCLEAR: "advantage",
    Annotation.BLACK_EDGE: "advantage",
    Annotation.BLACK_ADVANTAGE: "advantage",
    Annotation.BLACK_WINNING: "advantage",
}

_ANNOTATION_LABEL: dict[Annotation, str] = {
    Annotation.BRILLIANT: "Brilliant",
    Annotation.GOOD: "Great",
    Annotation.INTERESTING: "Interesting",
    Annotation.DUBIOUS: "Dubious",
    Annotation.MISTAKE: "Mistake",
    Annotation.BLUNDER: "Blunder",
    Annotation.BEST: "Best",
    Annotation.WHITE_WINNING: "White is winning",
    Annotation.WHITE_ADVANTAGE: "White has a clear advantage",
    Annotation.WHITE_EDGE: "White has a slight advantage",
    Annotation.EQUAL: "Equal position",
    Annotation.UNCLEAR: "Unclear position",
    Annotation.BLACK_EDGE: "Black has a slight advantage",
    Annotation.BLACK_ADVANTAGE: "Black has a clear advantage",
    Annotation.BLACK_WINNING: "Black is winning",
    Annotation.NOVELTY: "Novelty",
}

_NEUTRAL_COLOR = "#6b7280"

_ANNOTATION_COLOR: dict[Annotation, str] = {
    Annotation.BRILLIANT: "#06b6d4",
    Annotation.GOOD: "#3b82f6",
    Annotation.BEST: "#22c55e",
    Annotation.INTERESTING: "#a855f7",
    Annotation.DUBIOUS: "#facc15",
    Annotation.MISTAKE: "#fb923c",
    Annotation.BLUNDER: "#ef4444",
}


def annotation_from_nag(nag: int) -> Annotation | None:
    """Map a numeric glyph code to an annotation (``None`` when unknown)."""
    return _NAG_ANNOTATION.get(nag)


def severity(annotation: Annotation | None) -> int:
    """Rank negative markers: ``??`` > ``?`` > ``?!`` > anything else."""
    if annotation is None:
        return 0
    return _SEVERITY.get(annotation, 0)

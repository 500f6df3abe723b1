# =============================================================================
# Fact Parsing — Regex Value Extraction and Confidence Scoring
# =============================================================================
#
# Pure functions over the raw text returned by the document extractions.
# Nothing here does I/O and nothing here raises on unexpected input: a
# text that matches no pattern simply contributes nothing, and the
# display value degrades to NOT_FOUND.
#
# CONFIDENCE SCORING:
#   For each sub-fact (e.g. underground floors, above-ground floors):
#     < 2 parseable values  → skipped (0 / 0)
#     1 distinct value      → weight / weight
#     2 distinct values     → weight/2 / weight
#     3 distinct values     → 0 / weight
#   Comparator verdict      → +1 denominator, +1 numerator if it says "áno"
#   score = numerator / denominator, clamped to [0, 1]; 0.5 if nothing counted
#
# Sub-facts weigh 2 against the comparator's 1: the comparator reads the
# same extractions, the numeric cross-check does not depend on it.
# =============================================================================

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

NOT_FOUND = "Nezistené"
AFFIRMATIVE_TOKEN = "áno"
NEUTRAL_CONFIDENCE = 0.5
COMPARATOR_WEIGHT = 1


@dataclass(frozen=True)
class SubFact:
    """One numeric field inside an extraction text."""

    key: str
    pattern: re.Pattern[str]
    weight: int = 2


# ---------------------------------------------------------------------------
# Sub-Fact Patterns
# ---------------------------------------------------------------------------

FLOOR_SUB_FACTS: tuple[SubFact, ...] = (
    SubFact("underground", re.compile(r"podzemn[ýé]ch?\s*podlaží?:?\s*(\d+)", re.IGNORECASE)),
    SubFact("above", re.compile(r"nadzemn[ýé]ch?\s*podlaží?:?\s*(\d+)", re.IGNORECASE)),
)

# The total matches "parkovacích miest: 40" at the start of a clause or
# right after "počet". A qualifier word before "parkovacích" (vonkajších,
# garážových, ...) or after "miest" (v garáži) keeps the split counts out.
PARKING_SUB_FACTS: tuple[SubFact, ...] = (
    SubFact(
        "total",
        re.compile(
            r"(?:počet\s+|(?<!\w\s)(?<!\w\s\s))"
            r"parkovac\w*\s+miest\w*\s*:?\s*(\d+)",
            re.IGNORECASE,
        ),
    ),
    SubFact(
        "outdoor",
        re.compile(
            r"vonkajš\w*(?:\s+parkovac\w*)?\s+miest\w*\s*:?\s*(\d+)",
            re.IGNORECASE,
        ),
    ),
    SubFact(
        "garage",
        re.compile(
            r"(?:v\s+garáž\w*|garážov\w*\s+(?:parkovac\w*\s+)?(?:miest|státi|stojísk)\w*)"
            r"\s*:?\s*(\d+)",
            re.IGNORECASE,
        ),
    ),
)


# ---------------------------------------------------------------------------
# Generic Helpers
# ---------------------------------------------------------------------------


def parse_sub_facts(
    text: str,
    sub_facts: Sequence[SubFact],
) -> dict[str, int | None]:
    """First match of every sub-fact in `text`; None where absent."""
    parsed: dict[str, int | None] = {}
    for sub_fact in sub_facts:
        match = sub_fact.pattern.search(text or "")
        parsed[sub_fact.key] = int(match.group(1)) if match else None
    return parsed


def first_match(
    raw_texts: Sequence[str],
    sub_facts: Sequence[SubFact],
) -> dict[str, int | None] | None:
    """
    Parsed fields of the first text (in source order) where at least one
    sub-fact matched, or None when no text matches anything.
    """
    for text in raw_texts:
        parsed = parse_sub_facts(text, sub_facts)
        if any(value is not None for value in parsed.values()):
            return parsed
    return None


def score_agreement(
    values: Sequence[int | None],
    weight: float,
) -> tuple[float, float]:
    """(numerator, denominator) contribution of one sub-fact."""
    present = [value for value in values if value is not None]
    if len(present) < 2:
        return 0.0, 0.0

    distinct = len(set(present))
    if distinct == 1:
        return float(weight), float(weight)
    if distinct == 2:
        return weight / 2, float(weight)
    return 0.0, float(weight)


def comparator_affirms(verdict: str) -> bool:
    return AFFIRMATIVE_TOKEN in (verdict or "").lower()


def combine_confidence(
    raw_texts: Sequence[str],
    verdict: str,
    sub_facts: Sequence[SubFact],
) -> float:
    """Blend per-sub-fact agreement with the comparator's yes/no."""
    parsed = [parse_sub_facts(text, sub_facts) for text in raw_texts]

    numerator = 0.0
    denominator = 0.0
    for sub_fact in sub_facts:
        gained, possible = score_agreement(
            [fields[sub_fact.key] for fields in parsed], sub_fact.weight,
        )
        numerator += gained
        denominator += possible

    if comparator_affirms(verdict):
        numerator += COMPARATOR_WEIGHT
    denominator += COMPARATOR_WEIGHT

    if denominator == 0:
        return NEUTRAL_CONFIDENCE
    return min(1.0, max(0.0, numerator / denominator))


# ---------------------------------------------------------------------------
# Fact Type: Floor Count
# ---------------------------------------------------------------------------


def extract_floor_value(raw_texts: Sequence[str]) -> str:
    """'2 PP + 5 NP' from the first text that mentions either count."""
    fields = first_match(raw_texts, FLOOR_SUB_FACTS)
    if fields is None:
        return NOT_FOUND

    underground = fields["underground"]
    above = fields["above"]
    return (
        f"{'?' if underground is None else underground} PP + "
        f"{'?' if above is None else above} NP"
    )


def calculate_floor_confidence(raw_texts: Sequence[str], verdict: str) -> float:
    return combine_confidence(raw_texts, verdict, FLOOR_SUB_FACTS)


# ---------------------------------------------------------------------------
# Fact Type: Parking Spaces
# ---------------------------------------------------------------------------


def extract_parking_value(raw_texts: Sequence[str]) -> str:
    """
    '40 miest (28 vonkajších + 12 v garáži)'.

    Missing split counts render as 0; a missing total is the sum of the
    split counts.
    """
    fields = first_match(raw_texts, PARKING_SUB_FACTS)
    if fields is None:
        return NOT_FOUND

    outdoor = fields["outdoor"] or 0
    garage = fields["garage"] or 0
    total = fields["total"]
    if total is None:
        total = outdoor + garage
    return f"{total} miest ({outdoor} vonkajších + {garage} v garáži)"


def calculate_parking_confidence(raw_texts: Sequence[str], verdict: str) -> float:
    return combine_confidence(raw_texts, verdict, PARKING_SUB_FACTS)

# =============================================================================
# Unit Tests — Fact Parsing (value extraction + confidence scoring)
# =============================================================================
#
# Pure functions only: no mocks, no event loop.
# =============================================================================

import pytest

from app.services.fact_parsing import (
    FLOOR_SUB_FACTS,
    NOT_FOUND,
    PARKING_SUB_FACTS,
    calculate_floor_confidence,
    calculate_parking_confidence,
    comparator_affirms,
    extract_floor_value,
    extract_parking_value,
    parse_sub_facts,
    score_agreement,
)


def _floors(underground: int, above: int) -> str:
    return (
        f"Počet podzemných podlaží: {underground}, "
        f"Počet nadzemných podlaží: {above}"
    )


def _parking(total: int, outdoor: int, garage: int) -> str:
    return (
        f"Počet parkovacích miest: {total}, "
        f"Počet vonkajších parkovacích miest: {outdoor}, "
        f"Počet parkovacích miest v garáži: {garage}"
    )


# ---------------------------------------------------------------------------
# Test: Sub-Fact Parsing
# ---------------------------------------------------------------------------


class TestParseSubFacts:

    def test_floor_format(self):
        parsed = parse_sub_facts(_floors(2, 5), FLOOR_SUB_FACTS)
        assert parsed == {"underground": 2, "above": 5}

    def test_floor_case_insensitive_and_loose_spacing(self):
        parsed = parse_sub_facts(
            "PODZEMNÉ podlažie 1; nadzemných podlaží 7", FLOOR_SUB_FACTS,
        )
        assert parsed["above"] == 7

    def test_missing_field_is_none(self):
        parsed = parse_sub_facts("Počet nadzemných podlaží: 4", FLOOR_SUB_FACTS)
        assert parsed == {"underground": None, "above": 4}

    def test_parking_split_counts_do_not_leak_into_total(self):
        parsed = parse_sub_facts(
            "Počet vonkajších parkovacích miest: 28, "
            "Počet parkovacích miest v garáži: 12",
            PARKING_SUB_FACTS,
        )
        assert parsed == {"total": None, "outdoor": 28, "garage": 12}

    def test_parking_full_format(self):
        parsed = parse_sub_facts(_parking(40, 28, 12), PARKING_SUB_FACTS)
        assert parsed == {"total": 40, "outdoor": 28, "garage": 12}

    def test_parking_total_without_pocet(self):
        parsed = parse_sub_facts("Parkovacích miest: 40", PARKING_SUB_FACTS)
        assert parsed["total"] == 40

    def test_parking_total_after_comma(self):
        parsed = parse_sub_facts(
            "Objekt A, parkovacích miest 35, z toho garážových miest: 10",
            PARKING_SUB_FACTS,
        )
        assert parsed == {"total": 35, "outdoor": None, "garage": 10}

    def test_parking_qualifier_never_counts_as_total(self):
        parsed = parse_sub_facts(
            "Garážových parkovacích miest: 12, vonkajších  parkovacích miest: 8",
            PARKING_SUB_FACTS,
        )
        assert parsed["total"] is None

    def test_empty_text(self):
        assert parse_sub_facts("", FLOOR_SUB_FACTS) == {
            "underground": None, "above": None,
        }


# ---------------------------------------------------------------------------
# Test: Agreement Scoring
# ---------------------------------------------------------------------------


class TestScoreAgreement:

    def test_full_agreement(self):
        assert score_agreement([3, 3, 3], 2) == (2.0, 2.0)

    def test_two_of_three_agree(self):
        assert score_agreement([2, 2, 3], 2) == (1.0, 2.0)

    def test_all_distinct(self):
        assert score_agreement([1, 2, 3], 2) == (0.0, 2.0)

    def test_single_value_is_skipped(self):
        assert score_agreement([4, None, None], 2) == (0.0, 0.0)

    def test_two_present_equal(self):
        assert score_agreement([None, 5, 5], 2) == (2.0, 2.0)


class TestComparatorAffirms:

    def test_affirmative(self):
        assert comparator_affirms("Zhodujú sa: áno")

    def test_uppercase(self):
        assert comparator_affirms("ZHODUJÚ SA: ÁNO")

    def test_negative(self):
        assert not comparator_affirms("Zhodujú sa: nie")

    def test_empty(self):
        assert not comparator_affirms("")


# ---------------------------------------------------------------------------
# Test: Floor Count
# ---------------------------------------------------------------------------


class TestFloorValue:

    def test_full_agreement_value(self):
        texts = [_floors(2, 5)] * 3
        assert extract_floor_value(texts) == "2 PP + 5 NP"

    def test_first_matching_source_wins(self):
        texts = ["Dokument neobsahuje údaje.", _floors(1, 4), _floors(2, 5)]
        assert extract_floor_value(texts) == "1 PP + 4 NP"

    def test_missing_field_placeholder(self):
        texts = ["Počet nadzemných podlaží: 6", "", ""]
        assert extract_floor_value(texts) == "? PP + 6 NP"

    def test_not_found(self):
        texts = ["Nič tu nie je.", "Iný text.", ""]
        assert extract_floor_value(texts) == NOT_FOUND


class TestFloorConfidence:

    def test_full_agreement_with_affirming_comparator(self):
        texts = [_floors(2, 5)] * 3
        assert calculate_floor_confidence(texts, "Zhodujú sa: áno") == 1.0

    def test_total_disagreement(self):
        texts = [_floors(1, 4), _floors(2, 5), _floors(3, 6)]
        assert calculate_floor_confidence(texts, "Zhodujú sa: nie") == 0.0

    def test_partial_agreement(self):
        texts = [
            "Počet podzemných podlaží: 2",
            "Počet podzemných podlaží: 2",
            "Počet podzemných podlaží: 3",
        ]
        confidence = calculate_floor_confidence(texts, "Zhodujú sa: áno")
        assert confidence == pytest.approx(2 / 3)

    def test_no_data_and_no_affirmation(self):
        texts = ["Text bez čísel.", "Ďalší text.", "Nič."]
        assert calculate_floor_confidence(texts, "Zhodujú sa: nie") == 0.0

    def test_no_data_comparator_only(self):
        texts = ["", "", ""]
        assert calculate_floor_confidence(texts, "áno") == 1.0

    def test_agreement_but_comparator_disagrees(self):
        texts = [_floors(2, 5)] * 3
        assert calculate_floor_confidence(texts, "Zhodujú sa: nie") == pytest.approx(0.8)

    def test_deterministic(self):
        texts = [_floors(1, 4), _floors(1, 5), "nič"]
        first = calculate_floor_confidence(texts, "áno")
        assert all(
            calculate_floor_confidence(texts, "áno") == first for _ in range(5)
        )

    @pytest.mark.parametrize("texts,verdict", [
        (["", "", ""], ""),
        (["podzemných podlaží: 999999"] * 3, "áno áno áno"),
        (["\x00", "🙂", "podlaží"], "Ano"),
    ])
    def test_bounds(self, texts, verdict):
        assert 0.0 <= calculate_floor_confidence(texts, verdict) <= 1.0


# ---------------------------------------------------------------------------
# Test: Parking Spaces
# ---------------------------------------------------------------------------


class TestParking:

    def test_value_full_format(self):
        texts = [_parking(40, 28, 12)] * 3
        assert extract_parking_value(texts) == "40 miest (28 vonkajších + 12 v garáži)"

    def test_value_total_only_uses_zero_placeholders(self):
        texts = ["Počet parkovacích miest: 40", "", ""]
        assert extract_parking_value(texts) == "40 miest (0 vonkajších + 0 v garáži)"

    def test_value_total_derived_from_split(self):
        texts = ["Počet vonkajších parkovacích miest: 10, Počet parkovacích miest v garáži: 5"]
        assert extract_parking_value(texts) == "15 miest (10 vonkajších + 5 v garáži)"

    def test_value_bare_total(self):
        texts = ["Parkovacích miest: 40", "", ""]
        assert extract_parking_value(texts) == "40 miest (0 vonkajších + 0 v garáži)"

    def test_value_not_found(self):
        assert extract_parking_value(["bez údajov"] * 3) == NOT_FOUND

    def test_confidence_full_agreement(self):
        texts = [_parking(40, 28, 12)] * 3
        assert calculate_parking_confidence(texts, "Zhodujú sa: áno") == 1.0

    def test_confidence_total_mismatch(self):
        texts = [_parking(40, 28, 12), _parking(42, 28, 12), _parking(40, 28, 12)]
        # total: 1/2, outdoor: 2/2, garage: 2/2, comparator: 0/1 → 5/7
        confidence = calculate_parking_confidence(texts, "Zhodujú sa: nie")
        assert confidence == pytest.approx(5 / 7)

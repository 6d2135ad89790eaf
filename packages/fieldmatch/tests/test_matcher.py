"""Tests for the field matching service."""

import pytest
from structlog.testing import capture_logs

from fieldmatch.classifier import classify
from fieldmatch.config import MatchConfig
from fieldmatch.matcher import (
    FieldMatcher,
    find_bank_matches,
    find_category_matches,
    find_city_matches,
    find_location_matches,
    find_matches,
    find_province_matches,
    find_subject_matches,
)
from fieldmatch.types import CandidateRecord

CITIES = [
    {"id": "c1", "name": "Yogyakarta", "local_name": "Kota Yogyakarta", "alternate_name": None},
    {"id": "c2", "name": "Kabupaten Sleman"},
    {"id": "c3", "name": "Kabupaten Bantul"},
    {"id": "c4", "name": "Jakarta Pusat"},
    {"id": "c5", "name": "Bandung"},
]

BANKS = [
    CandidateRecord("b1", "BCA", "Bank Central Asia"),
    CandidateRecord("b2", "Bank Muamalat Indonesia"),
    CandidateRecord("b3", "Bank Mandiri"),
]


def test_alias_resolution():
    matches = find_matches("jogja", CITIES, "cities")
    assert matches[0].id == "c1"
    assert matches[0].similarity >= 95
    assert matches[0].match_type == "alias"


def test_pattern_stripping_bank():
    matches = find_matches("Muamalat", BANKS, "banks")
    assert matches[0].id == "b2"
    assert matches[0].similarity >= 85


@pytest.mark.parametrize("term", ["Sleman", "Kab Sleman"])
def test_pattern_stripping_locative(term):
    matches = find_matches(term, CITIES, "cities")
    assert matches[0].id == "c2"
    assert matches[0].similarity >= 85


def test_bdg_end_to_end():
    matches = find_matches("bdg", CITIES, "cities")
    assert matches[0].name == "Bandung"
    assert matches[0].similarity == 95
    assert matches[0].match_type == "alias"
    assert classify(matches).tier == "AUTO_CORRECTED"


def test_directional_city_prefers_full_regency_name():
    candidates = [
        {"id": "c5", "name": "Bandung"},
        {"id": "c8", "name": "Kabupaten Bandung Barat"},
    ]
    matches = find_matches("Bandung Barat", candidates, "cities")
    assert matches[0].id == "c8"
    assert matches[0].similarity == 95
    bare = next(m for m in matches if m.id == "c5")
    assert bare.similarity < 85
    assert classify(matches).match.id == "c8"


def test_exact_match_keeps_record_fields():
    matches = find_matches("kota yogyakarta", CITIES, "cities")
    top = matches[0]
    assert (top.id, top.name, top.local_name) == ("c1", "Yogyakarta", "Kota Yogyakarta")
    assert top.similarity == 100
    assert top.match_type == "exact"


@pytest.mark.parametrize("term", ["", "   ", None, 42])
def test_invalid_search_term(term):
    assert find_matches(term, CITIES, "cities") == []


@pytest.mark.parametrize("candidates", [[], (), None, "Bandung", {"id": "c5", "name": "Bandung"}])
def test_invalid_or_empty_candidates(candidates):
    assert find_matches("bandung", candidates, "cities") == []


def test_unknown_field_type():
    assert find_matches("bandung", CITIES, "planets") == []


def test_malformed_candidates_skipped():
    candidates = [{"id": "x"}, {"id": "y", "name": ""}, None, 42, {"id": "c5", "name": "Bandung"}]
    with capture_logs() as logs:
        matches = find_matches("bandung", candidates, "cities")

    assert [m.id for m in matches] == ["c5"]
    skipped = [e for e in logs if e["event"] == "malformed_candidate"]
    assert [e["position"] for e in skipped] == [0, 1, 2, 3]
    assert all(e["log_level"] == "warning" for e in skipped)


def test_invalid_term_is_logged():
    with capture_logs() as logs:
        find_matches("  ", CITIES, "cities")
    assert logs[0]["event"] == "invalid_search_term"


def test_floor_filters_noise():
    matches = find_matches("bandung", CITIES, "cities")
    assert [m.id for m in matches] == ["c5"]
    assert all(m.similarity > 50 for m in matches)


def test_sorted_descending_and_stable():
    matches = find_matches("kabupaten", CITIES, "cities")
    assert [m.id for m in matches] == ["c2", "c3"]
    assert [m.similarity for m in matches] == [80, 80]


def test_sorted_non_increasing():
    matches = find_matches("kota", CITIES + [{"id": "c6", "name": "Kota Bandung"}], "cities")
    similarities = [m.similarity for m in matches]
    assert similarities == sorted(similarities, reverse=True)


def test_idempotent():
    assert find_matches("Kab Sleman", CITIES, "cities") == find_matches("Kab Sleman", CITIES, "cities")


def test_tuple_of_records_accepted():
    matches = find_matches("BCA", tuple(BANKS), "banks")
    assert matches[0].id == "b1"
    assert matches[0].match_type == "exact"


def test_config_floor_override():
    config = MatchConfig()
    config.scoring.min_similarity = 90
    assert find_matches("kabupaten", CITIES, "cities", config=config) == []


def test_field_wrappers():
    assert find_bank_matches("bca", BANKS)[0].id == "b1"
    assert find_city_matches("bdg", CITIES)[0].id == "c5"
    assert find_location_matches("Sleman", CITIES)[0].id == "c2"
    assert find_province_matches("diy", [{"id": "p1", "name": "Daerah Istimewa Yogyakarta"}])[0].id == "p1"
    assert find_subject_matches("mtk", [{"id": "s1", "name": "Matematika"}])[0].match_type == "alias"
    assert find_category_matches("sma", [{"id": "k1", "name": "Sekolah Menengah Atas"}])[0].id == "k1"


def test_location_wrapper_rejects_other_fields():
    assert find_location_matches("bca", BANKS, "banks") == []


class TestFieldMatcher:
    def test_match_one(self):
        matcher = FieldMatcher()
        result = matcher.match_one("bdg", CITIES, "cities", row_id=7)

        assert result.row_id == 7
        assert result.match_id == "c5"
        assert result.match_name == "Bandung"
        assert result.tier == "AUTO_CORRECTED"
        assert result.similarity == 95
        assert result.match_type == "alias"
        assert result.debug["top_candidates"][0]["id"] == "c5"

    def test_match_one_reject(self):
        matcher = FieldMatcher()
        result = matcher.match_one("Zzzz", CITIES, "cities")

        assert result.tier == "REJECT"
        assert result.match_id is None
        assert result.reasons == ["no_matches"]
        assert matcher.stats.no_matches == 1

    def test_match_all_and_stats(self):
        matcher = FieldMatcher()
        results = matcher.match_all(["Jogja", "Kab Sleman", "", "Zzzz"], CITIES, "cities")

        assert [r.row_id for r in results] == [0, 1, 2, 3]
        assert [r.tier for r in results] == [
            "AUTO_CORRECTED", "AUTO_CORRECTED", "REJECT", "REJECT",
        ]
        assert matcher.stats.rows == 4
        assert matcher.stats.invalid_terms == 1
        assert matcher.stats.comparisons == 3 * len(CITIES)
        assert matcher.stats.tiers["REJECT"] == 2

    def test_exact_auto_accept(self):
        matcher = FieldMatcher()
        result = matcher.match_one("Bank Mandiri", BANKS, "banks")
        assert result.tier == "AUTO_ACCEPT"
        assert result.match_id == "b3"

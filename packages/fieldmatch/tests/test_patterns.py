"""Tests for prefix/suffix stripping."""

from fieldmatch.config import PatternConfig
from fieldmatch.patterns import AFFIXES, AffixSet, PatternMatcher, core_forms


def test_candidate_prefix_exact_core():
    pm = PatternMatcher()
    assert pm.boosted_score("sleman", "kabupaten sleman", "cities") == 95


def test_both_sides_prefixed():
    pm = PatternMatcher()
    assert pm.boosted_score("kab sleman", "kabupaten sleman", "cities") == 95


def test_prefix_and_suffix_stripped_together():
    pm = PatternMatcher()
    assert pm.boosted_score("muamalat", "bank muamalat indonesia", "banks") == 95


def test_input_prefix_bare_candidate():
    pm = PatternMatcher()
    assert pm.boosted_score("bank mandiri", "mandiri", "banks") == 95


def test_close_core_is_boosted_and_capped():
    pm = PatternMatcher()
    # "slemam" vs "sleman" scores 83, boosted by 10 and capped at 90
    assert pm.boosted_score("slemam", "kabupaten sleman", "cities") == 90


def test_weak_core_scores_zero():
    pm = PatternMatcher()
    assert pm.boosted_score("xyz", "kota bandung", "cities") == 0


def test_no_affix_scores_zero():
    pm = PatternMatcher()
    assert pm.boosted_score("bandung", "surabaya", "cities") == 0


def test_directional_suffix_not_stripped_from_both_sides():
    pm = PatternMatcher()
    assert pm.boosted_score("jakarta barat", "jakarta timur", "cities") == 0


def test_directional_suffix_not_stripped_from_input():
    pm = PatternMatcher()
    assert pm.boosted_score("bandung barat", "bandung", "cities") == 0
    assert pm.boosted_score("jakarta selatan", "jakarta", "cities") == 0


def test_field_without_affixes():
    pm = PatternMatcher()
    assert pm.boosted_score("matematika", "kota matematika", "subjects") == 0


def test_no_field_type_uses_every_list():
    pm = PatternMatcher()
    assert pm.boosted_score("sleman", "kabupaten sleman") == 95
    assert pm.boosted_score("muamalat", "bank muamalat") == 95


def test_core_forms():
    forms = core_forms("pt bank mandiri tbk", AFFIXES["banks"])
    assert "mandiri tbk" in forms
    assert "pt bank mandiri" in forms
    assert "mandiri" in forms
    assert "pt bank mandiri tbk" not in forms


def test_core_forms_drop_empty_cores():
    assert core_forms("kota ", AffixSet(prefixes=("kota ",))) == []


def test_custom_affixes_and_config():
    pm = PatternMatcher(
        affixes={"subjects": AffixSet(prefixes=("pelajaran ",))},
        config=PatternConfig(exact_core_score=99),
    )
    assert pm.boosted_score("fisika", "pelajaran fisika", "subjects") == 99
    assert pm.boosted_score("fisika", "kota fisika", "cities") == 0


def test_affixes_share_alias_data_dir():
    from fieldmatch import aliases, patterns

    assert patterns.DATA_DIR is aliases.DATA_DIR

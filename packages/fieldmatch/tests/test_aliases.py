"""Tests for the alias registry."""

from fieldmatch.aliases import DEFAULT_REGISTRY, AliasRegistry


def test_builtin_tables_present():
    assert DEFAULT_REGISTRY.field_types() == [
        "banks", "categories", "cities", "provinces", "subjects",
    ]


def test_lookup_examples():
    assert DEFAULT_REGISTRY.lookup("provinces", "diy") == "daerah istimewa yogyakarta"
    assert DEFAULT_REGISTRY.lookup("banks", "bca") == "bank central asia"
    assert DEFAULT_REGISTRY.lookup("subjects", "mtk") == "matematika"
    assert DEFAULT_REGISTRY.lookup("categories", "sma") == "sekolah menengah atas"
    assert DEFAULT_REGISTRY.lookup("cities", "bdg") == "bandung"


def test_lookup_case_insensitive():
    assert DEFAULT_REGISTRY.lookup("cities", "  JOGJA ") == "yogyakarta"


def test_lookup_scoped_per_field():
    assert DEFAULT_REGISTRY.lookup("cities", "bca") is None
    # same key, different tables
    assert DEFAULT_REGISTRY.lookup("provinces", "jateng") == "jawa tengah"
    assert DEFAULT_REGISTRY.lookup("banks", "jateng") == "bank jawa tengah"


def test_lookup_exact_key_only():
    assert DEFAULT_REGISTRY.lookup("cities", "jogj") is None
    assert DEFAULT_REGISTRY.lookup("cities", "jogja city") is None


def test_lookup_unknown_field_or_empty():
    assert DEFAULT_REGISTRY.lookup("planets", "diy") is None
    assert DEFAULT_REGISTRY.lookup("cities", "") is None


def test_custom_tables_are_normalized():
    registry = AliasRegistry({"banks": {"BTPN ": "Bank BTPN"}})
    assert registry.lookup("banks", "btpn") == "bank btpn"
    assert len(registry) == 1


def test_with_overrides_returns_new_registry():
    registry = AliasRegistry({"cities": {"bdg": "bandung"}})
    extended = registry.with_overrides({"cities": {"smg": "semarang"}, "banks": {"bca": "bca"}})

    assert extended.lookup("cities", "smg") == "semarang"
    assert extended.lookup("cities", "bdg") == "bandung"
    assert extended.lookup("banks", "bca") == "bca"
    assert registry.lookup("cities", "smg") is None


def test_table_is_a_copy():
    table = DEFAULT_REGISTRY.table("cities")
    table["zzz"] = "nowhere"
    assert DEFAULT_REGISTRY.lookup("cities", "zzz") is None

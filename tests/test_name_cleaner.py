"""
Tests for organisation name cleaning.
"""

import pytest

from reconciliation.preprocessors import NameCleaner, NameRule, strip_names
from reconciliation.preprocessors.name_cleaner import transliterate


class TestStripNames:
    @pytest.mark.parametrize(
        "name, cleaned",
        [
            ("Müller Ltd.", "MULLER"),
            ("The Coca-Cola Company", "COCACOLA"),
            ("Procter & Gamble Co.", "PROCTERGAMBLE"),
            ("Smith & Co Ltd", "SMITH"),
            ("Shell (UK) [old name]", "SHELL"),
            ("Bank, the", "BANK"),
            ("Nestlé S.A.", "NESTLE"),
            ("Straße GmbH", "STRASSE"),
            ("Chevron Corporation", "CHEVRON"),
            ("ExxonMobil", "EXXONMOBIL"),
        ],
    )
    def test_default_rules(self, name, cleaned):
        assert strip_names(name) == cleaned

    def test_co_needs_word_boundary(self):
        # "& Co" is only removed as a whole word
        assert strip_names("Johnson & Coleman") == "JOHNSONCOLEMAN"

    def test_only_final_legal_suffix_removed(self):
        assert strip_names("Foo Co Ltd") == "FOOCO"

    def test_suffix_inside_name_kept(self):
        assert strip_names("Agco Holdings") == "AGCOHOLDINGS"


class TestTransliterate:
    def test_letters_without_decomposition(self):
        assert transliterate("Ørsted Łódź Æon") == "Orsted Lodz AEon"

    def test_accents(self):
        assert transliterate("Société Générale") == "Societe Generale"


class TestNameCleaner:
    def test_keep_case(self):
        cleaner = NameCleaner({"uppercase": False})
        assert cleaner.transform("The Foo Ltd") == "Foo"

    def test_without_transliteration(self):
        cleaner = NameCleaner({"transliterate": False, "uppercase": False})
        assert cleaner.transform("Müller Ltd") == "Müller"

    def test_extra_rules_run_last(self):
        cleaner = NameCleaner({"extra_rules": [NameRule(r"HOLDINGS$", flags=0)], "uppercase": False})
        assert cleaner.transform("Agco HOLDINGS") == "Agco"

    def test_replacement_rules(self):
        cleaner = NameCleaner({"rules": [NameRule(r"\s+", "_")], "transliterate": False})
        assert cleaner.transform("bp europe") == "BP_EUROPE"

    def test_transform_all(self):
        assert NameCleaner().transform_all(["BP plc", "bp"]) == ["BP", "BP"]

    def test_process_result(self):
        result = NameCleaner().process("Exxon Mobil Corp.")
        assert result.success
        assert result.value == "EXXONMOBIL"
        assert result.metadata["original_length"] == len("Exxon Mobil Corp.")

    def test_process_empty_result(self):
        result = NameCleaner().process("(n/a)")
        assert not result.success
        assert "empty" in result.error

    def test_process_rejects_non_string(self):
        result = NameCleaner().process(None)
        assert not result.success

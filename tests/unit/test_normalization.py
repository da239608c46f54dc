"""
Unit tests for the text normalizers (construction category, service code,
arrondissement).
"""

import pytest

from travaux_paris.services.normalization import (
    CONSTRUCTION_RULES,
    DEFAULT_CONSTRUCTION_GROUP,
    clean_text,
    get_arrondissement,
    normalize_construction,
    normalize_service,
)


# ============================================================================
# Text helpers
# ============================================================================

class TestCleanText:

    def test_lowercases_and_strips_accents(self):
        assert clean_text("Rénovation ÉNERGÉTIQUE") == "renovation energetique"

    def test_collapses_whitespace(self):
        assert clean_text("  mise   aux\tnormes\n") == "mise aux normes"


# ============================================================================
# Construction category
# ============================================================================

class TestNormalizeConstruction:

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_input_returns_none(self, raw):
        assert normalize_construction(raw) is None

    @pytest.mark.parametrize("raw,expected", [
        ("Mise en accessibilité", "Accessibilité"),
        ("Amélioration de la performance énergétique", "Performance énergétique"),
        ("Economie d'énergie", "Performance énergétique"),
        ("Confort d'été", "Performance énergétique"),
        ("Isolation des combles", "Isolation / Étanchéité"),
        ("Reprise de l'étanchéité", "Isolation / Étanchéité"),
        ("Traitement phonique", "Isolation / Étanchéité"),
        ("Végétalisation de la cour", "Végétalisation"),
        ("Restructuration des locaux", "Restructuration"),
        ("Mise aux normes", "Restructuration"),
        ("Rénovation des sanitaires", "Rénovation"),
        ("Modernisation de l'éclairage", "Modernisation"),
        ("Ravalement", "Ravalement"),
        ("Réfection de la façade", "Ravalement"),
        ("Sécurisation des accès", "Sécurisation"),
        ("Embellissement du hall", "Embellissement"),
        ("Réaménagement de l'accueil", "Amélioration fonctionnelle"),
        ("Construction d'un gymnase", "Construction neuve"),
        ("Création d'une crèche", "Construction neuve"),
        ("Pavillon", "Construction neuve"),
        ("Réfection de la couverture", "Couverture"),
    ])
    def test_known_categories(self, raw, expected):
        assert normalize_construction(raw) == expected

    def test_unknown_text_falls_back_to_autre(self):
        assert normalize_construction("Peinture des couloirs") == "Autre"

    def test_whitespace_only_is_autre(self):
        assert normalize_construction("   ") == "Autre"

    def test_earlier_rule_wins(self):
        # Matches both "accessibilité" and "rénovation"
        assert normalize_construction("Rénovation et accessibilité") == "Accessibilité"
        # Matches both "isolation" and "rénovation"
        assert normalize_construction("Rénovation avec isolation") == "Isolation / Étanchéité"

    def test_case_and_accent_insensitive(self):
        assert normalize_construction("RENOVATION") == "Rénovation"
        assert normalize_construction("rénovation") == "Rénovation"

    def test_output_is_always_a_known_label(self):
        labels = {label for _, label in CONSTRUCTION_RULES} | {DEFAULT_CONSTRUCTION_GROUP}
        assert len(labels) == 14
        for raw in ["x", "toiture", "Création", "énergie", "façade", "?"]:
            assert normalize_construction(raw) in labels


# ============================================================================
# Service code
# ============================================================================

class TestNormalizeService:

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_input_returns_none(self, raw):
        assert normalize_service(raw) is None

    @pytest.mark.parametrize("raw,expected", [
        ("SE", "SE"),
        ("se", "SE"),
        (" samo ", "SAMO"),
        ("Slt", "SLT"),
    ])
    def test_exact_codes(self, raw, expected):
        assert normalize_service(raw) == expected

    @pytest.mark.parametrize("raw", ["SLA Centre", "sla-centre", "SLA CENTRE", "sla centre "])
    def test_sla_centre(self, raw):
        assert normalize_service(raw) == "SLA Centre"

    @pytest.mark.parametrize("raw,expected", [
        ("SLA 3-4", "SLA 3/4"),
        ("SLA 5 / 6", "SLA 5/6"),
        ("SLA 19 - 20", "SLA 19/20"),
        ("sla12", "SLA 12"),
    ])
    def test_separators(self, raw, expected):
        assert normalize_service(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("SLA715", "SLA 7/15"),
        ("SLA 1112", "SLA 11/12"),
        ("SLA 345", "SLA 3/4/5"),
        ("SLA 1920", "SLA 19/20"),
        ("SLA 210", "SLA 2/10"),
        ("SLA 101", "SLA 10/1"),
    ])
    def test_digit_run_splitting(self, raw, expected):
        assert normalize_service(raw) == expected

    def test_two_digits_are_not_split(self):
        assert normalize_service("SLA 56") == "SLA 56"

    def test_unknown_text_is_trimmed_and_returned(self):
        assert normalize_service("  unknown text ") == "unknown text"

    def test_sla_alone_is_returned_unchanged(self):
        assert normalize_service("SLA") == "SLA"

    def test_hyphen_after_prefix_is_ignored(self):
        assert normalize_service("SLA-5") == "SLA 5"
        assert normalize_service("SLA-7-8") == "SLA 7/8"


# ============================================================================
# Arrondissement
# ============================================================================

class TestGetArrondissement:

    @pytest.mark.parametrize("code_postal,expected", [
        ("75101", "1er"),
        ("75001", "1er"),
        ("75002", "2e"),
        ("75115", "15e"),
        ("75020", "20e"),
        ("75116", "16e"),
    ])
    def test_valid_codes(self, code_postal, expected):
        assert get_arrondissement({"code_postal": code_postal}) == expected

    @pytest.mark.parametrize("code_postal", ["99999", "75000", "750AB", None, ""])
    def test_invalid_codes_return_none(self, code_postal):
        assert get_arrondissement({"code_postal": code_postal}) is None

    def test_missing_field_returns_none(self):
        assert get_arrondissement({}) is None

    def test_integer_code_is_accepted(self):
        assert get_arrondissement({"code_postal": 75011}) == "11e"

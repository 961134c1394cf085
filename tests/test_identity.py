"""Tests for record identity construction."""

from opportunity_monitor.identity import (
    MISSING_DEADLINE,
    build_identity,
    normalize_deadline,
    normalize_title,
)


class TestNormalizeTitle:
    def test_lowercases_and_strips_punctuation(self):
        assert normalize_title("  EDITAL 01/2025!! ") == "edital012025"

    def test_removes_accents(self):
        assert normalize_title("Chamada Pública n° 56 - Análise") == "chamadapublican56analise"

    def test_empty(self):
        assert normalize_title("") == ""
        assert normalize_title(None) == ""


class TestNormalizeDeadline:
    def test_keeps_digits_only(self):
        assert normalize_deadline("15/12/2025") == "15122025"
        assert normalize_deadline("15-12-2025") == "15122025"

    def test_empty_uses_placeholder(self):
        assert normalize_deadline("") == MISSING_DEADLINE
        assert normalize_deadline(None) == MISSING_DEADLINE

    def test_text_without_digits(self):
        assert normalize_deadline("a definir") == ""


class TestBuildIdentity:
    def test_deterministic(self):
        first = build_identity("X", "Edital 01/2025", "15/12/2025")
        second = build_identity("X", "Edital 01/2025", "15/12/2025")
        assert first == second

    def test_format(self):
        assert build_identity("ICLEI", "Analista de Clima", "15/12/2025") == "ICLEI-analistadeclima-15122025"

    def test_normalization_invariance(self):
        assert build_identity("X", "Edital 01/2025", "15/12/2025") == build_identity(
            "X", "  EDITAL 01/2025!! ", "15-12-2025"
        )

    def test_accent_invariance(self):
        assert build_identity("X", "Licitação Pública", "") == build_identity("X", "LICITACAO publica", "")

    def test_source_name_changes_identity(self):
        assert build_identity("IPEA", "Edital 01", "2025") != build_identity("FNP", "Edital 01", "2025")

    def test_first_sixty_chars_matter(self):
        base = "a" * 59
        assert build_identity("X", base + "b", "") != build_identity("X", base + "c", "")

    def test_differences_after_sixty_chars_collapse(self):
        base = "x" * 60
        assert build_identity("X", base + " (prorrogado)", "1") == build_identity("X", base, "1")

    def test_missing_deadline_gets_placeholder(self):
        assert build_identity("X", "Edital", "") == "X-edital-0000"

    def test_total_on_garbage(self):
        assert build_identity("X", "!!!", "???") == "X--"

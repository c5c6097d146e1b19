"""
Tests for strict and typo-tolerant edit distance
"""
import pytest

from edit_distance import levenshtein_distance, typo_distance


@pytest.mark.parametrize("s", ["", "a", "sbi tech", "nippon"])
def test_identity_is_zero(s):
    assert levenshtein_distance(s, s) == 0
    assert typo_distance(s, s) == 0


@pytest.mark.parametrize("s", ["a", "hdfc", "icici infra"])
def test_empty_operand_costs_length(s):
    assert levenshtein_distance("", s) == len(s)
    assert levenshtein_distance(s, "") == len(s)
    assert typo_distance("", s) == len(s)
    assert typo_distance(s, "") == len(s)


def test_levenshtein_known_values():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("flaw", "lawn") == 2
    assert levenshtein_distance("sbi", "sbi tech") == 5


def test_levenshtein_is_symmetric():
    assert levenshtein_distance("axis", "axsi") == levenshtein_distance("axsi", "axis")


def test_transposition_is_discounted():
    assert levenshtein_distance("sbi tceh", "sbi tech") == 2
    assert typo_distance("sbi tceh", "sbi tech") == 1.5


def test_typo_distance_never_exceeds_strict():
    pairs = [("nipon", "nippon"), ("hdfc", "hdcf"), ("kotak", "kotka"), ("axis", "tata")]
    for a, b in pairs:
        assert typo_distance(a, b) <= levenshtein_distance(a, b)


def test_typo_distance_positive_for_different_strings():
    assert typo_distance("icici", "icici infra") > 0

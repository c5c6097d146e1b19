"""
Tests for lexical term scoring, explanations and ranking
"""
import pytest

import lexical_scorer
from fund_models import FundRecord

SBI_TECH = "SBI Technology Opportunities Fund"


def test_tokenize_lowercases_and_splits():
    assert lexical_scorer.tokenize("  SBI   Tech ") == ["sbi", "tech"]


def test_full_match_scores_one(fund_by_name):
    fund = fund_by_name(SBI_TECH)
    assert lexical_scorer.score(fund, ["sbi", "tech"]) == 1.0


def test_unmatched_terms_dilute_the_mean(fund_by_name):
    fund = fund_by_name(SBI_TECH)
    assert lexical_scorer.score(fund, ["sbi", "zzzz"]) == pytest.approx(0.5)


def test_fuzzy_name_match_scores_lower():
    fund = FundRecord(name="Abc", short_name="Wxyz")
    assert lexical_scorer.score_term(fund, "abd") == pytest.approx(0.4)
    assert lexical_scorer.score_term(fund, "wxyy") == pytest.approx(0.35)
    assert lexical_scorer.score_term(fund, "mnop") == 0.0


def test_empty_terms_score_zero(fund_by_name):
    assert lexical_scorer.score(fund_by_name(SBI_TECH), []) == 0.0


def test_explain_lists_matched_fields(fund_by_name):
    reason = lexical_scorer.explain(fund_by_name(SBI_TECH), ["sbi", "tech"])
    assert reason == (
        'This fund name contains "sbi", fund alias contains "sbi", '
        'from SBI Mutual Fund and invests in Technology sector.'
    )


def test_explain_single_match():
    fund = FundRecord(name="Alpha Fund")
    assert lexical_scorer.explain(fund, ["alpha"]) == 'This fund name contains "alpha".'


def test_explain_fuzzy_and_partial():
    fund = FundRecord(name="Abc")
    assert lexical_scorer.explain(fund, ["abd"]) == "This fund's name is similar to your search."
    assert lexical_scorer.explain(fund, ["zzzzz"]) == "This fund partially matches your search criteria."


def test_search_ranks_and_keeps_corpus_order_for_ties(funds):
    results = lexical_scorer.search("sbi tech", funds)
    assert [r.fund.name for r in results] == [
        SBI_TECH,
        "SBI Automotive Opportunities Fund",
        "SBI Fixed Maturity Plan (FMP) - Series 78 (1170 Days)",
    ]
    assert results[0].score == 1.0
    assert results[1].score == pytest.approx(0.5)


def test_search_respects_limit(funds):
    assert len(lexical_scorer.search("fund", funds, limit=2)) == 2


def test_blank_query_returns_nothing(funds):
    assert lexical_scorer.search("   ", funds) == []


def test_dilution_boundary_is_exclusive():
    fund = FundRecord(name="Alpha Fund")
    filler = ["zzzz", "qqqq", "wwww", "yyyy", "vvvv", "uuuu", "kkkk", "jjjj", "xxxx"]

    # 1 match out of 5 terms: 0.2, kept
    assert len(lexical_scorer.search(" ".join(["alpha"] + filler[:4]), [fund])) == 1
    # 1 match out of 10 terms: exactly 0.1, dropped
    assert lexical_scorer.search(" ".join(["alpha"] + filler), [fund]) == []

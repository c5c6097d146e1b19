"""
Tests for rule-based question answering
"""
import typing
from typing import Optional

import pytest

from financial_qa import QUESTION_RULES, FinancialQAEngine, QuestionRule, answer_nav
from fund_models import FundRecord

ICICI_INFRA = "ICICI Prudential Infrastructure Fund"


@pytest.fixture
def engine():
    return FinancialQAEngine()


def test_nav_answer(engine, fund_by_name):
    answer = engine.answer("What is the NAV of ICICI Infra?", fund_by_name(ICICI_INFRA))
    assert answer == "The current NAV of ICICI Prudential Infrastructure Fund is ₹89.32."


def test_missing_nav_returns_none(engine, fund_by_name):
    fund = fund_by_name("SBI Automotive Opportunities Fund")
    assert fund.nav is None
    assert engine.answer("What is the NAV of SBI Automotive Opportunities Fund?", fund) is None


def test_first_matching_rule_owns_the_question(engine, fund_by_name):
    fund = fund_by_name(ICICI_INFRA)
    query = "current nav and expense ratio of icici infra"
    assert engine.find_rule(query).topic == 'nav'
    assert "₹89.32" in engine.answer(query, fund)


def test_no_fallthrough_when_owner_has_no_answer(engine):
    # NAV rule owns the question even though the expense ratio is known
    fund = FundRecord(name="Plain Fund", expense_ratio=1.2)
    assert engine.answer("current nav and expense ratio", fund) is None


def test_unmatched_question_returns_none(engine, fund_by_name):
    assert engine.find_rule("hello there") is None
    assert engine.answer("hello there", fund_by_name(ICICI_INFRA)) is None


def test_expense_ratio(engine, fund_by_name):
    answer = engine.answer("Tell me the expense ratio of ICICI Infra", fund_by_name(ICICI_INFRA))
    assert answer == "ICICI Prudential Infrastructure Fund has an expense ratio of 1.87%."


def test_aum_uses_thousands_separator(engine, fund_by_name):
    answer = engine.answer("What's the AUM of ICICI Infra?", fund_by_name(ICICI_INFRA))
    assert answer == ("The Assets Under Management (AUM) for ICICI Prudential "
                      "Infrastructure Fund is ₹1,523.45 crore.")


def test_elss_lock_in(engine, fund_by_name):
    answer = engine.answer("Does DSP Tax Saver Fund have any lock-in period?",
                           fund_by_name("DSP Tax Saver Fund"))
    assert answer == "DSP Tax Saver Fund is an ELSS fund and has a mandatory lock-in period of 3 years."


def test_no_lock_in_for_open_equity(engine, fund_by_name):
    answer = engine.answer("Is there a lock-in period?", fund_by_name(ICICI_INFRA))
    assert answer.endswith("does not have any mandatory lock-in period.")


def test_closed_ended_fund_detected_from_category(engine):
    fund = FundRecord(name="HDFC FMP 2638D February 2023", category="Fixed Maturity Plan")
    assert engine.answer("Is it open-ended or closed-ended?", fund) == (
        "HDFC FMP 2638D February 2023 is a closed-ended fund with a fixed maturity period."
    )


def test_passive_fund_is_not_actively_managed(engine):
    fund = FundRecord(name="UTI Nifty Index Fund", category="Index Fund")
    answer = engine.answer("Is UTI Nifty Index Fund actively managed?", fund)
    assert answer.startswith("No, UTI Nifty Index Fund is a passively managed fund")


def test_inline_portfolio_holdings(engine, fund_by_name):
    answer = engine.answer("What are the top holdings?", fund_by_name("SBI Automotive Opportunities Fund"))
    assert answer == ("Top holdings of SBI Automotive Opportunities Fund include: "
                      "Mahindra & Mahindra Ltd. (9.84%), Tata Motors Ltd. (7.50%).")


def test_holdings_linked_through_stocks(engine, store, fund_by_name):
    answer = engine.answer("Show the top holdings", fund_by_name("SBI Technology Opportunities Fund"),
                           store.stocks(), store.holdings())
    assert answer == ("Top holdings of SBI Technology Opportunities Fund include: "
                      "Ecoboard Industries Ltd. (6.25%), Mahindra & Mahindra Ltd. (4.50%).")


def test_holdings_linked_by_internal_security_id(engine, store, funds):
    fmp = next(f for f in funds if f.internal_security_id == 633423598)
    answer = engine.answer("top holdings", fmp, store.stocks(), store.holdings())
    assert "Corporate Debt (market value 3,838.83)" in answer


def test_holdings_not_available(engine, fund_by_name):
    answer = engine.answer("portfolio holdings", fund_by_name("DSP Tax Saver Fund"))
    assert answer == "Detailed portfolio holdings information for DSP Tax Saver Fund is not available."


def test_sharpe_ratio_missing(engine, fund_by_name):
    answer = engine.answer("What's the Sharpe ratio?", fund_by_name(ICICI_INFRA))
    assert answer == "Data for Sharpe ratio of ICICI Prudential Infrastructure Fund is not available."


def test_risk_profile(engine, fund_by_name):
    answer = engine.answer("How risky is ICICI Infra?", fund_by_name(ICICI_INFRA))
    assert answer == "ICICI Prudential Infrastructure Fund has a high risk profile."


def test_conservative_investor(engine, fund_by_name):
    answer = engine.answer("Is it suitable for a conservative investor?", fund_by_name("DSP Tax Saver Fund"))
    assert "moderate risk profile" in answer


def test_sip_minimum_default(engine, fund_by_name):
    answer = engine.answer("What's the SIP minimum?", fund_by_name(ICICI_INFRA))
    assert answer == "ICICI Prudential Infrastructure Fund typically accepts SIPs starting from ₹500 per month."


def test_returns_one_year(engine, fund_by_name):
    answer = engine.answer("What's the performance over the last year?", fund_by_name(ICICI_INFRA))
    assert answer == "The 1-year return of ICICI Prudential Infrastructure Fund was 12.45%."


def test_custom_rules():
    engine = FinancialQAEngine([QuestionRule('nav', [r'price'], answer_nav)])
    fund = FundRecord(name="Test Fund", nav=10)
    assert engine.answer("price please", fund) == "The current NAV of Test Fund is ₹10.00."
    assert engine.answer("what is the nav of test fund", fund) is None


def test_every_rule_handler_matches_the_handler_signature():
    for rule in QUESTION_RULES:
        hints = typing.get_type_hints(rule.handler)
        assert hints['fund'] is FundRecord
        assert hints['query'] is str
        assert hints['return'] == Optional[str]

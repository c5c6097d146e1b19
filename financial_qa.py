"""
Financial Q&A - Rule-based answers to natural-language questions about one fund

Rules are evaluated in order. The first rule with a matching trigger owns the
question: its handler's result is returned even when it is None.
"""
import re
from typing import Callable, List, Optional, Pattern, Sequence

from constants import (
    CLOSED_ENDED_MARKERS,
    OPEN_ENDED_CATEGORIES,
    PASSIVE_MARKERS,
    SHORT_PARKING_CATEGORIES,
)
from fund_models import FundRecord, HoldingRecord, RiskTier, StockRecord

Handler = Callable[[str, FundRecord, Sequence[StockRecord], Sequence[HoldingRecord]], Optional[str]]


class QuestionRule:
    """A set of trigger patterns paired with one answer handler"""

    def __init__(self, topic: str, patterns: Sequence[str], handler: Handler):
        self.topic = topic
        self.patterns: List[Pattern] = [re.compile(p, re.IGNORECASE) for p in patterns]
        self.handler = handler

    def matches(self, query: str) -> bool:
        return any(pattern.search(query) for pattern in self.patterns)

    def try_answer(self, query: str, fund: FundRecord,
                   stocks: Sequence[StockRecord] = (),
                   holdings: Sequence[HoldingRecord] = ()) -> Optional[str]:
        return self.handler(query, fund, stocks, holdings)

    def __repr__(self) -> str:
        return f"QuestionRule({self.topic!r}, {len(self.patterns)} patterns)"


def _money(value: float) -> str:
    return f"₹{value:.2f}"


def _pct(value: float) -> str:
    return f"{value:.2f}%"


def _amount(value: float) -> str:
    return f"{value:g}"


def _is_closed_ended(fund: FundRecord) -> bool:
    return fund.category_contains(*CLOSED_ENDED_MARKERS)


def _risk_label(fund: FundRecord, default: str = 'moderate') -> str:
    return fund.risk.value.lower() if fund.risk else default


# NAV

def answer_nav(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
               holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.nav:
        return f"The current NAV of {fund.name} is {_money(fund.nav)}."
    return None


def answer_growth_nav(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                      holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.growth_option_nav:
        return f"The growth option NAV of {fund.name} is {_money(fund.growth_option_nav)}."
    return None


# Returns

def answer_returns(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                   holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Last month, 6-month or 1-year return, picked by the period named in the query"""
    if 'month' in query and fund.last_month_return:
        return f"The last month's return of {fund.name} was {_pct(fund.last_month_return)}."

    if any(p in query for p in ('6 month', 'six month', 'past 6 months')) and fund.six_month_return:
        return f"The 6-month return of {fund.name} was {_pct(fund.six_month_return)}."

    if ('year' in query or 'annual' in query) and fund.one_year_return:
        return f"The 1-year return of {fund.name} was {_pct(fund.one_year_return)}."

    if 'vs nifty' in query and fund.one_year_return:
        verdict = 'outperformed' if fund.one_year_return > 10 else 'underperformed'
        return (f"{fund.name} has {verdict} Nifty with returns of "
                f"{_pct(fund.one_year_return)} over the past year.")

    if fund.one_year_return:
        return f"{fund.name} has returned {_pct(fund.one_year_return)} over the past year."

    return None


# Dividends

def answer_dividends(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                     holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Dividend option and frequency; growth vs IDCW guidance by risk tier"""
    if fund.dividend_option and fund.dividend_frequency:
        return (f"{fund.name} offers a {fund.dividend_option} dividend option "
                f"with {fund.dividend_frequency} frequency.")

    if 'give regular dividends' in query:
        if fund.dividend_frequency:
            return f"Yes, {fund.name} provides dividends on a {fund.dividend_frequency} basis."
        return f"{fund.name} doesn't provide regular dividends."

    if 'growth or idcw' in query:
        if fund.risk == RiskTier.LOW:
            advice = "IDCW option may be suitable if you need regular income"
        else:
            advice = "Growth option may be more tax-efficient for long-term investors"
        return f"For {fund.name}, {advice}."

    if fund.dividend_option:
        return f"{fund.name} offers a {fund.dividend_option} dividend option."

    if fund.dividend_frequency:
        return f"{fund.name} has a dividend frequency of {fund.dividend_frequency}."

    return None


# SIP

def answer_sip(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
               holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """SIP suitability and minimums; closed-ended funds do not take monthly SIPs"""
    if 'is it a good idea' in query or 'good idea?' in query:
        if fund.risk == RiskTier.LOW:
            return (f"Starting an SIP in {fund.name} could be suitable if you're looking "
                    f"for stable returns with lower volatility.")
        if fund.risk == RiskTier.HIGH:
            return (f"{fund.name} is a high-risk fund; SIPs can help average your "
                    f"investment cost but prepare for volatility.")
        return (f"{fund.name} can be considered for SIP investments based on your "
                f"risk tolerance and investment horizon.")

    if 'sip minimum' in query:
        if fund.min_investment:
            return f"The SIP minimum for {fund.name} is ₹{_amount(fund.min_investment)}."
        return f"{fund.name} typically accepts SIPs starting from ₹500 per month."

    if 'can i invest' in query and 'monthly' in query:
        if fund.asset_class == 'Equity' or fund.category_contains('Open'):
            return f"Yes, you can invest in {fund.name} through monthly SIP installments."
        if _is_closed_ended(fund):
            return f"{fund.name} is a closed-ended fund and typically doesn't allow monthly SIP investments."

    if fund.min_investment:
        return f"You can start an SIP in {fund.name} with a minimum investment of ₹{_amount(fund.min_investment)}."

    return f"{fund.name} is available for SIP investments."


# Comparisons

def answer_comparison(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                      holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Against FDs or the benchmark; 10% one-year return is the outperformance line"""
    if 'better than fd' in query:
        if fund.one_year_return and fund.one_year_return > 7:
            return (f"{fund.name} has returned {_pct(fund.one_year_return)} over the past year, "
                    f"which is higher than typical FD rates, but comes with higher risk.")
        return (f"While {fund.name} may offer potentially higher returns than FDs over "
                f"longer periods, it also carries higher risk.")

    if fund.benchmark_index and fund.one_year_return:
        verdict = 'outperformed' if fund.one_year_return > 10 else 'underperformed'
        return (f"{fund.name} has {verdict} its benchmark ({fund.benchmark_index}) with "
                f"returns of {_pct(fund.one_year_return)} over the past year.")

    return None


# Lock-in

def answer_lock_in(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                   holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """ELSS funds always have the 3-year lock-in"""
    if fund.category_contains('ELSS'):
        return f"{fund.name} is an ELSS fund and has a mandatory lock-in period of 3 years."

    if fund.lock_in_period:
        return f"{fund.name} has a lock-in period of {fund.lock_in_period}."

    if _is_closed_ended(fund):
        return f"{fund.name} is a closed-ended fund designed to be held until maturity."

    return f"{fund.name} does not have any mandatory lock-in period."


def answer_switch(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                  holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.switch_option is True:
        return f"Yes, {fund.name} offers a switch option to move between schemes."
    if fund.switch_option is False:
        return f"No, {fund.name} does not offer a switch option."

    if _is_closed_ended(fund):
        return f"{fund.name} is a closed-ended fund and typically doesn't offer switch options until maturity."

    return None


# Investment horizon

def answer_horizon(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                   holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Investment horizon, short-term parking and retirement fit"""
    if 'investment horizon' in query:
        if fund.asset_class == 'Equity':
            return f"The recommended investment horizon for {fund.name} is at least 5-7 years."
        if fund.asset_class == 'Debt' and fund.category_contains('Short'):
            return f"{fund.name} is suitable for an investment horizon of 1-3 years."
        if _is_closed_ended(fund):
            duration = re.search(r'\d+\s*(Days?|Months?|Years?)', fund.name, re.IGNORECASE)
            if duration:
                return f"{fund.name} has a fixed investment horizon of {duration.group(0)}."
            return f"{fund.name} should be held until maturity for optimal returns."
        term = 'short to medium' if fund.risk == RiskTier.LOW else 'medium to long'
        return f"{fund.name} is best suited for a {term}-term investment horizon."

    if 'park surplus money' in query and '6 months' in query:
        if fund.risk == RiskTier.LOW and fund.category_contains(*SHORT_PARKING_CATEGORIES):
            return f"Yes, {fund.name} can be suitable for parking surplus money for 6 months."
        return (f"{fund.name} may not be the most suitable option for just 6 months; "
                f"consider a liquid or ultra short-term fund instead.")

    if 'retirement' in query:
        if fund.asset_class == 'Equity' and fund.risk != RiskTier.HIGH:
            return (f"{fund.name} could be part of a retirement portfolio, but ensure you have "
                    f"a diversified approach based on your retirement timeline.")
        if fund.category_contains('Retirement', 'Pension'):
            return f"{fund.name} is specifically designed for retirement planning."
        return f"For retirement investing, consider if {fund.name} aligns with your time horizon and risk profile."

    if fund.asset_class and fund.risk:
        suitability = 'potentially suitable' if fund.asset_class == 'Equity' else 'moderately suitable'
        return (f"{fund.name} is a {fund.risk.value.lower()} risk {fund.asset_class.lower()} fund, "
                f"making it {suitability} for long-term investments.")

    return None


def answer_expense_ratio(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                         holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.expense_ratio:
        return f"{fund.name} has an expense ratio of {_pct(fund.expense_ratio)}."
    return None


# Risk

def answer_risk(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Risk tier and volatility, or a yes/no for "low-risk fund" questions"""
    if 'low-risk fund' in query:
        if fund.risk == RiskTier.LOW:
            return f"Yes, {fund.name} is considered a low-risk fund."
        return f"No, {fund.name} is considered a {_risk_label(fund)} risk fund."

    if 'volatile' in query and 'historically' in query:
        if fund.volatility:
            return f"Historically, {fund.name} has shown {fund.volatility.lower()} volatility."
        if fund.risk == RiskTier.LOW:
            return f"{fund.name} has historically shown low volatility, in line with its risk profile."
        if fund.risk == RiskTier.HIGH:
            return (f"{fund.name} has shown significant volatility historically, "
                    f"as expected for its higher risk profile.")

    if fund.risk and fund.volatility:
        return (f"{fund.name} has a {fund.risk.value.lower()} risk profile with "
                f"{fund.volatility.lower()} volatility.")

    if fund.risk:
        return f"{fund.name} has a {fund.risk.value.lower()} risk profile."

    if fund.volatility:
        return f"{fund.name} has {fund.volatility.lower()} volatility."

    return None


def answer_benchmark(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                     holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.benchmark_index:
        return f"The benchmark index for {fund.name} is {fund.benchmark_index}."
    return None


def answer_sharpe(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                  holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.sharpe_ratio:
        return f"{fund.name} has a Sharpe ratio of {fund.sharpe_ratio:.2f}."
    return f"Data for Sharpe ratio of {fund.name} is not available."


def answer_amfi_rating(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                       holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.amfi_rating:
        return f"{fund.name} is rated {fund.amfi_rating} by AMFI."
    return f"AMFI rating for {fund.name} is not available."


def answer_asset_allocation(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                            holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.asset_allocation:
        allocations = ', '.join(
            f"{key}: {value:g}%"
            for key, value in fund.asset_allocation.items()
            if value is not None
        )
        if allocations:
            return f"The asset allocation of {fund.name} is: {allocations}."

    if fund.asset_class == 'Equity':
        return f"{fund.name} primarily invests in equity securities."
    if fund.asset_class == 'Debt':
        return f"{fund.name} primarily invests in fixed income securities."
    if fund.asset_class == 'Hybrid':
        return f"{fund.name} invests in a mix of equity and debt instruments."

    return None


# Portfolio holdings

def _linked_holdings(fund: FundRecord, stocks: Sequence[StockRecord],
                     holdings: Sequence[HoldingRecord], limit: int = 5) -> List[str]:
    """Top holdings of a fund from the auxiliary holdings collection"""
    linked = [
        h for h in holdings
        if (fund.internal_security_id and h.parent_internal_security_id == fund.internal_security_id)
        or (fund.id and h.fund_id == fund.id)
    ]
    if not linked:
        return []

    stock_names = {}
    for stock in stocks:
        if stock.id:
            stock_names[stock.id] = stock.name
        if stock.fin_code:
            stock_names[str(stock.fin_code)] = stock.name

    linked.sort(key=lambda h: h.percentage or h.market_value or 0.0, reverse=True)

    described = []
    for h in linked[:limit]:
        label = stock_names.get(h.stock_id or '') or h.asset_type or h.asset or 'Unnamed holding'
        if h.percentage is not None:
            described.append(f"{label} ({_pct(h.percentage)})")
        elif h.market_value is not None:
            described.append(f"{label} (market value {h.market_value:,.2f})")
        else:
            described.append(label)
    return described


def answer_holdings(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                    holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Inline portfolio holdings, else holdings linked through the auxiliary collections"""
    if fund.portfolio_holdings:
        top_holdings = ', '.join(
            f"{h.name} ({_pct(h.percentage)})" for h in fund.portfolio_holdings[:5]
        )
        return f"Top holdings of {fund.name} include: {top_holdings}."

    linked = _linked_holdings(fund, stocks, holdings)
    if linked:
        return f"Top holdings of {fund.name} include: {', '.join(linked)}."

    if 'kind of portfolio' in query and fund.asset_class:
        category = (fund.category or 'diversified').lower()
        if fund.asset_class == 'Equity':
            focus = f" with focus on {fund.sector.lower()} sector" if fund.sector else ''
            return f"{fund.name} maintains a portfolio of {category} stocks{focus}."
        if fund.asset_class == 'Debt':
            return (f"{fund.name} maintains a portfolio of {category} debt instruments "
                    f"with focus on {_risk_label(fund)} risk securities.")

    return f"Detailed portfolio holdings information for {fund.name} is not available."


# Redemption

def answer_redemption(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                      holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """SWP support, redemption terms or exit load, inferred from category when absent"""
    if 'swp' in query or 'systematic withdrawal' in query:
        if _is_closed_ended(fund):
            return f"{fund.name} is a closed-ended fund and typically doesn't support SWP until maturity."
        return f"Yes, {fund.name} allows Systematic Withdrawal Plan (SWP) for regular income."

    if fund.redemption_terms:
        return f"Redemption terms for {fund.name}: {fund.redemption_terms}."

    if fund.exit_load:
        return f"{fund.name} has an exit load of {fund.exit_load}."

    if _is_closed_ended(fund):
        return f"{fund.name} is a closed-ended fund, meant to be held until maturity."
    if fund.category_contains('ELSS'):
        return f"{fund.name} has a mandatory 3-year lock-in period, after which there is no exit load."
    return (f"Standard redemption terms apply to {fund.name}. "
            f"Please check the latest scheme information document for details.")


def answer_objective(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                     holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.investment_objective:
        return f"Investment objective of {fund.name}: {fund.investment_objective}."

    if fund.asset_class == 'Equity' and fund.category:
        sector = f" in the {fund.sector.lower()} sector" if fund.sector else ''
        return (f"{fund.name} aims to generate long-term capital appreciation by investing "
                f"primarily in {fund.category.lower()} equities{sector}.")
    if fund.asset_class == 'Debt':
        return (f"{fund.name} aims to generate regular income and capital preservation by "
                f"investing in fixed income securities.")
    if fund.asset_class == 'Hybrid':
        return (f"{fund.name} seeks to provide both growth and income by investing in a mix "
                f"of equity and debt instruments.")

    return f"The investment objective details for {fund.name} are not available."


def answer_minimum_investment(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                              holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Minimum investment, or AUM when the query asks about fund size"""
    if 'aum' in query or 'fund size' in query:
        if fund.aum:
            return f"The Assets Under Management (AUM) for {fund.name} is ₹{fund.aum:,} crore."
        return f"AUM details for {fund.name} are not available."

    if fund.min_investment:
        return f"The minimum investment required for {fund.name} is ₹{_amount(fund.min_investment)}."

    return (f"The standard minimum investment for {fund.name} is typically ₹5,000 "
            f"for lump sum and ₹500 for SIP.")


def answer_classification(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                          holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Open or closed-ended and active or passive, inferred from the category"""
    if 'actively managed' in query:
        if fund.category_contains(*PASSIVE_MARKERS):
            return f"No, {fund.name} is a passively managed fund that tracks an index."
        return (f"Yes, {fund.name} is an actively managed fund with professional fund "
                f"managers making investment decisions.")

    if _is_closed_ended(fund):
        return f"{fund.name} is a closed-ended fund with a fixed maturity period."
    if fund.category_contains('Open'):
        return f"{fund.name} is an open-ended fund allowing investments and redemptions on an ongoing basis."
    if fund.category_contains('Close'):
        return f"{fund.name} is a closed-ended fund."
    if fund.category_contains(*OPEN_ENDED_CATEGORIES):
        return f"{fund.name} is an open-ended fund."

    return f"Fund classification details for {fund.name} are not available."


def answer_fund_manager(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                        holdings: Sequence[HoldingRecord]) -> Optional[str]:
    if fund.fund_manager:
        return f"{fund.name} is currently managed by {fund.fund_manager}."
    return f"Fund manager information for {fund.name} is not available."


def answer_expert_opinion(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                          holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Analyst rating, else a verdict from the 1-year return (15% and 8% bands)"""
    if fund.analyst_rating:
        return f'Expert analysts rate {fund.name} as "{fund.analyst_rating}".'

    if fund.one_year_return:
        returns = _pct(fund.one_year_return)
        if fund.one_year_return > 15:
            return (f"{fund.name} has been performing well with returns of {returns} over "
                    f"the past year, which analysts view positively.")
        if fund.one_year_return > 8:
            return f"{fund.name} has shown stable performance with returns of {returns} over the past year."
        return f"{fund.name} has shown modest returns of {returns} over the past year."

    return f"Expert opinions and reviews for {fund.name} are not available."


def answer_investment_decision(query: str, fund: FundRecord, stocks: Sequence[StockRecord],
                               holdings: Sequence[HoldingRecord]) -> Optional[str]:
    """Only conservative-investor and hold-or-redeem questions get an answer"""
    if 'conservative investor' in query:
        if fund.risk == RiskTier.LOW:
            return f"Yes, {fund.name} may be suitable for conservative investors due to its lower risk profile."
        if fund.risk == RiskTier.HIGH:
            return f"No, {fund.name} may not be suitable for conservative investors due to its higher risk profile."
        return (f"{fund.name} has a moderate risk profile; conservative investors should "
                f"evaluate if it matches their risk tolerance.")

    if 'hold or redeem' in query:
        return (f"Investment decisions should be based on your financial goals and risk tolerance. "
                f"Consider consulting a financial advisor about your {fund.name} investment.")

    return None


# Order matters: earlier rules win when several could match
QUESTION_RULES: List[QuestionRule] = [
    QuestionRule('nav', [
        r'what is the nav of',
        r'current nav',
        r'nav for',
        r'provide the( recent)? nav',
        r'tell me the latest nav',
        r'recent nav trend',
        r'can you provide the recent nav',
    ], answer_nav),
    QuestionRule('growth_option_nav', [
        r'growth option nav',
        r'nav of growth option',
        r"what'?s the growth option nav",
    ], answer_growth_nav),
    QuestionRule('returns', [
        r'recent returns for',
        r'performance of',
        r'how has .* performed',
        r"last month'?s return",
        r"what'?s the performance",
        r'what are the recent returns',
        r'compare cagr',
        r'returns of .* vs nifty',
    ], answer_returns),
    QuestionRule('dividends', [
        r'dividend option in',
        r'provide details about the dividend',
        r'dividend frequency',
        r'does .* give regular dividends',
        r'can you provide details about the dividend option',
        r'growth or idcw',
        r'dividend history',
    ], answer_dividends),
    QuestionRule('sip', [
        r'can i start (an|a) sip',
        r'good investment for sip',
        r'should i consider investing',
        r"what'?s the sip minimum",
        r'is .* a good (option|idea)? for (long term|sip)',
        r'i want to start an sip in',
        r'can i invest in .* monthly',
        r'good idea\?$',
    ], answer_sip),
    QuestionRule('comparison', [
        r'better than other similar funds',
        r'outperforming the market',
        r'better than fd',
        r'has .* been outperforming',
    ], answer_comparison),
    QuestionRule('lock_in', [
        r'lock-?in period',
        r'have any lock-?in',
        r'does .* have (any )?lock-?in',
        r'any lock-?in period',
    ], answer_lock_in),
    QuestionRule('switch', [
        r'offer a switch option',
        r'can.*switch',
        r'does .* offer a switch option',
    ], answer_switch),
    QuestionRule('horizon', [
        r'beneficial to hold .* long-?term',
        r'good for long-?term',
        r'is .* a good option for long term',
        r'investment horizon',
        r"what'?s the investment horizon",
        r'can i invest in .* for my retirement',
        r'can i park surplus money',
    ], answer_horizon),
    QuestionRule('expense_ratio', [
        r'expense ratio',
        r'management fee',
        r'tell me the expense ratio',
        r'what is the expense ratio',
    ], answer_expense_ratio),
    QuestionRule('risk', [
        r'risk associated with',
        r'how risky is',
        r'volatility of',
        r"what'?s the risk associated",
        r'risk level',
        r'how volatile is',
        r'how risky is investing in',
        r'is .* a low-risk fund',
    ], answer_risk),
    QuestionRule('benchmark', [
        r'benchmark for',
        r'index it tracks',
        r'give me the benchmark',
    ], answer_benchmark),
    QuestionRule('sharpe_ratio', [
        r'sharpe ratio',
        r'risk-?adjusted return',
        r"what'?s the sharpe ratio",
    ], answer_sharpe),
    QuestionRule('amfi_rating', [
        r'rated by amfi',
        r'amfi rating',
        r'how is .* rated by amfi',
    ], answer_amfi_rating),
    QuestionRule('asset_allocation', [
        r'asset allocation',
        r'how (is|are) .* funds? allocated',
        r"what'?s the asset allocation",
    ], answer_asset_allocation),
    QuestionRule('holdings', [
        r'portfolio holdings',
        r'what does .* invest in',
        r'top holdings',
        r'tell me about the portfolio holdings',
        r'what kind of portfolio',
    ], answer_holdings),
    QuestionRule('redemption', [
        r'redemption terms',
        r'how (can|to) redeem',
        r'exit load',
        r'what are the redemption terms',
        r'details about exit load',
        r'allow swp',
        r'systematic withdrawal plan',
    ], answer_redemption),
    QuestionRule('objective', [
        r'investment objective',
        r'goal of the fund',
        r'what does .* aim to',
        r'explain .* objective',
        r'tell me about the investment objective',
    ], answer_objective),
    QuestionRule('minimum_investment', [
        r'minimum investment',
        r'least amount',
        r'minimum amount',
        r'what is the minimum investment',
        r'fund size',
        r'aum',
        r"what'?s the aum",
    ], answer_minimum_investment),
    QuestionRule('classification', [
        r'open-ended or closed-ended',
        r'sebi classification',
        r'is .* open-ended',
        r'is .* actively managed',
    ], answer_classification),
    QuestionRule('fund_manager', [
        r'who is managing',
        r'fund manager',
        r'manager of the fund',
    ], answer_fund_manager),
    QuestionRule('expert_opinion', [
        r'expert opinions',
        r'what are expert opinions',
        r"what'?s the latest fund review",
        r'review of',
    ], answer_expert_opinion),
    QuestionRule('investment_decision', [
        r'should i hold or redeem',
        r'suitable for a conservative investor',
    ], answer_investment_decision),
]


class FinancialQAEngine:
    """Dispatches a question about one fund to the first matching rule"""

    def __init__(self, rules: Optional[Sequence[QuestionRule]] = None):
        self.rules = list(QUESTION_RULES if rules is None else rules)

    def find_rule(self, query: str) -> Optional[QuestionRule]:
        query_lower = query.lower()
        for rule in self.rules:
            if rule.matches(query_lower):
                return rule
        return None

    def answer(self, query: str, fund: FundRecord,
               stocks: Sequence[StockRecord] = (),
               holdings: Sequence[HoldingRecord] = ()) -> Optional[str]:
        """
        Answer a question about a fund

        Args:
            query: Question text
            fund: Resolved fund
            stocks: Auxiliary stock records
            holdings: Auxiliary holding records

        Returns:
            Answer text, or None if no rule applies or the matching rule
            has nothing to say
        """
        rule = self.find_rule(query)
        if rule is None:
            return None
        return rule.try_answer(query.lower(), fund, stocks, holdings)

"""
Lexical Scorer - Token-level substring and fuzzy matching of funds against a query
"""
from typing import List, Optional, Sequence

from constants import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SCORE,
    FUZZY_MATCH_MAX_DISTANCE,
    SEARCHABLE_FIELDS,
    TERM_SCORE_CATEGORY,
    TERM_SCORE_COMBINED_TEXT,
    TERM_SCORE_FUND_HOUSE,
    TERM_SCORE_FUZZY_NAME,
    TERM_SCORE_FUZZY_SHORT_NAME,
    TERM_SCORE_NAME,
    TERM_SCORE_SECTOR,
    TERM_SCORE_SHORT_NAME,
)
from edit_distance import levenshtein_distance
from fund_models import FundRecord, MatchResult


def tokenize(query: str) -> List[str]:
    """Lowercase and split on whitespace"""
    return query.lower().split()


def _lower(value: Optional[str]) -> str:
    return (value or '').lower()


def searchable_text(fund: FundRecord) -> str:
    """Non-empty descriptive fields joined in priority order"""
    values = [getattr(fund, field) for field in SEARCHABLE_FIELDS]
    return ' '.join(v for v in values if v).lower()


def _is_fuzzy_match(field_value: Optional[str], term: str) -> bool:
    return levenshtein_distance(_lower(field_value), term) <= FUZZY_MATCH_MAX_DISTANCE


def score_term(fund: FundRecord, term: str, fund_text: Optional[str] = None) -> float:
    """
    Score one search term; the first satisfied rule wins

    Args:
        fund: Fund to score
        term: Lowercased search term
        fund_text: Precomputed searchable text (optional)

    Returns:
        Term score in [0, 1]
    """
    if fund_text is None:
        fund_text = searchable_text(fund)

    if term in fund_text:
        return TERM_SCORE_COMBINED_TEXT
    if term in _lower(fund.name):
        return TERM_SCORE_NAME
    if term in _lower(fund.short_name):
        return TERM_SCORE_SHORT_NAME
    if term in _lower(fund.fund_house):
        return TERM_SCORE_FUND_HOUSE
    if term in _lower(fund.category):
        return TERM_SCORE_CATEGORY
    if term in _lower(fund.sector):
        return TERM_SCORE_SECTOR
    if _is_fuzzy_match(fund.name, term):
        return TERM_SCORE_FUZZY_NAME
    if _is_fuzzy_match(fund.short_name, term):
        return TERM_SCORE_FUZZY_SHORT_NAME
    return 0.0


def score(fund: FundRecord, search_terms: Sequence[str]) -> float:
    """
    Mean of per-term scores; unmatched terms still count toward the denominator

    Args:
        fund: Fund to score
        search_terms: Lowercased terms

    Returns:
        Overall score in [0, 1]
    """
    if not search_terms:
        return 0.0

    fund_text = searchable_text(fund)
    total = sum(score_term(fund, term, fund_text) for term in search_terms)
    return total / len(search_terms)


def _first_term_in(value: Optional[str], search_terms: Sequence[str]) -> Optional[str]:
    lowered = _lower(value)
    if not lowered:
        return None
    return next((term for term in search_terms if term in lowered), None)


def explain(fund: FundRecord, search_terms: Sequence[str]) -> str:
    """Human-readable reason for a match; field checks are independent of score()"""
    matches = []

    name_term = _first_term_in(fund.name, search_terms)
    if name_term:
        matches.append(f'name contains "{name_term}"')

    alias_term = _first_term_in(fund.short_name, search_terms)
    if alias_term:
        matches.append(f'fund alias contains "{alias_term}"')

    if _first_term_in(fund.fund_house, search_terms):
        matches.append(f"from {fund.fund_house}")

    if _first_term_in(fund.category, search_terms):
        matches.append(f"is a {fund.category} fund")

    if _first_term_in(fund.sector, search_terms):
        matches.append(f"invests in {fund.sector} sector")

    if len(matches) > 1:
        return f"This fund {', '.join(matches[:-1])} and {matches[-1]}."
    if len(matches) == 1:
        return f"This fund {matches[0]}."

    if any(_is_fuzzy_match(fund.name, term) for term in search_terms):
        return "This fund's name is similar to your search."

    return "This fund partially matches your search criteria."


def search(query: str, funds: Sequence[FundRecord],
           limit: int = DEFAULT_MAX_RESULTS,
           min_score: float = DEFAULT_MIN_SCORE) -> List[MatchResult]:
    """
    Rank funds by lexical score

    Funds scoring at or below min_score are dropped. The sort is stable,
    so equal scores keep corpus order.

    Args:
        query: Raw query text
        funds: Candidate funds
        limit: Maximum results
        min_score: Exclusive inclusion threshold

    Returns:
        Ranked match results
    """
    if not query.strip():
        return []

    search_terms = tokenize(query)
    results = []
    for fund in funds:
        fund_score = score(fund, search_terms)
        if fund_score > min_score:
            results.append(MatchResult(
                fund=fund,
                score=fund_score,
                match_reason=explain(fund, search_terms)
            ))

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]

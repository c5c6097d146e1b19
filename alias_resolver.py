"""
Alias Resolver - Maps aliases and partial fund descriptions to a single fund
Stages run in order and stop at the first hit: alias map, exact name, fund house + context
"""
from typing import Dict, Optional, Sequence

from constants import FUND_ALIASES
from fund_models import FundRecord


class AliasResolver:
    """Resolves free text to one fund from the corpus"""

    def __init__(self, aliases: Optional[Dict[str, str]] = None):
        """
        Args:
            aliases: Ordered mapping of lowercase phrase -> canonical fund name or short name
        """
        self.aliases = FUND_ALIASES if aliases is None else aliases

    def match_alias(self, query: str, funds: Sequence[FundRecord]) -> Optional[FundRecord]:
        """Stage 1: first alias contained in the query whose target exists in the corpus"""
        query_lower = query.lower()
        for alias, fund_name in self.aliases.items():
            if alias.lower() not in query_lower:
                continue
            for fund in funds:
                if fund.name == fund_name or fund.short_name == fund_name:
                    return fund
        return None

    def match_name(self, query: str, funds: Sequence[FundRecord]) -> Optional[FundRecord]:
        """Stage 2: first fund whose name or short name appears in the query"""
        query_lower = query.lower()
        for fund in funds:
            if fund.name and fund.name.lower() in query_lower:
                return fund
            if fund.short_name and fund.short_name.lower() in query_lower:
                return fund
        return None

    def match_context(self, query: str, funds: Sequence[FundRecord]) -> Optional[FundRecord]:
        """Stage 3: fund house appears in the query together with its category or sector"""
        query_lower = query.lower()
        for fund in funds:
            if not fund.fund_house or fund.fund_house.lower() not in query_lower:
                continue
            if fund.category and fund.category.lower() in query_lower:
                return fund
            if fund.sector and fund.sector.lower() in query_lower:
                return fund
        return None

    def resolve_direct(self, query: str, funds: Sequence[FundRecord]) -> Optional[FundRecord]:
        """Alias map, then exact name"""
        return self.match_alias(query, funds) or self.match_name(query, funds)

    def resolve(self, query: str, funds: Sequence[FundRecord]) -> Optional[FundRecord]:
        """All three stages"""
        return self.resolve_direct(query, funds) or self.match_context(query, funds)

"""
Query Classification System - Separates financial questions from keyword searches
"""
import re
from typing import Dict, List

from constants import FINANCIAL_KEYWORDS, INTERROGATIVE_WORDS, NATURAL_LANGUAGE_MIN_LENGTH
from fund_models import QueryAnalysis


class QueryClassifier:
    """Presence-based classification of fund queries"""

    def __init__(self, keywords: List[str] = None):
        self.keywords = FINANCIAL_KEYWORDS if keywords is None else keywords

        # Topic patterns, used for metrics and logging only
        self.topic_patterns: Dict[str, List[str]] = {
            'nav': [r'\bnav\b', r'\bnet asset value\b'],
            'returns': [r'\breturns?\b', r'\bperform', r'\bcagr\b'],
            'income': [r'\bdividends?\b', r'\bidcw\b', r'\bswp\b'],
            'sip': [r'\bsip\b', r'\bmonthly\b'],
            'cost': [r'\bexpense ratio\b', r'\bexit load\b', r'\bmanagement fee\b', r'\bminimum\b'],
            'risk': [r'\brisk', r'\bvolatil', r'\bsharpe\b'],
            'holdings': [r'\bholdings\b', r'\bportfolio\b', r'\basset allocation\b'],
            'terms': [r'\block-?in\b', r'\bswitch\b', r'\bredemption\b', r'\bredeem\b',
                      r'\bopen-ended\b', r'\bclosed-ended\b'],
            'profile': [r'\bbenchmark\b', r'\bobjective\b', r'\bmanager\b', r'\bamfi\b',
                        r'\baum\b', r'\bfund size\b'],
            'advice': [r'\bshould i\b', r'\bsuitable\b', r'\bgood (idea|option|investment)\b',
                       r'\breview\b', r'\bopinions?\b', r'\bhorizon\b', r'\bretirement\b'],
        }

    def is_question(self, query: str) -> bool:
        """True if the query mentions any financial keyword"""
        query_lower = query.lower()
        return any(keyword in query_lower for keyword in self.keywords)

    def is_natural_language(self, query: str) -> bool:
        """
        True for question-shaped input ("What is...", "...?")

        Only affects presentation (e.g. which suggestions to offer), never routing.
        """
        query_lower = query.strip().lower()
        if len(query_lower) < NATURAL_LANGUAGE_MIN_LENGTH:
            return False
        if '?' in query_lower:
            return True
        first_word = re.split(r"[\s']+", query_lower, maxsplit=1)[0]
        return first_word in INTERROGATIVE_WORDS

    def analyze(self, query: str) -> QueryAnalysis:
        return QueryAnalysis(
            is_question=self.is_question(query),
            is_natural_language=self.is_natural_language(query)
        )

    def classify_topic(self, query: str) -> str:
        """
        Coarse topic of a query: nav, returns, income, sip, cost, risk,
        holdings, terms, profile, advice, or general
        """
        query_lower = query.lower()
        for topic, patterns in self.topic_patterns.items():
            for pattern in patterns:
                if re.search(pattern, query_lower):
                    return topic
        return 'general'

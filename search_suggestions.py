"""
Search Suggestions - Autocomplete entries and "did you mean" hints
"""
from typing import List, Optional, Sequence

from constants import (
    DEFAULT_SUGGESTION_LIMIT,
    DID_YOU_MEAN_MAX_LENGTH,
    NATURAL_LANGUAGE_EXAMPLES,
    SEARCH_EXAMPLES,
    SUGGESTION_MAX_DISTANCE,
)
from edit_distance import typo_distance
from fund_models import Suggestion
from query_classifier import QueryClassifier


class SearchSuggester:
    """Suggests example searches close to what the user has typed so far"""

    def __init__(self, search_examples: Optional[Sequence[str]] = None,
                 question_examples: Optional[Sequence[str]] = None,
                 classifier: Optional[QueryClassifier] = None):
        self.search_examples = list(SEARCH_EXAMPLES if search_examples is None else search_examples)
        self.question_examples = list(NATURAL_LANGUAGE_EXAMPLES if question_examples is None else question_examples)
        self.classifier = classifier or QueryClassifier()

    def is_did_you_mean(self, query: str, example: str) -> bool:
        """Short example that is a near miss for the query (but not identical)"""
        if len(example) >= DID_YOU_MEAN_MAX_LENGTH:
            return False
        distance = typo_distance(query.lower(), example.lower())
        return 0 < distance <= SUGGESTION_MAX_DISTANCE

    def suggest(self, query: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> List[Suggestion]:
        """
        Suggestions for a partial query

        Question-shaped input gets example questions that contain it;
        anything else gets keyword examples that contain it or are within
        typo distance of it.

        Args:
            query: Text typed so far
            limit: Maximum suggestions

        Returns:
            Ordered suggestions
        """
        if not query:
            return []

        query_lower = query.lower()

        if self.classifier.is_natural_language(query):
            matched = [
                example for example in self.question_examples
                if query_lower in example.lower()
            ]
        else:
            matched = [
                example for example in self.search_examples
                if query_lower in example.lower()
                or typo_distance(query_lower, example.lower()) <= SUGGESTION_MAX_DISTANCE
            ]

        return [
            Suggestion(text=example, did_you_mean=self.is_did_you_mean(query, example))
            for example in matched[:limit]
        ]

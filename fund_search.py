"""
Main Fund Search System - Combines resolution, question answering and ranking

Routing is a strict waterfall: a fund resolved by alias or name always wins
over ranked search, even when ranking would prefer another fund.
"""
import time
from typing import Any, Dict, List, Optional

from alias_resolver import AliasResolver
from config_loader import Config, get_config
from constants import (
    ANSWER_NOT_AVAILABLE,
    ANSWERED_QUESTION_REASON,
    ANSWERED_QUESTION_SCORE,
    RESOLVED_FUND_REASON,
    RESOLVED_FUND_SCORE,
)
from embedding_ranker import EmbeddingRanker
from enhanced_error_handler import DataFormatError, EmbeddingProviderError, EnhancedErrorHandler
from financial_qa import FinancialQAEngine
from fund_corpus import CorpusSnapshot, FundCorpusStore
from fund_models import FundRecord, MatchResult, QueryAnalysis, Suggestion
import lexical_scorer
from metrics_collector import MetricsCollector
from query_classifier import QueryClassifier
from resilience_handler import ResilienceHandler
from search_suggestions import SearchSuggester
from simple_cache import SimpleCache
from structured_logger import generate_request_id, get_logger

EMBEDDING_SERVICE = "embedding_ranker"


class FundSearchSystem:
    def __init__(self, store: Optional[FundCorpusStore] = None,
                 config: Optional[Config] = None,
                 embedding_ranker: Optional[EmbeddingRanker] = None,
                 use_embeddings: Optional[bool] = None):
        """
        Initialize Fund Search System

        Args:
            store: Corpus store. If None, loads the JSON files named in config
            config: Configuration. If None, uses the global config
            embedding_ranker: Optional semantic ranker. If None and embeddings
                are enabled in config, one is created
            use_embeddings: Overrides the config switch for the semantic ranker
        """
        self.config = config or get_config()
        self.logger = get_logger()

        if store is None:
            store = FundCorpusStore.from_files(
                self.config.funds_path,
                self.config.stocks_path,
                self.config.holdings_path
            )
        self.store = store

        if use_embeddings is None:
            use_embeddings = embedding_ranker is not None or self.config.use_embeddings
        if use_embeddings and embedding_ranker is None:
            embedding_ranker = EmbeddingRanker(
                model_name=self.config.embedding_model,
                cache=SimpleCache(max_size=self.config.cache_max_size,
                                  ttl_seconds=self.config.cache_ttl),
                similarity_threshold=self.config.embedding_threshold,
                timeout_seconds=self.config.embedding_timeout
            )
        self.embedding_ranker = embedding_ranker if use_embeddings else None
        if self.embedding_ranker is not None:
            self.store.add_replace_listener(self.embedding_ranker.invalidate)

        self.max_results = self.config.max_results
        self.min_score = self.config.min_score

        self.resolver = AliasResolver()
        self.classifier = QueryClassifier()
        self.qa = FinancialQAEngine()
        self.suggester = SearchSuggester(classifier=self.classifier)
        self.resilience = ResilienceHandler(
            failure_threshold=self.config.get('embedding.failure_threshold', 3),
            cooldown_seconds=self.config.get('embedding.cooldown_seconds', 60.0)
        )
        self.error_handler = EnhancedErrorHandler()
        self.metrics = MetricsCollector()

    def handle_query(self, query: str) -> List[MatchResult]:
        """
        Main query interface

        Args:
            query: Free-text search or question

        Returns:
            Up to max_results MatchResults, best first
        """
        request_id = generate_request_id()
        self.logger.set_request_id(request_id)
        start_time = time.time()

        try:
            if not query or not query.strip():
                results, query_type = [], 'empty'
            else:
                results, query_type = self._route(query, self.store.snapshot())
        finally:
            self.logger.set_request_id(None)

        response_time = time.time() - start_time
        topic = self.classifier.classify_topic(query or '')
        self.metrics.record_query(query_type, response_time, len(results), topic)
        self.logger.log_query(query or '', query_type, len(results), response_time,
                              topic=topic, request_id=request_id)
        return results

    def _route(self, query: str, snapshot: CorpusSnapshot):
        query_lower = query.lower()
        is_question = self.classifier.is_question(query)

        fund = self.resolver.resolve_direct(query_lower, snapshot.funds)
        if fund is not None:
            self.logger.log_resolution(query, fund.name, 'direct')
            if is_question:
                return [self._answer(query, fund, snapshot)], 'answered'
            return [MatchResult(fund=fund, score=RESOLVED_FUND_SCORE,
                                match_reason=RESOLVED_FUND_REASON)], 'resolved'

        if is_question:
            fund = self.resolver.match_context(query_lower, snapshot.funds)
            if fund is not None:
                self.logger.log_resolution(query, fund.name, 'context')
                return [self._answer(query, fund, snapshot)], 'answered'

        return self._ranked_search(query, snapshot)

    def _answer(self, query: str, fund: FundRecord, snapshot: CorpusSnapshot) -> MatchResult:
        answer = self.qa.answer(query, fund, snapshot.stocks, snapshot.holdings)
        if answer is None:
            self.logger.info("No answer available", fund=fund.name)
            answer = ANSWER_NOT_AVAILABLE.format(name=fund.name)
        return MatchResult(
            fund=fund,
            score=ANSWERED_QUESTION_SCORE,
            match_reason=ANSWERED_QUESTION_REASON,
            answer_to_query=answer
        )

    def _lexical_search(self, query: str, snapshot: CorpusSnapshot) -> List[MatchResult]:
        return lexical_scorer.search(query, snapshot.funds,
                                     limit=self.max_results, min_score=self.min_score)

    def _ranked_search(self, query: str, snapshot: CorpusSnapshot):
        if self.embedding_ranker is None:
            return self._lexical_search(query, snapshot), 'lexical'

        results, used_fallback = self.resilience.with_fallback(
            EMBEDDING_SERVICE,
            lambda: self.embedding_ranker.rank(query, snapshot.funds, limit=self.max_results),
            lambda: self._lexical_search(query, snapshot),
            recoverable=(EmbeddingProviderError,)
        )
        if used_fallback:
            self.metrics.record_fallback()
            return results, 'lexical'
        return results, 'embedding'

    def search(self, query: str) -> List[MatchResult]:
        """Lexical ranking only, skipping alias resolution and question answering"""
        return self._lexical_search(query, self.store.snapshot())

    def analyze(self, query: str) -> QueryAnalysis:
        return self.classifier.analyze(query)

    def suggest(self, query: str) -> List[Suggestion]:
        return self.suggester.suggest(query)

    def import_data(self, category: str, text: str) -> Dict[str, Any]:
        """
        Replace one data category from JSON text

        Args:
            category: 'funds', 'stocks' or 'holdings'
            text: JSON array text

        Returns:
            Status dict; on failure the corpus is unchanged
        """
        try:
            count = self.store.import_json(category, text)
        except DataFormatError as e:
            self.metrics.record_error()
            self.logger.log_error(e, {'category': category, 'operation': 'import'})
            response = self.error_handler.format_error_response(e, {'category': category})
            response['success'] = False
            return response

        self.metrics.record_import()
        self.logger.log_metric("records_imported", count, category=category)
        return {
            'success': True,
            'category': category,
            'records': count,
            'message': f"Successfully imported {count} {category} records."
        }

    def get_stats(self) -> Dict[str, Any]:
        snapshot = self.store.snapshot()
        stats = {
            'corpus': {
                'funds': len(snapshot.funds),
                'stocks': len(snapshot.stocks),
                'holdings': len(snapshot.holdings)
            },
            'metrics': self.metrics.get_metrics_summary(),
            'errors': self.error_handler.get_error_stats(),
            'embeddings_enabled': self.embedding_ranker is not None
        }
        if self.embedding_ranker is not None:
            stats['embedding_cache'] = self.embedding_ranker.cache.get_stats()
            stats['embedding_circuit'] = self.resilience.get_state(EMBEDDING_SERVICE)
        return stats

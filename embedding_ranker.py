"""
Embedding Ranker - Optional semantic ranking of funds with sentence-transformers
Fund vectors are cached process-wide and dropped whenever the corpus is replaced
"""
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
import threading
from typing import List, Optional, Sequence

import faiss
import numpy as np
from sentence_transformers import SentenceTransformer

from constants import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MAX_RESULTS,
    EMBEDDING_SIMILARITY_THRESHOLD,
    EMBEDDING_TEXT_FIELDS,
    EMBEDDING_TIMEOUT_SECONDS,
)
from enhanced_error_handler import EmbeddingProviderError
from fund_models import FundRecord, MatchResult
from simple_cache import SimpleCache
from structured_logger import get_logger


def embedding_text(fund: FundRecord) -> str:
    """Text representation of a fund used for its embedding"""
    return ' '.join(getattr(fund, field) or '' for field in EMBEDDING_TEXT_FIELDS)


def vector_cache_key(fund: FundRecord) -> str:
    """Identity plus embedded text, so a reused id with new content never hits an old vector"""
    return f"{fund.identity_key}\n{embedding_text(fund)}"


class EmbeddingRanker:
    """Ranks funds by cosine similarity between query and fund embeddings"""

    def __init__(self, model_name: str = DEFAULT_EMBEDDING_MODEL,
                 cache: Optional[SimpleCache] = None,
                 similarity_threshold: float = EMBEDDING_SIMILARITY_THRESHOLD,
                 timeout_seconds: float = EMBEDDING_TIMEOUT_SECONDS,
                 model=None):
        """
        Initialize ranker (the model itself loads on first use)

        Args:
            model_name: sentence-transformers model name
            cache: Cache for fund vectors (created if not given)
            similarity_threshold: Minimum cosine similarity to include a fund
            timeout_seconds: Maximum time for one ranking call
            model: Preloaded encoder exposing encode(texts, normalize_embeddings=True)
        """
        self.model_name = model_name
        self.cache = cache if cache is not None else SimpleCache(max_size=5000, ttl_seconds=86400)
        self.similarity_threshold = similarity_threshold
        self.timeout_seconds = timeout_seconds
        self.model = model
        self._model_lock = threading.Lock()
        # Bumped by invalidate(); vectors encoded under an older generation are not cached
        self._generation = 0
        self._generation_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="embedding")
        self.logger = get_logger()

    def _load_model(self):
        with self._model_lock:
            if self.model is None:
                self.logger.info("Loading embedding model", model=self.model_name)
                self.model = SentenceTransformer(self.model_name)
        return self.model

    def _encode(self, texts: List[str]) -> np.ndarray:
        model = self._load_model()
        vectors = model.encode(texts, normalize_embeddings=True)
        return np.asarray(vectors, dtype='float32').reshape(len(texts), -1)

    def _fund_vectors(self, funds: Sequence[FundRecord]) -> np.ndarray:
        """Vectors for all funds, computing and caching the missing ones in one batch"""
        with self._generation_lock:
            generation = self._generation
        vectors: List[Optional[np.ndarray]] = [self.cache.get(vector_cache_key(f)) for f in funds]
        missing = [i for i, v in enumerate(vectors) if v is None]

        if missing:
            encoded = self._encode([embedding_text(funds[i]) for i in missing])
            for row, i in enumerate(missing):
                vectors[i] = encoded[row]

            with self._generation_lock:
                stale = generation != self._generation
                if not stale:
                    for row, i in enumerate(missing):
                        self.cache.set(vector_cache_key(funds[i]), encoded[row])
            self.logger.debug("Fund embeddings computed", count=len(missing), cached=not stale)

        return np.vstack(vectors).astype('float32')

    def _rank(self, query: str, funds: Sequence[FundRecord], limit: int) -> List[MatchResult]:
        if not funds:
            return []

        query_vector = self._encode([query])
        fund_vectors = self._fund_vectors(funds)

        # Inner product on normalized vectors is cosine similarity
        index = faiss.IndexFlatIP(fund_vectors.shape[1])
        index.add(fund_vectors)
        similarities, indices = index.search(query_vector, len(funds))

        results = []
        for similarity, idx in zip(similarities[0], indices[0]):
            if idx < 0 or similarity <= self.similarity_threshold:
                continue
            results.append(MatchResult(
                fund=funds[idx],
                score=min(max(float(similarity), 0.0), 1.0),
                match_reason=f'This fund matches your query "{query}" based on its characteristics.'
            ))
            if len(results) >= limit:
                break
        return results

    def rank(self, query: str, funds: Sequence[FundRecord],
             limit: int = DEFAULT_MAX_RESULTS) -> List[MatchResult]:
        """
        Rank funds semantically

        Args:
            query: Query text
            funds: Candidate funds
            limit: Maximum results

        Returns:
            Results with similarity above the threshold, best first

        Raises:
            EmbeddingProviderError: model failure or timeout
        """
        future = self._executor.submit(self._rank, query, list(funds), limit)
        try:
            return future.result(timeout=self.timeout_seconds)
        except FutureTimeoutError as e:
            future.cancel()
            raise EmbeddingProviderError(
                f"Embedding ranking timed out after {self.timeout_seconds}s"
            ) from e
        except EmbeddingProviderError:
            raise
        except Exception as e:
            raise EmbeddingProviderError(f"Embedding ranking failed: {e}") from e

    def invalidate(self, category: Optional[str] = None):
        """Drop cached fund vectors (corpus replace listener)"""
        if category in (None, 'funds'):
            with self._generation_lock:
                self._generation += 1
                self.cache.clear()
            self.logger.info("Embedding cache invalidated")

    def close(self):
        self._executor.shutdown(wait=False)

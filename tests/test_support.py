"""
Tests for configuration, cache, metrics and error formatting
"""
import time

from config_loader import Config
from enhanced_error_handler import DataFormatError, EnhancedErrorHandler, ErrorCategory
from metrics_collector import MetricsCollector
from simple_cache import SimpleCache


def test_config_defaults_when_file_missing(config):
    assert config.max_results == 10
    assert config.min_score == 0.1
    assert config.use_embeddings is False
    assert config.funds_path == 'data/funds.json'
    assert config.get('search.nothing', 'fallback') == 'fallback'


def test_config_file_layers_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("search:\n  max_results: 3\nembedding:\n  enabled: true\n", encoding='utf-8')
    config = Config(str(path))
    assert config.max_results == 3
    assert config.min_score == 0.1
    assert config.use_embeddings is True
    assert config.embedding_model == 'all-MiniLM-L6-v2'


def test_environment_overrides_file(tmp_path, monkeypatch):
    monkeypatch.setenv('FUNDS_PATH', '/tmp/other.json')
    monkeypatch.setenv('USE_EMBEDDINGS', 'true')
    monkeypatch.setenv('EMBEDDING_TIMEOUT', '2.5')
    config = Config(str(tmp_path / "missing.yaml"))
    assert config.funds_path == '/tmp/other.json'
    assert config.use_embeddings is True
    assert config.embedding_timeout == 2.5


def test_cache_expiry_and_stats():
    cache = SimpleCache(max_size=10, ttl_seconds=60)
    cache.set("a", 1)
    cache.set("b", 2, ttl=0.05)
    assert cache.get("a") == 1
    time.sleep(0.1)
    assert cache.get("b") is None
    stats = cache.get_stats()
    assert stats['hits'] == 1
    assert stats['misses'] == 1
    assert stats['size'] == 1


def test_cache_evicts_least_recently_used():
    cache = SimpleCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)
    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_cache_clear_counts_invalidations():
    cache = SimpleCache()
    cache.set("a", 1)
    cache.clear()
    assert len(cache) == 0
    assert cache.get_stats()['invalidations'] == 1


def test_metrics_summary():
    metrics = MetricsCollector()
    metrics.record_query('lexical', 0.2, 3, 'nav')
    metrics.record_query('answered', 0.4, 0)
    metrics.record_fallback()
    summary = metrics.get_metrics_summary()
    assert summary['total_queries'] == 2
    assert summary['avg_response_time_seconds'] == 0.3
    assert summary['query_type_distribution'] == {'lexical': 1, 'answered': 1}
    assert summary['no_result_count'] == 1
    assert summary['topic_distribution'] == {'nav': 1, 'general': 1}
    assert summary['fallback_count'] == 1


def test_error_categories():
    handler = EnhancedErrorHandler()
    assert handler.categorize_error(DataFormatError("bad")) == ErrorCategory.DATA_FORMAT
    assert handler.categorize_error(FileNotFoundError("x")) == ErrorCategory.NOT_FOUND
    assert handler.categorize_error(ValueError("x")) == ErrorCategory.USER_ERROR
    assert handler.categorize_error(RuntimeError("boom")) == ErrorCategory.SYSTEM_ERROR


def test_error_response_counts_errors():
    handler = EnhancedErrorHandler(include_debug=True)
    response = handler.format_error_response(DataFormatError("bad", 'funds'), {'category': 'funds'})
    assert response['error'] is True
    assert response['context'] == {'category': 'funds'}
    assert response['debug']['error_class'] == 'DataFormatError'
    assert handler.get_error_stats()['total_errors'] == 1

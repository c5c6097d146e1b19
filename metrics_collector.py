"""
Metrics Collector - Tracks query volume, latency and routing
"""
from typing import Dict, List
from collections import defaultdict, deque
import threading


class MetricsCollector:
    """Collects in-memory metrics for observability"""

    def __init__(self, window_size: int = 1000):
        """
        Initialize metrics collector

        Args:
            window_size: Number of recent response times kept for averages
        """
        self._lock = threading.Lock()
        self.query_count = 0
        self.response_times = deque(maxlen=window_size)
        self.error_count = 0
        self.fallback_count = 0
        self.import_count = 0
        self.no_result_count = 0

        # How each query was served (answered, resolved, lexical, embedding, empty)
        self.query_types = defaultdict(int)

        # Question topics seen
        self.topics = defaultdict(int)

    def record_query(self, query_type: str, response_time: float,
                     result_count: int, topic: str = 'general'):
        """
        Record a query execution

        Args:
            query_type: Route that produced the results
            response_time: Time taken to respond (seconds)
            result_count: Number of results returned
            topic: Coarse question topic
        """
        with self._lock:
            self.query_count += 1
            self.response_times.append(response_time)
            self.query_types[query_type] += 1
            self.topics[topic] += 1
            if result_count == 0:
                self.no_result_count += 1

    def record_fallback(self):
        with self._lock:
            self.fallback_count += 1

    def record_import(self):
        with self._lock:
            self.import_count += 1

    def record_error(self):
        with self._lock:
            self.error_count += 1

    def get_metrics_summary(self) -> Dict:
        """
        Get summary of all metrics

        Returns:
            Dict with metric summaries
        """
        with self._lock:
            times: List[float] = list(self.response_times)
            avg_response_time = sum(times) / len(times) if times else 0

            return {
                'total_queries': self.query_count,
                'avg_response_time_seconds': round(avg_response_time, 3),
                'error_count': self.error_count,
                'fallback_count': self.fallback_count,
                'import_count': self.import_count,
                'no_result_count': self.no_result_count,
                'query_type_distribution': dict(self.query_types),
                'topic_distribution': dict(self.topics)
            }

"""
Enhanced Error Handler - Error taxonomy and categorization for the search core
"""
from typing import Dict, Optional
import time
from enum import Enum
import traceback


class FundSearchError(Exception):
    """Base class for errors raised by the search core"""


class DataFormatError(FundSearchError):
    """Ingested payload is not an array of valid records"""

    def __init__(self, message: str, category: Optional[str] = None):
        super().__init__(message)
        self.category = category


class EmbeddingProviderError(FundSearchError):
    """Optional embedding ranker failed or timed out"""


class ErrorCategory(Enum):
    """Error categories"""
    DATA_FORMAT = "data_format"  # Malformed import payload (fix the data and retry)
    USER_ERROR = "user_error"  # User input issues
    RETRYABLE = "retryable"  # Transient errors (provider unavailable, timeout)
    NOT_FOUND = "not_found"  # Resource not found
    SYSTEM_ERROR = "system_error"  # System issues (needs attention)


class EnhancedErrorHandler:
    """Error categorization and user-facing error responses"""

    def __init__(self, include_debug: bool = False):
        """
        Initialize error handler

        Args:
            include_debug: Whether to attach exception details to responses
        """
        self.include_debug = include_debug
        self.error_counts: Dict[str, int] = {}  # Track error frequencies

    def categorize_error(self, error: Exception) -> ErrorCategory:
        """
        Categorize error type

        Args:
            error: Exception to categorize

        Returns:
            Error category
        """
        if isinstance(error, DataFormatError):
            return ErrorCategory.DATA_FORMAT

        if isinstance(error, (EmbeddingProviderError, TimeoutError)):
            return ErrorCategory.RETRYABLE

        if isinstance(error, FileNotFoundError):
            return ErrorCategory.NOT_FOUND

        error_message = str(error).lower()
        if any(keyword in error_message for keyword in ['timeout', 'connection', 'unavailable']):
            return ErrorCategory.RETRYABLE

        if isinstance(error, (ValueError, KeyError)):
            return ErrorCategory.USER_ERROR

        return ErrorCategory.SYSTEM_ERROR

    def format_error_response(self, error: Exception, context: Optional[Dict] = None) -> Dict:
        """
        Format error for a caller-facing status response

        Args:
            error: Exception
            context: Optional context information

        Returns:
            Formatted error response
        """
        category = self.categorize_error(error)

        error_key = f"{category.value}:{type(error).__name__}"
        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        user_messages = {
            ErrorCategory.DATA_FORMAT: "Invalid JSON format. Please check your data.",
            ErrorCategory.USER_ERROR: "Please check your input and try again.",
            ErrorCategory.RETRYABLE: "Service temporarily unavailable. Please try again in a moment.",
            ErrorCategory.NOT_FOUND: "The requested information was not found.",
            ErrorCategory.SYSTEM_ERROR: "An internal error occurred."
        }

        response = {
            'error': True,
            'error_type': category.value,
            'message': user_messages.get(category, "An error occurred."),
            'error_id': f"{category.value}_{int(time.time())}"
        }

        if context:
            response['context'] = context

        if self.include_debug:
            response['debug'] = {
                'error_class': type(error).__name__,
                'error_message': str(error),
                'traceback': traceback.format_exc()[:1000]
            }

        return response

    def get_error_stats(self) -> Dict:
        """Get error statistics"""
        return {
            'error_counts': dict(self.error_counts),
            'total_errors': sum(self.error_counts.values())
        }

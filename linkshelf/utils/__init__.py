"""ユーティリティモジュール

共通的な処理を提供するユーティリティ関数・クラス群
"""

from linkshelf.utils.error_handler import (
    get_logger,
    handle_db_operation,
    log_error,
)
from linkshelf.utils.pagination import (
    PaginationParams,
    PaginationResult,
    calculate_pagination,
    create_pagination_result,
    validate_page_params,
)
from linkshelf.utils.result import Err, Ok, Result

__all__ = [
    # Error handling utilities
    "get_logger",
    "handle_db_operation",
    "log_error",
    # Pagination utilities
    "PaginationParams",
    "PaginationResult",
    "calculate_pagination",
    "create_pagination_result",
    "validate_page_params",
    # Result type
    "Ok",
    "Err",
    "Result",
]

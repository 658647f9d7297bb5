"""エラーハンドリング関連ユーティリティ

エラーハンドリング、ログ出力、例外変換を提供
"""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from linkshelf.core.errors import StorageFault

T = TypeVar("T")


def get_logger(name: str) -> logging.Logger:
    """統一フォーマットのロガー取得

    Args:
        name: ロガー名（通常は __name__ を渡す）

    Returns:
        設定済みのロガーインスタンス
    """
    return logging.getLogger(name)


def handle_db_operation(operation_name: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """データベース操作用デコレータ

    データベース操作でエラーが発生した場合の統一処理を提供
    - エラーログの出力
    - SQLAlchemyの例外をStorageFaultへ変換（元の例外は__cause__に保持）

    ロールバックはトランザクション境界（DatabaseTransaction）が担当する

    Args:
        operation_name: 操作名（ログ出力用）

    Usage:
        @handle_db_operation("ブックマーク作成")
        async def create_with_tags(self, db: AsyncSession, ...):
            # データベース操作
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            logger = get_logger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except StorageFault:
                raise
            except SQLAlchemyError as e:
                log_error(logger, operation_name, e)
                raise StorageFault(f"{operation_name}中にデータベースエラーが発生しました") from e

        return wrapper

    return decorator


def log_error(logger: logging.Logger, operation: str, error: Exception, **context: Any) -> None:
    """統一されたエラーログ出力

    Args:
        logger: ロガーインスタンス
        operation: 操作名
        error: 発生した例外
        **context: 追加のコンテキスト情報
    """
    context_str = ", ".join(f"{k}={v}" for k, v in context.items()) if context else ""
    log_message = f"{operation}エラー: {error}"
    if context_str:
        log_message += f" (context: {context_str})"

    logger.error(log_message)

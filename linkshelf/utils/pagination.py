"""ページネーション関連ユーティリティ

ページネーション計算と制限値チェック処理を提供
"""

import math
from typing import NamedTuple

from linkshelf.core.constants import APIConstants, ErrorMessages


class PaginationParams(NamedTuple):
    """ページネーション計算結果"""

    skip: int
    limit: int
    page: int


class PaginationResult(NamedTuple):
    """ページネーション情報"""

    page: int
    per_page: int
    total_pages: int
    total: int


def validate_page_params(page: int, per_page: int) -> tuple[int, int]:
    """ページネーションパラメータのバリデーション

    Args:
        page: ページ番号
        per_page: 1ページあたりの件数

    Returns:
        バリデーション済みの (page, per_page) タプル

    Raises:
        ValueError: パラメータが無効な場合
    """
    if page < 1:
        raise ValueError(ErrorMessages.INVALID_PAGE)

    if not (APIConstants.MIN_PAGE_SIZE <= per_page <= APIConstants.MAX_PAGE_SIZE):
        raise ValueError(ErrorMessages.INVALID_PAGE_SIZE)

    return page, per_page


def calculate_pagination(page: int, per_page: int) -> PaginationParams:
    """ページネーションパラメータを計算

    範囲外の値は受け付けない（事前に validate_page_params を通すこと）

    Args:
        page: ページ番号（1から開始）
        per_page: 1ページあたりの件数

    Returns:
        計算されたページネーションパラメータ
    """
    page, per_page = validate_page_params(page, per_page)

    return PaginationParams(
        skip=(page - 1) * per_page,
        limit=per_page,
        page=page,
    )


def create_pagination_result(page: int, per_page: int, total: int) -> PaginationResult:
    """ページネーション結果を作成

    Args:
        page: 現在のページ番号
        per_page: 1ページあたりの件数
        total: 総件数

    Returns:
        ページネーション情報
    """
    # 0件の場合は総ページ数0
    total_pages = math.ceil(total / per_page) if total > 0 else 0

    return PaginationResult(
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        total=total,
    )

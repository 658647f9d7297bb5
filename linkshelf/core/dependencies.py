"""依存性注入設定モジュール

リポジトリパターンの依存性注入を管理
"""

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from linkshelf.repositories.bookmark import BookmarkRepository


def get_bookmark_repository(request: Request) -> "BookmarkRepository":
    """ブックマークリポジトリの依存性注入

    アプリケーション起動時（lifespan）に生成したインスタンスを返す
    テスト時は app.state.bookmark_repository を差し替える

    Returns:
        ブックマークリポジトリインスタンス
    """
    repository: BookmarkRepository = request.app.state.bookmark_repository
    return repository

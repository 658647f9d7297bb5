"""リポジトリパッケージ

データアクセス層の抽象化を提供
CRUDとクエリをカプセル化し、アダプタとの分離を実現
"""

from linkshelf.repositories.bookmark import BookmarkRepository
from linkshelf.repositories.bookmark_query import (
    BookmarkQueryEngine,
    BookmarkQueryEngineInterface,
    bookmark_query_engine,
)

__all__ = [
    # Interfaces
    "BookmarkQueryEngineInterface",
    # Implementations
    "BookmarkQueryEngine",
    "BookmarkRepository",
    # Instances
    "bookmark_query_engine",
]

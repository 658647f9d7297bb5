"""モデルパッケージ

すべてのSQLAlchemyモデルをインポートするためのエントリーポイント
"""

from linkshelf.models.base import Base
from linkshelf.models.bookmark import Bookmark
from linkshelf.models.bookmark_tag import BookmarkTag

__all__ = [
    "Base",
    "Bookmark",
    "BookmarkTag",
]

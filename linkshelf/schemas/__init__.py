"""スキーマパッケージ

Pydanticスキーマを提供
"""

# Bookmark関連スキーマ
from linkshelf.schemas.bookmark import (
    BookmarkListResponse,
    BookmarkPayload,
    BookmarkResponse,
    PaginationMeta,
)

__all__ = [
    # Bookmark
    "BookmarkPayload",
    "BookmarkResponse",
    "BookmarkListResponse",
    "PaginationMeta",
]

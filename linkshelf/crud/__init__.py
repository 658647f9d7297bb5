"""CRUD パッケージ

すべてのCRUD操作クラスをインポートするためのエントリーポイント
"""

from linkshelf.crud.base import CRUDBase
from linkshelf.crud.bookmark import CRUDBookmark, bookmark_crud

__all__ = [
    "CRUDBase",
    "CRUDBookmark",
    "bookmark_crud",
]

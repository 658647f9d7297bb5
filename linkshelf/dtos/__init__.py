"""DTOパッケージ

Data Transfer Objectsを提供
各レイヤー間のデータ転送を担当する
"""

from linkshelf.dtos.base import BaseDTO
from linkshelf.dtos.bookmark import BookmarkDTO, BookmarkPageDTO, ensure_utc

__all__ = [
    "BaseDTO",
    "BookmarkDTO",
    "BookmarkPageDTO",
    "ensure_utc",
]

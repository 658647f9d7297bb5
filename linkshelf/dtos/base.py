"""ベースDTOクラス

すべてのDTOの基底クラスを提供
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BaseDTO:
    """ベースDTOクラス

    - dataclass(frozen=True): イミュータブルなデータクラス
    - 共通フィールドの定義
    - 型安全性の確保
    """

    id: int
    created_at: datetime

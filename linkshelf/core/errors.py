"""ドメインエラー定義

ブックマーク操作の失敗を表す型を提供
- ValidationError / NotFound: 呼び出し側で回復可能な想定内の失敗（Errとして返却）
- StorageFault: ストレージ層の想定外の失敗（例外として送出）
"""

from dataclasses import dataclass

from linkshelf.core.constants import ErrorMessages


@dataclass(frozen=True)
class ValidationError:
    """入力値検証エラー

    message は利用者向けのメッセージ、field は最初に失敗したフィールド名
    """

    message: str
    field: str | None = None


@dataclass(frozen=True)
class NotFound:
    """対象のブックマークが存在しない"""

    resource_id: int
    message: str = ErrorMessages.BOOKMARK_NOT_FOUND


class StorageFault(Exception):
    """データベース障害

    リトライは行わず、そのまま上位へ伝播させる
    """

    pass

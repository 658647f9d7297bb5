"""アプリケーション定数管理

バリデーション値、制限値、エラーメッセージを一元管理
"""

import re
from urllib.parse import urlsplit

# =============================================================================
# ブックマーク関連定数
# =============================================================================


class BookmarkConstants:
    """ブックマーク関連の定数"""

    # タイトル設定
    TITLE_MAX_LENGTH = 200

    # 説明設定
    DESCRIPTION_MAX_LENGTH = 500

    # URLスキーム（RFC 3986）
    URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")

    # ホスト必須のスキーム
    HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


# =============================================================================
# タグ関連定数
# =============================================================================


class TagConstants:
    """タグ関連の定数"""

    # 1ブックマークあたりのタグ数上限
    MAX_TAGS_PER_BOOKMARK = 5

    # タグ名設定
    NAME_MIN_LENGTH = 1


# =============================================================================
# API関連定数
# =============================================================================


class APIConstants:
    """API関連の定数"""

    # ページネーション設定
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100
    MIN_PAGE_SIZE = 1


# =============================================================================
# セキュリティ関連定数
# =============================================================================


class SecurityConstants:
    """セキュリティ関連の定数"""

    MIN_DB_PASSWORD_LENGTH_PRODUCTION = 12


# =============================================================================
# データベース関連定数
# =============================================================================


class DatabaseConstants:
    """データベース関連の定数"""

    # 接続プール設定
    DB_POOL_SIZE_MIN = 1
    DB_POOL_SIZE_MAX = 50
    DB_MAX_OVERFLOW_MIN = 0
    DB_MAX_OVERFLOW_MAX = 100

    # 対応データベースエンジン
    SUPPORTED_ENGINES = ["sqlite", "postgresql"]


# =============================================================================
# ヘルパー関数
# =============================================================================


def validate_url(url: str) -> bool:
    """URLの構文をチェック

    絶対URLであること（スキーム必須）を確認する。
    http/https/ftp/ws/wss はホストが必要で、ポートは0〜65535の範囲に限る。

    Args:
        url: チェック対象のURL

    Returns:
        有効な場合True、無効な場合False
    """
    candidate = url.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False

    try:
        parts = urlsplit(candidate)
        # 不正なポート番号はここでValueErrorになる
        _ = parts.port
    except ValueError:
        return False

    if not parts.scheme or not BookmarkConstants.URL_SCHEME_PATTERN.match(parts.scheme):
        return False

    if parts.scheme.lower() in BookmarkConstants.HOST_REQUIRED_SCHEMES:
        return bool(parts.hostname)

    return bool(parts.netloc or parts.path)


def normalize_tag(tag: str) -> str:
    """タグを保存形式（小文字）に正規化"""
    return tag.lower()


# =============================================================================
# エラーメッセージ定数
# =============================================================================


class ErrorMessages:
    """エラーメッセージの定数"""

    # ブックマーク関連
    BOOKMARK_NOT_FOUND = "ブックマークが見つかりません"
    PAYLOAD_INVALID = "ブックマークデータはオブジェクト形式で指定してください"
    URL_REQUIRED = "URLは必須です"
    URL_INVALID = "URLの形式が正しくありません"
    TITLE_REQUIRED = "タイトルは必須です"
    TITLE_TOO_LONG = f"タイトルは{BookmarkConstants.TITLE_MAX_LENGTH}文字以内で入力してください"
    DESCRIPTION_INVALID = "説明は文字列で指定してください"
    DESCRIPTION_TOO_LONG = f"説明は{BookmarkConstants.DESCRIPTION_MAX_LENGTH}文字以内で入力してください"

    # タグ関連
    TAGS_MUST_BE_LIST = "タグは配列で指定してください"
    TAGS_MUST_BE_STRINGS = "タグは文字列で指定してください"
    TAGS_TOO_MANY = f"タグは最大{TagConstants.MAX_TAGS_PER_BOOKMARK}個まで指定できます"
    TAGS_DUPLICATE = "タグが重複しています（大文字・小文字は区別されません）"
    TAG_EMPTY = "空のタグは指定できません"

    # ページネーション関連
    INVALID_PAGE = "ページ番号は1以上である必要があります"
    INVALID_PAGE_SIZE = (
        f"1ページあたりの件数は{APIConstants.MIN_PAGE_SIZE}以上{APIConstants.MAX_PAGE_SIZE}以下で指定してください"
    )

    # 一般的なエラー
    VALIDATION_ERROR = "入力値に誤りがあります"
    SERVER_ERROR = "内部サーバーエラーが発生しました"
    STORAGE_ERROR = "データベース処理中にエラーが発生しました"
    BAD_REQUEST = "リクエストが不正です"

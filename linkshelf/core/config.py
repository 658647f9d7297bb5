"""アプリケーション設定管理モジュール

Pydantic V2 BaseSettingsを使用した設定システムを提供
"""

import os
from typing import Annotated, Any, ClassVar
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from linkshelf.core.constants import DatabaseConstants, SecurityConstants


class Settings(BaseSettings):
    """アプリケーション設定

    Pydantic V2を使用して環境変数から設定を読み込む（設定は自動的に検証・型チェックされる）
    """

    # =============================================================================
    # Pydantic V2 設定
    # =============================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_assignment=True,
    )

    # =============================================================================
    # アプリケーション設定
    # =============================================================================
    PROJECT_NAME: str = "Linkshelf API"
    PROJECT_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_V1_STR: str = "/api/v1"

    # =============================================================================
    # データベース設定
    # =============================================================================
    DB_ENGINE: str = Field(default="sqlite")
    SQLITE_PATH: str = Field(default="bookmarks.db")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="")
    DB_NAME: str = Field(default="linkshelf")
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # =============================================================================
    # CORS設定
    # =============================================================================
    # 環境変数ではカンマ区切り文字列で指定する
    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = []
    ALLOWED_HOSTS: Annotated[list[str], NoDecode] = ["localhost", "127.0.0.1"]

    # =============================================================================
    # ログレベル設定
    # =============================================================================
    VALID_LOG_LEVELS: ClassVar[list[str]] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # =============================================================================
    # バリデーター（Pydantic V2）
    # =============================================================================

    @field_validator("DB_ENGINE", mode="before")
    @classmethod
    def validate_db_engine(cls, v: str) -> str:
        engine = str(v).lower()
        if engine not in DatabaseConstants.SUPPORTED_ENGINES:
            raise ValueError(f"DB_ENGINE must be one of: {', '.join(DatabaseConstants.SUPPORTED_ENGINES)}")
        return engine

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_db_pool_size(cls, v: int) -> int:
        if not (DatabaseConstants.DB_POOL_SIZE_MIN <= v <= DatabaseConstants.DB_POOL_SIZE_MAX):
            raise ValueError(
                f"DB_POOL_SIZE must be between "
                f"{DatabaseConstants.DB_POOL_SIZE_MIN} and {DatabaseConstants.DB_POOL_SIZE_MAX}"
            )
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_db_max_overflow(cls, v: int) -> int:
        if not (DatabaseConstants.DB_MAX_OVERFLOW_MIN <= v <= DatabaseConstants.DB_MAX_OVERFLOW_MAX):
            raise ValueError(
                f"DB_MAX_OVERFLOW must be between "
                f"{DatabaseConstants.DB_MAX_OVERFLOW_MIN} and {DatabaseConstants.DB_MAX_OVERFLOW_MAX}"
            )
        return v

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str] | None) -> list[str]:
        """CORS originをカンマ区切り文字列またはリストから解析"""
        if isinstance(v, str) and v:
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        elif isinstance(v, list):
            return v
        return []

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def assemble_allowed_hosts(cls, v: str | list[str] | None) -> list[str]:
        """許可ホストをカンマ区切り文字列またはリストから解析(未提供の場合はlocalhostをデフォルトとして使用)"""
        if isinstance(v, str) and v:
            return [host.strip() for host in v.split(",") if host.strip()]
        elif isinstance(v, list):
            return v
        return ["localhost", "127.0.0.1"]

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in cls.VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(cls.VALID_LOG_LEVELS)}")
        return v.upper()

    # =============================================================================
    # 計算プロパティ（Pydantic V2）
    # =============================================================================

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url_async(self) -> str:
        """非同期接続URLを生成（SQLiteはaiosqlite、PostgreSQLはasyncpg）"""
        if self.DB_ENGINE == "sqlite":
            return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"

        encoded_password = quote_plus(self.DB_PASSWORD)
        return f"postgresql+asyncpg://{self.DB_USER}:{encoded_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """開発環境で実行中かチェック"""
        return self.ENVIRONMENT.lower() == "development"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """本番環境で実行中かチェック"""
        return self.ENVIRONMENT.lower() == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_testing(self) -> bool:
        """テスト環境で実行中かチェック"""
        return self.ENVIRONMENT.lower() == "testing"

    # =============================================================================
    # ヘルパーメソッド
    # =============================================================================

    def get_database_config(self) -> dict[str, Any]:
        if self.DB_ENGINE == "sqlite":
            return {"engine": self.DB_ENGINE, "path": self.SQLITE_PATH}

        return {
            "engine": self.DB_ENGINE,
            "user": self.DB_USER,
            "host": self.DB_HOST,
            "port": self.DB_PORT,
            "database": self.DB_NAME,
            "pool_size": self.DB_POOL_SIZE,
            "max_overflow": self.DB_MAX_OVERFLOW,
        }

    def get_cors_config(self) -> dict[str, Any]:
        return {
            "allow_origins": self.BACKEND_CORS_ORIGINS,
            "allow_credentials": True,
            "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["*"],
        }

    # =============================================================================
    # セキュリティ・検証メソッド
    # =============================================================================

    def validate_production_security(self) -> None:
        """本番環境のセキュリティ設定を検証"""
        if not self.is_production:
            return

        issues = []

        db_password_too_short = len(self.DB_PASSWORD) < SecurityConstants.MIN_DB_PASSWORD_LENGTH_PRODUCTION
        if self.DB_ENGINE == "postgresql" and db_password_too_short:
            issues.append(
                f"DB_PASSWORD must be at least {SecurityConstants.MIN_DB_PASSWORD_LENGTH_PRODUCTION} characters"
            )

        if not self.BACKEND_CORS_ORIGINS or "http://localhost" in str(self.BACKEND_CORS_ORIGINS):
            issues.append("CORS origins should not include localhost in production")

        if self.DEBUG:
            issues.append("DEBUG should be False in production")

        if issues:
            raise ValueError(f"Production security issues: {'; '.join(issues)}")


# =============================================================================
# グローバル設定インスタンス（シングルトン）
# =============================================================================

_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """シングルトンパターンで設定インスタンスを取得"""
    global _settings_instance

    if _settings_instance is None:
        _settings_instance = Settings()

        # 本番環境セキュリティ検証
        try:
            _settings_instance.validate_production_security()
        except ValueError as e:
            if _settings_instance.is_production:
                raise
            print(f"⚠️  開発モードセキュリティ通知: {e}")

    return _settings_instance


# グローバル設定インスタンス（アプリケーション全体で共有）
settings = get_settings()


# =============================================================================
# テスト用ユーティリティ
# =============================================================================


def reset_settings() -> None:
    """シングルトンインスタンスをリセット（主にテスト用）"""
    global _settings_instance
    _settings_instance = None


def create_test_settings(**overrides: Any) -> Settings:
    """テスト用設定でシングルトンを一時的に置き換えます

    注意: この関数はテスト環境でのみ使用してください

    Args:
        **overrides: テスト用に上書きする設定

    Returns:
        テスト値を持つSettingsインスタンス

    Example:
        test_settings = create_test_settings(DB_ENGINE="postgresql")
        try:
            # テスト実行
            pass
        finally:
            reset_settings()  # 必ずリセット
    """
    global _settings_instance

    test_defaults: dict[str, Any] = {
        "ENVIRONMENT": "testing",
        "DEBUG": True,
        "DB_ENGINE": "sqlite",
        "SQLITE_PATH": ":memory:",
        "LOG_LEVEL": "WARNING",
    }
    test_defaults.update(overrides)

    original_env = {}
    for key, value in test_defaults.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = str(value)

    try:
        _settings_instance = None
        return get_settings()
    finally:
        # 環境変数は常に復元する（生成済みインスタンスは保持される）
        for key, original_value in original_env.items():
            if original_value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original_value

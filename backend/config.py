"""環境変数からの設定読み込み。"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """アプリケーション設定。

    db_path: 工数記録を保存するSQLiteファイル（TIMESHEET_DB_PATH）
    log_level: ログレベル（TIMESHEET_LOG_LEVEL）
    """

    db_path: str = "data/timesheet.db"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """環境変数から Settings を構築する。

    Raises:
        ValueError: 未知のログレベルが指定された場合
    """
    defaults = Settings()
    log_level = os.getenv("TIMESHEET_LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"Unknown log level: {log_level}")
    return Settings(
        db_path=os.getenv("TIMESHEET_DB_PATH") or defaults.db_path,
        log_level=log_level,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def configure_logging(settings: Settings | None = None) -> None:
    """ルートロガーを設定する（起動時に1回呼ぶ）。"""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)

"""Store層のSQLite実装。

ActivityStoreInterfaceに準拠したSQLite実装を提供する。
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path

from backend.interfaces.activity_store import Activity, ActivityStoreInterface

logger = logging.getLogger(__name__)

# スキーマ定義
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS activities (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    project     TEXT NOT NULL,
    employee    TEXT NOT NULL,
    date        TEXT NOT NULL,
    hours       REAL NOT NULL CHECK (hours >= 0)
);

CREATE INDEX IF NOT EXISTS idx_activities_project ON activities(project);
CREATE INDEX IF NOT EXISTS idx_activities_employee ON activities(employee);
CREATE INDEX IF NOT EXISTS idx_activities_date ON activities(date);
"""


class SqliteActivityStore(ActivityStoreInterface):
    """SQLiteによるStore層実装。"""

    def __init__(self, db_path: str):
        """初期化。

        Args:
            db_path: SQLiteデータベースファイルのパス（親ディレクトリは自動作成）
        """
        self._db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self):
        """スキーマを初期化する。"""
        with closing(self._connect()) as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def _connect(self) -> sqlite3.Connection:
        """データベース接続を取得する。"""
        return sqlite3.connect(self._db_path)

    def add_activities(self, activities: list[Activity]) -> int:
        """工数記録をバッチ追加する。

        Args:
            activities: 追加するレコードのリスト

        Returns:
            追加されたレコード数
        """
        with closing(self._connect()) as conn:
            conn.executemany(
                """
                INSERT INTO activities (project, employee, date, hours)
                VALUES (?, ?, ?, ?)
                """,
                [(a.project, a.employee, a.date, a.hours) for a in activities],
            )
            conn.commit()
        logger.info("inserted %d activities", len(activities))
        return len(activities)

    def list_activities(self) -> list[Activity]:
        """全工数記録を取得する。

        Returns:
            工数記録のリスト（登録順）
        """
        with closing(self._connect()) as conn:
            rows = conn.execute(
                "SELECT project, employee, date, hours FROM activities ORDER BY id ASC"
            ).fetchall()

        return [
            Activity(project=row[0], employee=row[1], date=row[2], hours=row[3])
            for row in rows
        ]

    def delete_all_data(self) -> None:
        """全データを削除する（デバッグ用）。"""
        with closing(self._connect()) as conn:
            conn.execute("DELETE FROM activities")
            conn.commit()
        logger.info("deleted all activities")

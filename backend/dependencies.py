"""DI用ファクトリ関数。

backend/ 直下に配置することで、ingestion/ から store/ への
直接依存を避けつつ、FastAPI の Depends() で注入できる。
"""

from backend.aggregation.engine import AggregationEngine
from backend.config import get_settings
from backend.interfaces.activity_store import ActivityStoreInterface

_activity_store: ActivityStoreInterface | None = None
_aggregation_engine: AggregationEngine | None = None


def get_activity_store() -> ActivityStoreInterface:
    """ActivityStoreのシングルトンインスタンスを返す。"""
    global _activity_store
    if _activity_store is None:
        from backend.store.sqlite import SqliteActivityStore

        _activity_store = SqliteActivityStore(get_settings().db_path)
    return _activity_store


def get_aggregation_engine() -> AggregationEngine:
    """AggregationEngineのシングルトンインスタンスを返す。"""
    global _aggregation_engine
    if _aggregation_engine is None:
        _aggregation_engine = AggregationEngine(get_activity_store())
    return _aggregation_engine


def _reset_all() -> None:
    """全シングルトンをリセットする（テスト用）。"""
    global _activity_store, _aggregation_engine
    _activity_store = None
    _aggregation_engine = None
    get_settings.cache_clear()

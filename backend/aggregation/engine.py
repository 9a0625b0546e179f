"""集計エンジン — 階層集計とフラット集計の窓口."""

import logging
from collections.abc import Sequence

from backend.aggregation.flat import flat_totals
from backend.aggregation.flatten import flatten_tree
from backend.aggregation.ordering import SortKey, natural_sort_key
from backend.aggregation.tree import build_tree
from backend.interfaces.activity_store import Activity, ActivityStoreInterface
from backend.interfaces.aggregation import (
    AGGREGATION_MODES,
    AggregationMode,
    FlatRow,
    GroupSpec,
)

logger = logging.getLogger(__name__)


class AggregationEngine:
    """集計エンジン.

    工数記録とグルーピング指定から表示用の行リストを作る。
    mode = "hierarchical" でグループ・小計付きの階層表示、
    mode = "flat" で組み合わせごとの合計のみを返す。

    呼び出し間で状態を持たないため、並行に呼び出してよい。
    """

    def __init__(
        self,
        activity_store: ActivityStoreInterface | None = None,
        sort_key: SortKey = natural_sort_key,
    ) -> None:
        self._activity_store = activity_store
        self._sort_key = sort_key

    def aggregate(
        self,
        records: Sequence[Activity],
        spec: GroupSpec,
        mode: AggregationMode = "hierarchical",
    ) -> list[FlatRow]:
        """渡されたレコードを集計する.

        Raises:
            ValueError: 未知の mode
        """
        if mode == "hierarchical":
            root = build_tree(records, spec)
            rows = flatten_tree(root, sort_key=self._sort_key)
        elif mode == "flat":
            rows = flat_totals(records, spec, sort_key=self._sort_key)
        else:
            raise ValueError(
                f"Unknown aggregation mode: {mode!r} "
                f"(expected one of {', '.join(AGGREGATION_MODES)})"
            )

        logger.debug(
            "aggregated %d records by [%s] (%s, bucket=%s) into %d rows",
            len(records),
            ", ".join(spec.dimensions),
            mode,
            spec.date_bucket,
            len(rows),
        )
        return rows

    def report(
        self, spec: GroupSpec, mode: AggregationMode = "hierarchical"
    ) -> list[FlatRow]:
        """Store から現在の全レコードを取得して集計する.

        Raises:
            RuntimeError: Store なしで構築されたエンジンの場合
        """
        if self._activity_store is None:
            raise RuntimeError("AggregationEngine has no activity store")
        records = self._activity_store.list_activities()
        return self.aggregate(records, spec, mode=mode)

"""集計ツリーの構築."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from backend.aggregation.bucket import bucket_date
from backend.interfaces.activity_store import Activity
from backend.interfaces.aggregation import GroupSpec


@dataclass
class AggregationNode:
    """集計ツリーのノード.

    1回の集計呼び出しの中でのみ生成・使用される。
    ルートは depth = -1 で dimension / value を持たない。
    children の挿入順には意味がなく、展開時に毎回ソートする。
    hours には配下の全レコードの工数を到着順に保持する。
    """

    depth: int
    dimension: str | None = None
    value: str | None = None
    label: str = "root"
    hours: list[float] = field(default_factory=list)
    children: dict[str, "AggregationNode"] = field(default_factory=dict)
    leaves: list[Activity] = field(default_factory=list)

    @property
    def total(self) -> float:
        """配下の工数の合計.

        math.fsum は正確に丸めた和を返すため、レコードの到着順によらず
        同じ値になる。
        """
        return math.fsum(self.hours)


def bucket_record(record: Activity, spec: GroupSpec) -> Activity:
    """date でグルーピングする場合、日付をバケットキーに置き換えたレコードを返す."""
    if not spec.groups_by_date:
        return record
    return replace(record, date=bucket_date(record.date, spec.date_bucket))


def build_tree(records: Iterable[Activity], spec: GroupSpec) -> AggregationNode:
    """レコードを次元の順に振り分けて集計ツリーを構築する.

    各ノードの total は配下の全レコードの hours の合計。
    次元が空の場合、全レコードはルートの leaves に入る。
    値の一致は完全一致（大文字小文字を区別する）。
    """
    root = AggregationNode(depth=-1)

    for record in records:
        record = bucket_record(record, spec)
        root.hours.append(record.hours)
        if not spec.dimensions:
            root.leaves.append(record)
            continue

        node = root
        for depth, dimension in enumerate(spec.dimensions):
            value = getattr(record, dimension)
            child = node.children.get(value)
            if child is None:
                child = AggregationNode(
                    depth=depth,
                    dimension=dimension,
                    value=value,
                    label=f"{dimension}: {value}",
                )
                node.children[value] = child
            child.hours.append(record.hours)
            node = child

        node.leaves.append(record)

    return root

"""集計エンジンの入出力型。

集計層が書き込み、表示層（API）が読み取る。
"""

from dataclasses import dataclass, field
from typing import Literal, get_args

Dimension = Literal["project", "employee", "date"]
DateBucket = Literal["day", "week", "month", "quarter"]
RowKind = Literal["group", "leaf", "subtotal", "grandTotal"]
AggregationMode = Literal["hierarchical", "flat"]

DIMENSIONS: tuple[str, ...] = get_args(Dimension)
"""グルーピング可能な次元。並び順はUIの選択肢の順序。"""

DATE_BUCKETS: tuple[str, ...] = get_args(DateBucket)

AGGREGATION_MODES: tuple[str, ...] = get_args(AggregationMode)


class InvalidGroupSpecError(ValueError):
    """未知の次元名またはバケットモードが指定された。"""


@dataclass(frozen=True)
class GroupSpec:
    """グルーピング指定。

    dimensions は重複なしを想定するが、重複していても拒否はしない
    （その位置に子が1つだけの冗長な階層ができる）。
    date_bucket は date が dimensions に含まれる場合のみ意味を持つ。
    """

    dimensions: tuple[Dimension, ...] = ()
    date_bucket: DateBucket = "day"

    @property
    def groups_by_date(self) -> bool:
        return "date" in self.dimensions


@dataclass(frozen=True)
class FlatRow:
    """表示用の1行。

    path はルートからこの行のノードまでの値の列。
    hours は集計済みの値で、表示層で再計算してはならない。
    """

    kind: RowKind
    depth: int
    path: tuple[str, ...] = field(default_factory=tuple)
    label: str = ""
    hours: float = 0.0

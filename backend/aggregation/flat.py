"""階層を作らない1パスのバケット集計."""

import math
from collections.abc import Iterable

from backend.aggregation.flatten import activity_label, grand_total_row
from backend.aggregation.ordering import SortKey, natural_sort_key
from backend.aggregation.tree import bucket_record
from backend.interfaces.activity_store import Activity
from backend.interfaces.aggregation import FlatRow, GroupSpec


def flat_totals(
    records: Iterable[Activity],
    spec: GroupSpec,
    sort_key: SortKey = natural_sort_key,
) -> list[FlatRow]:
    """次元の値の組み合わせごとに hours を合計する.

    group / subtotal 行は作らず、組み合わせ1つにつき leaf 行を1つ出す。
    並びは次元の順に各値の sort_key で比較した順。
    次元が空の場合は各レコードをそのまま明細行として出す。
    末尾に grandTotal 行を1つ付ける。
    合計は math.fsum で求めるため、レコードの順序に依存しない。
    """
    all_hours: list[float] = []

    if not spec.dimensions:
        rows: list[FlatRow] = []
        for record in records:
            rows.append(
                FlatRow(
                    kind="leaf",
                    depth=0,
                    path=(),
                    label=activity_label(record),
                    hours=record.hours,
                )
            )
            all_hours.append(record.hours)
        rows.append(grand_total_row(math.fsum(all_hours)))
        return rows

    buckets: dict[tuple[str, ...], list[float]] = {}
    for record in records:
        record = bucket_record(record, spec)
        key = tuple(getattr(record, dim) for dim in spec.dimensions)
        buckets.setdefault(key, []).append(record.hours)
        all_hours.append(record.hours)

    ordered = sorted(buckets, key=lambda key: tuple(sort_key(v) for v in key))
    rows = [
        FlatRow(
            kind="leaf",
            depth=0,
            path=key,
            label=" | ".join(key),
            hours=math.fsum(buckets[key]),
        )
        for key in ordered
    ]
    rows.append(grand_total_row(math.fsum(all_hours)))
    return rows


def distinct_values(
    records: Iterable[Activity],
    dimension: str,
    sort_key: SortKey = natural_sort_key,
) -> list[str]:
    """レコードに現れる次元の値を重複なしで sort_key 順に返す.

    入力フォームの選択肢（プロジェクト一覧・社員一覧）に使う。
    """
    return sorted({getattr(record, dimension) for record in records}, key=sort_key)

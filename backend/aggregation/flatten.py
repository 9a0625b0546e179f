"""集計ツリーを表示用の行リストに展開する."""

from backend.aggregation.ordering import SortKey, natural_sort_key
from backend.aggregation.tree import AggregationNode
from backend.interfaces.activity_store import Activity
from backend.interfaces.aggregation import FlatRow

GRAND_TOTAL_LABEL = "Grand Total"
SUBTOTAL_PREFIX = "Subtotal — "


def activity_label(record: Activity) -> str:
    """明細行のラベル. date はバケット化済みの値."""
    return f"{record.project} | {record.employee} | {record.date}"


def grand_total_row(hours: float) -> FlatRow:
    return FlatRow(
        kind="grandTotal", depth=0, path=(), label=GRAND_TOTAL_LABEL, hours=hours
    )


def flatten_tree(
    root: AggregationNode, sort_key: SortKey = natural_sort_key
) -> list[FlatRow]:
    """集計ツリーを深さ優先で展開する.

    各グループは group 行で始まり、子グループ（値の自然順）または
    明細行（登録順）が続き、subtotal 行で閉じる。末尾に grandTotal 行を
    ちょうど1つ付ける。

    ルート自身の group / subtotal 行は出力しない。次元が空の場合は
    ルートの leaves をそのまま明細行として出力する。

    Args:
        root: build_tree() が返したルートノード
        sort_key: 兄弟ノードの値の並び順を決めるキー関数

    Returns:
        表示順に並んだ FlatRow のリスト
    """
    rows: list[FlatRow] = []

    def visit(node: AggregationNode, path: tuple[str, ...]) -> None:
        total = node.total
        if node.depth >= 0:
            rows.append(
                FlatRow(
                    kind="group",
                    depth=node.depth,
                    path=path,
                    label=node.label,
                    hours=total,
                )
            )

        if not node.children:
            for leaf in node.leaves:
                rows.append(
                    FlatRow(
                        kind="leaf",
                        depth=node.depth + 1,
                        path=path,
                        label=activity_label(leaf),
                        hours=leaf.hours,
                    )
                )
        else:
            children = sorted(
                node.children.values(), key=lambda c: sort_key(c.value)
            )
            for child in children:
                visit(child, path + (child.value,))

        if node.depth >= 0:
            rows.append(
                FlatRow(
                    kind="subtotal",
                    depth=node.depth,
                    path=path,
                    label=SUBTOTAL_PREFIX + node.label,
                    hours=total,
                )
            )

    visit(root, ())
    rows.append(grand_total_row(root.total))
    return rows

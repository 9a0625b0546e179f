"""グルーピング指定の検証."""

import logging
from collections.abc import Iterable

from backend.interfaces.aggregation import (
    DATE_BUCKETS,
    DIMENSIONS,
    GroupSpec,
    InvalidGroupSpecError,
)

logger = logging.getLogger(__name__)


def parse_dimensions_param(raw: str | None) -> list[str]:
    """カンマ区切りの次元リストを分解する. 空要素は捨てる."""
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


def parse_group_spec(
    dimensions: Iterable[str], date_bucket: str | None = None
) -> GroupSpec:
    """次元名とバケットモードを検証して GroupSpec を構築する.

    重複した次元は拒否しない。その位置に冗長な1段の階層ができるだけで
    集計結果は正しい。

    Args:
        dimensions: 次元名の並び（先頭が最上位の階層）
        date_bucket: day / week / month / quarter。None または空文字は day

    Returns:
        検証済みの GroupSpec

    Raises:
        InvalidGroupSpecError: 未知の次元名またはバケットモード
    """
    dims = tuple(dimensions)
    for dim in dims:
        if dim not in DIMENSIONS:
            raise InvalidGroupSpecError(
                f"Unknown dimension: {dim!r} (expected one of {', '.join(DIMENSIONS)})"
            )

    bucket = date_bucket or "day"
    if bucket not in DATE_BUCKETS:
        raise InvalidGroupSpecError(
            f"Unknown date bucket: {bucket!r} (expected one of {', '.join(DATE_BUCKETS)})"
        )

    if len(set(dims)) != len(dims):
        logger.warning("Duplicate dimensions in group spec: %s", ", ".join(dims))

    return GroupSpec(dimensions=dims, date_bucket=bucket)

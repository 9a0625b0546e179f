"""グループ値の並び順（数字を数値として扱う自然順ソート）."""

import re
import unicodedata
from collections.abc import Callable
from typing import Any

SortKey = Callable[[str], Any]

_DIGIT_RUN = re.compile(r"(\d+)")


def _fold(text: str) -> str:
    """大文字小文字とアクセントの差を無視する比較用文字列."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def natural_sort_key(value: str) -> tuple:
    """数字列を数値として比較するソートキーを返す.

    re.split の結果は偶数番目が非数字列、奇数番目が数字列になるため
    同じ位置同士は常に同じ型で比較される。"2" < "10"、数字は文字より前。
    一次キーが等しい場合は小文字を先に並べ（"acme" < "Acme"）、
    それでも等しければ元の文字列で順序を確定させる。
    """
    parts = _DIGIT_RUN.split(value)
    primary = tuple(
        int(part) if i % 2 else _fold(part) for i, part in enumerate(parts)
    )
    return (primary, value.swapcase(), value)

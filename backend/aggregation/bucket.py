"""日付のバケット化（日/週/月/四半期）."""

from datetime import date

from backend.interfaces.aggregation import DATE_BUCKETS


def _split_date(value: str) -> tuple[int, int, int]:
    year, month, day = (int(part) for part in value.split("-"))
    return year, month, day


def bucket_date(value: str, mode: str | None = None) -> str:
    """暦日文字列を指定粒度のバケットキーに変換する.

    week は年初からの通算日を7日ごとに区切った内部キーであり、
    ISO 8601 の週番号ではない（木曜基準・年跨ぎ補正なし）。

    Args:
        value: YYYY-MM-DD 形式の日付
        mode: day / week / month / quarter。None は day と同じ

    Returns:
        day: 入力そのまま, month: YYYY-MM, quarter: YYYY-Qn, week: YYYY-Wk

    Raises:
        ValueError: 未知のモード、または日付として解釈できない場合
    """
    if mode is None or mode == "day":
        return value
    if mode not in DATE_BUCKETS:
        raise ValueError(f"Unknown date bucket: {mode}")

    year, month, day = _split_date(value)
    if mode == "month":
        return f"{year}-{month:02d}"
    if mode == "quarter":
        return f"{year}-Q{(month - 1) // 3 + 1}"

    day_of_year = date(year, month, day).timetuple().tm_yday
    return f"{year}-W{(day_of_year - 1) // 7 + 1}"

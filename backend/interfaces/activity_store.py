"""Store層の抽象インターフェース（レコード供給元）。

Store層は工数記録の永続化と全件取得を担う。
集計エンジンは要求時に全件を受け取るだけで、差分取得の契約は持たない。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Activity:
    """工数記録（ドメインモデル）。

    date は ISO 形式の暦日文字列（YYYY-MM-DD）。
    集計エンジンに渡った後は変更されない。
    """

    project: str
    employee: str
    date: str
    hours: float


class ActivityStoreInterface(ABC):
    """Store層の抽象インターフェース。

    全ての層はこのインターフェースを介して工数記録にアクセスする。
    SQLiteを直接触るコードが他の層に漏洩してはならない。
    """

    @abstractmethod
    def add_activities(self, activities: list[Activity]) -> int:
        """工数記録をバッチ追加する。

        Returns:
            追加されたレコード数
        """
        ...

    @abstractmethod
    def list_activities(self) -> list[Activity]:
        """現在の全工数記録を登録順で取得する。"""
        ...

    @abstractmethod
    def delete_all_data(self) -> None:
        """全データを削除する（デバッグ用）。"""
        ...

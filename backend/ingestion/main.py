"""FastAPIアプリケーション。

工数記録の取り込みAPI + 一覧API + 集計APIを統合。
"""

import io
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Annotated

import pandas as pd
from fastapi import Depends, FastAPI, HTTPException, Query, UploadFile
from pydantic import BaseModel, Field, field_validator

from backend.aggregation.engine import AggregationEngine
from backend.aggregation.flat import distinct_values
from backend.aggregation.spec import parse_dimensions_param, parse_group_spec
from backend.config import configure_logging
from backend.dependencies import get_activity_store, get_aggregation_engine
from backend.interfaces.activity_store import Activity, ActivityStoreInterface
from backend.interfaces.aggregation import (
    AGGREGATION_MODES,
    FlatRow,
    InvalidGroupSpecError,
)

logger = logging.getLogger(__name__)

StoreDep = Annotated[ActivityStoreInterface, Depends(get_activity_store)]
EngineDep = Annotated[AggregationEngine, Depends(get_aggregation_engine)]

CSV_COLUMNS = ("project", "employee", "date", "hours")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    title="工数管理システム API",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------- Pydantic モデル ----------


class ActivityItem(BaseModel):
    """取り込みリクエスト内の1レコード。"""

    project: str = Field(min_length=1)
    employee: str = Field(min_length=1)
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    hours: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("date", mode="after")
    @classmethod
    def check_calendar_date(cls, v: str) -> str:
        # 2024-02-30 のような存在しない日付を弾く
        datetime.strptime(v, "%Y-%m-%d")
        return v

    def to_activity(self) -> Activity:
        return Activity(
            project=self.project,
            employee=self.employee,
            date=self.date,
            hours=self.hours,
        )


class ActivitiesBatchRequest(BaseModel):
    """POST /api/activities/batch のリクエストボディ。"""

    activities: list[ActivityItem]


class ActivityResponse(BaseModel):
    """1件の工数記録レスポンス。"""

    project: str
    employee: str
    date: str
    hours: float


class FlatRowResponse(BaseModel):
    """集計結果の1行。"""

    kind: str
    depth: int
    path: list[str]
    label: str
    hours: float


# ---------- ヘルパー ----------


def _to_activity_response(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        project=activity.project,
        employee=activity.employee,
        date=activity.date,
        hours=activity.hours,
    )


def _to_flat_row_response(row: FlatRow) -> FlatRowResponse:
    return FlatRowResponse(
        kind=row.kind,
        depth=row.depth,
        path=list(row.path),
        label=row.label,
        hours=row.hours,
    )


def _csv_cell(row: pd.Series, column: str) -> str | None:
    """CSVのセルを前後空白を除いた文字列で返す。欠損・空欄は None。"""
    value = row[column]
    if pd.isna(value) or not str(value).strip():
        return None
    return str(value).strip()


# ---------- エンドポイント ----------


@app.get("/api/health")
async def health_check():
    """ヘルスチェック。"""
    return {"status": "ok"}


@app.get("/api/activities")
async def get_activities(store: StoreDep):
    """全工数記録を登録順で取得する。"""
    return {
        "activities": [
            _to_activity_response(a) for a in store.list_activities()
        ]
    }


@app.get("/api/activities/projects")
async def get_projects(store: StoreDep):
    """登録済みのプロジェクト名を重複なしで自然順に返す（入力フォームの選択肢）。"""
    return {"projects": distinct_values(store.list_activities(), "project")}


@app.get("/api/activities/employees")
async def get_employees(store: StoreDep):
    """登録済みの社員名を重複なしで自然順に返す。"""
    return {"employees": distinct_values(store.list_activities(), "employee")}


@app.post("/api/activities", status_code=201)
async def post_activity(body: ActivityItem, store: StoreDep):
    """工数記録を1件登録する。"""
    activity = body.to_activity()
    store.add_activities([activity])
    return _to_activity_response(activity)


@app.post("/api/activities/batch")
async def post_activities_batch(body: ActivitiesBatchRequest, store: StoreDep):
    """工数記録をバッチ登録する。"""
    inserted = store.add_activities([item.to_activity() for item in body.activities])
    return {"inserted": inserted}


@app.post("/api/activities/csv")
async def post_activities_csv(file: UploadFile, store: StoreDep):
    """CSVファイルから工数記録をバッチ登録する（デバッグ用）。

    不正な行（欠損・負の工数・存在しない日付）はスキップして件数を返す。
    """
    content = await file.read()
    try:
        # "007" のようなプロジェクト名を数値に変換させない。
        # Excel が付ける BOM はヘッダー名に混ざらないよう読み捨てる
        df = pd.read_csv(io.BytesIO(content), dtype=str, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as exc:
        raise HTTPException(status_code=400, detail="CSV file is empty") from exc
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=400, detail="CSV file must be UTF-8 encoded"
        ) from exc

    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"{', '.join(missing)} columns are required",
        )

    activities: list[Activity] = []
    skipped = 0
    for _, row in df.iterrows():
        cells = {c: _csv_cell(row, c) for c in CSV_COLUMNS}
        if any(v is None for v in cells.values()):
            skipped += 1
            continue
        try:
            item = ActivityItem(
                project=cells["project"],
                employee=cells["employee"],
                date=cells["date"],
                hours=float(cells["hours"]),
            )
        except ValueError:
            skipped += 1
            continue
        activities.append(item.to_activity())

    inserted = store.add_activities(activities)
    if skipped:
        logger.warning("skipped %d invalid CSV rows", skipped)
    return {"inserted": inserted, "skipped": skipped}


@app.get("/api/activities/aggregate")
async def aggregate_activities(
    engine: EngineDep,
    keys: str | None = None,
    date_bucket: Annotated[str | None, Query(alias="dateBucket")] = None,
    mode: str = "hierarchical",
):
    """工数記録をグルーピングして集計する。

    例: /api/activities/aggregate?keys=project,employee,date&dateBucket=month
    """
    try:
        spec = parse_group_spec(parse_dimensions_param(keys), date_bucket)
    except InvalidGroupSpecError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if mode not in AGGREGATION_MODES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown aggregation mode: {mode}",
        )

    rows = engine.report(spec, mode=mode)
    return {"rows": [_to_flat_row_response(r) for r in rows]}


# ---------- デバッグ用エンドポイント ----------


@app.delete("/api/debug/data", tags=["debug"])
async def delete_all_data(store: StoreDep):
    """【デバッグ用】工数記録を全削除する。"""
    store.delete_all_data()
    return {"deleted": "data"}

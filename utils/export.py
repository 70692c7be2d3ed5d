# utils/export.py — 채점 결과 내보내기 (클립보드 텍스트 / JSON / CSV 요약행)
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Optional
import json

import pandas as pd

from scoring.bat import IncompleteInput, ScoreResult

JSON_FILE_NAME = "bat_result.json"


def require_result(result: Optional[ScoreResult], n_items: int) -> ScoreResult:
    """내보내기 전제조건: 먼저 채점된 결과가 있어야 함."""
    if result is None:
        raise IncompleteInput(n_items)
    return result


def result_to_text(result: ScoreResult) -> str:
    lines = [f"BAT — Total mean: {result.total:.2f}"]
    for s in result.subscales:
        lines.append(f"{s.subscale.short_label}: {s.mean:.2f}")
    return "\n".join(lines)


def result_to_payload(result: ScoreResult, timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    ts = timestamp or datetime.now()
    return {
        "date": ts.isoformat(timespec="seconds"),
        "survey": result.catalog_key,
        "total": result.total,
        "total_band": result.total_band.label,
        "sub": {
            s.subscale.value: {
                "values": list(s.values),
                "mean": s.mean,
                "band": s.band.label,
            }
            for s in result.subscales
        },
    }


def result_to_json(result: ScoreResult, timestamp: Optional[datetime] = None) -> str:
    return json.dumps(result_to_payload(result, timestamp), ensure_ascii=False, indent=2)


def result_frame(result: ScoreResult) -> pd.DataFrame:
    """결과 표/막대그래프용. 첫 행은 total."""
    rows = [{"scale": "total", "label": "Total", "mean": result.total, "band": result.total_band.label}]
    for s in result.subscales:
        rows.append({
            "scale": s.subscale.value,
            "label": s.subscale.label,
            "mean": s.mean,
            "band": s.band.label,
        })
    return pd.DataFrame(rows, columns=["scale", "label", "mean", "band"])


def build_row(ts: str, pid: str, result: ScoreResult) -> Dict[str, Any]:
    """
    CSV 요약 1행: 메타 + total + 하위척도 평균/등급 + 문항별 응답(q1..qN).
    """
    row: Dict[str, Any] = {
        "timestamp": ts,
        "participant_id": pid,
        "survey": result.catalog_key,
        "total": result.total,
        "total_band": result.total_band.label,
    }
    for s in result.subscales:
        row[f"{s.subscale.value}_mean"] = s.mean
        row[f"{s.subscale.value}_band"] = s.band.label
    for i, v in enumerate(result.responses, start=1):
        row[f"q{i}"] = v
    return row


def row_to_csv_bytes(row: Dict[str, Any]) -> bytes:
    df = pd.DataFrame([row])
    return df.to_csv(index=False).encode("utf-8-sig")

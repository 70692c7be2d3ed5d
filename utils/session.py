# utils/session.py — 응답/결과 세션 상태 관리
# st.session_state 와 동일한 MutableMapping 인터페이스만 사용 (테스트에서는 dict)
from __future__ import annotations
from typing import Any, List, MutableMapping, Optional

from scoring.bat import Catalog, ScoreResult

RESULT_KEY = "result"
SAVED_KEY = "saved"


def init_state(state: MutableMapping[str, Any], variant: str) -> None:
    defaults = dict(
        variant=variant,
        participant_id="",
        result=None,
        saved="",
    )
    for k, v in defaults.items():
        if k not in state:
            state[k] = v


def answer_key(survey_key: str, no: int) -> str:
    return f"q_{survey_key}_{no}"


def collect_responses(state: MutableMapping[str, Any], catalog: Catalog) -> List[int]:
    """카탈로그 순서의 응답 벡터. 미응답은 0."""
    vals = []
    for it in catalog.items:
        v = state.get(answer_key(catalog.key, it.no))
        vals.append(int(v) if v is not None else 0)
    return vals


def get_result(state: MutableMapping[str, Any]) -> Optional[ScoreResult]:
    return state.get(RESULT_KEY)


def store_result(state: MutableMapping[str, Any], result: ScoreResult) -> None:
    state[RESULT_KEY] = result
    state[SAVED_KEY] = ""


def invalidate_result(state: MutableMapping[str, Any]) -> None:
    """응답이 바뀌면 이전 결과는 내보내기 대상이 아님."""
    state[RESULT_KEY] = None
    state[SAVED_KEY] = ""


def reset(state: MutableMapping[str, Any], catalog: Catalog) -> None:
    for it in catalog.items:
        state.pop(answer_key(catalog.key, it.no), None)
    state[RESULT_KEY] = None
    state[SAVED_KEY] = ""

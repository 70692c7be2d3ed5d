# app.py — BAT Self-Check (Burnout Assessment Tool)
# - Sidebar: 문항 버전(BAT-23 / BAT-33), 연구 ID(선택)
# - 1~5 Likert 응답, 전 문항 응답 시에만 채점 (부분 채점 없음)
# - 전체/하위척도 평균 + Green / Orange / Red 분류
# - 클립보드 복사, JSON·CSV 다운로드 (서버 저장 없음)

import os, sys
from datetime import datetime

import streamlit as st

# ─────────────────────────────────────────────────────────────
# Project path
# ─────────────────────────────────────────────────────────────
ROOT = os.path.dirname(os.path.abspath(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# ─────────────────────────────────────────────────────────────
# Internal modules
# ─────────────────────────────────────────────────────────────
from scoring.bat import BATScorer, Band, IncompleteInput, ScoreResult, Subscale
from utils.registry import DEFAULT_SURVEY, list_surveys, load_catalog
from utils.export import (
    JSON_FILE_NAME, build_row, require_result, result_frame,
    result_to_json, result_to_text, row_to_csv_bytes,
)
from utils.clipboard import copy_to_clipboard
from utils import session

SCORER = BATScorer()

BAND_COLORS = {
    Band.GREEN: "#2e7d32",
    Band.ORANGE: "#f9a825",
    Band.RED: "#c62828",
}

st.set_page_config(
    page_title="BAT — Burnout Assessment Tool",
    layout="centered",
    initial_sidebar_state="collapsed"
)

session.init_state(st.session_state, DEFAULT_SURVEY)

# ─────────────────────────────────────────────────────────────
# Sidebar — 버전 선택
# ─────────────────────────────────────────────────────────────
metas = list_surveys()
key_to_title = {m["key"]: m["title"] for m in metas}
all_keys = [m["key"] for m in metas]
if not all_keys:
    st.error("No questionnaire catalog found.")
    st.stop()
if st.session_state.variant not in all_keys:
    st.session_state.variant = all_keys[0]

st.sidebar.selectbox(
    "Questionnaire version",
    options=all_keys,
    format_func=lambda k: key_to_title.get(k, k),
    key="variant",
    on_change=session.invalidate_result,
    args=(st.session_state,),
)
st.sidebar.text_input("Participant ID (optional)", key="participant_id")

catalog = load_catalog(st.session_state.variant)


def _band_html(band: Band) -> str:
    return f'<strong style="color:{BAND_COLORS[band]}">{band.label}</strong>'


def _mark_saved():
    st.session_state[session.SAVED_KEY] = "Saved locally."


def render_result(result: ScoreResult) -> None:
    st.markdown(
        f"**Total (mean):** {result.total:.2f} — {_band_html(result.total_band)}",
        unsafe_allow_html=True,
    )

    df = result_frame(result)
    subs = df[df["scale"] != "total"]
    st.bar_chart(subs.set_index("label")["mean"], y_label="mean (1–5)")

    st.markdown("**Subscales:**")
    for s in result.subscales:
        st.markdown(
            f"- {s.subscale.label}: {s.mean:.2f} — {_band_html(s.band)}",
            unsafe_allow_html=True,
        )
    if any(s.subscale == Subscale.SECONDARY for s in result.subscales):
        st.caption("Secondary symptoms have no published cutoff of their own; the total cutoff is applied.")


# ─────────────────────────────────────────────────────────────
# 문항
# ─────────────────────────────────────────────────────────────
st.title("🔥 Burnout Assessment Tool")
st.caption(catalog.title)

choice_labels = {score: label for label, score in catalog.choices}
options = list(choice_labels) or [1, 2, 3, 4, 5]
st.write("How often does each statement apply to you? " +
         " · ".join(f"{v} = {choice_labels.get(v, v)}" for v in options))

for it in catalog.items:
    st.radio(
        f"**{it.no}.** {it.text}",
        options=options,
        index=None,
        horizontal=True,
        key=session.answer_key(catalog.key, it.no),
        on_change=session.invalidate_result,
        args=(st.session_state,),
    )

st.divider()
c1, c2, c3 = st.columns(3)
calc = c1.button("Calculate", type="primary")
c2.button("Reset", on_click=session.reset, args=(st.session_state, catalog))
copy = c3.button("Copy results")

# ─────────────────────────────────────────────────────────────
# 채점
# ─────────────────────────────────────────────────────────────
if calc:
    responses = session.collect_responses(st.session_state, catalog)
    try:
        scored = SCORER.score(responses, catalog)
    except IncompleteInput as e:
        st.error(f"{e} Unanswered: {', '.join(str(n) for n in e.missing)}")
    else:
        session.store_result(st.session_state, scored)

result = session.get_result(st.session_state)
if result is not None:
    render_result(result)

# ─────────────────────────────────────────────────────────────
# 내보내기
# ─────────────────────────────────────────────────────────────
if copy:
    try:
        res = require_result(result, catalog.n_items)
    except IncompleteInput:
        st.warning("Please calculate the result first.")
    else:
        text = result_to_text(res)
        copy_to_clipboard(text)
        st.code(text, language=None)

now = datetime.now()
ts = now.isoformat(timespec="seconds")
d1, d2 = st.columns(2)
d1.download_button(
    "💾 Save JSON",
    data=result_to_json(result, now) if result is not None else "",
    file_name=JSON_FILE_NAME,
    mime="application/json",
    disabled=result is None,
    on_click=_mark_saved,
)
d2.download_button(
    "📥 Summary CSV",
    data=row_to_csv_bytes(build_row(ts, st.session_state.participant_id.strip(), result)) if result is not None else b"",
    file_name=f"{ts.replace(':', '-')}_bat_summary.csv",
    mime="text/csv",
    disabled=result is None,
    on_click=_mark_saved,
)
if result is None:
    st.caption("Answer all items and press Calculate to enable export.")
if st.session_state[session.SAVED_KEY]:
    st.caption(st.session_state[session.SAVED_KEY])

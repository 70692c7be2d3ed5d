# utils/clipboard.py — 결과 텍스트를 브라우저 클립보드로 복사
# - 클립보드는 브라우저 쪽 자원이라 components.html 안의 JS로 기록
# - 권한 거부/API 미지원(ClipboardUnavailable)은 같은 블록 안에 메시지로 표시
from __future__ import annotations
import json

import streamlit.components.v1 as components

COPIED_MESSAGE = "Copied to clipboard."
CLIPBOARD_UNAVAILABLE_MESSAGE = "Copy failed."


def _js_string(text: str) -> str:
    # </script> 조기 종료 방지
    return json.dumps(text).replace("</", "<\\/")


def clipboard_html(text: str) -> str:
    payload = _js_string(text)
    ok = _js_string(COPIED_MESSAGE)
    fail = _js_string(CLIPBOARD_UNAVAILABLE_MESSAGE)
    return f"""
    <div id="bat-copy-status" style="font-family:sans-serif;font-size:14px;"></div>
    <script>
      (function() {{
        const status = document.getElementById("bat-copy-status");
        const report = (msg, color) => {{ status.innerText = msg; status.style.color = color; }};
        if (!navigator.clipboard || !navigator.clipboard.writeText) {{
          report({fail}, "#b33");
          return;
        }}
        navigator.clipboard.writeText({payload})
          .then(() => report({ok}, "#2e7d32"))
          .catch(() => report({fail}, "#b33"));
      }})();
    </script>
    """


def copy_to_clipboard(text: str, height: int = 30) -> None:
    components.html(clipboard_html(text), height=height)

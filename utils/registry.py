# ┏━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┓
# ┃ utils/registry.py — BAT 문항 카탈로그 목록/로드 (JSON 기본, YAML 지원)  ┃
# ┗━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┛
from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, List, Optional
import json
import logging

import streamlit as st
import yaml

from scoring.bat import Catalog

logger = logging.getLogger(__name__)

SURVEYS_DIR = Path(__file__).resolve().parent.parent / "surveys"
DEFAULT_SURVEY = "BAT23"


def _warn(msg: str) -> None:
    logger.warning(msg)
    st.warning(msg)


def _error(msg: str) -> None:
    logger.error(msg)
    st.error(msg)


def _load_json(p: Path) -> Dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def _load_yaml(p: Path) -> Dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _infer_meta(doc: Dict[str, Any], fallback_key: str) -> Dict[str, Any]:
    return {
        "key": doc.get("key", fallback_key),
        "title": doc.get("title", fallback_key),
        "input_type": doc.get("input_type", "radio"),
        "domains": doc.get("domains", {}),
        "n_items": len(doc.get("items") or []),
    }


def list_surveys(surveys_dir: Optional[Path] = None) -> List[Dict[str, Any]]:
    """
    surveys/ 폴더의 카탈로그 메타를 나열.
    - JSON(.json) 먼저, 이어서 YAML(.yaml/.yml)
    - 읽기 실패 파일은 경고 후 건너뜀
    """
    base = surveys_dir or SURVEYS_DIR
    if not base.exists():
        _warn(f"{base} 폴더가 없습니다. 설문 파일을 추가하세요.")
        return []

    files = (
        sorted(base.glob("*.json"))
        + sorted(base.glob("*.yaml"))
        + sorted(base.glob("*.yml"))
    )
    metas: List[Dict[str, Any]] = []
    for p in files:
        try:
            doc = _load_json(p) if p.suffix.lower() == ".json" else _load_yaml(p)
            metas.append(_infer_meta(doc or {}, p.stem))
        except (OSError, ValueError, yaml.YAMLError) as e:
            _warn(f"설문 메타 읽기 실패: {p.name} → {e}")

    if not metas:
        _warn(f"{base.name}/ 폴더에 읽을 수 있는 설문 파일(.json 또는 .yaml/.yml)이 없습니다.")
    return metas


def load_survey(key: str, surveys_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    key에 해당하는 설문 원문 로드.
    우선순위: surveys/{key}.json → {key}.yaml → {key}.yml
    """
    base = surveys_dir or SURVEYS_DIR
    candidates = [
        base / f"{key}.json",
        base / f"{key}.yaml",
        base / f"{key}.yml",
    ]
    for p in candidates:
        if p.exists():
            try:
                if p.suffix.lower() == ".json":
                    return _load_json(p)
                return _load_yaml(p)
            except (OSError, ValueError, yaml.YAMLError) as e:
                _error(f"설문 로드 실패: {p.name} → {e}")
                raise

    _error(f"설문 파일을 찾지 못했습니다: {key} ({base.name}/{key}.json|yaml|yml)")
    raise FileNotFoundError(f"No survey file for key={key}")


def load_catalog(key: str, surveys_dir: Optional[Path] = None) -> Catalog:
    doc = load_survey(key, surveys_dir)
    return Catalog.from_document(doc or {}, fallback_key=key)

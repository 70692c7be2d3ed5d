#!/usr/bin/env python
# coding: utf-8

# scoring/bat.py — Burnout Assessment Tool (BAT) 채점
# - 문항 응답(1~5)을 하위척도별 평균/전체 평균으로 집계
# - 매뉴얼 절단점(cutoff)으로 Green / Orange / Red 분류
# - 미응답(0/None)이 하나라도 있으면 채점하지 않음 (부분 채점 없음)
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

SCORE_MIN = 1
SCORE_MAX = 5


class Subscale(str, Enum):
    EXHAUSTION = "exhaustion"
    MENTAL_DISTANCE = "mentalDistance"
    COGNITIVE = "cognitive"
    EMOTIONAL = "emotional"
    SECONDARY = "secondary"

    @property
    def label(self) -> str:
        return _SUBSCALE_LABELS[self]

    @property
    def short_label(self) -> str:
        return _SUBSCALE_SHORT_LABELS[self]


_SUBSCALE_LABELS = {
    Subscale.EXHAUSTION: "Exhaustion",
    Subscale.MENTAL_DISTANCE: "Mental distance",
    Subscale.COGNITIVE: "Cognitive impairment",
    Subscale.EMOTIONAL: "Emotional impairment",
    Subscale.SECONDARY: "Secondary symptoms",
}

_SUBSCALE_SHORT_LABELS = {
    Subscale.EXHAUSTION: "Exhaustion",
    Subscale.MENTAL_DISTANCE: "Mental distance",
    Subscale.COGNITIVE: "Cognitive",
    Subscale.EMOTIONAL: "Emotional",
    Subscale.SECONDARY: "Secondary",
}


class Band(IntEnum):
    """위험 등급. 정수값 순서가 곧 심각도 순서 (Green < Orange < Red)."""
    GREEN = 1
    ORANGE = 2
    RED = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Cutoff:
    green_max: float
    orange_max: float

    def __post_init__(self) -> None:
        if self.green_max > self.orange_max:
            raise ValueError(
                f"green_max({self.green_max}) must not exceed orange_max({self.orange_max})"
            )


# ─────────────────────────────────────────────────────────────
# 절단점 (BAT-23 매뉴얼, total-core + 하위척도)
# ─────────────────────────────────────────────────────────────
TOTAL_CUTOFF = Cutoff(green_max=2.58, orange_max=3.01)

CUTOFFS: Mapping[Subscale, Cutoff] = MappingProxyType({
    Subscale.EXHAUSTION: Cutoff(green_max=3.05, orange_max=3.30),
    Subscale.MENTAL_DISTANCE: Cutoff(green_max=2.49, orange_max=3.09),
    Subscale.EMOTIONAL: Cutoff(green_max=2.09, orange_max=2.89),
    Subscale.COGNITIVE: Cutoff(green_max=2.69, orange_max=3.09),
})


def cutoff_for(subscale: Subscale) -> Cutoff:
    """
    하위척도 절단점. 표에 없는 척도(secondary)는 total 절단점을 사용.
    """
    cut = CUTOFFS.get(subscale)
    if cut is None:
        logger.debug("no cutoff for %s, using total cutoff", subscale.value)
        return TOTAL_CUTOFF
    return cut


class IncompleteInput(ValueError):
    """모든 문항에 응답하지 않은 상태에서 채점/내보내기를 시도함."""

    def __init__(self, n_items: int, missing: Optional[List[int]] = None):
        self.n_items = n_items
        self.missing = list(missing or [])
        super().__init__(f"Please answer all {n_items} items.")


# ─────────────────────────────────────────────────────────────
# 문항 카탈로그
# ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Item:
    no: int
    text: str
    subscale: Subscale


@dataclass(frozen=True)
class Catalog:
    key: str
    title: str
    items: Tuple[Item, ...]
    choices: Tuple[Tuple[str, int], ...] = ()

    @classmethod
    def from_document(cls, doc: Dict[str, Any], fallback_key: str = "") -> "Catalog":
        """
        설문 원문(surveys/*.json)에서 카탈로그 생성.
        - items[].domain 은 Subscale 값이어야 함
        - 같은 하위척도 문항은 연속으로 배치되어야 함 (연속 구간 슬라이스)
        """
        key = doc.get("key", fallback_key)
        raw_items = doc.get("items") or []
        if not raw_items:
            raise ValueError(f"survey {key!r} has no items")

        items = []
        for idx, it in enumerate(raw_items, start=1):
            domain = it.get("domain", "")
            try:
                subscale = Subscale(domain)
            except ValueError:
                raise ValueError(f"survey {key!r} item {idx}: unknown subscale {domain!r}") from None
            items.append(Item(no=idx, text=it.get("text", ""), subscale=subscale))

        seen = []
        for it in items:
            if not seen or seen[-1] != it.subscale:
                if it.subscale in seen:
                    raise ValueError(
                        f"survey {key!r}: items of {it.subscale.value!r} are not contiguous"
                    )
                seen.append(it.subscale)

        choices = tuple((str(label), int(score)) for label, score in doc.get("choices", []))
        return cls(key=key, title=doc.get("title", key), items=tuple(items), choices=choices)

    @property
    def n_items(self) -> int:
        return len(self.items)

    @property
    def subscales(self) -> Tuple[Subscale, ...]:
        out: List[Subscale] = []
        for it in self.items:
            if it.subscale not in out:
                out.append(it.subscale)
        return tuple(out)

    def count(self, subscale: Subscale) -> int:
        return sum(1 for it in self.items if it.subscale == subscale)

    def slices(self) -> List[Tuple[Subscale, slice]]:
        """선언 순서대로 (하위척도, 응답 벡터 구간)."""
        out = []
        pos = 0
        for sub in self.subscales:
            n = self.count(sub)
            out.append((sub, slice(pos, pos + n)))
            pos += n
        return out


# ─────────────────────────────────────────────────────────────
# 결과
# ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class SubscaleScore:
    subscale: Subscale
    values: Tuple[int, ...]
    mean: float
    band: Band


@dataclass(frozen=True)
class ScoreResult:
    catalog_key: str
    responses: Tuple[int, ...]
    total: float
    total_band: Band
    subscales: Tuple[SubscaleScore, ...]

    def get(self, subscale: Subscale) -> SubscaleScore:
        for s in self.subscales:
            if s.subscale == subscale:
                return s
        raise KeyError(subscale)

    @property
    def means(self) -> Dict[Subscale, float]:
        return {s.subscale: s.mean for s in self.subscales}


# ─────────────────────────────────────────────────────────────
# 계산
# ─────────────────────────────────────────────────────────────
def round2(value: float) -> float:
    """소수 셋째 자리에서 반올림 (half away from zero)."""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def compute_mean(values: Sequence[float]) -> float:
    if not values:
        raise ValueError("mean of empty sequence")
    return sum(values) / len(values)


def compute_subscale_means(responses: Sequence[int], catalog: Catalog) -> Dict[Subscale, float]:
    return {
        sub: round2(compute_mean(responses[sl]))
        for sub, sl in catalog.slices()
    }


def compute_overall_mean(responses: Sequence[int]) -> float:
    return round2(compute_mean(responses))


def classify(value: float, cutoff: Cutoff) -> Band:
    if value <= cutoff.green_max:
        return Band.GREEN
    if value <= cutoff.orange_max:
        return Band.ORANGE
    return Band.RED


def _is_valid_answer(v: Any) -> bool:
    # bool 은 int 하위형이지만 응답값이 아님
    return isinstance(v, int) and not isinstance(v, bool) and SCORE_MIN <= v <= SCORE_MAX


def validate_complete(responses: Sequence[Any]) -> bool:
    return all(_is_valid_answer(v) for v in responses)


def missing_items(responses: Sequence[Any]) -> List[int]:
    """미응답/범위 밖 문항 번호 (1-based)."""
    return [i for i, v in enumerate(responses, start=1) if not _is_valid_answer(v)]


def score_responses(responses: Sequence[Any], catalog: Catalog) -> ScoreResult:
    """
    응답 벡터 채점. 길이가 카탈로그와 다르거나 미응답이 있으면 IncompleteInput.
    """
    vals = list(responses)
    if len(vals) != catalog.n_items or not validate_complete(vals):
        missing = missing_items(vals) + list(range(len(vals) + 1, catalog.n_items + 1))
        raise IncompleteInput(catalog.n_items, missing)

    means = compute_subscale_means(vals, catalog)
    subs = tuple(
        SubscaleScore(
            subscale=sub,
            values=tuple(vals[sl]),
            mean=means[sub],
            band=classify(means[sub], cutoff_for(sub)),
        )
        for sub, sl in catalog.slices()
    )
    total = compute_overall_mean(vals)
    logger.info("scored %s: total=%.2f", catalog.key, total)
    return ScoreResult(
        catalog_key=catalog.key,
        responses=tuple(vals),
        total=total,
        total_band=classify(total, TOTAL_CUTOFF),
        subscales=subs,
    )


class BATScorer:
    def score(self, responses: Sequence[Any], catalog: Catalog) -> ScoreResult:
        return score_responses(responses, catalog)

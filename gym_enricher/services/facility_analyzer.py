"""Keyword-based amenity detection from place descriptions."""
import re
from typing import Iterable, Optional

from ..models import AmenityFlags

PT_KEYWORDS = [
    "pt", "퍼스널", "트레이닝", "personal", "training", "1:1", "원투원",
    "개인", "트레이너", "trainer",
]

GX_KEYWORDS = [
    "gx", "그룹", "group", "에어로빅", "aerobic", "요가", "yoga", "필라테스",
    "pilates", "줌바", "zumba", "스피닝", "spinning", "댄스", "dance",
    "복싱", "boxing", "킥복싱", "kickboxing", "태보", "taebo",
    "바디컴뱃", "bodycombat", "바디펌프", "bodypump",
]

GROUP_PT_KEYWORDS = [
    "그룹pt", "group pt", "그룹 퍼스널", "소그룹", "small group",
    "2:1", "3:1", "4:1", "투투원",
]

PARKING_KEYWORDS = ["주차", "parking", "주차장", "valet", "발렛"]

SHOWER_KEYWORDS = [
    "샤워", "shower", "탈의실", "locker room", "라커룸", "locker", "수건", "towel",
]

HOURS_24_KEYWORDS = [
    "24시간", "24시", "24h", "24 hour", "24hr", "24/7", "연중무휴",
]

TIME_PATTERNS = [
    re.compile(r"\d{1,2}:\d{2}\s*[~-]\s*\d{1,2}:\d{2}"),
    re.compile(r"\d{1,2}시\s*[~-]\s*\d{1,2}시"),
    re.compile(r"오전\s*\d{1,2}:\d{2}\s*[~-]\s*오후\s*\d{1,2}:\d{2}"),
]

UNKNOWN_HOURS = "운영시간 정보 없음"


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def analyze_facilities(
    name: str,
    address: str = "",
    phone: Optional[str] = None,
    extra: Optional[Iterable[str]] = None,
) -> AmenityFlags:
    """Infer amenity flags and opening hours from free text.

    Args:
        name: Place name
        address: Place address
        phone: Phone number, if any
        extra: Additional descriptive strings (categories, place types)

    Returns:
        Detected amenity flags
    """
    text = " ".join([name, address, phone or "", *(extra or [])]).lower()

    open_hour = UNKNOWN_HOURS
    for pattern in TIME_PATTERNS:
        match = pattern.search(text)
        if match:
            open_hour = match.group(0)
            break

    return AmenityFlags(
        has_pt=_contains_any(text, PT_KEYWORDS),
        has_gx=_contains_any(text, GX_KEYWORDS),
        has_group_pt=_contains_any(text, GROUP_PT_KEYWORDS),
        has_parking=_contains_any(text, PARKING_KEYWORDS),
        has_shower=_contains_any(text, SHOWER_KEYWORDS),
        is_24_hours=_contains_any(text, HOURS_24_KEYWORDS),
        open_hour=open_hour,
    )

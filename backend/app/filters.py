# backend/app/filters.py
"""
Filtering and summary counts for submissions and alerts.
All predicates are optional and AND-combined; "all" means no filter.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd
from pydantic import BaseModel

from .errors import ValidationError
from .schemas import Alert, AlertStatus, Classification, RiskLevel, Submission

ALL = "all"

# map view sends short names
CLASSIFICATION_ALIASES = {
    "clean": Classification.CLEAN,
    "testing": Classification.NEEDS_TESTING,
    "needs testing": Classification.NEEDS_TESTING,
    "needs-testing": Classification.NEEDS_TESTING,
    "unsafe": Classification.UNSAFE,
}


class SubmissionFilters(BaseModel):
    district: Optional[str] = None
    classification: Optional[Classification] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    bbox: Optional[Tuple[float, float, float, float]] = None  # min_lng, min_lat, max_lng, max_lat
    search: Optional[str] = None
    recent_days: Optional[int] = None


class AlertFilters(BaseModel):
    search: Optional[str] = None
    status: Optional[AlertStatus] = None
    risk: Optional[RiskLevel] = None
    district: Optional[str] = None


# ---------- Parsing helpers ----------
def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip() or str(value).strip().lower() == ALL


def parse_bbox(raw: Optional[str]) -> Optional[Tuple[float, float, float, float]]:
    """
    Parses "minLng,minLat,maxLng,maxLat".
    """
    if _blank(raw):
        return None
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise ValidationError("bbox must be minLng,minLat,maxLng,maxLat")
    try:
        min_lng, min_lat, max_lng, max_lat = (float(p) for p in parts)
    except ValueError:
        raise ValidationError(f"bbox contains a non-numeric value: {raw}")
    return min_lng, min_lat, max_lng, max_lat


def parse_classification(raw: Optional[str]) -> Optional[Classification]:
    if _blank(raw):
        return None
    value = raw.strip()
    alias = CLASSIFICATION_ALIASES.get(value.lower())
    if alias:
        return alias
    try:
        return Classification(value)
    except ValueError:
        raise ValidationError(f"Unknown classification: {raw}")


def parse_enum(enum_cls, raw: Optional[str], label: str):
    if _blank(raw):
        return None
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown {label}: {raw}")


def parse_datetime(raw: Optional[str], label: str) -> Optional[datetime]:
    if _blank(raw):
        return None
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid {label} date: {raw}")


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _contains(needle: str, *haystacks: Optional[str]) -> bool:
    n = needle.lower()
    return any(n in (h or "").lower() for h in haystacks)


# ---------- Submissions ----------
def submission_matches(s: Submission, f: SubmissionFilters, now: Optional[datetime] = None) -> bool:
    if not _blank(f.district) and s.district.lower() != f.district.strip().lower():
        return False
    if f.classification is not None and s.classification != f.classification:
        return False

    ts = _as_utc(s.timestamp)
    if f.date_from is not None and ts < _as_utc(f.date_from):
        return False
    if f.date_to is not None and ts > _as_utc(f.date_to):
        return False
    if f.recent_days is not None:
        cutoff = _as_utc(now or datetime.now(timezone.utc)) - timedelta(days=f.recent_days)
        if ts < cutoff:
            return False

    if f.bbox is not None:
        min_lng, min_lat, max_lng, max_lat = f.bbox
        lat, lng = s.coordinates
        if not (min_lat <= lat <= max_lat and min_lng <= lng <= max_lng):
            return False

    if not _blank(f.search) and not _contains(f.search.strip(), s.district, s.notes, s.submitted_by):
        return False
    return True


def filter_submissions(
    items: Iterable[Submission], filters: SubmissionFilters, now: Optional[datetime] = None
) -> List[Submission]:
    return [s for s in items if submission_matches(s, filters, now)]


def _submission_frame(items: Iterable[Submission]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"district": s.district.lower(), "classification": s.classification.value} for s in items],
        columns=["district", "classification"],
    )


def aggregate_submissions(items: Iterable[Submission]) -> Dict[str, int]:
    df = _submission_frame(items)
    counts = df["classification"].value_counts()
    return {
        "total": int(len(df)),
        "clean": int(counts.get(Classification.CLEAN.value, 0)),
        "testing": int(counts.get(Classification.NEEDS_TESTING.value, 0)),
        "unsafe": int(counts.get(Classification.UNSAFE.value, 0)),
        "districts": int(df["district"].nunique()),
    }


def district_breakdown(items: Iterable[Submission]) -> List[Dict]:
    """
    Per-district classification counts, sorted by district id.
    """
    df = _submission_frame(items)
    if df.empty:
        return []

    table = pd.crosstab(df["district"], df["classification"])
    for c in Classification:
        if c.value not in table.columns:
            table[c.value] = 0

    rows = []
    for district, row in table.sort_index().iterrows():
        rows.append({
            "district": district,
            "total": int(row.sum()),
            "clean": int(row[Classification.CLEAN.value]),
            "testing": int(row[Classification.NEEDS_TESTING.value]),
            "unsafe": int(row[Classification.UNSAFE.value]),
        })
    return rows


# ---------- Alerts ----------
def alert_matches(a: Alert, f: AlertFilters) -> bool:
    if not _blank(f.search) and not _contains(f.search.strip(), a.district, a.cause):
        return False
    if f.status is not None and a.status != f.status:
        return False
    if f.risk is not None and a.risk != f.risk:
        return False
    if not _blank(f.district) and a.district.lower() != f.district.strip().lower():
        return False
    return True


def filter_alerts(items: Iterable[Alert], filters: AlertFilters) -> List[Alert]:
    return [a for a in items if alert_matches(a, filters)]


def aggregate_alerts(items: Iterable[Alert], today: Optional[date] = None) -> Dict[str, int]:
    today = today or datetime.now(timezone.utc).date()
    df = pd.DataFrame(
        [
            {
                "district": a.district.lower(),
                "risk": a.risk.value,
                "status": a.status.value,
                "issued_on": _as_utc(a.issued_date).date().isoformat(),
            }
            for a in items
        ],
        columns=["district", "risk", "status", "issued_on"],
    )
    return {
        "total": int(len(df)),
        "active": int((df["status"] == AlertStatus.ACTIVE.value).sum()),
        "resolved": int((df["status"] == AlertStatus.RESOLVED.value).sum()),
        "high_risk": int((df["risk"] == RiskLevel.HIGH.value).sum()),
        "issued_today": int((df["issued_on"] == today.isoformat()).sum()),
        "districts": int(df["district"].nunique()),
    }

# backend/app/store.py
"""
Process-lifetime storage for submissions and alerts.
Everything lives in memory and is reset on restart.
"""

import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, List, Optional, TypeVar

from .logging_setup import logger
from .schemas import (
    Alert,
    AlertCreate,
    AlertStatus,
    Classification,
    Indicator,
    IndicatorName,
    IndicatorStatus,
    RiskLevel,
    Submission,
    SubmissionCreate,
)

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    def __init__(self, items: Optional[List[T]] = None):
        self._items: List[T] = list(items or [])
        self._lock = threading.Lock()

    def list(self) -> List[T]:
        with self._lock:
            return list(self._items)

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [item for item in self.list() if predicate(item)]

    def append(self, item: T) -> T:
        with self._lock:
            self._items.append(item)
        return item

    def prepend(self, item: T) -> T:
        with self._lock:
            self._items.insert(0, item)
        return item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class _IdClock:
    """Millisecond ids that never repeat within the process."""

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            now = time.time_ns() // 1_000_000
            self._last = max(now, self._last + 1)
            return self._last


_id_clock = _IdClock()


def _ind(name: IndicatorName, score: float, status: IndicatorStatus) -> Indicator:
    return Indicator(name=name, score=score, status=status)


def default_submissions() -> List[Submission]:
    return [
        Submission(
            id="sub_001",
            timestamp=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
            district="karachi",
            coordinates=(24.8615, 67.0099),
            classification=Classification.CLEAN,
            confidence=0.89,
            indicators=[
                _ind(IndicatorName.TURBIDITY, 0.15, IndicatorStatus.GOOD),
                _ind(IndicatorName.COLOR_CLARITY, 0.92, IndicatorStatus.GOOD),
                _ind(IndicatorName.OIL_SHEEN, 0.05, IndicatorStatus.GOOD),
                _ind(IndicatorName.DEBRIS, 0.08, IndicatorStatus.GOOD),
            ],
            submitted_by="Community Health Worker",
            notes="Clear water from municipal supply",
        ),
        Submission(
            id="sub_002",
            timestamp=datetime(2024, 1, 14, 15, 45, tzinfo=timezone.utc),
            district="hyderabad",
            coordinates=(25.3845, 68.3712),
            classification=Classification.UNSAFE,
            confidence=0.94,
            indicators=[
                _ind(IndicatorName.TURBIDITY, 0.87, IndicatorStatus.POOR),
                _ind(IndicatorName.COLOR_CLARITY, 0.23, IndicatorStatus.POOR),
                _ind(IndicatorName.OIL_SHEEN, 0.45, IndicatorStatus.MODERATE),
                _ind(IndicatorName.DEBRIS, 0.78, IndicatorStatus.POOR),
            ],
            submitted_by="Field Researcher",
            notes="Post-flood contamination visible",
        ),
    ]


def default_alerts(now: Optional[datetime] = None) -> List[Alert]:
    now = now or datetime.now(timezone.utc)
    return [
        Alert(
            id="alert-1",
            district="Karachi",
            risk=RiskLevel.HIGH,
            cause="Industrial runoff detected",
            confidence=0.92,
            issued_date=now - timedelta(days=2),
            status=AlertStatus.ACTIVE,
            message=(
                "High levels of industrial contamination detected in water supply. Avoid consumption and "
                "use alternative sources. Boil water for at least 5 minutes before use."
            ),
            ttl=48,
        ),
        Alert(
            id="alert-2",
            district="Hyderabad",
            risk=RiskLevel.MEDIUM,
            cause="Flood contamination",
            confidence=0.78,
            issued_date=now - timedelta(days=1),
            status=AlertStatus.ACTIVE,
            message=(
                "Recent flooding may have contaminated local water sources. Test water before consumption "
                "and use purification tablets if available."
            ),
            ttl=24,
        ),
        Alert(
            id="alert-3",
            district="Sukkur",
            risk=RiskLevel.LOW,
            cause="Seasonal turbidity increase",
            confidence=0.65,
            issued_date=now - timedelta(days=3),
            status=AlertStatus.RESOLVED,
            message=(
                "Temporary increase in water turbidity due to seasonal changes. Water quality has returned "
                "to normal levels."
            ),
            ttl=12,
        ),
        Alert(
            id="alert-4",
            district="Dadu",
            risk=RiskLevel.HIGH,
            cause="Bacterial contamination",
            confidence=0.88,
            issued_date=now - timedelta(days=4),
            status=AlertStatus.RESOLVED,
            message=(
                "Bacterial contamination detected in municipal water supply. Chlorination treatment has "
                "been completed and water is now safe."
            ),
            ttl=72,
        ),
    ]


# ---------- Record builders ----------
def build_submission(payload: SubmissionCreate, now: Optional[datetime] = None) -> Submission:
    geo = payload.geo
    lat = geo.lat if geo and geo.lat is not None else 0.0
    lng = geo.lng if geo and geo.lng is not None else 0.0
    return Submission(
        id=f"sub_{_id_clock.next()}",
        timestamp=payload.timestamp or now or datetime.now(timezone.utc),
        district=payload.district,
        coordinates=(lat, lng),
        classification=payload.classification,
        confidence=payload.confidence,
        indicators=payload.indicators,
        submitted_by=payload.submitted_by or "Anonymous",
        notes=payload.notes or "",
    )


def build_alert(payload: AlertCreate, now: Optional[datetime] = None) -> Alert:
    return Alert(
        id=f"alert-{_id_clock.next()}",
        district=payload.district,
        risk=payload.risk,
        cause=payload.cause,
        confidence=payload.confidence,
        issued_date=payload.issued_date or now or datetime.now(timezone.utc),
        status=payload.status,
        message=payload.message,
        ttl=payload.ttl,
        languages=payload.languages,
    )


# ---------- Process-wide stores ----------
_submissions: Optional[InMemoryRepository[Submission]] = None
_alerts: Optional[InMemoryRepository[Alert]] = None
_stores_lock = threading.Lock()


def get_submission_store() -> InMemoryRepository[Submission]:
    global _submissions
    store = _submissions
    if store is None:
        with _stores_lock:
            if _submissions is None:
                _submissions = InMemoryRepository(default_submissions())
                logger.info(f"[store] Seeded {len(_submissions)} submissions")
            store = _submissions
    return store


def get_alert_store() -> InMemoryRepository[Alert]:
    global _alerts
    store = _alerts
    if store is None:
        with _stores_lock:
            if _alerts is None:
                _alerts = InMemoryRepository(default_alerts())
                logger.info(f"[store] Seeded {len(_alerts)} alerts")
            store = _alerts
    return store


def reset_stores():
    """Drop everything back to the seed data."""
    global _submissions, _alerts
    with _stores_lock:
        _submissions = None
        _alerts = None

# backend/app/healthcheck.py
from fastapi import APIRouter
from datetime import datetime, timezone
import os
from .logging_setup import logger
from .store import get_alert_store, get_submission_store

router = APIRouter()

STARTED_AT = datetime.now(timezone.utc)

# Internal activity state (updated by the api routes)
health_state = {
    "last_analysis": None,     # ISO string or None
    "last_submission": None,   # ISO string or None
    "last_alert": None,        # ISO string or None
    "analysis_count": 0,
    "analysis_failures": 0,
}

# seconds without any analysis before the service is reported as idle
IDLE_AFTER_SEC = int(os.getenv("CLIMATEIO_HEALTH_IDLE_SEC", "3600"))


def _iso_to_dt(iso: str | None) -> datetime | None:
    if not iso:
        return None
    try:
        return datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except ValueError:
        return None


def _friendly_status(now: datetime | None = None):
    """
    Returns (status_str, details) from analysis activity.
    """
    now = now or datetime.now(timezone.utc)
    last = _iso_to_dt(health_state.get("last_analysis"))
    age = (now - last).total_seconds() if last else None
    details = {
        "uptime_sec": (now - STARTED_AT).total_seconds(),
        "last_analysis_age_sec": age,
        "analysis_count": health_state["analysis_count"],
        "analysis_failures": health_state["analysis_failures"],
    }
    if health_state["analysis_failures"] and health_state["analysis_failures"] >= health_state["analysis_count"]:
        return "degraded", details
    if age is not None and age <= IDLE_AFTER_SEC:
        return "active", details
    return "idle", details


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/health/details")
def health_details():
    """
    Live backend status for the operations dashboard.
    """
    status_str, status_details = _friendly_status()
    return {
        "status": status_str,
        "status_details": status_details,
        "started_at": STARTED_AT.isoformat(),
        "submissions_stored": len(get_submission_store()),
        "alerts_stored": len(get_alert_store()),
        "last_analysis": health_state["last_analysis"],
        "last_submission": health_state["last_submission"],
        "last_alert": health_state["last_alert"],
    }


def update_health(event: str):
    """
    Events: "analysis", "analysis_failed", "submission", "alert".
    """
    now = datetime.now(timezone.utc).isoformat()
    if event == "analysis":
        health_state["last_analysis"] = now
        health_state["analysis_count"] += 1
    elif event == "analysis_failed":
        health_state["analysis_failures"] += 1
    elif event == "submission":
        health_state["last_submission"] = now
    elif event == "alert":
        health_state["last_alert"] = now
    logger.debug(f"[healthcheck] update: {event} -> {now}")

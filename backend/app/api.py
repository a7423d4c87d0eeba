import os
from typing import List, Optional
from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse
from .assistant import assistant_reply
from .districts import DISTRICTS, is_known_district
from .errors import ProcessingError, ValidationError
from .filters import (
    AlertFilters,
    SubmissionFilters,
    aggregate_alerts,
    aggregate_submissions,
    district_breakdown,
    filter_alerts,
    filter_submissions,
    parse_bbox,
    parse_classification,
    parse_datetime,
    parse_enum,
)
from .healthcheck import update_health
from .logging_setup import logger
from .mock_analysis import generate_mock_analysis
from .report_templates import render_text_report
from .schemas import (
    Alert,
    AlertCreate,
    AlertStatus,
    AlertSummary,
    AnalysisResult,
    AssistantReply,
    AssistantRequest,
    District,
    ReportRequest,
    RiskLevel,
    Submission,
    SubmissionCreate,
    SubmissionSummary,
)
from .store import build_alert, build_submission, get_alert_store, get_submission_store

router = APIRouter(prefix="/api")

MAX_UPLOAD_BYTES = int(os.getenv("CLIMATEIO_MAX_UPLOAD_MB", "10")) * 1024 * 1024
REPORT_FILENAME = "water-analysis-report.txt"


@router.get("/districts", response_model=List[District])
def list_districts():
    return [District(**d) for d in DISTRICTS]


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(
    image: Optional[UploadFile] = File(None),
    district: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),  # free text from the upload form, logged only
):
    """
    Accepts a water photo and district, returns the mock classification.
    The result depends only on the uploaded filename.
    """
    if image is None or not image.filename or not district:
        raise ValidationError("Missing required fields")
    if image.content_type and not image.content_type.startswith("image/"):
        raise ValidationError("Please select an image file")

    if not is_known_district(district):
        logger.warning(f"[api] unknown district {district!r}, using default coordinates")

    contents = await image.read()
    if len(contents) > MAX_UPLOAD_BYTES:
        raise ValidationError(f"File size must be less than {MAX_UPLOAD_BYTES // (1024 * 1024)}MB")

    try:
        result = generate_mock_analysis(image.filename, district)
    except Exception as e:
        logger.error(f"[api] analysis failed for {image.filename}: {e}", exc_info=True)
        update_health("analysis_failed")
        raise ProcessingError("Analysis failed")

    update_health("analysis")
    logger.info(
        f"[api] analyzed {image.filename} ({len(contents)} bytes) district={district} "
        f"-> {result.classification.value} {result.confidence:.2f}"
        + (f" notes={notes[:200]!r}" if notes else "")
    )
    return result


def _submission_filters(district, classification, date_from, date_to, bbox, search, recent_days) -> SubmissionFilters:
    return SubmissionFilters(
        district=district,
        classification=parse_classification(classification),
        date_from=parse_datetime(date_from, "from"),
        date_to=parse_datetime(date_to, "to"),
        bbox=parse_bbox(bbox),
        search=search,
        recent_days=recent_days,
    )


@router.get("/submissions", response_model=List[Submission])
def list_submissions(
    district: Optional[str] = Query(None, description="District id, or 'all'"),
    classification: Optional[str] = Query(None, description="Clean / Needs Testing / Unsafe, or clean / testing / unsafe"),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    bbox: Optional[str] = Query(None, description="minLng,minLat,maxLng,maxLat"),
    search: Optional[str] = Query(None),
    recent_days: Optional[int] = Query(None, ge=0),
):
    filters = _submission_filters(district, classification, date_from, date_to, bbox, search, recent_days)
    return filter_submissions(get_submission_store().list(), filters)


@router.get("/submissions/summary", response_model=SubmissionSummary)
def submissions_summary(
    district: Optional[str] = Query(None),
    classification: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    bbox: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    recent_days: Optional[int] = Query(None, ge=0),
):
    filters = _submission_filters(district, classification, date_from, date_to, bbox, search, recent_days)
    subset = filter_submissions(get_submission_store().list(), filters)
    return SubmissionSummary(**aggregate_submissions(subset), by_district=district_breakdown(subset))


@router.post("/submissions", response_model=Submission, status_code=201)
def create_submission(payload: SubmissionCreate):
    submission = get_submission_store().append(build_submission(payload))
    update_health("submission")
    logger.info(f"[api] submission {submission.id} district={submission.district} {submission.classification.value}")
    return submission


def _alert_filters(search, status, risk, district) -> AlertFilters:
    return AlertFilters(
        search=search,
        status=parse_enum(AlertStatus, status, "status"),
        risk=parse_enum(RiskLevel, risk, "risk level"),
        district=district,
    )


@router.get("/alerts", response_model=List[Alert])
def list_alerts(
    search: Optional[str] = Query(None, description="Matches district or cause"),
    status: Optional[str] = Query(None),
    risk: Optional[str] = Query(None),
    district: Optional[str] = Query(None),
):
    return filter_alerts(get_alert_store().list(), _alert_filters(search, status, risk, district))


@router.get("/alerts/summary", response_model=AlertSummary)
def alerts_summary():
    return AlertSummary(**aggregate_alerts(get_alert_store().list()))


@router.post("/alerts", response_model=Alert, status_code=201)
def create_alert(payload: AlertCreate):
    alert = get_alert_store().prepend(build_alert(payload))
    update_health("alert")
    logger.info(f"[api] alert {alert.id} district={alert.district} risk={alert.risk.value}")
    return alert


@router.post("/assistant", response_model=AssistantReply)
def assistant(payload: AssistantRequest):
    return assistant_reply(payload.message, payload.language)


@router.post("/generate-report", response_class=PlainTextResponse)
def generate_report(payload: ReportRequest):
    try:
        body = render_text_report(payload.result, language=payload.language)
    except Exception as e:
        logger.error(f"[api] report generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate report")
    return PlainTextResponse(
        body,
        headers={"Content-Disposition": f"attachment; filename={REPORT_FILENAME}"},
    )

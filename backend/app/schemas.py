from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple


class Classification(str, Enum):
    CLEAN = "Clean"
    NEEDS_TESTING = "Needs Testing"
    UNSAFE = "Unsafe"


class IndicatorName(str, Enum):
    TURBIDITY = "turbidity"
    COLOR_CLARITY = "color_clarity"
    OIL_SHEEN = "oil_sheen"
    DEBRIS = "debris"


class IndicatorStatus(str, Enum):
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlertStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"


class Language(str, Enum):
    EN = "en"
    UR = "ur"


class CamelModel(BaseModel):
    # wire format is camelCase, python attributes stay snake_case
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Indicator(CamelModel):
    name: IndicatorName
    score: float = Field(..., ge=0.0, le=1.0)
    status: IndicatorStatus


class Geo(CamelModel):
    lat: float
    lng: float
    district: str


class AnalysisResult(CamelModel):
    classification: Classification
    confidence: float = Field(..., ge=0.0, le=1.0)
    indicators: List[Indicator]
    explanation: str
    geo: Geo
    generated_report: str = Field(..., alias="generatedReport")
    suggested_actions: List[str] = Field(..., alias="suggestedActions")


class Submission(CamelModel):
    id: str
    timestamp: datetime
    district: str
    coordinates: Tuple[float, float]
    classification: Classification
    confidence: float
    indicators: List[Indicator]
    submitted_by: str = Field(..., alias="submittedBy")
    notes: str = ""


class GeoPoint(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class SubmissionCreate(CamelModel):
    district: str = Field(..., min_length=1)
    classification: Classification
    confidence: float = Field(..., ge=0.0, le=1.0)
    indicators: List[Indicator] = Field(default_factory=list)
    geo: Optional[GeoPoint] = None
    timestamp: Optional[datetime] = None
    submitted_by: Optional[str] = Field(None, alias="submittedBy")
    notes: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "district": "karachi",
                "classification": "Clean",
                "confidence": 0.89,
                "indicators": [{"name": "turbidity", "score": 0.15, "status": "good"}],
                "geo": {"lat": 24.8615, "lng": 67.0099},
                "submittedBy": "Community Health Worker",
                "notes": "Clear water from municipal supply",
            }
        },
    )


class Alert(CamelModel):
    id: str
    district: str
    risk: RiskLevel
    cause: str
    confidence: float
    issued_date: datetime = Field(..., alias="issuedDate")
    status: AlertStatus
    message: str
    ttl: int
    languages: List[Language] = Field(default_factory=lambda: [Language.EN])


class AlertCreate(CamelModel):
    district: str = Field(..., min_length=1)
    risk: RiskLevel = RiskLevel.MEDIUM
    cause: str = Field(..., min_length=1)
    confidence: float = Field(0.8, ge=0.0, le=1.0)
    ttl: int = Field(24, ge=1, le=168)  # hours, at most one week
    languages: List[Language] = Field(default_factory=lambda: [Language.EN], min_length=1)
    message: str = Field(..., min_length=10)
    issued_date: Optional[datetime] = Field(None, alias="issuedDate")
    status: AlertStatus = AlertStatus.ACTIVE


class Citation(BaseModel):
    title: str
    url: str
    snippet: str


class AssistantRequest(BaseModel):
    message: str
    language: Language = Language.EN


class AssistantReply(BaseModel):
    content: str
    citations: List[Citation]


class ReportRequest(BaseModel):
    result: AnalysisResult
    language: Language = Language.EN


class District(CamelModel):
    id: str
    name: str
    name_urdu: str = Field(..., alias="nameUrdu")
    province: str
    coordinates: Tuple[float, float]


class DistrictCount(BaseModel):
    district: str
    total: int
    clean: int
    testing: int
    unsafe: int


class SubmissionSummary(BaseModel):
    total: int
    clean: int
    testing: int
    unsafe: int
    districts: int
    by_district: List[DistrictCount] = Field(default_factory=list)


class AlertSummary(BaseModel):
    total: int
    active: int
    resolved: int
    high_risk: int
    issued_today: int
    districts: int

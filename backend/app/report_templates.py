# backend/app/report_templates.py
"""
Canned report text for each classification band: explanation, HTML fragment,
suggested actions, and the plain-text report offered as a download.
"""

import math
from datetime import date
from typing import List, NamedTuple, Optional

from .schemas import AnalysisResult, Classification, Language


class ReportTemplate(NamedTuple):
    explanation: str
    html: str
    actions: List[str]


EXPLANATIONS = {
    Classification.CLEAN: (
        "The AI model detected clear water with minimal turbidity and no visible contaminants. "
        "Color analysis shows good clarity, and no oil sheen or significant debris was observed."
    ),
    Classification.NEEDS_TESTING: (
        "The AI model detected moderate turbidity and some color changes that warrant further "
        "laboratory testing. While not immediately dangerous, professional analysis is recommended."
    ),
    Classification.UNSAFE: (
        "The AI model detected high levels of turbidity, significant color changes, and visible "
        "contaminants including possible oil sheen and debris. This water should not be consumed "
        "without proper treatment. DO NOT CONSUME."
    ),
}

_REPORT_HTML = """
<h3>Water Quality Assessment Report</h3>
<p><strong>Classification:</strong> {title}</p>
<p><strong>Confidence Level:</strong> {percent}%</p>
<p><strong>Analysis Summary:</strong> {summary}</p>
<h4>Key Findings:</h4>
<ul>
{findings}
</ul>
<p><strong>Recommendation:</strong> {recommendation}</p>
"""

REPORT_SECTIONS = {
    Classification.CLEAN: {
        "title": "Clean Water",
        "summary": "The submitted water sample shows excellent quality indicators with minimal contamination signs.",
        "findings": [
            "Low turbidity levels indicate good filtration",
            "Clear color suggests absence of harmful substances",
            "No visible oil contamination detected",
            "Minimal debris or particulate matter",
        ],
        "recommendation": "This water appears safe for consumption, but regular monitoring is still advised.",
    },
    Classification.NEEDS_TESTING: {
        "title": "Requires Laboratory Testing",
        "summary": "The submitted water sample shows moderate quality concerns that require professional laboratory analysis.",
        "findings": [
            "Moderate turbidity levels detected",
            "Some color variations observed",
            "Possible contamination indicators present",
            "Professional testing recommended",
        ],
        "recommendation": "Seek laboratory testing before consumption. Consider alternative water sources temporarily.",
    },
    Classification.UNSAFE: {
        "title": "Unsafe for Consumption",
        "summary": "The submitted water sample shows significant contamination indicators and should not be consumed without proper treatment.",
        "findings": [
            "High turbidity levels indicating heavy contamination",
            "Significant color changes suggesting pollutants",
            "Visible oil sheen detected",
            "Substantial debris and particulate matter",
        ],
        "recommendation": "DO NOT CONSUME. Seek alternative clean water sources immediately and report to local authorities.",
    },
}

SUGGESTED_ACTIONS = {
    Classification.CLEAN: [
        "Continue regular monitoring of water quality",
        "Store water in clean, covered containers",
        "Maintain good hygiene practices",
        "Report any changes in water appearance or taste",
    ],
    Classification.NEEDS_TESTING: [
        "Take sample to nearest water testing facility",
        "Use alternative water source until results available",
        "Boil water for 3-5 minutes before consumption as precaution",
        "Monitor for any health symptoms",
    ],
    Classification.UNSAFE: [
        "DO NOT consume this water",
        "Find alternative clean water source immediately",
        "Report contamination to local health authorities",
        "If consumed, seek medical attention if symptoms develop",
        "Use water purification tablets or boiling for emergency use only",
    ],
}

TEXT_REPORT_LABELS = {
    Language.EN: {
        "title": "Water Quality Analysis Report",
        "classification": "Classification",
        "confidence": "Confidence",
        "location": "Location",
        "results": "Analysis Results",
        "actions": "Recommended Actions",
        "generated": "Generated on",
    },
    Language.UR: {
        "title": "پانی کے معیار کی تجزیاتی رپورٹ",
        "classification": "درجہ بندی",
        "confidence": "اعتماد",
        "location": "مقام",
        "results": "تجزیے کے نتائج",
        "actions": "تجویز کردہ اقدامات",
        "generated": "تاریخ",
    },
}


def confidence_percent(confidence: float) -> int:
    # half-up, so 0.925 -> 93 rather than banker's rounding
    return int(math.floor(confidence * 100 + 0.5))


def render_report(band: Classification, confidence: float) -> ReportTemplate:
    band = Classification(band)
    section = REPORT_SECTIONS[band]
    html = _REPORT_HTML.format(
        title=section["title"],
        percent=confidence_percent(confidence),
        summary=section["summary"],
        findings="\n".join(f"  <li>{item}</li>" for item in section["findings"]),
        recommendation=section["recommendation"],
    )
    return ReportTemplate(
        explanation=EXPLANATIONS[band],
        html=html,
        actions=list(SUGGESTED_ACTIONS[band]),
    )


def render_text_report(
    result: AnalysisResult,
    generated_on: Optional[date] = None,
    language: Language = Language.EN,
) -> str:
    """
    Plain-text report for download, served as water-analysis-report.txt.
    Headings follow `language`; explanation and actions stay in English.
    """
    generated_on = generated_on or date.today()
    labels = TEXT_REPORT_LABELS[Language(language)]
    actions = "\n".join(f"{i}. {action}" for i, action in enumerate(result.suggested_actions, start=1))
    lines = [
        labels["title"],
        "",
        f"{labels['classification']}: {result.classification.value}",
        f"{labels['confidence']}: {confidence_percent(result.confidence)}%",
        f"{labels['location']}: {result.geo.district}",
        "",
        f"{labels['results']}:",
        result.explanation,
        "",
        f"{labels['actions']}:",
        actions,
        "",
        f"{labels['generated']}: {generated_on.isoformat()}",
        "Powered by Climate.io AI",
    ]
    return "\n".join(lines) + "\n"

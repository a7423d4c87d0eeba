# backend/app/mock_analysis.py
"""
Mock water analysis. Derives, from the uploaded filename alone:
1. Classification band (Clean / Needs Testing / Unsafe) via a 32-bit rolling hash
2. Confidence score for that band
3. Four visual quality indicators
Same filename in, same result out. No image pixels are read.
"""

from typing import List, Tuple

from .districts import district_coordinates
from .report_templates import render_report
from .schemas import (
    AnalysisResult,
    Classification,
    Geo,
    Indicator,
    IndicatorName,
    IndicatorStatus,
)

# ---- Tunable Constants ----
HASH_MULTIPLIER = 31
SEED_MODULUS = 1000
CLEAN_MAX_SEED = 300          # seed < 300 -> Clean
NEEDS_TESTING_MAX_SEED = 600  # 300 <= seed < 600 -> Needs Testing, else Unsafe

# (base, k): value = base + (seed % k) / 100
CONFIDENCE_PARAMS = {
    Classification.CLEAN: (0.85, 15),
    Classification.NEEDS_TESTING: (0.65, 20),
    Classification.UNSAFE: (0.88, 12),
}

INDICATOR_PARAMS = {
    Classification.CLEAN: [
        (IndicatorName.TURBIDITY, 0.10, 20),
        (IndicatorName.COLOR_CLARITY, 0.85, 15),
        (IndicatorName.OIL_SHEEN, 0.05, 10),
        (IndicatorName.DEBRIS, 0.08, 12),
    ],
    Classification.NEEDS_TESTING: [
        (IndicatorName.TURBIDITY, 0.40, 30),
        (IndicatorName.COLOR_CLARITY, 0.50, 25),
        (IndicatorName.OIL_SHEEN, 0.15, 20),
        (IndicatorName.DEBRIS, 0.25, 25),
    ],
    Classification.UNSAFE: [
        (IndicatorName.TURBIDITY, 0.75, 25),
        (IndicatorName.COLOR_CLARITY, 0.20, 30),
        (IndicatorName.OIL_SHEEN, 0.60, 35),
        (IndicatorName.DEBRIS, 0.70, 30),
    ],
}

# one status for every indicator in a band
BAND_STATUS = {
    Classification.CLEAN: IndicatorStatus.GOOD,
    Classification.NEEDS_TESTING: IndicatorStatus.MODERATE,
    Classification.UNSAFE: IndicatorStatus.POOR,
}


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _code_units(text: str) -> List[int]:
    # browsers hash UTF-16 code units, so astral characters count twice
    raw = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


# ---- 1. Hash Classifier ----
def rolling_hash(text: str) -> int:
    """
    Signed 32-bit rolling hash: h = h * 31 + code_unit, wrapped each step.
    """
    h = 0
    for unit in _code_units(text):
        h = _to_int32(h * HASH_MULTIPLIER + unit)
    return h


def seed_for(text: str) -> int:
    return abs(rolling_hash(text)) % SEED_MODULUS


def band_for_seed(seed: int) -> Classification:
    if seed < CLEAN_MAX_SEED:
        return Classification.CLEAN
    if seed < NEEDS_TESTING_MAX_SEED:
        return Classification.NEEDS_TESTING
    return Classification.UNSAFE


def classify(seed_string: str) -> Tuple[Classification, int]:
    """
    Returns (band, seed) for a filename. Empty string -> (Clean, 0).
    """
    seed = seed_for(seed_string)
    return band_for_seed(seed), seed


# ---- 2. Indicator Synthesizer ----
def _offset(base: float, k: int, seed: int) -> float:
    return base + (seed % k) / 100


def compute_confidence(band: Classification, seed: int) -> float:
    base, k = CONFIDENCE_PARAMS[band]
    return _offset(base, k, seed)


def confidence_bounds(band: Classification) -> Tuple[float, float]:
    base, k = CONFIDENCE_PARAMS[band]
    return base, base + (k - 1) / 100


def synthesize_indicators(band: Classification, seed: int) -> List[Indicator]:
    status = BAND_STATUS[band]
    return [
        Indicator(name=name, score=_offset(base, k, seed), status=status)
        for name, base, k in INDICATOR_PARAMS[band]
    ]


# ---- 3. Full analysis ----
def generate_mock_analysis(filename: str, district: str) -> AnalysisResult:
    """
    Build the complete analysis response for an uploaded photo.
    Unknown districts are placed on Karachi's coordinates but keep their id in geo.district.
    """
    band, seed = classify(filename)
    confidence = compute_confidence(band, seed)
    report = render_report(band, confidence)
    lat, lng = district_coordinates(district)

    return AnalysisResult(
        classification=band,
        confidence=confidence,
        indicators=synthesize_indicators(band, seed),
        explanation=report.explanation,
        geo=Geo(lat=lat, lng=lng, district=district),
        generated_report=report.html,
        suggested_actions=list(report.actions),
    )

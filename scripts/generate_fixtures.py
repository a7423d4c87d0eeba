# scripts/generate_fixtures.py
"""
Pin the mock analysis for a list of filenames so other clients (or a port of
the hash) can be checked against this backend.

Usage:
    python -m scripts.generate_fixtures
    python -m scripts.generate_fixtures sample1.jpg flood_photo.png --district hyderabad
"""

import argparse
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from backend.app.mock_analysis import classify, generate_mock_analysis, rolling_hash

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("generate_fixtures")

OUT_PATH = Path(os.getenv("CLIMATEIO_FIXTURES_PATH", "data/generated/analysis_fixtures.json"))
DEFAULT_FILENAMES = ["sample1.jpg", "flood_photo.png", "clear_water.jpg", ""]


def build_fixture(filename, district):
    band, seed = classify(filename)
    result = generate_mock_analysis(filename, district)
    return {
        "filename": filename,
        "hash": rolling_hash(filename),
        "seed": seed,
        "classification": band.value,
        "confidence": result.confidence,
        "indicators": [i.model_dump(mode="json") for i in result.indicators],
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate mock analysis fixtures")
    parser.add_argument("filenames", nargs="*", default=DEFAULT_FILENAMES)
    parser.add_argument("--district", default="karachi")
    parser.add_argument("--out", default=str(OUT_PATH))
    args = parser.parse_args(argv)

    fixtures = [build_fixture(f, args.district) for f in args.filenames]
    out = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "district": args.district,
        "fixtures": fixtures,
    }

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(out, f, indent=2, ensure_ascii=False)
    for fx in fixtures:
        logger.info(f"{fx['filename']!r}: hash={fx['hash']} seed={fx['seed']} -> {fx['classification']}")
    logger.info(f"Wrote {len(fixtures)} fixtures -> {out_path}")
    return out


if __name__ == "__main__":
    main()

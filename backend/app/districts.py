# backend/app/districts.py
"""
Static district table used to place analyses and submissions on the map.
"""

from typing import Dict, List, Tuple

DEFAULT_DISTRICT = "karachi"

DISTRICTS: List[Dict] = [
    {"id": "karachi", "name": "Karachi", "nameUrdu": "کراچی", "province": "Sindh", "coordinates": (24.8607, 67.0011)},
    {"id": "hyderabad", "name": "Hyderabad", "nameUrdu": "حیدرآباد", "province": "Sindh", "coordinates": (25.396, 68.3578)},
    {"id": "sukkur", "name": "Sukkur", "nameUrdu": "سکھر", "province": "Sindh", "coordinates": (27.7058, 68.8574)},
    {"id": "dadu", "name": "Dadu", "nameUrdu": "دادو", "province": "Sindh", "coordinates": (26.7297, 67.7822)},
    {"id": "muzaffargarh", "name": "Muzaffargarh", "nameUrdu": "مظفرگڑھ", "province": "Punjab", "coordinates": (30.0704, 71.1925)},
    {"id": "charsadda", "name": "Charsadda", "nameUrdu": "چارسدہ", "province": "Khyber Pakhtunkhwa", "coordinates": (34.1482, 71.7308)},
]

_BY_ID = {d["id"]: d for d in DISTRICTS}


def district_coordinates(district: str) -> Tuple[float, float]:
    """
    Returns (lat, lng) for a district id. Unknown districts fall back to Karachi.
    Lookup is exact on the id, the same way the upload form sends it.
    """
    entry = _BY_ID.get(district) or _BY_ID[DEFAULT_DISTRICT]
    return entry["coordinates"]


def is_known_district(district: str) -> bool:
    return district in _BY_ID

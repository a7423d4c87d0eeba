# backend/app/errors.py
"""
Error taxonomy for the water check backend.

ValidationError  -> caller supplied bad or missing input (HTTP 400)
ProcessingError  -> unexpected failure while building a result (HTTP 500)
"""


class WaterCheckError(Exception):
    status_code = 500


class ValidationError(WaterCheckError):
    status_code = 400


class ProcessingError(WaterCheckError):
    status_code = 500

"""
Status service module
"""

from quarantine.services.status.computation import (
    FEVER_THRESHOLD_C,
    DISCHARGE_MIN_FEVER_FREE_DAYS,
    STATUS_DISPLAY,
    fever_free_days,
    is_eligible_for_discharge,
    determine_status_code,
    compute_status,
)

__all__ = [
    "FEVER_THRESHOLD_C",
    "DISCHARGE_MIN_FEVER_FREE_DAYS",
    "STATUS_DISPLAY",
    "fever_free_days",
    "is_eligible_for_discharge",
    "determine_status_code",
    "compute_status",
]

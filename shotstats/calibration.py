"""Calibration method definitions for measured groups.

CalibrationMethod describes how hole coordinates were scaled to inches on the
target. The set is closed; values are the stable identifiers used by API
payloads and stored records.
"""

from __future__ import annotations

from enum import StrEnum


class CalibrationMethod(StrEnum):
    """How a group's hole coordinates were calibrated."""

    manual = "manual"
    fiducial = "fiducial"
    qr_code = "qrCode"
    grid_detect = "gridDetect"

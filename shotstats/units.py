"""Unit conversion helpers for group sizes, adjustments and preferences.

Two families live here:

- angular/linear conversions used to express group sizes and scope
  adjustments (inches, MOA, MIL) at a given range,
- display-preference conversions between a canonical storage unit
  (yards, °F, inHg, fps, MIL) and the unit a user prefers to see.

All functions are pure and total over finite inputs.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

INCHES_PER_MOA_AT_100_YARDS: Final[float] = 1.0472
INCHES_PER_MIL_AT_100_YARDS: Final[float] = 3.6
MIL_TO_MOA: Final[float] = 3.438
MOA_TO_MIL: Final[float] = 0.2909

YARDS_TO_METERS: Final[float] = 0.9144
METERS_TO_YARDS: Final[float] = 1.09361
INHG_TO_HPA: Final[float] = 33.8639
HPA_TO_INHG: Final[float] = 0.02953
FPS_TO_MPS: Final[float] = 0.3048
MPS_TO_FPS: Final[float] = 3.28084


class DistanceUnit(StrEnum):
    """Distance display unit. Canonical storage unit is yards."""

    yards = "yards"
    meters = "meters"


class AdjustmentUnit(StrEnum):
    """Scope adjustment display unit. Canonical storage unit is MIL."""

    mil = "mil"
    moa = "moa"


class TemperatureUnit(StrEnum):
    """Temperature display unit. Canonical storage unit is Fahrenheit."""

    fahrenheit = "fahrenheit"
    celsius = "celsius"


class PressureUnit(StrEnum):
    """Barometric pressure display unit. Canonical storage unit is inHg."""

    inhg = "inhg"
    hpa = "hpa"


class VelocityUnit(StrEnum):
    """Velocity display unit. Canonical storage unit is feet per second."""

    fps = "fps"
    mps = "mps"


# ---- Linear <-> angular --------------------------------------------------


def inches_to_moa(inches: float, distance_yards: float) -> float:
    """Convert a linear size on target to minutes of angle.

    Args:
        inches: Linear size in inches.
        distance_yards: Range to the target in yards.

    Returns:
        Size in MOA. A non-positive range has no defined angle and returns 0.0.
    """

    if distance_yards <= 0:
        return 0.0
    return inches / (INCHES_PER_MOA_AT_100_YARDS * distance_yards / 100.0)


def moa_to_inches(moa: float, distance_yards: float) -> float:
    """Convert minutes of angle to inches on target at `distance_yards`."""

    return moa * INCHES_PER_MOA_AT_100_YARDS * distance_yards / 100.0


def mils_to_inches(mils: float, distance_yards: float) -> float:
    """Convert milliradians to inches on target at `distance_yards`."""

    return mils * INCHES_PER_MIL_AT_100_YARDS * distance_yards / 100.0


def inches_to_mils(inches: float, distance_yards: float) -> float:
    """Convert inches on target to milliradians.

    Args:
        inches: Linear size in inches.
        distance_yards: Range to the target in yards.

    Returns:
        Size in MIL. A non-positive range returns 0.0, as in `inches_to_moa`.
    """

    if distance_yards <= 0:
        return 0.0
    return inches / (INCHES_PER_MIL_AT_100_YARDS * distance_yards / 100.0)


def mil_to_moa(mils: float) -> float:
    """Convert milliradians to minutes of angle (range independent)."""

    return mils * MIL_TO_MOA


def moa_to_mil(moa: float) -> float:
    """Convert minutes of angle to milliradians (range independent)."""

    return moa * MOA_TO_MIL


# ---- Display preferences -------------------------------------------------


def convert_distance(yards: float, unit: DistanceUnit) -> float:
    """Convert canonical yards to the display unit."""

    if unit == DistanceUnit.meters:
        return yards * YARDS_TO_METERS
    return yards


def convert_distance_to_canonical(value: float, unit: DistanceUnit) -> float:
    """Convert a distance entered in `unit` back to canonical yards."""

    if unit == DistanceUnit.meters:
        return value * METERS_TO_YARDS
    return value


def format_distance(yards: float, unit: DistanceUnit, *, decimals: int = 0) -> str:
    """Format canonical yards for display (e.g. `100 yd`, `91 m`)."""

    suffix = "m" if unit == DistanceUnit.meters else "yd"
    return f"{convert_distance(yards, unit):.{decimals}f} {suffix}"


def convert_temperature(fahrenheit: float, unit: TemperatureUnit) -> float:
    """Convert canonical Fahrenheit to the display unit."""

    if unit == TemperatureUnit.celsius:
        return (fahrenheit - 32.0) * 5.0 / 9.0
    return fahrenheit


def convert_temperature_to_canonical(value: float, unit: TemperatureUnit) -> float:
    """Convert a temperature entered in `unit` back to Fahrenheit."""

    if unit == TemperatureUnit.celsius:
        return value * 9.0 / 5.0 + 32.0
    return value


def format_temperature(fahrenheit: float, unit: TemperatureUnit, *, decimals: int = 0) -> str:
    """Format canonical Fahrenheit for display (e.g. `72°F`, `20°C`)."""

    suffix = "°C" if unit == TemperatureUnit.celsius else "°F"
    return f"{convert_temperature(fahrenheit, unit):.{decimals}f}{suffix}"


def convert_pressure(inhg: float, unit: PressureUnit) -> float:
    """Convert canonical inHg to the display unit."""

    if unit == PressureUnit.hpa:
        return inhg * INHG_TO_HPA
    return inhg


def convert_pressure_to_canonical(value: float, unit: PressureUnit) -> float:
    """Convert a pressure entered in `unit` back to inHg."""

    if unit == PressureUnit.hpa:
        return value * HPA_TO_INHG
    return value


def format_pressure(inhg: float, unit: PressureUnit, *, decimals: int = 2) -> str:
    """Format canonical inHg for display (e.g. `29.92 inHg`)."""

    suffix = " hPa" if unit == PressureUnit.hpa else " inHg"
    return f"{convert_pressure(inhg, unit):.{decimals}f}{suffix}"


def convert_velocity(fps: float, unit: VelocityUnit) -> float:
    """Convert canonical feet per second to the display unit."""

    if unit == VelocityUnit.mps:
        return fps * FPS_TO_MPS
    return fps


def convert_velocity_to_canonical(value: float, unit: VelocityUnit) -> float:
    """Convert a velocity entered in `unit` back to feet per second."""

    if unit == VelocityUnit.mps:
        return value * MPS_TO_FPS
    return value


def format_velocity(fps: float, unit: VelocityUnit, *, decimals: int = 0) -> str:
    """Format canonical fps for display (e.g. `2800 fps`)."""

    suffix = " m/s" if unit == VelocityUnit.mps else " fps"
    return f"{convert_velocity(fps, unit):.{decimals}f}{suffix}"


def convert_adjustment(mils: float, unit: AdjustmentUnit) -> float:
    """Convert a canonical MIL adjustment to the display unit."""

    if unit == AdjustmentUnit.moa:
        return mil_to_moa(mils)
    return mils


def convert_adjustment_to_canonical(value: float, unit: AdjustmentUnit) -> float:
    """Convert an adjustment entered in `unit` back to MIL."""

    if unit == AdjustmentUnit.moa:
        return moa_to_mil(value)
    return value


def format_adjustment(mils: float, unit: AdjustmentUnit, *, decimals: int = 1) -> str:
    """Format a canonical MIL adjustment for display (e.g. `2.5 MIL`)."""

    suffix = " MOA" if unit == AdjustmentUnit.moa else " MIL"
    return f"{convert_adjustment(mils, unit):.{decimals}f}{suffix}"

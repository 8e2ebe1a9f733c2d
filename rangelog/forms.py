"""Forms validating measurement input before it reaches `shotstats`.

The engine assumes well-formed samples. Range limits, finiteness and minimum
sample counts are enforced here:

- hole coordinates within ±10 inches of the point of aim,
- bullet diameter between 0.1 and 1.0 inches,
- group distance between 25 and 2500 yards,
- chronograph readings between 500 and 5000 fps.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from django import forms

from shotstats.calibration import CalibrationMethod
from shotstats.dto import HolePosition

MIN_HOLES: Final[int] = 2
MAX_HOLES: Final[int] = 25
MAX_VELOCITY_READINGS: Final[int] = 100


class HolePositionForm(forms.Form):
    """Validate a single hole position in inches relative to the point of aim."""

    x = forms.FloatField(min_value=-10, max_value=10, label="X (in)")
    y = forms.FloatField(min_value=-10, max_value=10, label="Y (in)")


class VelocityReadingForm(forms.Form):
    """Validate a single chronograph reading in feet per second."""

    velocity = forms.FloatField(min_value=500, max_value=5000, label="Velocity (fps)")


def _item_errors(index: int, form: forms.Form) -> list[str]:
    """Prefix each error of an item form with its 1-based position and field."""

    return [
        f"Item {index} {field}: {message}"
        for field, messages in form.errors.items()
        for message in messages
    ]


class HolePositionsField(forms.Field):
    """A list of `{x, y}` mappings cleaned into HolePosition values."""

    default_error_messages = {
        "invalid": "Enter a list of hole positions, each with x and y.",
        "min_items": "At least %(limit)d hole positions are required.",
        "max_items": "At most %(limit)d hole positions are allowed.",
    }

    def __init__(self, *, min_items: int = MIN_HOLES, max_items: int = MAX_HOLES, **kwargs) -> None:
        """Initialize the field.

        Args:
            min_items: Minimum number of holes accepted.
            max_items: Maximum number of holes accepted.
            **kwargs: Passed through to `forms.Field`.
        """

        super().__init__(**kwargs)
        self.min_items = min_items
        self.max_items = max_items

    def to_python(self, value: object) -> list[HolePosition]:
        """Convert raw mappings into HolePosition values."""

        if value in self.empty_values:
            return []
        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")

        holes: list[HolePosition] = []
        errors: list[str] = []
        for index, raw in enumerate(value, start=1):
            if not isinstance(raw, Mapping):
                errors.append(f"Item {index}: expected an object with x and y.")
                continue
            form = HolePositionForm(data=raw)
            if not form.is_valid():
                errors.extend(_item_errors(index, form))
                continue
            holes.append(HolePosition(x=form.cleaned_data["x"], y=form.cleaned_data["y"]))
        if errors:
            raise forms.ValidationError(errors)
        return holes

    def validate(self, value: list[HolePosition]) -> None:
        """Enforce the required flag and the hole count limits."""

        super().validate(value)
        if value and len(value) < self.min_items:
            raise forms.ValidationError(
                self.error_messages["min_items"], code="min_items", params={"limit": self.min_items}
            )
        if len(value) > self.max_items:
            raise forms.ValidationError(
                self.error_messages["max_items"], code="max_items", params={"limit": self.max_items}
            )


class VelocityReadingsField(forms.Field):
    """A list of numeric chronograph readings, each validated individually."""

    default_error_messages = {
        "invalid": "Enter a list of velocity readings.",
        "max_items": "At most %(limit)d velocity readings are allowed.",
    }

    def __init__(self, *, max_items: int = MAX_VELOCITY_READINGS, **kwargs) -> None:
        """Initialize the field.

        Args:
            max_items: Maximum number of readings accepted.
            **kwargs: Passed through to `forms.Field`.
        """

        super().__init__(**kwargs)
        self.max_items = max_items

    def to_python(self, value: object) -> list[float]:
        """Convert raw readings into floats."""

        if value in self.empty_values:
            return []
        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple)):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")

        readings: list[float] = []
        errors: list[str] = []
        for index, raw in enumerate(value, start=1):
            form = VelocityReadingForm(data={"velocity": raw})
            if not form.is_valid():
                errors.extend(_item_errors(index, form))
                continue
            readings.append(form.cleaned_data["velocity"])
        if errors:
            raise forms.ValidationError(errors)
        return readings

    def validate(self, value: list[float]) -> None:
        """Enforce the required flag and the reading count limit."""

        super().validate(value)
        if len(value) > self.max_items:
            raise forms.ValidationError(
                self.error_messages["max_items"], code="max_items", params={"limit": self.max_items}
            )


class GroupMeasurementForm(forms.Form):
    """Validate a measured group submitted for dispersion analysis."""

    holes = HolePositionsField(
        label="Hole positions",
        help_text="Hole centers in inches relative to the point of aim (0, 0).",
    )
    bullet_diameter = forms.FloatField(
        min_value=0.1,
        max_value=1.0,
        label="Bullet diameter (in)",
        help_text="e.g. 0.308 for .308 Win, 0.224 for .223 Rem.",
        error_messages={
            "min_value": "Bullet diameter must be between 0.1 and 1.0 inches.",
            "max_value": "Bullet diameter must be between 0.1 and 1.0 inches.",
        },
    )
    calibration_method = forms.ChoiceField(
        required=False,
        choices=[(method.value, method.value) for method in CalibrationMethod],
        label="Calibration method",
    )
    measurement_confidence = forms.FloatField(
        required=False,
        min_value=0,
        max_value=1,
        label="Measurement confidence",
        help_text="Detection confidence (0-1). Leave empty for manual entry.",
    )
    distance_yards = forms.IntegerField(
        required=False,
        min_value=25,
        max_value=2500,
        label="Distance (yd)",
        help_text="Target distance, used for MOA conversions.",
    )

    def clean_calibration_method(self) -> CalibrationMethod:
        """Default to manual calibration when none is supplied."""

        raw = self.cleaned_data.get("calibration_method") or CalibrationMethod.manual.value
        return CalibrationMethod(raw)


class ChronoReadingsForm(forms.Form):
    """Validate a chronograph string submitted for velocity statistics."""

    velocities = VelocityReadingsField(
        required=False,
        label="Velocities (fps)",
        help_text="A session may have no readings yet; its statistics are then empty.",
    )
    barrel_temperature = forms.FloatField(
        required=False,
        min_value=32,
        max_value=200,
        label="Barrel temperature (°F)",
    )

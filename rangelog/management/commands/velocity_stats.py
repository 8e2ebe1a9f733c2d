"""Compute velocity statistics for a chronograph string in a YAML/JSON file."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from rangelog.documents import DocumentError, load_measurement_document
from rangelog.services import MeasurementInputError, summarize_chrono
from shotstats.units import VelocityUnit, format_velocity


class Command(BaseCommand):
    """Print velocity statistics for one chronograph string."""

    help = "Compute chronograph velocity statistics from a YAML/JSON file of readings."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("path", help="YAML/JSON file with a `velocities` list (fps).")
        parser.add_argument(
            "--unit",
            choices=[unit.value for unit in VelocityUnit],
            default=VelocityUnit.fps.value,
            help="Display unit for velocities (default: fps).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        try:
            payload = load_measurement_document(options["path"])
        except DocumentError as exc:
            raise CommandError(str(exc)) from exc

        try:
            stats = summarize_chrono(payload)
        except MeasurementInputError as exc:
            raise CommandError(str(exc)) from exc

        unit = VelocityUnit(options["unit"])

        def show(value: float | None) -> str:
            return "n/a" if value is None else format_velocity(value, unit, decimals=2)

        self.stdout.write(f"count: {stats.count}")
        self.stdout.write(f"average: {show(stats.average)}")
        self.stdout.write(f"high: {show(stats.high)}")
        self.stdout.write(f"low: {show(stats.low)}")
        self.stdout.write(f"extreme spread: {show(stats.extreme_spread)}")
        self.stdout.write(f"standard deviation: {show(stats.standard_deviation)}")
        return None

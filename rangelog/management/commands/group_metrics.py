"""Compute dispersion metrics for a group described in a YAML/JSON file."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from rangelog.documents import DocumentError, load_measurement_document
from rangelog.services import GroupMeasurementReport, MeasurementInputError, measure_group


class Command(BaseCommand):
    """Print the dispersion report for one measured group."""

    help = "Compute group dispersion metrics from a YAML/JSON file of hole positions."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("path", help="YAML/JSON file with `holes` and `bullet_diameter`.")
        parser.add_argument(
            "--distance",
            type=int,
            default=None,
            help="Target distance in yards (overrides `distance_yards` in the file).",
        )
        parser.add_argument(
            "--bullet-diameter",
            type=float,
            default=None,
            help="Bullet diameter in inches (overrides `bullet_diameter` in the file).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        try:
            payload = load_measurement_document(options["path"])
        except DocumentError as exc:
            raise CommandError(str(exc)) from exc

        if options["distance"] is not None:
            payload["distance_yards"] = options["distance"]
        if options["bullet_diameter"] is not None:
            payload["bullet_diameter"] = options["bullet_diameter"]

        try:
            report = measure_group(payload)
        except MeasurementInputError as exc:
            raise CommandError(str(exc)) from exc

        for line in _report_lines(report):
            self.stdout.write(line)
        return None


def _inches(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.4f} in"


def _report_lines(report: GroupMeasurementReport) -> list[str]:
    metrics = report.metrics
    lines = [
        f"holes: {len(report.holes)}",
        f"bullet diameter: {metrics.bullet_diameter:.4f} in",
        f"calibration: {metrics.calibration_method}",
        f"extreme spread (ctc): {_inches(metrics.extreme_spread_ctc)}",
        f"extreme spread (ete): {_inches(metrics.extreme_spread_ete)}",
        f"horizontal spread (ctc/ete): {_inches(metrics.horizontal_spread_ctc)} / {_inches(metrics.horizontal_spread_ete)}",
        f"vertical spread (ctc/ete): {_inches(metrics.vertical_spread_ctc)} / {_inches(metrics.vertical_spread_ete)}",
        f"mean radius: {_inches(metrics.mean_radius)}",
        f"cep50: {_inches(metrics.cep50)}",
        f"radial sd: {_inches(metrics.radial_std_dev)}",
        f"horizontal sd: {_inches(metrics.horizontal_std_dev)}",
        f"vertical sd: {_inches(metrics.vertical_std_dev)}",
        f"poi offset (x, y): {_inches(metrics.poi_offset_x)}, {_inches(metrics.poi_offset_y)}",
    ]
    if report.distance_yards is not None:
        lines.append(
            f"at {report.distance_yards} yd: extreme spread {report.extreme_spread_ctc_moa} MOA ctc, "
            f"{report.extreme_spread_ete_moa} MOA ete; mean radius {report.mean_radius_moa} MOA"
        )
    return lines

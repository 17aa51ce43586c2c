"""YAML report writer."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
import yaml

from review_dashboard.models.performance import DashboardStats, PropertyPerformance
from review_dashboard.models.result import NormalizedResult
from review_dashboard.utils.logging import logger


class ReportWriter:
    """Write dashboard snapshots to YAML files."""

    def __init__(self, output_dir: Path):
        """Initialize report writer.

        Args:
            output_dir: Directory to write YAML files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def build_report(
        self,
        result: NormalizedResult,
        stats: DashboardStats,
        performance: List[PropertyPerformance],
        include_reviews: bool = False,
    ) -> dict:
        """Assemble the report document, keys in display order."""
        data = {
            "generatedAt": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "dateRange": result.meta.date_range.to_dict(),
            "channels": result.meta.channels,
            "stats": stats.to_dict(),
            "properties": [p.to_dict() for p in performance],
        }
        if include_reviews:
            data["reviews"] = [r.to_dict() for r in result.reviews]
        return data

    def write_report(
        self,
        result: NormalizedResult,
        stats: DashboardStats,
        performance: List[PropertyPerformance],
        include_reviews: bool = False,
        filename: Optional[str] = None,
    ) -> Path:
        """Write a dashboard report to a YAML file.

        Args:
            result: Normalized reviews the report covers
            stats: Overview numbers
            performance: Per-property performance
            include_reviews: Also write every normalized review
            filename: Output file name, timestamped by default

        Returns:
            Path to written file
        """
        if filename is None:
            filename = f"report_{datetime.now(timezone.utc):%Y%m%d_%H%M%S}.yaml"
        filepath = self.output_dir / filename

        data = self.build_report(result, stats, performance, include_reviews)

        with open(filepath, "w", encoding="utf-8") as f:
            yaml.dump(
                data,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=1000,  # Prevent line wrapping
                indent=2,
            )

        logger.info(f"Wrote report: {filepath}")
        return filepath


# Custom YAML representer for better formatting
def _str_representer(dumper: yaml.Dumper, data: str) -> yaml.Node:
    """Custom string representer for multiline strings."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


# Register custom representer
yaml.add_representer(str, _str_representer)

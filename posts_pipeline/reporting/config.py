"""
Report configuration management.

Loads search fragments, report titles and output paths from a YAML file.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .queries import DEFAULT_FRAGMENTS


class ReportTarget(BaseModel):
    """Title and output path of one report."""

    title: str
    output: Path


class ReportSettings(BaseModel):
    """
    Settings for the report script.

    Attributes:
        fragments: Title search fragments
        view_count: Target of the ViewCount aggregate report
        title_search: Target of the title search report
    """

    fragments: list[str] = Field(default_factory=lambda: list(DEFAULT_FRAGMENTS), min_length=1)
    view_count: ReportTarget = ReportTarget(
        title="View Count Average Report",
        output=Path("data/out/view_count_report.pdf"),
    )
    title_search: ReportTarget = ReportTarget(
        title="Matching Question Titles Report",
        output=Path("data/out/title_search_report.pdf"),
    )


class ReportConfigLoader:
    """
    Loads report settings from a YAML configuration file.

    Expected YAML format:
    ```yaml
    search:
      fragments: [pug, wig, yak]

    reports:
      view_count:
        title: View Count Average Report
        output: data/out/view_count_report.pdf
      title_search:
        title: Matching Question Titles Report
        output: data/out/title_search_report.pdf
    ```
    Every section is optional; missing values keep their defaults.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the report config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Report configuration file not found: {config_path}")

    def load(self) -> ReportSettings:
        """
        Load and parse report settings.

        Returns:
            ReportSettings

        Raises:
            ValueError: If the YAML is invalid or has the wrong shape
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError("Report configuration must be a mapping")

        values: dict[str, Any] = {}

        search = config.get("search") or {}
        if "fragments" in search:
            fragments = search["fragments"]
            if not isinstance(fragments, list) or not fragments:
                raise ValueError("'search.fragments' must be a non-empty list")
            values["fragments"] = [str(fragment) for fragment in fragments]

        reports = config.get("reports") or {}
        defaults = ReportSettings()
        for name in ("view_count", "title_search"):
            if name in reports:
                values[name] = self._parse_target(name, reports[name], getattr(defaults, name))

        return ReportSettings(**values)

    def _parse_target(self, name: str, target_def: Any, default: ReportTarget) -> ReportTarget:
        if not isinstance(target_def, dict):
            raise ValueError(f"Report '{name}' must be a mapping")
        return ReportTarget(
            title=target_def.get("title", default.title),
            output=target_def.get("output", default.output),
        )

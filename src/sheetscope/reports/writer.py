"""Persists the three report artifacts for an analysis run."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..config import settings
from ..engine.models import AnalysisState
from ..errors import EmptyCorpusError
from .csv_report import render_csv
from .json_report import render_json
from .markdown import render_markdown

logger = logging.getLogger(__name__)


@dataclass
class ReportPaths:
    """Locations of the written artifacts."""

    json_path: Path
    csv_path: Path
    markdown_path: Path

    def as_list(self) -> list[Path]:
        return [self.markdown_path, self.json_path, self.csv_path]


class ReportWriter:
    """Writes JSON, CSV and Markdown reports into an output directory."""

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        self.output_dir = Path(output_dir) if output_dir is not None else settings.export_dir

    def write(
        self,
        state: AnalysisState,
        base_name: str,
        generated_at: Optional[datetime] = None,
    ) -> ReportPaths:
        """
        Render all reports, then write them.

        Rendering happens before anything touches the disk, so a failure
        leaves no partial report behind.
        """
        if state.is_empty:
            raise EmptyCorpusError("Refusing to write reports for an empty corpus")

        generated_at = generated_at or datetime.now()
        documents = {
            settings.json_report_name: render_json(state, base_name, generated_at),
            settings.csv_report_name: render_csv(state),
            settings.markdown_report_name: render_markdown(state, base_name, generated_at),
        }

        if not self.output_dir.exists():
            self.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created export directory: {self.output_dir}")

        for name, content in documents.items():
            path = self.output_dir / name
            path.write_text(content, encoding="utf-8")
            logger.info(f"Wrote {path}")

        return ReportPaths(
            json_path=self.output_dir / settings.json_report_name,
            csv_path=self.output_dir / settings.csv_report_name,
            markdown_path=self.output_dir / settings.markdown_report_name,
        )

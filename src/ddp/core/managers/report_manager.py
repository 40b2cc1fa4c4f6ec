# src/ddp/core/managers/report_manager.py
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from ddp.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

REPORT_TEMPLATE = "html_diff.html.j2"


class ReportManager:
    """
    Renders a unified diff into a single browsable HTML page.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or PathUtils.get_templates_dir())),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, diff: str, title: str = "", created_at: Optional[datetime] = None) -> str:
        template = self.env.get_template(REPORT_TEMPLATE)
        return template.render(
            title=title,
            diff=diff,
            has_differences=bool(diff.strip()),
            created_at=created_at or datetime.now(),
        )

    def save_report(self, output_path: Path, diff: str, title: str = "") -> Path:
        output_path = Path(output_path)
        if output_path.parent and not output_path.parent.exists():
            output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(diff, title=title), encoding="utf-8")
        logger.info("Written to %s", output_path)
        return output_path

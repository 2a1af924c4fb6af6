"""Saving downloaded report artifacts to disk."""

import os
import tempfile
from pathlib import Path
from typing import Any, Union

import structlog

logger = structlog.get_logger(__name__)


def _filename_part(value: Any) -> str:
    """Keep a name as-is apart from path separators."""
    return str(value).replace("/", "_").replace("\\", "_")


def pdf_filename(report_id: Any, report_name: str) -> str:
    """File name of a downloaded report PDF, e.g. ``Monthly_42.pdf``."""
    return f"{_filename_part(report_name)}_{_filename_part(report_id)}.pdf"


def chart_filename(report_id: Any, chart_type: str, report_name: str) -> str:
    """File name of a downloaded chart, e.g. ``revenue_chart_Monthly_42.png``."""
    return (
        f"{_filename_part(chart_type)}_chart_"
        f"{_filename_part(report_name)}_{_filename_part(report_id)}.png"
    )


class ArtifactSaver:
    """Writes downloaded bytes under a download directory.

    Content goes to a temporary file first and is moved into place only once
    fully written; the temporary file is removed on every path.
    """

    def __init__(self, download_dir: Union[str, Path]):
        self.download_dir = Path(download_dir)

    def save(self, content: bytes, filename: str) -> Path:
        self.download_dir.mkdir(parents=True, exist_ok=True)
        target = self.download_dir / filename

        fd, temp_name = tempfile.mkstemp(
            dir=self.download_dir, prefix=".download-", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(temp_name, target)
        finally:
            if os.path.exists(temp_name):
                os.unlink(temp_name)

        logger.info("Artifact saved", path=str(target), size=len(content))
        return target

"""Admin report generation, listing, download and email."""

from .controller import ReportViewController, ReportViewState
from .files import ArtifactSaver, chart_filename, pdf_filename
from .transport import ReportTransport

__all__ = [
    "ArtifactSaver",
    "ReportTransport",
    "ReportViewController",
    "ReportViewState",
    "chart_filename",
    "pdf_filename",
]

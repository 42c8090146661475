from .picker import PRPickerApp, SelectionCancelled, select_pr
from .render import build_header, format_row, format_summary
from .styles import Palette

__all__ = [
    "PRPickerApp",
    "Palette",
    "SelectionCancelled",
    "build_header",
    "format_row",
    "format_summary",
    "select_pr",
]

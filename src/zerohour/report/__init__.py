"""Terminal rendering of analysis results."""

from zerohour.report.display import print_results

__all__ = ["print_results"]

"""Risk prioritization — remote LLM ranking with a local fallback."""

from zerohour.prioritize.models import AnalysisResult, Confidence, RiskAnalysis
from zerohour.prioritize.prioritizer import RiskPrioritizer, prioritize_risks

__all__ = [
    "AnalysisResult",
    "Confidence",
    "RiskAnalysis",
    "RiskPrioritizer",
    "prioritize_risks",
]

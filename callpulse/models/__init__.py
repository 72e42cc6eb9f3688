from .analysis import CallAnalysis, CallAnalysisCreate, DimensionAssessment, DimensionScore
from .call import Call, CallCreate, CallStatusUpdate
from .coaching import CoachingItem, CoachingItemUpdate
from .dimensions import DIMENSION_LABELS, DIMENSIONS, OVERALL
from .report import (
    BatchFailure, BatchResult, CoachingImpact, WeeklyReport, WeeklyReportCreate, WeeklyRollup,
)

__all__ = [
    "CallAnalysis", "CallAnalysisCreate", "DimensionAssessment", "DimensionScore",
    "Call", "CallCreate", "CallStatusUpdate",
    "CoachingItem", "CoachingItemUpdate",
    "DIMENSION_LABELS", "DIMENSIONS", "OVERALL",
    "BatchFailure", "BatchResult", "CoachingImpact",
    "WeeklyReport", "WeeklyReportCreate", "WeeklyRollup",
]

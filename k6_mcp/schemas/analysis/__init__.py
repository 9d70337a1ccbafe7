from .analysis_models import (
    ParsedMetrics,
    AnalysisIssue,
    AnalysisSummary,
    BasicAnalysis
)

"""Classification, indices, trends and batch orchestration."""

from src.analysis.aggregator import (
    SampleAnalysis,
    analyze_sample,
    determine_overall_status,
)
from src.analysis.classifier import (
    ComplianceStatus,
    ParameterClassification,
    RiskLevel,
    classify_parameter,
    classify_parameters,
    classify_reading,
    count_by_status,
)
from src.analysis.indices import (
    IndexResult,
    WQIStatus,
    calculate_hmpi,
    calculate_wqi,
    quality_rating,
)
from src.analysis.narrative import generate_key_findings, generate_recommendations
from src.analysis.orchestrator import (
    AnalysisError,
    BatchAnalysis,
    BatchAnalysisError,
    BatchSummary,
    DataQuality,
    analyze_batch,
    assess_data_quality,
    calculate_parameter_trends,
    generate_overall_recommendations,
    summarize_samples,
)
from src.analysis.trends import TrendDirection, TrendPoint, TrendResult, calculate_trend

__all__ = [
    # Classification
    "ComplianceStatus",
    "RiskLevel",
    "ParameterClassification",
    "classify_parameter",
    "classify_parameters",
    "classify_reading",
    "count_by_status",
    # Indices
    "IndexResult",
    "WQIStatus",
    "calculate_hmpi",
    "calculate_wqi",
    "quality_rating",
    # Sample aggregation
    "SampleAnalysis",
    "analyze_sample",
    "determine_overall_status",
    "generate_key_findings",
    "generate_recommendations",
    # Trends
    "TrendDirection",
    "TrendPoint",
    "TrendResult",
    "calculate_trend",
    # Batch orchestration
    "AnalysisError",
    "BatchAnalysisError",
    "BatchSummary",
    "DataQuality",
    "BatchAnalysis",
    "analyze_batch",
    "assess_data_quality",
    "calculate_parameter_trends",
    "generate_overall_recommendations",
    "summarize_samples",
]

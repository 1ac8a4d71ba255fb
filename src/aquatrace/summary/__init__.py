"""
Narrative summaries from the Gemini generative-AI service.
"""

from .gemini_summary import (
    AnalysisResult,
    FALLBACK_RESULT,
    RESPONSE_SCHEMA,
    summary_payload,
    build_prompt,
    get_client,
    call_gemini_with_retry,
    analyze_water_data
)

__all__ = [
    "AnalysisResult",
    "FALLBACK_RESULT",
    "RESPONSE_SCHEMA",
    "summary_payload",
    "build_prompt",
    "get_client",
    "call_gemini_with_retry",
    "analyze_water_data"
]

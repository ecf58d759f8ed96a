"""
Utility modules for the Pillora assistant.
"""

from .cache import TTLCache, create_cache, drug_cache
from .latency_metrics import PipelineMetrics
from .formatting_utils import format_recall_info, format_section, to_prompt_json

__all__ = [
    "TTLCache",
    "create_cache",
    "drug_cache",
    "PipelineMetrics",
    "format_recall_info",
    "format_section",
    "to_prompt_json",
]

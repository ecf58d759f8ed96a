"""
General formatting utilities for prompt sections.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional


def to_prompt_json(value: Any) -> str:
    """Compact JSON for embedding lookup data in the system prompt."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def format_recall_info(recalls: Optional[List[Dict[str, Any]]]) -> str:
    """
    One line per enforcement report: `recall: <reason> (status: <status>)`.
    Empty or missing recall lists render as an empty string.
    """
    if not recalls:
        return ""
    return "\n".join(
        f"recall: {recall.get('reason_for_recall')} (status: {recall.get('status')})"
        for recall in recalls
    )


def format_section(label: str, body: str) -> str:
    """Prefix a non-empty body with its label; empty bodies are omitted entirely."""
    if not body:
        return ""
    return f"{label}{body}"

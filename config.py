"""
Configuration and constants for the Pillora drug-information assistant.

Contains all environment variables, API configurations, and tuning parameters.
"""

from __future__ import annotations

import os
import logging
from dotenv import load_dotenv

# =============================================================================
# Load Environment
# =============================================================================

load_dotenv(".env.local")

# =============================================================================
# STRUCTURED LOGGER
# =============================================================================

# Mute noisy transport debug logs (reduces log-bloat in production)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger("pillora_agent")
logger.setLevel(logging.DEBUG)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S"
    ))
    logger.addHandler(handler)

# =============================================================================
# ENVIRONMENT & APPLICATION CONFIG
# =============================================================================

ENVIRONMENT = (os.getenv("ENVIRONMENT") or "development").strip().lower()
SERVICE_NAME = "pillora-agent"
PORT = int(os.getenv("PORT", "8080"))

# Latency debug mode - logs detailed timing per request
LATENCY_DEBUG = os.getenv("LATENCY_DEBUG", "0") == "1"

# =============================================================================
# OPENAI CONFIGURATION
# =============================================================================

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "30"))

# Final reply: moderate randomness, bounded output
REPLY_TEMPERATURE = float(os.getenv("REPLY_TEMPERATURE", "0.7"))
REPLY_MAX_TOKENS = int(os.getenv("REPLY_MAX_TOKENS", "500"))

# Entity extraction runs through the same chat model
EXTRACTION_TEMPERATURE = float(os.getenv("EXTRACTION_TEMPERATURE", "0.7"))

# =============================================================================
# OPENFDA CONFIGURATION
# =============================================================================

OPENFDA_BASE_URL = os.getenv("OPENFDA_BASE_URL", "https://api.fda.gov").rstrip("/")
OPENFDA_API_KEY = os.getenv("OPENFDA_API_KEY") or None
OPENFDA_TIMEOUT = float(os.getenv("OPENFDA_TIMEOUT", "10"))

DRUG_LABEL_LIMIT = 1
RECALL_LIMIT = 5
INTERACTION_LIMIT = 1

# Drug lookup TTL cache (seconds)
DRUG_CACHE_TTL = int(os.getenv("DRUG_CACHE_TTL", "3600"))

# Expired entries are swept on write at most this often (seconds)
CACHE_SWEEP_INTERVAL = float(os.getenv("CACHE_SWEEP_INTERVAL", "600"))

# =============================================================================
# PIPELINE CONSTANTS
# =============================================================================

# "warfarin, aspirin" -> pairwise interaction lookup
PAIR_DELIMITER = ","

UNKNOWN_INTENT = "Unknown"

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."

"""
Shared utility functions for routers and services
"""
import json
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def log_endpoint_event(endpoint: str, session_id: Optional[str] = None, result: str = "success", details: Optional[dict] = None):
    """Log endpoint execution to app.log"""
    logger.info(f"{endpoint} | session={session_id or 'none'} | {result} | {json.dumps(details or {}, ensure_ascii=False)}")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; empty strings become None"""
    if value is None:
        return None
    value = value.strip()
    return value or None

# storefront_app/logging.py
import json
import logging
import os
import re
from typing import Any, Dict

PII_RE = re.compile(r"([\w\.-]+)@([\w\.-]+)")  # naive email redaction
SECRET_KEYS = {"accesstoken", "access_token", "token"}


def configure_logging(level: str | None = None):
    # basicConfig writes to stderr; stdout belongs to the stdio transport
    logging.basicConfig(
        level=level or os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def redact_str(s: str) -> str:
    return PII_RE.sub("[redacted-email]", s)


def redact_args(args: Dict[str, Any]) -> Dict[str, Any]:
    safe = json.loads(json.dumps(args, default=str))  # shallow copy via JSON
    for k, v in list(safe.items()):
        if k.lower() in SECRET_KEYS:
            safe[k] = "[redacted]"
        elif isinstance(v, str):
            safe[k] = redact_str(v)
    return safe


def log_tool_call(logger: logging.Logger, name: str, args: Dict[str, Any]):
    logger.info("tool_call %s %s", name, redact_args(args))

"""Environment-driven settings.

Read lazily so tests can patch the environment per call.
"""

import os
from typing import List, Optional

DEFAULT_SERVER_URL = "https://mermaid.ink"
DEFAULT_RENDER_TIMEOUT = 30.0
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def mermaid_cli_path() -> Optional[str]:
    """Explicit path to the Mermaid CLI (``mmdc``), if configured."""
    return os.getenv("MERMAID_CLI_PATH") or None


def mermaid_server_url() -> str:
    return os.getenv("MERMAID_SERVER_URL", DEFAULT_SERVER_URL).rstrip("/")


def render_timeout() -> float:
    raw = os.getenv("MERMAID_RENDER_TIMEOUT")
    if not raw:
        return DEFAULT_RENDER_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"MERMAID_RENDER_TIMEOUT must be a number, got {raw!r}")


def log_level() -> str:
    return os.getenv("MERMAID_CHART_LOG_LEVEL", "INFO")


def cors_origins() -> List[str]:
    raw = os.getenv("MERMAID_CHART_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]

"""
Runtime settings read from the environment.

Call ``load_env()`` first if values should come from a .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 15.0

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    # Drop search responses that were overtaken by a newer search.
    discard_stale_responses: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        raw_timeout = env.get("JOBSEARCH_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"JOBSEARCH_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout <= 0:
                raise ValueError("JOBSEARCH_TIMEOUT must be positive")

        return cls(
            base_url=env.get("JOBSEARCH_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=timeout,
            log_level=env.get("JOBSEARCH_LOG_LEVEL", "INFO").upper(),
            log_dir=Path(env.get("JOBSEARCH_LOG_DIR", "logs")),
            discard_stale_responses=_parse_bool(
                "JOBSEARCH_DISCARD_STALE", env.get("JOBSEARCH_DISCARD_STALE", "")
            ),
        )

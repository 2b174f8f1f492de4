from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def parse_cors_origins(env_value: str | None) -> List[str]:
    """
    Parses comma-separated origins:
      CORS_ALLOW_ORIGINS="http://localhost:5173,http://127.0.0.1:5173"
    Empty/None -> default list.
    """
    if not env_value:
        return list(DEFAULT_CORS_ORIGINS)
    parts = [p.strip() for p in env_value.split(",")]
    return [p for p in parts if p]


def default_data_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "data"


@dataclass(frozen=True)
class Settings:
    cors_allow_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    # uploaded and calculated workbooks of the API
    data_dir: Path = field(default_factory=default_data_dir)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        data_dir = env.get("RENTSPLIT_DATA_DIR")
        return cls(
            cors_allow_origins=parse_cors_origins(env.get("CORS_ALLOW_ORIGINS")),
            data_dir=Path(data_dir) if data_dir else default_data_dir(),
            log_level=(env.get("RENTSPLIT_LOG_LEVEL") or "INFO").upper(),
        )

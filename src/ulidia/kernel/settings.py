"""
Settings - Runtime configuration for ulidia tooling

The codec itself has no knobs: the bit layout and alphabet are fixed by the
format. Settings cover the surrounding tooling (logging and the default
store used by the command line).
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from ulidia.kernel.logging import is_production

ENV_PREFIX = "ULIDIA_"


class UlidSettings(BaseModel):
    """
    Runtime settings

    Values come from keyword arguments or, through ``from_env``, from
    ``ULIDIA_*`` environment variables.
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum level for emitted log records",
    )

    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of console text",
    )

    db_path: Path = Field(
        default=Path(".ulidia.db"),
        description="SQLite database used by the store commands",
    )

    @classmethod
    def from_env(cls) -> "UlidSettings":
        """
        Build settings from the environment

        Reads ULIDIA_LOG_LEVEL, ULIDIA_JSON_LOGS and ULIDIA_DB_PATH. Unset
        variables fall back to defaults; JSON logs default on when
        ENVIRONMENT=production.
        """
        values: dict[str, object] = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw.upper() if name == "log_level" else raw
        if "json_logs" not in values:
            values["json_logs"] = is_production()
        return cls.model_validate(values)

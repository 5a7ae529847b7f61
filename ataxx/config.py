import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from ataxx.ai.constants import DEFAULT_MINIMAX_DEPTH, JUMP_LIMIT, WINNING_VALUE


class AtaxxConfig(BaseModel):
    """Settings shared by the board, the evaluator and the players."""
    model_config = ConfigDict(frozen=True)

    search_depth: int = Field(default=DEFAULT_MINIMAX_DEPTH, ge=0)
    jump_limit: int = Field(default=JUMP_LIMIT, ge=1)
    winning_value: int = Field(default=WINNING_VALUE, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "AtaxxConfig":
        """Build a config from ATAXX_* environment variables (and a .env file if present)."""
        load_dotenv(dotenv_path)
        values = {}
        env_names = {
            "search_depth": "ATAXX_SEARCH_DEPTH",
            "jump_limit": "ATAXX_JUMP_LIMIT",
            "winning_value": "ATAXX_WINNING_VALUE",
            "log_level": "ATAXX_LOG_LEVEL",
        }
        for field_name, env_name in env_names.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw
        return cls(**values)


DEFAULT_CONFIG = AtaxxConfig()

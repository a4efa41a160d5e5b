import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, model_validator

from connect_n.app.enums import FirstPlayer
from connect_n.core.constants import (
    ROWS, COLS, MIN_SIZE, MAX_SIZE,
    PIECES_TO_WIN, MIN_PIECES_TO_WIN,
    DEFAULT_DEPTH, MIN_DEPTH, MAX_DEPTH,
)
from connect_n.core.grid import clamp

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "game.yaml"
ENV_PREFIX = "CONNECT_N_"


class GameSettings(BaseModel):
    """
    Tuning knobs threaded into the grid and the search.
    Values outside the supported range are clamped, never rejected.
    """
    rows: int = ROWS
    columns: int = COLS
    win_length: int = PIECES_TO_WIN
    allow_diagonal: bool = True
    search_depth: int = DEFAULT_DEPTH
    first_player: FirstPlayer = FirstPlayer.RANDOM
    log_level: str = "INFO"

    @model_validator(mode="after")
    def clamp_ranges(self) -> "GameSettings":
        self.rows = self._clamped("rows", self.rows, MIN_SIZE, MAX_SIZE)
        self.columns = self._clamped("columns", self.columns, MIN_SIZE, MAX_SIZE)
        # A line can never be longer than the larger board dimension
        self.win_length = self._clamped(
            "win_length", self.win_length, MIN_PIECES_TO_WIN, max(self.rows, self.columns)
        )
        self.search_depth = self._clamped("search_depth", self.search_depth, MIN_DEPTH, MAX_DEPTH)
        self.log_level = self.log_level.upper()
        return self

    @staticmethod
    def _clamped(name: str, value: int, low: int, high: int) -> int:
        result = clamp(value, low, high)
        if result != value:
            logger.warning("%s=%s is out of range [%s, %s], using %s", name, value, low, high, result)
        return result


def _env_overrides() -> Dict[str, Any]:
    overrides = {}
    for field in GameSettings.model_fields:
        value = os.getenv(ENV_PREFIX + field.upper())
        if value is not None:
            overrides[field] = value
    return overrides


def load_settings(path: Optional[Union[str, Path]] = None) -> GameSettings:
    """
    Loads settings from the YAML file (its `game` section), then applies
    CONNECT_N_<FIELD> environment variables on top. A missing file means defaults.
    """
    load_dotenv()

    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r") as f:
            data = (yaml.safe_load(f) or {}).get("game", {}) or {}
    else:
        logger.info("No config file at %s, using defaults", config_path)

    data.update(_env_overrides())
    return GameSettings(**data)

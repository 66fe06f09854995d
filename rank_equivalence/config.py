#!/usr/bin/env python3
"""
Application configuration.

Settings live in a YAML file (``app_conf.yaml`` next to this module by
default) with upper-case keys:

- LOGGING: level, log file, rotation size and timestamp format
- DATA_DIR: directory holding one normalized distribution CSV per game
- GAMES: per-game scrape cleanup settings (header line, merged cells)
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "app_conf.yaml"
DEFAULT_DATA_DIR = "data/distributions"


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the YAML configuration file.

    Args:
        path: Config file path (default: rank_equivalence/app_conf.yaml)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(f"Configuration file not found: {config_path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"Failed to load configuration from {config_path}: {e}")
        raise

    config.setdefault("DATA_DIR", DEFAULT_DATA_DIR)
    config.setdefault("GAMES", {})
    logger.debug(f"Configuration loaded from {config_path}")
    return config


def list_games(config: Dict[str, Any]) -> List[str]:
    return sorted((config.get("GAMES") or {}).keys())


def get_game_config(config: Dict[str, Any], game: str) -> Dict[str, Any]:
    """
    Get the settings for one game.

    Raises:
        ValueError: If the game is not configured
    """
    games = config.get("GAMES") or {}

    if game not in games:
        raise ValueError(f"Game '{game}' not found. Available: {list_games(config)}")

    game_cfg = games[game] or {}
    return {
        "DISPLAY_NAME": game_cfg.get("DISPLAY_NAME", game),
        "HEADER": game_cfg.get("HEADER"),
        "SPLIT_CELLS": bool(game_cfg.get("SPLIT_CELLS", False)),
    }

"""Environment configuration for the bot."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger("hammer.config")

DEFAULT_ENVIRONMENT = "main"
DEFAULT_PREFIX = "_"
DEFAULT_COMMANDER_ROLE_NAME = "Bot Commander"


@dataclass(frozen=True)
class BotConfig:
    environment: str
    token: str
    command_prefix: str
    bot_creator_ids: FrozenSet[int]
    bot_commander_role_id: Optional[int]
    log_level: int


def _digits(raw: str) -> str:
    return "".join(ch for ch in raw if ch.isdigit())


def _parse_creator_ids(raw: Optional[str]) -> FrozenSet[int]:
    if not raw:
        return frozenset()
    ids = set()
    for entry in re.split(r"[,\s]+", raw.strip()):
        if not entry:
            continue
        sanitized = _digits(entry)
        if not sanitized:
            raise ValueError(f"BOT_CREATOR_IDS entries must contain digits, got {entry!r}")
        ids.add(int(sanitized))
    return frozenset(ids)


def _parse_commander_role(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    sanitized = _digits(raw)
    if not sanitized:
        logger.warning(
            "BOT_COMMANDER_ROLE_ID is set but does not contain digits. Falling back to the %r role name.",
            DEFAULT_COMMANDER_ROLE_NAME,
        )
        return None
    return int(sanitized)


def _parse_log_level(raw: Optional[str]) -> int:
    name = (raw or "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got {raw!r}")
    return level


def load_config(environ: Optional[Mapping[str, str]] = None) -> BotConfig:
    """Build the bot configuration.

    When ``environ`` is omitted the ``.env`` file is loaded first and the
    process environment is used.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    environment = environ.get("ENVIRONMENT", DEFAULT_ENVIRONMENT).strip() or DEFAULT_ENVIRONMENT
    token_key = f"BOT_TOKEN_{environment.upper()}"
    token = environ.get(token_key)
    if not token:
        raise RuntimeError(f"{token_key} is missing from environment.")

    prefix = environ.get("COMMAND_PREFIX", DEFAULT_PREFIX).strip() or DEFAULT_PREFIX

    return BotConfig(
        environment=environment,
        token=token,
        command_prefix=prefix,
        bot_creator_ids=_parse_creator_ids(environ.get("BOT_CREATOR_IDS")),
        bot_commander_role_id=_parse_commander_role(environ.get("BOT_COMMANDER_ROLE_ID")),
        log_level=_parse_log_level(environ.get("LOG_LEVEL")),
    )

"""Privilege levels and guild permission helpers."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable, List, Optional

from interactions import Permissions

from config import DEFAULT_COMMANDER_ROLE_NAME


class Level(IntEnum):
    """Bot-side privilege tiers, lowest first."""

    USER = 0
    BOT_COMMANDER = 1
    SERVER_OWNER = 2
    BOT_CREATOR = 3

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()


def snowflake_to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    candidate = getattr(value, "id", None)
    if candidate is not None:
        try:
            return int(candidate)
        except (TypeError, ValueError):
            return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def member_has_role(member: Any, target_role_id: Optional[int]) -> bool:
    if not member or not target_role_id:
        return False
    for role in getattr(member, "roles", None) or []:
        if snowflake_to_int(getattr(role, "id", role)) == target_role_id:
            return True
    return False


def member_has_role_named(member: Any, role_name: str) -> bool:
    wanted = role_name.casefold()
    return any(
        str(getattr(role, "name", "")).casefold() == wanted
        for role in getattr(member, "roles", None) or []
    )


def top_role_position(member: Any) -> int:
    """Position of the member's highest role; ``@everyone`` sits at 0."""
    return max(
        (int(getattr(role, "position", 0)) for role in getattr(member, "roles", None) or []),
        default=0,
    )


def is_guild_owner(guild: Any, member: Any) -> bool:
    if guild is None or member is None:
        return False
    return bool(guild.is_owner(member))


def member_level(
    member: Any,
    guild: Any,
    creator_ids: Iterable[int] = (),
    commander_role_id: Optional[int] = None,
) -> Level:
    if snowflake_to_int(member) in set(creator_ids):
        return Level.BOT_CREATOR
    if is_guild_owner(guild, member):
        return Level.SERVER_OWNER
    if commander_role_id is not None:
        if member_has_role(member, commander_role_id):
            return Level.BOT_COMMANDER
    elif member_has_role_named(member, DEFAULT_COMMANDER_ROLE_NAME):
        return Level.BOT_COMMANDER
    return Level.USER


def permission_label(permission: Permissions) -> str:
    name = permission.name or str(permission)
    return name.replace("_", " ").title()


def missing_guild_permissions(member: Any, permissions: Iterable[Permissions]) -> List[Permissions]:
    """Return the permissions from ``permissions`` the member lacks in its guild."""
    return [permission for permission in permissions if not member.has_permission(permission)]

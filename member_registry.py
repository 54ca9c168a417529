"""Member lookup and role hierarchy checks for a single guild."""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional, Protocol

from permissions import is_guild_owner, snowflake_to_int, top_role_position

USER_MENTION_PATTERN = re.compile(r"^<@!?(\d+)>$")


class MemberRegistry(Protocol):
    def find_by_name(self, name: str, fuzzy: bool = False) -> Optional[Any]:
        ...

    def can_interact(self, actor: Any, target: Any) -> bool:
        ...


def _member_names(member: Any) -> List[str]:
    names = []
    user = getattr(member, "user", None)
    for source in (member, user):
        if source is None:
            continue
        for attribute in ("username", "global_name", "nick", "display_name"):
            value = getattr(source, attribute, None)
            if isinstance(value, str) and value and value not in names:
                names.append(value)
    return names


def _single(matches: List[Any]) -> Optional[Any]:
    unique = list({snowflake_to_int(member): member for member in matches}.values())
    if len(unique) == 1:
        return unique[0]
    return None


class GuildMemberRegistry:
    """Resolves members from the guild's member cache."""

    def __init__(self, guild: Any) -> None:
        self.guild = guild

    def _members(self) -> Iterable[Any]:
        return getattr(self.guild, "members", None) or []

    def _by_id(self, member_id: int) -> Optional[Any]:
        member = self.guild.get_member(member_id)
        if member is not None:
            return member
        for candidate in self._members():
            if snowflake_to_int(candidate) == member_id:
                return candidate
        return None

    def find_by_name(self, name: str, fuzzy: bool = False) -> Optional[Any]:
        """Find the one member answering to ``name``.

        Mentions and raw ids resolve by id. Names are tried exactly, then
        case-insensitively, then (with ``fuzzy``) as a unique prefix. An
        ambiguous step yields no member.
        """
        query = name.strip()
        if not query:
            return None

        mention = USER_MENTION_PATTERN.match(query)
        if mention:
            return self._by_id(int(mention.group(1)))
        if query.isdigit():
            member = self._by_id(int(query))
            if member is not None:
                return member

        members = list(self._members())

        exact = [member for member in members if query in _member_names(member)]
        if exact:
            return _single(exact)

        folded = query.casefold()
        insensitive = [
            member for member in members
            if any(candidate.casefold() == folded for candidate in _member_names(member))
        ]
        if insensitive:
            return _single(insensitive)

        if not fuzzy:
            return None
        prefixed = [
            member for member in members
            if any(candidate.casefold().startswith(folded) for candidate in _member_names(member))
        ]
        return _single(prefixed)

    def can_interact(self, actor: Any, target: Any) -> bool:
        if snowflake_to_int(actor) == snowflake_to_int(target):
            return False
        if is_guild_owner(self.guild, actor):
            return True
        if is_guild_owner(self.guild, target):
            return False
        return top_role_position(actor) > top_role_position(target)

"""Invocation context handed to text commands."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

from member_registry import GuildMemberRegistry, MemberRegistry
from permissions import Level, member_level
from request_queue import RequestQueue

if TYPE_CHECKING:
    from command_handler import CommandResources

USER_MENTIONS = re.compile(r"<@!?(\d+)>")
CHANNEL_MENTIONS = re.compile(r"<#(\d+)>")


class Responder:
    """Sends info and error replies to the invoking channel."""

    def __init__(self, channel: Any, queue: RequestQueue) -> None:
        self.channel = channel
        self.queue = queue

    def _send(self, content: str, kind: str) -> asyncio.Task:
        channel_id = getattr(self.channel, "id", "unknown")
        return self.queue.submit(self.channel.send(content), f"{kind} reply in channel {channel_id}")

    def info(self, text: str) -> asyncio.Task:
        return self._send(f"✅ {text}", "info")

    def error(self, text: str) -> asyncio.Task:
        return self._send(f"❌ {text}", "error")


@dataclass
class CommandContext:
    author: Any
    guild: Any
    channel: Any
    members: MemberRegistry
    queue: RequestQueue
    level: Level = Level.USER
    mentioned_users: List[Any] = field(default_factory=list)
    mentioned_channels: List[Any] = field(default_factory=list)

    def respond(self) -> Responder:
        return Responder(self.channel, self.queue)


async def _resolve_member(guild: Any, member_id: int, resources: "CommandResources") -> Optional[Any]:
    member = guild.get_member(member_id)
    if member is not None:
        return member
    try:
        return await guild.fetch_member(member_id)
    except Exception as error:
        resources.logger.warning("Unable to fetch mentioned member %s: %s", member_id, error)
        return None


async def context_from_message(message: Any, resources: "CommandResources") -> CommandContext:
    """Build a context from a guild message, resolving its mentions."""
    guild = message.guild
    content = message.content or ""

    mentioned_users = []
    for raw_id in dict.fromkeys(USER_MENTIONS.findall(content)):
        member = await _resolve_member(guild, int(raw_id), resources)
        if member is not None:
            mentioned_users.append(member)

    mentioned_channels = []
    for raw_id in dict.fromkeys(CHANNEL_MENTIONS.findall(content)):
        channel = guild.get_channel(int(raw_id))
        if channel is not None:
            mentioned_channels.append(channel)

    author = message.author
    return CommandContext(
        author=author,
        guild=guild,
        channel=message.channel,
        members=GuildMemberRegistry(guild),
        queue=resources.request_queue,
        level=member_level(
            author,
            guild,
            resources.bot_creator_ids,
            resources.bot_commander_role_id,
        ),
        mentioned_users=mentioned_users,
        mentioned_channels=mentioned_channels,
    )

"""Pytest configuration and shared fixtures."""

import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from command_context import CommandContext
from command_handler import CommandHandler, CommandResources
from member_registry import GuildMemberRegistry
from moderation_controller import ModerationController
from permissions import Level
from request_queue import RequestQueue
from tests.fakes import FakeChannel, FakeGuild, FakeRole


@pytest.fixture
def logger():
    return logging.getLogger("hammer.tests")


@pytest.fixture
def queue(logger):
    return RequestQueue(logger)


@pytest.fixture
def resources(queue, logger):
    return CommandResources(
        environment="test",
        command_prefix="_",
        bot_creator_ids=frozenset({999}),
        bot_commander_role_id=None,
        request_queue=queue,
        moderation=ModerationController(queue),
        logger=logger,
    )


@pytest.fixture
def handler(resources):
    return CommandHandler(None, resources)


@pytest.fixture
def guild():
    guild = FakeGuild(owner_id=10)
    admin = FakeRole(100, "Admin", 5)
    commander = FakeRole(101, "Bot Commander", 3)
    member_role = FakeRole(102, "Member", 1)
    guild.add_member(10, "owner")
    guild.add_member(11, "moderator", nick="Mod", roles=[commander])
    guild.add_member(12, "alice", roles=[member_role])
    guild.add_member(13, "bob", nick="Bobby", roles=[member_role])
    guild.add_member(14, "carol", roles=[admin])
    guild.add_member(15, "peer", roles=[commander])
    return guild


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def make_context(guild, channel, queue):
    def _make(author, *, mentioned_users=(), mentioned_channels=(), level=Level.BOT_COMMANDER):
        return CommandContext(
            author=author,
            guild=guild,
            channel=channel,
            members=GuildMemberRegistry(guild),
            queue=queue,
            level=level,
            mentioned_users=list(mentioned_users),
            mentioned_channels=list(mentioned_channels),
        )

    return _make

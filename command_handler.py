"""Command loader and prefix dispatcher for the interactions-based bot."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from interactions import Client, Permissions, listen
from interactions.api.events.discord import MessageCreate
from interactions.models.internal.listener import Listener

from command_context import CommandContext, context_from_message
from moderation_controller import ModerationController
from permissions import Level, missing_guild_permissions, permission_label
from request_queue import RequestQueue

CommandCallback = Callable[[CommandContext, List[str]], Awaitable[None]]


@dataclass(frozen=True)
class CommandResources:
    """Shared objects and helpers that command modules depend on."""

    environment: str
    command_prefix: str
    bot_creator_ids: FrozenSet[int]
    bot_commander_role_id: Optional[int]
    request_queue: RequestQueue
    moderation: ModerationController
    logger: logging.Logger


@dataclass(frozen=True)
class TextCommand:
    """A prefixed chat command and the authorization it declares."""

    aliases: Tuple[str, ...]
    callback: CommandCallback
    level: Level = Level.USER
    guild_permissions: Tuple[Permissions, ...] = ()
    description: str = ""

    @property
    def name(self) -> str:
        return self.aliases[0]


class CommandHandler:
    """Loads command modules, registers them and routes chat commands."""

    def __init__(self, bot: Optional[Client], resources: CommandResources) -> None:
        self.bot = bot
        self.resources = resources
        self.commands: Dict[str, TextCommand] = {}

    def register_command(self, command: TextCommand) -> None:
        """Register a text command under every one of its aliases."""
        if not command.aliases:
            raise ValueError("Commands need at least one alias.")
        aliases = [alias.lower() for alias in command.aliases]
        for alias in aliases:
            if alias in self.commands:
                raise ValueError(f"Alias {alias!r} is already registered.")
        for alias in aliases:
            self.commands[alias] = command
        self.resources.logger.debug(
            "Registered command %s (%s): %s",
            command.name,
            self.resources.environment,
            command.description or "no description",
        )

    def get_command(self, alias: str) -> Optional[TextCommand]:
        return self.commands.get(alias.lower())

    def register_listener(self, listener: Listener) -> None:
        """Register an event listener with the client."""
        self.bot.add_listener(listener)

    def load_modules(self, module_names: Sequence[str]) -> None:
        """Load an explicit sequence of command modules."""
        for module_name in module_names:
            self._load_module(module_name)

    def load_from_package(self, package_name: str) -> None:
        """Load every public module from the provided package."""
        package = importlib.import_module(package_name)
        package_path = getattr(package, "__path__", None)
        if package_path is None:
            raise ValueError(f"{package_name} is not a package")
        prefix = f"{package.__name__}."
        for module_info in pkgutil.iter_modules(package_path, prefix):
            module_basename = module_info.name.split(".")[-1]
            if module_basename.startswith("_"):
                continue
            self._load_module(module_info.name)

    def _load_module(self, module_name: str) -> None:
        module = importlib.import_module(module_name)
        setup = getattr(module, "setup", None)
        if not callable(setup):
            raise RuntimeError(f"Command module {module_name} is missing a setup(handler) function.")
        setup(self)

    async def dispatch(self, ctx: CommandContext, content: str) -> bool:
        """Run the command named at the start of ``content``.

        Returns False when no registered command matches.
        """
        tokens = content.split()
        if not tokens:
            return False
        command = self.get_command(tokens[0])
        if command is None:
            return False
        args = tokens[1:]
        logger = self.resources.logger

        if ctx.level < command.level:
            ctx.respond().error(f"You need the **{command.level.title}** level to use this command.")
            return True

        missing = missing_guild_permissions(ctx.author, command.guild_permissions)
        if missing:
            labels = ", ".join(f"`{permission_label(permission)}`" for permission in missing)
            noun = "permission" if len(missing) == 1 else "permissions"
            ctx.respond().error(f"You need the {labels} {noun} to use this command.")
            return True

        try:
            await command.callback(ctx, args)
        except Exception:
            logger.exception("Command %s failed in guild %s", command.name, getattr(ctx.guild, "id", None))
            ctx.respond().error("Something went wrong while running that command.")
        return True


def create_prefix_command_listeners(handler: CommandHandler) -> Tuple:
    """Create the listener that turns prefixed guild messages into commands."""
    resources = handler.resources
    prefix = resources.command_prefix

    @listen(MessageCreate)
    async def on_prefixed_message(event: MessageCreate):
        message = event.message
        if not message or not message.content:
            return
        if getattr(message.author, "bot", False):
            return
        if not message.content.startswith(prefix):
            return
        if not getattr(message, "guild", None):
            return

        content = message.content[len(prefix):]
        tokens = content.split()
        if not tokens or handler.get_command(tokens[0]) is None:
            resources.logger.debug("Ignoring unknown command %r", tokens[:1])
            return

        ctx = await context_from_message(message, resources)
        await handler.dispatch(ctx, content)

    return (on_prefixed_message,)

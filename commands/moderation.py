"""Discord moderation commands."""

from typing import List

from interactions import Permissions

from command_context import CommandContext
from command_handler import CommandHandler, TextCommand
from moderation_controller import ModerationController
from permissions import Level

BAN_DELETE_MESSAGE_DAYS = 2


async def execute_ban(ctx: CommandContext, args: List[str], controller: ModerationController) -> None:
    author = ctx.author
    target = None

    if ctx.mentioned_users:
        target = ctx.mentioned_users[0]
    elif args:
        target = ctx.members.find_by_name(args[0], fuzzy=False)

    if target is None:
        ctx.respond().error("Could not find user.")
        return
    if not ctx.members.can_interact(author, target):
        ctx.respond().error("Sorry, that user has an equal or higher role.")
        return

    author_name = getattr(author, "display_name", None) or getattr(author, "username", "unknown")
    controller.ban(target, BAN_DELETE_MESSAGE_DAYS, reason=f"Banned by {author_name}")
    ctx.respond().info(f"{target.display_name} has been banned.")


def setup(handler: CommandHandler) -> None:
    controller = handler.resources.moderation

    async def ban_command(ctx: CommandContext, args: List[str]):
        await execute_ban(ctx, args, controller)

    handler.register_command(
        TextCommand(
            aliases=("ban",),
            callback=ban_command,
            level=Level.BOT_COMMANDER,
            guild_permissions=(Permissions.BAN_MEMBERS,),
            description="Ban a user from the server.",
        )
    )

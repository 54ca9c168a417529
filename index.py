import asyncio
import logging

from interactions import Client, Intents

from command_handler import CommandHandler, CommandResources, create_prefix_command_listeners
from config import load_config
from moderation_controller import ModerationController
from request_queue import RequestQueue


def main() -> None:
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=config.log_level,
    )
    logger = logging.getLogger("hammer.bot")

    bot = Client(
        token=config.token,
        intents=Intents.DEFAULT | Intents.GUILD_MEMBERS | Intents.MESSAGE_CONTENT,
    )
    logger.info("Environment: %s", config.environment)

    queue = RequestQueue(logger)
    resources = CommandResources(
        environment=config.environment,
        command_prefix=config.command_prefix,
        bot_creator_ids=config.bot_creator_ids,
        bot_commander_role_id=config.bot_commander_role_id,
        request_queue=queue,
        moderation=ModerationController(queue),
        logger=logger,
    )
    handler = CommandHandler(bot, resources)
    handler.load_from_package("commands")
    for listener in create_prefix_command_listeners(handler):
        handler.register_listener(listener)
    logger.info("Loaded %d command aliases with prefix %r", len(handler.commands), config.command_prefix)

    try:
        asyncio.run(_run(bot, queue))
    except KeyboardInterrupt:
        logger.info("Shutting down.")


async def _run(bot: Client, queue: RequestQueue) -> None:
    try:
        await bot.astart()
    finally:
        await queue.drain()


if __name__ == "__main__":
    main()

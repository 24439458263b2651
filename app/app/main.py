import asyncio
import sys

from loguru import logger

from app.core.container import Container
from app.handlers.routing import get_all_routers
from app.loader import dp, bot
from app.middlewares.session import SQLAlchemySessionMiddleware
from app.middlewares.throttling import (
    private_chat_only_middleware,
    rate_limit_middleware,
)


def setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


async def main(container: Container):
    """Запуск бота."""
    try:
        session_middleware = SQLAlchemySessionMiddleware(db=container.db())

        dp.include_routers(get_all_routers())
        dp.message.middleware(private_chat_only_middleware)
        dp.message.middleware(rate_limit_middleware)
        dp.message.outer_middleware(session_middleware)
        dp.callback_query.outer_middleware(session_middleware)
        dp.pre_checkout_query.outer_middleware(session_middleware)

        await dp.start_polling(bot)
    finally:
        await bot.session.close()


if __name__ == "__main__":
    container = Container()
    setup_logging(container.config().log_level.value)
    logger.info("Bot is starting")
    asyncio.run(main(container=container))

# -*- coding: utf-8 -*-
"""
Background tasks for handlers that outlive a single update dispatch
"""
import asyncio
import functools
from contextlib import suppress
from typing import Set, Callable

from loguru import logger

# Strong references, otherwise the event loop may collect running tasks
_active_tasks: Set[asyncio.Task] = set()


def get_active_tasks_count() -> int:
    return len(_active_tasks)


def non_blocking_handler(handler_name: str = "unknown"):
    """
    Run a handler as a background task so slow agent calls (voice download,
    transcription, synthesis) do not hold up the dispatcher.

    Usage:
        @non_blocking_handler("handle_voice")
        async def handle_voice(update, context):
            ...
    """

    def decorator(handler_func: Callable):
        @functools.wraps(handler_func)
        async def wrapper(update, context):
            task = asyncio.create_task(
                _execute_handler_task(handler_func, update, context, handler_name)
            )
            _active_tasks.add(task)
            task.add_done_callback(_active_tasks.discard)

            logger.debug(
                f"Started non-blocking {handler_name} task (Active tasks: {len(_active_tasks)})"
            )
            return task

        return wrapper

    return decorator


async def _execute_handler_task(handler_func: Callable, update, context, handler_name: str):
    try:
        await handler_func(update, context)
        logger.debug(f"Completed {handler_name} task")
    except Exception as e:
        logger.exception(f"Error in {handler_name} handler: {e}")

        with suppress(Exception):
            if update and update.effective_chat:
                await context.bot.send_message(
                    chat_id=update.effective_chat.id,
                    text="Sorry, something went wrong while processing your message.",
                    reply_to_message_id=(
                        update.effective_message.message_id if update.effective_message else None
                    ),
                )


async def wait_for_all_tasks(timeout: float = 30.0) -> bool:
    """
    Wait for running handler tasks, used on shutdown.

    Returns:
        True if all tasks completed, False if timeout occurred
    """
    if not _active_tasks:
        return True

    logger.info(f"Waiting for {len(_active_tasks)} active tasks to complete...")

    try:
        await asyncio.wait_for(
            asyncio.gather(*_active_tasks, return_exceptions=True), timeout=timeout
        )
        logger.info("All tasks completed successfully")
        return True

    except asyncio.TimeoutError:
        logger.warning(
            f"Timeout waiting for tasks to complete, {len(_active_tasks)} tasks still running"
        )
        return False

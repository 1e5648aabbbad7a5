"""Run a command action inside one household session."""

import asyncio
import inspect
from typing import Any, Callable

import click


def run_in_session(ctx: click.Context, action: Callable[[], Any]) -> Any:
    """Start the household, run ``action`` and drain replication before returning.

    ``action`` may be a plain callable or return an awaitable. Local mutations
    made by the action are pushed to the shared store (when one is configured)
    before this returns.
    """
    household = ctx.obj["household"]
    remote = ctx.obj.get("remote")

    async def runner():
        await household.start()
        try:
            result = action()
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            await household.close()
            if remote is not None:
                await remote.close()

    return asyncio.run(runner())

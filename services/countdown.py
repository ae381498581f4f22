import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional

from core.config import settings
from core.logger import logger


class Countdown:
    """Cancellable repeating task that calls ``on_tick`` once per interval.

    The tick callback may be sync or async. Returning ``False`` from it ends
    the countdown. ``sleep`` is injectable so tests can run on virtual time.
    """

    def __init__(
        self,
        interval: Optional[float] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        name: str = "quiz",
    ):
        self.interval = settings.TIMER_TICK_SECONDS if interval is None else interval
        self.name = name
        self._sleep = sleep or asyncio.sleep
        self._task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._generation = 0
        self._running_generation: Optional[int] = None
        self.ticks = 0

    @property
    def is_running(self) -> bool:
        return (
            self._running_generation is not None
            and self._task is not None
            and not self._task.done()
        )

    def start(self, on_tick: Callable[[], Any]) -> asyncio.Task:
        """Start ticking, replacing any countdown already running."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._generation += 1
        self._running_generation = self._generation
        self.ticks = 0
        self._loop = loop
        self._task = loop.create_task(
            self._run(on_tick, self._generation), name=f"countdown:{self.name}"
        )
        logger.debug("Countdown started", countdown=self.name, interval=self.interval)
        return self._task

    def cancel(self):
        """Stop the countdown.

        Safe to call from inside the tick callback and from threads other
        than the one running the countdown's loop.
        """
        if self._running_generation is None:
            return
        self._running_generation = None
        task = self._task
        if task is None or task.done():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is not self._loop:
            if not self._loop.is_closed():
                self._loop.call_soon_threadsafe(task.cancel)
        # A task cancelling itself just leaves its loop at the next check
        elif task is not asyncio.current_task():
            task.cancel()
        logger.debug("Countdown cancelled", countdown=self.name, ticks=self.ticks)

    async def wait(self):
        """Wait until the countdown task has finished, however it ended."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self, on_tick: Callable[[], Any], generation: int):
        try:
            while self._running_generation == generation:
                await self._sleep(self.interval)
                if self._running_generation != generation:
                    break
                self.ticks += 1
                result = on_tick()
                if inspect.isawaitable(result):
                    result = await result
                if result is False:
                    break
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Countdown tick failed", countdown=self.name, ticks=self.ticks)
        finally:
            if self._running_generation == generation:
                self._running_generation = None

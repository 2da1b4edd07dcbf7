"""Test doubles shared across unit and UI tests."""

import asyncio
from typing import Sequence

from mailcraft.engine.base import SuggestionEngine, SuggestionResult
from mailcraft.models.message import Message


class ControlledEngine(SuggestionEngine):
    """Engine whose replies are released by the test.

    Every ``generate`` call parks on a future; the test resolves it with
    ``reply``/``fail`` in the order calls were made.
    """

    def __init__(self):
        self.calls: list[tuple[str, tuple[Message, ...]]] = []
        self._futures: list[asyncio.Future] = []

    async def generate(self, utterance: str, history: Sequence[Message]) -> SuggestionResult:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((utterance, tuple(history)))
        self._futures.append(future)
        return await future

    async def wait_for_calls(self, count: int = 1) -> None:
        """Yield to the loop until ``count`` generate calls have started."""
        for _ in range(100):
            if len(self.calls) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} generate calls, saw {len(self.calls)}")

    def reply(self, result, index: int = -1) -> None:
        self._futures[index].set_result(result)

    def fail(self, error: BaseException, index: int = -1) -> None:
        self._futures[index].set_exception(error)

    @property
    def engine_type(self) -> str:
        return "controlled"


async def settle(pilot):
    """Let queued redraws and mounts run."""
    await pilot.pause()
    await pilot.pause()


async def send(pilot, text):
    """Put ``text`` in the prompt and press Enter."""
    prompt = pilot.app.screen.query_one("#prompt-input")
    prompt.value = text
    await pilot.press("enter")

"""Conversation store: the single source of truth for the assistant thread.

## Generation lifecycle

```
submit(utterance)
  ├─ append user message, is_generating = True      (synchronous)
  └─ schedule generation task under current epoch
        └─ engine.generate(...)                      (only suspension point)
              ├─ ok      → assistant reply with blocks
              └─ failure → assistant apology, no blocks
        └─ epoch unchanged? append reply, is_generating = False
           epoch advanced?  discard reply              (reset happened)
```

Only one generation is accepted at a time: ``submit`` is a no-op while
``is_generating`` is true. ``reset`` advances the epoch, so a reply that was
already in flight can never reappear in the fresh log.
"""

import asyncio
from typing import Callable, Optional, Sequence

from mailcraft.engine.base import SuggestionEngine, SuggestionResult
from mailcraft.models.config import DEFAULT_WELCOME_MESSAGE
from mailcraft.models.conversation import ConversationState
from mailcraft.models.message import Message, Role
from mailcraft.utils.ids import generate_id
from mailcraft.utils.logging import get_logger


logger = get_logger(__name__)

FAILURE_MESSAGE = "I couldn't generate a suggestion, please try again."

Listener = Callable[[ConversationState], None]


class ConversationStore:
    """Owns the message log and the generating flag for one panel session.

    Observers either poll ``state`` (an immutable snapshot) or ``subscribe``
    to be called with every new snapshot.
    """

    def __init__(
        self,
        engine: SuggestionEngine,
        welcome_message: str = DEFAULT_WELCOME_MESSAGE,
        generation_timeout: Optional[float] = None,
    ):
        """Initialize the store with a single welcome message.

        Args:
            engine: Suggestion engine invoked once per accepted submission
            welcome_message: Text of the seed assistant message
            generation_timeout: Seconds before a generation counts as failed
                (None waits indefinitely)
        """
        self.engine = engine
        self.welcome_message = welcome_message
        self.generation_timeout = generation_timeout

        self._listeners: list[Listener] = []
        # Strong references; the event loop only keeps weak ones
        self._tasks: set[asyncio.Task] = set()
        self._state = ConversationState(messages=(self._seed_message(),))

    # Reading state

    @property
    def state(self) -> ConversationState:
        """Current immutable snapshot."""
        return self._state

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._state.messages

    @property
    def is_generating(self) -> bool:
        return self._state.is_generating

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new snapshot.

        Args:
            listener: Callable receiving the new ConversationState

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Mutations

    def submit(self, utterance: str) -> None:
        """Submit a user utterance.

        Empty/whitespace-only input and submissions while a reply is being
        generated are ignored. Otherwise the trimmed text is appended as a
        user message and generation starts in the background.

        Must be called from code running inside the asyncio event loop.
        """
        text = utterance.strip()
        if not text:
            logger.debug("submission_ignored", reason="empty")
            return
        if self._state.is_generating:
            logger.debug("submission_ignored", reason="generating")
            return

        loop = asyncio.get_running_loop()

        user_message = Message(id=generate_id(), role=Role.USER, content=text)
        epoch = self._state.epoch
        self._update(
            messages=self._state.messages + (user_message,),
            is_generating=True,
        )
        logger.info(
            "utterance_submitted",
            message_id=user_message.id,
            length=len(text),
            epoch=epoch,
        )

        task = loop.create_task(
            self._run_generation(epoch, text, self._state.messages),
            name=f"suggestion-{user_message.id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def reset(self) -> None:
        """Clear the log back to the welcome message.

        Any generation still in flight is invalidated; its reply is dropped
        when it arrives.
        """
        epoch = self._state.epoch + 1
        self._update(
            messages=(self._seed_message(),),
            is_generating=False,
            epoch=epoch,
        )
        logger.info("conversation_reset", epoch=epoch)

    async def wait_until_idle(self) -> None:
        """Wait until every scheduled generation has been applied or discarded."""
        while True:
            pending = {task for task in self._tasks if not task.done()}
            if not pending:
                return
            await asyncio.wait(pending)

    def close(self) -> None:
        """Cancel outstanding generations. Used when the panel is torn down."""
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()
        logger.info("conversation_closed", cancelled=len(self._tasks))

    # Internals

    def _seed_message(self) -> Message:
        return Message(id=generate_id(), role=Role.ASSISTANT, content=self.welcome_message)

    def _update(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(
                    "conversation_listener_failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                )

    async def _call_engine(
        self,
        utterance: str,
        history: Sequence[Message],
    ) -> SuggestionResult:
        pending = self.engine.generate(utterance, history)
        if self.generation_timeout is not None:
            result = await asyncio.wait_for(pending, timeout=self.generation_timeout)
        else:
            result = await pending
        # Rejects anything that is not a well-formed reply
        return SuggestionResult.model_validate(result)

    async def _run_generation(
        self,
        epoch: int,
        utterance: str,
        history: tuple[Message, ...],
    ) -> None:
        try:
            result = await self._call_engine(utterance, history)
        except Exception as e:
            logger.error(
                "generation_failed",
                engine=self.engine.engine_type,
                epoch=epoch,
                error=str(e),
                error_type=type(e).__name__,
            )
            reply = Message(
                id=generate_id(),
                role=Role.ASSISTANT,
                content=FAILURE_MESSAGE,
                suggestions=(),
            )
        else:
            reply = Message(
                id=generate_id(),
                role=Role.ASSISTANT,
                content=result.text,
                suggestions=result.blocks,
            )

        if epoch != self._state.epoch:
            logger.info(
                "stale_completion_discarded",
                issued_epoch=epoch,
                current_epoch=self._state.epoch,
            )
            return

        self._update(
            messages=self._state.messages + (reply,),
            is_generating=False,
        )
        logger.info(
            "generation_completed",
            message_id=reply.id,
            block_count=len(reply.suggestions or ()),
            epoch=epoch,
        )

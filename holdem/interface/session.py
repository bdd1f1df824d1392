"""
Asynchronous table session.

This module provides TableSession, the seam between the hand controller and
a presentation layer. It:
- Validates incoming commands with the request schemas
- Pushes a state snapshot to every subscriber after each change
- Plays the automated seats in a background task, pausing a random think
  delay before each of their actions

Commands issued while the automated seats are still playing are rejected,
so the controller only ever sees one action at a time.
"""

from __future__ import annotations
from typing import Awaitable, Callable, Dict, List, Optional, Union, Any
from contextlib import suppress
from dataclasses import asdict
import asyncio
import inspect
import logging
import random

from pydantic import BaseModel

from holdem.core.game import HoldemGame, ActionResult
from holdem.core.errors import PokerError
from holdem.core.rules import GamePhase
from holdem.interface.schemas import (
    ConfigureRequest, ActionRequest, ActionResultSchema, GameStateSchema,
    StateMessage, ActionMessage, ThinkingMessage, ResultMessage, ErrorMessage,
)


logger = logging.getLogger(__name__)

Subscriber = Callable[[BaseModel], Union[None, Awaitable[None]]]


class TableSession:
    """
    One human seat against automated opponents, driven asynchronously.

    Usage:
        session = TableSession(HoldemGame())
        updates = session.subscribe_queue()
        await session.configure(ConfigureRequest(player_count=4))
        await session.start_hand()
        await session.wait_idle()
        await session.submit_action({"action_type": "CALL"})
    """

    def __init__(
        self,
        game: Optional[HoldemGame] = None,
        human_id: int = 0,
        rng: Optional[random.Random] = None,
    ):
        self.game = game or HoldemGame()
        self.human_id = human_id
        # Think delays draw from their own source so they never shift the game's rng
        self._delay_rng = rng or random.Random()
        self._subscribers: List[Subscriber] = []
        self._bot_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for session messages. Coroutine callbacks are awaited.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def subscribe_queue(self) -> "asyncio.Queue[BaseModel]":
        """Receive session messages on a queue instead of a callback."""
        queue: asyncio.Queue = asyncio.Queue()
        self.subscribe(queue.put_nowait)
        return queue

    def snapshot(self, player_id: Optional[int] = None) -> GameStateSchema:
        """Validated state as seen from ``player_id`` (the human seat by default)."""
        seat = self.human_id if player_id is None else player_id
        return GameStateSchema.model_validate(self.game.get_state(for_player_id=seat))

    @property
    def is_busy(self) -> bool:
        """Automated seats are still playing."""
        return self._bot_task is not None and not self._bot_task.done()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def configure(
        self,
        request: Union[ConfigureRequest, Dict[str, Any], None] = None,
    ) -> bool:
        """Seat a new table. Rejected while a hand is being played."""
        if not isinstance(request, ConfigureRequest):
            request = ConfigureRequest.model_validate(request or {})

        if self.is_busy or self.game.is_hand_running():
            await self._publish_error("illegal_phase", "Hand still in progress")
            return False

        await self._cancel_automation()
        try:
            self.game.configure(request.player_count, request.starting_chips)
        except PokerError as e:
            await self._publish_error(e.kind, e.message)
            return False
        except ValueError as e:
            await self._publish_error("invalid_config", str(e))
            return False

        await self._publish_state()
        return True

    async def start_hand(self) -> bool:
        """Deal a new hand and let the automated seats act until the human is up."""
        if self.is_busy:
            await self._publish_error("illegal_phase", "Hand still in progress")
            return False

        try:
            self.game.start_hand()
        except PokerError as e:
            await self._publish_error(e.kind, e.message)
            return False

        await self._after_change()
        return True

    async def submit_action(
        self,
        request: Union[ActionRequest, Dict[str, Any]],
    ) -> ActionResultSchema:
        """Apply a human action. Rejected while automated seats are acting."""
        if not isinstance(request, ActionRequest):
            request = ActionRequest.model_validate(request)
        player_id = self.human_id if request.player_id is None else request.player_id

        if self.is_busy:
            result = ActionResultSchema(
                success=False,
                message="Waiting for other players",
                player_id=player_id,
                error="illegal_action",
            )
        else:
            result = self._result_schema(
                self.game.submit_action(player_id, request.action_type, request.amount)
            )

        if not result.success:
            await self._publish_error(result.error or "illegal_action", result.message)
            return result

        await self._publish(ActionMessage(result=result))
        await self._after_change()
        return result

    async def reset_to_setup(self) -> None:
        """Abandon the table. Pending automated turns are cancelled."""
        await self._cancel_automation()
        self.game.reset_to_setup()
        await self._publish_state()

    async def wait_idle(self) -> None:
        """Wait until the automated seats have finished acting."""
        task = self._bot_task
        if task is not None:
            await task

    # ------------------------------------------------------------------
    # Automation
    # ------------------------------------------------------------------

    async def _after_change(self) -> None:
        await self._publish_state()
        if self.game.is_automated_turn():
            self._bot_task = asyncio.create_task(self._run_automated())
        elif self.game.phase == GamePhase.SHOWDOWN:
            await self._publish_result()

    async def _run_automated(self) -> None:
        game = self.game
        try:
            while game.is_automated_turn():
                delay = self._think_delay()
                await self._publish(ThinkingMessage(player_id=game.current_player.player_id, delay=delay))
                await asyncio.sleep(delay)

                result = game.play_automated_turn()
                if result is None:
                    break
                await self._publish(ActionMessage(result=self._result_schema(result)))
                await self._publish_state()

            if game.phase == GamePhase.SHOWDOWN:
                await self._publish_result()
        finally:
            if self._bot_task is asyncio.current_task():
                self._bot_task = None

    def _think_delay(self) -> float:
        config = self.game.config
        if config.think_delay_max <= 0:
            return 0.0
        return self._delay_rng.uniform(config.think_delay_min, config.think_delay_max)

    async def _cancel_automation(self) -> None:
        task, self._bot_task = self._bot_task, None
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
            logger.info("Automated turns cancelled")

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    @staticmethod
    def _result_schema(result: ActionResult) -> ActionResultSchema:
        return ActionResultSchema.model_validate(asdict(result))

    async def _publish_state(self) -> None:
        await self._publish(StateMessage(state=self.snapshot()))

    async def _publish_result(self) -> None:
        state = self.snapshot()
        await self._publish(ResultMessage(
            winners=state.winners,
            showdown=state.showdown,
            board=state.public_info.board,
        ))

    async def _publish_error(self, kind: str, message: str) -> None:
        await self._publish(ErrorMessage(error=kind, message=message))

    async def _publish(self, message: BaseModel) -> None:
        """Deliver a message to every subscriber."""
        for callback in list(self._subscribers):
            try:
                outcome = callback(message)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:
                logger.error(f"Error delivering {message.type} message: {e}")

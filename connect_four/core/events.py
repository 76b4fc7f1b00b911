import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class GameEvents:
    def __init__(self):
        self._on_complete_listeners: List[Callable] = []

    def subscribe_complete(self, callback: Callable):
        self._on_complete_listeners.append(callback)

    async def notify_complete(self, session):
        # A failing listener must not break the move that finished the game
        for listener in self._on_complete_listeners:
            try:
                await listener(session)
            except Exception:
                logger.exception("Event listener error for game %s", session.game_id)

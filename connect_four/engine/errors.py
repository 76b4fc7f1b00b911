from enum import StrEnum


class RejectReason(StrEnum):
    OUT_OF_RANGE = "OUT_OF_RANGE"
    COLUMN_FULL = "COLUMN_FULL"
    GAME_ALREADY_OVER = "GAME_ALREADY_OVER"


class MoveRejected(ValueError):
    """Raised when a move cannot be applied. No state is produced."""

    def __init__(self, reason: RejectReason, column):
        self.reason = reason
        self.column = column
        super().__init__(f"Invalid move: column {column} ({reason})")


class GameNotFound(LookupError):
    def __init__(self, game_id: int):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found")


class NotPlayersTurn(ValueError):
    """A human move was sent while the seat to move belongs to the AI."""

    def __init__(self, game_id: int, player: int):
        self.game_id = game_id
        self.player = player
        super().__init__(f"Game {game_id}: player {player} is not controlled by a human")

from enum import StrEnum

class GameStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DRAW = "DRAW"

class GameMode(StrEnum):
    LOCAL_MULTIPLAYER = "LOCAL_MULTIPLAYER"
    SINGLE_PLAYER = "SINGLE_PLAYER"
    REMOTE_MULTIPLAYER = "REMOTE_MULTIPLAYER"

class PlayerType(StrEnum):
    HUMAN = "human"
    AI = "ai"
    REMOTE = "remote"

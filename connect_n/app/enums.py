from enum import StrEnum

class GameStatus(StrEnum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DRAW = "DRAW"

class PlayerType(StrEnum):
    HUMAN = "human"
    COMPUTER = "computer"

class FirstPlayer(StrEnum):
    HUMAN = "human"
    COMPUTER = "computer"
    RANDOM = "random"

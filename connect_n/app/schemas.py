from pydantic import BaseModel, ConfigDict
from typing import Optional

class MoveRecord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    player: int
    column: int
    row: int

    # Only filled in for computer moves
    score: Optional[float] = None
    nodes_explored: Optional[int] = None
    duration: Optional[float] = None

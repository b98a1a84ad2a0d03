"""
Dice Rogue - Query Models

Pydantic models for the snapshots a host reads from a battle: dice in
hand, pool status, hand counter and the last score.
"""

from pydantic import BaseModel, Field


class DieStatus(BaseModel):
    """One die as shown in the current hand."""

    name: str
    variant: str
    tier: str
    value: int = Field(ge=0)
    locked: bool = False
    is_filler: bool = False


class PoolStatusEntry(BaseModel):
    """One pool slot as shown in the pool panel."""

    slot: int = Field(ge=0)
    name: str
    tier: str
    cost: int = Field(ge=0)
    cooldown_remaining: int = Field(ge=0)
    available: bool


class HandCounter(BaseModel):
    """Hands played and remaining in the current cycle."""

    current: int = Field(ge=0)
    remaining: int = Field(ge=0)

    @property
    def total(self) -> int:
        return self.current + self.remaining


class ScoreReport(BaseModel):
    """Result of the most recent submission."""

    values: list[int] = Field(default_factory=list)
    combo_name: str
    combo_multiplier: float
    dice_multiplier: float = Field(ge=1.0)
    multiplier_breakdown: str = ""
    score: int
    summary: str = ""


class BattleSnapshot(BaseModel):
    """Everything a renderer needs to draw the battle."""

    hand: list[DieStatus] = Field(default_factory=list)
    pool: list[PoolStatusEntry] = Field(default_factory=list)
    hand_counter: HandCounter
    rolls_used: int = Field(ge=0)
    max_rolls: int = Field(ge=1)
    hand_active: bool
    last_score: ScoreReport | None = None

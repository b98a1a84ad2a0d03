"""
Dice Rogue Game Engine.

Pure Python battle rules with zero UI/persistence dependencies.
Handles dice rolling, special effects, cooldown rotation and combo scoring.
"""

from dicerogue.engine.base import (
    ComboType,
    DiceTier,
    DiceVariant,
    Die,
    VariantSpec,
)
from dicerogue.engine.battle import ActionResult, BattleSession
from dicerogue.engine.catalog import (
    VARIANT_SPECS,
    create_die,
    create_die_by_id,
    create_random_pool,
    reward_options,
)
from dicerogue.engine.cooldown import CooldownScheduler
from dicerogue.engine.dice import DiceEngine
from dicerogue.engine.effects import EffectResolver
from dicerogue.engine.evaluator import HandEvaluator, HandResult
from dicerogue.engine.events import BattleEvent, EventPayload, EventQueue
from dicerogue.engine.hand import HandState
from dicerogue.engine.multipliers import MultiplierCalculator, MultiplierResult

__all__ = [
    # Data Classes
    "Die",
    "VariantSpec",
    "HandState",
    "HandResult",
    "MultiplierResult",
    "ActionResult",
    "EventPayload",
    # Enums
    "ComboType",
    "DiceTier",
    "DiceVariant",
    "BattleEvent",
    # Engines
    "DiceEngine",
    "EffectResolver",
    "MultiplierCalculator",
    "HandEvaluator",
    "CooldownScheduler",
    "BattleSession",
    "EventQueue",
    # Catalog
    "VARIANT_SPECS",
    "create_die",
    "create_die_by_id",
    "create_random_pool",
    "reward_options",
]

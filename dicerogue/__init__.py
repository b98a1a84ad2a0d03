"""
Dice Rogue.

Turn-based dice-rogue battle engine: rotating 8-die pool, rerolls,
special dice effects and poker-like combo scoring.
"""

__version__ = "0.1.0"

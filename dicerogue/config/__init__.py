"""
Dice Rogue Configuration.

Environment variables, settings, and logging configuration.
"""

from dicerogue.config.settings import BattleSettings, configure_logging, get_settings

__all__ = ["BattleSettings", "configure_logging", "get_settings"]

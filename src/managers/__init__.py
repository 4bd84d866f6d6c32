"""
Managers for configuration and effect definitions
"""

from .config_manager import ConfigManager
from .effect_manager import EffectManager

__all__ = ['ConfigManager', 'EffectManager']

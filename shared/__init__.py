"""
EnigmaCore Shared Module
=========================

Configuration and logging infrastructure shared across EnigmaCore
components.
"""

from shared.config import EnigmaConfig, get_config
from shared.logger import EnigmaLogger

__all__ = ["EnigmaConfig", "EnigmaLogger", "get_config"]

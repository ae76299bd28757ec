# panda/config/__init__.py
"""
Configuration store.

Holds the directories, pandoc options and subdirectory filter for a
workspace. Values are captured interactively once (``panda init``) and
replayed on every later run.
"""

from .loader import config_exists, load_config, load_config_dict, save_config
from .schema import PandaConfig, SubdirectoryMode

__all__ = [
    "PandaConfig",
    "SubdirectoryMode",
    "config_exists",
    "load_config",
    "load_config_dict",
    "save_config",
]

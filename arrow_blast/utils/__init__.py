"""
Utility modules.
"""

from .config_loader import Config, load_config, save_config, config_from_dict
from .logger_config import configure_logging

__all__ = [
    'Config',
    'config_from_dict',
    'configure_logging',
    'load_config',
    'save_config',
]

"""
Accumulator configuration
Values are read from the environment once, at import time.
"""

import logging
import os

# Defaults
DEFAULT_CURVE = os.getenv('ACCUMULATOR_CURVE', 'BN254')
DEFAULT_LOG_LEVEL = os.getenv('ACCUMULATOR_LOG_LEVEL', 'WARNING')


class Config:
    """Runtime configuration for the accumulator package."""

    def __init__(self, curve=None, log_level=None):
        self.curve = (curve or DEFAULT_CURVE).upper()
        self.log_level = (log_level or DEFAULT_LOG_LEVEL).upper()

    @property
    def numeric_log_level(self):
        return getattr(logging, self.log_level, logging.WARNING)


# Global configuration instance
config = Config()

"""
Models package for the peer certificate verifier.
"""

from .config import Config, ConfigValidationError, ConfigValidationResult

__all__ = [
    'Config',
    'ConfigValidationError',
    'ConfigValidationResult'
]

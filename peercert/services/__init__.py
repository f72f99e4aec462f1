"""
Services package for the peer certificate verifier.
"""

from .config_service import ConfigService
from .logging_service import LoggingService, JSONFormatter

__all__ = [
    'ConfigService',
    'LoggingService',
    'JSONFormatter'
]

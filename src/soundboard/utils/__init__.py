"""
Utilities package - Common utilities for the soundboard
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
]

"""
Data sources module for the quote service.
Provides the game registry and the remote static quote-file source.
"""

from .game_registry import GameRegistry
from .quote_source import QuoteSource

__all__ = ['GameRegistry', 'QuoteSource']

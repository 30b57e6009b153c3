"""
API module for the quote service.
Provides the FastAPI-based HTTP surface for random quotes and statistics.
"""

__all__ = ['app', 'routes', 'models', 'middleware', 'responses']

"""
dropfour/ai/__init__.py - Computer players

Minimax search with alpha-beta pruning and the player that uses it.
"""

from dropfour.ai.minimax import MinimaxPlayer, MinimaxSearch, SearchResult, evaluate

__all__ = ['MinimaxPlayer', 'MinimaxSearch', 'SearchResult', 'evaluate']

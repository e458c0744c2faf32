"""
gamesearch - Search strategies for two-player perfect-information games

This package provides a game contract that any deterministic two-player
board game can implement, a Connect Four engine implementing it, and two
move-selection strategies written against the contract: exhaustive negamax
search and Monte-Carlo random playouts.
"""

# Version number
__version__ = '0.1.0'

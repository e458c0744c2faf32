"""
gamesearch.ai - Move-selection strategies

Both strategies accept any state implementing gamesearch.game.contract.Game.
"""

from gamesearch.ai.base import GameStrategy
from gamesearch.ai.brute_force import BruteForce
from gamesearch.ai.mcts import MCTS

__all__ = ['GameStrategy', 'BruteForce', 'MCTS']

"""
gamesearch.game - Game contract and the Connect Four engine

The Gymnasium environment lives in gamesearch.game.env and is not imported
here, since it depends on the search strategies.
"""

from gamesearch.game.contract import Game, GameRules, GameState
from gamesearch.game.connect_four import ConnectFour

__all__ = ['Game', 'GameRules', 'GameState', 'ConnectFour']

"""Arena survival shooter - simulation engine and Gymnasium wrapper"""

from .engine import Game, SessionState, InputSnapshot, HudState, GameOverSummary, Drawable
from .entities import Player, Bullet, Enemy
from .viewport import Viewport
from .survival_env import SurvivalEnv, run_random_episode

__all__ = [
    'Game', 'SessionState', 'InputSnapshot', 'HudState', 'GameOverSummary', 'Drawable',
    'Player', 'Bullet', 'Enemy', 'Viewport',
    'SurvivalEnv', 'run_random_episode',
]

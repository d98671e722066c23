from .categories import CategoriesView
from .player import PlayerView
from .saved import SavedView

__all__ = ["CategoriesView", "PlayerView", "SavedView"]

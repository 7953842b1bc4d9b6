from fiery_dragons.config.game import GameConfig

__all__ = ["GameConfig"]

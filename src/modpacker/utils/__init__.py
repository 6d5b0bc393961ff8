from .env_manager import MINECRAFT_HOME_ENV, EnvManager
from .fs import current_umask, published_mode, remove_tree

__all__ = [
    "EnvManager",
    "MINECRAFT_HOME_ENV",
    "current_umask",
    "published_mode",
    "remove_tree",
]

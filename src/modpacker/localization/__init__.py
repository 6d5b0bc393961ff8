from .messages import get_language, get_message, set_language, tr

__all__ = ["get_language", "get_message", "set_language", "tr"]

from .factory import start_keyboard

__all__ = ["start_keyboard"]

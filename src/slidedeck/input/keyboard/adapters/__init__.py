from .base import IKeyboardAdapter
from .dummy import DummyKeyboardAdapter

__all__ = ["IKeyboardAdapter", "DummyKeyboardAdapter"]

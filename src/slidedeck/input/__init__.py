"""
Input sources

Keyboard adapters and pointer clicks publish raw input events; the
InputService turns them into navigation actions.
"""

from slidedeck.input.bindings import KeyBindings
from slidedeck.input.input_service import InputService
from slidedeck.input.pointer import pointer_action

__all__ = ["KeyBindings", "InputService", "pointer_action"]

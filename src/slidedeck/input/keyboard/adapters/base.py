from typing import Protocol


class IKeyboardAdapter(Protocol):
    """
    Keyboard input abstraction.

    Implementations:
    - publish KeyboardKeyPressEvent to EventBus
    - block until cancelled
    - raise RuntimeError when the input device cannot be used
    """

    async def run(self) -> None:
        ...

"""
Key Bindings

Maps normalised key names (as published by the keyboard adapters) to
navigation action types.
"""

from typing import Dict, Iterable, List, Optional

from slidedeck.models.config import DEFAULT_KEY_BINDINGS, KeyBinding
from slidedeck.models.enums import NavActionType
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.INPUT)


class KeyBindings:
    """
    Key name → NavActionType lookup.

    Key names are matched case-insensitively. When two bindings claim the
    same key, the later one wins.

    Example:
        bindings = KeyBindings(DEFAULT_KEY_BINDINGS)
        bindings.action_for("right")    # NavActionType.GO_NEXT
        bindings.action_for("Q")        # None
    """

    def __init__(self, bindings: Iterable[KeyBinding] = DEFAULT_KEY_BINDINGS):
        self._by_key: Dict[str, NavActionType] = {}
        for binding in bindings:
            for key in binding.keys:
                normalized = key.upper()
                if normalized in self._by_key and self._by_key[normalized] != binding.action:
                    log.warn(
                        "Key rebound",
                        key=normalized,
                        previous=self._by_key[normalized].name,
                        action=binding.action.name,
                    )
                self._by_key[normalized] = binding.action

    def action_for(self, key: str) -> Optional[NavActionType]:
        return self._by_key.get(key.upper())

    def keys_for(self, action: NavActionType) -> List[str]:
        return [key for key, bound in self._by_key.items() if bound == action]

    def __len__(self) -> int:
        return len(self._by_key)

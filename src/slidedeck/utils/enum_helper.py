"""Enum parsing for config values"""

from enum import Enum
from typing import List, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Config-friendly enum lookups.

    YAML authors write action names in whatever form reads best, so
    'GO_NEXT', 'go-next' and 'Go Next' all resolve to the same member.
    """

    @staticmethod
    def normalize(name: str) -> str:
        return str(name).strip().replace("-", "_").replace(" ", "_").upper()

    @staticmethod
    def from_string(enum_class: Type[E], name: str, default: Optional[E] = None) -> E:
        """
        Parse a member name, case-insensitively.

        Raises:
            ValueError: unknown name and no default given
        """
        wanted = EnumHelper.normalize(name)
        for member in enum_class:
            if member.name.upper() == wanted:
                return member

        if default is not None:
            return default
        raise ValueError(
            f"Invalid {enum_class.__name__} name: {name} "
            f"(expected one of {', '.join(EnumHelper.list_names(enum_class))})"
        )

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        names = [member.name for member in enum_class]
        return [n.lower() for n in names] if lowercase else names

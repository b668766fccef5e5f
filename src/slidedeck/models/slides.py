"""Slide catalog domain models"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Tuple


@dataclass(frozen=True)
class Slide:
    """
    One ordered group of fragments displayed together.

    Fragment contents are opaque to the engine: whatever the host supplies
    (strings, pre-rendered markup, widgets) is passed through unchanged to
    the render tree.
    """
    fragments: Tuple[Any, ...] = ()

    @property
    def fragment_count(self) -> int:
        return len(self.fragments)


EMPTY_SLIDE = Slide()


@dataclass(frozen=True)
class SlideCatalog:
    """
    Immutable, ordered list of slides supplied at startup.

    Lookups never fail: an out-of-range index yields EMPTY_SLIDE and every
    bound computation floors at 0, so an empty deck or a slide with no
    fragments still produces a valid (empty) presentation.
    """
    slides: Tuple[Slide, ...] = field(default_factory=tuple)

    @classmethod
    def from_lists(cls, slides: Iterable[Iterable[Any]]) -> "SlideCatalog":
        """Build a catalog from nested iterables: [[fragment, ...], ...]"""
        return cls(tuple(Slide(tuple(fragments)) for fragments in slides))

    def __len__(self) -> int:
        return len(self.slides)

    def get(self, index: int) -> Slide:
        if 0 <= index < len(self.slides):
            return self.slides[index]
        return EMPTY_SLIDE

    @property
    def last_index(self) -> int:
        return max(0, len(self.slides) - 1)

    def fragment_count(self, index: int) -> int:
        return self.get(index).fragment_count

    def last_fragment_index(self, index: int) -> int:
        return max(0, self.fragment_count(index) - 1)

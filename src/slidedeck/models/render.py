"""
Render tree models

Immutable output of RenderCompositor.compose(). Renderers walk this tree;
presentation attributes are whatever the injected styles returned.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from slidedeck.models.config import Size
from slidedeck.models.motion import MotionDescriptor, Still

PresentationAttributes = Dict[str, Any]


@dataclass(frozen=True)
class RenderedFragment:
    index: int
    content: Any
    completion: float
    attributes: PresentationAttributes = field(default_factory=dict)

    @property
    def visible(self) -> bool:
        return self.completion > 0.0


@dataclass(frozen=True)
class RenderedSlide:
    index: int
    motion: MotionDescriptor
    fragments: Tuple[RenderedFragment, ...] = ()
    attributes: PresentationAttributes = field(default_factory=dict)

    @property
    def is_still(self) -> bool:
        return isinstance(self.motion, Still)


@dataclass(frozen=True)
class RenderTree:
    """
    One composition frame.

    Attributes:
        scale: uniform scale-to-fit factor applied to the whole composition
        design_size: size slides are authored for
        viewport: current viewport size
        slides: one slide when still, two (earlier first) while moving
    """
    scale: float
    design_size: Size
    viewport: Size
    slides: Tuple[RenderedSlide, ...] = ()

    @property
    def is_moving(self) -> bool:
        return len(self.slides) > 1

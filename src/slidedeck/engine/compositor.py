"""
Render Compositor

Turns a NavigationSnapshot into a RenderTree: which one or two slides are
visible, their motion descriptors, and how far each fragment of the active
slide is revealed. Pure with respect to the snapshot; presentation
attributes come from the styles injected through PresentationConfig.
"""

import math

from slidedeck.engine.easing import EasingFunction, ease_linear, flip
from slidedeck.engine.navigation import NavigationSnapshot
from slidedeck.engine.position_animator import clamp
from slidedeck.models.config import PresentationConfig, Size
from slidedeck.models.enums import MotionDirection, MotionOrder
from slidedeck.models.motion import MotionDescriptor, Moving, STILL
from slidedeck.models.render import RenderedFragment, RenderedSlide, RenderTree
from slidedeck.models.slides import SlideCatalog

# Pushes an exactly-integral position below the integer when moving backwards,
# so floor() lands on the slide being entered rather than the one being left
BACKWARD_EPSILON = 1e-6


def scale_to_fit(viewport: Size, design: Size) -> float:
    """Uniform scale that fits the design size inside the viewport"""
    if design.width <= 0 or design.height <= 0:
        return 1.0
    return min(viewport.width / design.width, viewport.height / design.height)


def fragment_completion(fragment_position: float, index: int) -> float:
    return clamp(0.0, 1.0, 1.0 + fragment_position - index)


class RenderCompositor:
    """
    Builds the render tree for one instant.

    Still:  one slide at the slide target, fragment i revealed by
            clamp(0, 1, 1 + fragment_position - i)
    Moving: the two slides bracketing the slide position; the earlier one
            fully revealed, the later one showing only its first fragment

    Example:
        compositor = RenderCompositor(config)
        tree = compositor.compose(machine.snapshot())
    """

    def __init__(self, config: PresentationConfig):
        self.config = config

    def compose(self, snapshot: NavigationSnapshot) -> RenderTree:
        if snapshot.slide.is_moving:
            slides = self._compose_moving(snapshot)
        else:
            slides = (self._compose_still(snapshot),)

        return RenderTree(
            scale=scale_to_fit(snapshot.viewport, self.config.design_size),
            design_size=self.config.design_size,
            viewport=snapshot.viewport,
            slides=slides,
        )

    # ------------------------------------------------------------
    # Still
    # ------------------------------------------------------------

    def _compose_still(self, snapshot: NavigationSnapshot) -> RenderedSlide:
        index = snapshot.slide.target
        fragment_position = snapshot.fragment.current
        fragments = snapshot.catalog.get(index).fragments
        completions = [fragment_completion(fragment_position, i) for i in range(len(fragments))]
        return self._render_slide(snapshot.catalog, index, STILL, completions)

    # ------------------------------------------------------------
    # Moving
    # ------------------------------------------------------------

    def _compose_moving(self, snapshot: NavigationSnapshot):
        current = snapshot.slide.current
        distance = snapshot.slide.distance

        offset = BACKWARD_EPSILON if distance < 0 else 0.0
        smaller = max(0, math.floor(current - offset))
        larger = smaller + 1

        easing = self._easing_for(distance)
        completion = clamp(0.0, 1.0, easing(clamp(0.0, 1.0, current - smaller)))

        if distance > 0:
            earlier_direction, later_direction = MotionDirection.OUTGOING, MotionDirection.INCOMING
        else:
            earlier_direction, later_direction = MotionDirection.INCOMING, MotionDirection.OUTGOING

        earlier = self._render_slide(
            snapshot.catalog,
            smaller,
            Moving(earlier_direction, MotionOrder.EARLIER, completion),
            [1.0] * snapshot.catalog.fragment_count(smaller),
        )
        later_count = snapshot.catalog.fragment_count(larger)
        later = self._render_slide(
            snapshot.catalog,
            larger,
            Moving(later_direction, MotionOrder.LATER, completion),
            [1.0 if i == 0 else 0.0 for i in range(later_count)],
        )
        return earlier, later

    def _easing_for(self, distance: float) -> EasingFunction:
        # A multi-slide jump (rapid re-targeting) has no single curve that fits
        if abs(distance) > 1:
            return ease_linear
        if distance > 0:
            return self.config.easing
        return flip(self.config.easing)

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def _render_slide(
        self,
        catalog: SlideCatalog,
        index: int,
        motion: MotionDescriptor,
        completions,
    ) -> RenderedSlide:
        slide = catalog.get(index)
        fragments = tuple(
            RenderedFragment(
                index=i,
                content=content,
                completion=completion,
                attributes=self.config.fragment_motion(completion),
            )
            for i, (content, completion) in enumerate(zip(slide.fragments, completions))
        )
        return RenderedSlide(
            index=index,
            motion=motion,
            fragments=fragments,
            attributes=self.config.slide_motion(motion),
        )

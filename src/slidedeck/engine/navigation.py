"""
Navigation State Machine

Owns the slide animator, the fragment animator and the paused flag, and
decides for every incoming action which animator moves and whether the
external location must be rewritten.

States are implicit in the two animators:
- idle:                    both animators at rest
- fragment-transitioning:  slide animator at rest, fragment animator moving
- slide-transitioning:     slide animator moving (fragment cursor irrelevant)

Routing rule (pure, recomputed for every action):
    slide animator   if it is already moving, or the intent is about to
                     change slides (GoFirst/GoLast, GoPrev on the first
                     fragment, GoNext on the last fragment)
    fragment animator otherwise
"""

from dataclasses import dataclass
from typing import Optional

from slidedeck.engine.position_animator import PositionAnimator, clamp
from slidedeck.models.actions import (
    GoFirst, GoLast, GoNext, GoPrev, LocationChanged, NavigationAction, Resize, Tick, TogglePause,
)
from slidedeck.models.config import PresentationConfig, Size
from slidedeck.models.enums import AnimatorID
from slidedeck.models.slides import SlideCatalog
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.NAVIGATION)


@dataclass(frozen=True)
class AnimatorState:
    """Frozen copy of a PositionAnimator"""
    initial: int
    target: int
    current: float

    @classmethod
    def of(cls, animator: PositionAnimator) -> "AnimatorState":
        return cls(animator.initial_position, animator.target_position, animator.current_position)

    @property
    def distance(self) -> float:
        return self.target - self.current

    @property
    def is_moving(self) -> bool:
        return self.current != self.target


@dataclass(frozen=True)
class NavigationSnapshot:
    """Immutable view of NavigationState handed to the compositor and host"""
    catalog: SlideCatalog
    slide: AnimatorState
    fragment: AnimatorState
    is_paused: bool
    viewport: Size


class NavigationState:
    """
    The single mutable state record of a presentation session.

    The fragment animator's bound is a derived accessor over whichever slide
    the slide animator currently targets, so the two animators cannot drift
    apart.
    """

    def __init__(self, catalog: SlideCatalog, initial_slide: int, viewport: Size):
        self.catalog = catalog
        self.slide_animator = PositionAnimator(initial_slide)
        self.fragment_animator = PositionAnimator(0)
        self.is_paused = False
        self.viewport = viewport

    @property
    def slide_max(self) -> int:
        return self.catalog.last_index

    @property
    def fragment_max(self) -> int:
        return self.catalog.last_fragment_index(self.slide_animator.target_position)

    def animator(self, animator_id: AnimatorID) -> PositionAnimator:
        if animator_id is AnimatorID.SLIDE:
            return self.slide_animator
        return self.fragment_animator

    def max_position(self, animator_id: AnimatorID) -> int:
        if animator_id is AnimatorID.SLIDE:
            return self.slide_max
        return self.fragment_max

    def snapshot(self) -> NavigationSnapshot:
        return NavigationSnapshot(
            catalog=self.catalog,
            slide=AnimatorState.of(self.slide_animator),
            fragment=AnimatorState.of(self.fragment_animator),
            is_paused=self.is_paused,
            viewport=self.viewport,
        )


# ============================================================
# Routing predicates
# ============================================================

def is_about_to_change_slides(state: NavigationState, action: NavigationAction) -> bool:
    """True when the intent can only be satisfied by moving to another slide"""
    if isinstance(action, (GoFirst, GoLast)):
        return True
    if isinstance(action, GoPrev):
        return state.fragment_animator.target_position <= 0
    if isinstance(action, GoNext):
        return state.fragment_animator.target_position >= state.fragment_max
    return False


def route(state: NavigationState, about_to_change_slides: bool) -> AnimatorID:
    if about_to_change_slides or state.slide_animator.is_moving:
        return AnimatorID.SLIDE
    return AnimatorID.FRAGMENT


# ============================================================
# State machine
# ============================================================

class NavigationStateMachine:
    """
    Applies navigation actions to the presentation state.

    handle() returns the slide index LocationSync must display, or None when
    the external location already reflects the slide target. The machine
    remembers what the location currently shows, so a LocationChanged that
    carries exactly the resulting target is never echoed back.

    Example:
        machine = NavigationStateMachine(catalog, config, initial_location=None)
        machine.pending_location_write()   # 0: corrective write at startup
        machine.handle(GoNext())           # None while on fragments
        machine.handle(Tick(16.7))
    """

    def __init__(
        self,
        catalog: SlideCatalog,
        config: PresentationConfig,
        initial_location: Optional[int] = None,
        viewport: Optional[Size] = None,
    ):
        self.config = config
        initial_slide = int(clamp(0, catalog.last_index, initial_location or 0))
        self.state = NavigationState(catalog, initial_slide, viewport or config.design_size)

        # Index the external location currently shows (None = unparseable/unknown)
        self._reflected_location: Optional[int] = initial_location

        log.info(
            "Navigation initialized",
            slides=len(catalog),
            initial_slide=initial_slide,
            location=initial_location,
        )

    # ------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------

    def handle(self, action: NavigationAction) -> Optional[int]:
        """
        Apply one action.

        Returns:
            The slide index to write to the external location, or None.
        """
        if isinstance(action, Tick):
            self._on_tick(action.delta_ms)
        elif isinstance(action, (GoFirst, GoLast, GoNext, GoPrev)):
            self._on_navigate(action)
        elif isinstance(action, TogglePause):
            self.state.is_paused = not self.state.is_paused
            log.info("Paused" if self.state.is_paused else "Resumed")
        elif isinstance(action, Resize):
            self.state.viewport = Size(action.width, action.height)
            log.debug("Viewport resized", width=action.width, height=action.height)
        elif isinstance(action, LocationChanged):
            self._on_location_changed(action.index)
        else:
            log.warn("Ignoring unknown navigation action", action=repr(action))
            return None

        return self.pending_location_write()

    def pending_location_write(self) -> Optional[int]:
        """
        Reconcile the external location with the slide target.

        Returns:
            The new index to write, or None if the location is already right.
        """
        target = self.state.slide_animator.target_position
        if self._reflected_location == target:
            return None

        self._reflected_location = target
        return target

    def invalidate_location(self) -> None:
        """Forget what the location shows so the next handle() rewrites it"""
        self._reflected_location = None

    def snapshot(self) -> NavigationSnapshot:
        return self.state.snapshot()

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    @property
    def slide_animator(self) -> PositionAnimator:
        return self.state.slide_animator

    @property
    def fragment_animator(self) -> PositionAnimator:
        return self.state.fragment_animator

    # ------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------

    def _on_navigate(self, action: NavigationAction) -> None:
        state = self.state
        animator_id = route(state, is_about_to_change_slides(state, action))
        animator = state.animator(animator_id)
        max_position = state.max_position(animator_id)
        before = animator.target_position

        if isinstance(action, GoFirst):
            animator.select_first(max_position)
        elif isinstance(action, GoLast):
            animator.select_last(max_position)
        elif isinstance(action, GoNext):
            animator.select_next(max_position)
        else:
            animator.select_prev(max_position)

        if animator.target_position != before:
            log.debug(
                f"{animator_id.name.capitalize()} target changed",
                action=action.type.name,
                target=f"{before} → {animator.target_position}",
            )

    def _on_tick(self, delta_ms: float) -> None:
        state = self.state
        if state.is_paused:
            return

        slide = state.slide_animator
        distance = slide.distance

        animator_id = route(state, False)
        state.animator(animator_id).advance(
            delta_ms,
            self.config.animation_duration_ms,
            state.max_position(animator_id),
        )

        # Entering a slide forwards starts at its first fragment, backwards at its last
        if distance > 0:
            state.fragment_animator = PositionAnimator(0)
        elif distance < 0:
            state.fragment_animator = PositionAnimator(state.catalog.last_fragment_index(slide.target_position))

        if distance != 0 and not slide.is_moving:
            log.debug("Slide transition finished", slide=slide.target_position)

    def _on_location_changed(self, index: Optional[int]) -> None:
        self._reflected_location = index

        if index is None:
            log.warn(
                "Unparseable location, restoring current slide",
                slide=self.state.slide_animator.target_position,
            )
            return

        self.state.slide_animator.select_exact(index, self.state.slide_max)
        if self.state.slide_animator.target_position != index:
            log.warn("Location out of range, clamped", requested=index, slide=self.state.slide_animator.target_position)

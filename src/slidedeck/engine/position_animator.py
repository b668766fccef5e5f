"""
Position Animator

Smooth scalar tracker: a discrete integer target plus a continuously
interpolated current value that converges toward it, tick by tick.

Used twice by the navigation engine, once for the slide index and once for
the fragment index of the active slide. Bounds are not stored: callers pass
max_position on every call because the fragment bound changes per slide.
"""


def clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


class PositionAnimator:
    """
    Discrete target, continuous current position.

    Attributes:
        initial_position: position at the start of the current animation leg
        target_position: destination index, always within [0, max_position]
        current_position: interpolated value, between initial and target

    Velocity is derived from the distance of the whole leg
    (|initial - target|), so a jump of N slides takes the same time as a
    jump of one, and the leg start is only re-anchored once the target is
    actually reached.

    Example:
        animator = PositionAnimator(0)
        animator.select_next(max_position=4)     # target = 1
        animator.advance(250, duration=500, max_position=4)
        animator.current_position                # 0.5
    """

    def __init__(self, position: int = 0):
        self.initial_position = position
        self.target_position = position
        self.current_position = float(position)

    # ------------------------------------------------------------
    # Target selection
    # ------------------------------------------------------------

    def _select(self, candidate: int, max_position: int) -> None:
        self.target_position = int(clamp(0, max(0, max_position), candidate))

    def select_exact(self, index: int, max_position: int) -> None:
        self._select(index, max_position)

    def select_first(self, max_position: int) -> None:
        self._select(0, max_position)

    def select_last(self, max_position: int) -> None:
        self._select(max_position, max_position)

    def select_next(self, max_position: int) -> None:
        self._select(self.target_position + 1, max_position)

    def select_prev(self, max_position: int) -> None:
        self._select(self.target_position - 1, max_position)

    # ------------------------------------------------------------
    # Time
    # ------------------------------------------------------------

    def advance(self, delta_time: float, duration: float, max_position: int) -> None:
        """
        Move current_position toward the target.

        Args:
            delta_time: elapsed time since the previous tick
            duration: time a one-step move takes (same unit as delta_time)
            max_position: live upper bound; the target is re-clamped to it
        """
        self._select(self.target_position, max_position)
        target = self.target_position

        if duration <= 0:
            self.snap()
            return

        total_distance = abs(self.initial_position - target)
        velocity = max(1, total_distance) / duration
        direction = _sign(target - self.current_position)
        new_position = self.current_position + delta_time * direction * velocity

        if direction > 0:
            new_position = min(new_position, target)
        elif direction < 0:
            new_position = max(new_position, target)
        else:
            new_position = float(target)

        self.current_position = float(new_position)
        if self.current_position == target:
            self.initial_position = target

    def snap(self) -> None:
        """Jump straight to the target, ending the current leg"""
        self.current_position = float(self.target_position)
        self.initial_position = self.target_position

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    @property
    def distance(self) -> float:
        """Signed remaining travel: target - current"""
        return self.target_position - self.current_position

    @property
    def is_moving(self) -> bool:
        return self.current_position != self.target_position

    def copy(self) -> "PositionAnimator":
        clone = PositionAnimator(self.target_position)
        clone.initial_position = self.initial_position
        clone.current_position = self.current_position
        return clone

    def __eq__(self, other):
        if not isinstance(other, PositionAnimator):
            return NotImplemented
        return (
            self.initial_position == other.initial_position
            and self.target_position == other.target_position
            and self.current_position == other.current_position
        )

    def __repr__(self):
        return (
            f"PositionAnimator(initial={self.initial_position}, "
            f"target={self.target_position}, current={self.current_position:.3f})"
        )

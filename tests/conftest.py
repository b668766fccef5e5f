import pytest

from slidedeck.engine.easing import ease_in_quad
from slidedeck.engine.navigation import NavigationStateMachine
from slidedeck.models.actions import Tick
from slidedeck.models.config import PresentationConfig
from slidedeck.models.slides import SlideCatalog
from slidedeck.services.event_bus import EventBus


@pytest.fixture
def catalog():
    """
    Five slides; fragment counts 1, 2, 3, 1, 2.
    """
    return SlideCatalog.from_lists([
        ["title"],
        ["a1", "a2"],
        ["b1", "b2", "b3"],
        ["c1"],
        ["d1", "d2"],
    ])


@pytest.fixture
def config():
    # ease_in_quad keeps eased and linear completions distinguishable
    return PresentationConfig(animation_duration_ms=500, easing=ease_in_quad)


@pytest.fixture
def machine(catalog, config):
    return NavigationStateMachine(catalog, config, initial_location=0)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def settle():
    """Tick a machine until both animators rest; returns the number of ticks used."""

    def _settle(machine, step_ms=50.0, max_ticks=200):
        for n in range(1, max_ticks + 1):
            machine.handle(Tick(step_ms))
            if not machine.slide_animator.is_moving and not machine.fragment_animator.is_moving:
                return n
        raise AssertionError(f"machine did not settle within {max_ticks} ticks")

    return _settle

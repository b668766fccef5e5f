"""
Presentation Service

Runs one presentation session:
  - owns the NavigationStateMachine (the only mutable navigation state)
  - applies NavigationActionEvents and LocationChangedEvents from the bus
  - drives the clock loop (delta-time ticks at the target fps)
  - composes a RenderTree each frame and hands it to the renderer
  - forwards location writes to LocationSync
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional, Protocol

from slidedeck.engine.compositor import RenderCompositor
from slidedeck.engine.navigation import NavigationSnapshot, NavigationStateMachine
from slidedeck.models.actions import LocationChanged, NavigationAction, Resize, Tick
from slidedeck.models.config import PresentationConfig, Size
from slidedeck.models.events import (
    EventType,
    LocationChangedEvent,
    LocationUpdatedEvent,
    NavigationActionEvent,
)
from slidedeck.models.render import RenderTree
from slidedeck.models.slides import SlideCatalog
from slidedeck.services.event_bus import EventBus
from slidedeck.services.location_sync import LocationSync, format_location, parse_location
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


class Renderer(Protocol):
    def render(self, tree: RenderTree) -> None:
        ...


class PresentationService:
    """
    Session wiring around the navigation engine.

    Example:
        bus = EventBus()
        sync = MemoryLocationSync(bus, initial="#2")
        service = PresentationService(catalog, config, bus, sync, renderer)
        await service.start()       # clock loop running
        await bus.publish(NavigationActionEvent(GoNext()))
        await service.stop()
    """

    # Seconds before a failed location write is attempted again
    location_retry_s = 1.0

    def __init__(
        self,
        catalog: SlideCatalog,
        config: PresentationConfig,
        event_bus: EventBus,
        location_sync: LocationSync,
        renderer: Optional[Renderer] = None,
        viewport: Optional[Size] = None,
    ):
        self.config = config
        self.event_bus = event_bus
        self.location_sync = location_sync
        self.renderer = renderer

        self.machine = NavigationStateMachine(
            catalog,
            config,
            initial_location=parse_location(location_sync.read()),
            viewport=viewport,
        )
        self.compositor = RenderCompositor(config)

        self.fps = max(1, min(config.fps, 240))
        self.running = False
        self.render_task: Optional[asyncio.Task] = None
        self.last_tick_time = time.perf_counter()
        self.last_tree: Optional[RenderTree] = None
        self.frames_rendered = 0
        self._location_retry_at: Optional[float] = None

        event_bus.subscribe(EventType.NAVIGATION_ACTION, self._on_navigation_action)
        event_bus.subscribe(EventType.LOCATION_CHANGED, self._on_location_changed)

    # === Lifecycle ===

    async def start(self) -> None:
        """Reconcile the startup location, render once and start the clock loop."""
        if self.running:
            log.warn("PresentationService already running")
            return

        await self._write_location(self.machine.pending_location_write())
        self.render()

        self.running = True
        self.last_tick_time = time.perf_counter()
        self.render_task = asyncio.create_task(self._clock_loop())
        log.info(f"Clock loop started @ {self.fps} FPS", config=repr(self.config))

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self.render_task:
            self.render_task.cancel()
            try:
                await self.render_task
            except asyncio.CancelledError:
                pass
            self.render_task = None

        log.info("Clock loop stopped", frames_rendered=self.frames_rendered)

    # === Actions ===

    async def dispatch(self, action: NavigationAction) -> None:
        """Apply one action to the state machine and perform any location write."""
        if self._location_retry_at is not None and time.perf_counter() >= self._location_retry_at:
            self._location_retry_at = None
            self.machine.invalidate_location()
        await self._write_location(self.machine.handle(action))

    async def resize(self, width: float, height: float) -> None:
        await self.dispatch(Resize(width, height))

    async def tick(self, delta_ms: float) -> None:
        await self.dispatch(Tick(delta_ms))

    async def _on_navigation_action(self, event: NavigationActionEvent) -> None:
        await self.dispatch(event.action)

    async def _on_location_changed(self, event: LocationChangedEvent) -> None:
        await self.dispatch(LocationChanged(event.index))

    async def _write_location(self, index: Optional[int]) -> None:
        if index is None:
            return
        try:
            await self.location_sync.write(index)
        except OSError as e:
            # The location keeps its old value; retried on a later action
            log.error(
                "Location write failed",
                category=LogCategory.LOCATION,
                index=index,
                error=str(e),
                retry_in=f"{self.location_retry_s:g}s",
            )
            self._location_retry_at = time.perf_counter() + self.location_retry_s
            return

        location = format_location(index)
        log.info("Location updated", category=LogCategory.LOCATION, location=location)
        await self.event_bus.publish(LocationUpdatedEvent(index, location))

    # === Rendering ===

    def snapshot(self) -> NavigationSnapshot:
        return self.machine.snapshot()

    def compose(self) -> RenderTree:
        return self.compositor.compose(self.machine.snapshot())

    def geometry(self):
        """(viewport, design_size) for pointer classification"""
        return self.machine.state.viewport, self.config.design_size

    def render(self) -> Optional[RenderTree]:
        """Compose and hand the tree to the renderer if anything changed."""
        tree = self.compose()
        if tree == self.last_tree:
            return None

        self.last_tree = tree
        if self.renderer is not None:
            self.renderer.render(tree)
        self.frames_rendered += 1
        return tree

    async def _clock_loop(self) -> None:
        """Tick the engine with measured elapsed time and render each frame."""
        frame_delay = 1.0 / self.fps

        while self.running:
            now = time.perf_counter()
            delta_ms = (now - self.last_tick_time) * 1000.0
            self.last_tick_time = now

            try:
                await self.tick(delta_ms)
                self.render()
            except Exception as e:
                log.error(f"Frame error: {e}", category=LogCategory.RENDER)

            await asyncio.sleep(frame_delay)

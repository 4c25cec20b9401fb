"""
Desktop window for Theo Runner using pygame.

Owns the frame loop: samples input, ticks the session once per frame,
drains the emitted events through the bus and draws the snapshot.

Keyboard Mapping:
    SPACE / UP / click: Jump (also starts and restarts)
    R: Restart after a crash
    M: Toggle sound
    ESC / Q: Quit
"""

import asyncio
import logging
import random
from typing import Optional

import pygame

from theorunner.core.events import Event, EventBus, EventType, jump_input_event, restart_input_event
from theorunner.core.state import State
from theorunner.engine.session import (
    Session,
    get_render_snapshot,
    on_jump_input,
    on_restart_input,
    tick,
)
from theorunner.graphics.primitives import new_buffer
from theorunner.graphics.renderer import render_frame, shake_offset
from theorunner.settings import DisplaySettings

logger = logging.getLogger(__name__)

TITLE = "Theo Runner"
HUD_COLOR = (60, 60, 60)
PANEL_COLOR = (255, 255, 255)
START_COLOR = (255, 182, 193)
GAME_OVER_COLOR = (255, 107, 107)
SUBTITLE_COLOR = (102, 102, 102)


class RunnerWindow:
    """Runs a session in a pygame window until the player quits."""

    def __init__(
        self,
        session: Session,
        event_bus: EventBus,
        display: Optional[DisplaySettings] = None,
    ) -> None:
        self.session = session
        self.event_bus = event_bus
        self.display = display or DisplaySettings()

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None
        self._title_font: Optional[pygame.font.Font] = None
        self._running = False
        self._frame_count = 0
        self._fx_rng = random.Random()

        self._field_width = self.display.field_width
        self._buffer = new_buffer(self.display.field_width, self.display.field_height)

        self.session.state.add_listener(self._on_mode_changed)
        self.event_bus.subscribe(EventType.JUMP_INPUT, self._on_jump)
        self.event_bus.subscribe(EventType.RESTART_INPUT, self._on_restart)

        logger.info("RunnerWindow created")

    # ----- Input -----

    def _on_jump(self, _event: Event) -> None:
        for event in on_jump_input(self.session):
            self.event_bus.queue_event(event)

    def _on_restart(self, _event: Event) -> None:
        for event in on_restart_input(self.session):
            self.event_bus.queue_event(event)

    def _on_mode_changed(self, old: State, new: State) -> None:
        self.event_bus.queue_event(Event(
            EventType.MODE_CHANGED,
            data={"from": old.name, "to": new.name},
            source="session",
        ))

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(TITLE)

        flags = pygame.DOUBLEBUF
        if self.display.fullscreen:
            flags |= pygame.FULLSCREEN

        scale = self.display.scale
        self._screen = pygame.display.set_mode(
            (self.display.field_width * scale, self.display.field_height * scale),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24 * scale)
        self._title_font = pygame.font.SysFont(None, 48 * scale, bold=True)

        logger.info(
            f"Pygame initialized: {self.display.field_width}x{self.display.field_height} "
            f"at scale {scale}"
        )

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.event_bus.emit(jump_input_event(source="mouse"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_UP):
            self.event_bus.emit(jump_input_event())
        elif key == pygame.K_r:
            self.event_bus.emit(restart_input_event())
        elif key == pygame.K_m:
            self.event_bus.emit(Event(EventType.TOGGLE_SOUND, source="keyboard"))

    # ----- Simulation -----

    def _step(self) -> None:
        result = tick(self.session, self._field_width)
        for event in result.events:
            self.event_bus.queue_event(event)
        if result.new_best:
            self.event_bus.queue_event(Event(
                EventType.NEW_BEST,
                data={"best_score": self.session.best_score},
                source="session",
            ))

    # ----- Rendering -----

    def _render(self) -> None:
        if not self._screen:
            return

        snapshot = get_render_snapshot(self.session)
        tail_phase = pygame.time.get_ticks() / 200.0
        render_frame(self._buffer, snapshot, self.session.tuning, tail_phase)

        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        scale = self.display.scale
        if scale != 1:
            surface = pygame.transform.scale(
                surface, (self._buffer.shape[1] * scale, self._buffer.shape[0] * scale)
            )

        dx, dy = shake_offset(snapshot, self._fx_rng)
        self._screen.fill((0, 0, 0))
        self._screen.blit(surface, (dx * scale, dy * scale))

        self._render_hud(snapshot.score, snapshot.best_score)
        if snapshot.mode == State.NOT_STARTED:
            self._render_overlay("THEO RUNNER", "Press SPACE or Tap to Start!", START_COLOR)
        elif snapshot.mode == State.ENDED:
            self._render_overlay(
                "GAME OVER",
                f"Score: {snapshot.score} | Press R or Tap to Restart",
                GAME_OVER_COLOR,
            )

        pygame.display.flip()

    def _render_hud(self, score: int, best: int) -> None:
        if not self._font:
            return
        text = self._font.render(f"Score: {score}   Best: {best}", True, HUD_COLOR)
        self._screen.blit(text, (12 * self.display.scale, 10 * self.display.scale))

    def _render_overlay(self, title: str, subtitle: str, color: tuple) -> None:
        if not self._font or not self._title_font:
            return
        w, h = self._screen.get_size()
        scale = self.display.scale
        panel = pygame.Rect(0, 0, 360 * scale, 120 * scale)
        panel.center = (w // 2, h // 2)
        pygame.draw.rect(self._screen, PANEL_COLOR, panel, border_radius=20 * scale)

        title_surface = self._title_font.render(title, True, color)
        self._screen.blit(title_surface, title_surface.get_rect(center=(w // 2, h // 2 - 20 * scale)))
        sub_surface = self._font.render(subtitle, True, SUBTITLE_COLOR)
        self._screen.blit(sub_surface, sub_surface.get_rect(center=(w // 2, h // 2 + 25 * scale)))

    # ----- Loop -----

    async def run(self) -> None:
        """Main frame loop: one simulation tick per displayed frame."""
        self._init_pygame()
        self._running = True

        logger.info("Runner window started")

        try:
            while self._running:
                self._handle_events()
                self._step()

                await self.event_bus.process_queue()

                self._render()

                if self._clock:
                    self._clock.tick(self.display.fps)

                self._frame_count += 1

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info(f"Runner window stopped after {self._frame_count} frames")

    def stop(self) -> None:
        self._running = False

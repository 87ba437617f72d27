"""
Desktop game window using pygame.

Hosts the frame loop, turns keyboard/mouse input into request events on
the bus, and draws the playfield buffer plus the menu/pause/game-over
screens and HUD.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..core.events import Event, EventBus, EventType, tick_event, viewport_resized
from ..core.state import State
from ..game.controller import GameController
from ..game.entities import CharacterVariant
from ..graphics.renderer import GameRenderer
from .hud import HudModel

logger = logging.getLogger(__name__)

VARIANTS = list(CharacterVariant)

# (state, key) -> request. Keys not listed are ignored in that state.
KEY_BINDINGS: dict[State, dict[int, EventType]] = {
    State.MENU: {
        pygame.K_SPACE: EventType.START_REQUESTED,
        pygame.K_RETURN: EventType.START_REQUESTED,
    },
    State.PLAYING: {
        pygame.K_SPACE: EventType.JUMP_REQUESTED,
        pygame.K_UP: EventType.JUMP_REQUESTED,
        pygame.K_ESCAPE: EventType.PAUSE_REQUESTED,
        pygame.K_p: EventType.PAUSE_REQUESTED,
    },
    State.PAUSED: {
        pygame.K_SPACE: EventType.RESUME_REQUESTED,
        pygame.K_RETURN: EventType.RESUME_REQUESTED,
        pygame.K_p: EventType.RESUME_REQUESTED,
        pygame.K_ESCAPE: EventType.RESUME_REQUESTED,
        pygame.K_m: EventType.MENU_REQUESTED,
    },
    State.GAME_OVER: {
        pygame.K_SPACE: EventType.RESTART_REQUESTED,
        pygame.K_RETURN: EventType.RESTART_REQUESTED,
        pygame.K_r: EventType.RESTART_REQUESTED,
        pygame.K_m: EventType.MENU_REQUESTED,
    },
}


def request_for_key(state: State, key: int) -> Optional[EventType]:
    """Map a key press to a request for the current state."""
    return KEY_BINDINGS.get(state, {}).get(key)


def playfield_size(window_w: int, window_h: int, max_w: int, max_h: int, margin: int) -> tuple[int, int]:
    """Playfield fits the window minus a margin, capped at the max size."""
    return (
        max(1, min(max_w, window_w - margin)),
        max(1, min(max_h, window_h - margin)),
    )


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 840
    height: int = 640
    title: str = "NEO FLAPPY"
    fps: int = 60
    resizable: bool = True
    max_playfield_width: int = 800
    max_playfield_height: int = 600
    margin: int = 40

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    panel_color: tuple[int, int, int] = (0, 0, 0)
    text_color: tuple[int, int, int] = (255, 255, 255)
    accent_color: tuple[int, int, int] = (255, 220, 80)


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        MENU:      LEFT/RIGHT or 1-4 pick character, SPACE/ENTER start
        PLAYING:   SPACE/UP/click jump, ESC/P pause
        PAUSED:    SPACE/ENTER/P/ESC resume, M menu
        GAME OVER: SPACE/ENTER/R restart, M menu
        Anywhere:  F1 debug overlay, F3 mute, Q quit
    """

    def __init__(
        self,
        controller: GameController,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
        audio=None,
    ) -> None:
        self.config = config or WindowConfig()
        self.controller = controller
        self.event_bus = event_bus or controller.event_bus
        self.audio = audio
        self.renderer = GameRenderer()
        self.hud = HudModel(best_score=controller.best_score)
        self._detach_hud = self.hud.attach(self.event_bus)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._variant_index = VARIANTS.index(controller.world.variant)

        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.resizable:
            flags |= pygame.RESIZABLE

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._big_font = pygame.font.SysFont(None, 64)
        self._font = pygame.font.SysFont(None, 32)
        self._small_font = pygame.font.SysFont(None, 20)

        self._apply_window_size(self.config.width, self.config.height)
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _apply_window_size(self, width: int, height: int) -> None:
        size = playfield_size(
            width, height,
            self.config.max_playfield_width,
            self.config.max_playfield_height,
            self.config.margin,
        )
        self.event_bus.emit(viewport_resized(*size))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._screen = pygame.display.set_mode(
                    (event.w, event.h), pygame.DOUBLEBUF | pygame.RESIZABLE
                )
                self._apply_window_size(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.controller.state == State.PLAYING:
                    self._request(EventType.JUMP_REQUESTED, "mouse")

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key
        state = self.controller.state

        if key == pygame.K_q:
            self._running = False
            return
        if key == pygame.K_F1:
            self._show_debug = not self._show_debug
            return
        if key == pygame.K_F3 and self.audio is not None:
            self.audio.toggle_mute()
            return

        if state == State.MENU:
            if key == pygame.K_LEFT:
                self._select_variant(self._variant_index - 1)
                return
            if key == pygame.K_RIGHT:
                self._select_variant(self._variant_index + 1)
                return
            if pygame.K_1 <= key <= pygame.K_4:
                self._select_variant(key - pygame.K_1)
                return
            if key == pygame.K_ESCAPE:
                self._running = False
                return

        request = request_for_key(state, key)
        if request is not None:
            self._request(request, "keyboard")

    def _select_variant(self, index: int) -> None:
        self._variant_index = index % len(VARIANTS)
        variant = VARIANTS[self._variant_index]
        self.event_bus.emit(Event(
            EventType.VARIANT_SELECTED, data={"variant": variant.value}, source="menu"
        ))

    def _request(self, event_type: EventType, source: str) -> None:
        self.event_bus.emit(Event(event_type, source=source))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self) -> None:
        """Render playfield, HUD and the current screen overlay."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        world = self.controller.world
        buffer = self.renderer.new_buffer(world)
        self.renderer.render(world, buffer)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))

        sw, sh = self._screen.get_size()
        origin = ((sw - surface.get_width()) // 2, (sh - surface.get_height()) // 2)
        self._screen.blit(surface, origin)
        field_rect = pygame.Rect(origin, surface.get_size())

        screen = self.hud.screen
        if screen in ("playing", "paused"):
            self._render_hud(field_rect)
        if screen == "menu":
            self._render_menu(field_rect)
        elif screen == "paused":
            self._render_pause(field_rect)
        elif screen == "gameOver":
            self._render_game_over(field_rect)

        if self._show_debug:
            self._render_debug_panel()

        pygame.display.flip()

    def _text(self, font: pygame.font.Font | None, text: str, center: tuple[int, int], color=None) -> None:
        if not font or not self._screen:
            return
        surface = font.render(text, True, color or self.config.text_color)
        self._screen.blit(surface, surface.get_rect(center=center))

    def _overlay(self, rect: pygame.Rect, alpha: int = 150) -> None:
        shade = pygame.Surface(rect.size, pygame.SRCALPHA)
        shade.fill((*self.config.panel_color, alpha))
        self._screen.blit(shade, rect.topleft)

    def _render_hud(self, rect: pygame.Rect) -> None:
        self._text(self._big_font, str(self.hud.score), (rect.centerx, rect.y + 40))

        if self.hud.power_up is None:
            return
        label_pos = (rect.x + 90, rect.y + 20)
        self._text(self._small_font, self.hud.power_up_label, label_pos, self.config.accent_color)
        bar = pygame.Rect(rect.x + 20, rect.y + 32, 140, 8)
        pygame.draw.rect(self._screen, (60, 60, 60), bar, border_radius=3)
        filled = bar.copy()
        filled.width = int(bar.width * max(0.0, min(100.0, self.hud.power_up_percent)) / 100)
        pygame.draw.rect(self._screen, self.config.accent_color, filled, border_radius=3)

    def _render_menu(self, rect: pygame.Rect) -> None:
        self._overlay(rect)
        cx = rect.centerx
        self._text(self._big_font, self.config.title, (cx, rect.y + rect.height // 4))
        self._text(self._small_font, f"BEST: {self.hud.best_score}", (cx, rect.y + rect.height // 4 + 50))

        spacing = 130
        left = cx - spacing * (len(VARIANTS) - 1) // 2
        for i, variant in enumerate(VARIANTS):
            color = self.config.accent_color if i == self._variant_index else self.config.text_color
            label = f"{i + 1} {variant.value.upper()}"
            self._text(self._font, label, (left + i * spacing, rect.centery), color)

        self._text(self._small_font, "LEFT/RIGHT to choose, SPACE to start", (cx, rect.bottom - 60))

    def _render_pause(self, rect: pygame.Rect) -> None:
        self._overlay(rect)
        self._text(self._big_font, "PAUSED", (rect.centerx, rect.centery - 30))
        self._text(self._small_font, "SPACE resume  -  M menu", (rect.centerx, rect.centery + 30))

    def _render_game_over(self, rect: pygame.Rect) -> None:
        self._overlay(rect)
        cx, cy = rect.center
        self._text(self._big_font, "GAME OVER", (cx, cy - 70), (255, 80, 80))
        self._text(self._font, f"SCORE: {self.hud.final_score}", (cx, cy - 10))
        self._text(self._font, f"BEST: {self.hud.best_score}", (cx, cy + 25))
        if self.hud.new_best:
            self._text(self._small_font, "NEW BEST!", (cx, cy + 55), self.config.accent_color)
        self._text(self._small_font, "SPACE restart  -  M menu", (cx, cy + 90))

    def _render_debug_panel(self) -> None:
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Ticks: {self.controller.driver.tick_count}",
            f"State: {self.controller.state.name}",
            f"Particles: {len(self.controller.world.particles)}",
            f"Power-ups: {len(self.controller.world.power_ups)}",
        ]
        y = 10
        for line in lines:
            if self._small_font:
                surface = self._small_font.render(line, True, self.config.text_color)
                self._screen.blit(surface, (10, y))
            y += 18

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Main frame loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            delta_ms = self._clock.get_time() if self._clock else 0
            self.controller.driver.pump(delta_ms)
            self.event_bus.emit(tick_event(delta_ms / 1000.0, self._frame_count))

            await self.event_bus.process_queue()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self._detach_hud()
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False

"""
Game state controller.

Owns the World and the tick driver, runs the per-tick pipeline
(physics -> generator -> collision/scoring -> effects) while playing,
and exposes the menu/playing/paused/gameOver transitions to the UI.
"""

import logging
import random
from typing import Callable, Optional, Protocol

from neoflappy.core.events import Event, EventBus, EventType
from neoflappy.core.loop import TickDriver
from neoflappy.core.state import State, StateContext, StateMachine
from neoflappy.game import collision, effects, generator, particles, physics
from neoflappy.game.entities import (
    CharacterVariant,
    Obstacle,
    PlayerCharacter,
    Playfield,
    PowerUp,
    World,
)
from neoflappy.game.particles import ParticlePresets
from neoflappy.settings import TuningSettings
from neoflappy.utils.score_store import BEST_SCORE_KEY, MemoryScoreStore, ScoreStore

logger = logging.getLogger(__name__)


class JumpCue(Protocol):
    """Audio collaborator. Fire-and-forget."""

    def play_jump_cue(self) -> None: ...


class GameController:
    """
    Top-level game state machine.

    Lifecycle:
        start()          menu/gameOver -> playing (full reset)
        pause()          playing -> paused
        resume()         paused -> playing
        return_to_menu() playing/paused/gameOver -> menu
        end()            playing -> gameOver (collision engine)

    Calls from a state that does not allow them are ignored and return False.
    """

    def __init__(
        self,
        tuning: Optional[TuningSettings] = None,
        event_bus: Optional[EventBus] = None,
        store: Optional[ScoreStore] = None,
        audio: Optional[JumpCue] = None,
        rng: Optional[random.Random] = None,
        playfield: Optional[Playfield] = None,
        max_playfield: tuple[int, int] = (800, 600),
        tick_rate: int = 60,
        fixed_timestep: bool = False,
        max_ticks_per_frame: int = 5,
        variant: CharacterVariant = CharacterVariant.CLASSIC,
    ) -> None:
        self.tuning = tuning or TuningSettings()
        self.event_bus = event_bus or EventBus()
        self.store: ScoreStore = store if store is not None else MemoryScoreStore()
        self.audio = audio
        self.rng = rng or random.Random()
        self.max_playfield = max_playfield

        self.state_machine = StateMachine(State.MENU)
        self.state_machine.add_listener(self._on_state_changed)

        self.driver = TickDriver(
            self.tick,
            tick_rate=tick_rate,
            fixed_timestep=fixed_timestep,
            max_ticks_per_frame=max_ticks_per_frame,
        )

        field = playfield or Playfield(*max_playfield)
        self.world = World(playfield=field, player=self._spawn_player(field))
        self.world.variant = variant
        self.world.session.best_score = self._read_best()
        self._unsubscribers: list[Callable[[], None]] = []

        self.reset()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> State:
        return self.state_machine.state

    @property
    def score(self) -> int:
        return self.world.session.score

    @property
    def best_score(self) -> int:
        return self.world.session.best_score

    @property
    def power_up_percent(self) -> float:
        return effects.remaining_percent(self.world.effect, self.tuning.powerup_duration)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin a fresh run from the menu or the game-over screen."""
        if self.state not in (State.MENU, State.GAME_OVER):
            logger.warning(f"Ignoring start() in state {self.state.name}")
            return False
        self.reset()
        self.state_machine.transition(State.PLAYING, score=0)
        self.driver.start()
        return True

    def pause(self) -> bool:
        if self.state != State.PLAYING:
            logger.warning(f"Ignoring pause() in state {self.state.name}")
            return False
        self.driver.stop()
        return self.state_machine.transition(State.PAUSED)

    def resume(self) -> bool:
        if self.state != State.PAUSED:
            logger.warning(f"Ignoring resume() in state {self.state.name}")
            return False
        self.state_machine.transition(State.PLAYING)
        self.driver.start()
        return True

    def return_to_menu(self) -> bool:
        if not self.state_machine.can_transition(State.MENU):
            logger.warning(f"Ignoring return_to_menu() in state {self.state.name}")
            return False
        self.driver.stop()
        return self.state_machine.transition(State.MENU)

    def end(self) -> bool:
        """Finish the current run and settle the best score."""
        if self.state != State.PLAYING:
            logger.warning(f"Ignoring end() in state {self.state.name}")
            return False
        self.driver.stop()

        world = self.world
        cx, cy = world.player.center
        particles.emit(world.particles, ParticlePresets.game_over(), cx, cy, self.rng)

        session = world.session
        new_best = session.score > session.best_score
        if new_best:
            session.best_score = session.score
            self._write_best(session.best_score)
            particles.emit(
                world.particles,
                ParticlePresets.celebration(world.playfield),
                0.0, 0.0, self.rng,
            )

        logger.info(f"Run over: score={session.score} best={session.best_score}")
        self.state_machine.transition(
            State.GAME_OVER, score=session.score, best_score=session.best_score
        )
        self._emit(EventType.GAME_OVER, {
            "score": session.score,
            "best": session.best_score,
            "new_best": new_best,
        })
        return True

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def jump(self) -> bool:
        if self.state != State.PLAYING:
            return False
        player = self.world.player
        player.velocity = self.tuning.jump_impulse
        particles.emit(
            self.world.particles, ParticlePresets.jump(), player.x, player.bottom, self.rng
        )
        self._play_jump_cue()
        self._emit(EventType.JUMP)
        return True

    def select_variant(self, variant: CharacterVariant | str) -> None:
        if isinstance(variant, str):
            try:
                variant = CharacterVariant(variant)
            except ValueError:
                logger.warning(f"Unknown character variant: {variant}")
                return
        self.world.variant = variant
        logger.info(f"Character variant: {variant.value}")

    def set_viewport(self, width: float, height: float) -> None:
        """Update the live playfield. Generation always reads this value."""
        max_w, max_h = self.max_playfield
        self.world.playfield.width = float(max(1, min(width, max_w)))
        self.world.playfield.height = float(max(1, min(height, max_h)))
        logger.debug(
            f"Viewport {self.world.playfield.width:.0f}x{self.world.playfield.height:.0f}"
        )

    def bind(self, bus: Optional[EventBus] = None) -> None:
        """Subscribe to UI input requests on the event bus."""
        bus = bus or self.event_bus
        routes = {
            EventType.JUMP_REQUESTED: lambda e: self.jump(),
            EventType.START_REQUESTED: lambda e: self.start(),
            EventType.RESTART_REQUESTED: lambda e: self.start(),
            EventType.PAUSE_REQUESTED: lambda e: self.pause(),
            EventType.RESUME_REQUESTED: lambda e: self.resume(),
            EventType.MENU_REQUESTED: lambda e: self.return_to_menu(),
            EventType.VARIANT_SELECTED: lambda e: self.select_variant(
                e.data.get("variant", CharacterVariant.CLASSIC.value)
            ),
            EventType.VIEWPORT_RESIZED: lambda e: self.set_viewport(
                e.data.get("width", self.max_playfield[0]),
                e.data.get("height", self.max_playfield[1]),
            ),
        }
        for event_type, handler in routes.items():
            self._unsubscribers.append(bus.subscribe(event_type, handler))

    def unbind(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Restore the initial run configuration."""
        world = self.world
        field = world.playfield
        world.session.score = 0
        world.player = self._spawn_player(field)
        world.obstacles = generator.initial_obstacles(
            field.width, field.height, self.tuning, self.rng
        )
        world.power_ups = []
        world.particles = []
        world.effect = None
        world.background_offset = 0.0
        self.driver.reset_counters()
        self._emit(EventType.SCORE_CHANGED, {"score": 0, "reason": "reset"})
        self._emit(EventType.POWERUP_CLEARED)

    def tick(self) -> None:
        """Advance the simulation by one tick."""
        if self.state != State.PLAYING:
            return

        world = self.world
        tuning = self.tuning

        out_of_bounds = physics.step(world, tuning)
        generator.recycle(world, tuning, self.rng)

        report = collision.resolve(world, tuning, out_of_bounds)
        for obstacle in report.passed:
            self._on_obstacle_passed(obstacle)
        for power_up in report.collected:
            self._on_power_up_collected(power_up)
        if report.passed or report.bonus:
            reason = "bonus" if report.bonus else "obstacle"
            self._emit(EventType.SCORE_CHANGED, {"score": world.session.score, "reason": reason})

        if report.fatal:
            self.end()
            return

        self._tick_effect()
        particles.emit_ambient(world.particles, world.variant, world.player, self.rng)

    def _on_obstacle_passed(self, obstacle: Obstacle) -> None:
        world = self.world
        cx, cy = world.player.center
        particles.emit(world.particles, ParticlePresets.score(), cx, cy, self.rng)
        self._emit(EventType.OBSTACLE_PASSED, {"score": world.session.score})
        generator.spawn_trial(world, obstacle, self.tuning, self.rng)

    def _on_power_up_collected(self, power_up: PowerUp) -> None:
        world = self.world
        world.effect = effects.acquire(power_up.kind, self.tuning.powerup_duration)
        half = power_up.size / 2
        particles.emit(
            world.particles, ParticlePresets.pickup(),
            power_up.x + half, power_up.y + half, self.rng,
        )
        self._emit(EventType.POWERUP_ACTIVATED, {"kind": power_up.kind.value})

    def _tick_effect(self) -> None:
        if self.world.effect is None:
            return
        self.world.effect = effects.tick(self.world.effect)
        if self.world.effect is None:
            self._emit(EventType.POWERUP_CLEARED)
        else:
            self._emit(EventType.POWERUP_TIMER, {"percent": self.power_up_percent})

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def _spawn_player(self, field: Playfield) -> PlayerCharacter:
        size = self.tuning.player_size
        return PlayerCharacter(
            x=self.tuning.player_x,
            y=field.height / 2,
            width=size,
            height=size,
        )

    def _read_best(self) -> int:
        try:
            return max(0, int(self.store.get(BEST_SCORE_KEY, 0)))
        except Exception as e:
            logger.error(f"Best score unavailable: {e}")
            return 0

    def _write_best(self, value: int) -> None:
        try:
            self.store.set(BEST_SCORE_KEY, value)
        except Exception as e:
            logger.error(f"Failed to persist best score: {e}")

    def _play_jump_cue(self) -> None:
        if self.audio is None:
            return
        try:
            self.audio.play_jump_cue()
        except Exception as e:
            logger.debug(f"Jump cue failed: {e}")

    def _emit(self, event_type: EventType, data: Optional[dict] = None) -> None:
        self.event_bus.emit(Event(event_type, data=data or {}, source="game"))

    def _on_state_changed(self, old: State, new: State, context: StateContext) -> None:
        self._emit(EventType.STATE_CHANGED, {"old": old.value, "new": new.value})

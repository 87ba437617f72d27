"""
Main entry point for NEO FLAPPY.

Builds the controller and its collaborators from settings and runs the
desktop window.
"""

import asyncio
import logging
import sys

from neoflappy.core.events import Event, EventBus, EventType
from neoflappy.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings: Settings) -> None:
    """Create shared components and run the window."""
    from neoflappy.audio.engine import get_audio_engine
    from neoflappy.game.controller import GameController
    from neoflappy.game.entities import CharacterVariant
    from neoflappy.simulator.window import GameWindow, WindowConfig
    from neoflappy.utils.score_store import JsonScoreStore, MemoryScoreStore

    logger = logging.getLogger(__name__)

    event_bus = EventBus()

    audio = get_audio_engine()
    audio.set_master_volume(settings.volume)
    if settings.mute:
        audio.toggle_mute()
    if not audio.init():
        logger.warning("Running without sound")

    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        store = JsonScoreStore(settings.best_score_path)
    except OSError as e:
        logger.warning(f"Data directory unavailable, best score kept in memory: {e}")
        store = MemoryScoreStore()

    display = settings.display
    controller = GameController(
        tuning=settings.tuning,
        event_bus=event_bus,
        store=store,
        audio=audio,
        max_playfield=(display.max_playfield_width, display.max_playfield_height),
        tick_rate=settings.tick_rate,
        fixed_timestep=settings.fixed_timestep,
        max_ticks_per_frame=settings.max_ticks_per_frame,
        variant=CharacterVariant(settings.variant),
    )
    controller.bind(event_bus)

    # Wire up game sound effects
    def on_score(event: Event) -> None:
        if event.data.get("reason") == "obstacle":
            audio.play_score_up()

    def on_power_up(event: Event) -> None:
        audio.play_powerup()

    def on_game_over(event: Event) -> None:
        audio.play_crash()

    event_bus.subscribe(EventType.SCORE_CHANGED, on_score)
    event_bus.subscribe(EventType.POWERUP_ACTIVATED, on_power_up)
    event_bus.subscribe(EventType.GAME_OVER, on_game_over)

    config = WindowConfig(
        width=display.window_width,
        height=display.window_height,
        title=display.title,
        fps=display.fps,
        resizable=display.resizable,
        max_playfield_width=display.max_playfield_width,
        max_playfield_height=display.max_playfield_height,
        margin=display.window_margin,
    )
    window = GameWindow(controller, config=config, event_bus=event_bus, audio=audio)

    try:
        await window.run()
    finally:
        event_bus.emit(Event(EventType.SHUTDOWN))
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("NEO FLAPPY starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("NEO FLAPPY stopped")


if __name__ == "__main__":
    main()

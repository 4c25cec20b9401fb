"""
Main entry point for Theo Runner.

Wires settings, the best-score file, audio and the pygame window around a
fresh session and runs the frame loop.
"""

import asyncio
import logging
import sys

from theorunner.core.events import EventBus


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game() -> None:
    """Build the game from settings and run it until the window closes."""
    from theorunner.audio.engine import AudioEngine
    from theorunner.engine.session import init_session
    from theorunner.settings import get_settings
    from theorunner.simulator.window import RunnerWindow
    from theorunner.storage.best_score import JsonBestScoreStore

    settings = get_settings()
    logger = logging.getLogger(__name__)
    logger.info(f"Tuning: {settings.game.tuning}, reduced motion: {settings.game.reduced_motion}")

    session = init_session(
        settings.tuning,
        store=JsonBestScoreStore(settings.game.best_score_path),
        reduced_motion=settings.game.reduced_motion,
        field_width=settings.display.field_width,
    )
    event_bus = EventBus()

    audio = AudioEngine(
        volume=settings.game.sfx_volume,
        muted=not settings.game.sound_enabled,
    )
    audio.init()
    audio.attach(event_bus)

    window = RunnerWindow(session, event_bus, settings.display)
    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv
    from theorunner.settings import get_settings

    # Load environment variables
    load_dotenv()

    setup_logging(get_settings().debug)

    logger = logging.getLogger(__name__)
    logger.info("Theo Runner starting...")

    try:
        asyncio.run(run_game())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Theo Runner stopped")


if __name__ == "__main__":
    main()

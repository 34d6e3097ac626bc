"""Entry point for the EcoBlocks keyword puzzle.

Sets up the engine (ECS world, event bus, systems) and the Arcade window.
"""
import argparse
import logging
import random
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from arcade import Window, run, set_background_color, color

from ecoblocks.config import default_game_config, load_game_config
from ecoblocks.engine import GameEngine
from ecoblocks.events.bus import EVENT_SESSION_ENDED
from ecoblocks.systems.render_system import RenderSystem
from ecoblocks.ui.layout import window_size_for_board
from ecoblocks.utils.score_ledger import JsonScoreLedger

logger = logging.getLogger("ecoblocks")

DEFAULT_LEDGER_PATH = Path(__file__).resolve().parents[1] / "data" / "score_ledger.json"


class EcoBlocksWindow(Window):
    def __init__(self, engine: GameEngine):
        width, height = window_size_for_board(engine.config.board_width, engine.config.board_height)
        super().__init__(width, height, "EcoBlocks", resizable=True)
        self.set_update_rate(1/60)
        self.engine = engine
        self.render_system = RenderSystem(engine.world, self, ledger=engine.ledger)
        engine.event_bus.subscribe(EVENT_SESSION_ENDED, self._on_session_ended)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.engine.tick(delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        self.engine.key_press(symbol, modifiers)

    def on_text(self, text: str):
        self.engine.text(text)

    def on_close(self):
        self.engine.stop()
        super().on_close()

    def _on_session_ended(self, sender, **payload):
        stats = payload.get("stats") or {}
        logger.info(
            "Session over (%s): score=%s lines=%s persona cards=%s",
            payload.get("reason"),
            stats.get("score"),
            stats.get("lines_cleared"),
            stats.get("persona_cards_earned"),
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play EcoBlocks")
    parser.add_argument("--config", type=Path, default=None, help="JSON file with vocabulary, palette and challenges")
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece and challenge selection")
    parser.add_argument("--ledger", type=Path, default=DEFAULT_LEDGER_PATH, help="Where to keep the rolling score ledger")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_game_config(args.config) if args.config else default_game_config()
    config.validate()
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="ecoblocks-store") as executor:
        engine = GameEngine(
            config,
            rng=rng,
            ledger=JsonScoreLedger(args.ledger),
            executor=executor,
        )
        EcoBlocksWindow(engine)
        run()


if __name__ == "__main__":
    main()

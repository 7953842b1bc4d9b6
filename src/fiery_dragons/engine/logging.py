from __future__ import annotations

import logging
import re
import weakref
from typing import TYPE_CHECKING, override

from rich.highlighter import Highlighter
from rich.logging import RichHandler

from fiery_dragons.core.types import CardKind, Color, Creature

if TYPE_CHECKING:
    from rich.text import Text

    from fiery_dragons.engine.game_engine import GameEngine

# --- PATTERNS ---
CARD_PATTERN = re.compile(
    rf"\b({'|'.join(map(re.escape, (k.value for k in CardKind if not k.is_creature)))})\b",
)
CREATURE_PATTERN = re.compile(
    rf"\b({'|'.join(map(re.escape, (c.value for c in Creature)))})(Cave)?\b",
)

# Captures "0:White" or "2•Blue"
DRAGON_COMPOSITE_PATTERN = re.compile(
    rf"(?P<prefix>[\d\.]*[:•])(?P<name>{'|'.join(c.value for c in Color)})\b",
)

DRAGON_COLORS: dict[str, str] = {
    Color.WHITE: "#f5f5f5",
    Color.ORANGE: "#ff8c1a",
    Color.BLUE: "#3b8eea",
    Color.GREEN: "#23d18b",
}

COLOR = {
    "move": "bold #23d18b",  # light green
    "swap": "bold #87d700",  # yellow-ish green
    "blocked": "bold #ffaf00",  # orange
    "warning": "bold bright_red",
    "card": "bold #29b8db",  # cyan
    "creature": "bold #d670d6",  # magenta
    "prefix": "grey50",
    "win": "bold #f5f543",  # yellow
}


class ContextFilter(logging.Filter):
    """Inject per-engine runtime context into every log record."""

    def __init__(self, engine: GameEngine, name: str = "") -> None:
        super().__init__(name)
        # The per-engine logger outlives the engine, so only hold it weakly.
        self._engine: weakref.ref[GameEngine] = weakref.ref(engine)

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        engine = self._engine()
        if engine is None:
            return True
        logctx = engine.log_context
        record.total_turn = logctx.total_turn
        record.turn_log_count = logctx.turn_log_count
        record.dragon_repr = logctx.current_dragon_repr
        record.engine_id = logctx.engine_id
        logctx.inc_log_count()
        return True


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        total_turn = getattr(record, "total_turn", 0)
        turn_log_count = getattr(record, "turn_log_count", 0)
        dragon_repr = getattr(record, "dragon_repr", "_")
        engine_id = getattr(record, "engine_id", 0)

        prefix = f"{engine_id} {total_turn}.{dragon_repr}.{turn_log_count}"
        message = record.getMessage()

        # The highlighter applies stronger colors on top of the grey prefix.
        return f"[{COLOR['prefix']}]{prefix:<16}[/{COLOR['prefix']}]  {message}"


class GameLogHighlighter(Highlighter):
    @override
    def highlight(self, text: Text) -> None:
        text.highlight_regex(r"\bMove\b", COLOR["move"])
        text.highlight_regex(r"\bSwap\b", COLOR["swap"])
        text.highlight_regex(r"\bBlocked\b", COLOR["blocked"])
        text.highlight_regex(r"\bNo match\b", COLOR["blocked"])
        text.highlight_regex(r"\bWin\b", COLOR["win"])
        text.highlight_regex(CARD_PATTERN, COLOR["card"])
        text.highlight_regex(CREATURE_PATTERN, COLOR["creature"])
        text.highlight_regex(r"!!!", COLOR["warning"])

        for match in DRAGON_COMPOSITE_PATTERN.finditer(text.plain):
            prefix_span = match.span("prefix")
            name_span = match.span("name")
            hex_color = DRAGON_COLORS[match.group("name")]

            if prefix_span[0] != -1:
                text.stylize(hex_color, start=prefix_span[0], end=prefix_span[1])
            text.stylize(f"bold {hex_color}", start=name_span[0], end=name_span[1])


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(
        markup=True,
        show_path=False,
        show_time=False,
        highlighter=GameLogHighlighter(),
    )
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)

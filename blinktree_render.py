"""
Paints the tree once, then keeps only its lights blinking.

The first pass draws every line top to bottom and remembers where each light
landed. After that, a tick moves the cursor straight to those cells and
rewrites them one glyph at a time, so the cost of a frame depends on the number
of lights, not on the size of the tree.
"""

from __future__ import annotations

import logging
import random
import sys
import threading
import time
from dataclasses import dataclass, field
from enum import Enum

from blinktree_layout import (
    MAX_TREE_WIDTH,
    TREE_LAYERS,
    TRUNK_HEIGHT,
    TRUNK_WIDTH,
    LayerRow,
    layer_rows,
    padding,
)

log = logging.getLogger(__name__)

CSI = "\x1b["
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"
CLEAR = CSI + "2J"
HOME = CSI + "H"
RESET = CSI + "0m"
BOLD = CSI + "1m"


def color_fg(code: str) -> str:
    return f"{CSI}{code}m"


def move_to(row: int, column: int) -> str:
    return f"{CSI}{row};{column}H"


COL_LEAF = color_fg("32")
COL_GOLD = color_fg("93")
COL_TRUNK = color_fg("38;5;94")

LIGHT_COLORS = (
    color_fg("31"),
    color_fg("34"),
    color_fg("35"),
    color_fg("36"),
    color_fg("37"),
    COL_GOLD,
)

LEAF_CHAR = "*"
TRUNK_CHAR = "*"
STAR_CHAR = "★"
GREETING = "   Merry Christmas!"
GREETING_WIDTH = 18

FLASH_DELAY = 0.2
LIGHT_ONE_IN = 5
MAX_LIGHTS = 256


@dataclass(frozen=True)
class TreeConfig:
    delay: float = FLASH_DELAY
    light_one_in: int = LIGHT_ONE_IN
    max_lights: int = MAX_LIGHTS
    colors: tuple = LIGHT_COLORS
    width: int = MAX_TREE_WIDTH
    layers: tuple = TREE_LAYERS


@dataclass
class Light:
    column: int
    row: int
    color: int


class Phase(Enum):
    ON = "on"
    OFF = "off"

    def flipped(self) -> "Phase":
        return Phase.OFF if self is Phase.ON else Phase.ON


@dataclass
class TreeState:
    """
    Cursor counters and recorded lights of the last full paint.

    `row` ends up as the number of lines the paint emitted; the blink loop
    parks the cursor just below it.
    """

    max_lights: int = MAX_LIGHTS
    lights: list = field(default_factory=list)
    row: int = 0
    column: int = 0
    dropped: int = 0

    def reset(self) -> None:
        self.lights.clear()
        self.row = 0
        self.column = 0
        self.dropped = 0

    def has_room(self) -> bool:
        return len(self.lights) < self.max_lights


class TreeRenderer:
    def __init__(self, out=None, rng: random.Random | None = None, wait=time.sleep, config: TreeConfig | None = None):
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.wait = wait
        self.config = config if config is not None else TreeConfig()

    def _line(self, state: TreeState, text: str = "") -> None:
        self.out.write(text + "\n")
        state.row += 1
        state.column = 0

    def _centered(self, cells: int, body: str) -> str:
        return " " * padding(cells, self.config.width) + body

    def _is_candidate(self) -> bool:
        one_in = self.config.light_one_in
        return one_in > 0 and self.rng.randrange(one_in) == 0

    def _random_color(self) -> int:
        return self.rng.randrange(len(self.config.colors))

    def _paint_leaves(self, state: TreeState, row: LayerRow) -> None:
        colors = self.config.colors
        parts = [" " * row.padding, COL_LEAF]
        state.column = row.padding
        for _ in range(row.stars):
            if self._is_candidate():
                if state.has_room():
                    ci = self._random_color()
                    state.lights.append(Light(state.column, state.row, ci))
                    parts.append(colors[ci] + BOLD + LEAF_CHAR + RESET + COL_LEAF)
                    state.column += 1
                    continue
                state.dropped += 1
            parts.append(LEAF_CHAR)
            state.column += 1
        parts.append(RESET)
        self._line(state, "".join(parts))

    def paint(self, state: TreeState | None = None) -> TreeState:
        """
        Clear the screen and draw the whole tree, sampling lights on the way.

        Any lights from an earlier paint are forgotten first.
        """
        if state is None:
            state = TreeState(max_lights=self.config.max_lights)
        state.reset()

        self.out.write(CLEAR + HOME)
        self._line(state)
        self._line(state, self._centered(1, COL_GOLD + BOLD + STAR_CHAR + RESET))

        for spec in self.config.layers:
            for row in layer_rows(spec, self.config.width):
                self._paint_leaves(state, row)

        trunk = self._centered(TRUNK_WIDTH, COL_TRUNK + BOLD + TRUNK_CHAR * TRUNK_WIDTH + RESET)
        for _ in range(TRUNK_HEIGHT):
            self._line(state, trunk)

        self._line(state)
        self._line(state, self._centered(GREETING_WIDTH, COL_GOLD + BOLD + GREETING + RESET))
        self._line(state)
        self.out.flush()

        log.debug("painted %d rows, %d lights", state.row, len(state.lights))
        if state.dropped:
            log.debug("light capacity %d reached, %d candidates painted as leaves", state.max_lights, state.dropped)
        return state

    def repaint(self, state: TreeState, phase: Phase) -> int:
        """Rewrite every recorded light for one tick and return how many were drawn."""
        colors = self.config.colors
        parts = []
        for light in state.lights:
            parts.append(move_to(light.row + 1, light.column + 1))
            if phase is Phase.ON:
                parts.append(colors[self._random_color()] + BOLD)
            else:
                parts.append(COL_LEAF)
            parts.append(LEAF_CHAR + RESET)
        # park below the art so stray keystrokes don't land on it
        parts.append(move_to(state.row + 1, 1))
        self.out.write("".join(parts))
        self.out.flush()
        return len(state.lights)

    def animate(self, state: TreeState, stop: threading.Event | None = None, ticks: int | None = None) -> int:
        """
        Blink the lights until `stop` is set or `ticks` ticks have run.

        The first tick is ON. Returns the number of completed ticks.
        """
        if stop is None:
            stop = threading.Event()

        log.info("blinking %d lights every %.3fs", len(state.lights), self.config.delay)
        phase = Phase.ON
        done = 0
        while not stop.is_set():
            if ticks is not None and done >= ticks:
                break
            self.repaint(state, phase)
            self.wait(self.config.delay)
            phase = phase.flipped()
            done += 1

        log.info("blinking stopped after %d ticks", done)
        return done

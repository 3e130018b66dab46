#!/usr/bin/env python3

from __future__ import annotations

import logging
import os
import random
import sys
import time

from blinktree_render import HIDE_CURSOR, RESET, SHOW_CURSOR, TreeRenderer, move_to

_LOG_ENV = "BLINKTREE_LOG"
_LOG_LEVEL_ENV = "BLINKTREE_LOG_LEVEL"

log = logging.getLogger("blinktree")


def _configure_logging() -> None:
    """
    Send logs to the file named by BLINKTREE_LOG, or nowhere.

    The terminal belongs to the tree, so there is no stream handler.
    """
    root = logging.getLogger()
    path = os.environ.get(_LOG_ENV, "").strip()
    if not path:
        if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
            root.addHandler(logging.NullHandler())
        return
    level_name = os.environ.get(_LOG_LEVEL_ENV, "INFO").strip().upper()
    # force: an earlier run may have left a NullHandler on the root logger
    logging.basicConfig(
        filename=path,
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def main(out=None, wait=time.sleep) -> int:
    _configure_logging()
    if out is None:
        out = sys.stdout

    renderer = TreeRenderer(out, random.Random(), wait=wait)
    out.write(HIDE_CURSOR)
    out.flush()

    state = None
    try:
        state = renderer.paint()
        renderer.animate(state)
    except KeyboardInterrupt:
        log.info("interrupted")
    finally:
        rest = move_to(state.row + 1, 1) if state is not None else ""
        out.write(RESET + rest + SHOW_CURSOR)
        out.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Row geometry for the tree tiers.

Each tier is a band of rows that narrows by two cells per row towards its top,
optionally holding the width of its first rows flat. Everything here is pure
arithmetic so the shape is the same on every run.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_TREE_WIDTH = 25


@dataclass(frozen=True)
class LayerSpec:
    base_width: int
    height: int
    flat_offset: int = 0

    def stars(self, i: int) -> int:
        # Rows above flat_offset keep the width of the first sloped row.
        if i < self.flat_offset:
            return self.base_width - 2 * (self.height - 1 - self.flat_offset)
        return self.base_width - 2 * (self.height - 1 - i)


@dataclass(frozen=True)
class LayerRow:
    stars: int
    padding: int


TREE_LAYERS = (
    LayerSpec(1, 1, 0),
    LayerSpec(7, 3, 0),
    LayerSpec(13, 4, 1),
    LayerSpec(21, 5, 1),
)

TRUNK_WIDTH = 3
TRUNK_HEIGHT = 3


def padding(cells: int, width: int = MAX_TREE_WIDTH) -> int:
    """
    Left padding that centers `cells` inside `width`.

    Odd differences truncate, so some rows sit half a cell left of center.
    A row wider than `width` gets no padding at all.
    """
    return max(0, int((width - cells) / 2))


def layer_rows(spec: LayerSpec, width: int = MAX_TREE_WIDTH) -> list[LayerRow]:
    rows = []
    for i in range(spec.height):
        stars = spec.stars(i)
        rows.append(LayerRow(stars, padding(stars, width)))
    return rows


def leaf_count(layers=TREE_LAYERS) -> int:
    return sum(spec.stars(i) for spec in layers for i in range(spec.height))

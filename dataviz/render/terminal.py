from __future__ import annotations

import logging
import math
import re
from typing import Iterable

import numpy as np

from dataviz.render.commands import DrawCommand, Group, Line, Marker, Path, Rect, Rotate, Text, Transform, Translate


LOGGER = logging.getLogger(__name__)

H_LINE = "─"
V_LINE = "│"
DIAGONAL = "·"
CORNERS = ("┌", "┐", "└", "┘")

_PATH_TOKEN = re.compile(r"[MLHVZACQSTmlhvzacqst]|-?\d*\.?\d+(?:[eE][-+]?\d+)?")


def new_grid(columns: int, rows: int, fill: str = " ") -> np.ndarray:
    grid = np.empty((rows, columns), dtype="<U1")
    grid[:, :] = fill
    return grid


def put_char(grid: np.ndarray, col: int, row: int, char: str) -> None:
    if row < 0 or row >= grid.shape[0] or col < 0 or col >= grid.shape[1]:
        return
    grid[row, col] = char


def draw_hline(grid: np.ndarray, c0: int, c1: int, row: int, char: str = H_LINE) -> None:
    if row < 0 or row >= grid.shape[0]:
        return
    ca = max(0, min(c0, c1))
    cb = min(grid.shape[1] - 1, max(c0, c1))
    if ca > cb:
        return
    grid[row, ca : cb + 1] = char


def draw_vline(grid: np.ndarray, col: int, r0: int, r1: int, char: str = V_LINE) -> None:
    if col < 0 or col >= grid.shape[1]:
        return
    ra = max(0, min(r0, r1))
    rb = min(grid.shape[0] - 1, max(r0, r1))
    if ra > rb:
        return
    grid[ra : rb + 1, col] = char


def draw_segment(grid: np.ndarray, c0: int, r0: int, c1: int, r1: int) -> None:
    if r0 == r1:
        draw_hline(grid, c0, c1, r0)
        return
    if c0 == c1:
        draw_vline(grid, c0, r0, r1)
        return
    dc = abs(c1 - c0)
    sc = 1 if c0 < c1 else -1
    dr = -abs(r1 - r0)
    sr = 1 if r0 < r1 else -1
    err = dc + dr
    while True:
        put_char(grid, c0, r0, DIAGONAL)
        if c0 == c1 and r0 == r1:
            break
        e2 = 2 * err
        if e2 >= dr:
            err += dr
            c0 += sc
        if e2 <= dc:
            err += dc
            r0 += sr


class TerminalBackend:
    """Draws commands onto a character grid, one cell per `cell_width` x `cell_height` pixels.

    Only axis-aligned geometry is faithful; rotations are ignored and text is
    always written left to right. Paths are traced for their M/L/H/V/Z segments.
    """

    def __init__(self, cell_width: float = 8.0, cell_height: float = 16.0) -> None:
        if cell_width <= 0 or cell_height <= 0:
            raise ValueError("terminal cell size must be > 0")
        self.cell_width = float(cell_width)
        self.cell_height = float(cell_height)

    def grid(self, width: float, height: float, commands: Iterable[DrawCommand]) -> np.ndarray:
        columns = max(1, int(math.ceil(width / self.cell_width)))
        rows = max(1, int(math.ceil(height / self.cell_height)))
        grid = new_grid(columns, rows)
        for command in commands:
            self._draw(grid, command, 0.0, 0.0)
        return grid

    def render(self, width: float, height: float, commands: Iterable[DrawCommand]) -> str:
        grid = self.grid(width, height, commands)
        return "\n".join("".join(row).rstrip() for row in grid)

    def _cell(self, x: float, y: float) -> tuple[int, int]:
        return int(math.floor(x / self.cell_width)), int(math.floor(y / self.cell_height))

    def _draw(self, grid: np.ndarray, command: DrawCommand, ox: float, oy: float) -> None:
        if isinstance(command, Marker):
            return
        if isinstance(command, Line):
            c0, r0 = self._cell(command.x1 + ox, command.y1 + oy)
            c1, r1 = self._cell(command.x2 + ox, command.y2 + oy)
            draw_segment(grid, c0, r0, c1, r1)
            return
        if isinstance(command, Rect):
            self._draw_rect(grid, command, ox, oy)
            return
        if isinstance(command, Text):
            self._draw_text(grid, command, ox, oy)
            return
        if isinstance(command, Path):
            self._draw_path(grid, command.d, ox, oy)
            return
        if isinstance(command, Group):
            dx, dy = _offset(command.transform)
            for child in command.children:
                self._draw(grid, child, ox + dx, oy + dy)
            return
        raise TypeError(f"unsupported draw command: {type(command).__name__}")

    def _draw_rect(self, grid: np.ndarray, rect: Rect, ox: float, oy: float) -> None:
        if rect.width <= 0 or rect.height <= 0:
            return
        c0, r0 = self._cell(rect.x + ox, rect.y + oy)
        c1, r1 = self._cell(rect.x + ox + rect.width, rect.y + oy + rect.height)
        c1 = max(c0, c1 - 1) if c1 > c0 else c1
        r1 = max(r0, r1 - 1) if r1 > r0 else r1
        draw_hline(grid, c0, c1, r0)
        draw_hline(grid, c0, c1, r1)
        draw_vline(grid, c0, r0, r1)
        draw_vline(grid, c1, r0, r1)
        if c1 > c0 and r1 > r0:
            for (col, row), char in zip(((c0, r0), (c1, r0), (c0, r1), (c1, r1)), CORNERS):
                put_char(grid, col, row, char)

    def _draw_text(self, grid: np.ndarray, text: Text, ox: float, oy: float) -> None:
        if not text.text:
            return
        if any(isinstance(t, Rotate) for t in text.transform):
            LOGGER.debug("terminal backend ignores text rotation for %r", text.text)
        dx, dy = _offset(text.transform)
        col, row = self._cell(text.x + ox + dx, text.y + oy + dy)
        anchor = text.style.text_anchor or "start"
        if anchor == "middle":
            col -= len(text.text) // 2
        elif anchor == "end":
            col -= len(text.text)
        for i, char in enumerate(text.text):
            put_char(grid, col + i, row, char)

    def _draw_path(self, grid: np.ndarray, d: str, ox: float, oy: float) -> None:
        tokens = _PATH_TOKEN.findall(d)
        cursor = (0.0, 0.0)
        start = cursor
        op = ""
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.isalpha():
                op = token
                i += 1
                if op in "Zz":
                    self._segment(grid, cursor, start, ox, oy)
                    cursor = start
                continue
            if op in ("M", "m", "L", "l"):
                if i + 1 >= len(tokens):
                    break
                x, y = float(tokens[i]), float(tokens[i + 1])
                i += 2
                if op.islower():
                    x, y = cursor[0] + x, cursor[1] + y
                if op in "Mm":
                    start = (x, y)
                    # Subsequent pairs after a moveto are implicit linetos.
                    op = "L" if op == "M" else "l"
                else:
                    self._segment(grid, cursor, (x, y), ox, oy)
                cursor = (x, y)
            elif op in ("H", "h", "V", "v"):
                v = float(tokens[i])
                i += 1
                if op == "H":
                    target = (v, cursor[1])
                elif op == "h":
                    target = (cursor[0] + v, cursor[1])
                elif op == "V":
                    target = (cursor[0], v)
                else:
                    target = (cursor[0], cursor[1] + v)
                self._segment(grid, cursor, target, ox, oy)
                cursor = target
            else:
                LOGGER.debug("terminal backend skips path command %r", op)
                return

    def _segment(self, grid: np.ndarray, a: tuple[float, float], b: tuple[float, float], ox: float, oy: float) -> None:
        c0, r0 = self._cell(a[0] + ox, a[1] + oy)
        c1, r1 = self._cell(b[0] + ox, b[1] + oy)
        draw_segment(grid, c0, r0, c1, r1)


def _offset(transform: tuple[Transform, ...]) -> tuple[float, float]:
    dx = dy = 0.0
    for t in transform:
        if isinstance(t, Translate):
            dx += t.dx
            dy += t.dy
    return dx, dy

"""Matplotlib window acting as the rendering/windowing backend."""

from __future__ import annotations

import logging
from typing import Any, Optional

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

from .app import AppFrame, SigilApp

logger = logging.getLogger(__name__)

DPI = 100
FRAME_INTERVAL_MS = 33

_PROMPTS = {
    "start": "Chaos Sigil Generator",
    "input": "Enter your intention:",
}


def _disable_default_keymaps() -> None:
    # Letters like 's' and 'a' are app commands, not figure shortcuts.
    for key in list(matplotlib.rcParams.keys()):
        if key.startswith("keymap."):
            matplotlib.rcParams[key] = []


def _input_text(frame: AppFrame) -> str:
    """Intention with the selection bracketed and the cursor drawn as ``|``."""

    marks = []
    if frame.selection is not None:
        marks += [(frame.selection[0], "["), (frame.selection[1], "]")]
    if frame.cursor is not None:
        marks.append((frame.cursor, "|"))
    text = frame.text
    for pos, mark in sorted(marks, key=lambda item: item[0], reverse=True):
        text = text[:pos] + mark + text[pos:]
    return text


class MatplotlibCanvas:
    """Draws :class:`AppFrame` objects onto a single matplotlib axes."""

    def __init__(self, width: float = 800.0, height: float = 600.0, figure: Optional[Any] = None):
        self.width = width
        self.height = height
        self.figure = figure or plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        self.axes = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.frames_drawn = 0
        self.animation: Optional[FuncAnimation] = None

    def _reset_axes(self, frame: AppFrame) -> None:
        ax = self.axes
        ax.clear()
        ax.set_xlim(0, frame.draw.width)
        ax.set_ylim(frame.draw.height, 0)
        ax.set_aspect("equal")
        ax.axis("off")
        background = frame.draw.palette.get("background", "black")
        self.figure.set_facecolor(background)
        ax.set_facecolor(background)

    def draw_frame(self, frame: AppFrame) -> None:
        self._reset_axes(frame)
        ax = self.axes
        draw = frame.draw
        palette = draw.palette

        for emb in draw.embellishments:
            if emb.kind == "guide":
                ax.add_patch(
                    Circle(emb.center, emb.size, fill=False, edgecolor=palette["guide"], linewidth=0.8)
                )
        for line in draw.lines:
            closing = line.role == "closing"
            ax.add_line(
                Line2D(
                    [line.start[0], line.end[0]],
                    [line.start[1], line.end[1]],
                    color=palette["closing" if closing else "stroke"],
                    linewidth=line.width,
                    linestyle="--" if closing else "-",
                    solid_capstyle="round",
                )
            )
        for marker in draw.markers:
            ax.add_patch(Circle(marker.center, marker.radius, color=palette["marker"]))
            if marker.label:
                ax.text(
                    marker.center[0] + 1.6 * marker.radius,
                    marker.center[1] - 1.6 * marker.radius,
                    marker.label,
                    color=palette["label"],
                    fontsize=9,
                )
        for emb in draw.embellishments:
            if emb.kind == "ring":
                ax.add_patch(
                    Circle(emb.center, emb.size, fill=False, edgecolor=palette["accent"], linewidth=1.2)
                )
            elif emb.kind == "tick" and emb.start is not None and emb.end is not None:
                ax.add_line(
                    Line2D(
                        [emb.start[0], emb.end[0]],
                        [emb.start[1], emb.end[1]],
                        color=palette["accent"],
                        linewidth=1.2,
                    )
                )

        self._draw_overlay(frame)
        self.frames_drawn += 1

    def _draw_overlay(self, frame: AppFrame) -> None:
        ax = self.axes
        draw = frame.draw
        color = draw.palette.get("label", "white")
        prompt = _PROMPTS.get(frame.state)
        if prompt:
            ax.text(0.5 * draw.width, 0.35 * draw.height, prompt, color=color, ha="center", fontsize=16)
        if frame.state == "input":
            ax.text(0.5 * draw.width, 0.5 * draw.height, _input_text(frame), color=draw.palette["stroke"], ha="center", fontsize=20)
        elif frame.state in ("display", "animating", "saving") and frame.text:
            ax.text(0.5 * draw.width, 0.96 * draw.height, frame.text, color=color, ha="center", fontsize=12)
        if frame.notice:
            ax.text(
                0.5 * draw.width,
                0.08 * draw.height,
                frame.notice,
                color=draw.palette["accent"] if frame.state == "saving" else color,
                ha="center",
                fontsize=14,
            )


def run_viewer(app: SigilApp, *, interval_ms: int = FRAME_INTERVAL_MS) -> MatplotlibCanvas:
    """Open the window and drive ``app`` until the window is closed."""

    _disable_default_keymaps()
    width, height = app.config.render.canvas_size
    canvas = MatplotlibCanvas(width, height)
    try:
        canvas.figure.canvas.manager.set_window_title("Chaos Sigil Generator")
    except AttributeError:  # pragma: no cover - headless backends have no manager
        pass

    def _on_key(event: Any) -> None:
        if event.key:
            app.handle_key(event.key)

    canvas.figure.canvas.mpl_connect("key_press_event", _on_key)
    canvas.animation = FuncAnimation(
        canvas.figure,
        lambda _frame: app.run_frame(canvas),
        interval=interval_ms,
        cache_frame_data=False,
    )
    logger.info("Starting viewer at %dx%d", int(width), int(height))
    plt.show()
    return canvas


__all__ = ["MatplotlibCanvas", "run_viewer"]

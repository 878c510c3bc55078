"""TikZ renderer for sigil draw lists."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .utils import format_float, html_color, latex_escape
from ..render import DrawList


PX_PER_CM = 50.0
LABEL_ANCHOR = "above right"

standalone_tpl = r"""\documentclass[border=4pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage{tikz}
%s
\tikzset{
  sg/line width/.store in=\sgLW,   sg/line width=1.2pt,
  sg/accent width/.store in=\sgLWacc, sg/accent width=0.8pt,
  stroke/.style={draw=sgstroke, line width=\sgLW, line cap=round, line join=round},
  closing/.style={draw=sgclosing, line width=\sgLW, dash pattern=on 4pt off 2pt},
  marker/.style={fill=sgmarker},
  accent/.style={draw=sgaccent, line width=\sgLWacc},
  guide/.style={draw=sgguide, line width=0.4pt},
  ptlabel/.style={font=\footnotesize, text=sglabel, inner sep=1pt},
}
\pgfdeclarelayer{bg}\pgfdeclarelayer{fg}\pgfsetlayers{bg,main,fg}
\begin{document}
%s
%s
\end{document}
"""


def _color_definitions(frame: DrawList) -> str:
    lines = []
    for role in ("background", "stroke", "closing", "marker", "accent", "guide", "label"):
        value = frame.palette.get(role)
        if value is None:
            continue
        lines.append(f"\\definecolor{{sg{role}}}{{HTML}}{{{html_color(value)}}}")
    return "\n".join(lines)


def _pt(frame: DrawList, point: Tuple[float, float]) -> str:
    # Canvas y grows downwards; TikZ y grows upwards.
    x = point[0] / PX_PER_CM
    y = (frame.height - point[1]) / PX_PER_CM
    return f"({format_float(x)}, {format_float(y)})"


def _len(value: float) -> str:
    return format_float(value / PX_PER_CM)


def generate_tikz_document(
    frame: DrawList,
    *,
    title: Optional[str] = None,
) -> str:
    """Render a standalone document containing the sigil picture."""

    header = ""
    if title:
        header = "\\noindent\\textbf{" + latex_escape(title.strip()) + "}\\par\\vspace{4pt}"
    return standalone_tpl % (_color_definitions(frame), header, generate_tikz_code(frame))


def generate_tikz_code(frame: DrawList) -> str:
    """Generate the ``tikzpicture`` for one draw list.

    An empty draw list still yields a picture with its background, so the
    document compiles to an empty frame of the right size.
    """

    if not isinstance(frame, DrawList):
        raise TypeError("frame must be an instance of DrawList")

    lines: List[str] = ["\\begin{tikzpicture}"]
    lines.append("  \\begin{pgfonlayer}{bg}")
    lines.append(
        "    \\fill[sgbackground] (0, 0) rectangle ({w}, {h});".format(
            w=_len(frame.width), h=_len(frame.height)
        )
    )
    for emb in frame.embellishments:
        if emb.kind == "guide":
            lines.append(f"    \\draw[guide] {_pt(frame, emb.center)} circle ({_len(emb.size)});")
    lines.append("  \\end{pgfonlayer}")

    lines.append("  \\begin{pgfonlayer}{main}")
    for line in frame.lines:
        style = "closing" if line.role == "closing" else "stroke"
        lines.append(f"    \\draw[{style}] {_pt(frame, line.start)} -- {_pt(frame, line.end)};")
    for marker in frame.markers:
        lines.append(f"    \\fill[marker] {_pt(frame, marker.center)} circle ({_len(marker.radius)});")
    lines.append("  \\end{pgfonlayer}")

    lines.append("  \\begin{pgfonlayer}{fg}")
    for emb in frame.embellishments:
        if emb.kind == "ring":
            lines.append(f"    \\draw[accent] {_pt(frame, emb.center)} circle ({_len(emb.size)});")
        elif emb.kind == "tick" and emb.start is not None and emb.end is not None:
            lines.append(f"    \\draw[accent] {_pt(frame, emb.start)} -- {_pt(frame, emb.end)};")
    for marker in frame.markers:
        if marker.label:
            lines.append(
                f"    \\node[ptlabel, {LABEL_ANCHOR}] at {_pt(frame, marker.center)} "
                f"{{{latex_escape(marker.label)}}};"
            )
    lines.append("  \\end{pgfonlayer}")
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)

from typing import List

from .path import Segment, Sigil


def format_segment(seg: Segment) -> str:
    text = f'{seg.key} ({seg.start.x:.3f}, {seg.start.y:.3f}) -> ({seg.end.x:.3f}, {seg.end.y:.3f})'
    if seg.closing:
        text += ' [closing]'
    return text


def print_sigil(sigil: Sigil) -> str:
    """Plain-text description of ``sigil``: visited points, then strokes."""
    if sigil.is_empty:
        return 'sigil (empty)\n'
    lines: List[str] = [f'sigil {sigil.text}']
    lines.append('points:')
    for pt in sigil.points:
        angle = f' angle={pt.angle:.4f}' if pt.angle is not None else ''
        lines.append(f'  {pt.symbol.char}#{pt.symbol.index}: ({pt.x:.3f}, {pt.y:.3f}){angle}')
    lines.append('segments:')
    if not sigil.segments:
        lines.append('  (none)')
    for seg in sigil.segments:
        lines.append(f'  [{seg.index}] {format_segment(seg)}')
    return '\n'.join(lines) + '\n'

import math

import pytest

from chaos_sigil.alphabet import AlphabetConfig, map_alphabet
from chaos_sigil.normalize import normalize
from chaos_sigil.path import BuildOptions, Sigil, build
from chaos_sigil.render import RenderOptions, render_frame


@pytest.fixture
def latin():
    return map_alphabet(AlphabetConfig())


def _sigil(text, mapping, close=False):
    return build(normalize(text, mapping), mapping, BuildOptions(close=close))


def _canvas(mapping, char):
    pt = mapping.lookup(char)
    return (400.0 + pt.x, 300.0 + pt.y)


def test_empty_sigil_renders_empty_frame(latin):
    frame = render_frame(Sigil(), 1, mapping=latin)

    assert frame.is_empty
    assert (frame.width, frame.height) == (800.0, 600.0)


def test_single_point_renders_marker_only(latin):
    frame = render_frame(_sigil('H', latin), 1, mapping=latin)

    assert frame.lines == []
    assert frame.embellishments == []
    assert len(frame.markers) == 1
    marker = frame.markers[0]
    assert marker.role == 'dot'
    assert marker.center == pytest.approx(_canvas(latin, 'H'))


def test_hello_frame_has_stroke_markers_and_embellishments(latin):
    frame = render_frame(_sigil('HELLO', latin), 5, mapping=latin)

    assert len(frame.lines) == 1
    line = frame.lines[0]
    assert line.role == 'stroke'
    assert line.start == pytest.approx(_canvas(latin, 'H'))
    assert line.end == pytest.approx(_canvas(latin, 'L'))
    angle = 2 * math.pi * 7 / 26
    assert line.start == pytest.approx((400 + 250 * math.cos(angle), 300 + 250 * math.sin(angle)))

    assert [m.center for m in frame.markers] == [line.start, line.end]
    kinds = [emb.kind for emb in frame.embellishments]
    assert kinds == ['guide', 'ring', 'tick']
    guide = frame.embellishments[0]
    assert guide.center == (400.0, 300.0)
    assert guide.size == 250.0


def test_closing_segment_is_tagged(latin):
    frame = render_frame(_sigil('HELLO', latin, close=True), 5, mapping=latin)

    assert [line.role for line in frame.lines] == ['stroke', 'closing']
    assert frame.lines[1].start == frame.lines[0].end
    assert frame.lines[1].end == frame.lines[0].start


def test_embellishments_are_displaced_within_jitter(latin):
    options = RenderOptions(embellish_jitter=4.0)
    frame = render_frame(_sigil('HELLO', latin), 5, options, mapping=latin)

    ring = next(emb for emb in frame.embellishments if emb.kind == 'ring')
    start = frame.lines[0].start
    assert abs(ring.center[0] - start[0]) <= 4.0
    assert abs(ring.center[1] - start[1]) <= 4.0
    assert ring.center != start

    tick = next(emb for emb in frame.embellishments if emb.kind == 'tick')
    assert math.dist(tick.start, tick.end) == pytest.approx(options.tick_length)


def test_same_seed_same_frame_and_new_seed_moves_embellishments(latin):
    sigil = _sigil('I will find peace', latin)

    first = render_frame(sigil, 11, mapping=latin)
    again = render_frame(sigil, 11, mapping=latin)
    other = render_frame(sigil, 12, mapping=latin)

    assert first == again
    assert first.lines == other.lines
    assert first.embellishments != other.embellishments


def test_point_rings_and_labels(latin):
    options = RenderOptions(point_rings=True, labels=True, layout_guide=False)
    sigil = _sigil('strength', latin)
    frame = render_frame(sigil, 3, options, mapping=latin)

    rings = [emb for emb in frame.embellishments if emb.kind == 'ring']
    assert len(rings) == len(sigil.points)
    assert [m.label for m in frame.markers] == list(sigil.text)
    assert all(emb.kind != 'guide' for emb in frame.embellishments)


def test_line_jitter_moves_vertices_consistently(latin):
    sigil = _sigil('strength', latin)
    frame = render_frame(sigil, 3, RenderOptions(line_jitter=5.0), mapping=latin)

    for prev, nxt in zip(frame.lines, frame.lines[1:]):
        assert prev.end == nxt.start
    assert frame.lines[0].start != pytest.approx(_canvas(latin, 'S'))


def test_partial_progress_draws_part_of_the_path(latin):
    sigil = _sigil('HELLO', latin, close=True)

    frame = render_frame(sigil, 1, mapping=latin, progress=0.5)

    assert len(frame.lines) == 1
    start = _canvas(latin, 'H')
    end = _canvas(latin, 'L')
    midpoint = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
    assert frame.lines[0].end == pytest.approx(midpoint)
    assert len(frame.markers) == 1
    assert frame.embellishments == []

    frame = render_frame(sigil, 1, mapping=latin, progress=1.0)
    assert len(frame.lines) == 1
    assert len(frame.markers) == 2

    frame = render_frame(sigil, 1, mapping=latin, progress=0.0)
    assert frame.lines == []
    assert len(frame.markers) == 1


def test_pulse_inflates_markers(latin):
    sigil = _sigil('HELLO', latin)

    calm = render_frame(sigil, 1, mapping=latin, pulse=0.0)
    full = render_frame(sigil, 1, mapping=latin, pulse=1.0)
    clipped = render_frame(sigil, 1, mapping=latin, pulse=7.0)

    assert calm.markers[0].radius == pytest.approx(5.0)
    assert full.markers[0].radius == pytest.approx(6.25)
    assert clipped.markers[0].radius == pytest.approx(6.25)


def test_render_without_mapping_uses_origin(latin):
    frame = render_frame(_sigil('HELLO', latin), 1)

    assert frame.lines[0].start == pytest.approx(_canvas(latin, 'H'))
    assert all(emb.kind != 'guide' for emb in frame.embellishments)

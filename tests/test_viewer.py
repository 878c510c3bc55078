import matplotlib

matplotlib.use("Agg")

from matplotlib.figure import Figure  # noqa: E402

from chaos_sigil.app import AppFrame, SigilApp  # noqa: E402
from chaos_sigil.config import SigilConfig  # noqa: E402
from chaos_sigil.pipeline import generate_sigil, render_result  # noqa: E402
from chaos_sigil.render import DrawList  # noqa: E402
from chaos_sigil.viewer import MatplotlibCanvas, _disable_default_keymaps  # noqa: E402


def test_canvas_draws_sigil_primitives():
    config = SigilConfig()
    result = generate_sigil("HELLO", config)
    frame = AppFrame(state="display", draw=render_result(result, config), text="HELLO")
    canvas = MatplotlibCanvas(figure=Figure(figsize=(8, 6), dpi=100))

    canvas.draw_frame(frame)

    assert canvas.frames_drawn == 1
    # one stroke and the end tick
    assert len(canvas.axes.lines) == 2
    # guide circle, two markers and the start ring
    assert len(canvas.axes.patches) == 4
    assert canvas.axes.get_ylim() == (600.0, 0.0)
    assert [t.get_text() for t in canvas.axes.texts] == ["HELLO"]


def test_canvas_redraw_replaces_previous_frame():
    canvas = MatplotlibCanvas(figure=Figure(figsize=(8, 6), dpi=100))
    empty = AppFrame(state="input", draw=DrawList(width=800.0, height=600.0), text="ab", cursor=1)

    canvas.draw_frame(empty)
    canvas.draw_frame(empty)

    assert canvas.frames_drawn == 2
    assert len(canvas.axes.lines) == 0
    texts = [t.get_text() for t in canvas.axes.texts]
    assert texts == ["Enter your intention:", "a|b"]


def test_app_frames_render_through_canvas():
    app = SigilApp(SigilConfig(), clock=lambda: 0.0)
    canvas = MatplotlibCanvas(figure=Figure(figsize=(8, 6), dpi=100))

    app.run_frame(canvas)
    app.handle_key("x")
    for ch in "moon":
        app.handle_key(ch)
    app.handle_key("enter")
    app.run_frame(canvas)

    assert canvas.frames_drawn == 2
    assert len(canvas.axes.patches) > 0


def test_default_keymaps_are_disabled():
    with matplotlib.rc_context():
        _disable_default_keymaps()
        assert matplotlib.rcParams["keymap.save"] == []
        assert matplotlib.rcParams["keymap.quit"] == []


def test_input_text_brackets_selection_and_cursor():
    canvas = MatplotlibCanvas(figure=Figure(figsize=(8, 6), dpi=100))
    frame = AppFrame(
        state="input",
        draw=DrawList(width=800.0, height=600.0),
        text="hello",
        cursor=3,
        selection=(1, 3),
    )

    canvas.draw_frame(frame)

    assert [t.get_text() for t in canvas.axes.texts][-1] == "h[el|]lo"

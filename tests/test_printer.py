from chaos_sigil.pipeline import generate_sigil
from chaos_sigil.config import SigilConfig
from chaos_sigil.path import BuildOptions, Sigil
from chaos_sigil.printer import format_segment, print_sigil


def test_empty_sigil_prints_placeholder():
    assert print_sigil(Sigil()) == 'sigil (empty)\n'


def test_dot_has_no_segments():
    out = print_sigil(generate_sigil('h').sigil)

    assert out.startswith('sigil H\npoints:\n  H#7: (')
    assert out.endswith('segments:\n  (none)\n')


def test_closed_sigil_lists_closing_stroke():
    sigil = generate_sigil('HELLO', SigilConfig(build=BuildOptions(close=True))).sigil

    out = print_sigil(sigil)

    assert '  [0] H-L (' in out
    assert '  [1] L-H (' in out
    assert out.rstrip().endswith('[closing]')
    assert format_segment(sigil.segments[0]).startswith('H-L (')


def test_grid_points_print_without_angle():
    from chaos_sigil.alphabet import AlphabetConfig

    sigil = generate_sigil('HELLO', SigilConfig(alphabet=AlphabetConfig(layout='grid'))).sigil

    assert 'angle=' not in print_sigil(sigil)

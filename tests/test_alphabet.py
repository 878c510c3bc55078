import math

import pytest

from chaos_sigil.alphabet import (
    AlphabetConfig,
    AlphabetError,
    LATIN,
    LayoutPoint,
    Symbol,
    map_alphabet,
)


def test_latin_circle_places_letters_around_radius():
    mapping = map_alphabet(AlphabetConfig())

    assert len(mapping) == 26
    assert mapping.characters == 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

    a = mapping.lookup('A')
    assert a == LayoutPoint(Symbol('A', 0), 250.0, 0.0, 0.0)

    n = mapping.lookup('N')
    assert n.symbol.index == 13
    assert n.angle == pytest.approx(math.pi)
    assert n.x == pytest.approx(-250.0)
    assert n.y == pytest.approx(0.0, abs=1e-9)

    for pt in mapping:
        assert math.hypot(pt.x, pt.y) == pytest.approx(250.0)


def test_circle_honours_center_and_start_angle():
    config = AlphabetConfig(alphabet='ABCD', center=(10.0, -5.0), radius=2.0, start_angle=math.pi / 2)
    mapping = map_alphabet(config)

    a = mapping.lookup('A')
    assert a.x == pytest.approx(10.0)
    assert a.y == pytest.approx(-3.0)
    b = mapping.lookup('B')
    assert b.x == pytest.approx(8.0)
    assert b.y == pytest.approx(-5.0)


def test_grid_layout_is_centered_row_major():
    mapping = map_alphabet(AlphabetConfig(layout='grid', cell_size=60.0))

    # 26 symbols -> 6 columns, 5 rows
    first = mapping.lookup('A')
    assert (first.x, first.y) == pytest.approx((-150.0, -120.0))
    h = mapping.lookup('H')
    assert (h.x, h.y) == pytest.approx((-90.0, -60.0))
    assert h.angle is None


def test_grid_width_override():
    mapping = map_alphabet(AlphabetConfig(alphabet='ABCD', layout='grid', grid_width=4, cell_size=1.0))

    ys = {pt.y for pt in mapping}
    assert ys == {0.0}
    assert [pt.x for pt in mapping] == pytest.approx([-1.5, -0.5, 0.5, 1.5])


@pytest.mark.parametrize('layout', ['circle', 'grid'])
def test_no_two_symbols_share_coordinates(layout):
    mapping = map_alphabet(AlphabetConfig(alphabet='alnum', layout=layout))

    coords = {(round(pt.x, 6), round(pt.y, 6)) for pt in mapping}
    assert len(coords) == len(mapping) == 36


def test_unknown_characters_map_to_none():
    mapping = map_alphabet(AlphabetConfig())

    assert mapping.lookup('?') is None
    assert mapping.lookup('7') is None
    assert mapping.lookup('a') is None
    assert mapping.lookup(3) is None
    assert '?' not in mapping
    assert 'Q' in mapping


def test_lookup_by_symbol_requires_matching_index():
    mapping = map_alphabet(AlphabetConfig())

    assert mapping.lookup(Symbol('H', 7)) is mapping.lookup('H')
    assert mapping.lookup(Symbol('H', 3)) is None
    assert mapping.symbol_for('H') == Symbol('H', 7)
    assert mapping.symbol_for('#') is None


def test_mapping_is_cached_per_configuration():
    config = AlphabetConfig(layout='grid')

    assert map_alphabet(config) is map_alphabet(AlphabetConfig(layout='grid'))
    assert map_alphabet(config) is not map_alphabet(AlphabetConfig())


def test_custom_alphabet_is_upper_cased():
    mapping = map_alphabet(AlphabetConfig(alphabet='xyz'))

    assert mapping.characters == 'XYZ'


@pytest.mark.parametrize(
    'config, message_part',
    [
        (AlphabetConfig(alphabet=''), 'at least one character'),
        (AlphabetConfig(alphabet='ABA'), 'must be distinct'),
        (AlphabetConfig(alphabet='A B'), 'whitespace'),
        (AlphabetConfig(layout='spiral'), 'layout must be one of'),
        (AlphabetConfig(radius=0.0), 'circle radius must be positive'),
        (AlphabetConfig(radius=-3.0), 'circle radius must be positive'),
        (AlphabetConfig(layout='grid', cell_size=0.0), 'cell size must be positive'),
        (AlphabetConfig(layout='grid', grid_width=0), 'grid width must be positive'),
        (AlphabetConfig(center=(float('nan'), 0.0)), 'center must be finite'),
    ],
)
def test_invalid_configuration_fails_fast(config, message_part):
    with pytest.raises(AlphabetError) as exc:
        map_alphabet(config)

    assert message_part in str(exc.value)
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize('name, expected', [('latin', LATIN), ('LATIN', 'LATIN'), ('Alnum', 'ALNUM')])
def test_preset_names_match_exactly(name, expected):
    assert AlphabetConfig(alphabet=name).characters() == expected


def test_list_center_is_coerced_and_cached():
    mapping = map_alphabet(AlphabetConfig(alphabet='ABCD', center=[3, 4]))

    assert mapping.config.center == (3.0, 4.0)
    assert map_alphabet(AlphabetConfig(alphabet='ABCD', center=(3.0, 4.0))) is mapping


@pytest.mark.parametrize('center', [[0.0], 'xy', None])
def test_malformed_center_is_an_alphabet_error(center):
    with pytest.raises(AlphabetError, match='center must be an'):
        AlphabetConfig(center=center)

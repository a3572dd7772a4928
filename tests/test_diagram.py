import pytest

from homeplanner.core.model import FeatureType, Wall
from homeplanner.render.diagram import (
    EMPTY_FLOOR_TEXT,
    EMPTY_PROJECT_TEXT,
    DiagramBoundsError,
    format_feet,
    render_floor,
    render_project,
)


def test_small_room(room_factory):
    room = room_factory(name="Den", width=4, length=4)

    assert render_floor([room], strict=True) == "\n".join(
        [
            " +------+",
            " |  Den |",
            " | 4'x4'|",
            " +------+",
        ]
    )


def test_long_name_is_omitted(room_factory):
    lines = render_floor([room_factory(name="Living Room", width=4, length=4)]).splitlines()

    assert "Living" not in "\n".join(lines)
    assert lines[2] == " | 4'x4'|"


def test_labels_need_three_rows(room_factory):
    text = render_floor([room_factory(name="Hall", width=10, length=2)])
    assert "Hall" not in text
    assert "10'x2'" not in text


def test_fractional_sizes_in_label(room_factory):
    text = render_floor([room_factory(name="Bath", width=8.5, length=6)])
    assert "8.5'x6'" in text


def test_feature_glyphs(room_factory, feature_factory):
    room = room_factory(
        name="Den",
        width=4,
        length=4,
        features=(
            feature_factory("d", FeatureType.DOOR, Wall.TOP, 50, 3),
            feature_factory("w", FeatureType.WINDOW, Wall.LEFT, 50, 2),
            feature_factory("o", FeatureType.OPENING, Wall.BOTTOM, 25, 2),
            feature_factory("x", FeatureType.OUTLET, Wall.RIGHT, 50, 0.5),
        ),
    )

    lines = render_floor([room], strict=True).splitlines()

    assert lines[0] == " +---D--+"
    assert lines[2][1] == "W"
    assert lines[3] == " +-=----+"
    assert lines[2][8] == "|"


def test_glyph_never_replaces_a_corner(room_factory, feature_factory):
    room = room_factory(width=4, length=4, features=(feature_factory(kind=FeatureType.DOOR, wall=Wall.TOP, offset=0),))
    assert render_floor([room]).splitlines()[0] == " +------+"


def test_out_of_bounds_glyph(room_factory, feature_factory):
    room = room_factory(name="Den", width=4, length=4, features=(feature_factory(wall=Wall.TOP, offset=200),))
    plain = room_factory(name="Den", width=4, length=4)

    assert render_floor([room]) == render_floor([plain])
    with pytest.raises(DiagramBoundsError):
        render_floor([room], strict=True)


def test_crossing_borders_merge(room_factory):
    big = room_factory("a", 0, 0, name="A", width=10, length=10)
    small = room_factory("b", 75, 120, name="B", width=4, length=4)

    lines = render_floor([big, small]).splitlines()

    # Bottom wall of A (row 10) crossed by the sides of B (columns 11 and 18)
    assert lines[9][11] == "+"
    assert lines[9][18] == "+"
    assert lines[9][5] == "-"


def test_diagram_is_translation_invariant(room_factory):
    near = room_factory(name="Den", width=4, length=4)
    far = room_factory(name="Den", x=300, y=450, width=4, length=4)
    assert render_floor([near]) == render_floor([far])


def test_no_trailing_whitespace(room_factory):
    text = render_floor([room_factory("a", 0, 0, name="A"), room_factory("b", 150, 75, name="B", width=6, length=4)])
    assert all(line == line.rstrip() for line in text.splitlines())
    assert all(line.strip() for line in text.splitlines())


def test_empty_inputs():
    assert render_floor([]) == EMPTY_FLOOR_TEXT
    assert render_project([]) == EMPTY_PROJECT_TEXT


def test_floors_in_ascending_order(room_factory):
    upstairs = room_factory("up", name="Up", width=4, length=4, floor=2)
    downstairs = room_factory("down", name="Dn", width=4, length=4, floor=1)

    text = render_project([upstairs, downstairs])

    assert text.startswith("--- Floor 1 Diagram ---\n\n")
    assert "\n\n--- Floor 2 Diagram ---\n\n" in text
    assert text.index("Dn") < text.index("Up")
    assert not text.endswith("\n")


def test_format_feet():
    assert format_feet(10.0) == "10"
    assert format_feet(10.5) == "10.5"
    assert format_feet(155 / 15) == "10.333333333333334"

from dataclasses import replace

import pytest

from homeplanner.config import ROOM_COLORS
from homeplanner.core.model import Dimension, FeatureType, Furniture, PetType, Project, Property, RoomType, Vector2, Wall
from homeplanner.engine import (
    DragSession,
    DragState,
    InvalidOperation,
    commit,
    commit_all,
    list_operations,
    preview,
    register_operation,
)


def test_registry_lists_builtin_operations():
    names = list_operations()
    for name in ("move_room", "resize_room", "create_opening", "add_room", "draw_room", "add_feature"):
        assert name in names


def test_preview_does_not_snap_and_commit_does(side_by_side):
    operation = {"op": "move_room", "room": "a", "dx": 7, "dy": 0}

    previewed = preview(side_by_side, operation)
    committed = commit(side_by_side, operation)

    assert previewed.room("a").position == Vector2(7, 0)
    assert committed.room("a").position == Vector2(8, 0)
    assert side_by_side.room("a").position == Vector2(0, 0)


def test_only_commit_is_recorded(side_by_side, history):
    operation = {"op": "move_room", "room": "a", "dx": 15, "dy": 15}

    preview(side_by_side, operation)
    assert history.snapshots == []

    result = commit(side_by_side, operation, history)
    assert history.snapshots == [result]


def test_type_key_is_accepted(side_by_side):
    result = commit(side_by_side, {"type": "rotate_room", "room": "b"})
    assert result.room("b").rotation == 90


@pytest.mark.parametrize(
    "operation",
    [
        {"room": "a"},
        {"op": "teleport_room", "room": "a"},
        {"op": "move_room", "room": "missing", "dx": 1, "dy": 1},
        {"op": "move_room", "room": "a"},
        {"op": "resize_room", "room": "a", "handle": "middle", "dx": 1, "dy": 1},
        {"op": "nudge_room", "room": "a", "direction": "sideways"},
        {"op": "update_room", "room": "a", "room_type": "Dungeon"},
    ],
)
def test_bad_operations_raise(side_by_side, operation):
    with pytest.raises(InvalidOperation):
        commit(side_by_side, operation)


def test_create_opening_links_both_rooms(side_by_side):
    result = commit(side_by_side, {"op": "create_opening", "room": "a", "neighbor": "b"})

    (opening_a,) = result.room("a").features
    (opening_b,) = result.room("b").features
    assert (opening_a.type, opening_a.wall) == (FeatureType.OPENING, Wall.RIGHT)
    assert (opening_b.type, opening_b.wall) == (FeatureType.OPENING, Wall.LEFT)
    assert opening_a.size == opening_b.size == pytest.approx(10)
    assert opening_a.offset == opening_b.offset == pytest.approx(50)


def test_create_opening_twice_is_rejected(side_by_side):
    opened = commit(side_by_side, {"op": "create_opening", "room": "a"})

    with pytest.raises(InvalidOperation, match="already connected"):
        commit(opened, {"op": "create_opening", "room": "a"})


def test_create_opening_without_matching_wall(side_by_side):
    with pytest.raises(InvalidOperation, match="shares no matching wall"):
        commit(side_by_side, {"op": "create_opening", "room": "a", "wall": "top"})


def test_add_room_defaults(side_by_side):
    result = commit(side_by_side, {"op": "add_room", "room_id": "new"})

    room = result.room("new")
    assert room.name == "New Room"
    assert room.type == RoomType.CUSTOM
    assert (room.dimensions.width, room.dimensions.length) == (10, 10)
    assert room.position == Vector2(50, 50)
    assert room.color == ROOM_COLORS["Custom"]


def test_add_room_with_existing_id(side_by_side):
    with pytest.raises(InvalidOperation, match="already exists"):
        commit(side_by_side, {"op": "add_room", "room_id": "a"})


def test_negative_position_fails_on_commit_only(side_by_side):
    operation = {"op": "add_room", "room_id": "new", "x": -10}

    assert preview(side_by_side, operation).room("new").position.x == -10
    with pytest.raises(InvalidOperation, match="failed validation"):
        commit(side_by_side, operation)


def test_delete_room(side_by_side):
    result = commit(side_by_side, {"op": "delete_room", "room": "a"})
    assert [room.id for room in result.rooms] == ["b"]


def test_update_room_snaps_typed_dimensions(side_by_side):
    result = commit(side_by_side, {"op": "update_room", "room": "a", "width": 10.3, "length": 1, "name": "Den"})

    room = result.room("a")
    assert room.name == "Den"
    assert room.dimensions.width == 10.5
    assert room.dimensions.length == 2.0


def test_nudge_room(side_by_side):
    moved = commit(side_by_side, {"op": "nudge_room", "room": "b", "direction": "left"})
    assert moved.room("b").position == Vector2(135, 0)

    clamped = commit(side_by_side, {"op": "nudge_room", "room": "a", "direction": "up", "amount": 2})
    assert clamped.room("a").position == Vector2(0, 0)


def test_draw_room(side_by_side):
    result = commit(side_by_side, {"op": "draw_room", "start": [0, 200], "end": [100, 240]})

    drawn = result.rooms[-1]
    assert drawn.type == RoomType.HALLWAY
    assert drawn.position == Vector2(0, 202.5)
    assert drawn.dimensions.width == pytest.approx(6.5)
    assert drawn.dimensions.length == pytest.approx(2.5)
    assert drawn.color == ROOM_COLORS["Hallway"]


def test_draw_room_too_small(side_by_side):
    with pytest.raises(InvalidOperation, match="too small"):
        commit(side_by_side, {"op": "draw_room", "start": [0, 0], "end": [3, 3]})


def test_add_update_and_remove_feature(side_by_side):
    added = commit(
        side_by_side,
        {"op": "add_feature", "room": "a", "feature_type": "window", "wall": "top", "feature_id": "w1"},
    )
    (window,) = added.room("a").features
    assert (window.id, window.size, window.offset) == ("w1", 4.0, 50.0)

    updated = commit(added, {"op": "update_feature", "room": "a", "feature": "w1", "offset": 25, "wall": "bottom"})
    (window,) = updated.room("a").features
    assert (window.wall, window.offset) == (Wall.BOTTOM, 25.0)

    removed = commit(updated, {"op": "remove_feature", "room": "a", "feature": "w1"})
    assert removed.room("a").features == ()


def test_feature_wider_than_wall_is_rejected(side_by_side):
    with pytest.raises(InvalidOperation, match="does not fit"):
        commit(side_by_side, {"op": "add_feature", "room": "a", "feature_type": "door", "wall": "left", "size": 12})


def test_feature_offset_out_of_range_fails_validation(side_by_side):
    with pytest.raises(InvalidOperation, match="outside 0-100"):
        commit(side_by_side, {"op": "add_feature", "room": "a", "feature_type": "door", "wall": "left", "offset": 120})


def test_unknown_feature(side_by_side):
    with pytest.raises(InvalidOperation, match="does not exist"):
        commit(side_by_side, {"op": "remove_feature", "room": "a", "feature": "nope"})


def test_commit_all_records_each_step(side_by_side, history):
    result = commit_all(
        side_by_side,
        [
            {"op": "rotate_room", "room": "a"},
            {"op": "rotate_room", "room": "a"},
        ],
        history,
    )

    assert result.room("a").rotation == 180
    assert [p.room("a").rotation for p in history.snapshots] == [90, 180]


def test_register_operation(side_by_side):
    class RenameAll:
        def precheck(self, project, **kwargs):
            return True

        def apply(self, project, label, **kwargs):
            return project.replace_rooms([replace(room, name=label) for room in project.rooms])

    register_operation("rename_all", RenameAll())
    result = commit(side_by_side, {"op": "rename_all", "label": "Room"})

    assert {room.name for room in result.rooms} == {"Room"}


def test_drag_move_session(side_by_side, history):
    session = DragSession(history=history)
    session.begin(side_by_side, "a")

    assert session.state == DragState.DRAGGING
    assert session.update(7, 3).room("a").position == Vector2(7, 3)
    assert session.update(20, 3).room("a").position == Vector2(20, 3)
    assert history.snapshots == []

    result = session.release(22, 3)
    assert result.room("a").position == Vector2(23, 0)
    assert session.state == DragState.COMMITTED
    assert history.snapshots == [result]


def test_drag_resize_session(side_by_side):
    session = DragSession()
    session.begin(side_by_side, "a", handle="left")

    result = session.release(30, 0)

    room = result.room("a")
    assert room.position == Vector2(30, 0)
    assert room.dimensions.width == pytest.approx(8)
    assert room.dimensions.length == pytest.approx(10)


def test_drag_cancel_restores_start(side_by_side, history):
    session = DragSession(history=history)
    session.begin(side_by_side, "a")
    session.update(40, 40)

    assert session.cancel() is side_by_side
    assert session.state == DragState.CANCELLED
    assert history.snapshots == []


def test_drag_illegal_transitions(side_by_side):
    session = DragSession()
    with pytest.raises(InvalidOperation, match="idle"):
        session.update(1, 1)

    session.begin(side_by_side, "a")
    with pytest.raises(InvalidOperation):
        session.begin(side_by_side, "a")

    session.release(0, 0)
    with pytest.raises(InvalidOperation, match="committed"):
        session.cancel()


def test_drag_unknown_room_or_handle(side_by_side):
    with pytest.raises(InvalidOperation, match="does not exist"):
        DragSession().begin(side_by_side, "missing")
    with pytest.raises(InvalidOperation, match="handle"):
        DragSession().begin(side_by_side, "a", handle="middle")


def test_update_feature_must_fit_its_wall(side_by_side):
    added = commit(
        side_by_side,
        {"op": "add_feature", "room": "a", "feature_type": "window", "wall": "top", "feature_id": "w1"},
    )

    with pytest.raises(InvalidOperation, match="does not fit"):
        commit(added, {"op": "update_feature", "room": "a", "feature": "w1", "size": 50})


def test_update_feature_checks_the_new_wall(side_by_side):
    narrow = commit(side_by_side, {"op": "update_room", "room": "a", "length": 4})
    added = commit(
        narrow,
        {"op": "add_feature", "room": "a", "feature_type": "window", "wall": "top", "size": 6, "feature_id": "w1"},
    )

    with pytest.raises(InvalidOperation, match="left wall"):
        commit(added, {"op": "update_feature", "room": "a", "feature": "w1", "wall": "left"})


def test_shrinking_a_room_keeps_features_on_their_walls(side_by_side):
    added = commit(
        side_by_side,
        {"op": "add_feature", "room": "a", "feature_type": "window", "wall": "top", "size": 8, "feature_id": "w1"},
    )

    resized = commit(added, {"op": "resize_room", "room": "a", "handle": "right", "dx": -120, "dy": 0})
    typed = commit(added, {"op": "update_room", "room": "a", "width": 3})

    assert resized.room("a").features[0].size == pytest.approx(2)
    assert typed.room("a").features[0].size == pytest.approx(3)


def test_create_opening_skips_walls_already_open(room_factory):
    project = Project(
        Property("Row"),
        (room_factory("mid", 150, 0), room_factory("west", 0, 0), room_factory("east", 300, 0)),
    )

    first = commit(project, {"op": "create_opening", "room": "mid"})
    second = commit(first, {"op": "create_opening", "room": "mid"})

    walls = sorted(f.wall.value for f in second.room("mid").features)
    assert walls == ["left", "right"]
    with pytest.raises(InvalidOperation, match="already connected"):
        commit(second, {"op": "create_opening", "room": "mid"})


@pytest.fixture
def furnished(side_by_side):
    sofa = Furniture("sofa", "sofa", Vector2(1, 1), Dimension(7, 3), rotation=270)
    return side_by_side.replace_rooms([replace(side_by_side.room("a"), furniture=(sofa,))])


def test_update_furniture(furnished):
    result = commit(
        furnished,
        {"op": "update_furniture", "room": "a", "furniture": "sofa", "name": "couch", "width": 6, "x": 2, "rotate": True},
    )

    (couch,) = result.room("a").furniture
    assert couch.name == "couch"
    assert couch.dimensions == Dimension(6, 3)
    assert couch.position == Vector2(2, 1)
    assert couch.rotation == 0


def test_update_furniture_rejects_odd_rotation(furnished):
    with pytest.raises(InvalidOperation, match="rotation"):
        commit(furnished, {"op": "update_furniture", "room": "a", "furniture": "sofa", "rotation": 45})


def test_remove_furniture(furnished):
    result = commit(furnished, {"op": "remove_furniture", "room": "a", "furniture": "sofa"})
    assert result.room("a").furniture == ()

    with pytest.raises(InvalidOperation, match="does not exist"):
        commit(result, {"op": "remove_furniture", "room": "a", "furniture": "sofa"})


def test_add_and_remove_pet(side_by_side):
    result = commit(side_by_side, {"op": "add_pet", "room": "a", "name": "Rex", "pet_type": "Cat"})

    (pet,) = result.room("a").pets
    assert pet.id.startswith("pet-")
    assert (pet.name, pet.type) == ("Rex", PetType.CAT)
    assert pet.position == Vector2(5, 5)

    removed = commit(result, {"op": "remove_pet", "room": "a", "pet": pet.id})
    assert removed.room("a").pets == ()


@pytest.mark.parametrize(
    "operation",
    [
        {"op": "add_pet", "room": "a", "name": "  "},
        {"op": "add_pet", "room": "a", "name": "Rex", "pet_type": "Dragon"},
        {"op": "remove_pet", "room": "a", "pet": "nope"},
    ],
)
def test_bad_pet_operations(side_by_side, operation):
    with pytest.raises(InvalidOperation):
        commit(side_by_side, operation)

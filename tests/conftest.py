import pytest

from homeplanner.core.model import Dimension, Feature, FeatureType, Project, Property, Room, RoomType, Vector2, Wall


def make_room(room_id="r1", x=0.0, y=0.0, width=10.0, length=10.0, **kwargs):
    """Build a room positioned in pixels and sized in feet."""
    kwargs.setdefault("name", room_id.upper())
    kwargs.setdefault("type", RoomType.CUSTOM)
    return Room(
        id=room_id,
        dimensions=Dimension(width, length),
        position=Vector2(x, y),
        **kwargs,
    )


def make_feature(feature_id="f1", kind=FeatureType.WINDOW, wall=Wall.RIGHT, offset=50.0, size=4.0):
    return Feature(id=feature_id, type=kind, wall=wall, offset=offset, size=size)


@pytest.fixture
def room_factory():
    return make_room


@pytest.fixture
def feature_factory():
    return make_feature


@pytest.fixture
def side_by_side():
    """Two 10 ft rooms sharing a full wall: A at the origin, B to its right."""
    return Project(
        property=Property(name="Test House", address="1 Main St"),
        rooms=(make_room("a", 0, 0, name="Alpha"), make_room("b", 150, 0, name="Beta")),
    )


class RecordingHistory:
    def __init__(self):
        self.snapshots = []

    def record(self, project):
        self.snapshots.append(project)


@pytest.fixture
def history():
    return RecordingHistory()

import json

import pytest

from conftest import make_feature, make_room
from homeplanner.core.model import (
    CostEstimates,
    Dimension,
    FeatureType,
    Furniture,
    Pet,
    PetType,
    Project,
    Property,
    Vector2,
    Wall,
)
from homeplanner.io.parser import (
    INVALID_FORMAT,
    load_project,
    project_file_name,
    project_from_dict,
    room_to_dict,
    save_project,
)
from homeplanner.io.report import RULE, build_report, export_report, report_file_name
from homeplanner.render.diagram import render_project


@pytest.fixture
def furnished():
    den = make_room(
        "den",
        0,
        0,
        width=12,
        length=10.5,
        name="Den",
        floor=1,
        color="#fef08a",
        wall_color="#E2E8F0",
        description="Bright corner room.\nFaces the garden.",
        features=(
            make_feature("d1", FeatureType.DOOR, Wall.TOP, offset=33.5, size=3),
            make_feature("s1", FeatureType.SLIDING_DOOR, Wall.RIGHT, offset=50, size=6),
        ),
        furniture=(Furniture("f1", "king_bed", Vector2(1, 1), Dimension(6, 7), rotation=90),),
        pets=(Pet("p1", "Rex", PetType.DOG, Vector2(2, 2)),),
        cost_estimates=CostEstimates(5.5, 2.0, 3.25),
    )
    attic = make_room("attic", 0, 0, name="attic", floor=2)
    bath = make_room("bath", 180, 0, width=6, length=8, name="Bath", floor=1)
    return Project(property=Property("Test House", "1 Main St"), rooms=(den, attic, bath))


def test_save_and_load_round_trip(tmp_path, furnished):
    path = save_project(furnished, tmp_path / "house.json")

    assert load_project(path) == furnished


def test_saved_file_uses_camel_case_and_diagram(tmp_path, furnished):
    path = save_project(furnished, tmp_path / "house.json")
    data = json.loads(path.read_text(encoding="utf-8"))

    den = data["rooms"][0]
    assert den["wallColor"] == "#E2E8F0"
    assert den["costEstimates"] == {"flooring": 5.5, "paint": 2.0, "labor": 3.25}
    assert den["furniture"][0]["rotation"] == 90
    assert data["diagram"] == render_project(furnished.rooms)


def test_unset_optionals_are_omitted(room_factory):
    data = room_to_dict(room_factory())

    for key in ("color", "wallColor", "description", "costEstimates"):
        assert key not in data
    assert data["floor"] == 1


def test_save_into_directory_uses_project_name(tmp_path, furnished):
    path = save_project(furnished, tmp_path)
    assert path.name == "Test_House.json"


def test_default_file_name():
    assert project_file_name(Project(Property(""))) == "home-plan.json"
    assert report_file_name(Project(Property("My Home"))) == "My_Home_Report.txt"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_project(tmp_path / "nope.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Could not parse"):
        load_project(path)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"rooms": []},
        {"property": "House", "rooms": []},
        {"property": {"name": "House"}, "rooms": {}},
    ],
)
def test_invalid_project_shape(data):
    with pytest.raises(ValueError, match=INVALID_FORMAT):
        project_from_dict(data)


def test_invalid_room_reports_index():
    data = {
        "property": {"name": "House", "address": ""},
        "rooms": [{"id": "r1", "name": "R", "type": "Dungeon", "dimensions": {"width": 1, "length": 1},
                   "position": {"x": 0, "y": 0}}],
    }
    with pytest.raises(ValueError, match="index 0"):
        project_from_dict(data)


def test_legacy_room_defaults():
    data = {
        "property": {"name": "House"},
        "rooms": [
            {
                "id": "r1",
                "name": "Old",
                "type": "Bedroom",
                "dimensions": {"width": 10, "length": 12},
                "position": {"x": 15, "y": 30},
                "pets": None,
            }
        ],
        "diagram": "ignored",
    }

    project = project_from_dict(data)
    room = project.room("r1")

    assert project.property.address == ""
    assert room.floor == 1
    assert room.rotation == 0
    assert room.features == room.furniture == room.pets == ()


def test_report_header_and_room_order(furnished):
    lines = build_report(furnished).split("\n")

    assert lines[:5] == ["Project Report", "====================", "", "Project Name: Test House", "Address: 1 Main St"]
    assert "Full Layout Diagram" in lines
    rooms = [line for line in lines if line.startswith("ROOM: ")]
    assert rooms == ["ROOM: Bath", "ROOM: Den", "ROOM: attic"]


def test_report_room_details(furnished):
    report = build_report(furnished)

    expected = "\n".join(
        [
            RULE,
            "ROOM: Den",
            RULE,
            "- Type: Custom",
            "- Floor: 1",
            "- Dimensions: 12 ft (Width) x 10.5 ft (Length)",
            "- Area: 126.00 sq. ft.",
            "",
            "- AI Description:",
            "  Bright corner room.",
            "  Faces the garden.",
            "",
            "- Features:",
            "  - Door: on top wall, 3 ft wide, offset at 34%.",
            "  - Sliding door: on right wall, 6 ft wide, offset at 50%.",
            "",
            "- Furniture Layout:",
            "  - king bed (6' x 7')",
            "",
            "- Pets in this room:",
            "  - Rex (the Dog)",
            "",
        ]
    )
    assert expected in report
    assert report.endswith("\n")


def test_report_without_address():
    report = build_report(Project(Property("Shed"), (make_room(),)))
    assert "Address:" not in report


def test_export_report_into_directory(tmp_path, furnished):
    path = export_report(furnished, tmp_path)

    assert path.name == "Test_House_Report.txt"
    assert path.read_text(encoding="utf-8") == build_report(furnished)

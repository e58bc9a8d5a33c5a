import io

import pytest

from cubraycaster.constants import Facing
from cubraycaster.scene import (
    Scene,
    SceneError,
    assign_element,
    check_map_name,
    check_paths,
    identifier_error,
    load_elements,
    map_width,
    read_scene_lines,
    split_element_line,
)

ELEMENTS = [
    "NO ./textures/north.xpm",
    "SO ./textures/south.xpm",
    "WE ./textures/west.xpm",
    "EA ./textures/east.xpm",
    "F 220,100,0",
    "C 225,30,0",
]
MAP = ["111111", "100001", "10N001", "111111"]


def scene_text(elements=ELEMENTS, rows=MAP):
    return "\n".join(elements) + "\n\n" + "\n".join(rows) + "\n"


def test_check_map_name_accepts_cub():
    assert check_map_name("maps/level.cub") == "maps/level.cub"


@pytest.mark.parametrize("name", ["level.ber", "cub", "level.cub.txt", "levelcub"])
def test_check_map_name_rejects_other_names(name):
    with pytest.raises(SceneError, match="Invalid file type"):
        check_map_name(name)


def test_read_scene_lines_trims_elements():
    text = "   NO ./textures/north.xpm  \n" + scene_text(ELEMENTS[1:])
    text = "\t" + ELEMENTS[0] + " \r\n" + "\n".join(ELEMENTS[1:]) + "\n\n" + "\n".join(MAP) + "\n"
    assert read_scene_lines(io.StringIO(text)) == ELEMENTS + MAP


def test_read_scene_lines_keeps_leading_spaces_of_rows():
    rows = [" 1111", " 1N01", " 1111"]
    text = "\n".join(ELEMENTS) + "\n" + "\n".join(row + "  \t" for row in rows) + "\n"
    assert read_scene_lines(io.StringIO(text))[6:] == rows


def test_read_scene_lines_skips_blank_lines_before_map():
    text = "\n\n" + "\n\n".join(ELEMENTS) + "\n\n \n\n" + "\n".join(MAP)
    assert read_scene_lines(io.StringIO(text)) == ELEMENTS + MAP


def test_read_scene_lines_rejects_blank_line_inside_map():
    text = "\n".join(ELEMENTS) + "\n" + "\n".join(MAP[:2]) + "\n\n" + "\n".join(MAP[2:])
    with pytest.raises(SceneError, match="Empty line in map"):
        read_scene_lines(io.StringIO(text))


def test_read_scene_lines_rejects_blank_line_after_map():
    with pytest.raises(SceneError, match="Empty line in map"):
        read_scene_lines(io.StringIO(scene_text() + "\n"))


@pytest.mark.parametrize("text", ["", "\n\n", "  \t\n"])
def test_read_scene_lines_rejects_empty_input(text):
    with pytest.raises(SceneError, match="Empty map"):
        read_scene_lines(io.StringIO(text))


def test_identifier_error_accepts_single_identifier():
    assert identifier_error(ELEMENTS, "NO ") is False


def test_identifier_error_flags_duplicate():
    lines = [ELEMENTS[0], ELEMENTS[0]] + ELEMENTS[2:]
    assert identifier_error(lines, "NO ") is True
    assert identifier_error(lines, "SO ") is True


def test_identifier_error_only_looks_at_first_six_lines():
    lines = ELEMENTS[1:] + ["SO ./again.xpm", ELEMENTS[0]]
    assert identifier_error(lines, "NO ") is True


@pytest.mark.parametrize(
    "line, words",
    [
        ("NO ./a.xpm", ["NO", "./a.xpm"]),
        ("F\t 1,2,3", ["F", "1,2,3"]),
        ("EA", ["EA"]),
    ],
)
def test_split_element_line(line, words):
    assert split_element_line(line) == words


@pytest.mark.parametrize("line", ["NO ./a b", "", "F 1, 2,3"])
def test_split_element_line_rejects_malformed(line):
    with pytest.raises(SceneError):
        split_element_line(line)


@pytest.mark.parametrize(
    "identifier, attribute",
    [
        ("NO", "path_no"),
        ("SO", "path_so"),
        ("WE", "path_we"),
        ("EA", "path_ea"),
        ("F", "floor_spec"),
        ("C", "ceiling_spec"),
    ],
)
def test_assign_element_sets_field(identifier, attribute):
    scene = Scene()
    assign_element(scene, [identifier, "value"])
    assert getattr(scene, attribute) == "value"


def test_assign_element_without_value_stores_none():
    scene = Scene(path_no="old")
    assign_element(scene, ["NO"])
    assert scene.path_no is None


@pytest.mark.parametrize("words", [["XX", "a"], ["NOO", "a"], ["no", "a"], []])
def test_assign_element_rejects_unknown(words):
    with pytest.raises(SceneError):
        assign_element(Scene(), words)


def test_load_elements_fills_scene():
    scene = Scene(lines=ELEMENTS + MAP)
    load_elements(scene)
    assert scene.path_so == "./textures/south.xpm"
    assert scene.ceiling_spec == "225,30,0"
    assert scene.texture_paths[Facing.WEST] == "./textures/west.xpm"


def test_load_elements_rejects_extra_words():
    scene = Scene(lines=["NO ./a.xpm ./b.xpm"] + ELEMENTS[1:] + MAP)
    with pytest.raises(SceneError):
        load_elements(scene)


def test_map_width_uses_only_map_rows():
    assert map_width(ELEMENTS + ["1111", "1111111", "11"]) == len("1111111")
    assert map_width(ELEMENTS) == 0


def test_check_paths_splits_scene():
    scene = Scene(lines=ELEMENTS + MAP)
    check_paths(scene)
    assert scene.grid == MAP
    assert scene.width == len(MAP[0])
    assert scene.path_ea == "./textures/east.xpm"
    assert scene.floor_spec == "220,100,0"


def test_check_paths_rejects_missing_texture():
    scene = Scene(lines=["XX ./a.xpm"] + ELEMENTS[1:] + MAP)
    with pytest.raises(SceneError, match="textures"):
        check_paths(scene)


def test_check_paths_rejects_duplicate_color():
    scene = Scene(lines=ELEMENTS[:4] + ["C 1,2,3", "C 4,5,6"] + MAP)
    with pytest.raises(SceneError, match="color identifier"):
        check_paths(scene)
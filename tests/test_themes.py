import copy
import json
from importlib import resources

import pytest

from chalkmaze.data import load_themes, parse_themes, theme_for_level, validate_themes
from chalkmaze.exceptions import ThemeDataError


def _bundled():
    text = resources.files("chalkmaze.data").joinpath("themes.json").read_text(encoding="utf-8")
    return json.loads(text)


def test_bundled_themes_are_valid():
    validate_themes(_bundled())
    default_key, themes = load_themes()
    assert default_key == "dungeon"
    torches = themes["dungeon"].wall_torches
    assert torches.spacing == 8
    assert (torches.flicker_min, torches.flicker_max) == (0.8, 1.2)


def test_every_level_gets_a_theme():
    assert theme_for_level(1).key == "dungeon"
    assert theme_for_level(99).key == "dungeon"


def test_schema_violation_lists_errors():
    data = copy.deepcopy(_bundled())
    data["themes"]["dungeon"]["lighting"]["wall_torches"]["spacing"] = 0
    del data["themes"]["dungeon"]["fog"]
    with pytest.raises(ThemeDataError) as excinfo:
        parse_themes(data)
    assert len(excinfo.value.errors) == 2
    assert "spacing" in excinfo.value.to_human()


def test_unknown_default_rejected():
    data = copy.deepcopy(_bundled())
    data["default"] = "castle"
    with pytest.raises(ThemeDataError):
        validate_themes(data)

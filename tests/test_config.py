"""Tests for theme loading and schema."""

import json
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from term_slides.config import (
    DEFAULT_THEMES,
    RgbColor,
    Theme,
    ThemeColors,
    available_themes,
    get_theme,
    load_themes,
    parse_themes,
    save_themes,
)


def test_rgb_from_hex():
    """Test that hex colors parse with or without '#'."""
    assert RgbColor.from_hex("#A6E3A1") == RgbColor(r=0xa6, g=0xe3, b=0xa1)
    assert RgbColor.from_hex("000000").as_tuple() == (0, 0, 0)
    assert RgbColor(r=255, g=0, b=16).to_hex() == "#ff0010"


def test_rgb_from_hex_invalid():
    with pytest.raises(ValueError):
        RgbColor.from_hex("#abc")


def test_rgb_range():
    with pytest.raises(ValidationError):
        RgbColor(r=256, g=0, b=0)


def test_theme_colors_accepts_triples_and_hex():
    colors = ThemeColors(green=[1, 2, 3], teal="#040506", red=(7, 8, 9), peach="0a0b0c")
    assert colors.green.as_tuple() == (1, 2, 3)
    assert colors.teal.as_tuple() == (4, 5, 6)
    assert colors.red.as_tuple() == (7, 8, 9)
    assert colors.peach.as_tuple() == (10, 11, 12)


def test_theme_colors_rejects_unknown_accent():
    with pytest.raises(ValidationError):
        ThemeColors(green="000000", teal="000000", red="000000", peach="000000",
                    title_accent="purple")


def test_theme_accents_default():
    """Test that the title uses red and the footer uses green by default."""
    theme = DEFAULT_THEMES['mocha']
    assert theme.title_color == theme.colors.red
    assert theme.footer_color == theme.colors.green


def test_theme_heading_color_range():
    theme = DEFAULT_THEMES['frappe']
    assert theme.heading_color(1) == theme.colors.green
    assert theme.heading_color(4) == theme.colors.peach
    with pytest.raises(ValueError):
        theme.heading_color(5)


def test_theme_flat_definition():
    theme = Theme.model_validate({
        'name': 'flat',
        'green': '#00ff00', 'teal': '#008080', 'red': '#ff0000', 'peach': '#ffcba4',
        'footer_accent': 'teal',
    })
    assert theme.footer_color == RgbColor(r=0, g=0x80, b=0x80)


def test_default_themes():
    assert set(DEFAULT_THEMES) == {'latte', 'frappe', 'macchiato', 'mocha'}
    for name, theme in DEFAULT_THEMES.items():
        assert theme.name == name


def test_parse_themes_mapping():
    themes = parse_themes({
        'themes': {
            'mono': {'green': 'ffffff', 'teal': 'ffffff', 'red': 'ffffff', 'peach': 'ffffff'},
        }
    })
    assert themes['mono'].name == 'mono'


def test_parse_themes_list():
    themes = parse_themes([
        {'name': 'one', 'colors': {'green': [0, 0, 0], 'teal': [0, 0, 0],
                                   'red': [0, 0, 0], 'peach': [0, 0, 0]}},
    ])
    assert list(themes) == ['one']


def test_parse_themes_invalid():
    with pytest.raises(ValueError):
        parse_themes("not themes")


def test_load_themes_yaml():
    """Test loading themes from YAML file."""
    data = {
        'solar': {
            'green': '#859900', 'teal': '#2aa198', 'red': '#dc322f', 'peach': '#cb4b16',
            'title_accent': 'peach',
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(data, f)
        temp_path = f.name

    try:
        themes = load_themes(temp_path)
        assert themes['solar'].colors.green.to_hex() == '#859900'
        assert themes['solar'].title_color == themes['solar'].colors.peach
    finally:
        Path(temp_path).unlink()


def test_load_themes_json():
    data = {'plain': {'green': [0, 255, 0], 'teal': [0, 128, 128], 'red': [255, 0, 0], 'peach': [255, 200, 160]}}

    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        json.dump(data, f)
        temp_path = f.name

    try:
        themes = load_themes(temp_path)
        assert themes['plain'].colors.red.as_tuple() == (255, 0, 0)
    finally:
        Path(temp_path).unlink()


def test_load_themes_missing_file():
    with pytest.raises(FileNotFoundError):
        load_themes("/nonexistent/themes.yaml")


def test_load_themes_unsupported_format():
    with tempfile.NamedTemporaryFile(mode='w', suffix='.toml', delete=False) as f:
        f.write("x = 1\n")
        temp_path = f.name

    try:
        with pytest.raises(ValueError):
            load_themes(temp_path)
    finally:
        Path(temp_path).unlink()


def test_save_and_load_themes():
    """Test round-trip save and load."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        temp_path = f.name

    try:
        save_themes(DEFAULT_THEMES.values(), temp_path)
        loaded = load_themes(temp_path)
        assert loaded == DEFAULT_THEMES
    finally:
        Path(temp_path).unlink()


def test_get_theme():
    assert get_theme('Mocha') is DEFAULT_THEMES['mocha']
    with pytest.raises(KeyError) as excinfo:
        get_theme('nope')
    assert 'latte' in str(excinfo.value)


def test_available_themes_override():
    custom = Theme(name='mocha', colors=ThemeColors(
        green='000000', teal='000000', red='000000', peach='000000'))
    themes = available_themes({'mocha': custom})
    assert themes['mocha'] is custom
    assert 'latte' in themes
    assert DEFAULT_THEMES['mocha'] is not custom

"""
Theme tests

Tests the built-in palette, YAML theme directories, inheritance and
validation errors.
"""

import pytest
from pathlib import Path

from neonlight.lib.theme import (
    BUILTIN_THEMES,
    Theme,
    ThemeError,
    ThemeFile,
    theme_load,
    theme_validate,
    themes_listAvailable,
)
from neonlight.models import ColorScheme, TokenClass


def theme_write(themes_dir: Path, name: str, body: str) -> Path:
    theme_dir = themes_dir / name
    theme_dir.mkdir(parents=True)
    (theme_dir / "theme.yaml").write_text(body, encoding="utf-8")
    return theme_dir


class TestBuiltinTheme:
    """The neon palette"""

    def test_light(self):
        theme = theme_load("neon", ColorScheme.LIGHT)
        assert theme.base == "#1d1d1f"
        assert theme.background == "#ffffff"
        assert theme.color_for(TokenClass.KEYWORD) == "#fb00ba"
        assert theme.color_for(TokenClass.COMMENT) == "#5d6c79"

    def test_dark(self):
        theme = theme_load("neon", "dark")
        assert theme.base == "#f5f5f7"
        assert theme.color_for(TokenClass.COMMENT) == "#96a0aa"
        assert theme.color_for(TokenClass.PROPERTY) == "#1d00a0"

    def test_exhaustive(self):
        """Every token class has a colour in both schemes"""
        for scheme in ColorScheme:
            theme = theme_load("neon", scheme)
            assert set(theme.colors) == set(TokenClass)

    def test_hashable_and_equal(self):
        assert theme_load() == theme_load()
        assert hash(theme_load()) == hash(theme_load())
        assert theme_load("neon", "light") != theme_load("neon", "dark")

    def test_unknown_scheme(self):
        with pytest.raises(ThemeError, match="colour scheme"):
            theme_load("neon", "sepia")

    def test_unknown_theme_without_directory(self):
        with pytest.raises(ThemeError, match="not a built-in"):
            theme_load("midnight")

    def test_missing_token_class_rejected(self):
        with pytest.raises(ThemeError, match="no colour for"):
            Theme(
                name="partial",
                scheme=ColorScheme.LIGHT,
                base="#000000",
                background="#ffffff",
                colors={TokenClass.KEYWORD: "#ff0000"},
            )

    def test_pygments_style(self):
        from pygments.token import Keyword, Comment

        style = theme_load().pygmentsStyle_make()
        assert style.background_color == "#ffffff"
        assert style.style_for_token(Keyword)["color"] == "fb00ba"
        assert style.style_for_token(Comment)["color"] == "5d6c79"


class TestThemeFiles:
    """YAML themes on disk"""

    def test_full_theme(self, tmp_path):
        colors = "\n".join(f'  {token.value}: "#101010"' for token in TokenClass)
        theme_write(tmp_path, "mono", f'base: "#202020"\nbackground: {{light: "#fafafa", dark: "#000000"}}\ncolors:\n{colors}\n')

        light = theme_load("mono", "light", str(tmp_path))
        dark = theme_load("mono", "dark", str(tmp_path))

        assert light.base == dark.base == "#202020"
        assert light.background == "#fafafa"
        assert dark.background == "#000000"
        assert light.color_for(TokenClass.TYPE) == "#101010"

    def test_extends_builtin(self, tmp_path):
        theme_write(tmp_path, "pink", 'extends: neon\ncolors:\n  keyword: "#FF00FF"\n')
        theme = theme_load("pink", "light", str(tmp_path))
        assert theme.color_for(TokenClass.KEYWORD) == "#ff00ff"
        assert theme.color_for(TokenClass.STRING) == "#be00ff"
        assert theme.base == "#1d1d1f"

    def test_incomplete_theme_rejected(self, tmp_path):
        theme_write(tmp_path, "half", 'base: "#000000"\nbackground: "#ffffff"\ncolors:\n  keyword: "#ff0000"\n')
        with pytest.raises(ThemeError, match="no colour for"):
            theme_load("half", "light", str(tmp_path))

    def test_unknown_token_class(self, tmp_path):
        theme_write(tmp_path, "odd", 'extends: neon\ncolors:\n  sparkle: "#ff0000"\n')
        with pytest.raises(ThemeError, match="unknown token class"):
            theme_load("odd", "light", str(tmp_path))

    def test_bad_color(self, tmp_path):
        theme_write(tmp_path, "bad", 'extends: neon\ncolors:\n  keyword: red\n')
        with pytest.raises(ThemeError, match="Invalid colour"):
            theme_load("bad", "light", str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        theme_write(tmp_path, "broken", "colors: [unclosed\n")
        with pytest.raises(ThemeError, match="parse"):
            ThemeFile("broken", str(tmp_path))

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ThemeError, match="not found"):
            theme_load("ghost", "light", str(tmp_path))

    def test_missing_yaml(self, tmp_path):
        (tmp_path / "empty").mkdir()
        with pytest.raises(ThemeError, match="missing theme.yaml"):
            theme_load("empty", "light", str(tmp_path))

    def test_config_get(self, tmp_path):
        theme_write(tmp_path, "pink", 'extends: neon\ncolors:\n  keyword: "#ff00ff"\n')
        theme_file = ThemeFile("pink", str(tmp_path))
        assert theme_file.config_get("colors.keyword") == "#ff00ff"
        assert theme_file.config_get("colors.missing", "fallback") == "fallback"

    def test_builtin_shadows_directory(self, tmp_path):
        """A directory named like a built-in does not replace it"""
        theme_write(tmp_path, "neon", 'extends: neon\ncolors:\n  keyword: "#000000"\n')
        theme = theme_load("neon", "light", str(tmp_path))
        assert theme.color_for(TokenClass.KEYWORD) == BUILTIN_THEMES["neon"]["colors"]["keyword"]


class TestDiscovery:
    """Listing and validating themes"""

    def test_list_available(self, tmp_path):
        theme_write(tmp_path, "pink", 'extends: neon\n')
        (tmp_path / "not-a-theme").mkdir()
        assert themes_listAvailable(str(tmp_path)) == ["neon", "pink"]

    def test_list_without_directory(self):
        assert themes_listAvailable(None) == ["neon"]

    def test_validate(self, tmp_path):
        theme_write(tmp_path, "pink", 'extends: neon\n')
        theme_write(tmp_path, "half", 'colors:\n  keyword: "#ff0000"\n')

        ok, message = theme_validate("pink", str(tmp_path))
        assert ok
        assert "valid" in message

        ok, message = theme_validate("half", str(tmp_path))
        assert not ok

"""
Theme loader and manager for neonlight.

A theme maps every TokenClass to a colour, for a light and a dark
appearance. One built-in theme ("neon") ships with the package; more can be
added as directories containing a theme.yaml:

    themes/
      midnight/
        theme.yaml

theme.yaml layout:

    extends: neon                 # optional, fill gaps from a built-in
    base: {light: "#1d1d1f", dark: "#f5f5f7"}
    background: "#ffffff"         # a plain string applies to both schemes
    colors:
      keyword: "#fb00ba"
      comment: {light: "#5d6c79", dark: "#96a0aa"}

A resolved Theme is immutable and exhaustive: building one with a token class
missing raises ThemeError.
"""

import re
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Type, Union, TYPE_CHECKING

from ..models.tokens import TokenClass, ColorScheme

if TYPE_CHECKING:
    from pygments.style import Style


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# Vibrant palette of the Neon Vision editor, expressed as hex.
BUILTIN_THEMES: Dict[str, Dict[str, Any]] = {
    "neon": {
        "base": {"light": "#1d1d1f", "dark": "#f5f5f7"},
        "background": {"light": "#ffffff", "dark": "#1e1e1e"},
        "colors": {
            "keyword": "#fb00ba",
            "string": "#be00ff",
            "number": "#1c00cf",
            "comment": {"light": "#5d6c79", "dark": "#96a0aa"},
            "attribute": "#3900ff",
            "variable": "#1300ff",
            "def": "#1dc453",
            "property": {"light": "#1dc453", "dark": "#1d00a0"},
            "meta": "#ff1000",
            "tag": "#aa00a0",
            "atom": "#1c00cf",
            "builtin": "#ff8200",
            "type": "#aa00a0",
        },
    },
}


@dataclass(frozen=True)
class Theme:
    """
    A palette resolved for one colour scheme.

    Equality covers every colour; hashing uses (name, scheme) only so themes
    can sit inside snapshot keys.

    Attributes:
        name: Theme name
        scheme: Appearance the colours were resolved for
        base: Default text colour painted under every span
        background: Editor background colour
        colors: Exhaustive TokenClass -> "#rrggbb" table
    """
    name: str
    scheme: ColorScheme
    base: str
    background: str
    colors: Dict[TokenClass, str] = field(hash=False)

    def __post_init__(self) -> None:
        missing = [token.value for token in TokenClass if token not in self.colors]
        if missing:
            raise ThemeError(
                f"Theme '{self.name}' has no colour for: {', '.join(missing)}"
            )

    def color_for(self, token: TokenClass) -> str:
        """Colour painted for a token class"""
        return self.colors[token]

    def pygmentsStyle_make(self) -> Type["Style"]:
        """
        Build a Pygments Style class carrying this theme's colours.

        Returns:
            Style subclass usable with any Pygments formatter
        """
        from pygments.style import Style
        from pygments.token import Token, Text

        from .lexer import PYGMENTS_TOKENS

        styles: Dict[Any, str] = {Token: self.base, Text: self.base}
        for token, ttype in PYGMENTS_TOKENS.items():
            styles[ttype] = self.colors[token]

        class_name = f"{self.name.title().replace('-', '').replace('_', '')}Style"
        return type(class_name, (Style,), {
            "background_color": self.background,
            "styles": styles,
        })

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}', scheme='{self.scheme.value}')"


def color_pick(entry: Union[str, Dict[str, str], None], scheme: ColorScheme, where: str) -> str:
    """
    Resolve one colour entry for a scheme.

    Args:
        entry: "#rrggbb" string, or {"light": ..., "dark": ...} mapping
        scheme: Scheme to resolve for
        where: Human readable location, used in error messages

    Returns:
        Lowercase hex colour

    Raises:
        ThemeError: If the entry is missing or not a hex colour
    """
    value: Any = entry
    if isinstance(entry, dict):
        value = entry.get(scheme.value)
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ThemeError(f"Invalid colour for {where} ({scheme.value}): {value!r}")
    return value.lower()


def palette_resolve(name: str, config: Dict[str, Any], scheme: ColorScheme) -> Theme:
    """
    Turn a palette dictionary (built-in or parsed theme.yaml) into a Theme.

    Args:
        name: Theme name
        config: Palette dictionary
        scheme: Scheme to resolve for

    Returns:
        Resolved Theme

    Raises:
        ThemeError: On unknown token classes, bad colours or missing classes
    """
    parent = config.get('extends')
    if parent is not None:
        if parent not in BUILTIN_THEMES:
            raise ThemeError(f"Theme '{name}' extends unknown built-in theme '{parent}'")
        merged: Dict[str, Any] = dict(BUILTIN_THEMES[parent])
        merged['colors'] = {**BUILTIN_THEMES[parent]['colors'], **(config.get('colors') or {})}
        for key in ('base', 'background'):
            if key in config:
                merged[key] = config[key]
        config = merged

    raw_colors = config.get('colors') or {}
    if not isinstance(raw_colors, dict):
        raise ThemeError(f"Theme '{name}': 'colors' must be a mapping")

    colors: Dict[TokenClass, str] = {}
    for key, entry in raw_colors.items():
        try:
            token = TokenClass(key)
        except ValueError:
            raise ThemeError(f"Theme '{name}': unknown token class '{key}'")
        colors[token] = color_pick(entry, scheme, f"'{name}.{key}'")

    return Theme(
        name=name,
        scheme=scheme,
        base=color_pick(config.get('base'), scheme, f"'{name}.base'"),
        background=color_pick(config.get('background'), scheme, f"'{name}.background'"),
        colors=colors,
    )


class ThemeFile:
    """
    A theme directory on disk.

    A theme consists of:
      - Configuration (base/background/colors) from theme.yaml
    """

    def __init__(self, theme_name: str, themes_dir: str = "themes"):
        """
        Locate and parse a theme by name.

        Args:
            theme_name: Name of the theme directory (e.g., "midnight")
            themes_dir: Path to themes directory (default: "themes")

        Raises:
            ThemeError: If theme directory or theme.yaml don't exist or can't be parsed
        """
        self.name = theme_name
        self.themes_dir = Path(themes_dir)
        self.theme_dir = self.themes_dir / theme_name

        if not self.theme_dir.exists():
            raise ThemeError(
                f"Theme '{theme_name}' not found. "
                f"Expected directory: {self.theme_dir}"
            )

        self.config_path = self.theme_dir / "theme.yaml"
        if not self.config_path.exists():
            raise ThemeError(
                f"Theme '{theme_name}' missing theme.yaml"
            )

        self.config = self._config_load()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse theme.yaml"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse theme.yaml: {e}")
        except OSError as e:
            raise ThemeError(f"Failed to load theme.yaml: {e}")
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ThemeError(f"Theme '{self.name}': theme.yaml must contain a mapping")
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from theme.yaml.

        Supports nested keys with dot notation:
          theme_file.config_get('colors.keyword', '#000000')
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def resolve(self, scheme: ColorScheme) -> Theme:
        """Resolve this file's palette for a colour scheme"""
        return palette_resolve(self.name, self.config, scheme)

    def __repr__(self) -> str:
        return f"ThemeFile(name='{self.name}', path='{self.theme_dir}')"


def theme_load(
    theme_name: str = "neon",
    scheme: Union[ColorScheme, str] = ColorScheme.LIGHT,
    themes_dir: Optional[str] = None,
) -> Theme:
    """
    Load a theme by name: built-ins first, then <themes_dir>/<name>/theme.yaml.

    Args:
        theme_name: Theme name
        scheme: ColorScheme or its string value
        themes_dir: Directory of YAML themes (None = built-ins only)

    Returns:
        Resolved Theme

    Raises:
        ThemeError: If the theme cannot be found or is invalid
    """
    if isinstance(scheme, str):
        try:
            scheme = ColorScheme(scheme.lower())
        except ValueError:
            raise ThemeError(f"Unknown colour scheme '{scheme}'")

    if theme_name in BUILTIN_THEMES:
        return palette_resolve(theme_name, BUILTIN_THEMES[theme_name], scheme)
    if themes_dir is None:
        raise ThemeError(f"Theme '{theme_name}' is not a built-in theme")
    return ThemeFile(theme_name, themes_dir).resolve(scheme)


def themes_listAvailable(themes_dir: Optional[str] = "themes") -> list[str]:
    """
    List all available theme names.

    Args:
        themes_dir: Path to themes directory

    Returns:
        Built-in names plus directory names with a theme.yaml, sorted
    """
    themes: set[str] = set(BUILTIN_THEMES)
    if themes_dir is None:
        return sorted(themes)

    themes_path: Path = Path(themes_dir)
    if themes_path.exists():
        for item in themes_path.iterdir():
            if item.is_dir() and (item / "theme.yaml").exists():
                themes.add(item.name)

    return sorted(themes)


def theme_validate(theme_name: str, themes_dir: Optional[str] = "themes") -> tuple[bool, str]:
    """
    Validate a theme for both colour schemes.

    Args:
        theme_name: Name of theme to validate
        themes_dir: Path to themes directory

    Returns:
        Tuple of (is_valid, message)
    """
    try:
        for scheme in ColorScheme:
            theme_load(theme_name, scheme, themes_dir)
    except ThemeError as e:
        return False, str(e)
    return True, f"Theme '{theme_name}' is valid"

"""
Config Manager

Loads YAML configuration (with include support) and the slide deck, and
builds the PresentationConfig the engine runs with. Falls back to the
bundled factory defaults when the user config cannot be loaded.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from slidedeck.engine.easing import get_easing, list_easings
from slidedeck.models.actions import action_from_type
from slidedeck.models.config import (
    DEFAULT_DESIGN_SIZE,
    DEFAULT_KEY_BINDINGS,
    KeyBinding,
    PresentationConfig,
    Size,
)
from slidedeck.models.enums import NavActionType
from slidedeck.models.slides import SlideCatalog
from slidedeck.styles import FRAGMENT_MOTIONS, SLIDE_MOTIONS
from slidedeck.utils.enum_helper import EnumHelper
from slidedeck.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

CONFIG_DIR = Path(__file__).parent.parent / "config"
FACTORY_DEFAULTS_PATH = CONFIG_DIR / "factory_defaults.yaml"


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml; an 'include:' list pulls in further YAML files from
    the same directory and merges them (later files win per top-level key).

    Example:
        config = ConfigManager("config/config.yaml")
        config.load()

        presentation = config.get_presentation_config()
        catalog = config.load_deck()
        state_file = config.location_state_file
    """

    def __init__(self, config_path=None, defaults_path=FACTORY_DEFAULTS_PATH):
        """
        Args:
            config_path: Path to the user config.yaml (None = factory defaults only)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path) if config_path else None
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self._config_dir = self.config_path.parent if self.config_path else CONFIG_DIR

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Fallback to factory defaults on any failure

        Returns:
            Merged config data dict
        """
        if self.config_path is None:
            self.data = self._load_factory_defaults()
            return self.data

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if not isinstance(main_config, dict):
                raise yaml.YAMLError(f"top level must be a mapping, got {type(main_config).__name__}")

            if 'include' in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config.pop('include'), self.config_path.parent)
                self.data.update(main_config)
            else:
                self.data = main_config

            self._config_dir = self.config_path.parent
            log.info("Configuration loaded", path=str(self.config_path), keys=str(list(self.data.keys())))

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config", path=str(self.config_path), error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._load_factory_defaults()

        return self.data

    def _load_factory_defaults(self) -> Dict[str, Any]:
        with open(self.factory_defaults_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self._config_dir = self.factory_defaults_path.parent
        log.info("Factory defaults loaded", path=str(self.factory_defaults_path))
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["keys.yaml", "theme.yaml"])
            config_dir: Directory containing config files
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    file_data = yaml.safe_load(f)
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            if file_data and not isinstance(file_data, dict):
                raise yaml.YAMLError(f"{filename}: top level must be a mapping")
            if file_data:
                merged.update(file_data)
                log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        return merged

    # ===== Presentation =====

    def get_presentation_config(self) -> PresentationConfig:
        """Build PresentationConfig from the 'presentation' and 'key_bindings' sections"""
        section = self._section("presentation")
        defaults = PresentationConfig()

        return PresentationConfig(
            design_size=self._parse_size(section.get("design_size")),
            animation_duration_ms=self._parse_number(
                section.get("animation_duration_ms"), float, defaults.animation_duration_ms, "animation_duration_ms"
            ),
            easing=self._resolve_easing(section.get("easing"), defaults),
            slide_motion=self._resolve_style(section.get("slide_motion"), SLIDE_MOTIONS, defaults.slide_motion),
            fragment_motion=self._resolve_style(section.get("fragment_motion"), FRAGMENT_MOTIONS, defaults.fragment_motion),
            key_bindings=self.get_key_bindings(),
            fps=self._parse_number(section.get("fps"), int, defaults.fps, "fps"),
        )

    def get_key_bindings(self) -> List[KeyBinding]:
        """
        Parse 'key_bindings' entries of the form {action: GO_NEXT, keys: [RIGHT, L]}.

        Entries with unknown or unbindable actions are skipped; a missing
        section gives the default bindings.
        """
        entries = self.data.get("key_bindings")
        if not entries:
            return list(DEFAULT_KEY_BINDINGS)

        bindings: List[KeyBinding] = []
        for entry in entries:
            try:
                action = EnumHelper.from_string(NavActionType, entry["action"])
                action_from_type(action)
                keys = entry.get("keys") or []
                if isinstance(keys, str):
                    keys = [keys]
                bindings.append(KeyBinding(action, tuple(str(k).upper() for k in keys)))
            except (KeyError, TypeError, ValueError) as ex:
                log.warn("Skipping invalid key binding", entry=str(entry), error=str(ex))

        return bindings

    @property
    def location_state_file(self) -> Optional[Path]:
        """State file for the persisted location, relative to the config dir"""
        path = self._section("location").get("state_file")
        if not path:
            return None
        return self._resolve_path(path)

    # ===== Deck =====

    def load_deck(self, deck_path=None) -> SlideCatalog:
        """
        Load the slide deck YAML: {slides: [[fragment, ...], ...]}

        A slide given as a single string is a one-fragment slide. A missing
        or unreadable deck gives an empty catalog.
        """
        path = Path(deck_path) if deck_path else None
        if path is None:
            configured = self._section("deck").get("path")
            if not configured:
                log.warn("No deck configured, presentation is empty")
                return SlideCatalog()
            path = self._resolve_path(configured)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load deck", path=str(path), error=str(ex))
            return SlideCatalog()

        # A bare list at the top level is the slide list itself
        entries = data if isinstance(data, list) else (data.get("slides") if isinstance(data, dict) else None)
        if not isinstance(entries, list):
            log.error("Deck has no slide list, presentation is empty", path=str(path), found=type(entries).__name__)
            return SlideCatalog()

        slides = []
        for slide in entries:
            if slide is None:
                slides.append([])
            elif isinstance(slide, (list, tuple)):
                slides.append(list(slide))
            else:
                slides.append([slide])

        catalog = SlideCatalog.from_lists(slides)
        log.info(
            "Deck loaded",
            path=str(path),
            slides=len(catalog),
            fragments=sum(s.fragment_count for s in catalog.slides),
        )
        return catalog

    # ===== Helpers =====

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            log.warn(f"Config section '{name}' is not a mapping, using defaults", found=type(section).__name__)
            return {}
        return section

    @staticmethod
    def _parse_number(value, cast, default, name: str):
        if value is None:
            return default
        try:
            return cast(value)
        except (TypeError, ValueError) as ex:
            log.warn(f"Invalid {name}, using default", value=str(value), default=default, error=str(ex))
            return default

    def _resolve_path(self, path) -> Path:
        p = Path(path)
        if p.is_absolute():
            return p
        return self._config_dir / p

    @staticmethod
    def _parse_size(value) -> Size:
        if not value:
            return DEFAULT_DESIGN_SIZE
        try:
            width, height = float(value["width"]), float(value["height"])
        except (KeyError, TypeError, ValueError) as ex:
            log.warn("Invalid design_size, using default", value=str(value), error=str(ex))
            return DEFAULT_DESIGN_SIZE
        if width <= 0 or height <= 0:
            log.warn("Non-positive design_size, using default", width=width, height=height)
            return DEFAULT_DESIGN_SIZE
        return Size(width, height)

    @staticmethod
    def _resolve_easing(name, defaults: PresentationConfig):
        if not name:
            return defaults.easing
        try:
            return get_easing(str(name))
        except KeyError:
            log.warn(f"Unknown easing '{name}', using default", available=", ".join(list_easings()))
            return defaults.easing

    @staticmethod
    def _resolve_style(name, registry: Dict[str, Any], default):
        if not name:
            return default
        style = registry.get(str(name).lower())
        if style is None:
            log.warn(f"Unknown style '{name}', using default", available=", ".join(registry.keys()))
            return default
        return style

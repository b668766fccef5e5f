"""
Tests for ConfigManager.

Covers factory defaults, user YAML with includes, fallback on broken
config, key binding parsing and deck loading.
"""

import textwrap

import pytest

from slidedeck.engine.easing import ease_in_out_cubic, ease_out_quad
from slidedeck.managers import ConfigManager
from slidedeck.models.config import DEFAULT_KEY_BINDINGS, Size
from slidedeck.models.enums import NavActionType
from slidedeck.styles import fragment_motion, slide_motion


def write(path, text):
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


class TestFactoryDefaults:
    def test_presentation_defaults(self):
        manager = ConfigManager()
        manager.load()
        config = manager.get_presentation_config()

        assert config.design_size == Size(1280, 720)
        assert config.animation_duration_ms == 500
        assert config.easing is ease_in_out_cubic
        assert config.slide_motion is slide_motion.scroll
        assert config.fragment_motion is fragment_motion.fade
        assert config.fps == 60
        assert config.key_bindings == list(DEFAULT_KEY_BINDINGS)

    def test_no_state_file_by_default(self):
        manager = ConfigManager()
        manager.load()
        assert manager.location_state_file is None

    def test_sample_deck(self):
        manager = ConfigManager()
        manager.load()
        catalog = manager.load_deck()

        assert len(catalog) == 4
        assert catalog.fragment_count(1) == 3
        assert catalog.get(3).fragments == ("The end",)


class TestUserConfig:
    def test_overrides(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            presentation:
              design_size: {width: 800, height: 600}
              animation_duration_ms: 250
              easing: ease_out_quad
              slide_motion: vertical_deck
              fragment_motion: reveal
              fps: 30
            location:
              state_file: state.json
        """)
        manager = ConfigManager(path)
        manager.load()
        config = manager.get_presentation_config()

        assert config.design_size == Size(800, 600)
        assert config.animation_duration_ms == 250
        assert config.easing is ease_out_quad
        assert config.slide_motion is slide_motion.vertical_deck
        assert config.fragment_motion is fragment_motion.reveal
        assert config.fps == 30
        assert manager.location_state_file == tmp_path / "state.json"

    def test_unknown_names_fall_back(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            presentation:
              easing: bounce
              slide_motion: cube
              design_size: {width: -1, height: 600}
        """)
        manager = ConfigManager(path)
        manager.load()
        config = manager.get_presentation_config()

        assert config.easing is ease_in_out_cubic
        assert config.slide_motion is slide_motion.scroll
        assert config.design_size == Size(1280, 720)

    def test_includes(self, tmp_path):
        write(tmp_path / "keys.yaml", """
            key_bindings:
              - action: GO_NEXT
                keys: [PAGEDOWN]
        """)
        write(tmp_path / "look.yaml", """
            presentation:
              easing: linear
        """)
        path = write(tmp_path / "config.yaml", """
            include:
              - keys.yaml
              - look.yaml
            presentation:
              fps: 24
        """)
        manager = ConfigManager(path)
        manager.load()

        bindings = manager.get_key_bindings()
        assert len(bindings) == 1
        assert bindings[0].keys == ("PAGEDOWN",)
        # Main file wins per top-level key
        assert manager.get_presentation_config().fps == 24

    def test_bad_scalars_fall_back(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            presentation:
              animation_duration_ms: fast
              fps: [60]
        """)
        manager = ConfigManager(path)
        manager.load()
        config = manager.get_presentation_config()

        assert config.animation_duration_ms == 500
        assert config.fps == 60

    def test_non_mapping_sections_fall_back(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            presentation: fast
            location: [state.json]
            deck: talk.yaml
        """)
        manager = ConfigManager(path)
        manager.load()

        assert manager.get_presentation_config().animation_duration_ms == 500
        assert manager.location_state_file is None
        assert len(manager.load_deck()) == 0

    def test_top_level_list_falls_back_to_defaults(self, tmp_path):
        path = write(tmp_path / "config.yaml", "- presentation\n")
        manager = ConfigManager(path)
        manager.load()
        assert manager.get_presentation_config().fps == 60

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml")
        data = manager.load()
        assert "presentation" in data
        assert manager.get_presentation_config().easing is ease_in_out_cubic

    def test_broken_yaml_falls_back_to_defaults(self, tmp_path):
        path = write(tmp_path / "config.yaml", "presentation: [unclosed\n")
        manager = ConfigManager(path)
        manager.load()
        assert manager.get_presentation_config().fps == 60


class TestKeyBindings:
    def test_invalid_entries_skipped(self, tmp_path):
        path = write(tmp_path / "config.yaml", """
            key_bindings:
              - action: go-next
                keys: [right, l]
              - action: JUMP
                keys: [J]
              - action: TICK
                keys: [T]
              - keys: [X]
              - action: GO_PREV
                keys: left
        """)
        manager = ConfigManager(path)
        manager.load()
        bindings = manager.get_key_bindings()

        assert [(b.action, b.keys) for b in bindings] == [
            (NavActionType.GO_NEXT, ("RIGHT", "L")),
            (NavActionType.GO_PREV, ("LEFT",)),
        ]


class TestDeck:
    def test_slide_shapes(self, tmp_path):
        deck = write(tmp_path / "deck.yaml", """
            slides:
              - [one, two]
              - single
              -
        """)
        catalog = ConfigManager().load_deck(deck)

        assert len(catalog) == 3
        assert catalog.get(0).fragments == ("one", "two")
        assert catalog.get(1).fragments == ("single",)
        assert catalog.get(2).fragment_count == 0

    def test_top_level_list_is_the_slide_list(self, tmp_path):
        deck = write(tmp_path / "deck.yaml", "- [a, b]\n- [c]\n")
        catalog = ConfigManager().load_deck(deck)

        assert len(catalog) == 2
        assert catalog.get(0).fragments == ("a", "b")

    def test_deck_without_slide_list_is_empty(self, tmp_path):
        deck = write(tmp_path / "deck.yaml", "slides: nope\n")
        assert len(ConfigManager().load_deck(deck)) == 0

    def test_missing_deck_is_empty(self, tmp_path):
        assert len(ConfigManager().load_deck(tmp_path / "nope.yaml")) == 0

    def test_deck_path_relative_to_config(self, tmp_path):
        write(tmp_path / "talk.yaml", "slides:\n  - [hello]\n")
        path = write(tmp_path / "config.yaml", "deck:\n  path: talk.yaml\n")
        manager = ConfigManager(path)
        manager.load()

        assert manager.load_deck().get(0).fragments == ("hello",)

    def test_no_deck_configured(self, tmp_path):
        path = write(tmp_path / "config.yaml", "presentation:\n  fps: 30\n")
        manager = ConfigManager(path)
        manager.load()
        assert len(manager.load_deck()) == 0

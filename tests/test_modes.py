"""
Tests for the mode registry.
"""

from taskvalet.config import ModeConfig
from taskvalet.modes import BUILTIN_MODES, get_all_modes, get_mode_by_slug


class TestModes:
    """Tests for mode lookup"""

    def test_builtin_lookup(self):
        mode = get_mode_by_slug("architect")
        assert mode is not None
        assert mode.name == "Architect"

    def test_unknown_slug(self):
        assert get_mode_by_slug("poetry") is None

    def test_custom_mode(self):
        custom = [ModeConfig(slug="reviewer", name="Reviewer", groups=["read"])]
        mode = get_mode_by_slug("reviewer", custom)

        assert mode.name == "Reviewer"
        assert mode.groups == ["read"]

    def test_custom_overrides_builtin(self):
        custom = [ModeConfig(slug="code", name="House Style Code")]

        assert get_mode_by_slug("code", custom).name == "House Style Code"
        all_modes = get_all_modes(custom)
        assert len(all_modes) == len(BUILTIN_MODES)
        assert [m.name for m in all_modes if m.slug == "code"] == ["House Style Code"]

    def test_all_modes_appends_new(self):
        custom = [ModeConfig(slug="docs", name="Docs")]
        assert len(get_all_modes(custom)) == len(BUILTIN_MODES) + 1

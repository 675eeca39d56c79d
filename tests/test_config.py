"""
Tests for playback settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chuk_mcp_harmony.config import PlaybackSettings, load_settings


class TestPlaybackSettings:
    """Tests for the settings model."""

    def test_defaults(self) -> None:
        settings = PlaybackSettings()
        assert settings.lookahead_seconds == 0.1
        assert settings.schedule_interval_ms == 25
        assert settings.schedule_interval_s == pytest.approx(0.025)
        assert settings.refresh_interval_s == pytest.approx(1 / 60)
        assert settings.octave == 4
        assert settings.gain == 0.6

    def test_cadence_must_be_shorter_than_lookahead(self) -> None:
        with pytest.raises(ValidationError, match="must be shorter"):
            PlaybackSettings(lookahead_seconds=0.02, schedule_interval_ms=25)

    def test_octave_keeps_extensions_in_midi_range(self) -> None:
        assert PlaybackSettings(octave=6).octave == 6
        with pytest.raises(ValidationError):
            PlaybackSettings(octave=7)

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlaybackSettings(lookahead=0.2)

    def test_frozen(self) -> None:
        settings = PlaybackSettings()
        with pytest.raises(ValidationError):
            settings.octave = 5


class TestLoadSettings:
    """Tests for YAML loading."""

    def test_none_gives_defaults(self) -> None:
        assert load_settings(None) == PlaybackSettings()

    def test_missing_file_gives_defaults(self, temp_dir: Path) -> None:
        assert load_settings(temp_dir / "missing.yaml") == PlaybackSettings()

    def test_empty_file(self, temp_dir: Path) -> None:
        path = temp_dir / "harmony.yaml"
        path.write_text("")
        assert load_settings(path) == PlaybackSettings()

    def test_overrides(self, temp_dir: Path) -> None:
        path = temp_dir / "harmony.yaml"
        path.write_text("lookahead_seconds: 0.15\noctave: 3\n")
        settings = load_settings(path)
        assert settings.lookahead_seconds == 0.15
        assert settings.octave == 3
        assert settings.schedule_interval_ms == 25

    def test_invalid_values(self, temp_dir: Path) -> None:
        path = temp_dir / "harmony.yaml"
        path.write_text("gain: 2.0\n")
        with pytest.raises(ValidationError):
            load_settings(path)

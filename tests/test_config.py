"""
Tests for configuration loading and participant resolution.
"""

import pytest

from meetingslotfinder.config import AppConfig, Colleague


def _config(**kwargs) -> AppConfig:
    colleagues = [
        Colleague(name="max", email="Max@Example.com"),
        Colleague(name="anna", email="anna@example.com"),
    ]
    return AppConfig(colleagues=colleagues, **kwargs)


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        """An empty config uses sensible defaults."""
        config = AppConfig()

        assert config.defaults.duration_minutes == 30
        assert config.calendar_file is None
        assert config.colleagues == []
        assert not config.strict_participants

    def test_load_from_yaml(self, tmp_path):
        """Config is read from YAML and relative calendar paths are resolved."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "defaults:\n"
            "  duration_minutes: 45\n"
            "calendar_file: calendar.json\n"
            "colleagues:\n"
            "  - name: max\n"
            "    email: max@example.com\n",
            encoding="utf-8"
        )

        config = AppConfig.load_from_yaml(path)

        assert config.defaults.duration_minutes == 45
        assert config.calendar_file == tmp_path / "calendar.json"
        assert config.colleagues[0].email == "max@example.com"

    def test_missing_file(self, tmp_path):
        """A missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_load_or_default(self, tmp_path):
        """A missing config file falls back to defaults."""
        assert AppConfig.load_or_default(tmp_path / "config.yaml") == AppConfig()

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML raises ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("defaults: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        """A list at the root is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- max\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    def test_duration_must_fit_into_a_day(self):
        """Negative or overlong default durations are rejected."""
        with pytest.raises(ValueError):
            AppConfig(defaults={"duration_minutes": -5})
        with pytest.raises(ValueError):
            AppConfig(defaults={"duration_minutes": 2000})

    def test_duplicate_colleagues_rejected(self):
        """Aliases and emails must be unique."""
        with pytest.raises(ValueError, match="Duplicate colleague name"):
            AppConfig(colleagues=[
                Colleague(name="max", email="a@example.com"),
                Colleague(name="MAX", email="b@example.com"),
            ])
        with pytest.raises(ValueError, match="Duplicate colleague email"):
            AppConfig(colleagues=[
                Colleague(name="max", email="a@example.com"),
                Colleague(name="anna", email="A@example.com"),
            ])


class TestParticipantResolution:
    """Tests for resolving aliases to attendee ids."""

    def test_alias_resolves_to_email(self):
        """Configured names map to lower-cased emails."""
        assert _config().resolve_participant("Max") == "max@example.com"

    def test_email_is_lower_cased(self):
        """Email addresses are normalised."""
        assert _config().resolve_participant("Lena@Example.com") == "lena@example.com"

    def test_unknown_identifier_is_kept(self):
        """Unknown names are used verbatim outside strict mode."""
        assert _config().resolve_participant(" Person A ") == "Person A"

    def test_unknown_identifier_in_strict_mode(self):
        """Strict mode rejects unknown names."""
        config = _config(strict_participants=True)

        with pytest.raises(ValueError, match="Unknown participant identifier"):
            config.resolve_participants(["max", "bob", "carl"])

    def test_resolve_participants_deduplicates(self):
        """The same person given twice appears once."""
        resolved = _config().resolve_participants(["max", "max@example.com", "anna"])

        assert resolved == ["max@example.com", "anna@example.com"]

    def test_resolve_no_participants(self):
        """No identifiers resolve to no attendees."""
        assert _config().resolve_participants([]) == []

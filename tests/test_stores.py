"""Tests for the installation and channel configuration stores."""

import pytest

from app.core.exceptions import PersistenceError
from app.models.channel_config import ChannelConfig
from app.models.slack_installation import SlackInstallation
from app.services.channel_config_service import ChannelConfigService
from app.services.installation_service import InstallationService
from tests.conftest import install_team, save_config


class TestInstallationStore:

    def test_reinstall_replaces_token_for_same_team(self, db_session):
        first = install_team(db_session, access_token="xoxb-old", team_name="Old Name")
        first_installed_at = first.installed_at

        install_team(db_session, access_token="xoxb-new", team_name="New Name")

        rows = db_session.query(SlackInstallation).filter(SlackInstallation.team_id == "T123").all()
        assert len(rows) == 1
        assert rows[0].access_token == "xoxb-new"
        assert rows[0].team_name == "New Name"
        assert rows[0].installed_at == first_installed_at

    def test_access_token_lookup(self, db_session):
        install_team(db_session, access_token="xoxb-abc")
        assert InstallationService.get_access_token(db_session, "T123") == "xoxb-abc"

    def test_access_token_for_unknown_team_is_none(self, db_session):
        assert InstallationService.get_access_token(db_session, "T-missing") is None

    def test_list_is_most_recent_first(self, db_session):
        install_team(db_session, team_id="T1")
        install_team(db_session, team_id="T2")
        install_team(db_session, team_id="T3")

        team_ids = [i.team_id for i in InstallationService.list_installations(db_session)]
        assert team_ids == ["T3", "T2", "T1"]


class TestChannelConfigStore:

    def test_missing_config_is_none(self, db_session):
        install_team(db_session)
        assert ChannelConfigService.get_channel_config(db_session, "T123", "C123") is None

    def test_default_config(self):
        config = ChannelConfigService.default_channel_config()
        assert config.translate_on_reaction is True
        assert config.translate_on_new_message is False
        assert config.translate_on_mention is False
        assert config.source_language == "auto"
        assert config.target_language == "en"

    def test_effective_config_falls_back_to_default_without_persisting(self, db_session):
        install_team(db_session)
        config = ChannelConfigService.get_effective_config(db_session, "T123", "C999")

        assert config.channel_id == "C999"
        assert config.channel_name is None
        assert config.translate_on_reaction is True
        assert config.created_at is None
        assert db_session.query(ChannelConfig).count() == 0

    def test_all_triggers_off_forces_reaction_on(self, db_session):
        install_team(db_session)
        config = save_config(
            db_session,
            translate_on_reaction=False,
            translate_on_new_message=False,
            translate_on_mention=False,
        )
        assert config.translate_on_reaction is True
        assert config.translate_on_new_message is False
        assert config.translate_on_mention is False

    def test_resave_updates_single_row(self, db_session):
        install_team(db_session)
        save_config(db_session, channel_name="general", translate_on_reaction=True)
        save_config(db_session, channel_name="renamed", translate_on_new_message=True)

        rows = db_session.query(ChannelConfig).all()
        assert len(rows) == 1
        assert rows[0].channel_name == "renamed"
        assert rows[0].translate_on_reaction is False
        assert rows[0].translate_on_new_message is True

    def test_config_requires_installation(self, db_session):
        with pytest.raises(PersistenceError):
            save_config(db_session, team_id="T-unknown", translate_on_reaction=True)

    def test_deleting_installation_cascades_to_configs(self, db_session):
        install_team(db_session)
        save_config(db_session, channel_id="C1", translate_on_reaction=True)
        save_config(db_session, channel_id="C2", translate_on_mention=True)

        db_session.query(SlackInstallation).filter(SlackInstallation.team_id == "T123").delete()
        db_session.commit()

        assert db_session.query(ChannelConfig).count() == 0

    def test_enabled_trigger_labels(self, db_session):
        install_team(db_session)
        config = save_config(db_session, translate_on_reaction=True, translate_on_mention=True)
        labels = ChannelConfigService.enabled_trigger_labels(config)
        assert labels == ["🌐 Translate on reaction", "🔔 Translate when mentioned"]

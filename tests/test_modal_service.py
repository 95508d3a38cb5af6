"""Tests for modal, confirmation and translation message builders."""

import json

import pytest

from app.core.exceptions import ValidationError
from app.schemas.slack import ModalContext, TriggerConfig
from app.services.channel_config_service import ChannelConfigService
from app.services.modal_service import (
    CONFIG_MODAL_CALLBACK_ID,
    build_config_modal,
    build_confirmation_message,
    build_translation_blocks,
    parse_selected_triggers,
)


def _checkboxes(view):
    block = next(b for b in view["blocks"] if b.get("block_id") == "translate_options_block")
    return block["accessory"]


def _state(*values):
    return {
        "values": {
            "translate_options_block": {
                "translate_options": {
                    "type": "checkboxes",
                    "selected_options": [{"value": v} for v in values],
                }
            }
        }
    }


class TestModalContext:

    def test_survives_private_metadata(self):
        context = ModalContext(team_id="T1", channel_id="C1", channel_name="general")
        restored = ModalContext.from_private_metadata(context.to_private_metadata())
        assert restored == context

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "not json",
        json.dumps({"team_id": "T1"}),
        json.dumps({"team_id": " ", "channel_id": "C1", "channel_name": "x"}),
        json.dumps(["T1", "C1", "general"]),
    ])
    def test_rejects_malformed_metadata(self, raw):
        with pytest.raises(ValidationError):
            ModalContext.from_private_metadata(raw)


class TestConfigModal:

    def test_default_config_prechecks_only_reaction(self):
        context = ModalContext(team_id="T1", channel_id="C1", channel_name="general")
        view = build_config_modal(context, ChannelConfigService.default_channel_config())

        assert view["callback_id"] == CONFIG_MODAL_CALLBACK_ID
        assert json.loads(view["private_metadata"]) == {
            "team_id": "T1", "channel_id": "C1", "channel_name": "general"
        }
        checkboxes = _checkboxes(view)
        assert [o["value"] for o in checkboxes["options"]] == [
            "translate_on_reaction", "translate_on_new_message", "translate_on_mention"
        ]
        assert [o["value"] for o in checkboxes["initial_options"]] == ["translate_on_reaction"]

    def test_initial_options_mirror_config(self):
        context = ModalContext(team_id="T1", channel_id="C1", channel_name="general")
        config = TriggerConfig(
            translate_on_reaction=False,
            translate_on_new_message=True,
            translate_on_mention=True,
        )
        checkboxes = _checkboxes(build_config_modal(context, config))
        assert [o["value"] for o in checkboxes["initial_options"]] == [
            "translate_on_new_message", "translate_on_mention"
        ]

    def test_no_initial_options_key_when_nothing_enabled(self):
        context = ModalContext(team_id="T1", channel_id="C1", channel_name="general")
        config = TriggerConfig(translate_on_reaction=False)
        assert "initial_options" not in _checkboxes(build_config_modal(context, config))


class TestParseSelectedTriggers:

    def test_selected_values_become_flags(self):
        assert parse_selected_triggers(_state("translate_on_mention")) == {
            "translate_on_reaction": False,
            "translate_on_new_message": False,
            "translate_on_mention": True,
        }

    def test_unknown_values_are_ignored(self):
        flags = parse_selected_triggers(_state("translate_on_everything"))
        assert not any(flags.values())

    def test_missing_state_means_nothing_selected(self):
        assert not any(parse_selected_triggers(None).values())
        assert not any(parse_selected_triggers({"values": {}}).values())


class TestMessages:

    def test_confirmation_lists_enabled_features(self):
        message = build_confirmation_message("general", ["🌐 Translate on reaction", "🔔 Translate when mentioned"])
        assert "#general" in message["text"]
        features = message["blocks"][1]["text"]["text"]
        assert "• 🌐 Translate on reaction\n• 🔔 Translate when mentioned" in features

    def test_confirmation_says_when_nothing_enabled(self):
        message = build_confirmation_message("general", [])
        assert "No translation features are enabled" in message["blocks"][1]["text"]["text"]

    def test_translation_blocks_carry_note(self):
        blocks = build_translation_blocks("hola", "Translated (auto → en)")
        assert blocks[0]["text"]["text"] == "🌐 hola"
        assert blocks[1]["elements"][0]["text"] == "_Translated (auto → en)_"

"""Tests for routing Slack events to translation."""

import pytest

from app.services.event_dispatcher import EventDispatcher
from app.services.translation_service import StubTranslator
from tests.conftest import install_team, save_config


class EchoTranslator:
    def translate(self, text, source_language, target_language):
        return text


class BrokenTranslator:
    def translate(self, text, source_language, target_language):
        raise TimeoutError("provider timed out")


@pytest.fixture
def dispatcher(database):
    return EventDispatcher(database=database, translator=StubTranslator())


@pytest.fixture
def installed(db_session):
    install_team(db_session, team_id="T123", access_token="xoxb-team")
    return db_session


def _message(text="xin chào", **extra):
    event = {"type": "message", "channel": "C123", "user": "U1", "text": text, "ts": "1700000000.000100"}
    event.update(extra)
    return event


def _reaction(reaction="globe_with_meridians"):
    return {
        "type": "reaction_added",
        "user": "U1",
        "reaction": reaction,
        "item": {"type": "message", "channel": "C123", "ts": "1700000000.000100"},
    }


def _mention(text):
    return {"type": "app_mention", "channel": "C123", "user": "U1", "text": text, "ts": "1700000000.000200"}


class TestMessageEvents:

    def test_no_saved_config_never_posts(self, dispatcher, installed, slack_api):
        dispatcher.dispatch("T123", _message())
        assert slack_api.calls == []

    def test_new_message_trigger_posts_translation(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_new_message=True)

        dispatcher.dispatch("T123", _message("xin chào"))

        posts = slack_api.calls_to("chat.postMessage")
        assert len(posts) == 1
        body = posts[0]["json"]
        assert body["channel"] == "C123"
        assert body["text"] == "🌐 [TRANSLATED auto → en] xin chào"
        assert "thread_ts" not in body
        assert body["blocks"][1]["elements"][0]["text"] == "_Auto-translated (auto → en)_"
        assert posts[0]["headers"]["Authorization"] == "Bearer xoxb-team"

    def test_trigger_disabled_does_not_post(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_reaction=True)
        dispatcher.dispatch("T123", _message())
        assert slack_api.calls == []

    @pytest.mark.parametrize("extra", [
        {"bot_id": "B999"},
        {"subtype": "bot_message"},
        {"subtype": "message_changed"},
        {"subtype": "message_deleted"},
    ])
    def test_bot_and_edit_messages_are_skipped(self, dispatcher, installed, slack_api, extra):
        save_config(installed, translate_on_new_message=True)
        dispatcher.dispatch("T123", _message(**extra))
        assert slack_api.calls == []

    def test_whitespace_message_is_skipped(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_new_message=True)
        dispatcher.dispatch("T123", _message("   "))
        assert slack_api.calls == []

    def test_same_language_pair_is_skipped(self, installed, database, slack_api):
        save_config(installed, translate_on_new_message=True, source_language="en", target_language="en")
        EventDispatcher(database, StubTranslator()).dispatch("T123", _message())
        assert slack_api.calls == []

    def test_unchanged_translation_is_not_posted(self, installed, database, slack_api):
        save_config(installed, translate_on_new_message=True)
        EventDispatcher(database, EchoTranslator()).dispatch("T123", _message())
        assert slack_api.calls == []

    def test_translator_failure_is_absorbed(self, installed, database, slack_api):
        save_config(installed, translate_on_new_message=True)
        EventDispatcher(database, BrokenTranslator()).dispatch("T123", _message())
        assert slack_api.calls == []


class TestReactionEvents:

    def test_other_emoji_never_translates(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_reaction=True)
        dispatcher.dispatch("T123", _reaction("thumbsup"))
        assert slack_api.calls == []

    def test_globe_reaction_replies_in_thread(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_reaction=True)
        slack_api.responses["conversations.history"] = {
            "ok": True,
            "messages": [{"text": "guten Tag", "ts": "1700000000.000100"}],
        }

        dispatcher.dispatch("T123", _reaction())

        history = slack_api.calls_to("conversations.history")
        assert history[0]["params"] == {
            "channel": "C123", "latest": "1700000000.000100", "limit": 1, "inclusive": "true"
        }
        posts = slack_api.calls_to("chat.postMessage")
        assert len(posts) == 1
        assert posts[0]["json"]["thread_ts"] == "1700000000.000100"
        assert posts[0]["json"]["text"] == "🌐 [TRANSLATED auto → en] guten Tag"
        assert posts[0]["json"]["blocks"][1]["elements"][0]["text"] == "_Translated (auto → en)_"

    def test_missing_message_posts_nothing(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_reaction=True)
        slack_api.responses["conversations.history"] = {"ok": True, "messages": []}

        dispatcher.dispatch("T123", _reaction())

        assert slack_api.calls_to("chat.postMessage") == []

    def test_no_saved_config_ignores_reaction(self, dispatcher, installed, slack_api):
        dispatcher.dispatch("T123", _reaction())
        assert slack_api.calls == []


class TestMentionEvents:

    def test_mention_only_text_posts_nothing(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_mention=True)
        dispatcher.dispatch("T123", _mention("<@U0BOT>   "))
        assert slack_api.calls == []

    def test_mention_translates_remaining_text(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_mention=True)

        dispatcher.dispatch("T123", _mention("<@U0BOT> hola amigos"))

        posts = slack_api.calls_to("chat.postMessage")
        assert len(posts) == 1
        assert posts[0]["json"]["text"] == "🌐 [TRANSLATED auto → en] hola amigos"
        assert "thread_ts" not in posts[0]["json"]

    def test_mention_trigger_disabled(self, dispatcher, installed, slack_api):
        save_config(installed, translate_on_new_message=True)
        dispatcher.dispatch("T123", _mention("<@U0BOT> hola"))
        assert slack_api.calls == []


class TestDispatch:

    def test_unknown_team_is_silent(self, dispatcher, database, slack_api):
        dispatcher.dispatch("T-unknown", _message())
        assert slack_api.calls == []

    def test_unhandled_event_type_is_ignored(self, dispatcher, installed, slack_api):
        dispatcher.dispatch("T123", {"type": "channel_created", "channel": {"id": "C9"}})
        assert slack_api.calls == []

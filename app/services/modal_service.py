# =============================================================================
# app/services/modal_service.py
# =============================================================================
from typing import Any, Dict, List
from app.schemas.slack import ModalContext

CONFIG_MODAL_CALLBACK_ID = "translate_config_modal"
TRIGGER_BLOCK_ID = "translate_options_block"
TRIGGER_ACTION_ID = "translate_options"

TRIGGER_OPTIONS = [
    ("translate_on_reaction", "Translate when reacted with 🌐"),
    ("translate_on_new_message", "Translate every new message"),
    ("translate_on_mention", "Translate when the app is mentioned"),
]

def _option(value: str, label: str) -> Dict[str, Any]:
    return {
        "text": {"type": "plain_text", "text": label},
        "value": value
    }

def build_config_modal(context: ModalContext, config) -> Dict[str, Any]:
    """
    Modal view for the /translate-config command

    The checkboxes start checked for every trigger ``config`` has enabled;
    ``context`` rides along in private_metadata for the submission.
    """
    options = [_option(value, label) for value, label in TRIGGER_OPTIONS]
    initial_options = [
        _option(value, label) for value, label in TRIGGER_OPTIONS
        if getattr(config, value, False)
    ]

    checkboxes = {
        "type": "checkboxes",
        "action_id": TRIGGER_ACTION_ID,
        "options": options
    }
    # Slack rejects an empty initial_options list
    if initial_options:
        checkboxes["initial_options"] = initial_options

    return {
        "type": "modal",
        "callback_id": CONFIG_MODAL_CALLBACK_ID,
        "title": {"type": "plain_text", "text": "Translation Config"},
        "submit": {"type": "plain_text", "text": "Save"},
        "close": {"type": "plain_text", "text": "Cancel"},
        "private_metadata": context.to_private_metadata(),
        "blocks": [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"Configure Translation for #{context.channel_name}"
                }
            },
            {"type": "divider"},
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "*Translation Triggers*\nSelect when to automatically translate messages:"
                }
            },
            {
                "type": "section",
                "block_id": TRIGGER_BLOCK_ID,
                "text": {"type": "mrkdwn", "text": "Choose translation options:"},
                "accessory": checkboxes
            }
        ]
    }

def parse_selected_triggers(view_state: Dict[str, Any]) -> Dict[str, bool]:
    """Map the submitted checkbox selection to trigger flags; anything unselected is False"""
    values = (view_state or {}).get("values") or {}
    block = values.get(TRIGGER_BLOCK_ID) or {}
    selected_options = (block.get(TRIGGER_ACTION_ID) or {}).get("selected_options") or []
    selected = {option.get("value") for option in selected_options}
    return {value: value in selected for value, _ in TRIGGER_OPTIONS}

def build_confirmation_message(channel_name: str, enabled_labels: List[str]) -> Dict[str, Any]:
    """Text and blocks announcing a channel's new translation settings"""
    if enabled_labels:
        features = "\n".join(f"• {label}" for label in enabled_labels)
    else:
        features = "❌ No translation features are enabled"

    return {
        "text": f"✅ Translation configuration updated for #{channel_name}",
        "blocks": [
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"✅ *Translation configuration updated for #{channel_name}*"
                }
            },
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*Enabled features:*\n{features}"
                }
            }
        ]
    }

def build_translation_blocks(translated_text: str, note: str) -> List[Dict[str, Any]]:
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"🌐 {translated_text}"}
        },
        {
            "type": "context",
            "elements": [{"type": "mrkdwn", "text": f"_{note}_"}]
        }
    ]

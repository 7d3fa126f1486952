from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import parse_qs

from dlgvn.scene.model import DialogueType

logger = logging.getLogger(__name__)


DEFAULT_SCRIPT: List[str] = [
    "Guys, guys, so um yesterday I learned that it is possible to like put a game in the Twitter player thing.",
    "And I got like this cool idea where you can like embed a dl-dialogue-generator canvas in there.",
    "Then I just did it... though it seems like it only works on desktop.",
    "Or if you are one of the weird people that browse Twitter on a browser instead of an app it works there as well.",
    "If you are on the app it should open like a little in app browser, so it's like not as cool I guess...",
    "Anyways, I don't really have a plan for this, was just like a cool idea I spent like an hour on.",
    "But who knows lol, Dragalia dialogue generator was also like a cool idea like an year ago.",
]

DEFAULTS: Dict[str, Any] = {
    "speaker": "Rita",
    "background": "images/bg.png",
    "portrait": "images/rt.png",
    "font": "en",
    "dialogue_type": "dialogue",
    "click_sound": "audio/sound/ui/touch.wav",
    "bgm": "audio/music/bgm_utopia.mp3",
}

# query parameter -> config key
PARAM_KEYS = {"name": "speaker", "bg": "background", "pt": "portrait"}


@dataclass
class SessionConfig:
    speaker: str = DEFAULTS["speaker"]
    background: str = DEFAULTS["background"]
    portrait: str = DEFAULTS["portrait"]
    script: List[str] = field(default_factory=lambda: list(DEFAULT_SCRIPT))
    font: str = DEFAULTS["font"]
    dialogue_type: DialogueType = DialogueType.DIALOGUE
    click_sound: Optional[str] = DEFAULTS["click_sound"]
    bgm: Optional[str] = DEFAULTS["bgm"]


def parse_script_param(raw: Optional[str]) -> List[str]:
    """Decode a JSON array of dialogue lines.

    Anything other than a non-empty list of strings falls back to the
    built-in script.
    """
    if raw is None:
        return list(DEFAULT_SCRIPT)
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Script parameter is not valid JSON, using default script: {e}")
        return list(DEFAULT_SCRIPT)
    if not _is_script(parsed):
        logger.warning("Script parameter is not a non-empty array of strings, using default script")
        return list(DEFAULT_SCRIPT)
    return list(parsed)


def _is_script(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(s, str) for s in value)


def _parse_dialogue_type(value: Any) -> DialogueType:
    try:
        return DialogueType(str(value).lower())
    except ValueError:
        logger.warning(f"Unknown dialogue type {value!r}, using dialogue")
        return DialogueType.DIALOGUE


def parse_query(query: str) -> Dict[str, str]:
    """Parse ``name=..&bg=..&pt=..&dia=..`` into a flat dict (first value wins)."""
    q = query[1:] if query.startswith("?") else query
    return {k: v[0] for k, v in parse_qs(q, keep_blank_values=True).items() if v}


def load_config(path: Optional[Path] = None) -> dict:
    """Read a JSON config file and shallow-merge it over DEFAULTS.

    Unknown keys are dropped; an unreadable file yields the defaults.
    """
    out = dict(DEFAULTS)
    out["script"] = None
    if path is None:
        return out
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read config {path}: {e}")
        return out
    if not isinstance(data, dict):
        logger.warning(f"Config {path} is not an object, ignoring it")
        return out
    for key in list(DEFAULTS) + ["script"]:
        if key in data:
            out[key] = data[key]
    return out


def build_config(path: Optional[Path] = None, params: Optional[Mapping[str, Optional[str]]] = None) -> SessionConfig:
    """Defaults, then the config file, then query-style parameters."""
    merged = load_config(path)
    script = merged.pop("script")
    if script is not None and not _is_script(script):
        logger.warning("Config script is not a non-empty array of strings, using default script")
        script = None

    params = params or {}
    for param, key in PARAM_KEYS.items():
        value = params.get(param)
        if value is not None:
            merged[key] = value
    if params.get("dia") is not None:
        script = parse_script_param(params.get("dia"))

    return SessionConfig(
        speaker=str(merged["speaker"]),
        background=str(merged["background"]),
        portrait=str(merged["portrait"]),
        script=list(script) if script else list(DEFAULT_SCRIPT),
        font=str(merged["font"]),
        dialogue_type=_parse_dialogue_type(merged["dialogue_type"]),
        click_sound=merged["click_sound"] or None,
        bgm=merged["bgm"] or None,
    )

from __future__ import annotations

from dlgvn.engine.event_bus import EventBus, SETTINGS_CHANGED
from dlgvn.engine.settings_store import SettingsStore
from dlgvn.scene.model import DialogueType, Emotion, Settings, merge_settings


def test_initial_settings():
    s = SettingsStore().current
    assert s.speaker == ""
    assert s.dialogue_text == "Click / Tap to start"
    assert s.dialogue_type is DialogueType.DIALOGUE
    assert s.font == "en"
    assert s.emotion is Emotion.NONE
    assert s.emotion_is_left is True


def test_update_preserves_missing_fields():
    store = SettingsStore(Settings(font="ja", emotion=Emotion.IDEA))
    store.update({"speaker": "Rita", "dialogue_text": "H"})
    s = store.current
    assert (s.speaker, s.dialogue_text) == ("Rita", "H")
    assert s.font == "ja"
    assert s.emotion is Emotion.IDEA


def test_update_replaces_record():
    store = SettingsStore()
    before = store.current
    store.update({"emotion_offset_x": 12})
    assert store.current is not before
    assert before.emotion_offset_x == 0
    assert store.current.emotion_offset_x == 12


def test_merge_with_empty_patch_is_equal():
    s = Settings(speaker="Rita", emotion_is_left=False)
    assert merge_settings(s, {}) == s


def test_update_emits_event():
    bus = EventBus()
    seen = []
    bus.subscribe(SETTINGS_CHANGED, lambda data: seen.append(data["settings"].dialogue_text))
    store = SettingsStore(events=bus)
    store.update({"dialogue_text": "a"})
    store.update({"speaker": "b"})
    assert seen == ["a", "a"]

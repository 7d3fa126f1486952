from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypedDict


class DialogueType(Enum):
    """Box chrome variant."""
    DIALOGUE = "dialogue"
    NARRATION = "narration"
    BOOK = "book"


class Emotion(Enum):
    """Overlay icon shown next to the portrait."""
    NONE = "none"
    SURPRISE = "surprise"
    QUESTION = "question"
    ANGER = "anger"
    SWEAT = "sweat"
    IDEA = "idea"
    MUSIC = "music"
    HEART = "heart"


@dataclass
class Layer:
    id: int
    name: str
    image_ref: str
    offset_x: float = 0
    offset_y: float = 0
    rotation: float = 0
    scale: float = 1
    opacity: float = 1
    flip_x: bool = False
    filter: str = ""


class LayerPatch(TypedDict, total=False):
    name: str
    image_ref: str
    offset_x: float
    offset_y: float
    rotation: float
    scale: float
    opacity: float
    flip_x: bool
    filter: str


@dataclass
class Settings:
    speaker: str = ""
    dialogue_text: str = "Click / Tap to start"
    dialogue_type: DialogueType = DialogueType.DIALOGUE
    font: str = "en"
    emotion: Emotion = Emotion.NONE
    emotion_is_left: bool = True
    emotion_offset_x: float = 0
    emotion_offset_y: float = 0


class SettingsPatch(TypedDict, total=False):
    speaker: str
    dialogue_text: str
    dialogue_type: DialogueType
    font: str
    emotion: Emotion
    emotion_is_left: bool
    emotion_offset_x: float
    emotion_offset_y: float


def merge_layer(layer: Layer, patch: LayerPatch) -> Layer:
    """Return a new Layer with ``patch`` fields laid over ``layer``.

    The id is never taken from a patch; a layer keeps its identity for life.
    """
    return Layer(
        id=layer.id,
        name=patch.get("name", layer.name),
        image_ref=patch.get("image_ref", layer.image_ref),
        offset_x=patch.get("offset_x", layer.offset_x),
        offset_y=patch.get("offset_y", layer.offset_y),
        rotation=patch.get("rotation", layer.rotation),
        scale=patch.get("scale", layer.scale),
        opacity=patch.get("opacity", layer.opacity),
        flip_x=patch.get("flip_x", layer.flip_x),
        filter=patch.get("filter", layer.filter),
    )


def merge_settings(settings: Settings, patch: SettingsPatch) -> Settings:
    return Settings(
        speaker=patch.get("speaker", settings.speaker),
        dialogue_text=patch.get("dialogue_text", settings.dialogue_text),
        dialogue_type=patch.get("dialogue_type", settings.dialogue_type),
        font=patch.get("font", settings.font),
        emotion=patch.get("emotion", settings.emotion),
        emotion_is_left=patch.get("emotion_is_left", settings.emotion_is_left),
        emotion_offset_x=patch.get("emotion_offset_x", settings.emotion_offset_x),
        emotion_offset_y=patch.get("emotion_offset_y", settings.emotion_offset_y),
    )

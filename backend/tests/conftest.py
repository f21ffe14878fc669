"""
Shared fixtures for the storygen test suite.

The story responder answers every structured request from the response
schema it carries, so full pipeline runs need no network access.
"""

from typing import Any, Dict, List

import pytest

from storygen.models.story import GenerationSettings, ModelConstraints
from storygen.services.llm import FixtureGenerationClient, GenerationRequest, clear_client_cache
from storygen.services.pipeline.allocation import allocate_durations
from storygen.services.pipeline.prompts.schemas import (
    ENHANCE_SCHEMA_NAME,
    SCENES_SCHEMA_NAME,
    SCRIPT_SCHEMA_NAME,
)

SCRIPT_SENTENCE = "Every morning millions of people reach for a warm cup of coffee."


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Never talk to a real provider from tests"""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("LLM_PROVIDER", "ollama")
    clear_client_cache()
    yield
    clear_client_cache()


def make_script(word_count: int = 75) -> str:
    words = (SCRIPT_SENTENCE + " ") * (word_count // len(SCRIPT_SENTENCE.split()) + 1)
    return " ".join(words.split()[:word_count]) + "."


def _scenes_payload(request: GenerationRequest) -> Dict[str, Any]:
    schema = request.response_format.schema["properties"]
    count = schema["totalScenes"]["const"]
    total = schema["totalDuration"]["const"]
    item = schema["scenes"]["items"]["properties"]

    duration_schema = item["duration"]
    if "enum" in duration_schema:
        vocabulary = ModelConstraints(id="t", label="t", supported_durations=tuple(duration_schema["enum"]))
        durations = allocate_durations(total, count, constraints=vocabulary)
    else:
        base, extra = divmod(total, count)
        durations = [base + 1] * extra + [base] * (count - extra)

    silent = "const" in item["soundDescription"]
    ambient = "const" in item["narration"]

    return {
        "scenes": [
            {
                "sceneNumber": number,
                "duration": duration,
                "description": f"Close-up of a steaming coffee cup, shot {number}",
                "soundDescription": "" if silent else "soft pour, gentle clink",
                "narration": "" if ambient else f"Line {number} of the story.",
            }
            for number, duration in enumerate(durations, start=1)
        ],
        "totalScenes": count,
        "totalDuration": total,
    }


def _enhance_payload(request: GenerationRequest) -> Dict[str, Any]:
    item = request.response_format.schema["properties"]["scenes"]["items"]["properties"]
    entries: List[Dict[str, Any]] = []
    for number in item["sceneNumber"]["enum"]:
        entry: Dict[str, Any] = {
            "sceneNumber": number,
            "imagePrompt": (
                f"Photorealistic close-up of a ceramic coffee cup on a wooden table, "
                f"morning light, scene {number}"
            ),
            "transitionToNext": "fade",
        }
        if "voiceText" in item:
            entry["voiceText"] = f"Polished line {number}."
            entry["voiceMood"] = "curious"
        if "videoPrompt" in item:
            entry["videoPrompt"] = "Slow push-in while steam curls upward"
        if "animationName" in item:
            entry["animationName"] = "zoom-in"
            entry["effectName"] = "warm"
        entries.append(entry)
    return {"scenes": entries}


def story_responder(request: GenerationRequest) -> Dict[str, Any]:
    """Valid response for any stage request, derived from its schema"""
    name = request.response_format.name
    if name == SCRIPT_SCHEMA_NAME:
        return {"title": "The Coffee Secret", "script": make_script()}
    if name == SCENES_SCHEMA_NAME:
        return _scenes_payload(request)
    if name == ENHANCE_SCHEMA_NAME:
        return _enhance_payload(request)
    raise AssertionError(f"Unexpected schema: {name}")


@pytest.fixture
def responder():
    return story_responder


@pytest.fixture
def story_client():
    return FixtureGenerationClient(default=story_responder)


@pytest.fixture
def script_text():
    return make_script


@pytest.fixture
def narrated_settings():
    return GenerationSettings.create(
        template="problem-solution",
        topic="Why coffee wakes you up",
        duration=30,
    )


@pytest.fixture
def veo_settings():
    return GenerationSettings.create(
        template="problem-solution",
        topic="Why coffee wakes you up",
        duration=40,
        media_type="animated",
        video_model="veo-3.0",
    )


@pytest.fixture
def ambient_settings():
    return GenerationSettings.create(
        template="auto-asmr",
        topic="Rain on a cabin window",
        duration=15,
    )

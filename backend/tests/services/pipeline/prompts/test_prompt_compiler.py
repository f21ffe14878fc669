"""
Tests for storygen.services.pipeline.prompts

The compiler is pure: equal inputs give byte-identical prompts, and the
numbers in prompt text always match the response schema.
"""

import pytest

from storygen.models.story import GenerationSettings, Scene
from storygen.services.catalog import require_template
from storygen.services.pipeline.allocation import optimal_scene_count, plan_durations
from storygen.services.pipeline.prompts import (
    ANIMATION_NAMES,
    ENHANCEMENT_MODE_IMAGE_TO_VIDEO,
    ENHANCEMENT_MODE_TRANSITION,
    PromptStage,
    build_prompt,
    compute_constraints,
)


def constraints_for(settings, **kwargs):
    template = require_template(settings.template)
    count = optimal_scene_count(
        settings.duration,
        constraints=settings.model_constraints,
        template=template,
        pacing=settings.pacing,
    )
    plan = plan_durations(settings.duration, count, settings.model_constraints, template)
    return compute_constraints(settings, template, plan, **kwargs)


def sample_scenes(count, duration=6):
    return [
        Scene(
            scene_number=n,
            duration=duration,
            description=f"Scene {n} visual",
            sound_description="soft hum",
            narration=f"Narration {n}",
        )
        for n in range(1, count + 1)
    ]


class TestComputeConstraints:
    """Test suite for compute_constraints"""

    def test_word_targets_follow_reading_speed(self, narrated_settings):
        constraints = constraints_for(narrated_settings)

        assert constraints.scene_count == 5
        assert constraints.durations == (6, 6, 6, 6, 6)
        assert constraints.total_word_target == 75
        assert constraints.scene_word_targets == (15, 15, 15, 15, 15)
        assert constraints.script_word_min < 75 < constraints.script_word_max

    def test_arabic_reads_slower(self):
        settings = GenerationSettings.create(
            template="problem-solution", topic="x", duration=30, language="Arabic"
        )

        constraints = constraints_for(settings)

        assert constraints.language_name == "Arabic"
        assert constraints.total_word_target == 60

    def test_ambient_has_no_words(self, ambient_settings):
        constraints = constraints_for(ambient_settings)

        assert constraints.is_ambient
        assert constraints.total_word_target == 0
        assert not constraints.has_voiceover
        assert constraints.enhancement_mode == ENHANCEMENT_MODE_IMAGE_TO_VIDEO

    def test_static_media_uses_transitions(self, narrated_settings):
        assert constraints_for(narrated_settings).enhancement_mode == ENHANCEMENT_MODE_TRANSITION

    def test_allowed_duration(self, veo_settings, narrated_settings):
        constrained = constraints_for(veo_settings)
        assert constrained.allowed_duration(6)
        assert not constrained.allowed_duration(5)

        ranged = constraints_for(narrated_settings)
        assert ranged.allowed_duration(3)
        assert not ranged.allowed_duration(16)


class TestBuildPrompt:
    """Test suite for build_prompt"""

    @pytest.mark.parametrize("stage", list(PromptStage))
    def test_deterministic(self, stage, narrated_settings):
        kwargs = {"script": "A script.", "title": "T"}
        if stage == PromptStage.ENHANCE:
            kwargs["scenes"] = sample_scenes(5)

        first = build_prompt(stage, narrated_settings, constraints_for(narrated_settings, **kwargs))
        second = build_prompt(stage, narrated_settings, constraints_for(narrated_settings, **kwargs))

        assert first == second
        assert first.schema_json() == second.schema_json()

    def test_unknown_stage(self, narrated_settings):
        with pytest.raises(ValueError):
            build_prompt("render", narrated_settings, constraints_for(narrated_settings))

    def test_enhance_needs_scenes(self, narrated_settings):
        with pytest.raises(ValueError):
            build_prompt(PromptStage.ENHANCE, narrated_settings, constraints_for(narrated_settings))

    def test_to_messages(self, narrated_settings):
        bundle = build_prompt(PromptStage.SCRIPT, narrated_settings, constraints_for(narrated_settings))

        messages = bundle.to_messages()

        assert [m["role"] for m in messages] == ["system", "user"]
        assert "Why coffee wakes you up" in messages[1]["content"]


class TestScriptPrompt:

    def test_mentions_word_range_and_stages(self, narrated_settings):
        constraints = constraints_for(narrated_settings)

        bundle = build_prompt(PromptStage.SCRIPT, narrated_settings, constraints)

        assert "Target: 75 words" in bundle.system_prompt
        assert f"{constraints.script_word_min}-{constraints.script_word_max} words" in bundle.system_prompt
        assert "1. Hook" in bundle.system_prompt
        assert "in English" in bundle.system_prompt

    def test_language_in_prompt(self):
        settings = GenerationSettings.create(template="tease-reveal", topic="x", duration=30, language="fr")

        bundle = build_prompt(PromptStage.SCRIPT, settings, constraints_for(settings))

        assert "in French" in bundle.system_prompt

    def test_ambient_concept_is_english_without_narration(self, ambient_settings):
        bundle = build_prompt(PromptStage.SCRIPT, ambient_settings, constraints_for(ambient_settings))

        assert "no narration" in bundle.system_prompt
        assert "always in English" in bundle.system_prompt

    def test_schema_requires_title_and_script(self, narrated_settings):
        schema = build_prompt(PromptStage.SCRIPT, narrated_settings, constraints_for(narrated_settings)).response_schema

        assert schema["required"] == ["title", "script"]
        assert schema["additionalProperties"] is False


class TestScenesPrompt:
    """Scene prompt text and schema are compiled from the same constraints"""

    def test_constrained_schema(self, veo_settings):
        constraints = constraints_for(veo_settings, script="S")

        bundle = build_prompt(PromptStage.SCENES, veo_settings, constraints)
        schema = bundle.response_schema
        scene = schema["properties"]["scenes"]["items"]["properties"]

        assert schema["properties"]["scenes"]["minItems"] == 5
        assert schema["properties"]["scenes"]["maxItems"] == 5
        assert schema["properties"]["totalScenes"]["const"] == 5
        assert schema["properties"]["totalDuration"]["const"] == 40
        assert scene["duration"]["enum"] == [4, 6, 8]
        assert scene["soundDescription"]["const"] == ""
        assert "MUST be one of: 4, 6, 8 seconds" in bundle.system_prompt
        assert "EXACTLY 5 scenes" in bundle.system_prompt
        assert 'MUST be an empty string "" for every scene' in bundle.system_prompt

    def test_unconstrained_schema(self, narrated_settings):
        bundle = build_prompt(PromptStage.SCENES, narrated_settings, constraints_for(narrated_settings))
        scene = bundle.response_schema["properties"]["scenes"]["items"]["properties"]

        assert scene["duration"]["minimum"] == 3
        assert scene["duration"]["maximum"] == 15
        assert scene["soundDescription"]["minLength"] == 1
        assert scene["narration"]["minLength"] == 1
        assert "between 3 and 15 whole seconds" in bundle.system_prompt
        assert "Scene 1: 6s -> about 15 words" in bundle.system_prompt

    def test_ambient_narration_pinned_empty(self, ambient_settings):
        bundle = build_prompt(PromptStage.SCENES, ambient_settings, constraints_for(ambient_settings))
        scene = bundle.response_schema["properties"]["scenes"]["items"]["properties"]

        assert scene["narration"]["const"] == ""
        assert "INDEPENDENT" in bundle.system_prompt

    def test_descriptions_always_english(self):
        settings = GenerationSettings.create(template="myth-busting", topic="x", duration=30, language="es")

        bundle = build_prompt(PromptStage.SCENES, settings, constraints_for(settings))

        assert '"description" is ALWAYS written in English' in bundle.system_prompt
        assert "Narration is in Spanish" in bundle.system_prompt


class TestEnhancePrompt:

    def test_static_schema(self, narrated_settings):
        constraints = constraints_for(narrated_settings, scenes=sample_scenes(5))

        bundle = build_prompt(PromptStage.ENHANCE, narrated_settings, constraints)
        item = bundle.response_schema["properties"]["scenes"]["items"]["properties"]

        assert item["sceneNumber"]["enum"] == [1, 2, 3, 4, 5]
        assert item["animationName"]["enum"] == list(ANIMATION_NAMES)
        assert "voiceText" in item
        assert "videoPrompt" not in item
        assert "Scene 3 (6s)" in bundle.user_prompt
        assert "Scene 5 is the last scene" in bundle.system_prompt

    def test_image_to_video_schema(self, veo_settings):
        constraints = constraints_for(veo_settings, scenes=sample_scenes(2, duration=8))

        item = build_prompt(PromptStage.ENHANCE, veo_settings, constraints).response_schema[
            "properties"]["scenes"]["items"]["properties"]

        assert "videoPrompt" in item
        assert "animationName" not in item

    def test_ambient_has_no_voice_fields(self, ambient_settings):
        constraints = constraints_for(ambient_settings, scenes=sample_scenes(2))

        item = build_prompt(PromptStage.ENHANCE, ambient_settings, constraints).response_schema[
            "properties"]["scenes"]["items"]["properties"]

        assert "voiceText" not in item
        assert "voiceMood" not in item

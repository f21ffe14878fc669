"""
Tests for storygen.services.pipeline.orchestrator

End-to-end pipeline runs against the fixture client.
"""

import asyncio
import logging

import pytest

from storygen.core.exceptions import GenerationCallError, InvalidSettingsError
from storygen.models.story import GenerationSettings
from storygen.services.llm import FixtureGenerationClient
from storygen.services.pipeline import StoryPipeline
from storygen.services.pipeline.voice import VoiceSynthesizer


class RecordingVoice(VoiceSynthesizer):
    def __init__(self, fail=False):
        self.calls = 0
        self.fail = fail

    async def synthesize(self, scenes, settings):
        self.calls += 1
        if self.fail:
            raise RuntimeError("voice service down")
        return list(scenes)


class TestSuccessfulRuns:
    """Full runs for each content family"""

    @pytest.mark.asyncio
    async def test_narrated_story(self, narrated_settings, story_client):
        result = await StoryPipeline(story_client).generate_story(narrated_settings, story_id="story-1")

        assert result.success
        assert result.story_id == "story-1"
        assert result.failed_stage is None
        story = result.story
        assert story.title == "The Coffee Secret"
        assert story.duration == 30
        assert [s.duration for s in story.scenes] == [6, 6, 6, 6, 6]
        assert all(s.narration for s in story.scenes)
        assert all(s.voice_text for s in story.scenes)
        assert story.scenes[-1].transition_to_next == "none"
        assert story_client.call_count == 3

    @pytest.mark.asyncio
    async def test_constrained_model_with_audio(self, veo_settings, story_client):
        result = await StoryPipeline(story_client).generate_story(veo_settings)

        assert result.success
        durations = [s.duration for s in result.story.scenes]
        assert set(durations) <= {4, 6, 8}
        assert sum(durations) == 40
        assert all(s.sound_description == "" for s in result.story.scenes)
        assert all(s.video_prompt for s in result.story.scenes)

    @pytest.mark.asyncio
    async def test_ambient_story_has_no_narration(self, ambient_settings, story_client):
        voice = RecordingVoice()

        result = await StoryPipeline(story_client, voice=voice).generate_story(ambient_settings)

        assert result.success
        assert result.story.duration == 15
        assert all(s.narration == "" for s in result.story.scenes)
        assert all(s.voice_text is None for s in result.story.scenes)
        assert voice.calls == 0

    @pytest.mark.asyncio
    async def test_allocation_drift_is_a_warning(self, story_client):
        settings = GenerationSettings.create(
            template="problem-solution", topic="x", duration=41, video_model="veo-3.0"
        )

        result = await StoryPipeline(story_client).generate_story(settings)

        assert result.success
        assert result.story.duration == 40
        assert any("41s" in warning for warning in result.warnings)

    @pytest.mark.asyncio
    async def test_scene_count_adjusted_to_hit_duration(self, story_client):
        settings = GenerationSettings.create(
            template="problem-solution", topic="x", duration=28, video_model="hailuo-2.3"
        )

        result = await StoryPipeline(story_client).generate_story(settings)

        assert result.success
        assert result.story.duration == 28
        assert sorted(s.duration for s in result.story.scenes) == [6, 6, 6, 10]
        assert not any("allocated" in warning for warning in result.warnings)

    @pytest.mark.asyncio
    async def test_large_story_enhanced_in_batches(self, story_client):
        settings = GenerationSettings.create(
            template="problem-solution", topic="x", duration=120, pacing="fast"
        )

        result = await StoryPipeline(story_client, batch_size=4).generate_story(settings)

        assert result.success
        scene_count = len(result.story.scenes)
        batches = -(-scene_count // 4)
        assert story_client.call_count == 2 + batches

    @pytest.mark.asyncio
    async def test_voice_stage_skipped_without_voiceover(self, story_client):
        settings = GenerationSettings.create(
            template="tease-reveal", topic="x", duration=30, has_voiceover=False
        )
        voice = RecordingVoice()

        result = await StoryPipeline(story_client, voice=voice).generate_story(settings)

        assert result.success
        assert voice.calls == 0

    def test_stages_for(self, narrated_settings, ambient_settings):
        assert [s.value for s in StoryPipeline.stages_for(narrated_settings)] == [
            "SCRIPT", "SCENES", "ENHANCE", "VOICE"
        ]
        assert [s.value for s in StoryPipeline.stages_for(ambient_settings)] == [
            "SCRIPT", "SCENES", "ENHANCE"
        ]


class TestFailures:
    """Failures become results naming the stage; generate_story never raises"""

    def test_unknown_template_rejected_before_any_call(self):
        with pytest.raises(InvalidSettingsError):
            GenerationSettings.create(template="unknown-id", topic="x", duration=30)

    @pytest.mark.asyncio
    async def test_unknown_template_in_raw_settings(self, story_client):
        settings = GenerationSettings(template="unknown-id", topic="x", duration=30)

        result = await StoryPipeline(story_client).generate_story(settings)

        assert not result.success
        assert result.failed_stage == "SCRIPT"
        assert story_client.call_count == 0

    @pytest.mark.asyncio
    async def test_scene_total_mismatch_fails_scenes_stage(self, narrated_settings, responder):
        def wrong_total(request):
            data = responder(request)
            data["totalDuration"] += 1
            return data

        client = FixtureGenerationClient([responder, wrong_total])

        result = await StoryPipeline(client).generate_story(narrated_settings)

        assert not result.success
        assert result.story is None
        assert result.failed_stage == "SCENES"
        assert "SCENES" in result.error
        assert "totalDuration" in result.error

    @pytest.mark.asyncio
    async def test_sentence_in_sound_field_fails_scenes_stage(self, narrated_settings, responder):
        def narrated_sound(request):
            data = responder(request)
            for scene in data["scenes"]:
                scene["soundDescription"] = "The rain is falling gently on the old roof."
            return data

        client = FixtureGenerationClient([responder, narrated_sound])

        result = await StoryPipeline(client).generate_story(narrated_settings)

        assert not result.success
        assert result.failed_stage == "SCENES"
        assert "soundDescription" in result.error

    @pytest.mark.asyncio
    async def test_empty_script_short_circuits(self, narrated_settings, responder):
        client = FixtureGenerationClient([{"title": "T", "script": ""}], default=responder)

        result = await StoryPipeline(client).generate_story(narrated_settings)

        assert not result.success
        assert result.failed_stage == "SCRIPT"
        assert client.call_count == 1

    @pytest.mark.asyncio
    async def test_client_always_failing(self, narrated_settings):
        client = FixtureGenerationClient(default=GenerationCallError("provider unreachable"))

        result = await StoryPipeline(client).generate_story(narrated_settings)

        assert not result.success
        assert result.failed_stage == "SCRIPT"
        assert "provider unreachable" in result.error

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self, narrated_settings, responder):
        client = FixtureGenerationClient([responder, responder, RuntimeError("bug")])

        result = await StoryPipeline(client).generate_story(narrated_settings)

        assert not result.success
        assert result.failed_stage == "ENHANCE"

    @pytest.mark.asyncio
    async def test_voice_failure(self, narrated_settings, story_client):
        result = await StoryPipeline(story_client, voice=RecordingVoice(fail=True)).generate_story(
            narrated_settings
        )

        assert not result.success
        assert result.failed_stage == "VOICE"
        assert "voice service down" in result.error


class TestCancellation:

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, narrated_settings, story_client):
        cancel = asyncio.Event()
        cancel.set()

        result = await StoryPipeline(story_client).generate_story(narrated_settings, cancel_event=cancel)

        assert not result.success
        assert result.failed_stage == "SCRIPT"
        assert result.error.startswith("Cancelled before stage SCRIPT")
        assert story_client.call_count == 0

    @pytest.mark.asyncio
    async def test_cancelled_between_stages(self, narrated_settings, story_client):
        cancel = asyncio.Event()

        def cancel_during_scenes(progress):
            if progress.stage == "SCENES":
                cancel.set()

        result = await StoryPipeline(story_client).generate_story(
            narrated_settings, cancel_event=cancel, on_progress=cancel_during_scenes
        )

        assert not result.success
        assert result.failed_stage == "ENHANCE"
        assert story_client.call_count == 2


class TestProgressAndEvents:

    @pytest.mark.asyncio
    async def test_progress_reported_per_stage(self, narrated_settings, story_client):
        updates = []

        async def on_progress(progress):
            updates.append(progress)

        await StoryPipeline(story_client).generate_story(narrated_settings, on_progress=on_progress)

        assert [u.stage for u in updates] == ["SCRIPT", "SCENES", "ENHANCE", "VOICE", "DONE"]
        assert [u.step for u in updates] == [0, 1, 2, 3, 4]
        assert updates[-1].progress == 100.0
        assert updates[0].to_dict()["totalSteps"] == 4

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_fail_story(self, narrated_settings, story_client):
        def broken(progress):
            raise ValueError("ui went away")

        result = await StoryPipeline(story_client).generate_story(narrated_settings, on_progress=broken)

        assert result.success

    @pytest.mark.asyncio
    async def test_stage_events_logged(self, narrated_settings, responder, caplog):
        caplog.set_level(logging.INFO, logger="storygen")
        client = FixtureGenerationClient([responder, GenerationCallError("down")])

        result = await StoryPipeline(client).generate_story(narrated_settings, story_id="story-7")

        events = [
            (record.event, record.stage)
            for record in caplog.records
            if getattr(record, "event", None) in ("stage_started", "stage_completed", "stage_failed")
        ]
        assert events == [
            ("stage_started", "SCRIPT"),
            ("stage_completed", "SCRIPT"),
            ("stage_started", "SCENES"),
            ("stage_failed", "SCENES"),
        ]
        failed = [r for r in caplog.records if getattr(r, "event", None) == "stage_failed"][0]
        assert failed.story_id == "story-7"
        assert failed.duration_seconds >= 0
        assert result.failed_stage == "SCENES"

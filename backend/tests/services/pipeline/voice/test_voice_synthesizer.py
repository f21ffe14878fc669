"""
Tests for storygen.services.pipeline.voice
"""

import pytest

from storygen.models.story import Scene
from storygen.services.pipeline.voice import PassThroughVoiceSynthesizer


class TestPassThroughVoiceSynthesizer:

    @pytest.mark.asyncio
    async def test_fills_voice_fields_without_mutating_input(self, narrated_settings):
        scenes = [
            Scene(scene_number=1, duration=6, description="A", narration="First line"),
            Scene(scene_number=2, duration=6, description="B", narration="Second line",
                  voice_text="Polished", voice_mood="excited"),
        ]

        voiced = await PassThroughVoiceSynthesizer().synthesize(scenes, narrated_settings)

        assert voiced[0].voice_text == "First line"
        assert voiced[0].voice_mood == "neutral"
        assert voiced[1].voice_text == "Polished"
        assert voiced[1].voice_mood == "excited"
        assert scenes[0].voice_text is None

"""
Voice Stage

Speech synthesis is an external call. The pipeline only needs a port that
takes enhanced scenes and returns them with voice fields settled; the
pass-through implementation keeps the text for a downstream renderer.
"""

import copy
from abc import ABC, abstractmethod
from typing import List, Sequence

from storygen.core import get_logger
from storygen.models.story import GenerationSettings, Scene
from storygen.services.pipeline.enhancement import DEFAULT_VOICE_MOOD

logger = get_logger(__name__, component="voice")


class VoiceSynthesizer(ABC):
    """Port for the optional voice stage"""

    @abstractmethod
    async def synthesize(self, scenes: Sequence[Scene], settings: GenerationSettings) -> List[Scene]:
        """Return scenes with voice fields settled; inputs are not modified"""
        pass


class PassThroughVoiceSynthesizer(VoiceSynthesizer):
    """Performs no synthesis; guarantees every scene carries voice text and mood"""

    async def synthesize(self, scenes: Sequence[Scene], settings: GenerationSettings) -> List[Scene]:
        voiced = [copy.deepcopy(scene) for scene in scenes]
        for scene in voiced:
            scene.enrich({"voiceText": scene.narration, "voiceMood": DEFAULT_VOICE_MOOD})

        logger.info(
            "Voice stage passed through",
            extra={
                "scene_count": len(voiced),
                "voice_volume": settings.voice_volume,
                "language": settings.language,
            },
        )
        return voiced

"""
Story Pipeline

Stage packages:
    allocation/   - scene counts and per-scene durations
    prompts/      - prompt and schema compilation
    script/       - script writing (strategy per template)
    scenes/       - scene breakdown and validation
    enhancement/  - storyboard enrichment in batches
    voice/        - optional voice stage

Usage:
    from storygen.services.pipeline import StoryPipeline

    result = await StoryPipeline(client).generate_story(settings)
"""

from .orchestrator import StoryPipeline, StageProgress, ProgressCallback

__all__ = [
    "StoryPipeline",
    "StageProgress",
    "ProgressCallback",
]

"""
Story Pipeline Orchestrator

Runs one story through SCRIPT -> SCENES -> ENHANCE -> VOICE (optional) -> DONE.
Stages run sequentially; the only suspension points are generation client
calls. Any failure becomes a failed StoryGenerationResult naming the stage:
generate_story() never raises.

Every stage emits structured events (stage_started, stage_completed,
stage_failed) carrying story_id, stage and duration_seconds.
"""

import asyncio
import inspect
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Union

from storygen.core import get_logger
from storygen.core.exceptions import PipelineCancelledError, PipelineStageError
from storygen.core.logging import story_id_var
from storygen.models.status import StoryStage
from storygen.models.story import (
    GenerationSettings,
    Scene,
    Story,
    StoryGenerationResult,
    Template,
)
from storygen.services.catalog import get_template, require_template
from storygen.services.llm import GenerationClient
from storygen.services.pipeline.allocation import (
    DurationPlan,
    plan_story_durations,
)
from storygen.services.pipeline.enhancement import ENHANCE_BATCH_SIZE, StoryboardEnhancer
from storygen.services.pipeline.prompts import compute_constraints
from storygen.services.pipeline.scenes import SceneBreakdownGenerator
from storygen.services.pipeline.script import ScriptResult, get_script_generator
from storygen.services.pipeline.voice import PassThroughVoiceSynthesizer, VoiceSynthesizer

logger = get_logger(__name__, component="story_pipeline")


@dataclass
class StageProgress:
    """Progress notification sent when a stage starts and when the story is done"""
    story_id: str
    stage: str
    step: int
    total_steps: int
    progress: float  # 0-100

    def to_dict(self) -> dict:
        return {
            "storyId": self.story_id,
            "stage": self.stage,
            "step": self.step,
            "totalSteps": self.total_steps,
            "progress": self.progress,
        }


ProgressCallback = Callable[[StageProgress], Union[None, Awaitable[None]]]


@dataclass
class _PipelineRun:
    """Mutable state of one run; never shared between stories"""
    story_id: str
    settings: GenerationSettings
    stages: List[StoryStage]
    cancel_event: Optional[asyncio.Event] = None
    on_progress: Optional[ProgressCallback] = None
    stage: StoryStage = StoryStage.PENDING
    template: Optional[Template] = None
    plan: Optional[DurationPlan] = None
    script: Optional[ScriptResult] = None
    scenes: List[Scene] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class StoryPipeline:
    """
    Sequences the stages of one story.

    Usage:
        pipeline = StoryPipeline(get_generation_client())
        result = await pipeline.generate_story(settings)
        if result.success:
            scenes = result.story.scenes
    """

    def __init__(
        self,
        client: GenerationClient,
        voice: Optional[VoiceSynthesizer] = None,
        batch_size: int = ENHANCE_BATCH_SIZE,
    ):
        self.client = client
        self.voice = voice or PassThroughVoiceSynthesizer()
        self.scene_generator = SceneBreakdownGenerator(client)
        self.enhancer = StoryboardEnhancer(client, batch_size=batch_size)

    @staticmethod
    def stages_for(settings: GenerationSettings) -> List[StoryStage]:
        stages = [StoryStage.SCRIPT, StoryStage.SCENES, StoryStage.ENHANCE]
        template = get_template(settings.template)
        if settings.has_voiceover and not (template and template.is_ambient):
            stages.append(StoryStage.VOICE)
        return stages

    async def generate_story(
        self,
        settings: GenerationSettings,
        cancel_event: Optional[asyncio.Event] = None,
        on_progress: Optional[ProgressCallback] = None,
        story_id: Optional[str] = None,
    ) -> StoryGenerationResult:
        """
        Run the pipeline for one story.

        Args:
            settings: Validated generation settings
            cancel_event: Checked before every stage; when set the run stops
            on_progress: Called with a StageProgress at each stage start and at DONE
            story_id: Correlation id (generated when omitted)

        Returns:
            StoryGenerationResult; failed results carry the error and the
            failing stage and never a story
        """
        run = _PipelineRun(
            story_id=story_id or str(uuid.uuid4()),
            settings=settings,
            stages=self.stages_for(settings),
            cancel_event=cancel_event,
            on_progress=on_progress,
        )
        token = story_id_var.set(run.story_id)

        try:
            logger.info(
                "Story pipeline started",
                extra={
                    "template": settings.template,
                    "duration": settings.duration,
                    "stages": [stage.value for stage in run.stages],
                },
            )

            await self._run_stage(run, StoryStage.SCRIPT, self._script_stage)
            await self._run_stage(run, StoryStage.SCENES, self._scenes_stage)
            await self._run_stage(run, StoryStage.ENHANCE, self._enhance_stage)
            if StoryStage.VOICE in run.stages:
                await self._run_stage(run, StoryStage.VOICE, self._voice_stage)

            return await self._finish(run)

        except PipelineCancelledError as e:
            logger.warning(
                "Story pipeline cancelled",
                extra={"stage": run.stage.value, "reason": e.reason},
            )
            return StoryGenerationResult.failed(
                story_id=run.story_id,
                error=f"Cancelled before stage {run.stage.value}: {e.reason}",
                failed_stage=run.stage.value,
                warnings=run.warnings,
            )
        except PipelineStageError as e:
            return StoryGenerationResult.failed(
                story_id=run.story_id,
                error=str(e),
                failed_stage=e.stage,
                warnings=run.warnings,
            )
        except Exception as e:
            logger.error(
                "Story pipeline failed outside a stage",
                extra={"stage": run.stage.value, "error": str(e), "error_type": type(e).__name__},
                exc_info=True,
            )
            return StoryGenerationResult.failed(
                story_id=run.story_id,
                error=f"Stage {run.stage.value} failed: {e}",
                failed_stage=run.stage.value,
                warnings=run.warnings,
            )
        finally:
            story_id_var.reset(token)

    # ------------------------------------------------------------------
    # Stage plumbing
    # ------------------------------------------------------------------

    def _check_cancelled(self, run: _PipelineRun) -> None:
        if run.cancel_event is not None and run.cancel_event.is_set():
            raise PipelineCancelledError("cancellation requested")

    async def _notify(self, run: _PipelineRun, stage: StoryStage, step: int) -> None:
        if run.on_progress is None:
            return
        total = len(run.stages)
        progress = StageProgress(
            story_id=run.story_id,
            stage=stage.value,
            step=step,
            total_steps=total,
            progress=round(100.0 * step / total, 1) if total else 100.0,
        )
        try:
            outcome = run.on_progress(progress)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            logger.warning(
                "Progress callback failed",
                extra={"stage": stage.value, "error": str(e)},
            )

    async def _run_stage(
        self,
        run: _PipelineRun,
        stage: StoryStage,
        work: Callable[[_PipelineRun], Awaitable[Any]],
    ) -> None:
        run.stage = stage
        self._check_cancelled(run)
        await self._notify(run, stage, run.stages.index(stage))

        logger.info(
            "Stage started",
            extra={"event": "stage_started", "story_id": run.story_id, "stage": stage.value},
        )
        started = time.perf_counter()

        try:
            await work(run)
        except Exception as e:
            duration = time.perf_counter() - started
            logger.error(
                "Stage failed",
                extra={
                    "event": "stage_failed",
                    "story_id": run.story_id,
                    "stage": stage.value,
                    "duration_seconds": round(duration, 3),
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise PipelineStageError(stage.value, e) from e

        duration = time.perf_counter() - started
        logger.info(
            "Stage completed",
            extra={
                "event": "stage_completed",
                "story_id": run.story_id,
                "stage": stage.value,
                "duration_seconds": round(duration, 3),
            },
        )

    async def _finish(self, run: _PipelineRun) -> StoryGenerationResult:
        run.stage = StoryStage.DONE
        await self._notify(run, StoryStage.DONE, len(run.stages))

        story = Story(
            title=run.script.title,
            script=run.script.script,
            scenes=tuple(run.scenes),
            duration=run.plan.allocated_total,
        )
        logger.info(
            "Story pipeline completed",
            extra={
                "scene_count": len(story.scenes),
                "duration": story.duration,
                "warning_count": len(run.warnings),
            },
        )
        return StoryGenerationResult.succeeded(run.story_id, story, warnings=run.warnings)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _plan(self, run: _PipelineRun) -> DurationPlan:
        settings = run.settings
        plan = plan_story_durations(
            settings.duration,
            constraints=settings.model_constraints,
            template=run.template,
            pacing=settings.pacing,
        )
        if plan.warning and plan.warning not in run.warnings:
            run.warnings.append(plan.warning)
        return plan

    async def _script_stage(self, run: _PipelineRun) -> None:
        run.template = require_template(run.settings.template)
        # Word targets for the script come from the same plan the scenes use
        run.plan = self._plan(run)
        constraints = compute_constraints(run.settings, run.template, run.plan)

        generator = get_script_generator(run.template.id, self.client)
        run.script = await generator.generate(run.settings, constraints)
        run.warnings.extend(run.script.warnings)

    async def _scenes_stage(self, run: _PipelineRun) -> None:
        constraints = compute_constraints(
            run.settings,
            run.template,
            run.plan,
            script=run.script.script,
            title=run.script.title,
        )
        run.scenes = await self.scene_generator.generate(run.settings, constraints)

    async def _enhance_stage(self, run: _PipelineRun) -> None:
        run.scenes = await self.enhancer.enhance(
            run.settings,
            run.template,
            run.plan,
            run.scenes,
            title=run.script.title,
            script=run.script.script,
        )

    async def _voice_stage(self, run: _PipelineRun) -> None:
        run.scenes = await self.voice.synthesize(run.scenes, run.settings)

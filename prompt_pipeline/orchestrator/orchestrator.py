# prompt_pipeline/orchestrator/orchestrator.py
"""Pipeline Orchestrator - coordinates prompt generation."""

import logging
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Optional

from prompt_pipeline.config import PipelineConfig
from prompt_pipeline.enhancers import PromptEnhancer, get_enhancer
from prompt_pipeline.errors import EnhancementError, PromptPipelineError, RetrievalError
from prompt_pipeline.models import (
    ProjectInfo,
    PromptResult,
    RetrievalFilters,
    RetrievalQuery,
    RetrievalResult,
    StrategyType,
    TaskContext,
    ToolProfile,
)
from prompt_pipeline.orchestrator.logging import PipelineLogger
from prompt_pipeline.pipeline.states import PipelineState, can_transition, next_stage
from prompt_pipeline.pipeline.strategy import StrategySelector
from prompt_pipeline.profiles.registry import ToolProfileRegistry
from prompt_pipeline.rendering.optimizer import PromptOptimizer
from prompt_pipeline.rendering.renderer import (
    TemplateRenderer,
    build_render_context,
    resolve_template_id,
)
from prompt_pipeline.retrieval.categories import (
    complexity_for_project,
    stage_knowledge_categories,
    template_type_for_stage,
)
from prompt_pipeline.retrieval.embeddings import EmbeddingProvider, OpenAIEmbeddingProvider
from prompt_pipeline.retrieval.gateway import RetrievalGateway
from prompt_pipeline.retrieval.sqlite_store import SQLiteKnowledgeStore
from prompt_pipeline.scoring.confidence import ConfidenceScorer
from prompt_pipeline.scoring.suggestions import SuggestionGenerator

logger = logging.getLogger(__name__)


class _Run:
    """Per-request state: id, current state and degradation notes."""

    def __init__(self):
        self.request_id = uuid.uuid4().hex[:12]
        self.state = PipelineState.BUILD_CONTEXT
        self.degradation_reasons: list[str] = []


class Orchestrator:
    """Runs one prompt generation request through the pipeline states.

    The orchestrator holds no per-request state. Knowledge and template
    retrieval run concurrently on a small thread pool owned by the instance;
    call close() (or use it as a context manager) to release the pool.
    """

    MAX_WORKERS = 4

    def __init__(
        self,
        registry: ToolProfileRegistry,
        knowledge_gateway: RetrievalGateway,
        template_gateway: RetrievalGateway,
        config: Optional[PipelineConfig] = None,
        enhancer: Optional[PromptEnhancer] = None,
    ):
        self.config = config or PipelineConfig()
        self.registry = registry
        self.knowledge_gateway = knowledge_gateway
        self.template_gateway = template_gateway
        self.enhancer = enhancer
        self.logger = PipelineLogger()
        self.strategy_selector = StrategySelector()
        self.renderer = TemplateRenderer()
        self.optimizer = PromptOptimizer()
        self.scorer = ConfidenceScorer(self.config.scoring_mode)
        self.suggester = SuggestionGenerator()
        self._executor = ThreadPoolExecutor(
            max_workers=self.MAX_WORKERS, thread_name_prefix="prompt-pipeline"
        )

    @classmethod
    def from_config(
        cls,
        config: PipelineConfig,
        embedder: Optional[EmbeddingProvider] = None,
        registry: Optional[ToolProfileRegistry] = None,
    ) -> "Orchestrator":
        """Build an orchestrator over the SQLite knowledge database."""
        embedder = embedder or OpenAIEmbeddingProvider(model=config.embedding_model)
        db_path = Path(config.db_path)
        enhancer = None
        if config.enable_enhancement:
            try:
                enhancer = get_enhancer(config.enhancement_provider)
            except EnhancementError as e:
                logger.warning(f"Enhancement disabled: {e}")
        return cls(
            registry=registry or ToolProfileRegistry.default(),
            knowledge_gateway=RetrievalGateway(
                embedder, SQLiteKnowledgeStore(db_path, "knowledge_documents"), name="knowledge"
            ),
            template_gateway=RetrievalGateway(
                embedder, SQLiteKnowledgeStore(db_path, "prompt_templates"), name="templates"
            ),
            config=config,
            enhancer=enhancer,
        )

    def close(self):
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _transition(self, run: _Run, to_state: PipelineState):
        if not can_transition(run.state, to_state):
            raise PromptPipelineError(
                f"Invalid transition: {run.state.value} -> {to_state.value}"
            )
        self.logger.state_transition(run.request_id, run.state.value, to_state.value)
        run.state = to_state

    def build_queries(
        self,
        task: TaskContext,
        project: ProjectInfo,
        profile: ToolProfile,
    ) -> tuple[RetrievalQuery, RetrievalQuery]:
        """Knowledge and template queries for a request."""
        parts = [task.task_type.replace("_", " "), task.description]
        parts.extend(task.technical_requirements)
        text = " ".join(p for p in parts if p)

        try:
            complexity = complexity_for_project(project.complexity_level)
        except ValueError:
            logger.warning(f"Ignoring unknown project complexity: {project.complexity_level}")
            complexity = None

        knowledge_query = RetrievalQuery(
            text=text,
            filters=RetrievalFilters(
                target_tools=(profile.tool_id,),
                categories=tuple(c.value for c in stage_knowledge_categories(task.stage)),
                complexity=complexity,
            ),
            similarity_threshold=self.config.similarity_threshold,
            max_results=self.config.knowledge_max_results,
        )
        template_query = RetrievalQuery(
            text=text,
            filters=RetrievalFilters(
                target_tools=(profile.tool_id,),
                document_types=(template_type_for_stage(task.stage).value,),
            ),
            similarity_threshold=self.config.similarity_threshold,
            max_results=self.config.template_max_results,
        )
        return knowledge_query, template_query

    def _collect(
        self,
        run: _Run,
        gateway: RetrievalGateway,
        future: Future,
        deadline: float,
    ) -> list[RetrievalResult]:
        """Wait for one retrieval; any failure or timeout yields no evidence."""
        try:
            outcome = future.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeoutError:
            future.cancel()
            reason = f"{gateway.name}: timed out after {self.config.retrieval_timeout}s"
        except RetrievalError as e:
            reason = f"{gateway.name}: {e}"
        except Exception as e:
            reason = f"{gateway.name}: {type(e).__name__}: {e}"
        else:
            if not outcome.degraded:
                return outcome.results
            reason = outcome.reason or f"{gateway.name}: degraded"

        run.degradation_reasons.append(reason)
        self.logger.retrieval_degraded(run.request_id, gateway.name, reason)
        return []

    def _retrieve(
        self,
        run: _Run,
        knowledge_query: RetrievalQuery,
        template_query: RetrievalQuery,
    ) -> tuple[list[RetrievalResult], list[RetrievalResult]]:
        deadline = time.monotonic() + self.config.retrieval_timeout
        knowledge_future = self._executor.submit(self.knowledge_gateway.search, knowledge_query)
        template_future = self._executor.submit(self.template_gateway.search, template_query)

        knowledge = self._collect(run, self.knowledge_gateway, knowledge_future, deadline)
        templates = self._collect(run, self.template_gateway, template_future, deadline)
        return knowledge, templates

    def _enhance(self, run: _Run, prompt: str, profile: ToolProfile) -> Optional[str]:
        """Single time-boxed enhancement attempt. Returns None on failure."""
        future = self._executor.submit(self.enhancer.enhance, prompt, profile)
        try:
            return future.result(timeout=self.config.enhancement_timeout)
        except FutureTimeoutError:
            future.cancel()
            reason = f"timed out after {self.config.enhancement_timeout}s"
        except EnhancementError as e:
            reason = str(e)
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"

        self.logger.enhancement_fallback(run.request_id, self.enhancer.name, reason)
        return None

    def generate_prompt(
        self,
        task: TaskContext,
        project: ProjectInfo,
        tool_id: str,
        strategy: Optional[StrategyType] = None,
    ) -> PromptResult:
        """
        Generate a prompt for one stage and tool.

        Args:
            task: What is being asked for
            project: Project-level facts
            tool_id: Target tool (must be registered)
            strategy: Force a strategy instead of selecting one

        Returns:
            PromptResult; `degraded` is set when retrieval evidence was lost

        Raises:
            UnsupportedToolError: Unknown tool id (raised before any retrieval)
            RenderError: Template could not be rendered
        """
        profile = self.registry.get(tool_id)

        run = _Run()
        start = time.monotonic()
        self.logger.generation_started(run.request_id, tool_id, task.stage.value)

        try:
            knowledge_query, template_query = self.build_queries(task, project, profile)

            self._transition(run, PipelineState.RETRIEVE)
            knowledge, templates = self._retrieve(run, knowledge_query, template_query)

            self._transition(run, PipelineState.SELECT_STRATEGY)
            applied = strategy or self.strategy_selector.select(
                task.stage, task.requirement_count, profile.category
            )

            self._transition(run, PipelineState.RENDER)
            template_id = resolve_template_id(profile, task.stage, applied)
            context = build_render_context(task, project, profile, knowledge, templates)
            prompt = self.renderer.render(template_id, context)

            self._transition(run, PipelineState.OPTIMIZE)
            prompt = self.optimizer.optimize(prompt, task, profile)

            enhanced = False
            if self.config.enable_enhancement and self.enhancer is not None:
                self._transition(run, PipelineState.ENHANCE)
                enhanced_prompt = self._enhance(run, prompt, profile)
                if enhanced_prompt:
                    prompt = enhanced_prompt
                    enhanced = True

            self._transition(run, PipelineState.SCORE)
            confidence = self.scorer.score(task, profile, knowledge)

            self._transition(run, PipelineState.SUGGEST)
            suggestions = self.suggester.suggest(task, profile, knowledge)

            self._transition(run, PipelineState.NEXT_STAGE)
            suggested_stage = next_stage(task.stage)

            self._transition(run, PipelineState.DONE)
        except PromptPipelineError as e:
            self.logger.error(run.request_id, type(e).__name__, str(e))
            raise

        result = PromptResult(
            prompt=prompt,
            stage=task.stage,
            tool=tool_id,
            confidence_score=confidence,
            applied_strategy=applied,
            sources=knowledge + templates,
            next_suggested_stage=suggested_stage,
            enhancement_suggestions=suggestions,
            optimization_tips=list(profile.optimization_tips),
            scoring_mode=self.scorer.mode,
            enhanced=enhanced,
            degraded=bool(run.degradation_reasons),
            degradation_reasons=list(run.degradation_reasons),
        )
        self.logger.generation_complete(
            run.request_id, time.monotonic() - start, confidence, result.degraded
        )
        return result

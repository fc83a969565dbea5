"""Generation pipeline: retry loop → fallback → asset injection → final structural check"""
import logging
from promptify_api.core import quality_gate
from promptify_api.core.asset_injector import ensure_theme_variables, inject_assets
from promptify_api.core.config import GeneratorConfig
from promptify_api.core.model_client import ModelClient
from promptify_api.generator.fallback_template import render_fallback
from promptify_api.generator.generator_schemas import ControllerState, GenerationResult
from promptify_api.generator.retry_controller import RetryController
from promptify_api.models.schemas import Brief

logger = logging.getLogger(__name__)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


def finalize(html: str, brief: Brief) -> str:
    """Inject assets and make sure the theme variables exist"""
    return ensure_theme_variables(inject_assets(html, brief), brief)


class GenerationPipeline:
    """
    Single authoritative generation flow.

    Exhausting every attempt is not an error: the caller gets the fallback
    template instead of a blank page. Model-call failures propagate.
    """

    def __init__(self, model_client: ModelClient, config: GeneratorConfig):
        self.config = config
        self.controller = RetryController(
            model_client,
            max_attempts=config.max_attempts,
            max_output_tokens=config.max_output_tokens,
        )

    async def generate(self, brief: Brief) -> GenerationResult:
        logger.info(
            f"[Pipeline] Generating site | name={brief.name!r} | ticker={brief.ticker!r} | "
            f"logo={'yes' if brief.logo_asset else 'no'} | background={'yes' if brief.background_asset else 'no'}"
        )
        outcome = await self.controller.run(brief)

        if outcome.state == ControllerState.PASSED:
            document = outcome.candidate
            source = SOURCE_AI
        else:
            logger.warning(
                f"[Pipeline] Generation exhausted after {len(outcome.attempts)} attempts, using fallback template | "
                f"last_reason={outcome.last_reason}"
            )
            document = render_fallback(brief)
            source = SOURCE_FALLBACK

        html = finalize(document, brief)
        forced_fallback = False

        final_check = quality_gate.evaluate_structure(html)
        if not final_check.passed:
            logger.error(
                f"[Pipeline] ✗ Final structural check failed after injection | "
                f"check={final_check.check} | source={source} | substituting fallback"
            )
            html = finalize(render_fallback(brief), brief)
            source = SOURCE_FALLBACK
            forced_fallback = True

        logger.info(f"[Pipeline] ✓ Site ready | source={source} | attempts={len(outcome.attempts)} | length={len(html)}")
        return GenerationResult(
            html=html,
            source=source,
            state=outcome.state,
            attempts=outcome.attempts,
            forced_fallback=forced_fallback,
        )

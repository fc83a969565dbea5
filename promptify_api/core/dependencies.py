"""Process-wide collaborators, built once from settings and injected into routes"""

from functools import lru_cache
from promptify_api.core.config import settings
from promptify_api.core.model_client import ModelClient
from promptify_api.core.site_store import SiteStore
from promptify_api.generator.pipeline import GenerationPipeline


@lru_cache(maxsize=1)
def get_pipeline() -> GenerationPipeline:
    config = settings.generator_config()
    client = ModelClient(config, api_key=settings.openai_api_key)
    return GenerationPipeline(client, config)


@lru_cache(maxsize=1)
def get_site_store() -> SiteStore:
    return SiteStore(settings.sites_dir)

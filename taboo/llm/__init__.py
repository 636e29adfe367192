"""LLM clients used to write word cards."""

from taboo.llm.base import GenerationConfig, LLMClient
from taboo.llm.factory import get_generation_config, get_llm_client

__all__ = ["GenerationConfig", "LLMClient", "get_generation_config", "get_llm_client"]

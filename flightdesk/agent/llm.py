"""
LLM factory: creates the configured Anthropic chat model.

Temperature 0: the model is choosing tools and filling in arguments, not
writing prose.
"""
from langchain_anthropic import ChatAnthropic
from flightdesk.config import settings


def get_llm() -> ChatAnthropic:
    """Build a ChatAnthropic instance with project-wide settings."""
    return ChatAnthropic(
        model=settings.llm_model,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
    )

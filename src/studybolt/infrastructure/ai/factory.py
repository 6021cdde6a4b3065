"""Agent client factory - builds the Mistral client from settings."""

from mistralai import Mistral

from studybolt.config import Settings
from studybolt.infrastructure.ai.client import MistralAgentClient
from studybolt.shared.logging import get_logger

logger = get_logger(__name__)


def build_agent_client(settings: Settings) -> MistralAgentClient:
    """Build the configured agent client.

    Usage:
        # In .env:
        MISTRAL_API_KEY=...
        MISTRAL_AGENT_ID=ag:...

        # At startup:
        app.state.agent_client = build_agent_client(get_settings())
    """
    if not settings.mistral_api_key:
        raise ValueError("MISTRAL_API_KEY is not configured")
    if not settings.mistral_agent_id:
        raise ValueError("MISTRAL_AGENT_ID is not configured")

    sdk = Mistral(
        api_key=settings.mistral_api_key,
        server_url=settings.mistral_server_url,
        timeout_ms=int(settings.completion_timeout_seconds * 1000),
    )
    logger.info("using_agent", provider="mistral", agent_id=settings.mistral_agent_id)
    return MistralAgentClient(
        sdk=sdk,
        agent_id=settings.mistral_agent_id,
        timeout_seconds=settings.completion_timeout_seconds,
        max_attempts=settings.completion_max_attempts,
    )

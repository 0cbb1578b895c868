from abc import ABC, abstractmethod


class BaseChatClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        user_prompt: str,
    ) -> str:
        """Return the provider's answer as plain text."""

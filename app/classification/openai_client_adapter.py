import httpx
import openai

from app.classification.client_base import BaseChatClient
from app.classification.exceptions import ClassificationError, ClassificationNetworkError


class OpenAIClientAdapter(BaseChatClient):
    """Chat client built on the async OpenAI API."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout_seconds)

    async def create_chat_completion(
        self,
        *,
        model: str,
        max_tokens: int,
        user_prompt: str,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ClassificationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ClassificationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ClassificationError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ClassificationError("AI returned empty response")
        return content

"""Guesses what kind of document an upload is from its file name alone."""

from dataclasses import dataclass

from app.classification.client_base import BaseChatClient
from app.classification.openai_client_adapter import OpenAIClientAdapter
from app.config.settings import Settings
from app.logging.logger import Log

_PROMPT = 'Based on this filename: "{file_name}", what type of document is this likely to be?'


@dataclass(frozen=True)
class DocumentClassification:
    file_name: str
    summary: str


class DocumentClassifier:
    def __init__(self, *, client: BaseChatClient, model: str, max_tokens: int = 500) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens

    async def classify(self, file_name: str) -> DocumentClassification:
        """Ask the model for a short description of the likely document type.

        Raises:
            ClassificationError: on an empty answer or provider failure.
        """
        prompt = _PROMPT.format(file_name=file_name)
        Log.debug(f"Classification prompt: {prompt}")
        summary = await self._client.create_chat_completion(
            model=self._model,
            max_tokens=self._max_tokens,
            user_prompt=prompt,
        )
        Log.info(f"Classified {file_name}")
        return DocumentClassification(file_name=file_name, summary=summary.strip())


def build_classifier(settings: Settings) -> DocumentClassifier:
    """Build a classifier backed by the configured OpenAI model."""
    if not settings.openai_api_key:
        raise ValueError("openai_api_key is required for document classification")
    client = OpenAIClientAdapter(
        api_key=settings.openai_api_key,
        timeout_seconds=settings.openai_timeout_seconds,
    )
    return DocumentClassifier(
        client=client,
        model=settings.openai_model_name,
        max_tokens=settings.openai_max_tokens,
    )

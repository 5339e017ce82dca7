from typing import Self, Sequence

import openai
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from chef.errors import RecipeRequestFailed
from chef.prompts import SYSTEM_PROMPT, SuggestRecipePrompt


DEFAULT_MODEL = "gpt-4-turbo-preview"
MAX_TOKENS = 1024
TIMEOUT = 60 * 2


def openai_client_factory(
    api_key: str,
    *,
    base_url: str | None = None,
    timeout: float = TIMEOUT,
) -> openai.AsyncClient:
    # One request, one response: the sdk's own retries are switched off.
    return openai.AsyncClient(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,
    )


class RecipeGateway:
    """Asks the model for a recipe given a list of ingredients."""

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = MAX_TOKENS,
        base_url: str | None = None,
        timeout: float = TIMEOUT,
    ) -> Self:
        client = openai_client_factory(api_key, base_url=base_url, timeout=timeout)
        return cls(client, model=model, max_tokens=max_tokens)

    def __init__(
        self,
        openai_client: openai.AsyncClient,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = MAX_TOKENS,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self.openai_client = openai_client
        self.model = model
        self.max_tokens = max_tokens
        self.system_prompt = system_prompt

    def messages(self, ingredients: Sequence[str]) -> list[ChatCompletionMessageParam]:
        system_message: ChatCompletionSystemMessageParam = {
            "role": "system",
            "content": self.system_prompt,
        }
        user_message: ChatCompletionUserMessageParam = {
            "role": "user",
            "content": str(SuggestRecipePrompt(ingredients)),
        }
        return [system_message, user_message]

    async def request_recipe(self, ingredients: Sequence[str]) -> str:
        """Markdown recipe text exactly as the model returned it.

        Raises `RecipeRequestFailed` for anything that stops the single request
        from producing text.
        """
        if not ingredients:
            raise ValueError("Provide at least one ingredient.")

        try:
            resp = await self.openai_client.chat.completions.create(
                model=self.model,
                messages=self.messages(ingredients),
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            raise RecipeRequestFailed(f"Problem creating recipe. {e}") from e

        try:
            content = resp.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise RecipeRequestFailed(
                f"Problem creating recipe. Malformed response. {resp}"
            ) from e
        if not content:
            raise RecipeRequestFailed("Problem creating recipe. Empty response.")
        return content

    async def close(self) -> None:
        await self.openai_client.close()

import httpx
import openai
import pytest

from chef.errors import RecipeRequestFailed
from chef.gateway import RecipeGateway, openai_client_factory
from chef.prompts import SYSTEM_PROMPT
from tests.fakes import RECIPE, FakeOpenAI, completion, error


INGREDIENTS = ["eggs", "flour", "milk", "sugar"]


@pytest.mark.asyncio
async def test_request_recipe_returns_text_verbatim(fake_openai: FakeOpenAI) -> None:
    gateway = fake_openai.gateway()
    got = await gateway.request_recipe(INGREDIENTS)
    assert got == RECIPE


@pytest.mark.asyncio
async def test_request_recipe_sends_one_request(fake_openai: FakeOpenAI) -> None:
    gateway = fake_openai.gateway(model="gpt-test", max_tokens=512)
    await gateway.request_recipe(INGREDIENTS)

    assert len(fake_openai.requests) == 1
    assert fake_openai.requests[0].url.path == "/v1/chat/completions"
    assert fake_openai.requests[0].headers["authorization"] == "Bearer sk-test"

    payload = fake_openai.payloads[0]
    assert payload["model"] == "gpt-test"
    assert payload["max_tokens"] == 512
    system, user = payload["messages"]
    assert system == {"role": "system", "content": SYSTEM_PROMPT}
    assert user["role"] == "user"


@pytest.mark.asyncio
async def test_user_message_lists_each_ingredient_once_in_order(
    fake_openai: FakeOpenAI,
) -> None:
    ingredients = ["chickpeas", "tahini", "lemon", "garlic", "cumin"]
    await fake_openai.gateway().request_recipe(ingredients)

    content = fake_openai.payloads[0]["messages"][1]["content"]
    positions = [content.index(i) for i in ingredients]
    assert positions == sorted(positions)
    assert all(content.count(i) == 1 for i in ingredients)


@pytest.mark.asyncio
async def test_request_recipe_single_ingredient(fake_openai: FakeOpenAI) -> None:
    await fake_openai.gateway().request_recipe(["rice"])
    assert fake_openai.payloads[0]["messages"][1]["content"].startswith("I have rice.")


@pytest.mark.asyncio
async def test_request_recipe_without_ingredients(fake_openai: FakeOpenAI) -> None:
    with pytest.raises(ValueError):
        await fake_openai.gateway().request_recipe([])
    assert fake_openai.requests == []


@pytest.mark.parametrize(
    "response,cause",
    (
        (error(429, "Rate limit reached.", "rate_limit_exceeded"), openai.RateLimitError),
        (error(401, "Incorrect API key provided.", "invalid_api_key"), openai.AuthenticationError),
        (error(500, "The server had an error.", "server_error"), openai.InternalServerError),
    ),
)
@pytest.mark.asyncio
async def test_request_recipe_api_errors(
    response: httpx.Response,
    cause: type[Exception],
) -> None:
    fake = FakeOpenAI(lambda request: response)
    with pytest.raises(RecipeRequestFailed) as exc_info:
        await fake.gateway().request_recipe(INGREDIENTS)
    assert isinstance(exc_info.value.__cause__, cause)
    # No retries.
    assert len(fake.requests) == 1


@pytest.mark.asyncio
async def test_request_recipe_connection_error() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    fake = FakeOpenAI(refuse)
    with pytest.raises(RecipeRequestFailed) as exc_info:
        await fake.gateway().request_recipe(INGREDIENTS)
    assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)


@pytest.mark.parametrize(
    "body",
    (
        completion(None),
        completion(""),
        {**completion(RECIPE), "choices": []},
    ),
)
@pytest.mark.asyncio
async def test_request_recipe_malformed_response(body: dict) -> None:
    fake = FakeOpenAI(lambda request: httpx.Response(200, json=body))
    with pytest.raises(RecipeRequestFailed):
        await fake.gateway().request_recipe(INGREDIENTS)


def test_from_api_key_injects_credential() -> None:
    gateway = RecipeGateway.from_api_key("sk-injected", model="gpt-test", max_tokens=99)
    assert gateway.openai_client.api_key == "sk-injected"
    assert gateway.openai_client.max_retries == 0
    assert gateway.model == "gpt-test"
    assert gateway.max_tokens == 99


def test_openai_client_factory_disables_retries() -> None:
    client = openai_client_factory("sk-test", base_url="http://openai.test/v1")
    assert client.max_retries == 0
    assert str(client.base_url).startswith("http://openai.test/v1")

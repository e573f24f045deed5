import asyncio
import json

import httpx
import pytest

from hosted_login import CANCEL, LoadURL, NavigationPolicyEngine, extract_code

from .conftest import BASE_URL

CALLBACK = "https://x/callback?code=abc123"


def decide_and_drain(engine, url):
    async def scenario():
        decision = engine.decide(url)
        await engine.stream.drain()
        return decision

    return asyncio.run(scenario())


def test_extract_code():
    assert extract_code(CALLBACK) == "abc123"
    assert extract_code("https://x/callback?code=&code=second") == "second"
    assert extract_code("https://x/callback?state=1") is None
    assert extract_code("https://x/callback") is None


def test_successful_exchange_issues_nothing(engine, surface, exchanger, authorize_urls):
    assert decide_and_drain(engine, CALLBACK) == CANCEL
    assert exchanger.codes == ["abc123"]
    assert surface.commands == []
    assert authorize_urls.count == 0


@pytest.mark.parametrize("outcome", [False, RuntimeError("network down")])
def test_failed_exchange_restarts_flow(engine, surface, exchanger, authorize_urls, outcome):
    exchanger.success = outcome

    assert decide_and_drain(engine, CALLBACK) == CANCEL
    assert exchanger.codes == ["abc123"]
    assert surface.commands == [LoadURL(f"{BASE_URL}/oauth/authorize?attempt=1")]


@pytest.mark.parametrize("url", ["https://x/callback?state=1", "https://x/callback", "https://x/callback?code="])
def test_missing_code_restarts_without_exchange(engine, surface, exchanger, url):
    # No event loop needed: the restart is synchronous
    assert engine.decide(url) == CANCEL
    assert exchanger.codes == []
    assert surface.commands == [LoadURL(f"{BASE_URL}/oauth/authorize?attempt=1")]


def test_decision_does_not_wait_for_exchange(engine, exchanger):
    gate = asyncio.Event()
    results = []

    async def slow_exchange(code):
        await gate.wait()
        return False

    exchanger.exchange = slow_exchange

    async def scenario():
        results.append(engine.decide(CALLBACK))
        assert engine.stream.pending_tasks == 1
        gate.set()
        await engine.stream.drain()

    asyncio.run(scenario())
    assert results == [CANCEL]


def test_stale_exchange_result_is_discarded(engine, surface, exchanger):
    exchanger.success = False

    async def scenario():
        engine.decide(CALLBACK)
        # User navigates elsewhere before the exchange completes
        engine.decide("https://example.org/")
        await engine.stream.drain()

    asyncio.run(scenario())
    assert exchanger.codes == ["abc123"]
    assert surface.commands == []


def test_exchange_result_discarded_after_close(engine, surface, exchanger):
    exchanger.success = False

    async def scenario():
        engine.decide(CALLBACK)
        engine.close()
        await engine.stream.drain()

    asyncio.run(scenario())
    assert surface.commands == []


def test_one_exchange_per_callback(engine, exchanger):
    decide_and_drain(engine, CALLBACK)
    assert len(exchanger.codes) == 1


def test_default_wiring_exchanges_after_begin(config, surface):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"access_token": "a", "refresh_token": "r"})

    engine = NavigationPolicyEngine(config=config, surface=surface)
    engine.exchanger.transport = httpx.MockTransport(handler)

    command = engine.begin()
    verifier = engine.exchanger.pkce.code_verifier
    assert verifier
    assert surface.commands == [command]
    assert command.url.startswith(f"{BASE_URL}/oauth/authorize?")

    assert decide_and_drain(engine, CALLBACK) == CANCEL
    assert len(requests) == 1
    assert str(requests[0].url) == f"{BASE_URL}/oauth/token"
    assert json.loads(requests[0].content)["code_verifier"] == verifier
    # No restart after a successful exchange
    assert surface.commands == [command]
    assert engine.exchanger.last_tokens.access_token == "a"

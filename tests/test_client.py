import asyncio

import httpx
import pytest

from keyid_client import ClientConfig, ConfigError, KeyIDClient, connect
from keyid_client.exporters import InMemoryExporter
from keyid_client.gateway import HttpGateway

from helpers import ScriptedGateway, evaluation_body, json_response


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYID_URL", "https://keyid.example")
    monkeypatch.setenv("KEYID_LICENSE", "LIC-ENV")
    monkeypatch.setenv("KEYID_CUSTOM_THRESHOLD", "true")
    monkeypatch.setenv("KEYID_THRESHOLD_FIDELITY", "65")
    monkeypatch.setenv("KEYID_STRICT_SSL", "0")

    config = ClientConfig.from_env(threshold_confidence=75.0)
    assert config.url == "https://keyid.example"
    assert config.license == "LIC-ENV"
    assert config.custom_threshold is True
    assert config.threshold_confidence == 75.0
    assert config.threshold_fidelity == 65.0
    assert config.strict_ssl is False
    assert config.passive_validation is False


def test_config_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYID_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        ClientConfig.from_env()


def test_connect_requires_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("KEYID_URL", raising=False)
    with pytest.raises(ConfigError):
        connect(license="LIC")


def test_connect_builds_http_gateway() -> None:
    async def run() -> None:
        client = connect("https://keyid.example", "LIC", timeout=3)
        assert isinstance(client.gateway, HttpGateway)
        assert client.config.timeout == 3
        await client.close()

    asyncio.run(run())


def test_configure_rejects_transport_settings() -> None:
    client = KeyIDClient(ClientConfig(url="https://keyid.example"), gateway=ScriptedGateway())
    with pytest.raises(ConfigError):
        client.configure(url="https://other.example")

    updated = client.configure(custom_threshold=True, threshold_fidelity=65)
    assert updated.custom_threshold is True
    assert client.config is updated


def test_end_to_end_threshold_scenario() -> None:
    async def run() -> None:
        gateway = ScriptedGateway()
        body = evaluation_body(Match="true", IsReady="true", Confidence=80, Fidelity=60)
        gateway.script_evaluation(body).script_evaluation(body)
        exporter = InMemoryExporter()

        async with KeyIDClient(
            ClientConfig(custom_threshold=True, threshold_confidence=70, threshold_fidelity=50),
            gateway=gateway,
            exporter=exporter,
        ) as client:
            first = await client.evaluate("alice", "sample", session_id="s-1")
            client.configure(threshold_fidelity=65)
            second = await client.evaluate("alice", "sample", session_id="s-1")

        assert first.matched is True
        assert second.matched is False
        assert gateway.closed is True
        assert [span.matched for span in exporter.spans] == [True, False]

    asyncio.run(run())


def test_facade_delegates_remaining_workflows() -> None:
    async def run() -> None:
        gateway = (
            ScriptedGateway()
            .script("submit_profile", json_response({"Error": ""}))
            .script_token(json_response({"Error": "", "Token": "rm"}))
            .script("remove_profile", json_response({"Error": ""}))
            .script("get_profile_info", json_response([{"EntityID": "alice", "Error": ""}]))
            .script("typing_mistake", json_response({"Error": ""}))
        )
        client = KeyIDClient(ClientConfig(), gateway=gateway)

        assert (await client.save("alice", "sample")).ok
        assert (await client.remove("alice", "sample")).ok
        info = await client.get_profile_info("alice")
        assert info.data["EntityID"] == "alice"
        assert (await client.typing_mistake("alice", mistype="teh", session_id="s-2")).ok
        assert gateway.calls_to("typing_mistake")[0]["session_id"] == "s-2"

    asyncio.run(run())


def test_http_client_end_to_end_passive_login() -> None:
    async def run() -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path.startswith("/token/") and request.url.params.get("type") == "nonce":
                return httpx.Response(200, text="nonce-1")
            if path == "/evaluate":
                return httpx.Response(200, json={"Error": "EntityID does not exist."})
            if path == "/profile":
                return httpx.Response(500, text="save failed")
            return httpx.Response(404)

        transport = httpx.MockTransport(handler)
        gateway = HttpGateway("https://keyid.example", "LIC", transport=transport)
        async with KeyIDClient(ClientConfig(url="https://keyid.example"), gateway=gateway) as client:
            result = await client.passive_login("alice", "sample")

        assert result.matched is True
        assert result.is_ready is False
        assert result.confidence == 100.0
        assert result.fidelity == 100.0

    asyncio.run(run())


def test_close_releases_exporter_when_gateway_close_fails() -> None:
    class BrokenCloseGateway(ScriptedGateway):
        async def close(self) -> None:
            raise RuntimeError("pool already closed")

    class ClosingExporter(InMemoryExporter):
        closed = False

        async def close(self) -> None:
            self.closed = True

    async def run() -> None:
        exporter = ClosingExporter()
        client = KeyIDClient(ClientConfig(), gateway=BrokenCloseGateway(), exporter=exporter)
        with pytest.raises(RuntimeError):
            await client.close()
        assert exporter.closed is True

    asyncio.run(run())

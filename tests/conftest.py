"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import jwt
import pytest

from aad_provisioning.application.ports import ProcessResult
from aad_provisioning.infrastructure.adapters.directory import (
    DirectoryClient,
    DirectoryClientConfig,
    DirectoryProtocolCodec,
)
from aad_provisioning.infrastructure.adapters.settings import FernetDataProtector

TENANT_ID = "72f988bf-86f1-41af-91ab-2d7cd011db47"
TENANT_URL = f"https://graph.windows.net/{TENANT_ID}"
APP_ID = "11111111-2222-3333-4444-555555555555"
OBJECT_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"

_SIGNING_KEY = "unit-test-signing-key-with-enough-length-for-hs256"


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory for access tokens carrying tenant and audience claims."""

    def _make(**claims: object) -> str:
        payload = {"tid": TENANT_ID, "aud": "https://graph.windows.net/"}
        payload.update(claims)
        payload = {k: v for k, v in payload.items() if v is not None}
        return jwt.encode(payload, _SIGNING_KEY, algorithm="HS256")

    return _make


@pytest.fixture
def codec() -> DirectoryProtocolCodec:
    """Fresh directory codec."""
    return DirectoryProtocolCodec()


Responder = Callable[[httpx.Request], httpx.Response]


def _replay(response: httpx.Response) -> Responder:
    status = response.status_code
    content_type = response.headers.get("Content-Type")
    content = response.content

    def responder(request: httpx.Request) -> httpx.Response:
        headers = {"Content-Type": content_type} if content_type else None
        return httpx.Response(status, headers=headers, content=content)

    return responder


@dataclass
class DirectoryService:
    """In-memory stand-in for the directory graph endpoint."""

    requests: list[httpx.Request] = field(default_factory=list)
    responders: dict[tuple[str, str], Responder] = field(default_factory=dict)

    def respond(self, method: str, path: str, response: httpx.Response | Responder) -> None:
        """Register a canned response, replayed as a fresh copy per request, or a responder."""
        if isinstance(response, httpx.Response):
            self.responders[(method, path)] = _replay(response)
        else:
            self.responders[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(f"/{TENANT_ID}")
        responder = self.responders.get((request.method, path))
        if responder is None:
            return httpx.Response(
                404,
                json={"odata.error": {"code": "Request_ResourceNotFound", "message": {"value": "not found"}}},
            )
        return responder(request)

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.content]


def _create_application(request: httpx.Request) -> httpx.Response:
    """Echo the posted application with service-assigned ids and without secret values."""
    body = json.loads(request.content)
    for credential in body.get("passwordCredentials", []):
        credential["value"] = None
    body.update({"odata.type": "Microsoft.DirectoryServices.Application", "objectId": OBJECT_ID, "appId": APP_ID})
    return httpx.Response(201, json=body)


@pytest.fixture
def directory_service() -> DirectoryService:
    """Directory service that knows how to create applications and principals."""
    service = DirectoryService()
    service.respond("POST", "/applications", _create_application)
    service.respond(
        "POST",
        "/servicePrincipals",
        httpx.Response(201, json={"objectId": "sp-object-id", "appId": APP_ID}),
    )
    service.respond(
        "DELETE",
        f"/directoryObjects/{OBJECT_ID}/Microsoft.DirectoryServices.Application",
        httpx.Response(204),
    )
    return service


@pytest.fixture
def directory_client(
    directory_service: DirectoryService, codec: DirectoryProtocolCodec
) -> Iterator[DirectoryClient]:
    """Directory client wired to the in-memory service."""
    client = DirectoryClient(
        DirectoryClientConfig(tenant_url=TENANT_URL, access_token="token"),
        codec=codec,
        transport=httpx.MockTransport(directory_service.handler),
    )
    yield client
    client.close()


@dataclass
class FakeProcessRunner:
    """Process runner that records commands and replays canned results."""

    result: ProcessResult = field(default_factory=lambda: ProcessResult(exit_code=0))
    available: bool = True
    commands: list[list[str]] = field(default_factory=list)
    files: dict[str, str] = field(default_factory=dict)

    def exists(self, command: str) -> bool:
        return self.available

    def run(self, args: Sequence[str]) -> ProcessResult:
        self.commands.append(list(args))
        # Temporary argument files are gone once the command returns.
        for arg in args:
            if arg.startswith("@"):
                self.files[arg[1:]] = Path(arg[1:]).read_text(encoding="utf-8")
        return self.result


@pytest.fixture
def process_runner() -> FakeProcessRunner:
    """Recording process runner."""
    return FakeProcessRunner()


@pytest.fixture
def protector() -> FernetDataProtector:
    """Data protector with a fixed master key."""
    return FernetDataProtector(b"k" * 32, "secrets.manager.auth")

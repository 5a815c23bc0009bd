"""Tests for the provisioning facade use case."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from aad_provisioning.application.exceptions import DecryptionError, ProtocolError, ProvisioningError, TokenError
from aad_provisioning.application.use_cases import ProvisioningFacade, ProvisioningOptions
from aad_provisioning.domain.entities import Application, PasswordCredential
from aad_provisioning.domain.exceptions import InvalidArgumentError
from aad_provisioning.infrastructure.adapters import (
    AuthSettingsFile,
    DirectoryApplicationProvisioner,
    DirectoryClient,
    DirectoryClientConfig,
    FernetDataProtector,
    JwtTokenInspector,
)

TENANT_ID = "72f988bf-86f1-41af-91ab-2d7cd011db47"
APP_ID = "11111111-2222-3333-4444-555555555555"
OBJECT_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


class FakeProvisioner:
    """Provisioner that records calls and returns a canned application."""

    def __init__(self, result: Application | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.created: list[tuple[str, str, str | None]] = []
        self.deleted: list[str] = []
        self.closed = False

    def create_application(self, name: str, root_uri: str, resource_app_id: str | None = None) -> Application:
        self.created.append((name, root_uri, resource_app_id))
        if self.error:
            raise self.error
        assert self.result is not None
        return self.result

    def delete_application(self, object_id: str) -> None:
        self.deleted.append(object_id)

    def close(self) -> None:
        self.closed = True


def created_application(secret: str | None = "s3cret#A1") -> Application:
    return Application(
        display_name="contoso-app",
        object_id=OBJECT_ID,
        app_id=APP_ID,
        password_credentials=[PasswordCredential(value=secret)],
    )


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "auth.json"


def make_facade(
    provisioner: FakeProvisioner,
    settings_path: Path,
    factory_calls: list[tuple[str, str]] | None = None,
    options: ProvisioningOptions | None = None,
) -> ProvisioningFacade:
    def provisioner_factory(tenant_root: str, access_token: str) -> FakeProvisioner:
        if factory_calls is not None:
            factory_calls.append((tenant_root, access_token))
        return provisioner

    return ProvisioningFacade(
        provisioner_factory=provisioner_factory,
        settings_store_factory=lambda: AuthSettingsFile.load(settings_path),
        token_inspector=JwtTokenInspector(),
        options=options,
    )


class TestCreateAadApplication:
    """Tests for ProvisioningFacade.create_aad_application."""

    def test_creates_application_and_auth_settings(
        self, make_token: Callable[..., str], settings_path: Path
    ) -> None:
        """A created application is written to the auth settings."""
        provisioner = FakeProvisioner(created_application())
        calls: list[tuple[str, str]] = []
        token = make_token()

        app = make_facade(provisioner, settings_path, calls).create_aad_application(token, "contoso-app")

        assert app.app_id == APP_ID
        assert calls == [(f"https://graph.windows.net/{TENANT_ID}", token)]
        assert provisioner.created == [("contoso-app", "https://contoso-app.azurewebsites.net", None)]
        assert provisioner.closed is True

        assert json.loads(settings_path.read_text(encoding="utf-8")) == {
            "allowedAudiences": '["https://contoso-app.azurewebsites.net/.auth/login/aad/callback"]',
            "isAadAutoProvisioned": "true",
            "clientId": APP_ID,
            "clientSecret": "s3cret#A1",
            "defaultProvider": "0",
            "enabled": "True",
            "issuer": f"https://sts.windows.net/{TENANT_ID}/",
            "runtimeVersion": "1.0.0",
            "tokenStoreEnabled": "true",
            "unauthenticatedClientAction": "1",
        }

    def test_options_applied(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """Host suffix, resource app and runtime version come from options."""
        provisioner = FakeProvisioner(created_application())
        options = ProvisioningOptions(
            app_host_suffix="chinacloudsites.cn",
            resource_app_id="resource-app",
            runtime_version="2.0.0",
        )

        make_facade(provisioner, settings_path, options=options).create_aad_application(
            make_token(), "contoso-app"
        )

        assert provisioner.created == [("contoso-app", "https://contoso-app.chinacloudsites.cn", "resource-app")]
        assert AuthSettingsFile.load(settings_path).get_all()["runtimeVersion"] == "2.0.0"

    def test_tenant_root_from_audience(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """An absolute audience claim selects the directory endpoint."""
        calls: list[tuple[str, str]] = []
        token = make_token(aud="https://graph.microsoft.de/")

        make_facade(FakeProvisioner(created_application()), settings_path, calls).create_aad_application(
            token, "contoso-app"
        )

        assert calls[0][0] == f"https://graph.microsoft.de/{TENANT_ID}"

    def test_tenant_root_fallback(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """A non-URI audience falls back to the configured endpoint."""
        calls: list[tuple[str, str]] = []
        token = make_token(aud="00000002-0000-0000-c000-000000000000")
        options = ProvisioningOptions(directory_endpoint="https://graph.example.test/")

        make_facade(
            FakeProvisioner(created_application()), settings_path, calls, options
        ).create_aad_application(token, "contoso-app")

        assert calls[0][0] == f"https://graph.example.test/{TENANT_ID}"

    def test_empty_name(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """An empty name is rejected before anything else happens."""
        provisioner = FakeProvisioner(created_application())

        with pytest.raises(InvalidArgumentError, match="--app-name") as exc_info:
            make_facade(provisioner, settings_path).create_aad_application(make_token(), "")

        assert exc_info.value.argument == "app-name"
        assert provisioner.created == []
        assert not settings_path.exists()

    def test_empty_token(self, settings_path: Path) -> None:
        """A token is required."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            make_facade(FakeProvisioner(), settings_path).create_aad_application("", "contoso-app")

        assert exc_info.value.argument == "access-token"

    def test_token_without_tenant(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """Tokens without a tenant id cannot be used."""
        provisioner = FakeProvisioner(created_application())

        with pytest.raises(TokenError):
            make_facade(provisioner, settings_path).create_aad_application(make_token(tid=None), "contoso-app")

        assert provisioner.created == []

    def test_provisioning_failure_writes_nothing(
        self, make_token: Callable[..., str], settings_path: Path
    ) -> None:
        """Auth settings are only written after provisioning succeeds."""
        provisioner = FakeProvisioner(error=ProtocolError("denied", status_code=403))

        with pytest.raises(ProtocolError):
            make_facade(provisioner, settings_path).create_aad_application(make_token(), "contoso-app")

        assert provisioner.closed is True
        assert not settings_path.exists()

    def test_unreadable_settings_creates_nothing(
        self, make_token: Callable[..., str], settings_path: Path, protector: FernetDataProtector
    ) -> None:
        """A settings store that cannot be decrypted stops creation before the directory is touched."""
        settings_path.write_text('{"clientId": "old"}', encoding="utf-8")
        provisioner = FakeProvisioner(created_application())
        factory_calls: list[tuple[str, str]] = []

        def provisioner_factory(tenant_root: str, access_token: str) -> FakeProvisioner:
            factory_calls.append((tenant_root, access_token))
            return provisioner

        facade = ProvisioningFacade(
            provisioner_factory=provisioner_factory,
            settings_store_factory=lambda: AuthSettingsFile.load(settings_path, protector=protector, encrypted=True),
            token_inspector=JwtTokenInspector(),
        )

        with pytest.raises(DecryptionError):
            facade.create_aad_application(make_token(), "contoso-app")

        assert factory_calls == []
        assert provisioner.created == []
        assert json.loads(settings_path.read_text(encoding="utf-8")) == {"clientId": "old"}

    def test_settings_loaded_once(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """The store checked before creation is the one the settings are written to."""
        loads: list[AuthSettingsFile] = []

        def settings_store_factory() -> AuthSettingsFile:
            store = AuthSettingsFile.load(settings_path)
            loads.append(store)
            return store

        facade = ProvisioningFacade(
            provisioner_factory=lambda tenant_root, access_token: FakeProvisioner(created_application()),
            settings_store_factory=settings_store_factory,
            token_inspector=JwtTokenInspector(),
        )

        facade.create_aad_application(make_token(), "contoso-app")

        assert len(loads) == 1
        assert loads[0].get_all()["clientId"] == APP_ID

    def test_missing_secret(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """An application without a secret cannot be configured."""
        provisioner = FakeProvisioner(created_application(secret=None))

        with pytest.raises(ProvisioningError):
            make_facade(provisioner, settings_path).create_aad_application(make_token(), "contoso-app")

        assert not settings_path.exists()

    def test_end_to_end_with_directory_service(
        self, make_token: Callable[..., str], settings_path: Path, directory_service
    ) -> None:
        """The directory provisioner and file store work together."""
        transport = httpx.MockTransport(directory_service.handler)

        def provisioner_factory(tenant_root: str, access_token: str) -> DirectoryApplicationProvisioner:
            client = DirectoryClient(DirectoryClientConfig(tenant_root, access_token), transport=transport)
            return DirectoryApplicationProvisioner(client)

        facade = ProvisioningFacade(
            provisioner_factory=provisioner_factory,
            settings_store_factory=lambda: AuthSettingsFile.load(settings_path),
            token_inspector=JwtTokenInspector(),
        )
        token = make_token()

        app = facade.create_aad_application(token, "contoso-app")

        assert len(directory_service.requests) == 2
        assert all(r.headers["Authorization"] == f"Bearer {token}" for r in directory_service.requests)
        settings = AuthSettingsFile.load(settings_path).get_all()
        assert settings["clientId"] == APP_ID
        assert settings["clientSecret"] == app.client_secret
        assert len(settings["clientSecret"]) == 128


class TestDeleteAadApplication:
    """Tests for ProvisioningFacade.delete_aad_application."""

    def test_deletes_with_token(self, make_token: Callable[..., str], settings_path: Path) -> None:
        """The tenant root is derived from the token."""
        provisioner = FakeProvisioner()
        calls: list[tuple[str, str]] = []

        make_facade(provisioner, settings_path, calls).delete_aad_application(OBJECT_ID, make_token())

        assert provisioner.deleted == [OBJECT_ID]
        assert calls[0][0] == f"https://graph.windows.net/{TENANT_ID}"
        assert provisioner.closed is True

    def test_deletes_without_token(self, settings_path: Path) -> None:
        """Without a token the configured endpoint is passed on."""
        provisioner = FakeProvisioner()
        calls: list[tuple[str, str]] = []

        make_facade(provisioner, settings_path, calls).delete_aad_application(OBJECT_ID)

        assert calls == [("https://graph.windows.net", "")]
        assert provisioner.deleted == [OBJECT_ID]

    def test_empty_id(self, settings_path: Path) -> None:
        """An empty id is rejected."""
        provisioner = FakeProvisioner()

        with pytest.raises(InvalidArgumentError) as exc_info:
            make_facade(provisioner, settings_path).delete_aad_application("")

        assert exc_info.value.argument == "id"
        assert provisioner.deleted == []


class TestHelpers:
    """Tests for facade helpers."""

    def test_home_uri(self, settings_path: Path) -> None:
        """Workloads are addressed under the host suffix."""
        facade = make_facade(FakeProvisioner(), settings_path)
        assert facade.home_uri("contoso-app") == "https://contoso-app.azurewebsites.net"

    def test_create_auth_settings_keeps_other_keys(self, settings_path: Path) -> None:
        """Writing auth settings keeps unrelated keys loaded from the file."""
        settings_path.write_text('{"existing": "value", "clientId": "old"}', encoding="utf-8")
        facade = make_facade(FakeProvisioner(), settings_path)

        facade.create_auth_settings("contoso-app", APP_ID, "secret", TENANT_ID)

        values = AuthSettingsFile.load(settings_path).get_all()
        assert values["existing"] == "value"
        assert values["clientId"] == APP_ID

"""Application provisioning through the Azure CLI.

An alternative to calling the directory service directly: the ``az`` CLI
creates the application and service principal with whatever credentials it
is logged in with.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from ....application.exceptions import CommandError, CommandNotFoundError
from ....application.ports import ProcessResult, ProcessRunner
from ....domain.entities import Application
from ....domain.exceptions import InvalidArgumentError
from ....domain.services import DEFAULT_SECRET_LENGTH, SecretGenerator
from ....domain.value_objects import RequiredResourceAccess
from ..directory.codec import DirectoryProtocolCodec

logger = logging.getLogger(__name__)

_REDACTED = "***"
_SECRET_FLAGS = frozenset({"--password"})


@dataclass(frozen=True, slots=True)
class CliConfig:
    """Configuration for the Azure CLI provisioner."""

    executable: str = "az"
    timeout: float | None = None


def redact(args: Sequence[str]) -> str:
    """Render a command line with secret argument values masked."""
    rendered: list[str] = []
    hide_next = False
    for arg in args:
        rendered.append(_REDACTED if hide_next else arg)
        hide_next = arg in _SECRET_FLAGS
    return " ".join(rendered)


class AzureCliApplicationProvisioner:
    """
    Creates applications by shelling out to ``az ad app``.

    Implements the ApplicationProvisioner port with the same contract as the
    directory provisioner: the returned application carries the locally
    generated client secret.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        *,
        config: CliConfig | None = None,
        codec: DirectoryProtocolCodec | None = None,
        secret_generator: SecretGenerator | None = None,
        secret_length: int = DEFAULT_SECRET_LENGTH,
    ) -> None:
        """
        Initialize the provisioner.

        Args:
            runner: Runs the ``az`` executable.
            config: Executable name and timeout.
            codec: Codec for the JSON printed by ``az``.
            secret_generator: Generator for the application's client secret.
            secret_length: Length of generated client secrets.
        """
        self._runner = runner
        self._config = config or CliConfig()
        self._codec = codec or DirectoryProtocolCodec()
        self._secret_generator = secret_generator or SecretGenerator()
        self._secret_length = secret_length

    def create_application(
        self,
        name: str,
        root_uri: str,
        resource_app_id: str | None = None,
    ) -> Application:
        """Create an application with ``az ad app create``."""
        secret = self._secret_generator.generate(self._secret_length)
        application = Application.for_web_app(name, root_uri, secret, resource_app_id)
        self._ensure_available("auth create-aad")

        logger.info("Creating application with name: %s and URI: %s", name, root_uri)
        with self._resource_access_file(application.required_resource_access) as resources:
            result = self._run(
                [
                    "ad",
                    "app",
                    "create",
                    "--display-name",
                    name,
                    "--homepage",
                    root_uri,
                    "--identifier-uris",
                    *application.identifier_uris,
                    "--password",
                    secret,
                    "--reply-urls",
                    *application.reply_urls,
                    "--oauth2-allow-implicit-flow",
                    "true",
                    "--required-resource-accesses",
                    f"@{resources}",
                ]
            )

        created = self._codec.decode(Application, result.stdout.strip())
        logger.info(
            "Created application with AppId: %s and ObjectId: %s",
            created.app_id,
            created.object_id,
        )

        created.password_credentials = application.password_credentials
        return created

    def delete_application(self, object_id: str) -> None:
        """Delete an application with ``az ad app delete``.

        ``object_id`` may also be the application id or an identifier URI.
        """
        if not object_id:
            msg = "Id of the application to delete must not be empty"
            raise InvalidArgumentError(msg, argument="id")
        self._ensure_available("auth delete-aad")

        self._run(["ad", "app", "delete", "--id", object_id])
        logger.info("AAD Application %s deleted through the Azure CLI", object_id)

    def close(self) -> None:
        """Nothing to release."""

    def _ensure_available(self, action: str) -> None:
        """Fail if the CLI executable cannot be found."""
        if not self._runner.exists(self._config.executable):
            msg = f"Cannot find {self._config.executable} cli. `{action}` requires the Azure CLI."
            raise CommandNotFoundError(msg)

    def _run(self, args: list[str]) -> ProcessResult:
        """Run the CLI, raising CommandError on a non-zero exit code."""
        command = [self._config.executable, *args]
        logger.info("Running: %s", redact(command))

        result = self._runner.run(command)
        if not result.succeeded:
            stderr = result.stderr.strip()
            msg = stderr or f"{self._config.executable} exited with code {result.exit_code}"
            raise CommandError(msg, exit_code=result.exit_code, stderr=stderr)
        return result

    @contextmanager
    def _resource_access_file(self, permissions: Sequence[RequiredResourceAccess]) -> Iterator[Path]:
        """Write required resource accesses to a temporary JSON file for ``az``."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False, encoding="utf-8") as f:
            f.write(self._codec.encode_many(permissions))
            path = Path(f.name)
        try:
            yield path
        finally:
            path.unlink(missing_ok=True)

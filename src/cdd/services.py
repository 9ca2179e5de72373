"""Run per-language service binaries and parse what they report.

A *service* is an executable that owns one generated client project (Swift,
Kotlin, TypeScript...). cdd asks it what the project currently contains:

* ``<bin_path> list-models <component_file>`` -- a JSON array of
  :class:`~cdd.models.Model` on stdout.
* ``<bin_path> list-routes <component_file>`` -- a JSON array of
  :class:`~cdd.models.Request` on stdout.

Any failure -- missing binary, non-zero exit, timeout, or output that does
not validate -- is raised as :class:`~cdd.exceptions.ServiceError`.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from cdd.exceptions import ServiceError
from cdd.models import Model, Request, ServiceConfig
from cdd.output import debug, error

_MODELS = TypeAdapter(list[Model])
_REQUESTS = TypeAdapter(list[Request])


class CddService:
    """A configured service binary.

    Args:
        name: The service's key under ``services`` in ``config.yml``.
        config: Its :class:`~cdd.models.ServiceConfig`.
        cwd: Directory the binary runs in (the workspace root). Defaults to
            the current directory.
    """

    def __init__(self, name: str, config: ServiceConfig, cwd: Optional[Path] = None) -> None:
        self.name = name
        self.config = config
        self.cwd = cwd

    @property
    def bin_path(self) -> Path:
        return Path(self.config.bin_path).expanduser()

    def extract_models(self) -> list[Model]:
        """Ask the service which models its project currently defines."""
        stdout = self._exec(["list-models", self.config.component_file])
        return self._parse(stdout, _MODELS, "models")

    def extract_routes(self) -> list[Request]:
        """Ask the service which requests its project currently defines."""
        stdout = self._exec(["list-routes", self.config.component_file])
        return self._parse(stdout, _REQUESTS, "routes")

    def _exec(self, args: list[str]) -> str:
        bin_path = self.bin_path
        if not bin_path.is_file():
            raise ServiceError(
                f"Service not found at {self.config.bin_path} as specified in config.yml"
            )

        command = [str(bin_path), *args]
        debug(f"[{self.name}] running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
                cwd=self.cwd,
            )
        except subprocess.TimeoutExpired as exc:
            raise ServiceError(
                f"Service {self.name} timed out after {self.config.timeout}s"
            ) from exc
        except OSError as exc:
            raise ServiceError(f"Could not run service {self.name}: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.strip()
            error(f"[{self.name}] {stderr}" if stderr else f"[{self.name}] exited with {result.returncode}")
            raise ServiceError(
                f"Service {self.name} failed with exit code {result.returncode}"
            )

        debug(f"[{self.name}] {result.stdout.strip()}")
        return result.stdout

    def _parse(self, stdout: str, adapter: TypeAdapter[Any], what: str) -> Any:  # noqa: ANN401
        try:
            return adapter.validate_json(stdout)
        except ValidationError as exc:
            raise ServiceError(
                f"Service {self.name} returned malformed {what}: {exc}"
            ) from exc

"""A cdd workspace: ``config.yml``, the OpenAPI document, and service projects.

:class:`Workspace` is what the ``sync`` and ``inspect`` commands operate on.
It reads the configuration and the document once, then exposes the steps
of a sync run:

1. :meth:`Workspace.copy_templates` -- scaffold missing service projects.
2. :meth:`Workspace.build_project` -- translate the document into the IR.
3. :meth:`Workspace.generate_instruction_tree` -- IR to generator edits.
4. :meth:`Workspace.service_models` -- what each service currently has.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Optional

from cdd.config import load_config
from cdd.exceptions import ConfigError
from cdd.instructions import Instruction, build_instruction_tree
from cdd.models import Model, Project, ProjectConfig
from cdd.output import debug, info, warning
from cdd.parser import extract_project, find_spec, load_spec, validate_openapi_version
from cdd.services import CddService


class Workspace:
    """An opened workspace.

    Args:
        root: Workspace directory; service project and template paths are
            resolved against it.
        config: The loaded configuration.
        spec: The parsed OpenAPI document.
    """

    def __init__(self, root: Path, config: ProjectConfig, spec: dict[str, Any]) -> None:
        self.root = root
        self.config = config
        self.spec = spec

    @classmethod
    def read(
        cls,
        config_path: Path,
        spec_source: Optional[str] = None,
    ) -> Workspace:
        """Open the workspace whose configuration lives at *config_path*.

        Args:
            config_path: Location of ``config.yml``. Its directory is the
                workspace root.
            spec_source: Overrides the document named in the config. May be
                a path, a URL, or ``'-'``.

        Raises:
            ConfigError: If ``config.yml`` is missing or invalid.
            MissingSpecFile: If the OpenAPI document cannot be found.
            SpecParseError: If the document cannot be parsed.
        """
        config = load_config(config_path)
        root = config_path.parent
        info(f"Read config file from {config_path}")

        source: str | Path = spec_source or find_spec(root, config.spec)
        spec = load_spec(source)
        version = validate_openapi_version(spec)
        debug(f"Loaded OpenAPI {version} document from {source}")
        return cls(root, config, spec)

    def services(self) -> dict[str, CddService]:
        """The configured services, in ``config.yml`` order."""
        return {
            name: CddService(name, service, cwd=self.root)
            for name, service in self.config.services.items()
        }

    def copy_templates(self) -> list[str]:
        """Copy the template of every service whose project directory is missing.

        Templates are copied into the workspace root, so a template is
        expected to contain the project directory itself.

        Returns:
            Names of the services whose template was copied.

        Raises:
            ConfigError: If a needed template directory does not exist.
        """
        info("Checking project directories")
        copied: list[str] = []
        for name, service in self.config.services.items():
            project_path = self.root / service.project_path
            if project_path.exists():
                info(f"Found: {name}")
                continue

            template_path = Path(service.template_path).expanduser()
            warning(
                f"Could not find local project for {name} at {service.project_path} "
                f"- copying fresh template from {service.template_path}"
            )
            if not template_path.is_dir():
                raise ConfigError(
                    f"Template for {name} not found at {service.template_path}"
                )
            shutil.copytree(template_path, self.root, dirs_exist_ok=True)
            copied.append(name)
        return copied

    def build_project(self, strict_components: Optional[bool] = None) -> Project:
        """Translate the OpenAPI document into the project IR.

        Args:
            strict_components: Overrides ``strict_components`` from the
                config when not ``None``.
        """
        strict = self.config.strict_components if strict_components is None else strict_components
        project = extract_project(self.spec, strict_components=strict)
        debug(
            f"Extracted {len(project.models)} models and {len(project.requests)} requests"
        )
        return project

    def generate_instruction_tree(self, project: Optional[Project] = None) -> list[Instruction]:
        """Build the instruction tree for *project* (translated on demand)."""
        info("Generating instruction tree")
        if project is None:
            project = self.build_project()
        return build_instruction_tree(project)

    def service_models(self) -> dict[str, list[Model]]:
        """Ask every service for the models it currently defines.

        Raises:
            ServiceError: On the first service that fails.
        """
        return {name: service.extract_models() for name, service in self.services().items()}

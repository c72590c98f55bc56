# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Parsers for Docker Compose YAML files.
"""
import logging
import os
import yaml
from typing import Any, Dict, List, Optional
from dotenv import dotenv_values
from pydantic import ValidationError
from ..MODELS.service_definition import ServiceDefinition
from ..MODELS.service_set import ServiceSet
from ..UTILS.string_interpolation import EnvironmentInterpolator

logger = logging.getLogger(__name__)


class ComposeFileError(ValueError):
    """
    A compose file could not be read into a set of services.
    """


class ComposeParser:
    """
    Parser for docker-compose.yml files, keeping only what affects start order.
    """
    def __init__(self, context: Optional[Dict[str, str]] = None):
        """
        Initializes the parser with an optional environment context for interpolation.

        :param context: Variables for interpolation. When omitted, the process
            environment over the ``.env`` file next to the compose file is used.
        """
        self.context = context

    def parse(self, compose_path: str) -> ServiceSet:
        """
        Parses a compose file from a path.

        :param compose_path: Path to the compose file.
        :return: The services of the file.
        :raises ComposeFileError: If the file is not a valid compose file.
        """
        try:
            with open(compose_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ComposeFileError(f"Cannot read {compose_path}: {e}") from e
        logger.info("Loaded compose file %s", compose_path)
        context = self.context
        if context is None:
            context = self._load_context(os.path.dirname(os.path.abspath(compose_path)))
        return self._parse(content, context)

    def parse_from_string(self, content: str) -> ServiceSet:
        """
        Parses a compose file from a string.

        :param content: YAML content of the compose file.
        :return: The services of the file.
        :raises ComposeFileError: If the content is not a valid compose file.
        """
        context = self.context if self.context is not None else dict(os.environ)
        return self._parse(content, context)

    @staticmethod
    def _load_context(project_dir: str) -> Dict[str, str]:
        """
        Reads the project's .env file; process environment variables take precedence.
        """
        context = {}
        env_path = os.path.join(project_dir, '.env')
        if os.path.isfile(env_path):
            context.update({k: v for k, v in dotenv_values(env_path).items() if v is not None})
            logger.info("Loaded interpolation variables from %s", env_path)
        context.update(os.environ)
        return context

    def _parse(self, content: str, context: Dict[str, str]) -> ServiceSet:
        interpolator = EnvironmentInterpolator(context)
        content = interpolator.interpolate(content)
        for name in interpolator.missing:
            logger.warning("The %s variable is not set. Defaulting to a blank string.", name)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ComposeFileError(f"Invalid YAML: {e}") from e
        if not data:
            data = {}
        if not isinstance(data, dict):
            raise ComposeFileError("Top level of a compose file must be a mapping")

        specs = data.get('services') or {}
        if not isinstance(specs, dict):
            raise ComposeFileError("'services' must be a mapping")

        services = {}
        for name, spec in specs.items():
            services[str(name)] = self._parse_service(str(name), spec)
        return ServiceSet(services=services)

    def _parse_service(self, name: str, spec: Any) -> ServiceDefinition:
        """
        Parses a single service definition from a compose file.

        :param name: The name of the service.
        :param spec: The service specification dictionary.
        :return: A ServiceDefinition instance.
        """
        if spec is None:
            spec = {}
        if not isinstance(spec, dict):
            raise ComposeFileError(f"Service {name} must be a mapping")

        # depends_on has a short (list) and a long (mapping) syntax
        depends_on = spec.get('depends_on') or []
        if isinstance(depends_on, dict):
            depends_on = list(depends_on.keys())

        try:
            return ServiceDefinition(
                name=name,
                image_name=spec.get('image') or '',
                container_name=spec.get('container_name'),
                depends_on=self._to_list(depends_on),
                links=self._to_list(spec.get('links')),
            )
        except ValidationError as e:
            raise ComposeFileError(f"Service {name} is invalid: {e}") from e

    def _to_list(self, val: Any) -> List[str]:
        """
        Helper to ensure a value is a list.

        :param val: The value to convert.
        :return: A list of the value's items.
        """
        if val is None:
            return []
        if isinstance(val, str):
            return [val]
        if not isinstance(val, (list, tuple)):
            raise ComposeFileError(f"Expected a list, got {val!r}")
        return list(val)

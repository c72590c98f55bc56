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
Dependency resolution for services to determine startup and shutdown order.
"""
import logging
from typing import List, Mapping, Optional, Union
from ..MODELS.resolver_settings import ResolverSettings
from ..MODELS.service_definition import ServiceDefinition
from ..MODELS.service_set import ServiceSet
from .graph_builder import DependencyGraph, build_graph
from .weight_engine import WeightTable, assign_weights
from .order_emitter import emit_layers, emit_order

logger = logging.getLogger(__name__)

Services = Union[ServiceSet, Mapping[str, ServiceDefinition]]

class DependencyResolver:
    """
    Resolves the startup and shutdown order of services based on their dependencies.

    The resolver keeps no state between calls; one instance may be shared.
    """
    def __init__(self, settings: Optional[ResolverSettings] = None):
        """
        Initializes the resolver.

        :param settings: Tie-break configuration, defaults to declaration order.
        """
        self.settings = settings or ResolverSettings()

    def resolve_graph(self, services: Services) -> DependencyGraph:
        """
        Returns the names each service waits for, from depends_on and links.

        :param services: The services to order.
        :raises MalformedLinkError: If a link is not ``target`` or ``target:alias``.
        """
        return build_graph(services)

    def resolve_weights(self, services: Services) -> WeightTable:
        """
        Returns the readiness layer of every service.

        :param services: The services to order.
        :raises MalformedLinkError: If a link is not ``target`` or ``target:alias``.
        :raises UnresolvableDependencyError: If a cycle or undefined service blocks resolution.
        """
        return assign_weights(build_graph(services))

    def resolve_order(self, services: Services) -> List[str]:
        """
        Determines the order to start services in.

        :param services: The services to order.
        :return: Every service name once, each after all of its dependencies.
        :raises MalformedLinkError: If a link is not ``target`` or ``target:alias``.
        :raises UnresolvableDependencyError: If a cycle or undefined service blocks resolution.
        """
        weights = self.resolve_weights(services)
        order = emit_order(list(weights), weights, self.settings.tie_break, self.settings.prefer)
        logger.debug("Resolved start order: %s", ", ".join(order))
        return order

    def resolve_layers(self, services: Services) -> List[List[str]]:
        """
        Groups services that can be started together, in start order.

        :param services: The services to order.
        :return: One list per weight, lightest first.
        """
        weights = self.resolve_weights(services)
        return emit_layers(list(weights), weights, self.settings.tie_break, self.settings.prefer)

    def resolve_shutdown_order(self, services: Services) -> List[str]:
        """
        Determines the order to stop services in: the start order reversed.

        :param services: The services to order.
        """
        return list(reversed(self.resolve_order(services)))

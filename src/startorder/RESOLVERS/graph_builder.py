"""
Extraction of the dependency graph from service definitions.
"""
from typing import Dict, Mapping, Optional, Set, Tuple, Union
from ..MODELS.service_definition import ServiceDefinition
from ..MODELS.service_set import ServiceSet
from .errors import MalformedLinkError

DependencyGraph = Dict[str, Set[str]]

LINK_DELIMITER = ":"


def parse_link(link: str) -> Tuple[str, Optional[str]]:
    """
    Splits a link reference into the linked service and its alias.

    :param link: Link in the form ``target`` or ``target:alias``.
    :return: The target service name and the alias, or None without alias.
    :raises MalformedLinkError: If the link has any other shape.

    An empty target is returned as is and fails later as an undefined
    service.
    """
    parts = link.split(LINK_DELIMITER)
    if link:
        # trailing empty segments do not count
        while parts and not parts[-1]:
            parts.pop()
    if len(parts) not in (1, 2):
        raise MalformedLinkError(link)
    alias = parts[1] if len(parts) == 2 else None
    return parts[0], alias


def build_graph(services: Union[ServiceSet, Mapping[str, ServiceDefinition]]) -> DependencyGraph:
    """
    Maps every service to the names it must wait for.

    Explicit ``depends_on`` entries and link targets both count. Nothing is
    checked for existence or cycles here.

    :param services: The services to order.
    :return: One entry per service, in the order the services were given.
    """
    if isinstance(services, ServiceSet):
        services = services.services

    graph: DependencyGraph = {}
    for name, service in services.items():
        dependencies = set(service.depends_on)
        # links also count as dependencies
        for link in service.links:
            target, _ = parse_link(link)
            dependencies.add(target)
        graph[name] = dependencies
    return graph

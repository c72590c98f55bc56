"""
Models for a complete set of services to order.
"""
from typing import Dict
from pydantic import BaseModel
from .service_definition import ServiceDefinition

class ServiceSet(BaseModel):
    """
    All services of one environment, keyed by service name.
    Equivalent to the services section of a parsed docker-compose.yml file.

    Key order is the order services were declared in and is used to break
    ties between services that may start at the same time.
    """
    services: Dict[str, ServiceDefinition] = {}

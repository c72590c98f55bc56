"""
Models for services as seen by the start order resolver.
"""
from typing import List, Optional
from pydantic import BaseModel

class ServiceDefinition(BaseModel):
    """
    A single service and the references it holds to other services.
    """
    name: str
    image_name: str = ""
    container_name: Optional[str] = None

    # Dependencies
    depends_on: List[str] = []
    links: List[str] = []  # "target" or "target:alias"

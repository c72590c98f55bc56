"""
Settings controlling how ties between equally ready services are broken.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel

class TieBreak(str, Enum):
    """
    Secondary ordering applied to services sharing the same weight.
    """
    INSERTION = "insertion"
    NAME = "name"

class ResolverSettings(BaseModel):
    """
    Configuration of the dependency resolver.

    :param tie_break: Ordering of services within one readiness layer.
    :param prefer: Services moved to the head of their readiness layer, in this order.
    """
    tie_break: TieBreak = TieBreak.INSERTION
    prefer: List[str] = []

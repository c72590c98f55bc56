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
Errors raised while resolving the start order of services.
"""
from typing import Dict, Iterable, List, Optional, Set


class ResolutionError(ValueError):
    """Base class for every error raised by the resolver."""


class MalformedLinkError(ResolutionError):
    """
    A link reference is neither ``target`` nor ``target:alias``.
    """

    def __init__(self, link: str):
        self.link = link
        super().__init__(f"Service link {link} is invalid")


class UnresolvableDependencyError(ResolutionError):
    """
    Weights stopped propagating before every service got one.

    ``unresolved`` holds all services whose weight could not be computed,
    i.e. the services caught in a cycle or waiting on a missing service,
    together with everything that depends on them.
    """

    def __init__(self, unresolved: Iterable[str], detail: Optional[str] = None):
        self.unresolved = frozenset(unresolved)
        message = f"Launch order of services {sorted(self.unresolved)} can't be evaluated"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DanglingDependencyError(UnresolvableDependencyError):
    """
    At least one stuck service references a service that is not defined.

    ``missing`` maps each such service to the undefined names it references.
    """

    def __init__(self, unresolved: Iterable[str], missing: Dict[str, Set[str]]):
        self.missing = {name: set(refs) for name, refs in missing.items()}
        detail = "; ".join(
            f"{name} depends on undefined {', '.join(sorted(refs))}"
            for name, refs in sorted(self.missing.items())
        )
        super().__init__(unresolved, detail)


class CircularDependencyError(UnresolvableDependencyError):
    """
    The stuck services depend on each other in a cycle.

    ``cycle`` is one cycle found among them, first name repeated at the end.
    Other cycles may exist in the same set.
    """

    def __init__(self, unresolved: Iterable[str], cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(unresolved, f"circular dependency {' -> '.join(self.cycle)}")

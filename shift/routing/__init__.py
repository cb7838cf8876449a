"""
Routing: pattern matching, route targets and resolution.
"""

from shift.routing.matcher import WILDCARD, matches
from shift.routing.resolver import ResolvedRoute, resolve
from shift.routing.targets import Action, Group, Named, RouteTarget, flatten, parse_target

__all__ = [
    "WILDCARD",
    "Action",
    "Group",
    "Named",
    "ResolvedRoute",
    "RouteTarget",
    "flatten",
    "matches",
    "parse_target",
    "resolve",
]

"""Role hierarchy - transitive closure over ``inherits_from`` edges."""

from collections import deque
from collections.abc import Iterable, Mapping

from rolegate.domain.entities import Role


def resolve_role_closure(
    role_ids: Iterable[str], roles_by_id: Mapping[str, Role]
) -> set[str]:
    """Return the assigned role ids plus every role reachable through inheritance.

    Breadth-first; a role is expanded at most once, so self-inheritance and
    inheritance cycles terminate. Ids with no matching role are kept in the
    closure but contribute nothing.
    """
    closure = set(role_ids)
    queue = deque(closure)
    visited: set[str] = set()

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)

        role = roles_by_id.get(current)
        if role is None:
            continue
        for parent_id in role.inherits_from:
            if parent_id not in closure:
                closure.add(parent_id)
                queue.append(parent_id)

    return closure

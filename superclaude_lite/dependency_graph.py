"""Dependency graph for installation steps.

Steps are vertices; an edge ``(dependent, prerequisite)`` means the
prerequisite must complete before the dependent begins. The graph is built
once per run, sorted with Kahn's algorithm, and never mutated afterwards.

Example::

    graph = DependencyGraph()
    graph.add_step("CheckPrerequisites")
    graph.add_step("CreateDirectories")
    graph.add_dependency("CreateDirectories", "CheckPrerequisites")
    graph.get_topological_order()
    # ['CheckPrerequisites', 'CreateDirectories']
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import (
    CycleError,
    DuplicateStepError,
    EmptyNameError,
    SelfDependencyError,
    UnknownStepError,
    UnknownStepReferenceError,
)

logger = logging.getLogger(__name__)

# (dependent, prerequisite)
Rule = Tuple[str, str]
ConditionalRules = Callable[[Any], Sequence[Rule]]

CYCLE_ARROW = " → "


def _referenced(rules: Sequence[Rule]) -> List[str]:
    """Every step named by ``rules``, prerequisites first, in order of first appearance."""
    seen: Dict[str, None] = {}
    for dependent, prerequisite in rules:
        seen.setdefault(prerequisite, None)
        seen.setdefault(dependent, None)
    return list(seen)


class DependencyGraph:
    """Acyclic step graph with cycle diagnostics.

    ``known_steps`` is the canonical step registry. When given,
    :meth:`build_from_rules` cross-checks every referenced name against it
    before touching the graph. Leave it as None for graphs over arbitrary
    names.
    """

    def __init__(self, known_steps: Optional[Iterable[str]] = None) -> None:
        self._known_steps = None if known_steps is None else frozenset(known_steps)
        # Dicts double as insertion-ordered sets.
        # prerequisite -> dependents
        self._dependents: Dict[str, Dict[str, None]] = {}
        # dependent -> prerequisites
        self._prerequisites: Dict[str, Dict[str, None]] = {}

    def add_step(self, name: str) -> None:
        if not name or not name.strip():
            raise EmptyNameError("step name cannot be empty")
        if name in self._dependents:
            raise DuplicateStepError(name)

        self._dependents[name] = {}
        self._prerequisites[name] = {}

    def add_dependency(self, dependent: str, prerequisite: str) -> None:
        """Declare that ``dependent`` runs only after ``prerequisite``.

        Edges that close a cycle are accepted here; the cycle surfaces from
        :meth:`get_topological_order`. Re-adding an existing edge is a no-op.
        """
        if not dependent or not dependent.strip() or not prerequisite or not prerequisite.strip():
            raise EmptyNameError("dependency step names cannot be empty")
        if dependent == prerequisite:
            raise SelfDependencyError(dependent)
        for name in (dependent, prerequisite):
            if name not in self._dependents:
                raise UnknownStepError(name)

        self._dependents[prerequisite][dependent] = None
        self._prerequisites[dependent][prerequisite] = None

    def has_step(self, name: str) -> bool:
        return name in self._dependents

    def get_steps(self) -> List[str]:
        return list(self._dependents)

    def get_dependencies(self, name: str) -> List[str]:
        """Direct prerequisites of ``name`` (transitive ones are not included)."""
        if name not in self._prerequisites:
            raise UnknownStepError(name)
        return list(self._prerequisites[name])

    def edges(self) -> List[Rule]:
        return [(dep, pre) for dep, pres in self._prerequisites.items() for pre in pres]

    def build_from_rules(
        self,
        static_rules: Sequence[Rule],
        config: Any = None,
        conditional: Optional[ConditionalRules] = None,
    ) -> List[str]:
        """Populate the graph from a static rule table plus config-gated rules.

        Vertices are every name referenced by a rule, added in order of first
        appearance. Returns the topological order computed to validate the
        result.
        """
        rules: List[Rule] = list(static_rules)
        if conditional is not None:
            rules.extend(conditional(config))

        self._check_references(rules)

        # A second build on the same instance fails here with DuplicateStepError.
        for name in _referenced(rules):
            self.add_step(name)

        for dependent, prerequisite in rules:
            self.add_dependency(dependent, prerequisite)

        order = self.get_topological_order()
        logger.debug("Built dependency graph: %d steps, %d edges", len(order), len(self.edges()))
        return order

    def _check_references(self, rules: Sequence[Rule]) -> None:
        if self._known_steps is None:
            return

        missing = [name for name in _referenced(rules) if name not in self._known_steps]
        if missing:
            raise UnknownStepReferenceError(missing, self._known_steps)

    def get_topological_order(self) -> List[str]:
        """Return every step with each prerequisite before its dependents.

        Ties between unconstrained steps resolve in insertion order.
        Raises CycleError when no valid order exists.
        """
        in_degree = {name: len(pres) for name, pres in self._prerequisites.items()}
        ready = deque(name for name, deg in in_degree.items() if deg == 0)

        order: List[str] = []
        while ready:
            current = ready.popleft()
            order.append(current)
            for dependent in self._dependents[current]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    ready.append(dependent)

        if len(order) != len(self._dependents):
            raise self._describe_cycle()
        return order

    # Cycle diagnostics. Best effort: the only hard guarantee is that
    # get_topological_order() failed.

    def _describe_cycle(self) -> CycleError:
        for component in self._strongly_connected_components():
            if len(component) > 1:
                path = self._cycle_path(component)
                return CycleError(
                    "circular dependency detected in installation steps: " + CYCLE_ARROW.join(path),
                    cycle=path,
                )

        for name, dependents in self._dependents.items():
            if name in dependents:
                return CycleError(
                    f"circular dependency detected: step '{name}' depends on itself",
                    cycle=[name, name],
                )

        return CycleError("circular dependency detected in installation steps")

    def _strongly_connected_components(self) -> List[List[str]]:
        """Tarjan's algorithm over prerequisite -> dependent edges.

        Iterative, so arbitrarily long chains do not hit the recursion limit.
        """
        index: Dict[str, int] = {}
        lowlink: Dict[str, int] = {}
        on_stack: Dict[str, bool] = {}
        stack: List[str] = []
        components: List[List[str]] = []
        counter = 0

        for root in self._dependents:
            if root in index:
                continue

            # (node, iterator over its dependents)
            work: List[Tuple[str, Iterator[str]]] = []
            index[root] = lowlink[root] = counter
            counter += 1
            stack.append(root)
            on_stack[root] = True
            work.append((root, iter(self._dependents[root])))

            while work:
                node, successors = work[-1]
                descended = False
                for nxt in successors:
                    if nxt not in index:
                        index[nxt] = lowlink[nxt] = counter
                        counter += 1
                        stack.append(nxt)
                        on_stack[nxt] = True
                        work.append((nxt, iter(self._dependents[nxt])))
                        descended = True
                        break
                    if on_stack.get(nxt):
                        lowlink[node] = min(lowlink[node], index[nxt])
                if descended:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == index[node]:
                    component: List[str] = []
                    while True:
                        member = stack.pop()
                        on_stack[member] = False
                        component.append(member)
                        if member == node:
                            break
                    components.append(component)

        return components

    def _cycle_path(self, component: Sequence[str]) -> List[str]:
        """Shortest walk from one member back to itself, e.g. [A, B, C, A]."""
        members = set(component)
        start = next(name for name in self._dependents if name in members)

        parent: Dict[str, Optional[str]] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for nxt in self._dependents[current]:
                if nxt not in members:
                    continue
                if nxt == start:
                    path = [current]
                    while parent[path[-1]] is not None:
                        path.append(parent[path[-1]])  # type: ignore[arg-type]
                    path.reverse()
                    return path + [start]
                if nxt not in parent:
                    parent[nxt] = current
                    queue.append(nxt)

        return [start, start]

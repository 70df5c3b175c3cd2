"""State graph: predecessor relation used for reverting videos."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional

from workflow.errors import InvalidStatus
from workflow.states import StatusLike, VideoStatus, parse_status
from workflow import tables


@dataclass(frozen=True)
class StateGraph:
    """Immutable predecessor chain rooted at the initial status."""

    previous: Mapping[VideoStatus, Optional[VideoStatus]]
    initial: VideoStatus
    terminal: FrozenSet[VideoStatus]

    def initial_status(self) -> VideoStatus:
        return self.initial

    def previous_of(self, status: StatusLike) -> Optional[VideoStatus]:
        canonical = parse_status(status)
        if canonical not in self.previous:
            raise InvalidStatus(status)
        return self.previous[canonical]

    def is_terminal(self, status: StatusLike) -> bool:
        return parse_status(status) in self.terminal

    def ancestry(self, status: StatusLike) -> List[VideoStatus]:
        """Return the chain from `status` back to the root, inclusive.

        Stops after visiting every status once so a malformed graph cannot
        loop forever; `find_graph_violations` reports the cycle instead.
        """
        chain: List[VideoStatus] = []
        current: Optional[VideoStatus] = parse_status(status)
        while current is not None and current not in chain:
            chain.append(current)
            current = self.previous.get(current)
        return chain


def build_state_graph(
    previous: Mapping[VideoStatus, Optional[VideoStatus]] = tables.STATE_FLOW,
    *,
    initial: VideoStatus = tables.INITIAL_STATUS,
    terminal=tables.TERMINAL_STATUSES,
) -> StateGraph:
    return StateGraph(
        previous=MappingProxyType(dict(previous)),
        initial=initial,
        terminal=frozenset(terminal),
    )


def find_graph_violations(graph: StateGraph) -> List[str]:
    """Check that every status walks back to the initial status without cycles."""
    violations: List[str] = []
    statuses = list(VideoStatus)

    missing = [status.value for status in statuses if status not in graph.previous]
    if missing:
        violations.append(f"state graph is missing statuses: {', '.join(missing)}")

    roots = [status.value for status, prev in graph.previous.items() if prev is None]
    if roots != [graph.initial.value]:
        violations.append(
            f"initial status {graph.initial.value} must be the only root, found: {', '.join(roots) or 'none'}"
        )

    for status in graph.previous:
        current: Optional[VideoStatus] = status
        steps = 0
        while current is not None and steps <= len(statuses):
            current = graph.previous.get(current)
            steps += 1
        if current is not None:
            violations.append(f"cycle reachable from {status.value}")
    return violations

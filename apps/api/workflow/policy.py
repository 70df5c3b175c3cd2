"""
Immutable workflow policy.

A `WorkflowPolicy` bundles every table the decision functions consult. The
default policy is frozen once at import time from `workflow.tables`; tests and
alternate deployments build their own with `build_policy(...)` and pass it to
the decision functions explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from workflow import tables
from workflow.errors import PolicyError
from workflow.graph import StateGraph, build_state_graph, find_graph_violations
from workflow.states import NO_DISPONIBLE, Role, VideoStatus


TransitionTable = Mapping[Any, Mapping[VideoStatus, FrozenSet[VideoStatus]]]
AutoTable = Mapping[Any, Mapping[VideoStatus, VideoStatus]]


@dataclass(frozen=True)
class WorkflowPolicy:
    graph: StateGraph
    transitions: TransitionTable
    auto_transitions: AutoTable
    revert_permissions: Mapping[Any, FrozenSet[VideoStatus]]
    unassign_roles: Mapping[Any, Optional[FrozenSet[VideoStatus]]]
    unassign_blocked: FrozenSet[VideoStatus]
    unassign_targets: Mapping[VideoStatus, VideoStatus]
    unassign_fallback: VideoStatus
    visibility: Mapping[VideoStatus, Mapping[Any, str]]

    def allowed_from(self, role: Any, status: VideoStatus) -> FrozenSet[VideoStatus]:
        """Manual transitions for (role, status); empty when either is unknown."""
        return self.transitions.get(role, {}).get(status, frozenset())

    def auto_target(self, role: Any, status: VideoStatus) -> Optional[VideoStatus]:
        return self.auto_transitions.get(role, {}).get(status)

    def visibility_for(self, status: VideoStatus, role: Any) -> Optional[str]:
        return self.visibility.get(status, {}).get(role)


def _freeze_sets(table: Mapping[Any, Mapping[VideoStatus, Any]]) -> TransitionTable:
    return MappingProxyType(
        {
            role: MappingProxyType({status: frozenset(targets) for status, targets in rows.items()})
            for role, rows in table.items()
        }
    )


def _freeze_nested(table: Mapping[Any, Mapping[Any, Any]]) -> Mapping[Any, Mapping[Any, Any]]:
    return MappingProxyType({key: MappingProxyType(dict(rows)) for key, rows in table.items()})


def build_policy(
    *,
    state_flow=tables.STATE_FLOW,
    initial_status: VideoStatus = tables.INITIAL_STATUS,
    terminal_statuses=tables.TERMINAL_STATUSES,
    role_transitions=tables.ROLE_TRANSITIONS,
    auto_transitions=tables.AUTO_TRANSITIONS,
    revert_permissions=tables.REVERT_PERMISSIONS,
    unassign_roles=tables.UNASSIGN_ROLES,
    unassign_blocked=tables.UNASSIGN_BLOCKED,
    unassign_targets=tables.UNASSIGN_TARGETS,
    unassign_fallback: VideoStatus = tables.UNASSIGN_FALLBACK,
    role_visibility=tables.ROLE_VISIBILITY,
) -> WorkflowPolicy:
    return WorkflowPolicy(
        graph=build_state_graph(state_flow, initial=initial_status, terminal=terminal_statuses),
        transitions=_freeze_sets(role_transitions),
        auto_transitions=_freeze_nested(auto_transitions),
        revert_permissions=MappingProxyType(
            {role: frozenset(statuses) for role, statuses in revert_permissions.items()}
        ),
        unassign_roles=MappingProxyType(
            {
                role: (None if statuses is None else frozenset(statuses))
                for role, statuses in unassign_roles.items()
            }
        ),
        unassign_blocked=frozenset(unassign_blocked),
        unassign_targets=MappingProxyType(dict(unassign_targets)),
        unassign_fallback=unassign_fallback,
        visibility=_freeze_nested(role_visibility),
    )


def _is_status(value: Any) -> bool:
    return isinstance(value, VideoStatus)


def find_policy_violations(policy: WorkflowPolicy) -> List[str]:
    """Return every build-time invariant the policy breaks."""
    violations = find_graph_violations(policy.graph)
    statuses = set(VideoStatus)

    for role, rows in policy.transitions.items():
        for status, targets in rows.items():
            if not _is_status(status):
                violations.append(f"transition table for {role} has non-canonical key {status!r}")
            for target in targets:
                if not _is_status(target):
                    violations.append(f"transition {role}:{status} has non-canonical target {target!r}")
        if role != Role.ADMIN:
            missing = sorted(status.value for status in statuses - set(rows))
            if missing:
                violations.append(f"transition table for {role} omits statuses: {', '.join(missing)}")
            for terminal in policy.graph.terminal:
                if rows.get(terminal):
                    violations.append(f"terminal status {terminal.value} has forward edges for {role}")

    for role, rows in policy.auto_transitions.items():
        for status, target in rows.items():
            if not (_is_status(status) and _is_status(target)):
                violations.append(f"auto transition {role}:{status!r} -> {target!r} is not canonical")
                continue
            if role == Role.ADMIN:
                continue
            if status == VideoStatus.IN_PROGRESS and role == Role.OPTIMIZER:
                continue
            if target not in policy.allowed_from(role, status):
                violations.append(
                    f"auto transition {role}:{status.value} -> {target.value} is not a manual transition"
                )

    for role, allowed in policy.revert_permissions.items():
        for status in allowed:
            if not _is_status(status):
                violations.append(f"revert permission for {role} has non-canonical status {status!r}")

    for status, rows in policy.visibility.items():
        if not _is_status(status):
            violations.append(f"visibility table has non-canonical key {status!r}")

    for source, target in policy.unassign_targets.items():
        if not (_is_status(source) and _is_status(target)):
            violations.append(f"unassign target {source!r} -> {target!r} is not canonical")
    if not _is_status(policy.unassign_fallback):
        violations.append(f"unassign fallback {policy.unassign_fallback!r} is not canonical")

    return violations


def validate_policy(policy: WorkflowPolicy) -> WorkflowPolicy:
    violations = find_policy_violations(policy)
    if violations:
        raise PolicyError(violations)
    return policy


def describe_policy(policy: WorkflowPolicy) -> Dict[str, Any]:
    """JSON-friendly dump of the policy tables."""

    def _key(value: Any) -> str:
        return getattr(value, "value", str(value))

    def _values(items) -> List[str]:
        return sorted(_key(item) for item in items)

    return {
        "initial_status": policy.graph.initial.value,
        "terminal_statuses": _values(policy.graph.terminal),
        "previous": {
            _key(status): (prev.value if prev is not None else None)
            for status, prev in policy.graph.previous.items()
        },
        "transitions": {
            _key(role): {_key(status): _values(targets) for status, targets in rows.items()}
            for role, rows in policy.transitions.items()
        },
        "auto_transitions": {
            _key(role): {_key(status): _key(target) for status, target in rows.items()}
            for role, rows in policy.auto_transitions.items()
        },
        "revert_permissions": {
            _key(role): _values(statuses) for role, statuses in policy.revert_permissions.items()
        },
        "unassign": {
            "roles": {
                _key(role): (None if statuses is None else _values(statuses))
                for role, statuses in policy.unassign_roles.items()
            },
            "blocked": _values(policy.unassign_blocked),
            "targets": {_key(source): _key(target) for source, target in policy.unassign_targets.items()},
            "fallback": _key(policy.unassign_fallback),
        },
        "visibility": {
            _key(status): {_key(role): label for role, label in rows.items()}
            for status, rows in policy.visibility.items()
        },
        "no_visibility_label": NO_DISPONIBLE,
    }


DEFAULT_POLICY = build_policy()

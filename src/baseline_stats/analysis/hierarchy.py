"""Feature group hierarchy with computed full names."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Mapping

from baseline_stats.errors import HierarchyError
from baseline_stats.ingest.records import GroupDefinition


LOGGER = logging.getLogger(__name__)

FULLNAME_SEPARATOR = " > "
UNGROUPED_ID = "ungrouped"
ALL_ID = "all"
SYNTHETIC_GROUPS: tuple[GroupDefinition, ...] = (
    GroupDefinition(group_id=UNGROUPED_ID, name="Ungrouped features"),
    GroupDefinition(group_id=ALL_ID, name="All features"),
)


@dataclass(frozen=True, slots=True)
class GroupNode:
    """A group positioned in the hierarchy."""

    group_id: str
    name: str
    parent: str | None
    fullname: str
    children: tuple[str, ...] = ()
    synthetic: bool = False

    @property
    def is_top_level(self) -> bool:
        return FULLNAME_SEPARATOR not in self.fullname


@dataclass(frozen=True)
class GroupHierarchy:
    """Groups keyed by id, in dataset order followed by the synthetic groups."""

    nodes: Mapping[str, GroupNode]

    def __getitem__(self, group_id: str) -> GroupNode:
        return self.nodes[group_id]

    def __contains__(self, group_id: object) -> bool:
        return group_id in self.nodes

    def __iter__(self) -> Iterator[GroupNode]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def descendants(self, group_id: str) -> list[str]:
        """Return every group below ``group_id``, each once, depth-first."""

        seen: set[str] = set()
        ordered: list[str] = []
        stack = list(reversed(self.nodes[group_id].children))
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            ordered.append(current)
            stack.extend(reversed(self.nodes[current].children))
        return ordered

    def top_level(self) -> list[GroupNode]:
        return [node for node in self.nodes.values() if node.is_top_level]


def _ancestor_chain(
    group_id: str, definitions: Mapping[str, GroupDefinition]
) -> list[GroupDefinition]:
    """Return the ancestors of ``group_id`` from its parent up to the root."""

    chain: list[GroupDefinition] = []
    visited = [group_id]
    parent_id = definitions[group_id].parent
    while parent_id is not None:
        if parent_id in visited:
            cycle = " -> ".join(visited[visited.index(parent_id) :] + [parent_id])
            raise HierarchyError(f"Group parent chain contains a cycle: {cycle}")
        parent = definitions.get(parent_id)
        if parent is None:
            LOGGER.warning(
                "Group '%s' references unknown parent '%s'; treating it as a root",
                visited[-1],
                parent_id,
            )
            break
        chain.append(parent)
        visited.append(parent_id)
        parent_id = parent.parent
    return chain


def build_hierarchy(definitions: Mapping[str, GroupDefinition]) -> GroupHierarchy:
    """Build the group tree, including the ``ungrouped`` and ``all`` groups.

    Full names join ancestor names from the root down with ``" > "``.
    Children lists only hold direct children, in dataset order.
    """

    LOGGER.info("Preparing the list of groups")
    merged: dict[str, GroupDefinition] = dict(definitions)
    for synthetic in SYNTHETIC_GROUPS:
        if synthetic.group_id in merged:
            LOGGER.warning(
                "Dataset defines group '%s'; replacing it with the synthetic group",
                synthetic.group_id,
            )
            del merged[synthetic.group_id]
        merged[synthetic.group_id] = synthetic

    children: dict[str, list[str]] = {group_id: [] for group_id in merged}
    fullnames: dict[str, str] = {}
    parents: dict[str, str | None] = {}
    for group_id, definition in merged.items():
        chain = _ancestor_chain(group_id, merged)
        names = [ancestor.name for ancestor in reversed(chain)] + [definition.name]
        fullnames[group_id] = FULLNAME_SEPARATOR.join(names)
        parents[group_id] = chain[0].group_id if chain else None
        if chain:
            children[chain[0].group_id].append(group_id)

    synthetic_ids = {group.group_id for group in SYNTHETIC_GROUPS}
    nodes = {
        group_id: GroupNode(
            group_id=group_id,
            name=definition.name,
            parent=parents[group_id],
            fullname=fullnames[group_id],
            children=tuple(children[group_id]),
            synthetic=group_id in synthetic_ids,
        )
        for group_id, definition in merged.items()
    }
    LOGGER.info("%d groups prepared", len(nodes))
    return GroupHierarchy(nodes=nodes)


__all__ = [
    "ALL_ID",
    "FULLNAME_SEPARATOR",
    "GroupHierarchy",
    "GroupNode",
    "SYNTHETIC_GROUPS",
    "UNGROUPED_ID",
    "build_hierarchy",
]

"""frame_graph.py - Relative Pose Frame Graphs"""
from __future__ import annotations

import logging
import typing as typ
from dataclasses import dataclass

import networkx as nx

from sdf_dom.config import ROOT_FRAME
from sdf_dom.errors import Error, ErrorCode, Errors, FrameNotFoundError, GraphInvalidError
from sdf_dom.geometry import Pose

__all__ = ['FrameRecord', 'FrameGraph']

logger = logging.getLogger(__name__)

# %% Frame records
@dataclass(frozen=True)
class FrameRecord:
    """Declared frame of a frame-bearing entity

    :param name: Frame name, unique within its scope
    :type name: str

    :param pose: Declared pose relative to :code:`relative_to`
    :type pose: Pose

    :param relative_to: Name of the base frame, defaults to the implicit root
    :type relative_to: str, optional

    :param kind: Declaring entity kind, defaults to 'frame'
    :type kind: str, optional

    :param line: Source line of the declaring element, defaults to None
    :type line: int | None, optional
    """
    name: str
    pose: Pose
    relative_to: str = ROOT_FRAME
    kind: str = 'frame'
    line: int | None = None

    def location(self) -> str:
        return f" (line {self.line})" if self.line is not None else ''

# %% Frame Graph
class FrameGraph(nx.DiGraph):
    """Relative pose graph of a single scope. Each declared frame has exactly
    one outgoing edge to the frame its pose is expressed in; a valid graph is
    a tree rooted at the implicit root frame :code:`''`.

    Use :meth:`FrameGraph.build` to construct and validate a graph. Validation
    errors are accumulated in :code:`errors`; pose queries against a graph
    with errors raise :code:`GraphInvalidError`.
    """
    def __init__(self, incoming_graph_data=None, scope: str = '', **attr):
        """Initialize FrameGraph"""
        super().__init__(incoming_graph_data, **attr)
        self.graph['scope'] = scope
        self.errors: Errors = []
        self._root_pose: dict[str, Pose] = {}

        self.add_node(ROOT_FRAME, kind='root')

    @classmethod
    def build(cls, records: typ.Iterable[FrameRecord], scope: str = '') -> FrameGraph:
        """Constructs and validates the frame graph of a scope

        :param records: Frames declared by the scope's direct children
        :type records: typing.Iterable[FrameRecord]

        :param scope: Scope name used in diagnostics, defaults to ''
        :type scope: str, optional

        :return: Frame graph, invalid if :code:`errors` is not empty
        :rtype: FrameGraph
        """
        graph = cls(scope=scope)
        graph.errors.extend(graph._add_frames(records))
        graph.errors.extend(graph._check_cycles())

        if graph.errors:
            logger.warning("Frame graph of scope [%s] has %d error(s)",
                           scope, len(graph.errors))
        else:
            graph._resolve_root_poses()
            logger.debug("Built frame graph of scope [%s] with %d frame(s)",
                         scope, graph.number_of_nodes() - 1)

        return graph

    @property
    def scope(self) -> str:
        return self.graph['scope']

    @property
    def valid(self) -> bool:
        return not self.errors

    # Construction
    def _add_frames(self, records: typ.Iterable[FrameRecord]) -> Errors:
        """Inserts frame nodes with name uniqueness checks, then one edge per
        frame towards its :code:`relative_to` target"""
        errors: Errors = []

        accepted: list[FrameRecord] = []
        for record in records:
            if not record.name:
                # Nameless entities already reported ATTRIBUTE_MISSING
                continue

            if record.name in self:
                other = self.nodes[record.name]['record']
                errors.append(Error(ErrorCode.DUPLICATE_NAME,
                    f"{record.kind.capitalize()} name [{record.name}]{record.location()} "
                    f"in scope [{self.scope}] conflicts with the {other.kind} of the "
                    f"same name{other.location()}"))
                continue

            self.add_node(record.name, kind=record.kind, record=record)
            accepted.append(record)

        for record in accepted:
            target = record.relative_to or ROOT_FRAME
            if target not in self:
                errors.append(Error(ErrorCode.POSE_RELATIVE_TO_INVALID,
                    f"relative_to name [{target}] of {record.kind} [{record.name}] "
                    f"does not match a frame in scope [{self.scope}]"))
                continue

            self.add_edge(record.name, target, pose=record.pose)

        return errors

    def relative_to(self, name: str) -> str | None:
        """Returns the frame that :code:`name` is declared relative to, or None
        for the root and for frames with an unresolved reference"""
        for target in self.successors(name):
            return target
        return None

    # Validation
    def _check_cycles(self) -> Errors:
        """Walks from every frame towards the root with a visited set per walk.
        Frames known to reach the root, or known to reach a cycle, end later
        walks early. Each distinct cycle is reported once."""
        errors: Errors = []

        settled = {ROOT_FRAME}
        doomed: set[str] = set()
        reported: set[frozenset[str]] = set()
        for node in self.nodes:
            walk: list[str] = []
            seen: set[str] = set()
            current = node
            while current not in settled:
                if current in doomed:
                    doomed.update(walk)
                    break

                if current in seen:
                    cycle = walk[walk.index(current):]
                    if frozenset(cycle) not in reported:
                        reported.add(frozenset(cycle))
                        route = ' -> '.join(cycle + [current])
                        errors.append(Error(ErrorCode.POSE_RELATIVE_TO_CYCLE,
                            f"relative_to cycle detected at frame [{current}] in scope "
                            f"[{self.scope}]: {route}"))
                    doomed.update(walk)
                    break

                seen.add(current)
                walk.append(current)

                target = self.relative_to(current)
                if target is None:
                    # Dangling reference, reported during construction
                    doomed.update(walk)
                    break
                current = target
            else:
                settled.update(walk)

        return errors

    def _resolve_root_poses(self):
        """Composes every frame's pose in the root frame, parents first"""
        self._root_pose = {ROOT_FRAME: Pose.identity()}
        for parent, child in nx.dfs_edges(self.reverse(copy=False), ROOT_FRAME):
            self._root_pose[child] = self._root_pose[parent] @ self.edges[child, parent]['pose']

    # Traversal
    def chain(self, name: str) -> list[str]:
        """Frames visited from :code:`name` up to and including the root

        :param name: Frame name
        :type name: str

        :raises GraphInvalidError: If the graph failed validation
        :raises FrameNotFoundError: If :code:`name` is not a frame of the graph

        :return: Ordered frame names
        :rtype: list[str]
        """
        self._check_query(name)

        nodes = [name]
        while nodes[-1] != ROOT_FRAME:
            nodes.append(self.relative_to(nodes[-1]))
        return nodes

    def path(self, source: str, target: str) -> list[str]:
        """Shortest frame sequence connecting two frames through the pose tree

        :param source: Source frame name
        :type source: str

        :param target: Target frame name
        :type target: str

        :return: Ordered frame names from source to target
        :rtype: list[str]
        """
        self._check_query(source, target)
        return nx.shortest_path(self.to_undirected(as_view=True), source, target)

    # Pose resolution
    def pose(self, source: str, relative_to: str = ROOT_FRAME) -> Pose:
        """Resolves the pose of one frame expressed in another

        :param source: Frame whose pose is requested
        :type source: str

        :param relative_to: Frame the result is expressed in, defaults to the
            implicit root frame
        :type relative_to: str, optional

        :raises GraphInvalidError: If the graph failed validation
        :raises FrameNotFoundError: If either frame is not part of the graph

        :return: Pose of :code:`source` in :code:`relative_to`
        :rtype: Pose
        """
        self._check_query(source, relative_to)
        return self._root_pose[relative_to].inverse() @ self._root_pose[source]

    def _check_query(self, *names: str):
        if self.errors:
            raise GraphInvalidError(
                f"Frame graph of scope [{self.scope}] is invalid with "
                f"{len(self.errors)} error(s)", self.errors)

        for name in names:
            if name not in self._root_pose:
                raise FrameNotFoundError(
                    f"Frame [{name}] does not exist in scope [{self.scope}]", name)

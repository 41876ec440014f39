"""entity.py - Entity Builders"""
from __future__ import annotations

import typing as typ
from abc import ABC, abstractmethod

from sdf_dom.config import ROOT_FRAME, ParserConfig
from sdf_dom.element import Element
from sdf_dom.errors import Error, ErrorCode, Errors, FrameNotFoundError, GraphInvalidError
from sdf_dom.frame_graph import FrameGraph, FrameRecord
from sdf_dom.geometry import Pose

__all__ = ['Entity']


EntityT = typ.TypeVar('EntityT', bound='Entity')

class Entity(ABC):
    """Typed document entity built from a single :code:`Element`. Builders
    never raise on malformed input; every problem is returned as an error.

    Subclasses set :code:`kind` to the element name they consume.
    """
    kind: str = ''

    def __init__(self):
        """Initialize Entity"""
        self.name: str = ''
        self.raw_pose: Pose = Pose.identity()
        self.pose_frame: str = ROOT_FRAME
        self.element: Element | None = None

        # Frame graph of the enclosing scope, assigned by the owning entity
        self._scope_graph: FrameGraph | None = None

        # Same-name siblings left out of the child collections
        self._duplicates: list[Entity] = []

    @abstractmethod
    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        """Populates the entity from an element

        :param element: Element of kind :code:`self.kind`
        :type element: sdf_dom.element.Element

        :param config: Parser configuration, defaults to :code:`ParserConfig()`
        :type config: sdf_dom.config.ParserConfig | None, optional

        :return: Accumulated errors, empty on success
        :rtype: sdf_dom.errors.Errors
        """

    # Pose
    def pose(self, relative_to: str = ROOT_FRAME) -> Pose:
        """Resolves this entity's pose through the frame graph of its scope

        :param relative_to: Frame the result is expressed in, defaults to the
            scope's implicit root frame
        :type relative_to: str, optional

        :raises GraphInvalidError: If the scope graph is invalid or absent
        :raises FrameNotFoundError: If this entity is nameless or
            :code:`relative_to` is not in scope

        :return: Resolved pose
        :rtype: Pose
        """
        if self._scope_graph is None:
            if relative_to == self.pose_frame == ROOT_FRAME:
                return self.raw_pose
            raise GraphInvalidError(
                f"{self.kind.capitalize()} [{self.name}] is not attached to a frame graph")

        # The empty name is the scope root, not this entity
        if not self.name:
            raise FrameNotFoundError(
                f"Nameless {self.kind} has no frame in scope [{self._scope_graph.scope}]")

        return self._scope_graph.pose(self.name, relative_to)

    def frame_record(self) -> FrameRecord:
        line = self.element.line if self.element is not None else None
        return FrameRecord(self.name, self.raw_pose, self.pose_frame, self.kind, line)

    # Load helpers
    def _check_element(self, element: Element, errors: Errors) -> bool:
        """Records the element and reports a kind mismatch"""
        if element.name != self.kind:
            errors.append(Error(ErrorCode.ELEMENT_INCORRECT_TYPE,
                f"Attempting to load a {type(self).__name__}, but the provided "
                f"SDF element is a <{element.name}>."))
            return False

        self.element = element
        return True

    def _load_name(self, element: Element, errors: Errors) -> bool:
        self.name, _ = element.get('name', '', errors=errors)
        if not self.name:
            errors.append(Error(ErrorCode.ATTRIBUTE_MISSING,
                f"{self.kind} name is required but is missing."))
            return False
        return True

    def _load_pose(self, element: Element, config: ParserConfig, errors: Errors):
        """Reads :code:`<pose relative_to="...">x y z roll pitch yaw</pose>`"""
        pose_element = element.get_element('pose')
        if pose_element is None:
            return

        # <pose/> and <pose relative_to="x"/> keep the identity transform

        if pose_element.value:
            self.raw_pose, _ = element.get('pose', Pose.identity(), Pose, errors)

        frame, found = pose_element.get('relative_to', ROOT_FRAME)
        if not found and config.allow_legacy_frame_attribute:
            frame, _ = pose_element.get('frame', ROOT_FRAME)
        self.pose_frame = frame

    def _load_children(self, element: Element, cls: type[EntityT],
                       config: ParserConfig, errors: Errors,
                       in_graph: bool = False) -> list[EntityT]:
        """Builds every child element of kind :code:`cls.kind`. Children whose
        name repeats an earlier sibling of the same kind are not kept.

        :param in_graph: Children are frames of this entity's scope graph. A
            repeated name is then kept in :code:`_duplicates` and reported by
            the graph, defaults to False
        :type in_graph: bool, optional
        """
        children: list[EntityT] = []
        kept: dict[str, Element] = {}
        for child_element in element.elements(cls.kind):
            child = cls()
            errors.extend(child.load(child_element, config))

            if child.name and child.name in kept:
                if in_graph:
                    self._duplicates.append(child)
                else:
                    errors.append(Error(ErrorCode.DUPLICATE_NAME,
                        f"{cls.kind} with name[{child.name}]{child_element._location()} "
                        f"already exists{kept[child.name]._location()} in "
                        f"{self.kind} [{self.name}]."))
                continue

            kept[child.name] = child_element
            children.append(child)

        return children

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

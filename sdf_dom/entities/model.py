"""model.py - Models and Their Frame Graphs"""
from __future__ import annotations

import logging

from sdf_dom.config import ROOT_FRAME, WORLD_FRAME, ParserConfig
from sdf_dom.element import Element
from sdf_dom.entities.entity import Entity
from sdf_dom.entities.frame import Frame
from sdf_dom.entities.joint import Joint
from sdf_dom.entities.link import Link
from sdf_dom.errors import Error, ErrorCode, Errors, GraphInvalidError
from sdf_dom.frame_graph import FrameGraph
from sdf_dom.geometry import Pose
from sdf_dom.utilities import by_index, by_name

__all__ = ['Model']

logger = logging.getLogger(__name__)

class Model(Entity):
    """Collection of links, joints, explicit frames, and nested models.

    A model owns one frame graph over its direct children. Nested models are
    boundary nodes of that graph; their own children are resolved in the
    nested model's graph.
    """
    kind = 'model'

    def __init__(self):
        super().__init__()
        self.static: bool = False
        self.links: list[Link] = []
        self.joints: list[Joint] = []
        self.frames: list[Frame] = []
        self.models: list[Model] = []
        self.frame_graph: FrameGraph | None = None

    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        config = config if config is not None else ParserConfig()
        errors: Errors = []
        if not self._check_element(element, errors):
            return errors

        self._load_name(element, errors)
        self._load_pose(element, config, errors)
        self.static, _ = element.get('static', False, bool, errors)

        self._duplicates = []

        self.links = self._load_children(element, Link, config, errors, in_graph=True)
        self.joints = self._load_children(element, Joint, config, errors, in_graph=True)
        self.frames = self._load_children(element, Frame, config, errors, in_graph=True)
        self.models = self._load_children(element, Model, config, errors, in_graph=True)

        if not self.links and not self.models:
            errors.append(Error(ErrorCode.ELEMENT_MISSING,
                f"A model must have at least one link, but model [{self.name}] has none."))

        errors.extend(self._check_joints())

        self.frame_graph = FrameGraph.build(
            [e.frame_record() for e in (*self._frame_bearing(), *self._duplicates)],
            self.name)
        errors.extend(self.frame_graph.errors)
        for entity in self._frame_bearing():
            entity._scope_graph = self.frame_graph

        if errors:
            logger.warning("Model [%s] loaded with %d error(s)", self.name, len(errors))
        else:
            logger.debug("Loaded model [%s]: %d link(s), %d joint(s), %d frame(s), "
                         "%d nested model(s)", self.name, len(self.links),
                         len(self.joints), len(self.frames), len(self.models))
        return errors

    def _frame_bearing(self) -> list[Entity]:
        return [*self.links, *self.joints, *self.frames, *self.models]

    def _check_joints(self) -> Errors:
        """Joint parent and child names must refer to links of this model"""
        errors: Errors = []
        for joint in self.joints:
            parent, child = joint.parent_link_name, joint.child_link_name
            if parent and parent != WORLD_FRAME and not self.link_name_exists(parent):
                errors.append(Error(ErrorCode.JOINT_PARENT_LINK_INVALID,
                    f"parent link with name[{parent}] specified by joint with "
                    f"name[{joint.name}] not found in model with name[{self.name}]."))
            if child and not self.link_name_exists(child):
                errors.append(Error(ErrorCode.JOINT_CHILD_LINK_INVALID,
                    f"child link with name[{child}] specified by joint with "
                    f"name[{joint.name}] not found in model with name[{self.name}]."))
            if parent and parent == child:
                errors.append(Error(ErrorCode.JOINT_PARENT_SAME_AS_CHILD,
                    f"joint with name[{joint.name}] in model with name[{self.name}] "
                    f"must specify different link names for parent and child, "
                    f"while [{child}] was specified for both."))
        return errors

    # Pose
    def pose(self, relative_to: str | None = None) -> Pose:
        """Returns the declared model pose, or resolves it in the enclosing
        scope when :code:`relative_to` is given

        :param relative_to: Frame of the enclosing scope, defaults to None
        :type relative_to: str | None, optional

        :return: Model pose
        :rtype: Pose
        """
        if relative_to is None:
            return self.raw_pose
        return super().pose(relative_to)

    def frame_pose(self, name: str, relative_to: str = ROOT_FRAME) -> Pose:
        """Resolves the pose of any frame in this model's scope

        :param name: Link, joint, frame, or nested model name
        :type name: str

        :param relative_to: Frame the result is expressed in, defaults to the
            model frame
        :type relative_to: str, optional

        :raises GraphInvalidError: If the model is not loaded or its frame graph
            failed validation
        :raises FrameNotFoundError: If either frame is not in scope

        :return: Resolved pose
        :rtype: Pose
        """
        if self.frame_graph is None:
            raise GraphInvalidError(f"Model [{self.name}] has not been loaded")
        return self.frame_graph.pose(name, relative_to)

    # Links
    def link_count(self) -> int:
        return len(self.links)

    def link_by_index(self, index: int) -> Link | None:
        return by_index(self.links, index)

    def link_by_name(self, name: str) -> Link | None:
        return by_name(self.links, name)

    def link_name_exists(self, name: str) -> bool:
        return self.link_by_name(name) is not None

    # Joints
    def joint_count(self) -> int:
        return len(self.joints)

    def joint_by_index(self, index: int) -> Joint | None:
        return by_index(self.joints, index)

    def joint_by_name(self, name: str) -> Joint | None:
        return by_name(self.joints, name)

    def joint_name_exists(self, name: str) -> bool:
        return self.joint_by_name(name) is not None

    # Frames
    def frame_count(self) -> int:
        return len(self.frames)

    def frame_by_index(self, index: int) -> Frame | None:
        return by_index(self.frames, index)

    def frame_by_name(self, name: str) -> Frame | None:
        return by_name(self.frames, name)

    def frame_name_exists(self, name: str) -> bool:
        return self.frame_by_name(name) is not None

    # Nested models
    def model_count(self) -> int:
        return len(self.models)

    def model_by_index(self, index: int) -> Model | None:
        return by_index(self.models, index)

    def model_by_name(self, name: str) -> Model | None:
        return by_name(self.models, name)

    def model_name_exists(self, name: str) -> bool:
        return self.model_by_name(name) is not None

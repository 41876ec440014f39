"""joint.py - Joints"""
from __future__ import annotations

import logging

import numpy as np

from sdf_dom.config import ParserConfig
from sdf_dom.element import Element
from sdf_dom.entities.entity import Entity
from sdf_dom.errors import Error, ErrorCode, Errors

__all__ = ['JOINT_TYPES', 'JointAxis', 'Joint']

logger = logging.getLogger(__name__)

JOINT_TYPES = ('ball', 'continuous', 'fixed', 'gearbox', 'prismatic',
               'revolute', 'revolute2', 'screw', 'universal')

class JointAxis():
    """Joint axis of motion

    :param xyz: Unit direction vector, defaults to :code:`[0, 0, 1]`
    :type xyz: numpy.ndarray, optional
    """
    def __init__(self, xyz: np.ndarray | None = None):
        self.xyz = xyz if xyz is not None else np.array([0., 0., 1.])

    def load(self, element: Element, errors: Errors):
        xyz, found = element.get('xyz', None, np.ndarray, errors)
        if not found or xyz is None:
            return

        norm = np.linalg.norm(xyz)
        if norm == 0:
            errors.append(Error(ErrorCode.ELEMENT_INVALID,
                'The norm of the xyz vector cannot be zero'))
            return
        self.xyz = xyz / norm

class Joint(Entity):
    """Kinematic connection between a parent and a child link. The link names
    are kinematic metadata; they never add edges to the frame graph."""
    kind = 'joint'

    def __init__(self):
        super().__init__()
        self.type: str = ''
        self.parent_link_name: str = ''
        self.child_link_name: str = ''
        self.axis: JointAxis | None = None

    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        config = config if config is not None else ParserConfig()
        errors: Errors = []
        if not self._check_element(element, errors):
            return errors

        self._load_name(element, errors)

        self.type, found = element.get('type', '')
        if not found or not self.type:
            errors.append(Error(ErrorCode.ATTRIBUTE_MISSING,
                f"joint [{self.name}] type is required but is missing."))
        elif self.type not in JOINT_TYPES:
            errors.append(Error(ErrorCode.ATTRIBUTE_INVALID,
                f"joint [{self.name}] has unknown type [{self.type}]."))

        for key in ('parent', 'child'):
            value, found = element.get(key, '')
            if not found or not value:
                errors.append(Error(ErrorCode.ELEMENT_MISSING,
                    f"joint [{self.name}] is missing a <{key}> element."))
            setattr(self, f"{key}_link_name", value)

        axis = element.get_element('axis')
        if axis is not None:
            self.axis = JointAxis()
            self.axis.load(axis, errors)

        self._load_pose(element, config, errors)

        logger.debug("Loaded %s joint [%s] from [%s] to [%s]", self.type, self.name,
                     self.parent_link_name, self.child_link_name)
        return errors

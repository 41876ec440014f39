"""frame.py - Explicit Reference Frames"""
from __future__ import annotations

from sdf_dom.config import ParserConfig
from sdf_dom.element import Element
from sdf_dom.entities.entity import Entity
from sdf_dom.errors import Errors

__all__ = ['Frame']

class Frame(Entity):
    """Named reference frame without geometry. Shares the frame namespace of
    its scope with links, joints, and nested models.

    :code:`attached_to` names the entity the frame is rigidly attached to; it is
    kinematic metadata and does not change how the pose is resolved.
    """
    kind = 'frame'

    def __init__(self):
        super().__init__()
        self.attached_to: str = ''

    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        config = config if config is not None else ParserConfig()
        errors: Errors = []
        if not self._check_element(element, errors):
            return errors

        self._load_name(element, errors)
        self.attached_to, _ = element.get('attached_to', '', errors=errors)
        self._load_pose(element, config, errors)

        return errors

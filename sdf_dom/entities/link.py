"""link.py - Links and Attached Geometry"""
from __future__ import annotations

import logging

from sdf_dom.config import ParserConfig
from sdf_dom.element import Element
from sdf_dom.entities.entity import Entity
from sdf_dom.errors import Error, ErrorCode, Errors
from sdf_dom.utilities import by_index, by_name

__all__ = ['Geometry', 'Visual', 'Collision', 'Link']

logger = logging.getLogger(__name__)

GEOMETRY_TYPES = ('empty', 'box', 'cylinder', 'sphere', 'capsule', 'ellipsoid',
                  'plane', 'mesh', 'heightmap', 'image', 'polyline')

# %% Geometry
class Geometry(Entity):
    """Shape attached to a link. Poses are declared relative to the link and
    take no part in frame graph resolution."""
    def __init__(self):
        super().__init__()
        self.geometry_type: str = 'empty'

    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        config = config if config is not None else ParserConfig()
        errors: Errors = []
        if not self._check_element(element, errors):
            return errors

        self._load_name(element, errors)
        self._load_pose(element, config, errors)

        geometry = element.get_element('geometry')
        if geometry is None:
            errors.append(Error(ErrorCode.ELEMENT_MISSING,
                f"{self.kind} [{self.name}] is missing a <geometry> element."))
        else:
            shapes = geometry.elements()
            if shapes and shapes[0].name in GEOMETRY_TYPES:
                self.geometry_type = shapes[0].name
            elif shapes:
                errors.append(Error(ErrorCode.ELEMENT_INVALID,
                    f"{self.kind} [{self.name}] has unknown geometry <{shapes[0].name}>."))

        return errors

class Visual(Geometry):
    kind = 'visual'

class Collision(Geometry):
    kind = 'collision'

# %% Link
class Link(Entity):
    """Rigid body of a model with its own frame and attached geometry"""
    kind = 'link'

    def __init__(self):
        super().__init__()
        self.visuals: list[Visual] = []
        self.collisions: list[Collision] = []

    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        config = config if config is not None else ParserConfig()
        errors: Errors = []
        if not self._check_element(element, errors):
            return errors

        self._load_name(element, errors)
        self._load_pose(element, config, errors)

        self.visuals = self._load_children(element, Visual, config, errors)
        self.collisions = self._load_children(element, Collision, config, errors)

        logger.debug("Loaded link [%s] with %d visual(s) and %d collision(s)",
                     self.name, len(self.visuals), len(self.collisions))
        return errors

    # Visuals
    def visual_count(self) -> int:
        return len(self.visuals)

    def visual_by_index(self, index: int) -> Visual | None:
        return by_index(self.visuals, index)

    def visual_by_name(self, name: str) -> Visual | None:
        return by_name(self.visuals, name)

    def visual_name_exists(self, name: str) -> bool:
        return self.visual_by_name(name) is not None

    # Collisions
    def collision_count(self) -> int:
        return len(self.collisions)

    def collision_by_index(self, index: int) -> Collision | None:
        return by_index(self.collisions, index)

    def collision_by_name(self, name: str) -> Collision | None:
        return by_name(self.collisions, name)

    def collision_name_exists(self, name: str) -> bool:
        return self.collision_by_name(name) is not None

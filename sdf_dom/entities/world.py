"""world.py - Worlds"""
from __future__ import annotations

import logging

import numpy as np

from sdf_dom.config import ROOT_FRAME, ParserConfig
from sdf_dom.element import Element
from sdf_dom.entities.entity import Entity
from sdf_dom.entities.frame import Frame
from sdf_dom.entities.model import Model
from sdf_dom.errors import Errors, GraphInvalidError
from sdf_dom.frame_graph import FrameGraph
from sdf_dom.geometry import Pose
from sdf_dom.utilities import by_index, by_name

__all__ = ['World']

logger = logging.getLogger(__name__)

class World(Entity):
    """Collection of models and explicit frames. The world frame is the
    implicit root of the world's frame graph."""
    kind = 'world'

    def __init__(self):
        super().__init__()
        self.gravity: np.ndarray = np.array([0., 0., -9.8])
        self.models: list[Model] = []
        self.frames: list[Frame] = []
        self.frame_graph: FrameGraph | None = None

    def load(self, element: Element, config: ParserConfig | None = None) -> Errors:
        config = config if config is not None else ParserConfig()
        errors: Errors = []
        if not self._check_element(element, errors):
            return errors

        self._load_name(element, errors)
        self.gravity, _ = element.get('gravity', self.gravity, np.ndarray, errors)

        self._duplicates = []

        self.models = self._load_children(element, Model, config, errors, in_graph=True)
        self.frames = self._load_children(element, Frame, config, errors, in_graph=True)

        self.frame_graph = FrameGraph.build(
            [e.frame_record() for e in (*self.models, *self.frames, *self._duplicates)],
            self.name)
        errors.extend(self.frame_graph.errors)
        for entity in (*self.models, *self.frames):
            entity._scope_graph = self.frame_graph

        logger.debug("Loaded world [%s] with %d model(s)", self.name, len(self.models))
        return errors

    def frame_pose(self, name: str, relative_to: str = ROOT_FRAME) -> Pose:
        """Resolves the pose of a model or frame in the world scope"""
        if self.frame_graph is None:
            raise GraphInvalidError(f"World [{self.name}] has not been loaded")
        return self.frame_graph.pose(name, relative_to)

    # Models
    def model_count(self) -> int:
        return len(self.models)

    def model_by_index(self, index: int) -> Model | None:
        return by_index(self.models, index)

    def model_by_name(self, name: str) -> Model | None:
        return by_name(self.models, name)

    def model_name_exists(self, name: str) -> bool:
        return self.model_by_name(name) is not None

    # Frames
    def frame_count(self) -> int:
        return len(self.frames)

    def frame_by_index(self, index: int) -> Frame | None:
        return by_index(self.frames, index)

    def frame_by_name(self, name: str) -> Frame | None:
        return by_name(self.frames, name)

    def frame_name_exists(self, name: str) -> bool:
        return self.frame_by_name(name) is not None

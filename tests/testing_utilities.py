"""Testing Utility Functions"""
from pathlib import Path

import numpy as np

from sdf_dom.element import read_string
from sdf_dom.entities.model import Model
from sdf_dom.geometry import Pose

SDF_PATH = Path(__file__).parent / 'sdf'

def random_uniform(scale: float, size: int) -> np.ndarray:
    """Generates uniform random vectors between :math:`[-s, s)`

    :return: Scaled uniform randoms
    :rtype: np.ndarray
    """
    return scale * np.random.uniform(-1,1,(size,))

def random_pose() -> Pose:
    """Generates random Pose

    :return: Pose with position in :math:`[-10, 10)` and angles in :math:`[-\\pi, \\pi)`
    :rtype: Pose
    """
    return Pose.from_rpy(random_uniform(10,3), random_uniform(np.pi,3))

def xyz_pose(x: float, y: float, z: float,
             roll: float = 0, pitch: float = 0, yaw: float = 0) -> Pose:
    return Pose.from_rpy([x,y,z], [roll,pitch,yaw])

def pose_text(pose: Pose) -> str:
    """Formats pose with full precision for embedding in markup"""
    return ' '.join(repr(float(v)) for v in (*pose.position, *pose.rpy))

def sdf_file(name: str) -> str:
    return str(SDF_PATH / name)

def load_model(body: str, name: str = 'test_model') -> tuple[Model, list]:
    """Builds a model from the markup of its children

    :return: Model and load errors
    :rtype: tuple[Model, list]
    """
    model = Model()
    errors = model.load(read_string(f'<model name="{name}">{body}</model>'))
    return model, errors

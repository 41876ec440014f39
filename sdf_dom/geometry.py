"""geometry.py - Rigid Body Poses"""
from __future__ import annotations

import numpy.typing as npt

import numpy as np

import scipy.spatial.transform as sptl

from sdf_dom.config import POSE_TOLERANCE
from sdf_dom.utilities import parse_vector

__all__ = ['Pose']

# SDF roll, pitch, yaw are fixed axis rotations about X, then Y, then Z
RPY_SEQUENCE = 'xyz'

# %% Poses
class Pose():
    """Immutable rigid body transform between two reference frames. Wraps a
    :code:`scipy.spatial.transform.Rotation` object and a translation vector.

    Composition follows homogeneous matrix order, so :code:`(A @ B)` maps
    coordinates expressed in frame B into frame A's base.

    :param position: Frame origin position in base frame, defaults to :code:`numpy.zeros(3)`
    :type position: numpy.typing.ArrayLike, optional

    :param rotation: Frame orientation in base frame, defaults to identity
    :type rotation: scipy.spatial.transform.Rotation, optional
    """
    __slots__ = ('_position', '_rotation')

    def __init__(self,
            position: npt.ArrayLike | None = None,  # X, Y, Z
            rotation: sptl.Rotation | None = None):
        """Initialize Pose"""
        position = position if position is not None else np.zeros(3)
        rotation = rotation if rotation is not None else sptl.Rotation.identity()

        self._position = np.array(position, dtype=np.double)
        if self._position.shape != (3,):
            raise ValueError('Pose position must have three components')

        self._rotation = rotation

    # Constructors
    @classmethod
    def identity(cls) -> Pose:
        """Returns the identity pose"""
        return cls()

    @classmethod
    def from_rpy(cls, position: npt.ArrayLike, rpy: npt.ArrayLike) -> Pose:
        """Creates pose from position and fixed axis roll, pitch, yaw angles

        :param position: Frame origin position in base frame
        :type position: numpy.typing.ArrayLike

        :param rpy: Roll (X), Pitch (Y), Yaw (Z) in radians
        :type rpy: numpy.typing.ArrayLike

        :return: Pose
        :rtype: Pose
        """
        return cls(position, sptl.Rotation.from_euler(RPY_SEQUENCE, rpy))

    @classmethod
    def from_string(cls, value: str) -> Pose:
        """Parses SDF pose text :code:`'x y z roll pitch yaw'`

        :param value: Pose text
        :type value: str

        :raises ValueError: If the text is not six finite numbers

        :return: Pose
        :rtype: Pose
        """
        vector = parse_vector(value, 6)
        return cls.from_rpy(vector[:3], vector[3:])

    @classmethod
    def from_matrix(cls, matrix: npt.ArrayLike) -> Pose:
        """Creates pose from a 4x4 homogeneous transformation matrix"""
        matrix = np.asarray(matrix, dtype=np.double)
        return cls(matrix[:3, 3], sptl.Rotation.from_matrix(matrix[:3, :3]))

    # Accessors
    @property
    def position(self) -> np.ndarray:
        """Read-only translation vector"""
        view = self._position.view()
        view.setflags(write=False)
        return view

    @property
    def rotation(self) -> sptl.Rotation:
        return self._rotation

    @property
    def rpy(self) -> np.ndarray:
        """Fixed axis roll, pitch, yaw angles in radians"""
        return self._rotation.as_euler(RPY_SEQUENCE)

    def as_matrix(self) -> np.ndarray:
        """Returns the 4x4 homogeneous transformation matrix"""
        matrix = np.eye(4)
        matrix[:3, :3] = self._rotation.as_matrix()
        matrix[:3, 3] = self._position
        return matrix

    # Operators
    def compose(self, other: Pose) -> Pose:
        """Composes two poses, :code:`self` applied after :code:`other`

        :param other: Pose of a follower frame expressed in this pose's frame
        :type other: Pose

        :return: Pose of the follower frame expressed in this pose's base frame
        :rtype: Pose
        """
        return Pose(self._position + self._rotation.apply(other._position),
                    self._rotation * other.rotation)

    __matmul__ = compose

    def inverse(self) -> Pose:
        """Returns the inverse pose"""
        inv = self._rotation.inv()
        return Pose(-inv.apply(self._position), inv)

    def transform(self, point: npt.ArrayLike) -> np.ndarray:
        """Maps point(s) from the follower frame into the base frame

        :param point: Point position vector(s) in follower frame
        :type point: numpy.typing.ArrayLike

        :return: Point position vector(s) in base frame
        :rtype: numpy.ndarray
        """
        return self._rotation.apply(np.array(point, dtype=np.double)) + self._position

    # Comparison
    def isclose(self, other: Pose, atol: float = POSE_TOLERANCE) -> bool:
        """Compares poses within an absolute tolerance. Rotations are compared
        through their matrices so that :math:`q` and :math:`-q` are equal.

        :param other: Pose to compare against
        :type other: Pose

        :param atol: Absolute tolerance, defaults to :code:`POSE_TOLERANCE`
        :type atol: float, optional

        :return: Comparison result
        :rtype: bool
        """
        return bool(np.allclose(self._position, other._position, rtol=0, atol=atol)
                    and np.allclose(self._rotation.as_matrix(),
                                    other.rotation.as_matrix(), rtol=0, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pose):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None

    def __str__(self) -> str:
        x, y, z = self._position
        roll, pitch, yaw = self.rpy
        return f"{x:g} {y:g} {z:g} {roll:g} {pitch:g} {yaw:g}"

    def __repr__(self) -> str:
        return f"Pose({self})"

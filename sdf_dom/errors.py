"""errors.py - Error Codes, Records, and Pose Query Exceptions"""
from __future__ import annotations

import enum
from dataclasses import dataclass

__all__ = ['ErrorCode', 'Error', 'Errors',
           'PoseError', 'GraphInvalidError', 'FrameNotFoundError']

class ErrorCode(enum.Enum):
    """Diagnostic codes reported while loading and querying documents"""
    ELEMENT_INCORRECT_TYPE = 'ELEMENT_INCORRECT_TYPE'
    ELEMENT_MISSING = 'ELEMENT_MISSING'
    ELEMENT_INVALID = 'ELEMENT_INVALID'
    ATTRIBUTE_MISSING = 'ATTRIBUTE_MISSING'
    ATTRIBUTE_INVALID = 'ATTRIBUTE_INVALID'
    DUPLICATE_NAME = 'DUPLICATE_NAME'
    POSE_RELATIVE_TO_INVALID = 'POSE_RELATIVE_TO_INVALID'
    POSE_RELATIVE_TO_CYCLE = 'POSE_RELATIVE_TO_CYCLE'
    JOINT_PARENT_LINK_INVALID = 'JOINT_PARENT_LINK_INVALID'
    JOINT_CHILD_LINK_INVALID = 'JOINT_CHILD_LINK_INVALID'
    JOINT_PARENT_SAME_AS_CHILD = 'JOINT_PARENT_SAME_AS_CHILD'
    FRAME_NOT_FOUND = 'FRAME_NOT_FOUND'
    GRAPH_INVALID = 'GRAPH_INVALID'
    FILE_READ = 'FILE_READ'
    PARSING_ERROR = 'PARSING_ERROR'

@dataclass(frozen=True)
class Error:
    """Single load or validation diagnostic

    :param code: Error code
    :type code: ErrorCode

    :param message: Human readable description
    :type message: str
    """
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"Error Code {self.code.value}: Msg: {self.message}"

# Ordered, possibly empty; callers test for emptiness
Errors = list[Error]

# %% Pose query exceptions
class PoseError(Exception):
    """Base class for pose queries that cannot produce a transform"""
    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class GraphInvalidError(PoseError):
    """Pose query against a frame graph with outstanding validation errors"""
    code = ErrorCode.GRAPH_INVALID

    def __init__(self, message: str, errors: Errors | None = None):
        super().__init__(message)
        self.errors: Errors = list(errors) if errors else []

class FrameNotFoundError(PoseError):
    """Pose query naming a frame absent from the frame graph"""
    code = ErrorCode.FRAME_NOT_FOUND

    def __init__(self, message: str, name: str = ''):
        super().__init__(message)
        self.name = name

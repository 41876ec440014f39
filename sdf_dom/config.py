"""config.py - Parser Configuration and Global Constants"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = ['ROOT_FRAME', 'WORLD_FRAME', 'SUPPORTED_SDF_VERSIONS', 'POSE_TOLERANCE',
           'SDF_PATH_ENV', 'ParserConfig']

# Implicit root frame of every scope
ROOT_FRAME = ''

# Reserved joint parent name referring to the world
WORLD_FRAME = 'world'

SUPPORTED_SDF_VERSIONS = ('1.4', '1.5', '1.6', '1.7')

# Absolute tolerance used by Pose equality
POSE_TOLERANCE = 1e-9

SDF_PATH_ENV = 'SDF_PATH'

def _env_find_file_paths() -> list[str]:
    """Search directories listed in the :code:`SDF_PATH` environment variable"""
    value = os.environ.get(SDF_PATH_ENV, '')
    return [p for p in value.split(os.pathsep) if p]

@dataclass
class ParserConfig:
    """Document loading configuration

    :param find_file_paths: Directories searched for relative document paths,
        defaults to the :code:`SDF_PATH` environment variable
    :type find_file_paths: list[str], optional

    :param allow_legacy_frame_attribute: Accept :code:`<pose frame="...">` as an
        alias of :code:`relative_to`, defaults to True
    :type allow_legacy_frame_attribute: bool, optional
    """
    find_file_paths: list[str] = field(default_factory=_env_find_file_paths)
    allow_legacy_frame_attribute: bool = True

    def find_file(self, path: str | os.PathLike) -> Path | None:
        """Resolves a document path, searching :code:`find_file_paths` for
        relative paths that do not exist in the working directory

        :param path: Document path
        :type path: str | os.PathLike

        :return: Existing file path or :code:`None`
        :rtype: pathlib.Path | None
        """
        candidate = Path(path)
        if candidate.is_file():
            return candidate
        if candidate.is_absolute():
            return None

        for directory in self.find_file_paths:
            resolved = Path(directory) / candidate
            if resolved.is_file():
                return resolved

        return None

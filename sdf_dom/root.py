"""root.py - Document Root Loader"""
from __future__ import annotations

import logging
import os

from lxml import etree

from sdf_dom.config import SUPPORTED_SDF_VERSIONS, ParserConfig
from sdf_dom.element import Element, read_file, read_string
from sdf_dom.entities.model import Model
from sdf_dom.entities.world import World
from sdf_dom.errors import Error, ErrorCode, Errors
from sdf_dom.utilities import by_index, by_name

__all__ = ['Root']

logger = logging.getLogger(__name__)

class Root():
    """Top level of a loaded document, holding at most one world or one model

    :param config: Parser configuration, defaults to :code:`ParserConfig()`
    :type config: sdf_dom.config.ParserConfig | None, optional
    """
    kind = 'sdf'

    def __init__(self, config: ParserConfig | None = None):
        """Initialize Root"""
        self.config = config if config is not None else ParserConfig()
        self.version: str = ''
        self.worlds: list[World] = []
        self.models: list[Model] = []
        self.errors: Errors = []

    # Loading
    def load(self, path: str | os.PathLike) -> Errors:
        """Reads, builds, and validates a document file

        :param path: Document path, searched in :code:`config.find_file_paths`
            when relative and not found
        :type path: str | os.PathLike

        :return: Accumulated errors, empty on success
        :rtype: sdf_dom.errors.Errors
        """
        resolved = self.config.find_file(path)
        if resolved is None:
            return self._finish([Error(ErrorCode.FILE_READ,
                f"Unable to find or open file [{os.fspath(path)}]")], path)

        try:
            element = read_file(resolved)
        except etree.XMLSyntaxError as err:
            return self._finish([Error(ErrorCode.PARSING_ERROR,
                f"Unable to parse file [{resolved}]: {err}")], path)
        except OSError as err:
            return self._finish([Error(ErrorCode.FILE_READ,
                f"Unable to read file [{resolved}]: {err}")], path)

        return self._finish(self.load_element(element), path)

    def load_string(self, text: str) -> Errors:
        """Reads, builds, and validates a document from markup text"""
        try:
            element = read_string(text)
        except etree.XMLSyntaxError as err:
            return self._finish([Error(ErrorCode.PARSING_ERROR,
                f"Unable to parse string: {err}")], '<string>')

        return self._finish(self.load_element(element), '<string>')

    def load_element(self, element: Element) -> Errors:
        """Builds the world or model held by an :code:`<sdf>` element

        :param element: Document root element
        :type element: sdf_dom.element.Element

        :return: Accumulated errors, empty on success
        :rtype: sdf_dom.errors.Errors
        """
        self.version, self.worlds, self.models = '', [], []
        errors: Errors = []

        if element.name != self.kind:
            errors.append(Error(ErrorCode.ELEMENT_INCORRECT_TYPE,
                f"Attempting to load a Root, but the provided SDF element is "
                f"a <{element.name}>."))
            self.errors = errors
            return errors

        self.version, found = element.get('version', '')
        if not found or not self.version:
            errors.append(Error(ErrorCode.ATTRIBUTE_MISSING,
                "SDF version attribute[version] is required but is missing."))
        elif self.version not in SUPPORTED_SDF_VERSIONS:
            errors.append(Error(ErrorCode.ATTRIBUTE_INVALID,
                f"SDF version [{self.version}] is not one of "
                f"{', '.join(SUPPORTED_SDF_VERSIONS)}."))

        for child in element.elements():
            if child.name not in (World.kind, Model.kind):
                continue

            if self.worlds or self.models:
                errors.append(Error(ErrorCode.ELEMENT_INVALID,
                    f"A document holds at most one <world> or one <model>; "
                    f"ignoring <{child.name}> [{child.attributes.get('name', '')}]."))
                continue

            entity = World() if child.name == World.kind else Model()
            errors.extend(entity.load(child, self.config))
            (self.worlds if isinstance(entity, World) else self.models).append(entity)

        self.errors = errors
        return errors

    def _finish(self, errors: Errors, source) -> Errors:
        self.errors = errors
        if errors:
            logger.warning("Loaded [%s] with %d error(s)", os.fspath(source), len(errors))
            for error in errors:
                logger.debug("%s", error)
        else:
            logger.info("Loaded [%s]", os.fspath(source))
        return errors

    # Worlds
    @property
    def world(self) -> World | None:
        return self.world_by_index(0)

    def world_count(self) -> int:
        return len(self.worlds)

    def world_by_index(self, index: int) -> World | None:
        return by_index(self.worlds, index)

    def world_by_name(self, name: str) -> World | None:
        return by_name(self.worlds, name)

    def world_name_exists(self, name: str) -> bool:
        return self.world_by_name(name) is not None

    # Models
    @property
    def model(self) -> Model | None:
        return self.model_by_index(0)

    def model_count(self) -> int:
        return len(self.models)

    def model_by_index(self, index: int) -> Model | None:
        return by_index(self.models, index)

    def model_by_name(self, name: str) -> Model | None:
        return by_name(self.models, name)

    def model_name_exists(self, name: str) -> bool:
        return self.model_by_name(name) is not None

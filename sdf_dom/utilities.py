"""utilities.py - Assorted Helper Functions"""
import typing as typ

import numpy as np

__all__ = ['parse_vector', 'by_index', 'by_name']

def parse_vector(value: str, size: int) -> np.ndarray:
    """Parses whitespace delimited numeric text into a fixed size vector

    :param value: Whitespace delimited numbers, e.g. :code:`'0 0 1'`
    :type value: str

    :param size: Expected number of components
    :type size: int

    :raises ValueError: If the text is not numeric or has the wrong length

    :return: Parsed vector
    :rtype: numpy.ndarray
    """
    tokens = value.split()
    if len(tokens) != size:
        raise ValueError(f"Expected {size} values but found {len(tokens)} in '{value}'")

    vector = np.array([float(t) for t in tokens], dtype=np.double)
    if not np.all(np.isfinite(vector)):
        raise ValueError(f"Non-finite value in '{value}'")

    return vector

def by_index(col: typ.Sequence, index: int):
    """Returns item at index or :code:`None` when out of range"""
    if 0 <= index < len(col):
        return col[index]
    return None

def by_name(col: typ.Iterable, name: str):
    """Returns first item with matching name or :code:`None`"""
    for ele in col:
        if ele.name == name:
            return ele
    return None

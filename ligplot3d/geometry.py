"""
Geometry helpers --- :mod:`ligplot3d.geometry`
==============================================

Small vector kernel used by ring perception and by the interaction detectors.
Points and vectors are anything that :func:`numpy.asarray` turns into an array of
3 floats.
"""

from math import acos, degrees
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

_EPSILON = 1e-12
_Z_AXIS = (0.0, 0.0, 1.0)


def distance(a: "ArrayLike", b: "ArrayLike") -> float:
    """Euclidean distance between two points"""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def distance_squared(a: "ArrayLike", b: "ArrayLike") -> float:
    """Squared euclidean distance between two points"""
    delta = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.dot(delta, delta))


def centroid(points: "ArrayLike") -> "NDArray[np.float64]":
    """Centroid for an array of XYZ coordinates

    Returns the origin when ``points`` is empty. Callers that need a meaningful
    center must check for an empty input themselves.
    """
    coords = np.asarray(points, dtype=float).reshape(-1, 3)
    if len(coords) == 0:
        return np.zeros(3)
    return coords.mean(axis=0)


def normalize(vector: "ArrayLike") -> "NDArray[np.float64]":
    """Unit vector with the same direction, or the null vector if ``vector`` has
    no length"""
    v = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(v)
    if norm < _EPSILON:
        return np.zeros(3)
    return v / norm


def is_null_vector(vector: "ArrayLike") -> bool:
    return bool(np.linalg.norm(np.asarray(vector, dtype=float)) < _EPSILON)


def plane_normal(points: "ArrayLike") -> "NDArray[np.float64]":
    """Approximate normal vector of the plane going through an ordered set of
    points

    Parameters
    ----------
    points : array_like
        Ordered XYZ coordinates, e.g. the atoms of a ring in cycle order.

    Returns
    -------
    normal : numpy.ndarray
        Unit vector obtained from the cross product of the edges going from the
        first point to the middle and last points. The null vector is returned
        for collinear or coincident points, and a fixed unit vector along the Z
        axis when less than 3 points are given.

    Notes
    -----
    The sign of the normal depends on the order of the points and carries no
    meaning, use :func:`angle_between_vectors` to compare orientations.
    A null normal means the orientation is undefined: any angle-based test
    involving it must be considered as failed.
    """
    coords = np.asarray(points, dtype=float).reshape(-1, 3)
    if len(coords) < 3:
        return np.array(_Z_AXIS)
    first = coords[0]
    middle = coords[len(coords) // 2]
    last = coords[-1]
    return normalize(np.cross(middle - first, last - first))


def angle_between_vectors(v1: "ArrayLike", v2: "ArrayLike") -> float:
    """Acute angle between two directions, in degrees

    The absolute value of the cosine is used so that the result is always
    between 0 and 90 degrees, regardless of the sign of each vector. Returns 0 if
    one of the vectors has no length.
    """
    a = np.asarray(v1, dtype=float)
    b = np.asarray(v2, dtype=float)
    norms = np.linalg.norm(a) * np.linalg.norm(b)
    if norms < _EPSILON:
        return 0.0
    cos_theta = min(1.0, abs(float(np.dot(a, b))) / norms)
    return degrees(acos(cos_theta))


def angle_at_vertex(a: "ArrayLike", b: "ArrayLike", c: "ArrayLike") -> float:
    """Angle ``a-b-c`` at the vertex ``b``, in degrees (0 to 180)"""
    vertex = np.asarray(b, dtype=float)
    ba = np.asarray(a, dtype=float) - vertex
    bc = np.asarray(c, dtype=float) - vertex
    norms = np.linalg.norm(ba) * np.linalg.norm(bc)
    if norms < _EPSILON:
        return 0.0
    # floating point errors can push the cosine slightly outside [-1, 1]
    cos_theta = max(-1.0, min(1.0, float(np.dot(ba, bc)) / norms))
    return degrees(acos(cos_theta))


def angle_between_limits(angle: float, min_angle: float, max_angle: float) -> bool:
    """Checks if an angle value (in degrees) is between min and max angles"""
    return min_angle <= angle <= max_angle

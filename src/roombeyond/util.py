""" Utility methods broadly applicable across the codebase. """

from __future__ import annotations

import sys
import math
import logging
import pdb
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)

VEC_EPS = 1e-9

Vec3Like = Union[Sequence[float], npt.NDArray[np.float64]]

def fullname(o:Any) -> str:
    # from https://stackoverflow.com/a/2020083/553580
    # o.__module__ + "." + o.__class__.__qualname__ is an example in
    # this context of H.L. Mencken's "neat, plausible, and wrong."
    # Python makes no guarantees as to whether the __module__ special
    # attribute is defined, so we take a more circumspect approach.
    # Alas, the module name is explicitly excluded from __qualname__
    # in Python 3.

    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__  # Avoid reporting __builtin__
    else:
        return module + '.' + klass.__qualname__

def vec3(v:Vec3Like) -> npt.NDArray[np.float64]:
    """ Coerces v to a length 3 float array, raising ValueError otherwise. """
    a = np.array(v, dtype=np.float64)
    if a.shape != (3,):
        raise ValueError(f'expected a 3d vector, got shape {a.shape}')
    return a

def either_nan_or_inf(v:npt.NDArray[np.float64]) -> bool:
    return bool(np.any(np.isnan(v)) or np.any(np.isinf(v)))

def magnitude(v:npt.NDArray[np.float64]) -> float:
    return float(np.linalg.norm(v))

def distance(s:npt.NDArray[np.float64], t:npt.NDArray[np.float64]) -> float:
    return magnitude(s - t)

def normalize(v:npt.NDArray[np.float64]) -> Optional[npt.NDArray[np.float64]]:
    """ unit vector in the direction of v or None if v is (nearly) zero. """
    m = magnitude(v)
    if m < VEC_EPS or math.isnan(m):
        return None
    return v / m

def camera_basis(forward:npt.NDArray[np.float64], world_up:npt.NDArray[np.float64]) -> Optional[Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]]:
    """ Orthonormal (forward, right, up) camera axes.

    right is forward x world_up, so with world_up = +y and forward = -z, right
    is +x and up is +y (the usual right handed, y up camera). If forward is
    parallel to world_up we pick the world axis least aligned with forward to
    build right instead. Returns None if forward is zero or not finite.
    """

    if either_nan_or_inf(forward):
        return None
    f = normalize(forward)
    if f is None:
        return None

    right = normalize(np.cross(f, world_up))
    if right is None:
        alt = np.zeros(3)
        alt[int(np.argmin(np.abs(f)))] = 1.0
        right = normalize(np.cross(f, alt))
        assert right is not None

    up = np.cross(right, f)
    return f, right, up

def project_to_screen(
        point:npt.NDArray[np.float64],
        camera_position:npt.NDArray[np.float64],
        basis:Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]],
        fov_radians:float, aspect_ratio:float) -> Optional[Tuple[float, float]]:
    """ Projects point to normalized device coordinates for a pinhole camera.

    (0,0) is the center of the view, x and y are in [-1, 1] at the edges of
    the view and grow beyond that outside it. Returns None for points at or
    behind the camera plane.
    """

    forward, right, up = basis
    v = point - camera_position
    depth = float(np.dot(v, forward))
    if depth <= 0.:
        return None

    tan_half = math.tan(fov_radians / 2.)
    x = float(np.dot(v, right)) / (depth * tan_half * aspect_ratio)
    y = float(np.dot(v, up)) / (depth * tan_half)
    return x, y

def direction_from_angles(yaw:float, pitch:float) -> npt.NDArray[np.float64]:
    """ Forward vector for a y up camera with the given yaw and pitch.

    yaw = pitch = 0 looks down -z, positive yaw turns left (toward -x),
    positive pitch looks up.
    """
    return np.array((
        -math.sin(yaw) * math.cos(pitch),
        math.sin(pitch),
        -math.cos(yaw) * math.cos(pitch),
    ))

class PDBManager:
    def __init__(self) -> None:
        self.logger = logging.getLogger(fullname(self))

    def __enter__(self) -> PDBManager:
        self.logger.info("entering PDBManager")

        return self

    def __exit__(self, e:Any, m:Any, tb:Any) -> None:
        self.logger.info("exiting PDBManager")
        if e is not None:
            self.logger.info(f'handling exception {e} {m}')
            print(m.__repr__(), file=sys.stderr)
            pdb.post_mortem(tb)

import math

import numpy as np
import pytest

from roombeyond import util

def test_vec3():
    assert util.vec3([1, 2, 3]).dtype == np.float64
    with pytest.raises(ValueError):
        util.vec3([1, 2])
    with pytest.raises(ValueError):
        util.vec3([[1, 2, 3]])

def test_normalize():
    assert np.allclose(util.normalize(np.array((3., 0., 4.))), (0.6, 0., 0.8))
    assert util.normalize(np.zeros(3)) is None

def test_camera_basis_default_orientation():
    basis = util.camera_basis(np.array((0., 0., -2.)), np.array((0., 1., 0.)))
    assert basis is not None
    forward, right, up = basis
    assert np.allclose(forward, (0., 0., -1.))
    assert np.allclose(right, (1., 0., 0.))
    assert np.allclose(up, (0., 1., 0.))

def test_camera_basis_degenerate():
    assert util.camera_basis(np.zeros(3), np.array((0., 1., 0.))) is None

    basis = util.camera_basis(np.array((0., -1., 0.)), np.array((0., 1., 0.)))
    assert basis is not None
    forward, right, up = basis
    assert np.isclose(np.dot(forward, right), 0.)
    assert np.isclose(np.dot(forward, up), 0.)
    assert np.isclose(np.dot(right, up), 0.)

def test_project_to_screen():
    basis = util.camera_basis(np.array((0., 0., -1.)), np.array((0., 1., 0.)))
    fov = math.radians(90.)

    assert util.project_to_screen(np.array((0., 0., -5.)), np.zeros(3), basis, fov, 1.) == (0., 0.)

    # 45 degrees off axis with a 90 degree fov is the edge of the view
    x, y = util.project_to_screen(np.array((2., -2., -2.)), np.zeros(3), basis, fov, 1.)
    assert np.isclose(x, 1.)
    assert np.isclose(y, -1.)

    x, _ = util.project_to_screen(np.array((2., 0., -2.)), np.zeros(3), basis, fov, 2.)
    assert np.isclose(x, 0.5)

    assert util.project_to_screen(np.array((0., 0., 1.)), np.zeros(3), basis, fov, 1.) is None
    assert util.project_to_screen(np.array((1., 0., 0.)), np.zeros(3), basis, fov, 1.) is None

def test_direction_from_angles():
    assert np.allclose(util.direction_from_angles(0., 0.), (0., 0., -1.))
    assert np.allclose(util.direction_from_angles(math.pi/2, 0.), (-1., 0., 0.))
    assert np.allclose(util.direction_from_angles(0., math.pi/2), (0., 1., 0.))

def test_either_nan_or_inf():
    assert not util.either_nan_or_inf(np.array((0., 1., 2.)))
    assert util.either_nan_or_inf(np.array((0., np.nan, 2.)))
    assert util.either_nan_or_inf(np.array((np.inf, 1., 2.)))

def test_camera_basis_non_finite():
    up = np.array((0., 1., 0.))
    assert util.camera_basis(np.array((0., 0., -np.inf)), up) is None
    assert util.camera_basis(np.array((np.nan, 0., -1.)), up) is None

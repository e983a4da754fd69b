import numpy as np
import pytest

from gdpglobe.geo.projection import (
    GRATICULE_10,
    OrthographicProjection,
    RotationState,
    project_rings,
    sphere_radius,
    wrap_longitude,
)


@pytest.mark.parametrize(
    "value, expected",
    [(0.0, 0.0), (180.0, -180.0), (190.0, -170.0), (-190.0, 170.0), (540.0, -180.0)],
)
def test_wrap_longitude(value, expected):
    assert wrap_longitude(value) == pytest.approx(expected)


def test_sphere_radius_uses_smaller_side():
    assert sphere_radius(500, 400) == pytest.approx(160.0)
    assert sphere_radius(400, 1000) == pytest.approx(160.0)


def test_for_viewport_centers_the_globe():
    proj = OrthographicProjection.for_viewport((0, -30, 0), 800, 600, scale_factor=1.05)
    assert proj.center == (400.0, 300.0)
    assert proj.scale == pytest.approx(240.0 * 1.05)


def test_initial_tilt_centers_latitude_30():
    proj = OrthographicProjection.for_viewport((0, -30, 0), 400, 400)
    lon, lat = proj.invert(200, 200)
    assert lon == pytest.approx(0.0, abs=1e-9)
    assert lat == pytest.approx(30.0)

    pixels, visible = proj.project([[0.0, 30.0]])
    assert visible[0]
    assert np.allclose(pixels[0], [200.0, 200.0])


def test_spin_moves_center_longitude():
    proj = OrthographicProjection.for_viewport((90, -37.5, 0), 400, 400)
    lon, lat = proj.invert(200, 200)
    assert lon == pytest.approx(-90.0)
    assert lat == pytest.approx(37.5)


def test_north_is_up_and_east_is_right():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    pixels, visible = proj.project([[0.0, 20.0], [20.0, 0.0]])
    assert visible.all()
    north, east = pixels
    assert north[1] < 200.0 and north[0] == pytest.approx(200.0)
    assert east[0] > 200.0 and east[1] == pytest.approx(200.0)


def test_invert_recovers_projected_points():
    proj = OrthographicProjection.for_viewport((-40, -20, 10), 640, 480)
    points = np.array([[40.0, 20.0], [55.0, 35.0], [20.0, -5.0]])
    pixels, visible = proj.project(points)
    assert visible.all()
    for (x, y), (lon, lat) in zip(pixels, points):
        inv = proj.invert(x, y)
        assert inv is not None
        assert inv[0] == pytest.approx(lon, abs=1e-6)
        assert inv[1] == pytest.approx(lat, abs=1e-6)


def test_invert_outside_disc_returns_none():
    proj = OrthographicProjection.for_viewport((0, -30, 0), 400, 400)
    assert proj.invert(5, 5) is None
    assert proj.invert(200 + 161, 200) is None


def test_far_side_point_is_not_visible():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    _, visible = proj.project([[180.0, 0.0], [0.0, 0.0]])
    assert visible.tolist() == [False, True]


def test_project_ring_fully_hidden_returns_none():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    ring = [[170, -5], [-170, -5], [-170, 5], [170, 5], [170, -5]]
    assert proj.project_ring(ring) is None


def test_project_ring_fully_visible_keeps_vertices():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    ring = np.array([[-10, -10], [10, -10], [10, 10], [-10, 10], [-10, -10]], dtype=float)
    out = proj.project_ring(ring)
    expected, _ = proj.project(ring)
    assert np.allclose(out, expected)


def test_project_ring_clips_at_horizon():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    ring = [[60, -10], [120, -10], [120, 10], [60, 10], [60, -10]]
    out = proj.project_ring(ring)

    # two horizon crossings are inserted
    assert out.shape == (7, 2)
    dist = np.hypot(out[:, 0] - 200.0, out[:, 1] - 200.0)
    assert (dist <= 160.0 + 1e-9).all()
    assert np.isclose(dist, 160.0).sum() >= 4


def test_project_line_keeps_visible_runs_only():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    line = np.column_stack((np.arange(-175.0, 180.0, 10.0), np.zeros(36)))
    runs = proj.project_line(line)
    assert len(runs) == 1
    assert runs[0].shape[0] == 18  # -85 .. 85


def test_project_line_too_short():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    assert proj.project_line([[0.0, 0.0]]) == []


def test_project_rings_drops_hidden_rings():
    proj = OrthographicProjection.for_viewport((0, 0, 0), 400, 400)
    front = [[-10, -10], [10, -10], [10, 10], [-10, -10]]
    back = [[170, -5], [175, -5], [175, 5], [170, -5]]
    assert len(project_rings(proj, [front, back])) == 1


def test_graticule_layout():
    # 36 meridians and 17 parallels
    assert len(GRATICULE_10) == 53
    lats_at_0 = GRATICULE_10[18][:, 1]
    lats_at_10 = GRATICULE_10[19][:, 1]
    assert GRATICULE_10[18][0, 0] == 0.0
    assert lats_at_0.max() == 90.0
    assert lats_at_10.max() == 80.0


def test_rotation_state_wraps_spin_and_keeps_roll():
    rotation = RotationState(spin=179.0, tilt=-30.0, roll=5.0)
    rotation.rotate_by(d_spin=2.0, d_tilt=1.5)
    assert rotation.spin == pytest.approx(-179.0)
    assert rotation.tilt == pytest.approx(-28.5)
    assert rotation.roll == 5.0


def test_rotation_state_defaults():
    assert RotationState().as_tuple() == (0.0, -30.0, 0.0)

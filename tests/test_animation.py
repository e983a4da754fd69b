import pytest

from gdpglobe.controller.animation import AnimationScheduler
from gdpglobe.controller.interaction import PointerState
from gdpglobe.geo.projection import RotationState


@pytest.fixture()
def scheduler(qapp):
    s = AnimationScheduler(RotationState(), PointerState())
    yield s
    s.stop()


def test_idle_tick_rotates(scheduler):
    frames = []
    scheduler.frame_requested.connect(lambda: frames.append(1))

    assert scheduler.tick() is True
    assert scheduler.rotation.spin == pytest.approx(0.15)
    assert scheduler.rotation.tilt == -30.0
    assert frames == [1]


@pytest.mark.parametrize("flag", ["hovering", "dragging"])
def test_tick_paused_by_pointer(scheduler, flag):
    setattr(scheduler.pointer, flag, True)
    assert scheduler.tick() is False
    assert scheduler.rotation.spin == 0.0


def test_rotation_resumes_after_pointer_leaves(scheduler):
    scheduler.pointer.hovering = True
    scheduler.tick()
    scheduler.pointer.hovering = False
    scheduler.tick()
    assert scheduler.rotation.spin == pytest.approx(0.15)


def test_spin_wraps(scheduler):
    scheduler.rotation.spin = 179.9
    scheduler.tick()
    assert scheduler.rotation.spin == pytest.approx(-179.95)


def test_start_and_stop(scheduler):
    assert not scheduler.is_running()
    scheduler.start()
    scheduler.start()
    assert scheduler.is_running()
    scheduler.stop()
    assert not scheduler.is_running()

import pytest

from gdpglobe.app.state import Store
from gdpglobe.controller.animation import AnimationScheduler
from gdpglobe.controller.interaction import InteractionController, PointerState
from gdpglobe.geo.projection import RotationState

from helpers import USA_VIEW

W = H = 400.0
CENTER = (200.0, 200.0)
OCEAN = (344.0, 200.0)


@pytest.fixture()
def controller(store):
    rotation = RotationState(*USA_VIEW)
    return InteractionController(store, rotation, PointerState())


def test_drag_rotates_globe(controller, store):
    controller.rotation.spin, controller.rotation.tilt = 0.0, -30.0
    controller.press(100.0, 100.0)
    assert controller.rotation.as_tuple() == (0.0, -30.0, 0.0)

    assert controller.move(110.0, 90.0, W, H) is True
    assert controller.rotation.spin == pytest.approx(2.5)
    assert controller.rotation.tilt == pytest.approx(-27.5)
    assert controller.rotation.roll == 0.0
    assert controller.pointer.last_drag == (110.0, 90.0)


def test_drag_does_not_change_selection(controller, store):
    store.set_selected(None)
    controller.press(*CENTER)
    controller.move(CENTER[0] + 1.0, CENTER[1], W, H)
    assert store.selected is None
    assert not controller.pointer.hovering


def test_release_ends_drag(controller):
    controller.press(0.0, 0.0)
    controller.release()
    assert not controller.pointer.dragging


def test_hover_selects_country(controller, store):
    store.set_selected(None)
    assert controller.move(*CENTER, W, H) is True
    assert store.selected.iso_code == "USA"
    assert controller.pointer.hovering
    assert controller.pointer.position == CENTER


def test_hover_over_ocean_keeps_selection(controller, store, records):
    store.set_selected(records[2])
    controller.move(*OCEAN, W, H)
    assert store.selected == records[2]


def test_hover_over_country_without_record_keeps_selection(store, records):
    # centers the ATA square
    controller = InteractionController(store, RotationState(50.0, 22.5, 0.0), PointerState())
    store.set_selected(records[1])
    controller.move(*CENTER, W, H)
    assert store.selected == records[1]


def test_pointer_off_sphere_skips_hit_test(controller, store, records):
    store.set_selected(records[2])
    controller.move(5.0, 5.0, W, H)
    assert store.selected == records[2]
    assert controller.pointer.hovering


def test_hover_without_boundaries(qapp, records):
    store = Store()
    store.set_records(records)
    store.set_selected(None)
    controller = InteractionController(store, RotationState(*USA_VIEW), PointerState())
    assert controller.move(*CENTER, W, H) is False
    assert store.selected is None


def test_leave_resets_pointer_flags(controller):
    controller.enter()
    controller.press(10.0, 10.0)
    controller.leave()
    assert not controller.pointer.dragging
    assert not controller.pointer.hovering
    assert controller.pointer.idle


def test_drag_released_outside_resumes_rotation(controller):
    scheduler = AnimationScheduler(controller.rotation, controller.pointer)
    controller.press(*CENTER)
    controller.move(250.0, 200.0, W, H)
    controller.leave()
    controller.release()

    spin = controller.rotation.spin
    assert not controller.pointer.hovering
    assert scheduler.tick() is True
    assert controller.rotation.spin == pytest.approx(spin + 0.15)

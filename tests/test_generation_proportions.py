from __future__ import annotations

import pytest

from generation.proportions import ProportionManager


def test_default_layout_for_48px() -> None:
    pm = ProportionManager(48)
    assert (pm.head, pm.torso, pm.limbs) == (16, 12, 10)
    report = pm.validate_proportions()
    assert report.valid, report.errors
    assert report.proportions["total"] == 100.0


@pytest.mark.parametrize("height", range(19, 257))
def test_every_practical_height_is_valid(height: int) -> None:
    report = ProportionManager(height).validate_proportions()
    assert report.valid, (height, report.errors)


def test_positions_stack_top_to_bottom() -> None:
    p = ProportionManager(48).get_proportions()
    pos = p["positions"]
    assert pos["headTop"] == 0
    assert pos["headBottom"] == pos["torsoTop"] == 16
    assert pos["torsoBottom"] == pos["limbsTop"] == 28
    assert pos["limbsBottom"] == 48
    assert p["equipmentScale"] == 1.2


def test_region_bounds_for_48px() -> None:
    pm = ProportionManager(48)
    head = pm.get_head_bounds(24)
    assert (head.x, head.y, head.width, head.height) == (17, 0, 14, 16)
    assert head.center_y == 8

    torso = pm.get_torso_bounds(24)
    assert (torso.x, torso.y, torso.width, torso.height) == (20, 14, 9, 12)

    arm = pm.get_arm_bounds(24, "left")
    assert (arm.x, arm.y, arm.width, arm.height) == (18, 16, 4, 10)
    assert pm.get_arm_bounds(24, "right").x == 27

    leg = pm.get_leg_bounds(24, "left")
    assert (leg.x, leg.y, leg.width, leg.height) == (20, 23, 5, 10)
    assert pm.get_leg_bounds(24, "right").x == 23


def test_equipment_bounds_grow_around_centre() -> None:
    pm = ProportionManager(48)
    head = pm.get_head_bounds(24)
    helmet = pm.get_equipment_bounds(head)
    assert (helmet.width, helmet.height) == (16, 19)
    assert helmet.x == 16
    assert helmet.y == -1


def test_bounds_to_dict_keys() -> None:
    d = ProportionManager(48).get_head_bounds(24).to_dict()
    assert d == {"x": 17, "y": 0, "width": 14, "height": 16, "centerX": 24, "centerY": 8}


def test_small_heights_report_errors() -> None:
    report = ProportionManager(10).validate_proportions()
    assert not report.valid
    assert any("outside acceptable range" in e for e in report.errors)


def test_non_positive_height_rejected() -> None:
    with pytest.raises(ValueError):
        ProportionManager(0)
    pm = ProportionManager(48)
    with pytest.raises(ValueError):
        pm.set_total_height(-5)

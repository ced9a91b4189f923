import pytest

from game.survival.viewport import Viewport


def test_base_resolution_has_unit_scale():
    vp = Viewport(1920, 1080)
    assert vp.scale == 1.0
    assert (vp.scale_x, vp.scale_y) == (1.0, 1.0)


def test_scale_is_the_smaller_axis():
    vp = Viewport(960, 1080)
    assert vp.scale_x == pytest.approx(0.5)
    assert vp.scale_y == pytest.approx(1.0)
    assert vp.scale == pytest.approx(0.5)


def test_resize_recomputes_and_returns_old_size():
    vp = Viewport(800, 600)
    old = vp.resize(1600, 1200)
    assert old == (800, 600)
    assert (vp.width, vp.height) == (1600, 1200)
    assert vp.scale == pytest.approx(min(1600 / 1920, 1200 / 1080))


def test_remap_is_proportional():
    vp = Viewport(800, 600)
    old_w, old_h = vp.resize(1600, 1200)
    assert vp.remap(400, 300, old_w, old_h) == pytest.approx((800, 600))
    assert vp.remap(0, 600, old_w, old_h) == pytest.approx((0, 1200))


@pytest.mark.parametrize("w,h", [(0, 600), (800, 0), (-1, -1)])
def test_rejects_non_positive_size(w, h):
    with pytest.raises(ValueError):
        Viewport(w, h)
    vp = Viewport(800, 600)
    with pytest.raises(ValueError):
        vp.resize(w, h)

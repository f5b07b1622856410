import pytest

from reframe.imaging.watermark import build_watermark_layer, watermark_anchor


@pytest.mark.parametrize("size, margin, expected", [
    ((1600, 900), 28, (1572, 872)),
    ((1080, 1080), 0, (1080, 1080)),
    ((20, 100), 28, (0, 72)),
    ((10, 10), 28, (0, 0)),
])
def test_anchor_is_inset_and_never_negative(size, margin, expected):
    assert watermark_anchor(size[0], size[1], margin) == expected


def test_text_sits_above_and_left_of_anchor():
    layer = build_watermark_layer(800, 400, "BurnaAI", "#FFFFFF", 1.0, 32, 20)
    assert layer.size == (800, 400)
    assert layer.mode == "RGBA"
    bbox = layer.getbbox()
    assert bbox is not None
    left, top, right, bottom = bbox
    assert right <= 780 + 1
    assert bottom <= 380 + 1
    # bottom-right quadrant only
    assert left > 400 and top > 200


def test_opacity_caps_alpha():
    layer = build_watermark_layer(400, 200, "Mark", "#FF0000", 0.5, 40, 10)
    assert layer.getchannel("A").getextrema()[1] <= 128


def test_empty_text_gives_transparent_layer():
    layer = build_watermark_layer(300, 200, "", "#FFFFFF", 0.7, 42, 28)
    assert layer.getbbox() is None


def test_degenerate_canvas_smaller_than_margin():
    layer = build_watermark_layer(10, 10, "BurnaAI", "#FFFFFF", 0.7, 42, 28)
    assert layer.size == (10, 10)

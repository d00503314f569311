import numpy as np
import pytest

from heatmap_engine.models import Color, ColorRange, ColorRamp
from heatmap_engine.services import build_ramp, from_colormap, get_scheme, scheme_preview
from heatmap_engine.services.schemes import ALPHA_FIRE, interpolate_range


def test_interpolation_excludes_end_color():
    values = interpolate_range(ColorRange(Color(0, 0, 0, 0), Color(255, 255, 255, 255), 4))
    assert values[:, 0].tolist() == [0, 16383, 32767, 49151]
    assert np.all(values == values[:, :1])


def test_alpha_fire_ramp_layout():
    ramp = build_ramp(ALPHA_FIRE)
    assert len(ramp) == 50 + 60 + 100 + 46
    assert ramp[0] == (65535, 65535, 65535, 65535)
    assert ramp[50] == (65535, 65535, 0, 65535)
    assert ramp[110] == (65535, 0, 0, 65535)
    # Translucent entries carry color channels already scaled by alpha
    grey = 128 * 257 * 220 * 257 // 65535
    assert ramp[210] == (grey, grey, grey, 220 * 257)
    assert ramp.colors()[210] == Color(110, 110, 110, 220)
    # Fades towards transparent at the cool end
    assert ramp[255][3] < ramp[210][3]


def test_ranges_concatenate_in_declared_order():
    first = ColorRange(Color(255, 0, 0), Color(0, 0, 255), 3)
    second = ColorRange(Color(0, 0, 255), Color(0, 255, 0), 2)
    ramp = build_ramp([first, second])
    assert len(ramp) == 5
    assert ramp[0] == Color(255, 0, 0).rgba16()
    assert ramp[3] == Color(0, 0, 255).rgba16()


def test_empty_range_list_gives_empty_ramp():
    assert len(build_ramp([])) == 0


def test_colormap_ramp_is_hottest_first():
    ramp = from_colormap("hot", 16)
    assert len(ramp) == 16
    assert ramp[0] == (65535, 65535, 65535, 65535)
    assert ramp[15][0] < ramp[0][0]


def test_get_scheme_lookup():
    assert get_scheme("alphafire") == build_ramp(ALPHA_FIRE)
    assert get_scheme("AlphaFire") == build_ramp(ALPHA_FIRE)
    assert len(get_scheme("inferno", steps=8)) == 8
    with pytest.raises(ValueError, match="Unknown scheme"):
        get_scheme("no-such-scheme")
    with pytest.raises(ValueError):
        from_colormap("hot", 0)


def test_scheme_preview_strip():
    ramp = ColorRamp.from_colors([(255, 255, 255), (10, 20, 30, 40)])
    strip = scheme_preview(ramp, height=5)
    assert strip.shape == (5, 2, 4)
    assert strip.dtype == np.uint8
    assert tuple(strip[4, 1]) == (1, 3, 4, 40)
    assert tuple(strip[0, 0]) == (255, 255, 255, 255)

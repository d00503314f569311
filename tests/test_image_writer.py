import base64

import numpy as np
import pytest
from matplotlib import image as mpimg

from heatmap_engine.models import Point
from heatmap_engine.services import render_heatmap, save_png, to_data_uri


def _image():
    return render_heatmap(24, 16, [Point(12, 8)], 10, 255, [(255, 255, 255), (255, 0, 0)])


def test_save_png_round_trips_pixels(tmp_path):
    image = _image()
    path = save_png(image, tmp_path / "nested" / "heat.png")

    assert path.exists()
    loaded = mpimg.imread(path)
    assert loaded.shape == (16, 24, 4)
    np.testing.assert_allclose(loaded[0, 0], np.array([0, 0, 0, 50]) / 255.0, atol=1e-6)
    np.testing.assert_allclose(loaded[8, 12], np.array([255, 255, 255, 254]) / 255.0, atol=1e-6)


def test_data_uri_contains_png():
    uri = to_data_uri(_image())
    prefix = "data:image/png;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]).startswith(b"\x89PNG")


def test_rejects_non_rgba_arrays(tmp_path):
    with pytest.raises(ValueError):
        save_png(np.zeros((4, 4, 3), dtype=np.uint8), tmp_path / "bad.png")
    with pytest.raises(ValueError):
        to_data_uri(np.zeros((4, 4, 4), dtype=np.float32))

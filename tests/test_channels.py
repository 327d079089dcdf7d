import pytest

from pixelwave.channels import check_planes, extract_channels, luma
from pixelwave.errors import ChannelCountError, DimensionError, FormatError, ShapeError


def test_luma_extremes_and_weights():
    assert luma(0, 0, 0) == 0.0
    assert luma(255, 255, 255) == pytest.approx(1.0)
    assert luma(255, 0, 0) == pytest.approx(0.299)
    assert luma(0, 255, 0) == pytest.approx(0.587)
    assert luma(0, 0, 255) == pytest.approx(0.114)


def test_single_channel_uses_gray_value_and_opaque_alpha():
    grid = [[(0,), (255,)], [(51,), (102,)]]
    intensity, alpha = extract_channels(grid, 1)
    assert intensity == [[0.0, 1.0], [0.2, 0.4]]
    assert alpha == [[1.0, 1.0], [1.0, 1.0]]


def test_rgb_uses_luma():
    grid = [[(255, 0, 0), (0, 0, 0)]]
    intensity, alpha = extract_channels(grid, 3)
    assert intensity[0][0] == pytest.approx(0.299)
    assert intensity[0][1] == 0.0
    assert alpha == [[1.0, 1.0]]


def test_rgba_supplies_alpha_plane():
    grid = [[(255, 255, 255, 0), (255, 255, 255, 255)]]
    intensity, alpha = extract_channels(grid, 4, require_alpha=True)
    assert intensity[0] == [pytest.approx(1.0), pytest.approx(1.0)]
    assert alpha == [[0.0, 1.0]]


def test_require_alpha_without_alpha_channel():
    with pytest.raises(ChannelCountError):
        extract_channels([[(1, 2, 3), (4, 5, 6)]], 3, require_alpha=True)


@pytest.mark.parametrize("channels", [0, 2, 5])
def test_unsupported_channel_counts(channels):
    with pytest.raises(ChannelCountError) as err:
        extract_channels([[(0,) * max(channels, 1)]], channels)
    assert isinstance(err.value, FormatError)


def test_cell_width_must_match_channel_count():
    with pytest.raises(ChannelCountError):
        extract_channels([[(1, 2, 3), (4, 5)]], 3)


def test_empty_grid_is_a_shape_error():
    with pytest.raises(ShapeError):
        extract_channels([], 1)


def test_check_planes_mismatch():
    with pytest.raises(DimensionError):
        check_planes([[0.0, 1.0]], [[1.0, 1.0], [1.0, 1.0]])
    assert check_planes([[0.0, 1.0]], [[1.0, 1.0]]) == (1, 2)

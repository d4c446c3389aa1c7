import numpy as np
import pytest
from PIL import Image

from tensorpic.adapters import from_buffer, from_image, from_mat, from_tensor
from tensorpic.view import ElementKind, UnsupportedElementKind, UnsupportedShape
from tests.conftest import make_tensor


def test_tensor_keeps_full_shape():
    view = from_tensor(make_tensor(width=2, height=3, channels=4))
    assert view.shape == (1, 3, 2, 4)
    assert (view.height, view.width, view.channels) == (3, 2, 4)
    assert view.element_kind is ElementKind.NORMALIZED_FLOAT


def test_tensor_samples_match_source():
    tensor = make_tensor(width=4, height=3, channels=2)
    view = from_tensor(tensor)
    assert view.sample(2, 1, 0) == pytest.approx(float(tensor[0, 2, 1, 0]))
    assert view.sample(2, 1, 1) == pytest.approx(float(tensor[0, 2, 1, 1]))


def test_tensor_rejects_rank_three():
    with pytest.raises(UnsupportedShape, match=r"cannot log tensor with shape \[1 2 3\]"):
        from_tensor(np.zeros((1, 2, 3), dtype=np.float32))


def test_tensor_rejects_batch_greater_than_one():
    with pytest.raises(UnsupportedShape):
        from_tensor(np.zeros((2, 4, 4, 1), dtype=np.float32))


def test_tensor_rejects_int32():
    with pytest.raises(UnsupportedElementKind, match="cannot log tensor of type int32"):
        from_tensor(make_tensor(width=10, height=10, channels=2, dtype=np.int32))


def test_unsigned_bytes_are_divided_by_255():
    view = from_buffer(np.array([[0, 51, 255]], dtype=np.uint8))
    assert view.element_kind is ElementKind.UNSIGNED_BYTE
    assert view.sample(0, 0, 0) == 0.0
    assert view.sample(0, 1, 0) == pytest.approx(0.2)
    assert view.sample(0, 2, 0) == pytest.approx(1.0)


def test_float_samples_are_not_clamped():
    view = from_buffer(np.array([1.5, -0.25], dtype=np.float64))
    assert view.sample(0, 0, 0) == 1.5
    assert view.sample(0, 1, 0) == -0.25


@pytest.mark.parametrize("dtype", [np.int32, np.int8, np.uint16, np.bool_])
def test_buffer_rejects_element_types_outside_allow_list(dtype):
    with pytest.raises(UnsupportedElementKind, match="cannot log buffer of type"):
        from_buffer(np.zeros((4, 4), dtype=dtype))


def test_one_dimensional_buffer_is_a_single_row():
    view = from_buffer(np.linspace(0, 1, 10, dtype=np.float32))
    assert view.shape == (10,)
    assert (view.height, view.width, view.channels) == (1, 10, 1)


def test_two_dimensional_buffer_has_one_channel():
    view = from_buffer(np.zeros((5, 7), dtype=np.uint8))
    assert (view.height, view.width, view.channels) == (5, 7, 1)


def test_leading_singletons_are_folded():
    view = from_buffer(np.zeros((1, 1, 4, 5, 3), dtype=np.float32))
    assert view.shape == (1, 1, 4, 5, 3)
    assert (view.height, view.width, view.channels) == (4, 5, 3)


def test_leading_dimension_greater_than_one_is_rejected():
    with pytest.raises(UnsupportedShape, match=r"cannot log buffer with shape \[4 3 2 1\]"):
        from_buffer(np.zeros((4, 3, 2, 1), dtype=np.uint8))


def test_zero_dimensional_buffer_is_rejected():
    with pytest.raises(UnsupportedShape):
        from_buffer(np.float32(0.5))


def test_planar_and_interleaved_give_same_samples():
    rng = np.random.default_rng(7)
    interleaved = rng.integers(0, 256, size=(6, 5, 3), dtype=np.uint8)
    planar = np.ascontiguousarray(interleaved.transpose(2, 0, 1))

    a = from_buffer(interleaved)
    b = from_buffer(planar, planar=True)

    assert (b.height, b.width, b.channels) == (6, 5, 3)
    np.testing.assert_array_equal(a.to_array(), b.to_array())
    assert a.sample(4, 2, 1) == b.sample(4, 2, 1)


def test_adapter_does_not_copy_or_expose_writes():
    data = np.zeros((3, 3), dtype=np.float32)
    view = from_buffer(data)
    assert np.shares_memory(view.pixels, data)
    assert not view.pixels.flags.writeable
    assert data.flags.writeable


def test_empty_buffer_is_empty_view():
    view = from_buffer(np.zeros((0, 3), dtype=np.float32))
    assert view.is_empty
    assert view.shape == ()


def test_empty_buffer_still_checks_element_type():
    with pytest.raises(UnsupportedElementKind):
        from_buffer(np.zeros((0,), dtype=np.int32))


def test_grayscale_image_has_one_channel():
    view = from_image(Image.new("L", (8, 6), 128))
    assert view.shape == (6, 8, 1)
    assert view.element_kind is ElementKind.UNSIGNED_BYTE
    assert view.sample(0, 0, 0) == pytest.approx(128 / 255)


def test_rgba_image_has_four_channels():
    view = from_image(Image.new("RGBA", (4, 4), (255, 0, 0, 128)))
    assert view.shape == (4, 4, 4)
    assert view.sample(1, 1, 0) == pytest.approx(1.0)
    assert view.sample(1, 1, 3) == pytest.approx(128 / 255)


def test_float_image_is_normalized_float():
    view = from_image(Image.new("F", (3, 2), 0.25))
    assert view.element_kind is ElementKind.NORMALIZED_FLOAT
    assert view.sample(1, 2, 0) == pytest.approx(0.25)


def test_palette_image_is_converted_to_rgb():
    img = Image.new("RGB", (4, 4), (0, 255, 0)).convert("P")
    view = from_image(img)
    assert view.channels == 3
    assert view.sample(0, 0, 1) == pytest.approx(1.0)


def test_bilevel_image_is_converted_to_grayscale():
    view = from_image(Image.new("1", (4, 4), 1))
    assert view.channels == 1
    assert view.sample(0, 0, 0) == pytest.approx(1.0)


def test_integer_image_is_rejected():
    with pytest.raises(UnsupportedElementKind, match="cannot log image of type int32"):
        from_image(Image.new("I", (4, 4), 7))


def test_mat_is_interleaved_rows_cols_channels():
    mat = np.zeros((10, 10, 2), dtype=np.float32)
    mat[:, :, 1] = 0.5
    view = from_mat(mat)
    assert view.shape == (10, 10, 2)
    assert (view.height, view.width, view.channels) == (10, 10, 2)
    assert view.sample(3, 4, 1) == 0.5


def test_single_channel_mat_reports_channel_count():
    view = from_mat(np.zeros((4, 6), dtype=np.uint8))
    assert view.shape == (4, 6, 1)
    assert view.channels == 1


def test_mat_rejects_other_ranks():
    with pytest.raises(UnsupportedShape, match=r"cannot log mat with shape \[1 4 4 2\]"):
        from_mat(np.zeros((1, 4, 4, 2), dtype=np.float32))
    with pytest.raises(UnsupportedShape):
        from_mat(np.zeros(8, dtype=np.float32))


@pytest.mark.parametrize("adapter", [from_buffer, from_tensor, from_mat])
def test_ragged_sequences_are_unsupported(adapter):
    with pytest.raises(UnsupportedElementKind, match="of type object"):
        adapter([[0.1, 0.2], [0.3]])

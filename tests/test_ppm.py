import pytest

from pilotihouse.ppm import PPMError, PPMImage, load_ppm


def _write(tmp_path, content, name="image.ppm"):
    path = tmp_path / name
    path.write_bytes(content)
    return path


def test_single_pixel_loaded(tmp_path):
    path = _write(tmp_path, b"P6\n1 1\n255\n" + bytes([10, 20, 30]))
    image = load_ppm(path)
    assert image == PPMImage(1, 1, bytes([10, 20, 30]))


def test_rows_are_flipped_vertically(tmp_path):
    top = bytes([255, 0, 0, 0, 255, 0])
    bottom = bytes([0, 0, 255, 9, 9, 9])
    path = _write(tmp_path, b"P6\n2 2\n255\n" + top + bottom)
    image = load_ppm(path)
    assert image.width == 2
    assert image.height == 2
    assert image.data == bottom + top


def test_odd_row_count_keeps_middle_row(tmp_path):
    rows = [bytes([i, i, i]) for i in (1, 2, 3)]
    path = _write(tmp_path, b"P6 1 3 255\n" + b"".join(rows))
    image = load_ppm(path)
    assert image.data == rows[2] + rows[1] + rows[0]


def test_comment_line_is_skipped(tmp_path):
    path = _write(tmp_path, b"P6\n# made by hand\n1 1\n255\n" + bytes([4, 5, 6]))
    assert load_ppm(path).data == bytes([4, 5, 6])


def test_trailing_bytes_ignored(tmp_path):
    path = _write(tmp_path, b"P6\n1 1\n255\n" + bytes([7, 8, 9]) + b"extra")
    image = load_ppm(path)
    assert len(image.data) == image.width * image.height * 3
    assert image.data == bytes([7, 8, 9])


def test_missing_file_raises(tmp_path):
    with pytest.raises(PPMError):
        load_ppm(tmp_path / "absent.ppm")


@pytest.mark.parametrize("header", [b"P3\n1 1\n255\n", b"", b"P5\n1 1\n255\n"])
def test_wrong_magic_raises(tmp_path, header):
    path = _write(tmp_path, header + bytes([1, 2, 3]))
    with pytest.raises(PPMError, match="Invalid PPM header"):
        load_ppm(path)


def test_truncated_pixels_raise(tmp_path):
    path = _write(tmp_path, b"P6\n2 2\n255\n" + bytes(5))
    with pytest.raises(PPMError, match="Error reading PPM data"):
        load_ppm(path)


def test_non_numeric_size_raises(tmp_path):
    path = _write(tmp_path, b"P6\nwide 1\n255\n" + bytes(3))
    with pytest.raises(PPMError):
        load_ppm(path)


def test_accepts_string_path(tmp_path):
    path = _write(tmp_path, b"P6\n1 1\n255\n" + bytes([1, 1, 1]))
    assert load_ppm(str(path)).height == 1
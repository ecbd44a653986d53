import io

from PIL import Image

from placeholder.imager import BACKGROUND_COLOR, SQUARE_COLOR, render_image


def _open(content: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(content))
    image.load()
    return image


def test_render_image_returns_png_of_requested_size() -> None:
    image = _open(render_image(120, 40))
    assert image.format == "PNG"
    assert image.size == (120, 40)


def test_render_image_draws_checkerboard_squares() -> None:
    image = _open(render_image(40, 40, square=10, text=""))
    assert image.getpixel((0, 0)) == BACKGROUND_COLOR
    assert image.getpixel((15, 5)) == SQUARE_COLOR
    assert image.getpixel((5, 15)) == SQUARE_COLOR
    assert image.getpixel((15, 15)) == BACKGROUND_COLOR


def test_render_image_handles_tiny_images_with_text() -> None:
    image = _open(render_image(1, 1, text="a long caption that cannot fit"))
    assert image.size == (1, 1)

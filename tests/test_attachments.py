"""
Unit tests for product image attachments.
"""

import base64
from io import BytesIO

import pytest
from PIL import Image

from promptform.attachments import add_images, load_image, remove_image
from promptform.errors import AttachmentError
from promptform.research import ProductImage


def _image_bytes(fmt: str = "PNG") -> bytes:
	buf = BytesIO()
	Image.new("RGB", (20, 10), color="white").save(buf, format=fmt)
	return buf.getvalue()


def _img(name: str) -> ProductImage:
	return ProductImage(data="AAAA", mime_type="image/png", name=name)


class TestLoadImage:

	def test_png_is_encoded(self):
		data = _image_bytes("PNG")

		image = load_image(data, "home.png", "image/png")

		assert image.mime_type == "image/png"
		assert base64.b64decode(image.data) == data
		assert image.name.startswith("home.png-")

	def test_detected_type_wins(self):
		image = load_image(_image_bytes("JPEG"), "photo.png", "image/png")

		assert image.mime_type == "image/jpeg"

	def test_unsupported_format(self):
		with pytest.raises(AttachmentError, match="unsupported"):
			load_image(_image_bytes("GIF"), "anim.gif", "image/gif")

	def test_not_an_image(self):
		with pytest.raises(AttachmentError, match="not a readable image"):
			load_image(b"hello world", "notes.txt", "text/plain")

	def test_too_large(self):
		with pytest.raises(AttachmentError, match="limit"):
			load_image(_image_bytes(), "big.png", max_bytes=10)

	def test_empty(self):
		with pytest.raises(AttachmentError):
			load_image(b"", "empty.png")


class TestImageList:

	def test_duplicates_by_original_filename_are_skipped(self):
		existing = [_img("home.png-1000")]

		result = add_images(existing, [_img("home.png-2000"), _img("cart.png-2000")])

		assert [i.name for i in result] == ["home.png-1000", "cart.png-2000"]

	def test_limit(self):
		with pytest.raises(AttachmentError):
			add_images([_img("a.png-1")], [_img("b.png-1")], max_count=1)

	def test_remove(self):
		result = remove_image([_img("a.png-1"), _img("b.png-1")], "a.png-1")

		assert [i.name for i in result] == ["b.png-1"]

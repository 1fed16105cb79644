import base64
import io

import PIL.Image
import pytest
import qrcode.exceptions

import billboard_contract_print.qr_image as qr_image


#============================================
def test_qr_image_size_and_colors() -> None:
	"""
	The QR image is square at the requested size with the requested colors.
	"""
	image = qr_image.render_qr_image("https://maps.example.com/?q=1", 150, "#000000", "#ffffff")
	assert image.size == (150, 150)
	colors = {color for _, color in image.getcolors(maxcolors=16)}
	assert colors == {(0, 0, 0), (255, 255, 255)}


#============================================
def test_qr_minimum_size() -> None:
	image = qr_image.render_qr_image("x", 10)
	assert image.size == (50, 50)


#============================================
def test_qr_data_uri_is_png() -> None:
	uri = qr_image.qr_data_uri("https://maps.example.com/?q=2")
	prefix = "data:image/png;base64,"
	assert uri.startswith(prefix)
	image = PIL.Image.open(io.BytesIO(base64.b64decode(uri[len(prefix):])))
	assert image.format == "PNG"


#============================================
def test_qr_cache_encodes_each_link_once() -> None:
	cache = qr_image.QRCache()
	first = cache.data_uri("https://a.example.com")
	second = cache.data_uri("https://a.example.com")
	cache.data_uri("https://b.example.com")
	assert first is second
	assert len(cache) == 2


#============================================
def test_oversized_payload_gives_empty_uri() -> None:
	assert qr_image.qr_data_uri("x" * 5000) == ""


#============================================
def test_oversized_payload_gives_no_image() -> None:
	cache = qr_image.QRCache()
	assert cache.image("x" * 5000) is None
	assert cache.image("https://a.example.com").size == (150, 150)


#============================================
def test_oversized_map_link_raises_overflow() -> None:
	"""
	Every qrcode release reports a payload past version 40 the same way.
	"""
	link = "https://maps.example.com/?q=" + "x" * 5000
	with pytest.raises(qrcode.exceptions.DataOverflowError):
		qr_image.render_qr_image(link)
	assert qr_image.qr_data_uri(link) == ""

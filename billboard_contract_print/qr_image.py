"""
QR code images for billboard map links.
"""

# Standard Library
import base64
import io

# PIP3 modules
import PIL.Image
import qrcode
import qrcode.constants
import qrcode.exceptions

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config


QR_PIXEL_SIZE = bcp.config.QR_PIXEL_SIZE
MIN_QR_PIXEL_SIZE = 50


#============================================
def render_qr_image(
	data: str,
	size_px: int = QR_PIXEL_SIZE,
	foreground: str = "#000000",
	background: str = "#ffffff",
) -> PIL.Image.Image:
	"""
	Render a QR code as an RGB image.

	Args:
		data: Encoded payload, usually a map URL.
		size_px: Output edge length in pixels.
		foreground: Module color.
		background: Background color.

	Returns:
		PIL image of size_px x size_px.

	Raises:
		qrcode.exceptions.DataOverflowError: The payload does not fit version 40.
	"""
	qr = qrcode.QRCode(
		version=None,
		error_correction=qrcode.constants.ERROR_CORRECT_M,
		box_size=10,
		border=0,
	)
	qr.add_data(data)
	try:
		qr.make(fit=True)
	except ValueError as error:
		# qrcode 8 reports overflow as "Invalid version (was 41, ...)"
		raise qrcode.exceptions.DataOverflowError(str(error)) from error
	image = qr.make_image(fill_color=foreground, back_color=background).convert("RGB")
	size_px = max(MIN_QR_PIXEL_SIZE, int(round(size_px)))
	return image.resize((size_px, size_px), resample=PIL.Image.Resampling.NEAREST)


#============================================
def render_qr_png(
	data: str,
	size_px: int = QR_PIXEL_SIZE,
	foreground: str = "#000000",
	background: str = "#ffffff",
) -> bytes:
	"""
	Render a QR code as PNG bytes.

	Args:
		data: Encoded payload.
		size_px: Output edge length in pixels.
		foreground: Module color.
		background: Background color.

	Returns:
		PNG bytes.
	"""
	image = render_qr_image(data, size_px, foreground, background)
	out = io.BytesIO()
	image.save(out, format="PNG")
	return out.getvalue()


#============================================
def qr_data_uri(
	data: str,
	size_px: int = QR_PIXEL_SIZE,
	foreground: str = "#000000",
	background: str = "#ffffff",
) -> str:
	"""
	Render a QR code as a PNG data URI.

	Args:
		data: Encoded payload.
		size_px: Output edge length in pixels.
		foreground: Module color.
		background: Background color.

	Returns:
		data:image/png;base64 URI, empty when the payload does not fit a QR code.
	"""
	try:
		png = render_qr_png(data, size_px, foreground, background)
	except qrcode.exceptions.DataOverflowError:
		return ""
	encoded = base64.b64encode(png).decode("ascii")
	return f"data:image/png;base64,{encoded}"


class QRCache:
	"""
	Encode each map link once per document.
	"""

	def __init__(self, foreground: str = "#000000", background: str = "#ffffff") -> None:
		self.foreground = foreground
		self.background = background
		self._uris: dict[str, str] = {}
		self._images: dict[str, PIL.Image.Image | None] = {}

	def data_uri(self, link: str) -> str:
		if link not in self._uris:
			self._uris[link] = qr_data_uri(link, QR_PIXEL_SIZE, self.foreground, self.background)
		return self._uris[link]

	def image(self, link: str) -> PIL.Image.Image | None:
		"""
		Return the QR image for a link, None when the link does not fit a QR code.
		"""
		if link not in self._images:
			try:
				self._images[link] = render_qr_image(
					link,
					QR_PIXEL_SIZE,
					self.foreground,
					self.background,
				)
			except qrcode.exceptions.DataOverflowError:
				self._images[link] = None
		return self._images[link]

	def __len__(self) -> int:
		return len(self._uris.keys() | self._images.keys())

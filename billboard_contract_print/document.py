"""
Standalone print document assembly and presentation.
"""

# Standard Library
import dataclasses
import pathlib
import tempfile
import typing
import webbrowser

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.bidi


escape = bcp.bidi.escape_svg_text

STYLESHEET_WAIT_MS = 1200

PRINT_CSS = """
@page { size: A4; margin: 0; }
* { -webkit-print-color-adjust: exact !important; print-color-adjust: exact !important; color-adjust: exact !important; }
html, body { margin: 0; padding: 0; background: #ffffff; direction: rtl; }
.print-page { width: 210mm; height: 297mm; overflow: hidden; position: relative; page-break-inside: avoid; break-inside: avoid; }
.print-page.page-break { page-break-after: always; break-after: page; }
.print-page > .contract-preview-container { transform-origin: top right; }
@media screen { .print-page { margin: 0 auto 8mm auto; box-shadow: 0 0 4mm rgba(0, 0, 0, 0.2); } }
"""

PRINT_SCRIPT = """
(function () {
	function waitForStylesheets() {
		var links = Array.prototype.slice.call(document.querySelectorAll('link[rel="stylesheet"]'));
		var pending = links.map(function (link) {
			if (link.sheet) { return Promise.resolve(); }
			return new Promise(function (resolve) {
				link.addEventListener('load', resolve);
				link.addEventListener('error', resolve);
			});
		});
		var cap = new Promise(function (resolve) { setTimeout(resolve, %(wait_ms)d); });
		return Promise.race([Promise.all(pending), cap]);
	}
	function waitForImages() {
		var images = Array.prototype.slice.call(document.images);
		return Promise.all(images.map(function (image) {
			if (image.complete) { return Promise.resolve(); }
			return new Promise(function (resolve) {
				image.addEventListener('load', resolve);
				image.addEventListener('error', resolve);
			});
		}));
	}
	function waitForFonts() {
		if (document.fonts && document.fonts.ready) { return document.fonts.ready; }
		return Promise.resolve();
	}
	function scalePages() {
		var pages = document.querySelectorAll('.print-page');
		pages.forEach(function (page) {
			var inner = page.firstElementChild;
			if (!inner) { return; }
			var scale = page.clientWidth / inner.offsetWidth;
			inner.style.transform = 'scale(' + scale + ')';
		});
	}
	window.addEventListener('load', function () {
		waitForStylesheets()
			.then(waitForImages)
			.then(waitForFonts)
			.then(function () {
				scalePages();
				window.focus();
				window.print();
			});
	});
})();
"""


class PresentError(Exception):
	"""
	Raised when a print document cannot be shown to the user.
	"""


class PopupBlockedError(PresentError):
	"""
	Raised when the print window could not be opened.
	"""

	def __init__(self, message: str | None = None) -> None:
		if message is None:
			message = (
				"Could not open the print window. Allow popups (or allow launching "
				"the web browser) and try printing again."
			)
		super().__init__(message)


@dataclasses.dataclass
class FontResource:
	family: str
	url: str
	weight: str = "normal"
	style: str = "normal"
	format: str = "truetype"


class Presenter(typing.Protocol):
	"""
	Something that shows an assembled print document to the user.
	"""

	def present(self, document: str) -> None:
		...


#============================================
def font_face_css(font: FontResource) -> str:
	"""
	Build an @font-face rule.

	Args:
		font: Font resource.

	Returns:
		CSS rule text.
	"""
	return (
		"@font-face { "
		f"font-family: '{font.family}'; "
		f"src: url('{font.url}') format('{font.format}'); "
		f"font-weight: {font.weight}; "
		f"font-style: {font.style}; "
		"font-display: block; }"
	)


#============================================
def assemble_print_document(
	pages: typing.Sequence[str],
	stylesheets: typing.Sequence[str] = (),
	fonts: typing.Sequence[FontResource] = (),
	title: str = "",
) -> str:
	"""
	Assemble page fragments into one standalone printable HTML document.

	Every page but the last is followed by a page break. The embedded script
	waits for stylesheets, images and fonts before opening the print dialog.

	Args:
		pages: HTML page fragments in print order.
		stylesheets: CSS texts inlined into the document head.
		fonts: Fonts declared with @font-face.
		title: Document title.

	Returns:
		HTML document text.
	"""
	head_parts: list[str] = [
		'<meta charset="utf-8" />',
		f"<title>{escape(title)}</title>",
	]
	font_rules = "\n".join(font_face_css(font) for font in fonts)
	if font_rules:
		head_parts.append(f"<style>\n{font_rules}\n</style>")
	head_parts.append(f"<style>{PRINT_CSS}</style>")
	for stylesheet in stylesheets:
		head_parts.append(f"<style>\n{stylesheet}\n</style>")

	body_parts: list[str] = []
	last_index = len(pages) - 1
	for index, page in enumerate(pages):
		css_class = "print-page"
		if index < last_index:
			css_class += " page-break"
		body_parts.append(f'<div class="{css_class}">{page}</div>')

	script = PRINT_SCRIPT % {"wait_ms": STYLESHEET_WAIT_MS}
	return (
		"<!DOCTYPE html>\n"
		'<html lang="ar" dir="rtl">\n'
		f"<head>\n{chr(10).join(head_parts)}\n</head>\n"
		f"<body>\n{chr(10).join(body_parts)}\n"
		f"<script>{script}</script>\n"
		"</body>\n</html>\n"
	)


class BrowserPresenter:
	"""
	Write the document to a temporary HTML file and open it in a web browser.
	"""

	def __init__(self, directory: pathlib.Path | None = None) -> None:
		self.directory = directory
		self.last_path: pathlib.Path | None = None

	def present(self, document: str) -> None:
		try:
			handle = tempfile.NamedTemporaryFile(
				mode="w",
				encoding="utf-8",
				suffix=".html",
				prefix="contract_print_",
				dir=self.directory,
				delete=False,
			)
			with handle:
				handle.write(document)
		except OSError as error:
			raise PresentError(f"Cannot write print document: {error}") from error
		self.last_path = pathlib.Path(handle.name)
		try:
			opened = webbrowser.open(self.last_path.resolve().as_uri(), new=1)
		except webbrowser.Error as error:
			raise PopupBlockedError() from error
		if not opened:
			raise PopupBlockedError()


#============================================
def print_document(
	pages: typing.Sequence[str],
	presenter: Presenter,
	stylesheets: typing.Sequence[str] = (),
	fonts: typing.Sequence[FontResource] = (),
	title: str = "",
) -> str:
	"""
	Assemble a print document and hand it to a presenter once.

	Args:
		pages: HTML page fragments.
		presenter: Presenter that shows the document.
		stylesheets: CSS texts to inline.
		fonts: Fonts to declare.
		title: Document title.

	Returns:
		The assembled document.
	"""
	document = assemble_print_document(pages, stylesheets, fonts, title)
	presenter.present(document)
	return document

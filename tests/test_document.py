import pathlib
import webbrowser

import pytest

import billboard_contract_print.document as document


#============================================
class RecordingPresenter:
	"""
	Presenter that keeps the documents it was given.
	"""

	def __init__(self) -> None:
		self.documents: list[str] = []

	def present(self, text: str) -> None:
		self.documents.append(text)


#============================================
def test_assembled_document_print_rules() -> None:
	"""
	The document fixes A4, forces colors and breaks between pages.
	"""
	html = document.assemble_print_document(["<p>one</p>", "<p>two</p>", "<p>three</p>"])
	assert html.startswith("<!DOCTYPE html>")
	assert "@page { size: A4; margin: 0; }" in html
	assert "print-color-adjust: exact" in html
	assert html.count('class="print-page page-break"') == 2
	assert html.count('class="print-page"') == 1
	assert html.index("<p>one</p>") < html.index("<p>two</p>") < html.index("<p>three</p>")
	assert "window.print()" in html
	assert "document.fonts.ready" in html
	assert "1200" in html


#============================================
def test_fonts_stylesheets_and_title() -> None:
	font = document.FontResource(family="Doran", url="file:///fonts/Doran-Bold.otf", weight="bold", format="opentype")
	html = document.assemble_print_document(
		["<p>page</p>"],
		stylesheets=[".x { color: red; }"],
		fonts=[font],
		title="عقد <1045>",
	)
	assert "font-family: 'Doran'" in html
	assert "url('file:///fonts/Doran-Bold.otf') format('opentype')" in html
	assert ".x { color: red; }" in html
	assert "<title>عقد &lt;1045&gt;</title>" in html
	assert "page-break" not in html.split("<body>")[1]


#============================================
def test_print_document_presents_once() -> None:
	presenter = RecordingPresenter()
	html = document.print_document(["<p>a</p>"], presenter, title="t")
	assert presenter.documents == [html]


#============================================
def test_browser_presenter_writes_and_opens(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
	opened: list[str] = []

	def fake_open(url: str, new: int = 0) -> bool:
		opened.append(url)
		return True

	monkeypatch.setattr(webbrowser, "open", fake_open)
	presenter = document.BrowserPresenter(directory=tmp_path)
	presenter.present("<html>doc</html>")
	assert presenter.last_path.parent == tmp_path
	assert presenter.last_path.read_text(encoding="utf-8") == "<html>doc</html>"
	assert opened == [presenter.last_path.resolve().as_uri()]


#============================================
def test_blocked_browser_raises(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
	"""
	A browser that cannot be opened is reported, never retried.
	"""
	calls: list[str] = []

	def fake_open(url: str, new: int = 0) -> bool:
		calls.append(url)
		return False

	monkeypatch.setattr(webbrowser, "open", fake_open)
	presenter = document.BrowserPresenter(directory=tmp_path)
	with pytest.raises(document.PopupBlockedError, match="Allow popups"):
		document.print_document(["<p>a</p>"], presenter)
	assert len(calls) == 1
	assert isinstance(document.PopupBlockedError(), document.PresentError)

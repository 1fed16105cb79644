"""
Directional run splitting for mixed Arabic and Latin text.
"""

# Standard Library
import dataclasses
import html
import re

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config


ARABIC_LETTER_MARK = bcp.config.ARABIC_LETTER_MARK
DIRECTION_MARKS = (
	bcp.config.ARABIC_LETTER_MARK,
	bcp.config.LEFT_TO_RIGHT_ISOLATE,
	bcp.config.POP_DIRECTIONAL_ISOLATE,
)

# Latin letters, digits and the punctuation that travels with them
LTR_RUN_PATTERN = re.compile(r"[A-Za-z0-9+][A-Za-z0-9 .,&()_+/-]*")


@dataclasses.dataclass(frozen=True)
class TextRun:
	text: str
	ltr: bool = False


#============================================
def split_directional_runs(text: str | None) -> list[TextRun]:
	"""
	Split text into implicit RTL runs and explicit LTR runs.

	Args:
		text: Mixed direction text, None is treated as empty.

	Returns:
		Runs in original order; joining their text gives back the input.
	"""
	value = text or ""
	runs: list[TextRun] = []
	last_index = 0
	for match in LTR_RUN_PATTERN.finditer(value):
		start = match.start()
		if start > last_index:
			runs.append(TextRun(value[last_index:start]))
		runs.append(TextRun(match.group(0), ltr=True))
		last_index = match.end()
	if last_index < len(value):
		runs.append(TextRun(value[last_index:]))
	if not runs:
		runs.append(TextRun(""))
	return runs


#============================================
def rtl_safe(text: str | None) -> str:
	"""
	Prefix text with an Arabic Letter Mark.

	Keeps a line that starts with digits or a date anchored right-to-left.

	Args:
		text: Line text.

	Returns:
		Text with the mark prepended.
	"""
	return f"{ARABIC_LETTER_MARK}{text or ''}"


#============================================
def escape_svg_text(text: str | None) -> str:
	"""
	Escape text for use inside SVG or HTML markup.

	Args:
		text: Raw text.

	Returns:
		Escaped text, quotes included.
	"""
	return html.escape(text or "", quote=True).replace("&#x27;", "&#39;")


#============================================
def to_svg_tspans(text: str | None) -> str:
	"""
	Render mixed direction text as escaped SVG content.

	LTR runs are wrapped in embedded left-to-right tspans so numbers and Latin
	names keep their order inside RTL text.

	Args:
		text: Mixed direction text.

	Returns:
		SVG text content markup.
	"""
	parts: list[str] = []
	for run in split_directional_runs(text):
		if run.ltr:
			parts.append(
				f'<tspan direction="ltr" unicode-bidi="embed">{escape_svg_text(run.text)}</tspan>'
			)
		else:
			parts.append(escape_svg_text(run.text))
	return "".join(parts)


#============================================
def strip_direction_marks(text: str | None) -> str:
	"""
	Remove invisible direction control characters.

	Args:
		text: Text that may carry ALM or isolate marks.

	Returns:
		Text without the marks.
	"""
	value = text or ""
	for mark in DIRECTION_MARKS:
		value = value.replace(mark, "")
	return value


#============================================
def visual_order(text: str | None) -> str:
	"""
	Reorder a right-to-left line for renderers without a bidi engine.

	Run order is reversed and characters inside RTL runs are reversed, so LTR
	runs (numbers, Latin names) keep their reading order. Arabic letters are
	not shaped.

	Args:
		text: Logical order text.

	Returns:
		Visual order text, left to right.
	"""
	runs = split_directional_runs(strip_direction_marks(text))
	if len(runs) == 1 and runs[0].ltr:
		return runs[0].text
	parts: list[str] = []
	for run in reversed(runs):
		if run.ltr:
			parts.append(run.text)
		else:
			parts.append(run.text[::-1])
	return "".join(parts)

"""
Greedy pixel-width line wrapping.
"""

# Standard Library
import re

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config
import billboard_contract_print.measure


TextMeasurer = bcp.measure.TextMeasurer
TERMS_FONT_FAMILY = bcp.config.TERMS_FONT_FAMILY
DEFAULT_TERM_FONT_SIZE = bcp.config.DEFAULT_TERM_FONT_SIZE

WHITESPACE_PATTERN = re.compile(r"\s+")


#============================================
def wrap_block(
	block: str,
	max_width: float,
	font_size: float,
	measurer: TextMeasurer,
	font_family: str,
	font_weight: str | int,
) -> list[str]:
	"""
	Wrap a single paragraph with no hard line breaks.

	Args:
		block: Paragraph text.
		max_width: Width budget in design px.
		font_size: Font size in design px.
		measurer: Text measurer.
		font_family: CSS font family.
		font_weight: CSS font weight.

	Returns:
		Wrapped lines; a word wider than the budget sits alone on its line.
	"""
	lines: list[str] = []
	current_line = ""
	for word in block.split(" "):
		candidate = f"{current_line} {word}" if current_line else word
		width = measurer.measure(candidate, font_size, font_family, font_weight)
		if width > max_width and current_line:
			lines.append(current_line)
			current_line = word
		else:
			current_line = candidate
	if current_line:
		lines.append(current_line)
	return lines


#============================================
def wrap_text(
	text: str | None,
	max_width: float,
	font_size: float = DEFAULT_TERM_FONT_SIZE,
	measurer: TextMeasurer | None = None,
	font_family: str = TERMS_FONT_FAMILY,
	font_weight: str | int = "normal",
) -> list[str]:
	"""
	Wrap text into lines that fit a pixel width budget.

	Hard newlines start new paragraphs and empty paragraphs become empty lines.
	Leading and trailing empty lines are dropped.

	Args:
		text: Text to wrap.
		max_width: Width budget in design px.
		font_size: Font size in design px.
		measurer: Text measurer, the shared default when omitted.
		font_family: CSS font family.
		font_weight: CSS font weight.

	Returns:
		List of lines.
	"""
	if measurer is None:
		measurer = bcp.measure.default_measurer()
	normalized = (text or "").replace("\r\n", "\n")
	lines: list[str] = []
	for block in normalized.split("\n"):
		safe_block = WHITESPACE_PATTERN.sub(" ", block).strip()
		if not safe_block:
			lines.append("")
			continue
		lines.extend(
			wrap_block(safe_block, max_width, font_size, measurer, font_family, font_weight)
		)
	while lines and not lines[0]:
		lines.pop(0)
	while lines and not lines[-1]:
		lines.pop()
	return lines

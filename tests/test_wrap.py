import billboard_contract_print.measure as measure
import billboard_contract_print.wrap as wrap


#============================================
def char_width_measurer() -> measure.TextMeasurer:
	"""
	Build a measurer where every character is half the font size wide.
	"""
	def measure_func(text: str, font_name: str, font_size: float) -> float:
		return len(text) * font_size * 0.5
	return measure.TextMeasurer(measure_func=measure_func)


#============================================
def test_every_multi_word_line_fits() -> None:
	"""
	Lines with more than one word never exceed the budget.
	"""
	measurer = char_width_measurer()
	text = "the quick brown fox jumps over the lazy dog " * 5
	lines = wrap.wrap_text(text, 300, 20, measurer)
	assert len(lines) > 1
	for line in lines:
		if " " in line:
			assert measurer.measure(line, 20, wrap.TERMS_FONT_FAMILY, "normal") <= 300


#============================================
def test_words_are_preserved_in_order() -> None:
	measurer = char_width_measurer()
	text = "alpha beta gamma delta epsilon zeta eta theta"
	lines = wrap.wrap_text(text, 120, 20, measurer)
	assert " ".join(lines).split() == text.split()


#============================================
def test_payment_line_wraps_within_budget() -> None:
	"""
	A payment clause does not fit one 300 px line at 42 px.
	"""
	measurer = char_width_measurer()
	text = "دفعة أولى 52000 د.ل بتاريخ 2025-07-20"
	lines = wrap.wrap_text(text, 300, 42, measurer)
	assert len(lines) >= 2
	assert " ".join(lines) == text
	for line in lines:
		assert measurer.measure(line, 42, wrap.TERMS_FONT_FAMILY, "normal") <= 300


#============================================
def test_long_single_word_sits_alone() -> None:
	measurer = char_width_measurer()
	lines = wrap.wrap_text("a verylongunbreakableword b", 100, 20, measurer)
	assert lines == ["a", "verylongunbreakableword", "b"]


#============================================
def test_hard_newlines_and_blank_edges() -> None:
	"""
	Newlines split blocks, inner blank lines stay, edge blank lines go.
	"""
	measurer = char_width_measurer()
	lines = wrap.wrap_text("\n\nfirst\r\n\nsecond   line\n\n", 1000, 20, measurer)
	assert lines == ["first", "", "second line"]


#============================================
def test_empty_text_gives_no_lines() -> None:
	measurer = char_width_measurer()
	assert wrap.wrap_text("", 300, 20, measurer) == []
	assert wrap.wrap_text(None, 300, 20, measurer) == []


#============================================
def test_wrapping_is_deterministic() -> None:
	measurer = char_width_measurer()
	text = "one two three four five six seven"
	assert wrap.wrap_text(text, 90, 20, measurer) == wrap.wrap_text(text, 90, 20, measurer)

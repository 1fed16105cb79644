import pytest

import billboard_contract_print.bidi as bidi


MIXED_SAMPLES = [
	"",
	"Hello World",
	"مرحبا بالعالم",
	"اللوحة رقم 12 في Tripoli Center",
	"هاتف: +218 91-234-5678",
	"العميل ABC & Co. (ليبيا)",
]


#============================================
@pytest.mark.parametrize("text", MIXED_SAMPLES)
def test_runs_round_trip(text: str) -> None:
	"""
	Joining the runs gives back the input.
	"""
	runs = bidi.split_directional_runs(text)
	assert "".join(run.text for run in runs) == text


#============================================
def test_empty_and_none_give_one_empty_run() -> None:
	assert bidi.split_directional_runs("") == [bidi.TextRun("")]
	assert bidi.split_directional_runs(None) == [bidi.TextRun("")]


#============================================
def test_mixed_text_runs_alternate() -> None:
	"""
	Latin and digit spans are tagged LTR, the rest stays untagged.
	"""
	runs = bidi.split_directional_runs("اللوحة 12 في Tripoli")
	assert [run.ltr for run in runs] == [False, True, False, True]
	assert runs[1].text == "12 "
	assert runs[3].text == "Tripoli"


#============================================
def test_arabic_only_is_single_untagged_run() -> None:
	runs = bidi.split_directional_runs("مرحبا")
	assert runs == [bidi.TextRun("مرحبا")]


#============================================
def test_svg_tspans_escape_and_wrap_ltr() -> None:
	"""
	LTR runs become embedded tspans and markup characters are escaped.
	"""
	markup = bidi.to_svg_tspans("شركة A&B Co")
	assert markup.startswith("شركة ")
	assert markup.endswith('<tspan direction="ltr" unicode-bidi="embed">A&amp;B Co</tspan>')
	escaped = bidi.to_svg_tspans("<script>")
	assert "<script>" not in escaped
	assert escaped.startswith("&lt;")


#============================================
def test_rtl_safe_prefixes_letter_mark() -> None:
	assert bidi.rtl_safe("2024") == "\u061c2024"
	assert bidi.rtl_safe(None) == "\u061c"


#============================================
def test_visual_order_keeps_ltr_runs() -> None:
	"""
	RTL runs are reversed while numbers keep their reading order.
	"""
	assert bidi.visual_order("أب 12") == "12 بأ"
	assert bidi.visual_order("Hello World") == "Hello World"
	assert bidi.visual_order("\u061cأب") == "بأ"

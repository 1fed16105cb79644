import pytest

import billboard_contract_print.config as config
import billboard_contract_print.measure as measure
import billboard_contract_print.terms as terms

import contract_samples


#============================================
def char_width_measurer() -> measure.TextMeasurer:
	def measure_func(text: str, font_name: str, font_size: float) -> float:
		return len(text) * font_size * 0.5
	return measure.TextMeasurer(measure_func=measure_func)


#============================================
def test_replace_variables() -> None:
	"""
	Every known placeholder is replaced from the job.
	"""
	job = contract_samples.sample_job()
	text = terms.replace_variables(
		"{contractNumber} {customerName} {duration} {startDate} {endDate} "
		"{totalAmount} {currency} {billboardsCount} {inclusionText}",
		job,
	)
	assert text == (
		"1045 أحمد علي 90 2025-03-01 2025-06-01 52,000 دينار ليبي 3 "
		"شامل التركيب وغير شامل الطباعة"
	)


#============================================
def test_payments_placeholder_prefers_explicit_text() -> None:
	job = contract_samples.sample_job()
	assert terms.replace_variables("{payments}", job).startswith("دفعة أولى")
	job.payments_text = "نقدا"
	assert terms.replace_variables("{payments}", job) == "نقدا"


#============================================
def test_split_title_line() -> None:
	assert terms.split_title_line("البند الأول: نص") == ("البند الأول:", " نص")
	assert terms.split_title_line("بدون عنوان") == ("", "بدون عنوان")


#============================================
def test_layout_skips_inactive_and_orders_terms() -> None:
	"""
	Inactive terms are skipped and blocks follow term order.
	"""
	job = contract_samples.sample_job()
	job.terms.reverse()
	blocks = terms.layout_terms(job.terms, config.PageSectionSettings(), job, char_width_measurer())
	assert [block.term.term_title for block in blocks] == ["البند الأول", "البند الثاني"]


#============================================
def test_layout_positions_and_gold_line() -> None:
	"""
	Lines sit every 55 px and the gold line spans the measured title.
	"""
	job = contract_samples.sample_job()
	settings = config.PageSectionSettings()
	blocks = terms.layout_terms(job.terms, settings, job, char_width_measurer())
	first = blocks[0]
	assert first.y == settings.terms_start_y
	assert len(first.lines) == 1
	line = first.lines[0]
	assert line.title_part == "البند الأول:"
	title_width = round(len("البند الأول:") * 42 * 0.5)
	assert line.gold_line.width == title_width
	assert line.gold_line.x == settings.terms_start_x - title_width
	assert line.gold_line.height == pytest.approx(55 * 30 / 100)
	assert line.gold_line.y == pytest.approx(line.y - line.gold_line.height / 2)
	second = blocks[1]
	assert second.y == first.y + len(first.lines) * 55 + settings.terms_spacing


#============================================
def test_long_term_wraps_and_advances() -> None:
	"""
	Wrapped terms push the next term down by their line count.
	"""
	job = contract_samples.sample_job()
	job.terms[0].term_content = "كلمة " * 80
	settings = config.PageSectionSettings()
	blocks = terms.layout_terms(job.terms, settings, job, char_width_measurer())
	first = blocks[0]
	assert len(first.lines) > 1
	assert [line.y for line in first.lines] == [first.y + index * 55 for index in range(len(first.lines))]
	assert all(line.gold_line is None for line in first.lines[1:])
	assert blocks[1].y == first.y + len(first.lines) * 55 + settings.terms_spacing


#============================================
def test_hidden_gold_line() -> None:
	job = contract_samples.sample_job()
	settings = config.PageSectionSettings()
	settings.terms_gold_line.visible = False
	blocks = terms.layout_terms(job.terms, settings, job, char_width_measurer())
	assert blocks[0].lines[0].gold_line is None
	assert blocks[0].lines[0].has_title

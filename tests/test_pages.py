import defusedxml.ElementTree as ElementTree
import pytest

import billboard_contract_print.config as config
import billboard_contract_print.measure as measure
import billboard_contract_print.pages as pages

import contract_samples


SVG_NS = "{http://www.w3.org/2000/svg}"


#============================================
def char_width_measurer() -> measure.TextMeasurer:
	def measure_func(text: str, font_name: str, font_size: float) -> float:
		return len(text) * font_size * 0.5
	return measure.TextMeasurer(measure_func=measure_func)


#============================================
def all_text(element) -> str:
	return "".join(element.itertext())


#============================================
def test_first_page_svg_is_well_formed() -> None:
	"""
	The overlay parses as XML and carries the header and active terms only.
	"""
	job = contract_samples.sample_job()
	svg = pages.render_first_page_svg(job, config.PageSectionSettings(), char_width_measurer())
	root = ElementTree.fromstring(svg)
	assert root.tag == f"{SVG_NS}svg"
	assert root.get("viewBox") == "0 0 2480 3508"
	texts = [all_text(element) for element in root.iter(f"{SVG_NS}text")]
	assert "عقد إيجار مواقع إعلانية رقم: 1045 (25-0045) سنة 2025" in texts
	joined = "\n".join(texts)
	assert "البند الأول:" in joined
	assert "لا يظهر" not in joined
	gold_rects = list(root.iter(f"{SVG_NS}rect"))
	assert len(gold_rects) == 2


#============================================
def test_offer_header() -> None:
	job = contract_samples.sample_job()
	job.contract.is_offer = True
	assert pages.contract_title(job.contract) == "عرض سعر رقم: 1045 (25-0045) - صالح لمدة 24 ساعة"


#============================================
def test_user_text_is_escaped() -> None:
	"""
	Markup in customer data cannot break the SVG.
	"""
	job = contract_samples.sample_job()
	job.contract.customer_company = 'Evil <script>alert("x")</script> & Co'
	svg = pages.render_first_page_svg(job, config.PageSectionSettings(), char_width_measurer())
	root = ElementTree.fromstring(svg)
	assert "<script>" not in svg
	assert any("Evil <script>" in all_text(element) for element in root.iter(f"{SVG_NS}text"))


#============================================
def test_hijri_line_only_when_given() -> None:
	job = contract_samples.sample_job()
	sections = config.PageSectionSettings()
	svg = pages.render_first_page_svg(job, sections, char_width_measurer())
	assert "الموافق" not in svg
	job.contract.hijri_date = "1 رمضان 1446"
	svg = pages.render_first_page_svg(job, sections, char_width_measurer())
	assert "الموافق: 1 رمضان 1446" in svg


#============================================
def test_hidden_sections_are_skipped() -> None:
	job = contract_samples.sample_job()
	sections = config.PageSectionSettings()
	sections.header.visible = False
	svg = pages.render_first_page_svg(job, sections, char_width_measurer())
	assert "عقد إيجار" not in svg


#============================================
def test_table_pages_paginate_and_number_rows() -> None:
	"""
	25 rows at 12 per page give three pages numbered across pages.
	"""
	job = contract_samples.sample_job(25)
	settings = config.TemplateSettings()
	fragments = pages.render_table_pages_html(job.billboards, settings, 12)
	assert len(fragments) == 3
	assert fragments[0].count("<tr ") == 13
	assert fragments[2].count("<tr ") == 2
	assert 'z-index: 1;">13</div>' in fragments[1]
	assert settings.sections.table_term.term_title in fragments[0]
	assert settings.sections.table_term.term_title not in fragments[1]


#============================================
def test_table_page_cells() -> None:
	"""
	QR links, fallback images and face words end up in the cells.
	"""
	job = contract_samples.sample_job(2)
	settings = config.TemplateSettings()
	fragment = pages.render_table_pages_html(job.billboards, settings)[0]
	assert "data:image/png;base64," in fragment
	assert 'href="https://maps.example.com/?q=1"' in fragment
	assert "/logofaresgold.svg" in fragment
	assert "وجهين" in fragment
	assert "onerror=\"this.style.display='none'\"" in fragment
	assert "السعر" not in fragment


#============================================
def test_discounted_price() -> None:
	job = contract_samples.sample_job(1)
	row = job.billboards[0]
	row.price = "4,000"
	row.original_price = "5,000"
	row.has_discount = True
	fragment = pages.render_table_pages_html(job.billboards, config.TemplateSettings())[0]
	assert "السعر" in fragment
	assert "line-through" in fragment
	assert "5,000" in fragment


#============================================
def test_no_rows_no_table_pages() -> None:
	assert pages.render_table_pages_html([], config.TemplateSettings()) == []


#============================================
def test_solid_fill_data_uri() -> None:
	uri = pages.solid_fill_data_uri("#1a1a2e")
	assert uri.startswith("data:image/svg+xml;charset=utf-8,")
	assert "%231a1a2e" in uri
	assert "%23000000" in pages.solid_fill_data_uri("")


#============================================
def test_contract_html_fragments() -> None:
	job = contract_samples.sample_job(13)
	fragments = pages.render_contract_html(job, config.TemplateSettings(), char_width_measurer())
	assert len(fragments) == 3
	assert "<svg" in fragments[0]
	assert "/bgc1.svg" in fragments[0]
	assert "/bgc2.svg" in fragments[1]


#============================================
def test_document_title_counts_sizes() -> None:
	job = contract_samples.sample_job(3)
	title = pages.document_title(job)
	assert "1045" in title
	assert "3 4×12" in title


#============================================
def test_zero_rows_per_page_is_rejected() -> None:
	"""
	An explicit zero is not replaced by the configured maximum.
	"""
	job = contract_samples.sample_job(3)
	with pytest.raises(ValueError):
		pages.render_table_pages_html(job.billboards, config.TemplateSettings(), 0)
	with pytest.raises(ValueError):
		pages.render_contract_html(job, config.TemplateSettings(), rows_per_page=0)

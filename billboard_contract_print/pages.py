"""
SVG and HTML page fragments for contract printing.
"""

# Standard Library
import urllib.parse

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.bidi
import billboard_contract_print.config
import billboard_contract_print.contract_lib
import billboard_contract_print.measure
import billboard_contract_print.paginate
import billboard_contract_print.qr_image
import billboard_contract_print.table
import billboard_contract_print.terms


ContractJob = bcp.contract_lib.ContractJob
ContractData = bcp.contract_lib.ContractData
BillboardRow = bcp.contract_lib.BillboardRow
TemplateSettings = bcp.config.TemplateSettings
PageSectionSettings = bcp.config.PageSectionSettings
TableColumn = bcp.config.TableColumn
TextMeasurer = bcp.measure.TextMeasurer
QRCache = bcp.qr_image.QRCache

escape = bcp.bidi.escape_svg_text
rtl_safe = bcp.bidi.rtl_safe
to_svg_tspans = bcp.bidi.to_svg_tspans

DESIGN_WIDTH = bcp.config.DESIGN_WIDTH
DESIGN_HEIGHT = bcp.config.DESIGN_HEIGHT
TERMS_FONT_FAMILY = bcp.config.TERMS_FONT_FAMILY
ARABIC_LETTER_MARK = bcp.config.ARABIC_LETTER_MARK
PARTY_TITLE_SIZE_BOOST = bcp.config.PARTY_TITLE_SIZE_BOOST
DATE_LINE_FACTOR = bcp.config.DATE_LINE_FACTOR
TABLE_FONT_STACK = "'Doran', 'Noto Sans Arabic', Arial, sans-serif"
PAGE_CONTAINER_CLASS = "contract-preview-container"


#============================================
def solid_fill_data_uri(fill: str | None) -> str:
	"""
	Build an SVG data URI filled with a single color.

	Cell backgrounds are drawn as images so they print even when the browser
	skips background colors.

	Args:
		fill: CSS color, black when blank.

	Returns:
		data:image/svg+xml URI.
	"""
	safe_fill = (fill or "").strip() or "#000000"
	svg = (
		'<svg xmlns="http://www.w3.org/2000/svg" width="8" height="8">'
		f'<rect width="100%" height="100%" fill="{safe_fill}"/></svg>'
	)
	return "data:image/svg+xml;charset=utf-8," + urllib.parse.quote(svg, safe="")


#============================================
def contract_title(contract: ContractData) -> str:
	"""
	Build the first page header line.

	Args:
		contract: Contract data.

	Returns:
		Header text for an offer or a contract.
	"""
	yearly = f" ({contract.yearly_code})" if contract.yearly_code else ""
	if contract.is_offer:
		return f"عرض سعر رقم: {contract.contract_number}{yearly} - صالح لمدة 24 ساعة"
	return f"عقد إيجار مواقع إعلانية رقم: {contract.contract_number}{yearly} سنة {contract.year}"


#============================================
def _svg_text(
	x: float,
	y: float,
	font_size: float,
	content: str,
	anchor: str = "end",
	weight: str = "normal",
	fill: str = "#000",
	rtl: bool = False,
	plaintext: bool = False,
) -> str:
	"""
	Build one SVG text element; content must already be escaped.
	"""
	extra = ' direction="rtl"' if rtl else ""
	if rtl or plaintext:
		extra += ' style="unicode-bidi: plaintext;"'
	return (
		f'<text x="{x:g}" y="{y:g}" font-family="{TERMS_FONT_FAMILY}" font-weight="{weight}" '
		f'font-size="{font_size:g}" fill="{fill}" text-anchor="{anchor}" '
		f'dominant-baseline="middle"{extra}>{content}</text>'
	)


#============================================
def render_terms_svg(blocks: list, settings: PageSectionSettings) -> str:
	"""
	Render laid out term blocks as SVG elements.

	Args:
		blocks: TermBlock list from layout_terms().
		settings: Page section settings.

	Returns:
		SVG markup.
	"""
	parts: list[str] = []
	for block in blocks:
		for line in block.lines:
			if line.gold_line is not None:
				rect = line.gold_line
				parts.append(
					f'<rect x="{rect.x:g}" y="{rect.y:g}" width="{rect.width:g}" '
					f'height="{rect.height:g}" fill="{rect.color}" rx="2" />'
				)
			if line.has_title:
				parts.append(
					f'<text x="{block.x:g}" y="{line.y:g}" font-family="{TERMS_FONT_FAMILY}" '
					f'font-size="{block.font_size:g}" fill="#000" text-anchor="end" '
					'dominant-baseline="middle" style="unicode-bidi: plaintext;">'
					f"<tspan>{ARABIC_LETTER_MARK}</tspan>"
					f'<tspan font-weight="{settings.terms_title_weight}">{escape(line.title_part)}</tspan>'
					f'<tspan font-weight="{settings.terms_content_weight}">{escape(line.content_part)}</tspan>'
					"</text>"
				)
				continue
			parts.append(
				_svg_text(
					block.x,
					line.y,
					block.font_size,
					escape(rtl_safe(line.text)),
					weight=settings.terms_content_weight,
					plaintext=True,
				)
			)
	return "".join(parts)


#============================================
def render_first_page_svg(
	job: ContractJob,
	settings: PageSectionSettings,
	measurer: TextMeasurer | None = None,
) -> str:
	"""
	Render the contract first page overlay as an SVG document.

	Args:
		job: Contract print job.
		settings: Page section settings.
		measurer: Text measurer for term wrapping.

	Returns:
		SVG markup sized to the design space.
	"""
	contract = job.contract
	parts: list[str] = []

	header = settings.header
	if header.visible:
		parts.append(
			_svg_text(
				header.x,
				header.y,
				header.font_size,
				escape(contract_title(contract)),
				anchor=header.text_align or "middle",
				weight="bold",
			)
		)

	date = settings.date
	if date.visible:
		parts.append(
			_svg_text(
				date.x,
				date.y,
				date.font_size,
				f"التاريخ: {escape(contract.start_date)}",
				anchor="middle",
				weight="bold",
			)
		)
		if contract.hijri_date:
			parts.append(
				_svg_text(
					date.x,
					date.y + date.font_size * DATE_LINE_FACTOR,
					date.font_size,
					f"الموافق: {escape(contract.hijri_date)}",
					anchor="middle",
					weight="bold",
				)
			)

	ad_type = settings.ad_type
	if ad_type.visible:
		parts.append(
			_svg_text(
				ad_type.x,
				ad_type.y,
				ad_type.font_size,
				escape(f"نوع الإعلان: {contract.ad_type or 'غير محدد'}"),
				anchor="start",
				weight="bold",
				fill="#1a1a2e",
				rtl=True,
			)
		)

	first_party = settings.first_party
	if first_party.visible:
		party_data = settings.first_party_data
		parts.append(
			_svg_text(
				first_party.x,
				first_party.y,
				first_party.font_size + PARTY_TITLE_SIZE_BOOST,
				escape(f"الطرف الأول: {party_data.company_name}، {party_data.address}"),
				anchor=first_party.text_align or "end",
				weight="bold",
			)
		)
		parts.append(
			_svg_text(
				first_party.x,
				first_party.y + first_party.line_spacing,
				first_party.font_size,
				escape(party_data.representative),
				anchor=first_party.text_align or "end",
			)
		)

	second_party = settings.second_party
	if second_party.visible:
		company = contract.customer_company or contract.customer_name
		parts.append(
			_svg_text(
				second_party.x,
				second_party.y,
				second_party.font_size,
				escape("الطرف الثاني، ") + to_svg_tspans(rtl_safe(company)),
				anchor="start",
				weight="bold",
				rtl=True,
			)
		)

	customer = settings.second_party_customer
	if customer.visible:
		content = (
			escape("يمثلها السيد ")
			+ to_svg_tspans(rtl_safe(contract.customer_name))
			+ escape(" - هاتف: ")
			+ to_svg_tspans(rtl_safe(contract.customer_phone or "غير محدد"))
		)
		parts.append(
			_svg_text(
				customer.x,
				customer.y,
				customer.font_size,
				content,
				anchor="start",
				rtl=True,
			)
		)

	blocks = bcp.terms.layout_terms(job.terms, settings, job, measurer)
	parts.append(render_terms_svg(blocks, settings))

	body = "".join(parts)
	return (
		f'<svg class="overlay-svg" viewBox="0 0 {DESIGN_WIDTH} {DESIGN_HEIGHT}" '
		'preserveAspectRatio="xMidYMid slice" xmlns="http://www.w3.org/2000/svg" '
		'style="position: absolute; inset: 0; width: 100%; height: 100%; z-index: 10;">'
		f"{body}</svg>"
	)


#============================================
def render_first_page_html(
	job: ContractJob,
	settings: TemplateSettings,
	measurer: TextMeasurer | None = None,
) -> str:
	"""
	Render the first page fragment: background image plus SVG overlay.

	Args:
		job: Contract print job.
		settings: Template settings.
		measurer: Text measurer.

	Returns:
		HTML fragment.
	"""
	svg = render_first_page_svg(job, settings.sections, measurer)
	return (
		f'<div class="{PAGE_CONTAINER_CLASS}" style="position: relative; width: {DESIGN_WIDTH}px; '
		f'height: {DESIGN_HEIGHT}px; overflow: hidden; background: white;">'
		f'<img src="{escape(settings.background_url)}" alt="قالب العقد" '
		"onerror=\"this.style.display='none'\" "
		'style="position: absolute; inset: 0; width: 100%; height: 100%; object-fit: cover; z-index: 0;" />'
		f"{svg}</div>"
	)


#============================================
def render_table_term_html(sections: PageSectionSettings) -> str:
	"""
	Render the heading shown above the first billboard table page.

	Args:
		sections: Page section settings.

	Returns:
		HTML fragment, empty when the table term is hidden.
	"""
	term = sections.table_term
	if not term.visible:
		return ""
	gold = ""
	if term.gold_line.visible:
		gold = (
			'<span style="position: absolute; left: 0; right: 0; top: 50%; '
			f"transform: translateY(-50%); height: {term.gold_line.height_percent:g}%; "
			f'background-color: {term.gold_line.color}; border-radius: 2px; z-index: 0;"></span>'
		)
	return (
		f'<div style="text-align: center; margin-bottom: {term.margin_bottom:g}px; '
		f"font-family: {TABLE_FONT_STACK}; direction: rtl; position: relative; "
		f'left: {term.position_x:g}px; top: {term.position_y:g}px;">'
		f'<h2 style="font-size: {term.font_size:g}px; color: {term.color}; margin: 0; display: inline-block;">'
		f'<span style="font-weight: {term.title_font_weight}; position: relative; display: inline-block;">'
		f'{gold}<span style="position: relative; z-index: 1;">{escape(term.term_title)}</span></span>'
		f'<span style="font-weight: {term.content_font_weight}; margin-right: 8px;">'
		f"{escape(term.term_content)}</span></h2></div>"
	)


#============================================
def _fill_image(color: str) -> str:
	return (
		f'<img src="{solid_fill_data_uri(color)}" alt="" aria-hidden="true" '
		'style="position: absolute; inset: 0; width: 100%; height: 100%; object-fit: cover; '
		'z-index: 0; pointer-events: none;" />'
	)


#============================================
def render_cell_content(
	column: TableColumn,
	row: BillboardRow,
	global_index: int,
	sections: PageSectionSettings,
	geometry: bcp.table.TableGeometry,
	qr_cache: QRCache,
) -> str:
	"""
	Render the inner HTML of one data cell.

	Args:
		column: Table column.
		row: Billboard row.
		global_index: 0-based index of the row in the document.
		sections: Page section settings.
		geometry: Table geometry.
		qr_cache: QR image cache.

	Returns:
		HTML fragment.
	"""
	fallback = sections.fallback_settings
	if column.key == "image":
		image_url = bcp.table.resolve_image(row, fallback)
		if not image_url:
			return ""
		return (
			f'<img src="{escape(image_url)}" alt="صورة اللوحة" '
			"onerror=\"this.style.display='none'\" "
			f'style="height: {geometry.image_height:g}px; max-height: {geometry.image_height:g}px; '
			'width: auto; object-fit: contain; display: block; margin: 0 auto;" />'
		)
	if column.key == "location":
		link = bcp.table.resolve_map_link(row, fallback)
		if not link:
			return ""
		qr_uri = qr_cache.data_uri(link)
		if not qr_uri:
			return ""
		return (
			f'<a href="{escape(link)}" target="_blank" rel="noopener" style="display:block;">'
			f'<img src="{qr_uri}" alt="QR" style="width:{geometry.qr_size:g}px; '
			f'height:{geometry.qr_size:g}px; object-fit:contain; display:block; margin:0 auto;" /></a>'
		)
	if column.key == "price" and row.has_discount and row.original_price and sections.discount_display.enabled:
		discount = sections.discount_display
		return (
			'<div style="display: flex; flex-direction: column; align-items: center; '
			'justify-content: center; line-height: 1.2;">'
			f'<span style="font-size: {discount.original_price_font_size:g}px; '
			f"color: {discount.original_price_color}; text-decoration: line-through; "
			f"text-decoration-color: {discount.strikethrough_color}; "
			f'text-decoration-thickness: {discount.strikethrough_width:g}px;">'
			f"{escape(row.original_price)}</span>"
			f'<span style="font-size: {discount.discounted_price_font_size:g}px; '
			f'color: {discount.discounted_price_color}; font-weight: bold;">{escape(row.price)}</span>'
			"</div>"
		)
	text = bcp.table.cell_text(column.key, row, global_index)
	if column.key == "faces" and bcp.table.is_numeric_text(row.faces) and text == row.faces:
		return f'<span class="num">{escape(text)}</span>'
	return escape(text)


#============================================
def render_table_page_html(
	rows: list[BillboardRow],
	columns: list[TableColumn],
	settings: TemplateSettings,
	page_index: int,
	rows_per_page: int,
	qr_cache: QRCache,
	show_table_term: bool = True,
) -> str:
	"""
	Render one billboard table page fragment.

	Args:
		rows: Rows on this page.
		columns: Visible columns with final widths.
		settings: Template settings.
		page_index: 0-based table page index.
		rows_per_page: Rows per page used for pagination.
		qr_cache: QR image cache.
		show_table_term: Whether the table heading may be shown on page 0.

	Returns:
		HTML fragment.
	"""
	sections = settings.sections
	table_settings = sections.table_settings
	geometry = bcp.table.compute_geometry(table_settings, DESIGN_WIDTH)
	border = f"{table_settings.border_width:g}px solid {table_settings.border_color}"

	header_cells: list[str] = []
	for column in columns:
		background, foreground = bcp.table.header_colors(column, table_settings)
		font_size = column.header_font_size or table_settings.header_font_size
		header_cells.append(
			f'<th style="width: {column.width:g}%; background-color: {background}; color: {foreground}; '
			f"padding: {bcp.table.column_padding(column, table_settings):g}px; border: {border}; "
			f"font-size: {font_size:g}px; font-weight: {table_settings.header_font_weight}; "
			f"text-align: {table_settings.header_text_align}; vertical-align: middle; "
			f'line-height: {bcp.table.column_line_height(column):g}; overflow: hidden; position: relative;">'
			f'{_fill_image(background)}<span style="position: relative; z-index: 1;">'
			f"{escape(column.label)}</span></th>"
		)

	body_rows: list[str] = []
	for row_index, row in enumerate(rows):
		global_index = bcp.paginate.global_row_index(page_index, rows_per_page, row_index)
		cells: list[str] = []
		for column in columns:
			background, foreground = bcp.table.cell_colors(column, row_index, table_settings)
			highlighted = bcp.table.is_highlighted(column, table_settings)
			no_padding = column.key in ("image", "location")
			padding = "0" if no_padding else f"{bcp.table.column_padding(column, table_settings):g}px"
			font_size = column.font_size or table_settings.font_size
			content = render_cell_content(
				column,
				row,
				global_index,
				sections,
				geometry,
				qr_cache,
			)
			cells.append(
				f'<td style="background-color: {background}; color: {foreground}; '
				f"font-size: {font_size:g}px; font-weight: {table_settings.font_weight}; "
				f"text-align: {column.text_align or table_settings.cell_text_align}; "
				f"padding: {padding}; border: {border}; vertical-align: middle; "
				f"line-height: {bcp.table.column_line_height(column):g}; white-space: normal; "
				"word-break: break-word; overflow: hidden; position: relative; "
				f'height: {geometry.row_height:g}px;">'
				f"{_fill_image(background) if highlighted else ''}"
				f'<div style="position: relative; z-index: 1;">{content}</div></td>'
			)
		body_rows.append(f'<tr style="height: {geometry.row_height:g}px;">{"".join(cells)}</tr>')

	table_term = ""
	if page_index == 0 and show_table_term:
		table_term = render_table_term_html(sections)
	background_image = ""
	if settings.table_background_url:
		background_image = (
			f'<img src="{escape(settings.table_background_url)}" alt="قالب جدول اللوحات" '
			"onerror=\"this.style.display='none'\" "
			'style="position:absolute; inset:0; width:100%; height:100%; object-fit:cover;" />'
		)
	col_group = "".join(f'<col style="width: {column.width:g}%;" />' for column in columns)
	left_percent = (100.0 - (table_settings.table_width or 90.0)) / 2.0
	return (
		f'<div class="{PAGE_CONTAINER_CLASS} table-page" style="width: {DESIGN_WIDTH}px; '
		f'height: {DESIGN_HEIGHT}px; position: relative; overflow: hidden; background-color: #ffffff;">'
		f"{background_image}"
		f'<div style="position: absolute; top: {geometry.top:g}px; left: {left_percent:g}%; '
		f'width: {table_settings.table_width:g}%; z-index: 20; overflow: hidden;">'
		f"{table_term}"
		f'<table dir="rtl" style="font-size: {table_settings.font_size:g}px; '
		f"font-family: {TABLE_FONT_STACK}; direction: rtl; table-layout: fixed; "
		f'border-collapse: collapse; width: 100%; border: {border}; background-color: #ffffff;">'
		f"<colgroup>{col_group}</colgroup>"
		f'<thead><tr style="height: {geometry.header_row_height:g}px;">{"".join(header_cells)}</tr></thead>'
		f'<tbody>{"".join(body_rows)}</tbody></table></div></div>'
	)


#============================================
def render_table_pages_html(
	rows: list[BillboardRow],
	settings: TemplateSettings,
	rows_per_page: int | None = None,
	qr_cache: QRCache | None = None,
	show_table_term: bool = True,
) -> list[str]:
	"""
	Paginate billboard rows and render every table page.

	Args:
		rows: All billboard rows.
		settings: Template settings.
		rows_per_page: Rows per page, the configured max rows when omitted.
		qr_cache: QR image cache, a new one when omitted.
		show_table_term: Whether the first page shows the table heading.

	Returns:
		HTML fragments, empty when there are no rows.
	"""
	table_settings = settings.sections.table_settings
	if rows_per_page is None:
		rows_per_page = table_settings.max_rows or 12
	if qr_cache is None:
		qr_cache = QRCache(table_settings.qr_foreground_color, table_settings.qr_background_color)
	columns = bcp.table.prepare_columns(table_settings, rows)
	pages = bcp.paginate.paginate(rows, rows_per_page)
	fragments: list[str] = []
	for page_index, page_rows in enumerate(pages):
		fragments.append(
			render_table_page_html(
				page_rows,
				columns,
				settings,
				page_index,
				rows_per_page,
				qr_cache,
				show_table_term,
			)
		)
	return fragments


#============================================
def render_contract_html(
	job: ContractJob,
	settings: TemplateSettings,
	measurer: TextMeasurer | None = None,
	rows_per_page: int | None = None,
) -> list[str]:
	"""
	Render every page fragment of one contract.

	Args:
		job: Contract print job.
		settings: Template settings.
		measurer: Text measurer.
		rows_per_page: Rows per table page override.

	Returns:
		First page fragment followed by the table page fragments.
	"""
	fragments = [render_first_page_html(job, settings, measurer)]
	fragments.extend(render_table_pages_html(job.billboards, settings, rows_per_page))
	return fragments


#============================================
def document_title(job: ContractJob) -> str:
	"""
	Build the print window title with a billboard size summary.

	Args:
		job: Contract print job.

	Returns:
		Title text with LTR isolates around numbers and sizes.
	"""
	lri = bcp.config.LEFT_TO_RIGHT_ISOLATE
	pdi = bcp.config.POP_DIRECTIONAL_ISOLATE
	contract = job.contract
	size_counts: dict[str, int] = {}
	for row in job.billboards:
		size = row.size or "غير محدد"
		size_counts[size] = size_counts.get(size, 0) + 1
	sizes = " + ".join(
		f"{lri}{count} {size.replace('x', '×').replace('X', '×')}{pdi}"
		for size, count in size_counts.items()
	)
	if not sizes:
		sizes = f"{len(job.billboards) or 1} لوحة"
	kind = "عرض سعر" if contract.is_offer else "عقد"
	yearly = f" {lri}({contract.yearly_code}){pdi}" if contract.yearly_code else ""
	return (
		f"{kind} {lri}#{contract.contract_number}{pdi}{yearly} • {contract.ad_type or 'غير محدد'} • "
		f"{contract.customer_name} • {sizes} • {contract.currency_name}"
	)

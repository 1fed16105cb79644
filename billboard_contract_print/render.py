"""
PDF rendering of contract pages.
"""

# Standard Library
import dataclasses
import io
import pathlib

# PIP3 modules
import PIL.Image
import pypdf
import reportlab.lib.pagesizes
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.bidi
import billboard_contract_print.config
import billboard_contract_print.contract_lib
import billboard_contract_print.measure
import billboard_contract_print.pages
import billboard_contract_print.paginate
import billboard_contract_print.qr_image
import billboard_contract_print.table
import billboard_contract_print.terms


ContractJob = bcp.contract_lib.ContractJob
BillboardRow = bcp.contract_lib.BillboardRow
TemplateSettings = bcp.config.TemplateSettings
PageSectionSettings = bcp.config.PageSectionSettings
TableColumn = bcp.config.TableColumn
RenderResult = bcp.config.RenderResult
TextMeasurer = bcp.measure.TextMeasurer
QRCache = bcp.qr_image.QRCache

visual_order = bcp.bidi.visual_order

DESIGN_WIDTH = bcp.config.DESIGN_WIDTH
TERMS_FONT_FAMILY = bcp.config.TERMS_FONT_FAMILY
DEFAULT_FONT_REGULAR = bcp.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = bcp.config.DEFAULT_FONT_BOLD
DEFAULT_TEXT_MIN_SIZE = bcp.config.DEFAULT_TEXT_MIN_SIZE
PARTY_TITLE_SIZE_BOOST = bcp.config.PARTY_TITLE_SIZE_BOOST
DATE_LINE_FACTOR = bcp.config.DATE_LINE_FACTOR
TEXT_MIDDLE_BASELINE_SHIFT = bcp.config.TEXT_MIDDLE_BASELINE_SHIFT
TABLE_TERM_LINE_FACTOR = bcp.config.TABLE_TERM_LINE_FACTOR


@dataclasses.dataclass
class PageFrame:
	"""
	Maps design px (origin top left) onto PDF points (origin bottom left).
	"""

	page_width: float
	page_height: float

	@property
	def scale(self) -> float:
		return self.page_width / DESIGN_WIDTH

	def x(self, value: float) -> float:
		return value * self.scale

	def y(self, value: float) -> float:
		return self.page_height - value * self.scale

	def size(self, value: float) -> float:
		return value * self.scale


#============================================
def a4_frame() -> PageFrame:
	page_width, page_height = reportlab.lib.pagesizes.A4
	return PageFrame(page_width=page_width, page_height=page_height)


#============================================
def compute_align_offset(available: float, scaled: float, align: str) -> float:
	"""
	Compute an alignment offset.

	Args:
		available: Available dimension.
		scaled: Scaled dimension.
		align: Alignment string.

	Returns:
		Offset in points.
	"""
	normalized = align.strip().upper()
	if normalized in ("LEFT", "BOTTOM"):
		return 0.0
	if normalized in ("RIGHT", "TOP"):
		return max(0.0, available - scaled)
	return max(0.0, (available - scaled) / 2.0)


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC" or "#ABC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range, black when unparseable.
	"""
	if not value or not value.startswith("#"):
		return (0.0, 0.0, 0.0)
	digits = value[1:]
	if len(digits) == 3:
		digits = "".join(char * 2 for char in digits)
	if len(digits) != 6:
		return (0.0, 0.0, 0.0)
	try:
		red = int(digits[0:2], 16) / 255.0
		green = int(digits[2:4], 16) / 255.0
		blue = int(digits[4:6], 16) / 255.0
	except ValueError:
		return (0.0, 0.0, 0.0)
	return (red, green, blue)


#============================================
def anchor_alignment(anchor: str | None, rtl: bool = False) -> str:
	"""
	Map an SVG text-anchor onto a horizontal alignment.

	Args:
		anchor: "start", "middle" or "end".
		rtl: Whether the text element runs right to left.

	Returns:
		"LEFT", "RIGHT" or "CENTER".
	"""
	normalized = (anchor or "").strip().lower()
	if normalized == "middle":
		return "CENTER"
	if normalized == "end":
		return "LEFT" if rtl else "RIGHT"
	return "RIGHT" if rtl else "LEFT"


#============================================
def font_for(measurer: TextMeasurer, weight: str | int | None) -> str:
	"""
	Pick the ReportLab font used to draw contract text.

	Args:
		measurer: Text measurer holding registered fonts.
		weight: CSS font weight.

	Returns:
		ReportLab font name.
	"""
	font_name = measurer.resolve_font(TERMS_FONT_FAMILY, weight)
	if font_name is not None:
		return font_name
	if bcp.measure.normalize_weight(weight) >= 600:
		return DEFAULT_FONT_BOLD
	return DEFAULT_FONT_REGULAR


#============================================
def draw_design_text(
	pdf: reportlab.pdfgen.canvas.Canvas,
	frame: PageFrame,
	text: str,
	x: float,
	y: float,
	font_name: str,
	font_size: float,
	align: str = "RIGHT",
	color: str = "#000000",
) -> float:
	"""
	Draw one line of text positioned in design px.

	The y coordinate is the vertical middle of the line.

	Args:
		pdf: ReportLab canvas.
		frame: Page frame.
		text: Text in logical order.
		x: Anchor x in design px.
		y: Middle y in design px.
		font_name: ReportLab font name.
		font_size: Font size in design px.
		align: "LEFT", "RIGHT" or "CENTER" relative to x.
		color: Text color.

	Returns:
		Drawn width in points.
	"""
	line = visual_order(text)
	if not line:
		return 0.0
	size = frame.size(font_size)
	pdf.setFont(font_name, size)
	red, green, blue = parse_hex_color(color)
	pdf.setFillColorRGB(red, green, blue)
	pdf_x = frame.x(x)
	pdf_y = frame.y(y + font_size * TEXT_MIDDLE_BASELINE_SHIFT)
	if align == "CENTER":
		pdf.drawCentredString(pdf_x, pdf_y, line)
	elif align == "RIGHT":
		pdf.drawRightString(pdf_x, pdf_y, line)
	else:
		pdf.drawString(pdf_x, pdf_y, line)
	return pdf.stringWidth(line, font_name, size)


#============================================
def draw_fitted_text(
	pdf: reportlab.pdfgen.canvas.Canvas,
	text: str,
	box: tuple[float, float, float, float],
	font_name: str,
	font_size: float,
	align: str = "CENTER",
	min_font_size: float = DEFAULT_TEXT_MIN_SIZE,
	color: str = "#000000",
) -> float:
	"""
	Draw a single line centered vertically in a box, shrinking it to fit.

	Args:
		pdf: ReportLab canvas.
		text: Text in logical order.
		box: (x, y, width, height) in points, y at the bottom.
		font_name: ReportLab font name.
		font_size: Preferred font size in points.
		align: Horizontal alignment inside the box.
		min_font_size: Smallest font size in points.
		color: Text color.

	Returns:
		Font size used.
	"""
	line = visual_order(text)
	if not line:
		return font_size
	box_x, box_y, box_width, box_height = box
	width = pdf.stringWidth(line, font_name, font_size)
	if width > box_width and width > 0:
		font_size = max(min_font_size, font_size * box_width / width)
	if font_size > box_height:
		font_size = max(min_font_size, box_height)
	width = pdf.stringWidth(line, font_name, font_size)
	pdf.setFont(font_name, font_size)
	red, green, blue = parse_hex_color(color)
	pdf.setFillColorRGB(red, green, blue)
	text_x = box_x + compute_align_offset(box_width, width, align)
	# baseline sits above the descenders
	text_y = box_y + (box_height - font_size) / 2.0 + font_size * 0.2
	pdf.drawString(text_x, text_y, line)
	return font_size


#============================================
def draw_design_rect(
	pdf: reportlab.pdfgen.canvas.Canvas,
	frame: PageFrame,
	x: float,
	y: float,
	width: float,
	height: float,
	fill: str | None = None,
	stroke: str | None = None,
	line_width: float = 1.0,
) -> None:
	"""
	Draw a rectangle given in design px.

	Args:
		pdf: ReportLab canvas.
		frame: Page frame.
		x: Left edge in design px.
		y: Top edge in design px.
		width: Width in design px.
		height: Height in design px.
		fill: Fill color, no fill when None.
		stroke: Stroke color, no stroke when None.
		line_width: Stroke width in design px.
	"""
	if fill is not None:
		red, green, blue = parse_hex_color(fill)
		pdf.setFillColorRGB(red, green, blue)
	if stroke is not None:
		red, green, blue = parse_hex_color(stroke)
		pdf.setStrokeColorRGB(red, green, blue)
		pdf.setLineWidth(frame.size(line_width))
	pdf.rect(
		frame.x(x),
		frame.y(y + height),
		frame.size(width),
		frame.size(height),
		stroke=1 if stroke is not None else 0,
		fill=1 if fill is not None else 0,
	)


#============================================
def load_local_image(
	url: str,
	base_dir: pathlib.Path | None,
	image_cache: dict[str, reportlab.lib.utils.ImageReader | None],
) -> reportlab.lib.utils.ImageReader | None:
	"""
	Load an image referenced by a local path.

	Remote URLs and unreadable files give None, the same way a broken image
	hides itself in the HTML output.

	Args:
		url: Image path or URL.
		base_dir: Directory that site-relative paths ("/logo.svg") resolve against.
		image_cache: Cache keyed by url.

	Returns:
		ImageReader or None.
	"""
	if url in image_cache:
		return image_cache[url]
	image_reader = None
	if url and "://" not in url and not url.startswith("data:"):
		path = pathlib.Path(url)
		if base_dir is not None and not path.is_file():
			path = base_dir / url.lstrip("/")
		if path.is_file():
			try:
				image = PIL.Image.open(path)
				image.load()
				image_reader = reportlab.lib.utils.ImageReader(image)
			except (OSError, PIL.UnidentifiedImageError):
				image_reader = None
	image_cache[url] = image_reader
	return image_reader


#============================================
def draw_first_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	frame: PageFrame,
	job: ContractJob,
	sections: PageSectionSettings,
	measurer: TextMeasurer,
) -> None:
	"""
	Draw the contract first page: header, parties and terms.

	Args:
		pdf: ReportLab canvas.
		frame: Page frame.
		job: Contract print job.
		sections: Page section settings.
		measurer: Text measurer, also the font registry.
	"""
	contract = job.contract
	regular_font = font_for(measurer, "normal")
	bold_font = font_for(measurer, "bold")

	header = sections.header
	if header.visible:
		draw_design_text(
			pdf,
			frame,
			bcp.pages.contract_title(contract),
			header.x,
			header.y,
			bold_font,
			header.font_size,
			anchor_alignment(header.text_align or "middle"),
		)

	date = sections.date
	if date.visible:
		draw_design_text(
			pdf,
			frame,
			f"التاريخ: {contract.start_date}",
			date.x,
			date.y,
			bold_font,
			date.font_size,
			"CENTER",
		)
		if contract.hijri_date:
			draw_design_text(
				pdf,
				frame,
				f"الموافق: {contract.hijri_date}",
				date.x,
				date.y + date.font_size * DATE_LINE_FACTOR,
				bold_font,
				date.font_size,
				"CENTER",
			)

	ad_type = sections.ad_type
	if ad_type.visible:
		draw_design_text(
			pdf,
			frame,
			f"نوع الإعلان: {contract.ad_type or 'غير محدد'}",
			ad_type.x,
			ad_type.y,
			bold_font,
			ad_type.font_size,
			anchor_alignment("start", rtl=True),
			"#1a1a2e",
		)

	first_party = sections.first_party
	if first_party.visible:
		party_data = sections.first_party_data
		align = anchor_alignment(first_party.text_align or "end")
		draw_design_text(
			pdf,
			frame,
			f"الطرف الأول: {party_data.company_name}، {party_data.address}",
			first_party.x,
			first_party.y,
			bold_font,
			first_party.font_size + PARTY_TITLE_SIZE_BOOST,
			align,
		)
		draw_design_text(
			pdf,
			frame,
			party_data.representative,
			first_party.x,
			first_party.y + first_party.line_spacing,
			regular_font,
			first_party.font_size,
			align,
		)

	second_party = sections.second_party
	if second_party.visible:
		company = contract.customer_company or contract.customer_name
		draw_design_text(
			pdf,
			frame,
			f"الطرف الثاني، {company}",
			second_party.x,
			second_party.y,
			bold_font,
			second_party.font_size,
			anchor_alignment("start", rtl=True),
		)

	customer = sections.second_party_customer
	if customer.visible:
		draw_design_text(
			pdf,
			frame,
			f"يمثلها السيد {contract.customer_name} - هاتف: {contract.customer_phone or 'غير محدد'}",
			customer.x,
			customer.y,
			regular_font,
			customer.font_size,
			anchor_alignment("start", rtl=True),
		)

	title_font = font_for(measurer, sections.terms_title_weight)
	content_font = font_for(measurer, sections.terms_content_weight)
	blocks = bcp.terms.layout_terms(job.terms, sections, job, measurer)
	for block in blocks:
		for line in block.lines:
			if line.gold_line is not None:
				rect = line.gold_line
				draw_design_rect(pdf, frame, rect.x, rect.y, rect.width, rect.height, fill=rect.color)
			if not line.has_title:
				draw_design_text(pdf, frame, line.text, block.x, line.y, content_font, block.font_size)
				continue
			title_width = draw_design_text(
				pdf,
				frame,
				line.title_part,
				block.x,
				line.y,
				title_font,
				block.font_size,
			)
			draw_design_text(
				pdf,
				frame,
				line.content_part,
				block.x - title_width / frame.scale,
				line.y,
				content_font,
				block.font_size,
			)


#============================================
def draw_table_term(
	pdf: reportlab.pdfgen.canvas.Canvas,
	frame: PageFrame,
	sections: PageSectionSettings,
	geometry: bcp.table.TableGeometry,
	measurer: TextMeasurer,
) -> float:
	"""
	Draw the heading above the first table page.

	Args:
		pdf: ReportLab canvas.
		frame: Page frame.
		sections: Page section settings.
		geometry: Table geometry.
		measurer: Text measurer.

	Returns:
		Height used in design px.
	"""
	term = sections.table_term
	if not term.visible:
		return 0.0
	title_font = font_for(measurer, term.title_font_weight)
	content_font = font_for(measurer, term.content_font_weight)
	center_x = geometry.left + geometry.width / 2.0 + term.position_x
	line_height = term.font_size * TABLE_TERM_LINE_FACTOR
	middle_y = geometry.top + term.position_y + line_height / 2.0
	size = frame.size(term.font_size)
	title_line = visual_order(term.term_title)
	content_line = visual_order(term.term_content)
	title_width = pdf.stringWidth(title_line, title_font, size) / frame.scale
	content_width = pdf.stringWidth(content_line, content_font, size) / frame.scale
	gap = 8.0 if content_line else 0.0
	total_width = title_width + gap + content_width
	right_x = center_x + total_width / 2.0
	if term.gold_line.visible and title_width > 0:
		gold_height = line_height * term.gold_line.height_percent / 100.0
		draw_design_rect(
			pdf,
			frame,
			right_x - title_width,
			middle_y - gold_height / 2.0,
			title_width,
			gold_height,
			fill=term.gold_line.color,
		)
	draw_design_text(pdf, frame, term.term_title, right_x, middle_y, title_font, term.font_size, "RIGHT", term.color)
	draw_design_text(
		pdf,
		frame,
		term.term_content,
		right_x - title_width - gap,
		middle_y,
		content_font,
		term.font_size,
		"RIGHT",
		term.color,
	)
	return line_height + term.margin_bottom


#============================================
def draw_table_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	frame: PageFrame,
	rows: list[BillboardRow],
	columns: list[TableColumn],
	sections: PageSectionSettings,
	page_index: int,
	rows_per_page: int,
	qr_cache: QRCache,
	measurer: TextMeasurer,
	image_cache: dict[str, reportlab.lib.utils.ImageReader | None],
	asset_dir: pathlib.Path | None = None,
) -> None:
	"""
	Draw one billboard table page, columns laid out right to left.

	Args:
		pdf: ReportLab canvas.
		frame: Page frame.
		rows: Rows on this page.
		columns: Visible columns with final widths.
		sections: Page section settings.
		page_index: 0-based table page index.
		rows_per_page: Rows per page used for pagination.
		qr_cache: QR image cache.
		measurer: Text measurer.
		image_cache: Local image cache.
		asset_dir: Directory for site-relative image paths.
	"""
	table_settings = sections.table_settings
	fallback = sections.fallback_settings
	geometry = bcp.table.compute_geometry(table_settings, DESIGN_WIDTH)
	top = geometry.top
	if page_index == 0:
		top += draw_table_term(pdf, frame, sections, geometry, measurer)

	cell_font = font_for(measurer, table_settings.font_weight)
	header_font = font_for(measurer, table_settings.header_font_weight)
	border_color = table_settings.border_color
	border_width = table_settings.border_width

	# right edge first, columns run right to left
	column_edges: list[tuple[float, float]] = []
	right_edge = geometry.left + geometry.width
	for column in columns:
		width = geometry.width * column.width / 100.0
		column_edges.append((right_edge - width, width))
		right_edge -= width

	for column, (cell_x, cell_width) in zip(columns, column_edges):
		background, foreground = bcp.table.header_colors(column, table_settings)
		draw_design_rect(
			pdf,
			frame,
			cell_x,
			top,
			cell_width,
			geometry.header_row_height,
			fill=background,
			stroke=border_color,
			line_width=border_width,
		)
		padding = bcp.table.column_padding(column, table_settings)
		draw_fitted_text(
			pdf,
			column.label,
			(
				frame.x(cell_x + padding),
				frame.y(top + geometry.header_row_height),
				frame.size(cell_width - 2 * padding),
				frame.size(geometry.header_row_height),
			),
			header_font,
			frame.size(column.header_font_size or table_settings.header_font_size),
			anchor_alignment(table_settings.header_text_align),
			frame.size(DEFAULT_TEXT_MIN_SIZE),
			foreground,
		)

	row_top = top + geometry.header_row_height
	for row_index, row in enumerate(rows):
		global_index = bcp.paginate.global_row_index(page_index, rows_per_page, row_index)
		for column, (cell_x, cell_width) in zip(columns, column_edges):
			background, foreground = bcp.table.cell_colors(column, row_index, table_settings)
			draw_design_rect(
				pdf,
				frame,
				cell_x,
				row_top,
				cell_width,
				geometry.row_height,
				fill=background,
				stroke=border_color,
				line_width=border_width,
			)
			if column.key == "location":
				link = bcp.table.resolve_map_link(row, fallback)
				qr = qr_cache.image(link) if link else None
				if qr is not None:
					size = min(geometry.qr_size, cell_width)
					pdf.drawImage(
						reportlab.lib.utils.ImageReader(qr),
						frame.x(cell_x + (cell_width - size) / 2.0),
						frame.y(row_top + (geometry.row_height + size) / 2.0),
						width=frame.size(size),
						height=frame.size(size),
						mask=None,
						preserveAspectRatio=True,
						anchor="c",
					)
				continue
			if column.key == "image":
				image_reader = load_local_image(bcp.table.resolve_image(row, fallback), asset_dir, image_cache)
				if image_reader is not None:
					height = geometry.image_height
					pdf.drawImage(
						image_reader,
						frame.x(cell_x),
						frame.y(row_top + (geometry.row_height + height) / 2.0),
						width=frame.size(cell_width),
						height=frame.size(height),
						mask="auto",
						preserveAspectRatio=True,
						anchor="c",
					)
				continue
			padding = bcp.table.column_padding(column, table_settings)
			font_size = column.font_size or table_settings.font_size
			text = bcp.table.cell_text(column.key, row, global_index)
			if column.key == "price" and row.has_discount and row.original_price and sections.discount_display.enabled:
				text = f"{row.price} ({row.original_price})"
			draw_fitted_text(
				pdf,
				text,
				(
					frame.x(cell_x + padding),
					frame.y(row_top + geometry.row_height),
					frame.size(cell_width - 2 * padding),
					frame.size(geometry.row_height),
				),
				cell_font,
				frame.size(font_size),
				anchor_alignment(column.text_align or table_settings.cell_text_align),
				frame.size(DEFAULT_TEXT_MIN_SIZE),
				foreground,
			)
		row_top += geometry.row_height


#============================================
def is_pdf_path(path: pathlib.Path | None) -> bool:
	return path is not None and pathlib.Path(path).suffix.lower() == ".pdf"


#============================================
def draw_image_background(
	pdf: reportlab.pdfgen.canvas.Canvas,
	frame: PageFrame,
	path: pathlib.Path | None,
	image_cache: dict[str, reportlab.lib.utils.ImageReader | None],
) -> None:
	"""
	Draw a raster background covering the whole page.

	Args:
		pdf: ReportLab canvas.
		frame: Page frame.
		path: Background image path; PDF backgrounds are merged later.
		image_cache: Local image cache.
	"""
	if path is None or is_pdf_path(path):
		return
	image_reader = load_local_image(str(path), None, image_cache)
	if image_reader is None:
		return
	pdf.drawImage(
		image_reader,
		0,
		0,
		width=frame.page_width,
		height=frame.page_height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)


#============================================
def merge_pdf_backgrounds(
	buffer: io.BytesIO,
	backgrounds: list[pathlib.Path | None],
	output_path: pathlib.Path,
	frame: PageFrame,
) -> None:
	"""
	Place each drawn page over its background PDF page and write the result.

	Args:
		buffer: Drawn PDF.
		backgrounds: Background path per page, None for no background.
		output_path: Output PDF path.
		frame: Page frame.
	"""
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	writer = pypdf.PdfWriter()
	background_cache: dict[str, pypdf.PageObject] = {}
	for page, background in zip(reader.pages, backgrounds):
		if not is_pdf_path(background):
			writer.add_page(page)
			continue
		key = str(background)
		if key not in background_cache:
			background_cache[key] = pypdf.PdfReader(key).pages[0]
		background_page = background_cache[key]
		x_scale = frame.page_width / float(background_page.mediabox.width)
		y_scale = frame.page_height / float(background_page.mediabox.height)
		merged = pypdf.PageObject.create_blank_page(
			width=frame.page_width,
			height=frame.page_height,
		)
		merged.merge_transformed_page(
			background_page,
			pypdf.Transformation().scale(x_scale, y_scale),
		)
		merged.merge_page(page)
		writer.add_page(merged)
	writer.write(str(output_path))


#============================================
def render_contract_pdf(
	job: ContractJob,
	settings: TemplateSettings,
	output_path: pathlib.Path,
	measurer: TextMeasurer | None = None,
	background: pathlib.Path | None = None,
	table_background: pathlib.Path | None = None,
	rows_per_page: int | None = None,
	asset_dir: pathlib.Path | None = None,
) -> RenderResult:
	"""
	Render a contract to an A4 PDF.

	Args:
		job: Contract print job.
		settings: Template settings.
		output_path: Output PDF path.
		measurer: Text measurer, the shared default when omitted.
		background: First page background (PDF or image).
		table_background: Table page background (PDF or image).
		rows_per_page: Rows per table page, the configured max rows when omitted.
		asset_dir: Directory for site-relative image paths.

	Returns:
		RenderResult.
	"""
	if measurer is None:
		measurer = bcp.measure.default_measurer()
	sections = settings.sections
	table_settings = sections.table_settings
	if rows_per_page is None:
		rows_per_page = table_settings.max_rows or 12
	frame = a4_frame()
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(frame.page_width, frame.page_height))
	pdf.setTitle(bcp.bidi.strip_direction_marks(bcp.pages.document_title(job)))

	image_cache: dict[str, reportlab.lib.utils.ImageReader | None] = {}
	qr_cache = QRCache(table_settings.qr_foreground_color, table_settings.qr_background_color)
	backgrounds: list[pathlib.Path | None] = [background]

	draw_image_background(pdf, frame, background, image_cache)
	draw_first_page(pdf, frame, job, sections, measurer)

	columns = bcp.table.prepare_columns(table_settings, job.billboards)
	table_pages = bcp.paginate.paginate(job.billboards, rows_per_page)
	for page_index, page_rows in enumerate(table_pages):
		pdf.showPage()
		backgrounds.append(table_background)
		draw_image_background(pdf, frame, table_background, image_cache)
		draw_table_page(
			pdf,
			frame,
			page_rows,
			columns,
			sections,
			page_index,
			rows_per_page,
			qr_cache,
			measurer,
			image_cache,
			asset_dir,
		)
	pdf.save()
	merge_pdf_backgrounds(buffer, backgrounds, output_path, frame)

	return RenderResult(
		pages=1 + len(table_pages),
		table_pages=len(table_pages),
		rows=len(job.billboards),
		rows_per_page=rows_per_page,
		qr_codes=len(qr_cache),
	)

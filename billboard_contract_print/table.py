"""
Billboard table model: columns, cell values and page geometry.
"""

# Standard Library
import dataclasses
import re

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config
import billboard_contract_print.contract_lib


BillboardRow = bcp.contract_lib.BillboardRow
TableColumn = bcp.config.TableColumn
TableSettings = bcp.config.TableSettings
FallbackSettings = bcp.config.FallbackSettings

MM_TO_DESIGN_PX = bcp.config.MM_TO_DESIGN_PX
AUTO_HIDE_COLUMNS = bcp.config.AUTO_HIDE_COLUMNS
DEFAULT_LINE_HEIGHT_RATIO = bcp.config.DEFAULT_LINE_HEIGHT_RATIO

FACE_COUNT_TEXT = {
	"1": "وجه واحد",
	"2": "وجهين",
	"3": "ثلاثة أوجه",
	"4": "أربعة أوجه",
}
NUMERIC_PATTERN = re.compile(r"^\s*\d+\s*$")


@dataclasses.dataclass
class TableGeometry:
	top: float
	left: float
	width: float
	header_row_height: float
	row_height: float
	image_height: float
	qr_size: float


#============================================
def compute_geometry(settings: TableSettings, page_width: float) -> TableGeometry:
	"""
	Compute table placement in design px.

	Args:
		settings: Table settings (positions and heights in mm).
		page_width: Page width in design px.

	Returns:
		TableGeometry.
	"""
	table_width_percent = settings.table_width or 90.0
	left_percent = (100.0 - table_width_percent) / 2.0
	row_height = (settings.row_height or 12.0) * MM_TO_DESIGN_PX
	return TableGeometry(
		top=settings.top_position * MM_TO_DESIGN_PX,
		left=page_width * left_percent / 100.0,
		width=page_width * table_width_percent / 100.0,
		header_row_height=(settings.header_row_height or 14.0) * MM_TO_DESIGN_PX,
		row_height=row_height,
		image_height=max(row_height - 6.0, 20.0),
		qr_size=max(row_height - 8.0, 20.0),
	)


#============================================
def column_has_data(key: str, rows: list[BillboardRow]) -> bool:
	"""
	Check whether any row carries data for an auto-hidden column.

	Args:
		key: Column key.
		rows: Billboard rows.

	Returns:
		True when at least one row has a non-blank value.
	"""
	for row in rows:
		if key == "price" and row.price.strip():
			return True
		if key == "durationDays" and row.duration_days.strip():
			return True
	return False


#============================================
def filter_columns_for_data(
	columns: list[TableColumn],
	rows: list[BillboardRow],
) -> list[TableColumn]:
	"""
	Hide optional columns that have no data.

	Only price and duration columns are hidden automatically; every other
	column keeps the visibility the user chose.

	Args:
		columns: Configured columns.
		rows: Billboard rows.

	Returns:
		Columns with updated visibility.
	"""
	result: list[TableColumn] = []
	for column in columns:
		if column.key not in AUTO_HIDE_COLUMNS:
			result.append(column)
			continue
		visible = column.visible and column_has_data(column.key, rows)
		result.append(dataclasses.replace(column, visible=visible))
	return result


#============================================
def redistribute_column_widths(columns: list[TableColumn]) -> list[TableColumn]:
	"""
	Spread the width of hidden columns over the visible ones.

	Args:
		columns: Columns with visibility set.

	Returns:
		Columns with visible widths scaled proportionally, rounded to 2 places.
	"""
	visible = [column for column in columns if column.visible]
	hidden = [column for column in columns if not column.visible]
	if not hidden or not visible:
		return list(columns)
	hidden_width = sum(column.width for column in hidden)
	visible_width = sum(column.width for column in visible)
	if visible_width <= 0:
		return list(columns)
	scale = (visible_width + hidden_width) / visible_width
	result: list[TableColumn] = []
	for column in columns:
		if not column.visible:
			result.append(column)
			continue
		result.append(dataclasses.replace(column, width=round(column.width * scale, 2)))
	return result


#============================================
def visible_columns(columns: list[TableColumn]) -> list[TableColumn]:
	return [column for column in columns if column.visible]


#============================================
def prepare_columns(settings: TableSettings, rows: list[BillboardRow]) -> list[TableColumn]:
	"""
	Filter and rebalance columns for a set of rows.

	Args:
		settings: Table settings.
		rows: All billboard rows of the document.

	Returns:
		Visible columns with final widths.
	"""
	filtered = filter_columns_for_data(settings.columns, rows)
	return visible_columns(redistribute_column_widths(filtered))


#============================================
def face_count_text(faces: str) -> str:
	"""
	Render a face count in Arabic words.

	Args:
		faces: Face count value.

	Returns:
		Arabic words for 1 to 4, the value itself otherwise.
	"""
	value = (faces or "").strip()
	return FACE_COUNT_TEXT.get(value, value)


#============================================
def is_numeric_text(value: str) -> bool:
	return bool(NUMERIC_PATTERN.match(value or ""))


#============================================
def cell_text(key: str, row: BillboardRow, global_index: int) -> str:
	"""
	Get the plain text value for a table cell.

	Image, location and discount rendering are handled by the page renderers.

	Args:
		key: Column key.
		row: Billboard row.
		global_index: 0-based index of the row in the whole document.

	Returns:
		Cell text.
	"""
	if key == "index":
		return str(global_index + 1)
	if key == "code":
		return row.code or row.id
	if key == "faces":
		return face_count_text(row.faces)
	values = {
		"billboardName": row.billboard_name,
		"municipality": row.municipality,
		"district": row.district,
		"name": row.landmark,
		"size": row.size,
		"price": row.price,
		"endDate": row.rent_end_date,
		"durationDays": row.duration_days,
		"adType": row.ad_type,
		"status": row.status,
	}
	return values.get(key, "")


#============================================
def resolve_map_link(row: BillboardRow, fallback: FallbackSettings) -> str:
	"""
	Pick the map link encoded in the row's QR code.

	Args:
		row: Billboard row.
		fallback: Fallback settings.

	Returns:
		Row link, the default map link, or empty string.
	"""
	if row.gps_link:
		return row.gps_link
	if fallback.use_default_qr:
		return fallback.default_google_maps_url
	return ""


#============================================
def resolve_image(row: BillboardRow, fallback: FallbackSettings) -> str:
	"""
	Pick the image shown in the row's image cell.

	Args:
		row: Billboard row.
		fallback: Fallback settings.

	Returns:
		Row image URL, the default image URL, or empty string.
	"""
	if row.image:
		return row.image
	if fallback.use_default_image:
		return fallback.default_image_url
	return ""


#============================================
def is_highlighted(column: TableColumn, settings: TableSettings) -> bool:
	return column.key in (settings.highlighted_columns or ["index"])


#============================================
def cell_colors(
	column: TableColumn,
	row_index: int,
	settings: TableSettings,
) -> tuple[str, str]:
	"""
	Compute background and text colors of a data cell.

	Args:
		column: Table column.
		row_index: 0-based row index on the page.
		settings: Table settings.

	Returns:
		Tuple of (background, text color).
	"""
	if is_highlighted(column, settings):
		return (settings.highlighted_column_bg_color, settings.highlighted_column_text_color)
	background = "#ffffff" if row_index % 2 == 0 else settings.alternate_row_color
	return (background, settings.cell_text_color)


#============================================
def header_colors(column: TableColumn, settings: TableSettings) -> tuple[str, str]:
	"""
	Compute background and text colors of a header cell.

	Args:
		column: Table column.
		settings: Table settings.

	Returns:
		Tuple of (background, text color).
	"""
	if is_highlighted(column, settings):
		return (settings.highlighted_column_bg_color, settings.highlighted_column_text_color)
	return (settings.header_bg_color, settings.header_text_color)


#============================================
def column_padding(column: TableColumn, settings: TableSettings) -> float:
	if column.padding is not None:
		return column.padding
	return settings.cell_padding


#============================================
def column_line_height(column: TableColumn) -> float:
	if column.line_height is not None:
		return column.line_height
	return DEFAULT_LINE_HEIGHT_RATIO

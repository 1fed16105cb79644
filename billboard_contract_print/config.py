"""
Shared configuration, constants and template settings.
"""

# Standard Library
import dataclasses
import json
import math
import pathlib
import typing


POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
CSS_PX_PER_INCH = 96.0

DESIGN_WIDTH = 2480
DESIGN_HEIGHT = 3508
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
# settings store table positions in mm, scaled by this factor into design px
MM_TO_DESIGN_PX = 3.779

TERMS_FONT_FAMILY = "Doran, sans-serif"
TERMS_LINE_HEIGHT = 55.0
DEFAULT_TERM_FONT_SIZE = 42.0
DEFAULT_TEXT_MIN_SIZE = 8.0
FALLBACK_WIDTH_FACTOR = 0.5
PARTY_TITLE_SIZE_BOOST = 4.0
DATE_LINE_FACTOR = 1.3
DEFAULT_LINE_HEIGHT_RATIO = 1.3
QR_PIXEL_SIZE = 150
# SVG dominant-baseline middle sits this far above the alphabetic baseline
TEXT_MIDDLE_BASELINE_SHIFT = 0.35
TABLE_TERM_LINE_FACTOR = 1.4

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"

ARABIC_LETTER_MARK = "\u061c"
LEFT_TO_RIGHT_ISOLATE = "\u2066"
POP_DIRECTIONAL_ISOLATE = "\u2069"

DEFAULT_BACKGROUND_URL = "/bgc1.svg"
DEFAULT_TABLE_BACKGROUND_URL = "/bgc2.svg"
AUTO_HIDE_COLUMNS = ("price", "durationDays")


class TemplateSettingsError(Exception):
	"""
	Raised when stored template settings cannot be loaded.
	"""


@dataclasses.dataclass
class TableColumn:
	key: str
	label: str
	visible: bool = True
	width: float = 10.0
	font_size: float | None = None
	header_font_size: float | None = None
	text_align: str | None = None
	padding: float | None = None
	line_height: float | None = None


@dataclasses.dataclass
class GoldLine:
	visible: bool = True
	height_percent: float = 30.0
	color: str = "#D4AF37"


@dataclasses.dataclass
class TableSettings:
	top_position: float = 63.53
	left_position: float = 5.0
	right_position: float = 5.0
	table_width: float = 90.0
	row_height: float = 12.0
	header_row_height: float = 14.0
	max_rows: int = 12
	header_bg_color: str = "#000000"
	header_text_color: str = "#ffffff"
	border_color: str = "#000000"
	border_width: float = 1.0
	alternate_row_color: str = "#f5f5f5"
	font_size: float = 10.0
	header_font_size: float = 11.0
	font_weight: str = "normal"
	header_font_weight: str = "bold"
	cell_text_align: str = "center"
	header_text_align: str = "center"
	columns: list[TableColumn] = dataclasses.field(default_factory=lambda: default_table_columns())
	highlighted_columns: list[str] = dataclasses.field(default_factory=lambda: ["index"])
	highlighted_column_bg_color: str = "#1a1a2e"
	highlighted_column_text_color: str = "#ffffff"
	cell_text_color: str = "#000000"
	cell_padding: float = 2.0
	qr_foreground_color: str = "#000000"
	qr_background_color: str = "#ffffff"


@dataclasses.dataclass
class TableTerm:
	term_title: str = "البند الثامن:"
	term_content: str = "المواقع المتفق عليها بين الطرفين"
	font_size: float = 14.0
	title_font_weight: str = "bold"
	content_font_weight: str = "normal"
	color: str = "#1a1a2e"
	margin_bottom: float = 8.0
	visible: bool = True
	position_x: float = 0.0
	position_y: float = 0.0
	gold_line: GoldLine = dataclasses.field(default_factory=GoldLine)


@dataclasses.dataclass
class DiscountDisplay:
	enabled: bool = True
	show_original_price: bool = True
	original_price_font_size: float = 18.0
	original_price_color: str = "#888888"
	discounted_price_font_size: float = 24.0
	discounted_price_color: str = "#000000"
	strikethrough_color: str = "#cc0000"
	strikethrough_width: float = 2.0


@dataclasses.dataclass
class FallbackSettings:
	default_image_url: str = "/logofaresgold.svg"
	default_google_maps_url: str = "https://www.google.com/maps?q=32.8872,13.1913"
	use_default_image: bool = True
	use_default_qr: bool = True


@dataclasses.dataclass
class SectionPosition:
	x: float
	y: float
	font_size: float
	visible: bool = True
	text_align: str = "end"
	line_spacing: float = 50.0


@dataclasses.dataclass
class FirstPartyData:
	company_name: str = ""
	address: str = ""
	representative: str = ""


@dataclasses.dataclass
class PageSectionSettings:
	# x coordinates are measured in design px, text anchored from the right (RTL)
	header: SectionPosition = dataclasses.field(
		default_factory=lambda: SectionPosition(x=2200, y=680, font_size=52)
	)
	date: SectionPosition = dataclasses.field(
		default_factory=lambda: SectionPosition(x=300, y=680, font_size=42, text_align="start")
	)
	ad_type: SectionPosition = dataclasses.field(
		default_factory=lambda: SectionPosition(x=2200, y=770, font_size=40)
	)
	first_party: SectionPosition = dataclasses.field(
		default_factory=lambda: SectionPosition(x=2200, y=900, font_size=38)
	)
	first_party_data: FirstPartyData = dataclasses.field(default_factory=FirstPartyData)
	second_party: SectionPosition = dataclasses.field(
		default_factory=lambda: SectionPosition(x=2200, y=1050, font_size=38)
	)
	second_party_customer: SectionPosition = dataclasses.field(
		default_factory=lambda: SectionPosition(x=2200, y=1120, font_size=36)
	)
	terms_start_x: float = 2280.0
	terms_start_y: float = 1250.0
	terms_width: float = 2000.0
	terms_text_align: str = "end"
	terms_title_weight: str = "bold"
	terms_content_weight: str = "normal"
	terms_spacing: float = 40.0
	terms_gold_line: GoldLine = dataclasses.field(default_factory=GoldLine)
	table_settings: TableSettings = dataclasses.field(default_factory=TableSettings)
	table_term: TableTerm = dataclasses.field(default_factory=TableTerm)
	discount_display: DiscountDisplay = dataclasses.field(default_factory=DiscountDisplay)
	fallback_settings: FallbackSettings = dataclasses.field(default_factory=FallbackSettings)


@dataclasses.dataclass
class TemplateSettings:
	sections: PageSectionSettings = dataclasses.field(default_factory=PageSectionSettings)
	background_url: str = DEFAULT_BACKGROUND_URL
	table_background_url: str = DEFAULT_TABLE_BACKGROUND_URL


@dataclasses.dataclass
class RenderResult:
	pages: int
	table_pages: int
	rows: int
	rows_per_page: int
	qr_codes: int


#============================================
def default_table_columns() -> list[TableColumn]:
	"""
	Build the default billboard table column set.

	Returns:
		List of TableColumn entries in display order.
	"""
	specs = [
		("index", "#", 5, 2),
		("image", "الصورة", 10, 2),
		("code", "الكود", 8, 2),
		("billboardName", "اسم اللوحة", 12, 4),
		("municipality", "البلدية", 9, 2),
		("district", "المنطقة", 10, 2),
		("name", "الموقع", 14, 4),
		("size", "المقاس", 7, 2),
		("faces", "الأوجه", 7, 2),
		("price", "السعر", 9, 2),
		("location", "GPS", 9, 2),
	]
	columns: list[TableColumn] = []
	for key, label, width, padding in specs:
		columns.append(
			TableColumn(
				key=key,
				label=label,
				visible=True,
				width=float(width),
				font_size=26.0,
				header_font_size=28.0,
				padding=float(padding),
				line_height=DEFAULT_LINE_HEIGHT_RATIO,
			)
		)
	return columns


#============================================
def camel_to_snake(name: str) -> str:
	"""
	Convert a camelCase key to snake_case.

	Args:
		name: Key as stored by the settings editor.

	Returns:
		snake_case key.
	"""
	result: list[str] = []
	for char in name:
		if char.isupper():
			result.append("_")
			result.append(char.lower())
		else:
			result.append(char)
	return "".join(result)


#============================================
def parse_bool(value) -> bool | None:
	"""
	Read a JSON boolean, also accepting "true"/"false" strings and 0/1.

	Args:
		value: JSON value.

	Returns:
		True or False, None when the value is not a boolean.
	"""
	if isinstance(value, bool):
		return value
	if isinstance(value, int) and value in (0, 1):
		return bool(value)
	if isinstance(value, str):
		normalized = value.strip().lower()
		if normalized in ("true", "1", "yes"):
			return True
		if normalized in ("false", "0", "no", ""):
			return False
	return None


#============================================
def _coerce_setting(name: str, value, field_type):
	"""
	Check one stored scalar against its field type.

	Numbers stored as strings are converted; anything else of the wrong type
	raises TemplateSettingsError.

	Args:
		name: Field name for error messages.
		value: Stored value.
		field_type: Dataclass field annotation.

	Returns:
		Value of the field type.
	"""
	optional = False
	args = typing.get_args(field_type)
	if args and type(None) in args:
		optional = True
		field_type = next(arg for arg in args if arg is not type(None))
	if value is None:
		if optional:
			return None
		raise TemplateSettingsError(f"{name} must not be null")

	if field_type is bool:
		flag = parse_bool(value)
		if flag is None:
			raise TemplateSettingsError(f"{name} must be a boolean, got {value!r}")
		return flag

	if field_type in (int, float):
		number = None
		if isinstance(value, (int, float)) and not isinstance(value, bool):
			number = float(value)
		elif isinstance(value, str):
			try:
				number = float(value.strip())
			except ValueError:
				number = None
		if number is None or not math.isfinite(number):
			raise TemplateSettingsError(f"{name} must be a number, got {value!r}")
		if field_type is int:
			if not number.is_integer():
				raise TemplateSettingsError(f"{name} must be a whole number, got {value!r}")
			return int(number)
		return number

	if field_type is str:
		if isinstance(value, str):
			return value
		# numeric font weights such as 700
		if isinstance(value, (int, float)) and not isinstance(value, bool):
			return f"{value:g}"
		raise TemplateSettingsError(f"{name} must be a string, got {value!r}")

	if typing.get_origin(field_type) is list:
		if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
			raise TemplateSettingsError(f"{name} must be a list of strings, got {value!r}")
		return list(value)
	return value


#============================================
def _build_dataclass(cls: type, data: dict, base):
	"""
	Overlay stored values onto a default dataclass instance.

	Nested dataclass fields are merged recursively; unknown keys are ignored.

	Args:
		cls: Dataclass type.
		data: Stored mapping (camelCase or snake_case keys).
		base: Default instance of cls.

	Returns:
		New instance of cls.
	"""
	if not isinstance(data, dict):
		raise TemplateSettingsError(f"{cls.__name__} must be an object, got {type(data).__name__}")
	normalized = {camel_to_snake(key): value for key, value in data.items()}
	updates = {}
	for field in dataclasses.fields(cls):
		if field.name not in normalized:
			continue
		value = normalized[field.name]
		current = getattr(base, field.name)
		if dataclasses.is_dataclass(current):
			if value is None:
				continue
			updates[field.name] = _build_dataclass(type(current), value, current)
		elif field.name == "columns":
			updates[field.name] = merge_columns(value)
		else:
			updates[field.name] = _coerce_setting(f"{cls.__name__}.{field.name}", value, field.type)
	return dataclasses.replace(base, **updates)


#============================================
def merge_columns(stored: list) -> list[TableColumn]:
	"""
	Merge stored columns with the default column set.

	Stored columns keep their stored order; default columns whose key was never
	stored are appended at the end.

	Args:
		stored: Stored column mappings.

	Returns:
		Merged list of TableColumn entries.
	"""
	if not isinstance(stored, list):
		raise TemplateSettingsError("tableSettings.columns must be a list")
	defaults = {column.key: column for column in default_table_columns()}
	merged: list[TableColumn] = []
	seen: set[str] = set()
	for entry in stored:
		if not isinstance(entry, dict) or "key" not in entry:
			raise TemplateSettingsError(f"Invalid column entry: {entry!r}")
		key = entry["key"]
		base = defaults.get(key, TableColumn(key=key, label=entry.get("label", key)))
		merged.append(_build_dataclass(TableColumn, entry, base))
		seen.add(key)
	for column in default_table_columns():
		if column.key not in seen:
			merged.append(column)
	return merged


#============================================
def settings_from_dict(
	data: dict | None,
	background_url: str | None = None,
) -> TemplateSettings:
	"""
	Build template settings from a stored settings object.

	Args:
		data: Stored section settings, may be partial or None.
		background_url: Stored first page background URL.

	Returns:
		TemplateSettings with defaults filled in.
	"""
	if not data:
		return TemplateSettings(
			background_url=background_url or DEFAULT_BACKGROUND_URL,
		)
	try:
		sections = _build_dataclass(PageSectionSettings, data, PageSectionSettings())
	except (TypeError, ValueError) as error:
		raise TemplateSettingsError(f"Invalid template settings: {error}") from error
	table_background_url = data.get("tableBackgroundUrl") or DEFAULT_TABLE_BACKGROUND_URL
	return TemplateSettings(
		sections=sections,
		background_url=background_url or DEFAULT_BACKGROUND_URL,
		table_background_url=table_background_url,
	)


#============================================
def load_template_settings(path: pathlib.Path) -> TemplateSettings:
	"""
	Load template settings from a JSON file.

	The file holds either the bare section settings object or a row with
	"setting_value" and "background_url" keys.

	Args:
		path: JSON file path.

	Returns:
		TemplateSettings.
	"""
	try:
		text = pathlib.Path(path).read_text(encoding="utf-8")
		data = json.loads(text)
	except (OSError, json.JSONDecodeError) as error:
		raise TemplateSettingsError(f"Cannot read template settings {path}: {error}") from error
	if not isinstance(data, dict):
		raise TemplateSettingsError(f"Template settings {path} must hold a JSON object")
	if "setting_value" in data:
		return settings_from_dict(data.get("setting_value"), data.get("background_url"))
	return settings_from_dict(data)


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value / MM_PER_INCH * POINTS_PER_INCH

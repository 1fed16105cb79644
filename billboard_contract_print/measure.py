"""
Text width measurement with an explicit, invalidatable cache.
"""

# Standard Library
import collections.abc

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config


FALLBACK_WIDTH_FACTOR = bcp.config.FALLBACK_WIDTH_FACTOR
DEFAULT_FONT_REGULAR = bcp.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = bcp.config.DEFAULT_FONT_BOLD

MeasureFunc = collections.abc.Callable[[str, str, float], float]


#============================================
def normalize_weight(weight: str | int | None) -> int:
	"""
	Normalize a CSS font weight to a number.

	Args:
		weight: CSS weight such as "bold", "normal" or 700.

	Returns:
		Numeric weight.
	"""
	if weight is None:
		return 400
	if isinstance(weight, (int, float)):
		return int(weight)
	value = str(weight).strip().lower()
	if value in ("bold", "bolder"):
		return 700
	if value in ("normal", "", "lighter"):
		return 400
	if value.isdigit():
		return int(value)
	return 400


#============================================
def primary_family(font_family: str) -> str:
	"""
	Extract the first family from a CSS font-family list.

	Args:
		font_family: CSS list like "Doran, sans-serif".

	Returns:
		First family name without quotes.
	"""
	first = font_family.split(",")[0]
	return first.strip().strip("'\"")


#============================================
def reportlab_string_width(text: str, font_name: str, font_size: float) -> float:
	"""
	Measure a string with ReportLab font metrics.

	Args:
		text: Text to measure.
		font_name: Registered ReportLab font name.
		font_size: Font size.

	Returns:
		Width in the same unit as font_size.
	"""
	return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)


class TextMeasurer:
	"""
	Memoized text width measurement.

	Widths are cached by family, weight, size and text for the lifetime of the
	measurer. Call invalidate() after fonts change so stale widths measured
	against fallback fonts are dropped.
	"""

	def __init__(
		self,
		measure_func: MeasureFunc | None = None,
		fallback_fonts: bool = True,
	) -> None:
		self._measure_func = measure_func or reportlab_string_width
		self._cache: dict[str, float] = {}
		# (family, weight) -> ReportLab font name
		self._fonts: dict[tuple[str, int], str] = {}
		self._fallback_fonts = fallback_fonts

	def register_font(
		self,
		family: str,
		weight: str | int,
		path: str | None = None,
		font_name: str | None = None,
	) -> str:
		"""
		Map a family and weight to a ReportLab font.

		Args:
			family: CSS family name (first entry is used).
			weight: CSS font weight.
			path: Optional TrueType/OpenType file to register with ReportLab.
			font_name: Name to register under, derived from family and weight
				when omitted.

		Returns:
			ReportLab font name.
		"""
		family_key = primary_family(family).lower()
		numeric_weight = normalize_weight(weight)
		if font_name is None:
			font_name = f"{primary_family(family)}-{numeric_weight}"
		if path is not None:
			font = reportlab.pdfbase.ttfonts.TTFont(font_name, str(path))
			reportlab.pdfbase.pdfmetrics.registerFont(font)
		self._fonts[(family_key, numeric_weight)] = font_name
		self.invalidate()
		return font_name

	def resolve_font(self, font_family: str, font_weight: str | int | None) -> str | None:
		"""
		Resolve a ReportLab font name for a family and weight.

		Args:
			font_family: CSS font family list.
			font_weight: CSS font weight.

		Returns:
			Font name, or None when no metrics are available.
		"""
		numeric_weight = normalize_weight(font_weight)
		is_bold = numeric_weight >= 600
		for family in font_family.split(","):
			family_key = primary_family(family).lower()
			font_name = self._fonts.get((family_key, numeric_weight))
			if font_name is None:
				font_name = self._fonts.get((family_key, 700 if is_bold else 400))
			if font_name is not None:
				return font_name
		if not self._fallback_fonts:
			return None
		if is_bold:
			return DEFAULT_FONT_BOLD
		return DEFAULT_FONT_REGULAR

	def measure(
		self,
		text: str,
		font_size: float,
		font_family: str,
		font_weight: str | int | None = 400,
	) -> float:
		"""
		Measure the rendered width of a text run.

		Args:
			text: Text run.
			font_size: Font size in design px.
			font_family: CSS font family list.
			font_weight: CSS font weight.

		Returns:
			Width in design px.
		"""
		key = f"{font_family}|{font_weight}|{font_size}|{text}"
		cached = self._cache.get(key)
		if cached is not None:
			return cached
		font_name = self.resolve_font(font_family, font_weight)
		if font_name is None:
			return len(text) * font_size * FALLBACK_WIDTH_FACTOR
		width = self._measure_func(text, font_name, font_size)
		self._cache[key] = width
		return width

	def invalidate(self) -> None:
		"""
		Drop every cached measurement.
		"""
		self._cache.clear()

	def __len__(self) -> int:
		return len(self._cache)


_DEFAULT_MEASURER: TextMeasurer | None = None


#============================================
def default_measurer() -> TextMeasurer:
	"""
	Return the shared measurer used when callers do not pass one.

	Returns:
		Module-level TextMeasurer.
	"""
	global _DEFAULT_MEASURER
	if _DEFAULT_MEASURER is None:
		_DEFAULT_MEASURER = TextMeasurer()
	return _DEFAULT_MEASURER

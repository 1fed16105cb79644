"""
Contract term variable substitution and first page term layout.
"""

# Standard Library
import dataclasses

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config
import billboard_contract_print.contract_lib
import billboard_contract_print.measure
import billboard_contract_print.payments
import billboard_contract_print.wrap


ContractJob = bcp.contract_lib.ContractJob
ContractTerm = bcp.contract_lib.ContractTerm
PageSectionSettings = bcp.config.PageSectionSettings
TextMeasurer = bcp.measure.TextMeasurer

TERMS_FONT_FAMILY = bcp.config.TERMS_FONT_FAMILY
TERMS_LINE_HEIGHT = bcp.config.TERMS_LINE_HEIGHT
DEFAULT_TERM_FONT_SIZE = bcp.config.DEFAULT_TERM_FONT_SIZE


@dataclasses.dataclass
class GoldLineRect:
	x: float
	y: float
	width: float
	height: float
	color: str


@dataclasses.dataclass
class TermLine:
	y: float
	text: str
	# first line of a term is split at the title colon
	title_part: str = ""
	content_part: str = ""
	gold_line: GoldLineRect | None = None

	@property
	def has_title(self) -> bool:
		return bool(self.title_part)


@dataclasses.dataclass
class TermBlock:
	term: ContractTerm
	x: float
	y: float
	font_size: float
	lines: list[TermLine]

	@property
	def height(self) -> float:
		return len(self.lines) * TERMS_LINE_HEIGHT


#============================================
def inclusion_text(installation_enabled: bool, print_cost_enabled: bool) -> str:
	"""
	Build the installation/printing inclusion phrase.

	Args:
		installation_enabled: Whether installation is included.
		print_cost_enabled: Whether printing is included.

	Returns:
		Arabic phrase.
	"""
	parts: list[str] = []
	if installation_enabled:
		parts.append("شامل التركيب")
	else:
		parts.append("غير شامل التركيب")
	if print_cost_enabled:
		parts.append("شامل الطباعة")
	else:
		parts.append("غير شامل الطباعة")
	return " و".join(parts)


#============================================
def payments_text(job: ContractJob) -> str:
	"""
	Resolve the payment clause text for a job.

	Args:
		job: Contract print job.

	Returns:
		Explicit payments text, or the summary built from installments.
	"""
	if job.payments_text is not None:
		return job.payments_text
	return bcp.payments.payment_summary_text(job.installments, job.currency.written_name)


#============================================
def replace_variables(text: str, job: ContractJob) -> str:
	"""
	Substitute contract placeholders in term text.

	Args:
		text: Term content with {placeholders}.
		job: Contract print job.

	Returns:
		Text with every known placeholder replaced.
	"""
	contract = job.contract
	details = job.details
	values = {
		"{duration}": contract.duration,
		"{startDate}": contract.start_date,
		"{endDate}": contract.end_date,
		"{customerName}": contract.customer_name,
		"{contractNumber}": contract.contract_number,
		"{totalAmount}": details.final_total,
		"{currency}": job.currency.written_name,
		"{billboardsCount}": str(len(job.billboards)),
		"{discount}": details.discount,
		"{inclusionText}": inclusion_text(details.installation_enabled, details.print_cost_enabled),
		"{payments}": payments_text(job),
	}
	result = text or ""
	for placeholder, value in values.items():
		result = result.replace(placeholder, value or "")
	return result


#============================================
def split_title_line(line: str) -> tuple[str, str]:
	"""
	Split a first term line at the title colon.

	Args:
		line: First wrapped line of a term.

	Returns:
		Tuple of (title_part including colon, content_part); the title part is
		empty when the line has no colon.
	"""
	colon_index = line.find(":")
	if colon_index == -1:
		return ("", line)
	return (line[:colon_index + 1], line[colon_index + 1:])


#============================================
def layout_terms(
	terms: list[ContractTerm],
	settings: PageSectionSettings,
	job: ContractJob,
	measurer: TextMeasurer | None = None,
) -> list[TermBlock]:
	"""
	Lay out the active contract terms on the first page.

	Args:
		terms: Contract terms.
		settings: Page section settings.
		job: Contract print job used for placeholder values.
		measurer: Text measurer, the shared default when omitted.

	Returns:
		Positioned term blocks in term order.
	"""
	if measurer is None:
		measurer = bcp.measure.default_measurer()
	gold = settings.terms_gold_line
	active_terms = sorted(
		(term for term in terms if term.is_active),
		key=lambda term: term.term_order,
	)
	blocks: list[TermBlock] = []
	current_y = settings.terms_start_y
	for term in active_terms:
		font_size = term.font_size or DEFAULT_TERM_FONT_SIZE
		full_text = f"{term.term_title}: {replace_variables(term.term_content, job)}"
		wrapped = bcp.wrap.wrap_text(
			full_text,
			settings.terms_width,
			font_size,
			measurer,
			TERMS_FONT_FAMILY,
			settings.terms_content_weight,
		)
		lines: list[TermLine] = []
		for line_index, line in enumerate(wrapped):
			y = current_y + line_index * TERMS_LINE_HEIGHT
			term_line = TermLine(y=y, text=line)
			if line_index == 0:
				title_part, content_part = split_title_line(line)
				if title_part:
					term_line.title_part = title_part
					term_line.content_part = content_part
					if gold.visible:
						title_width = round(
							measurer.measure(
								title_part,
								font_size,
								TERMS_FONT_FAMILY,
								settings.terms_title_weight,
							)
						)
						gold_height = TERMS_LINE_HEIGHT * gold.height_percent / 100.0
						term_line.gold_line = GoldLineRect(
							x=settings.terms_start_x - title_width,
							y=y - gold_height / 2.0,
							width=title_width,
							height=gold_height,
							color=gold.color,
						)
			lines.append(term_line)
		block = TermBlock(
			term=term,
			x=settings.terms_start_x,
			y=current_y,
			font_size=font_size,
			lines=lines,
		)
		blocks.append(block)
		current_y = current_y + block.height + settings.terms_spacing
	return blocks

"""
Contract print job records and JSON parsing.
"""

# Standard Library
import dataclasses
import json
import pathlib

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config


camel_to_snake = bcp.config.camel_to_snake


class ContractJobError(Exception):
	"""
	Raised when a contract print job cannot be parsed.
	"""


@dataclasses.dataclass
class ContractData:
	contract_number: str
	year: str = ""
	start_date: str = ""
	end_date: str = ""
	duration: str = ""
	customer_name: str = ""
	yearly_code: str = ""
	raw_start_date: str = ""
	customer_company: str = ""
	customer_phone: str = ""
	is_offer: bool = False
	ad_type: str = ""
	currency_name: str = ""
	hijri_date: str = ""


@dataclasses.dataclass
class ContractTerm:
	term_title: str
	term_content: str
	term_order: int = 0
	is_active: bool = True
	font_size: float | None = None
	id: str = ""


@dataclasses.dataclass
class BillboardRow:
	id: str
	code: str = ""
	billboard_name: str = ""
	image: str = ""
	municipality: str = ""
	district: str = ""
	landmark: str = ""
	size: str = ""
	faces: str = ""
	price: str = ""
	original_price: str = ""
	has_discount: bool = False
	gps_link: str = ""
	rent_end_date: str = ""
	duration_days: str = ""
	ad_type: str = ""
	status: str = ""


@dataclasses.dataclass
class Installment:
	amount: float
	due_date: str = ""
	payment_type: str = ""
	description: str = ""


@dataclasses.dataclass
class CurrencyInfo:
	symbol: str = "د.ل"
	written_name: str = "دينار ليبي"


@dataclasses.dataclass
class ContractDetails:
	final_total: str = ""
	rental_cost: str = ""
	installation_cost: str = ""
	duration: str = ""
	discount: str = ""
	installation_enabled: bool = True
	print_cost_enabled: bool = False


@dataclasses.dataclass
class ContractJob:
	contract: ContractData
	terms: list[ContractTerm] = dataclasses.field(default_factory=list)
	billboards: list[BillboardRow] = dataclasses.field(default_factory=list)
	details: ContractDetails = dataclasses.field(default_factory=ContractDetails)
	currency: CurrencyInfo = dataclasses.field(default_factory=CurrencyInfo)
	installments: list[Installment] = dataclasses.field(default_factory=list)
	payments_text: str | None = None


#============================================
def _as_text(value) -> str:
	"""
	Coerce a JSON scalar into display text.

	Args:
		value: JSON value.

	Returns:
		String, empty for None.
	"""
	if value is None:
		return ""
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return str(value)


#============================================
def _build_record(cls: type, data: dict, aliases: dict[str, str] | None = None):
	"""
	Build a record dataclass from a JSON object.

	Args:
		cls: Record dataclass type.
		data: JSON object with camelCase or snake_case keys.
		aliases: Extra key mapping for renamed fields.

	Returns:
		Record instance.
	"""
	if not isinstance(data, dict):
		raise ContractJobError(f"{cls.__name__} must be an object, got {type(data).__name__}")
	aliases = aliases or {}
	values = {}
	for key, value in data.items():
		name = aliases.get(key, camel_to_snake(key))
		values[name] = value
	kwargs = {}
	for field in dataclasses.fields(cls):
		if field.name not in values:
			continue
		value = values[field.name]
		if field.type is str:
			value = _as_text(value)
		elif field.type is bool:
			flag = False if value is None else bcp.config.parse_bool(value)
			if flag is None:
				raise ContractJobError(f"{cls.__name__}.{field.name} must be a boolean, got {value!r}")
			value = flag
		kwargs[field.name] = value
	try:
		return cls(**kwargs)
	except TypeError as error:
		raise ContractJobError(f"Invalid {cls.__name__}: {error}") from error


#============================================
def parse_contract_job(data: dict) -> ContractJob:
	"""
	Parse a contract print job from a JSON object.

	Args:
		data: Job object with "contract", "terms", "billboards" and optional
			"details", "currency", "installments", "payments" keys.

	Returns:
		ContractJob.
	"""
	if not isinstance(data, dict):
		raise ContractJobError("Contract job must be a JSON object")
	if "contract" not in data:
		raise ContractJobError("Contract job has no 'contract' section")
	contract = _build_record(ContractData, data["contract"])

	terms: list[ContractTerm] = []
	for entry in data.get("terms") or []:
		term = _build_record(ContractTerm, entry)
		try:
			term.term_order = int(term.term_order)
			if term.font_size is not None:
				term.font_size = float(term.font_size)
		except (TypeError, ValueError) as error:
			raise ContractJobError(f"Invalid term {term.term_title!r}: {error}") from error
		terms.append(term)

	billboards: list[BillboardRow] = []
	aliases = {"mapLink": "gps_link", "name": "landmark", "Billboard_Name": "billboard_name"}
	for entry in data.get("billboards") or []:
		billboards.append(_build_record(BillboardRow, entry, aliases))

	installments: list[Installment] = []
	for entry in data.get("installments") or []:
		installment = _build_record(Installment, entry)
		try:
			installment.amount = float(installment.amount)
		except (TypeError, ValueError) as error:
			raise ContractJobError(f"Invalid installment amount: {installment.amount!r}") from error
		installments.append(installment)

	details = _build_record(ContractDetails, data.get("details") or {})
	currency = _build_record(CurrencyInfo, data.get("currency") or {})
	payments_text = data.get("payments")
	if payments_text is not None:
		payments_text = _as_text(payments_text)

	return ContractJob(
		contract=contract,
		terms=terms,
		billboards=billboards,
		details=details,
		currency=currency,
		installments=installments,
		payments_text=payments_text,
	)


#============================================
def load_contract_job(path: pathlib.Path) -> ContractJob:
	"""
	Load a contract print job from a JSON file.

	Args:
		path: JSON file path.

	Returns:
		ContractJob.
	"""
	try:
		text = pathlib.Path(path).read_text(encoding="utf-8")
		data = json.loads(text)
	except (OSError, json.JSONDecodeError) as error:
		raise ContractJobError(f"Cannot read contract job {path}: {error}") from error
	return parse_contract_job(data)

"""
Installment grouping and the payment clause summary.
"""

# Standard Library
import dataclasses

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.contract_lib


Installment = bcp.contract_lib.Installment

AMOUNT_TOLERANCE = 0.01


@dataclasses.dataclass
class PaymentGroup:
	amount: float
	count: int
	payment_type: str
	start_date: str
	end_date: str
	installments: list[Installment]

	@property
	def is_grouped(self) -> bool:
		return self.count >= 2


#============================================
def format_amount(value: float | None, max_decimals: int = 3) -> str:
	"""
	Format an amount with thousands separators.

	Fraction digits are kept up to max_decimals with trailing zeros dropped,
	so whole amounts print without a decimal point.

	Args:
		value: Amount, None or NaN formats as "0".
		max_decimals: Most digits kept after the decimal point.

	Returns:
		Formatted amount such as "52,000" or "1,234.56".
	"""
	if value is None or value != value:
		return "0"
	text = f"{value:,.{max_decimals}f}"
	if "." in text:
		text = text.rstrip("0").rstrip(".")
	return text


#============================================
def group_repeating_payments(installments: list[Installment]) -> list[PaymentGroup]:
	"""
	Group consecutive installments with the same amount.

	Args:
		installments: Installments in due order.

	Returns:
		Payment groups in order.
	"""
	groups: list[PaymentGroup] = []
	index = 0
	while index < len(installments):
		current = installments[index]
		count = 1
		while (
			index + count < len(installments)
			and abs(current.amount - installments[index + count].amount) < AMOUNT_TOLERANCE
		):
			count += 1
		members = installments[index:index + count]
		groups.append(
			PaymentGroup(
				amount=current.amount,
				count=count,
				payment_type=current.payment_type,
				start_date=current.due_date,
				end_date=members[-1].due_date,
				installments=members,
			)
		)
		index += count
	return groups


#============================================
def payment_summary_text(installments: list[Installment], currency_name: str) -> str:
	"""
	Build the Arabic payment clause text.

	Args:
		installments: Installments in due order.
		currency_name: Written currency name.

	Returns:
		Summary sentence, empty when there are no installments.
	"""
	groups = group_repeating_payments(installments)
	if not groups:
		return ""

	def grouped_text(group: PaymentGroup) -> str:
		amount = format_amount(group.amount)
		return (
			f"{group.count} دفعات × {amount} {currency_name} "
			f"من {group.start_date} إلى {group.end_date}"
		)

	if len(groups) == 1:
		group = groups[0]
		if not group.is_grouped:
			return f"دفعة واحدة: {format_amount(group.amount)} {currency_name} بتاريخ {group.start_date}"
		return grouped_text(group)

	parts: list[str] = []
	for index, group in enumerate(groups):
		amount = format_amount(group.amount)
		if index == 0:
			if group.is_grouped:
				parts.append(grouped_text(group))
			else:
				parts.append(f"دفعة أولى: {amount} {currency_name} بتاريخ {group.start_date}")
		elif group.is_grouped:
			parts.append(f"، ثم {grouped_text(group)}")
		else:
			parts.append(f"، ودفعة: {amount} {currency_name} بتاريخ {group.start_date}")
	return "".join(parts)

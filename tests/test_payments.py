import billboard_contract_print.contract_lib as contract_lib
import billboard_contract_print.payments as payments


#============================================
def make_installments(amounts: list[float]) -> list[contract_lib.Installment]:
	return [
		contract_lib.Installment(amount=amount, due_date=f"2025-0{index + 1}-01")
		for index, amount in enumerate(amounts)
	]


#============================================
def test_consecutive_equal_amounts_are_grouped() -> None:
	"""
	Only neighbouring installments with the same amount share a group.
	"""
	groups = payments.group_repeating_payments(make_installments([100, 100.004, 200, 100]))
	assert [group.count for group in groups] == [2, 1, 1]
	assert groups[0].start_date == "2025-01-01"
	assert groups[0].end_date == "2025-02-01"
	assert groups[0].is_grouped


#============================================
def test_format_amount() -> None:
	assert payments.format_amount(52000) == "52,000"
	assert payments.format_amount(1234.5, 1) == "1,234.5"
	assert payments.format_amount(None) == "0"
	assert payments.format_amount(float("nan")) == "0"


#============================================
def test_single_payment_text() -> None:
	text = payments.payment_summary_text(make_installments([5000]), "دينار ليبي")
	assert text == "دفعة واحدة: 5,000 دينار ليبي بتاريخ 2025-01-01"


#============================================
def test_first_then_grouped_text() -> None:
	"""
	A first payment followed by equal payments reads as one sentence.
	"""
	text = payments.payment_summary_text(make_installments([20000, 16000, 16000]), "دينار")
	assert text.startswith("دفعة أولى: 20,000 دينار بتاريخ 2025-01-01")
	assert "، ثم 2 دفعات × 16,000 دينار من 2025-02-01 إلى 2025-03-01" in text


#============================================
def test_no_installments() -> None:
	assert payments.payment_summary_text([], "دينار") == ""


#============================================
def test_fractional_amounts_keep_their_digits() -> None:
	"""
	Installment amounts are printed exactly, not rounded to whole units.
	"""
	assert payments.format_amount(1234.56) == "1,234.56"
	assert payments.format_amount(0.125) == "0.125"
	assert payments.format_amount(16000.0) == "16,000"
	text = payments.payment_summary_text(make_installments([1234.56]), "دينار")
	assert text == "دفعة واحدة: 1,234.56 دينار بتاريخ 2025-01-01"

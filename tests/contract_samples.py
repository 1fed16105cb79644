"""
Sample contract jobs shared by the tests.
"""

# local repo modules
import billboard_contract_print.contract_lib as contract_lib


#============================================
def sample_billboard(index: int, **overrides) -> dict:
	"""
	Build one billboard row object the way the billing screen sends it.
	"""
	row = {
		"id": f"B{index}",
		"code": f"TR-{index:03d}",
		"billboardName": f"Tripoli Gate {index}",
		"image": "",
		"municipality": "طرابلس",
		"district": "حي الأندلس",
		"name": "قرب الدوران",
		"size": "4x12",
		"faces": "2",
		"price": "",
		"mapLink": f"https://maps.example.com/?q={index}",
	}
	row.update(overrides)
	return row


#============================================
def sample_job_data(billboard_count: int = 3) -> dict:
	"""
	Build a contract print job JSON object.
	"""
	return {
		"contract": {
			"contractNumber": "1045",
			"yearlyCode": "25-0045",
			"year": "2025",
			"startDate": "2025-03-01",
			"endDate": "2025-06-01",
			"duration": "90",
			"customerName": "أحمد علي",
			"customerCompany": "شركة النور",
			"customerPhone": "0912345678",
			"adType": "تجاري",
			"isOffer": False,
		},
		"terms": [
			{
				"termTitle": "البند الأول",
				"termContent": "مدة العقد {duration} يوما تبدأ من {startDate}",
				"termOrder": 1,
				"isActive": True,
			},
			{
				"termTitle": "البند الثاني",
				"termContent": "قيمة العقد {totalAmount} {currency} {inclusionText}",
				"termOrder": 2,
				"isActive": True,
			},
			{
				"termTitle": "بند ملغي",
				"termContent": "لا يظهر",
				"termOrder": 3,
				"isActive": False,
			},
		],
		"billboards": [sample_billboard(index + 1) for index in range(billboard_count)],
		"details": {
			"finalTotal": "52,000",
			"installationEnabled": True,
			"printCostEnabled": False,
		},
		"currency": {"symbol": "د.ل", "writtenName": "دينار ليبي"},
		"installments": [
			{"amount": 20000, "dueDate": "2025-03-01"},
			{"amount": 16000, "dueDate": "2025-04-01"},
			{"amount": 16000, "dueDate": "2025-05-01"},
		],
	}


#============================================
def sample_job(billboard_count: int = 3) -> contract_lib.ContractJob:
	return contract_lib.parse_contract_job(sample_job_data(billboard_count))

import pytest

import billboard_contract_print.config as config
import billboard_contract_print.contract_lib as contract_lib
import billboard_contract_print.table as table


#============================================
def make_rows(count: int, **fields) -> list[contract_lib.BillboardRow]:
	return [contract_lib.BillboardRow(id=f"B{index}", **fields) for index in range(count)]


#============================================
def test_price_column_hidden_without_prices() -> None:
	"""
	The price column disappears and its width goes to the others.
	"""
	settings = config.TableSettings()
	columns = table.prepare_columns(settings, make_rows(3))
	keys = [column.key for column in columns]
	assert "price" not in keys
	assert len(keys) == 10
	assert sum(column.width for column in columns) == pytest.approx(100.0, abs=0.05)


#============================================
def test_price_column_kept_with_prices() -> None:
	settings = config.TableSettings()
	rows = make_rows(2)
	rows[1].price = "4,500"
	columns = table.prepare_columns(settings, rows)
	assert "price" in [column.key for column in columns]
	assert sum(column.width for column in columns) == pytest.approx(100.0)


#============================================
def test_user_hidden_columns_stay_hidden() -> None:
	settings = config.TableSettings()
	settings.columns[1].visible = False
	columns = table.prepare_columns(settings, make_rows(1, price="10"))
	assert "image" not in [column.key for column in columns]


#============================================
def test_redistribution_is_proportional() -> None:
	columns = [
		config.TableColumn(key="a", label="a", width=20),
		config.TableColumn(key="b", label="b", width=60),
		config.TableColumn(key="c", label="c", width=20, visible=False),
	]
	result = table.redistribute_column_widths(columns)
	assert [column.width for column in result] == [25.0, 75.0, 20]


#============================================
def test_cell_text() -> None:
	"""
	Index is 1-based across pages, faces read as words, code falls back to id.
	"""
	row = contract_lib.BillboardRow(id="B7", faces="2", size="4x12", landmark="قرب الدوران")
	assert table.cell_text("index", row, 26) == "27"
	assert table.cell_text("faces", row, 0) == "وجهين"
	assert table.cell_text("code", row, 0) == "B7"
	assert table.cell_text("size", row, 0) == "4x12"
	assert table.cell_text("name", row, 0) == "قرب الدوران"
	assert table.cell_text("unknown", row, 0) == ""


#============================================
def test_face_count_text_passthrough() -> None:
	assert table.face_count_text("1") == "وجه واحد"
	assert table.face_count_text("6") == "6"


#============================================
def test_map_link_fallback() -> None:
	fallback = config.FallbackSettings()
	row = contract_lib.BillboardRow(id="B1")
	assert table.resolve_map_link(row, fallback) == fallback.default_google_maps_url
	fallback.use_default_qr = False
	assert table.resolve_map_link(row, fallback) == ""
	row.gps_link = "https://maps.example.com/?q=1"
	assert table.resolve_map_link(row, fallback) == "https://maps.example.com/?q=1"


#============================================
def test_geometry_from_millimeters() -> None:
	settings = config.TableSettings()
	geometry = table.compute_geometry(settings, config.DESIGN_WIDTH)
	assert geometry.top == pytest.approx(63.53 * 3.779)
	assert geometry.row_height == pytest.approx(12 * 3.779)
	assert geometry.image_height == pytest.approx(12 * 3.779 - 6)
	assert geometry.qr_size == pytest.approx(12 * 3.779 - 8)
	assert geometry.width == pytest.approx(config.DESIGN_WIDTH * 0.9)
	assert geometry.left == pytest.approx(config.DESIGN_WIDTH * 0.05)


#============================================
def test_cell_colors() -> None:
	"""
	Highlighted columns use their colors; other rows alternate.
	"""
	settings = config.TableSettings()
	columns = {column.key: column for column in settings.columns}
	assert table.cell_colors(columns["index"], 1, settings) == ("#1a1a2e", "#ffffff")
	assert table.cell_colors(columns["size"], 0, settings) == ("#ffffff", "#000000")
	assert table.cell_colors(columns["size"], 1, settings) == ("#f5f5f5", "#000000")
	assert table.header_colors(columns["size"], settings) == ("#000000", "#ffffff")

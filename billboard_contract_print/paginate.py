"""
Row pagination shared by every output path.
"""

# Standard Library
import math
import typing


Row = typing.TypeVar("Row")


#============================================
def paginate(rows: typing.Sequence[Row], rows_per_page: int) -> list[list[Row]]:
	"""
	Split rows into fixed-size pages.

	Args:
		rows: Ordered rows.
		rows_per_page: Maximum rows on one page.

	Returns:
		Pages in order; the last page holds the remainder, no padding.
	"""
	if rows_per_page <= 0:
		raise ValueError(f"rows_per_page must be positive, got {rows_per_page}")
	pages: list[list[Row]] = []
	for start in range(0, len(rows), rows_per_page):
		pages.append(list(rows[start:start + rows_per_page]))
	return pages


#============================================
def page_count(total_rows: int, rows_per_page: int) -> int:
	"""
	Count pages needed for a number of rows.

	Args:
		total_rows: Number of rows.
		rows_per_page: Maximum rows on one page.

	Returns:
		Number of pages.
	"""
	if rows_per_page <= 0:
		raise ValueError(f"rows_per_page must be positive, got {rows_per_page}")
	return math.ceil(total_rows / rows_per_page)


#============================================
def global_row_index(page_index: int, rows_per_page: int, row_index: int) -> int:
	"""
	Map a row position on a page back to its position in the full list.

	Args:
		page_index: 0-based page index.
		rows_per_page: Rows per page used for pagination.
		row_index: 0-based row index within the page.

	Returns:
		0-based index into the original rows.
	"""
	return page_index * rows_per_page + row_index

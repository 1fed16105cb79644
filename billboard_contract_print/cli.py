"""
CLI entry points for contract printing.
"""

# Standard Library
import argparse
import pathlib
import time

# PIP3 modules
import pypdf.errors

# local repo modules
import billboard_contract_print as bcp
import billboard_contract_print.config
import billboard_contract_print.contract_lib
import billboard_contract_print.document
import billboard_contract_print.measure
import billboard_contract_print.pages
import billboard_contract_print.render


FontResource = bcp.document.FontResource
TextMeasurer = bcp.measure.TextMeasurer


#============================================
def parse_font_spec(value: str) -> tuple[str, str, pathlib.Path]:
	"""
	Parse a --font value.

	Args:
		value: "FAMILY:WEIGHT:PATH", the path may itself contain colons.

	Returns:
		Tuple of (family, weight, path).
	"""
	parts = value.split(":", 2)
	if len(parts) != 3 or not all(part.strip() for part in parts):
		raise argparse.ArgumentTypeError(f"Font must be FAMILY:WEIGHT:PATH, got {value!r}")
	family, weight, path = (part.strip() for part in parts)
	return (family, weight, pathlib.Path(path))


#============================================
def positive_int(value: str) -> int:
	number = int(value)
	if number <= 0:
		raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value!r}")
	return number


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, sys.argv when None.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render billboard rental contracts for printing.")
	parser.add_argument("job_path", help="Contract print job JSON file.")
	parser.add_argument("-s", "--settings", dest="settings_path", default=None, help="Template settings JSON file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("--html", dest="html_path", default=None, help="Output printable HTML path.")
	output_group.add_argument(
		"--open",
		dest="open_browser",
		action="store_true",
		help="Open the printable HTML in a web browser.",
	)

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-r",
		"--rows-per-page",
		dest="rows_per_page",
		type=positive_int,
		default=None,
		help="Billboard rows per table page.",
	)
	layout_group.add_argument(
		"-f",
		"--font",
		dest="fonts",
		type=parse_font_spec,
		action="append",
		default=[],
		help="Register a font as FAMILY:WEIGHT:PATH (repeatable).",
	)
	layout_group.add_argument("-b", "--background", dest="background_path", default=None, help="First page background (PDF or image).")
	layout_group.add_argument(
		"-t",
		"--table-background",
		dest="table_background_path",
		default=None,
		help="Table page background (PDF or image).",
	)
	layout_group.add_argument("-a", "--assets", dest="asset_dir", default=None, help="Directory for site-relative image paths.")

	args = parser.parse_args(argv)
	if args.output_path is None and args.html_path is None and not args.open_browser:
		parser.error("Nothing to do: pass -o, --html or --open")
	return args


#============================================
def build_measurer(fonts: list[tuple[str, str, pathlib.Path]]) -> TextMeasurer:
	"""
	Build a measurer with the requested fonts registered.

	Args:
		fonts: (family, weight, path) entries.

	Returns:
		TextMeasurer.
	"""
	measurer = TextMeasurer()
	for family, weight, path in fonts:
		font_name = measurer.register_font(family, weight, path)
		print(f"Font registered: {font_name} ({path})")
	return measurer


#============================================
def build_font_resources(fonts: list[tuple[str, str, pathlib.Path]]) -> list[FontResource]:
	resources: list[FontResource] = []
	for family, weight, path in fonts:
		resources.append(
			FontResource(
				family=family,
				url=path.resolve().as_uri(),
				weight=weight,
			)
		)
	return resources


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Render one contract job to the requested outputs.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Contract print pipeline")
	print(f"Job: {args.job_path}")
	if args.settings_path:
		print(f"Settings: {args.settings_path}")
	if args.output_path:
		print(f"Output PDF: {args.output_path}")
	if args.html_path:
		print(f"Output HTML: {args.html_path}")

	start_time = time.perf_counter()
	job = bcp.contract_lib.load_contract_job(pathlib.Path(args.job_path))
	if args.settings_path:
		settings = bcp.config.load_template_settings(pathlib.Path(args.settings_path))
	else:
		settings = bcp.config.TemplateSettings()
	measurer = build_measurer(args.fonts)
	print(f"Contract: {job.contract.contract_number}")
	print(f"Terms: {len(job.terms)}")
	print(f"Billboards: {len(job.billboards)}")
	load_end = time.perf_counter()

	render_start = time.perf_counter()
	if args.output_path:
		asset_dir = pathlib.Path(args.asset_dir) if args.asset_dir else None
		background = pathlib.Path(args.background_path) if args.background_path else None
		table_background = None
		if args.table_background_path:
			table_background = pathlib.Path(args.table_background_path)
		result = bcp.render.render_contract_pdf(
			job,
			settings,
			pathlib.Path(args.output_path),
			measurer=measurer,
			background=background,
			table_background=table_background,
			rows_per_page=args.rows_per_page,
			asset_dir=asset_dir,
		)
		print(f"Pages written: {result.pages}")
		print(f"Table pages: {result.table_pages} ({result.rows_per_page} rows per page)")
		print(f"QR codes: {result.qr_codes}")
	render_end = time.perf_counter()

	html_start = time.perf_counter()
	if args.html_path or args.open_browser:
		fragments = bcp.pages.render_contract_html(job, settings, measurer, args.rows_per_page)
		fonts = build_font_resources(args.fonts)
		title = bcp.pages.document_title(job)
		if args.html_path:
			document = bcp.document.assemble_print_document(fragments, fonts=fonts, title=title)
			pathlib.Path(args.html_path).write_text(document, encoding="utf-8")
			print(f"HTML pages written: {len(fragments)}")
		if args.open_browser:
			presenter = bcp.document.BrowserPresenter()
			bcp.document.print_document(fragments, presenter, fonts=fonts, title=title)
			print(f"Print window opened: {presenter.last_path}")
	html_end = time.perf_counter()

	total_time = time.perf_counter() - start_time
	print(
		"Timing: load={:.2f}s pdf={:.2f}s html={:.2f}s total={:.2f}s".format(
			load_end - start_time,
			render_end - render_start,
			html_end - html_start,
			total_time,
		)
	)


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except (
		bcp.contract_lib.ContractJobError,
		bcp.config.TemplateSettingsError,
		bcp.document.PresentError,
		pypdf.errors.PyPdfError,
		OSError,
	) as error:
		print(f"Error: {error}")
		raise SystemExit(1) from error

"""
This is Deputy, a generator of delegating trait implementations for Rust types.

{0}

For example:

    deputy shapes.rs -r my_templates

reads shapes.rs, and for each type there that derives Delegate, writes
an impl block per #[delegate(...)] attribute to standard output.
The body templates come from the Python module my_templates,
which must provide a function deputy_init(registry).

    deputy shapes.rs -M -o delegated.rs

assumes every interface comes with a deputy_impl_<Name>! macro,
and writes the results to delegated.rs instead.

    deputy -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

parser = argparse.ArgumentParser(
	prog="deputy",
	description="Generate delegating trait implementations for Rust structs and enums.",
)
parser.add_argument("source", help="try examples/shapes.rs for example.")
parser.add_argument('-r', "--registry", action="append", metavar="MODULE", help="Python module with a deputy_init(registry) function to supply body templates. May repeat.")
parser.add_argument('-m', "--macro", action="append", metavar="NAME", help="Register a macro-based body template for interface NAME. May repeat.")
parser.add_argument('-M', "--macro-convention", action="store_true", help="Assume a deputy_impl_<Name>! macro for any interface without a registered template.")
parser.add_argument('-o', "--output", metavar="FILE", help="Write generated code here instead of standard output.")
parser.add_argument('-c', "--check", action="count", help="Check the declarations verbosely but do not write any code.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import parse_text
	from .templates import Registry, MacroConvention
	from .generator import generate_module, output_text
	report = Report(verbose=args.check)
	if str(Path.cwd()) not in sys.path: sys.path.insert(0, str(Path.cwd()))
	try:
		registry = MacroConvention() if args.macro_convention else Registry()
		for name in args.macro or (): registry.register_macro(name)
		for module_name in args.registry or (): registry.load_module(module_name, report)
		if report.sick():
			report.complain_to_console()
			return 1
		report.info("Templates registered for:", ", ".join(registry.names()) or "nothing in particular")
		path = Path.cwd() / args.source
		try: text = path.read_text(encoding="utf-8")
		except FileNotFoundError:
			report.no_such_file(path)
			report.complain_to_console()
			return 1
		except (OSError, UnicodeDecodeError) as ex:
			report.broken_file(path, ex)
			report.complain_to_console()
			return 1
		module = parse_text(text, path, report)
		if module is None:
			assert report.sick()
			report.complain_to_console()
			return 1
		generations = generate_module(module, registry, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if args.check:
		if report.ok(): print("Looks plausible to me.", file=sys.stderr)
	else:
		code = output_text(generations)
		if args.output: Path(args.output).write_text(code, encoding="utf-8")
		else: sys.stdout.write(code)
	if report.sick():
		report.complain_to_console()
		return 1

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))

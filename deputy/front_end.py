"""
Reading declaration text into syntax trees.

The grammar lives in Deputy.md right next to this file. Tables get rebuilt
on import whenever the grammar is newer than its compiled form.
"""
import re, sys
from pathlib import Path
from typing import Optional

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.scanning.interface import ScannerBlocked
from boozetools.parsing.interface import ParseError
from boozetools.support.pretty import DOT
from . import syntax
from .ontology import Nom, Lifetime
from .diagnostics import Report

class DeputyParseError(ParseError):
	pass

_tables = make_tables(Path(__file__).parent/"Deputy.md")
_parse_table = _tables['parser']
CONTEXTUAL = frozenset({"UNION"})  # Keywords only where the grammar says so.
RESERVED = frozenset(t for t in _parse_table["terminals"] if t.isupper() and t.isalpha()) - CONTEXTUAL
BOOLEAN = {"true": True, "false": False}

_ESCAPE = re.compile(r"\\(x[0-9a-fA-F]{2}|u\{[0-9a-fA-F]+\}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "0": "\0", "\\": "\\", "'": "'", '"': '"', "\n": ""}

def _unescape(text:str) -> str:
	def replace(m):
		code = m.group(1)
		if code in _SIMPLE_ESCAPES: return _SIMPLE_ESCAPES[code]
		if code.startswith("x"): return chr(int(code[1:], 16))
		if code.startswith("u{"): return chr(int(code[2:-1], 16))
		return code
	return _ESCAPE.sub(replace, text)

class DeputyParser(TypicalApplication):
	"""
	Offsets in the tree are always offsets into the original file.
	When parsing a fragment taken from inside a string literal,
	the scanner's positions get shifted by where that string's contents began.
	"""

	_offset = 0

	def _span(self, yy: IterableScanner) -> slice:
		return slice(yy.left + self._offset, yy.right + self._offset)

	def scan_ignore(self, yy: IterableScanner): pass

	def scan_punctuation(self, yy: IterableScanner):
		punctuation = sys.intern(yy.match())
		yy.token(punctuation, self._span(yy))

	def scan_visibility(self, yy: IterableScanner):
		yy.token("PUB", Nom(yy.match(), self._span(yy)))

	def scan_integer(self, yy: IterableScanner):
		yy.token("integer", syntax.Literal(int(yy.match().replace("_", "")), self._span(yy), "integer"))

	def scan_string(self, yy: IterableScanner):
		where = self._span(yy)
		value = _unescape(yy.match()[1:-1])
		yy.token("string", syntax.Literal(value, where, "string", where.start+1))

	def scan_raw_string(self, yy: IterableScanner):
		where = self._span(yy)
		yy.token("string", syntax.Literal(yy.match()[2:-1], where, "string", where.start+2))

	def scan_lifetime(self, yy: IterableScanner):
		yy.token("lifetime", Lifetime(sys.intern(yy.match()), self._span(yy)))

	def scan_word(self, yy: IterableScanner):
		self._word(yy, yy.match(), self._span(yy))

	def scan_union(self, yy: IterableScanner):
		""" The keyword, then the name it introduces. """
		where = self._span(yy)
		name = yy.match()[len("union"):].lstrip()
		yy.token("UNION", Nom("union", slice(where.start, where.start+len("union"))))
		self._word(yy, name, slice(where.stop-len(name), where.stop))

	def _word(self, yy: IterableScanner, text:str, where:slice):
		upper = text.upper()
		if text.islower() and upper in RESERVED: yy.token(upper, Nom(text, where))
		elif text in BOOLEAN: yy.token("boolean", syntax.Literal(BOOLEAN[text], where, "boolean"))
		else: yy.token("name", Nom(sys.intern(text), where))

	@staticmethod
	def parse_nothing(): return None
	@staticmethod
	def parse_empty(): return []
	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	def unexpected_token(self, kind, semantic, pds):
		raise DeputyParseError(self.stack_symbols(pds), kind, self._span(self.yy))

	def on_stuck(self, yy: IterableScanner):
		raise ScannerBlocked(yy.left + self._offset, yy.condition)

	def parse_fragment(self, text:str, offset:int, language:str):
		""" Parse a piece of text that came from inside a string literal somewhere in the file. """
		self._offset = offset
		try: return self.parse(text, language=language)
		finally: self._offset = 0

	pass

deputy_parser = DeputyParser(_tables)

def parse_text(text:str, path:Path, report:Report) -> Optional[syntax.Module]:
	""" Submit text to parser; complain and return None if it won't go. """
	assert isinstance(path, Path)
	report.set_source(path, text)
	try:
		return deputy_parser.parse(text, filename=str(path), language="file")
	except ParseError as ex:
		stack_symbols, lookahead, span = ex.args
		hint = _best_hint(stack_symbols, lookahead)
		report.generic_parse_error(lookahead, span, hint)
	except ScannerBlocked as ex:
		report.stuck_scanning(ex.position)

def parse_predicates(literal:syntax.Literal) -> list[syntax.Predicate]:
	""" The value of a `where = "..."` argument. Raises ParseError or ScannerBlocked on trouble. """
	return deputy_parser.parse_fragment(literal.value, literal.content_start, "where_list")

def parse_member(literal:syntax.Literal) -> syntax.Member:
	""" The value of a `target = "..."` argument. Raises ParseError or ScannerBlocked on trouble. """
	return deputy_parser.parse_fragment(literal.value, literal.content_start, "member")

##########################
#
#  Parse errors come with a best guess at what went wrong,
#  found by matching the tail of the parse stack against a table of situations.
#

_vocabulary = set(_parse_table['terminals']).union(_parse_table['nonterminals'])
ETC = "???"
assert ETC not in _vocabulary
_advice_tree = {t:{} for t in _parse_table['terminals']}
_advice_tree[ETC] = {}

def _hint(path, text):
	def dig(where, what):
		if what not in where: where[what] = {}
		return where[what]
	symbols = path.split()
	node = dig(_advice_tree, symbols.pop())
	for symbol in reversed(symbols):
		if symbol == DOT:
			continue
		if symbol == ETC:
			node[ETC] = True
		else:
			assert symbol in _vocabulary, symbol
			node = dig(node, symbol)
	assert '' not in node, path
	node[''] = text

def _best_hint(stack_symbols, lookahead):
	"""
	What we have here tries to find a match between parse stack situations and hints.
	If it fails utterly, then it reads out the parser state so it's easy to add a corresponding hint.
	"""
	best = None
	nodes = [_advice_tree[ETC]]
	if lookahead in _advice_tree: nodes.append(_advice_tree[lookahead])
	for symbol in reversed(stack_symbols):
		subsequent = []
		for n in nodes:
			if symbol in n: subsequent.append(n[symbol])
			if ETC in n: subsequent.append(n)
		nodes = subsequent
		for n in nodes:
			if '' in n: best = n['']
	if best:
		return "Here's my best guess:\n\t"+best
	else:
		return "Parser state was:\n\t"+" ".join(list(stack_symbols) + [DOT, lookahead])

for keyword in ("STRUCT", "UNION", "ENUM"):
	# Named fields, including those of record variants.
	_hint(keyword+" ??? { ??? zero_or_more(attribute) visibility name : name ● name", "Probably a missing comma between fields.")
	_hint(keyword+" ??? { ??? zero_or_more(attribute) visibility name : ??? > ● name", "Probably a missing comma between fields.")
	_hint(keyword+" ??? { ??? zero_or_more(attribute) visibility name ● name", "A named field needs a colon between its name and its type.")
_hint("STRUCT name generics ( ??? zero_or_more(attribute) visibility name ● name", "Probably a missing comma between fields.")
_hint("STRUCT name generics ( unnamed_fields ) ● <END>", "A tuple-struct needs a semicolon after the closing parenthesis.")
_hint("STRUCT name generics ( unnamed_fields ) ● #", "A tuple-struct needs a semicolon after the closing parenthesis.")
_hint("ENUM ??? { ??? ) ● name", "Probably a missing comma between variants.")
_hint("ENUM ??? { ??? zero_or_more(attribute) name ● name", "Probably a missing comma between variants.")
_hint("# [ simple_path ( name ● name", "Attribute arguments are separated by commas.")
_hint("simple_path = string ● name", "Attribute arguments are separated by commas.")
_hint("simple_path = ● name", "The value here needs to be a literal, such as a quoted string.")
_hint("# ● name", "Attributes go in [square brackets], as in #[derive(Delegate)].")

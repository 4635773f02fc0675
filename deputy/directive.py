"""
Reading #[delegate(...)] attributes into directives.

	#[delegate(Interface)]
	#[delegate(Interface, target = "field")]
	#[delegate(Interface, where = "T: Bound, U: Other", where = "...")]

Only the attribute structure gets checked here. Whether the target names
a real field is the target resolver's business.
"""
from typing import Optional, Sequence
from boozetools.parsing.interface import ParseError
from boozetools.scanning.interface import ScannerBlocked
from .ontology import DirectiveSyntaxError, TargetError
from .front_end import parse_member, parse_predicates
from . import syntax

DIRECTIVE = "delegate"

class DelegationDirective:
	def __init__(self, interface_path:syntax.Path, target:Optional[syntax.Member], supplementary:Sequence[syntax.Predicate], attribute:syntax.Attribute):
		self.interface_path = interface_path
		self.target = target
		self.supplementary = supplementary
		self.attribute = attribute
	def interface_name(self) -> str: return self.interface_path.last().nom.text
	def __repr__(self): return "<directive %s>" % self.attribute

def directive_attributes(decl:syntax.TypeDeclaration) -> list[syntax.Attribute]:
	return [a for a in decl.attrs if a.is_named(DIRECTIVE)]

def read_directives(decl:syntax.TypeDeclaration) -> list[DelegationDirective]:
	attributes = directive_attributes(decl)
	if not attributes:
		raise DirectiveSyntaxError(
			"No #[delegate] attribute specified. To delegate an implementation of `SomeTrait`, add #[delegate(SomeTrait)]",
			decl,
		)
	return [read_directive(a) for a in attributes]

def read_directive(attribute:syntax.Attribute) -> DelegationDirective:
	meta = attribute.meta
	if not isinstance(meta, syntax.MetaList):
		raise DirectiveSyntaxError("Invalid syntax for delegate attribute; expected #[delegate(SomeTrait, ...)]", attribute)
	if not meta.items:
		raise DirectiveSyntaxError("The delegate attribute needs the name of a trait to delegate", attribute)
	first, *rest = meta.items
	if not (isinstance(first, syntax.MetaPath) and first.path.is_plain()):
		raise DirectiveSyntaxError("Invalid syntax for delegate attribute; the first value has to be the trait name", first)
	target, supplementary = None, []
	for item in rest:
		if not isinstance(item, syntax.MetaNameValue):
			raise DirectiveSyntaxError("Invalid syntax for delegate attribute; expected name = \"value\" here", item)
		if item.path.is_ident("target"):
			value = _string_value(item)
			try: member = parse_member(value)
			except (ParseError, ScannerBlocked):
				raise DirectiveSyntaxError("Expected a field name or index as the value for \"target\"", value) from None
			if target is not None:
				raise TargetError("\"target\" can only be specified once per delegate attribute", item)
			target = member
		elif item.path.is_ident("where"):
			value = _string_value(item)
			try: supplementary.extend(parse_predicates(value))
			except (ParseError, ScannerBlocked):
				raise DirectiveSyntaxError("Expected where-clause syntax as the value for \"where\"", value) from None
		else:
			raise DirectiveSyntaxError("Unknown argument \"%s\"; a delegate attribute takes only target and where" % item.path, item.path)
	return DelegationDirective(first.path, target, supplementary, attribute)

def _string_value(item:syntax.MetaNameValue) -> syntax.Literal:
	if not item.value.is_string():
		raise DirectiveSyntaxError("Delegate attribute values have to be strings", item.value)
	return item.value

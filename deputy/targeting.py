from typing import NamedTuple
from .ontology import TargetError
from .implementer import ImplementerDescription, EnumImplementer, SingleFieldStruct, MultiFieldStruct
from .directive import DelegationDirective
from . import syntax

class SelectedField(NamedTuple):
	member: syntax.Member
	type_expr: syntax.TypeExpression

def select_field(implementer:ImplementerDescription, directive:DelegationDirective) -> SelectedField:
	"""
	Which field gets the forwarded calls, for the struct cases.
	Enums forward to every variant, so they only get checked that nobody asked for a target.
	"""
	target = directive.target
	if isinstance(implementer, MultiFieldStruct):
		if target is None:
			raise TargetError("\"target\" must be specified on #[delegate] for structs with multiple fields", directive.attribute)
		for member, type_expr in implementer.fields:
			if member == target:
				return SelectedField(member, type_expr)
		raise TargetError("Unknown field \"%s\" specified as \"target\" value in #[delegate] attribute" % target, target)
	if target is not None:
		if isinstance(implementer, SingleFieldStruct):
			raise TargetError("\"target\" can not be specified for structs with a single field", target)
		if isinstance(implementer, EnumImplementer):
			raise TargetError("\"target\" can not be specified for enums", target)
	if isinstance(implementer, SingleFieldStruct):
		return SelectedField(implementer.field_selector, implementer.field_type)

"""
Sorting a declaration into one of the three shapes that know how to delegate.

This happens once per declaration. Every directive on that declaration
then works from the same description.
"""
from typing import NamedTuple, Sequence
from boozetools.support.foundation import Visitor
from .ontology import Nom, ShapeError
from . import syntax

class VariantRef(NamedTuple):
	""" One variant of an enum, and how to get at its payload. """
	enum_name: str
	nom: Nom
	member: syntax.Member

	def path(self) -> str: return "%s::%s" % (self.enum_name, self.nom.text)

	def pattern(self, binding:str) -> str:
		""" A match-arm pattern that binds the payload to the given name. """
		if isinstance(self.member, syntax.NamedMember):
			return "%s { %s: %s }" % (self.path(), self.member, binding)
		return "%s(%s)" % (self.path(), binding)

class ImplementerDescription:
	def describe(self) -> str: raise NotImplementedError(type(self))

class EnumImplementer(ImplementerDescription):
	"""
	The first variant's payload type is canonical. The other payload types
	keep declaration order, so they line up with variants[1:].
	"""
	def __init__(self, variants:Sequence[VariantRef], canonical_type:syntax.TypeExpression, other_types:Sequence[syntax.TypeExpression]):
		assert len(variants) == 1 + len(other_types)
		self.variants, self.canonical_type, self.other_types = variants, canonical_type, other_types
	def payload_types(self): return [self.canonical_type, *self.other_types]
	def describe(self): return "enum over %s" % ", ".join(v.path() for v in self.variants)

class SingleFieldStruct(ImplementerDescription):
	def __init__(self, field_selector:syntax.Member, field_type:syntax.TypeExpression):
		self.field_selector, self.field_type = field_selector, field_type
	def describe(self): return "struct with sole field %s: %s" % (self.field_selector, self.field_type)

class MultiFieldStruct(ImplementerDescription):
	def __init__(self, fields:Sequence[tuple[syntax.Member, syntax.TypeExpression]]):
		assert len(fields) > 1
		self.fields = fields
	def describe(self): return "struct with fields %s" % ", ".join(str(m) for m, t in self.fields)

def _member(field:syntax.Field, position:int) -> syntax.Member:
	if isinstance(field, syntax.NamedField): return syntax.NamedMember(field.nom)
	return syntax.IndexMember(position)

class Classifier(Visitor):

	def visit_EnumDecl(self, decl:syntax.EnumDecl):
		if not decl.variants:
			raise ShapeError("enum %s has no variants" % decl.nom.text, decl)
		refs, types = [], []
		for variant in decl.variants:
			if not variant.fields:
				raise ShapeError("enum variant %s has no fields" % variant.nom.text, variant)
			if len(variant.fields) > 1:
				raise ShapeError("enum variant %s has multiple fields" % variant.nom.text, variant)
			field = variant.fields[0]
			refs.append(VariantRef(decl.nom.text, variant.nom, _member(field, 0)))
			types.append(field.type_expr)
		return EnumImplementer(refs, types[0], types[1:])

	def visit_StructDecl(self, decl:syntax.StructDecl):
		fields = decl.body.fields
		if not fields:
			raise ShapeError("struct %s has no fields" % decl.nom.text, decl)
		if len(fields) == 1:
			return SingleFieldStruct(_member(fields[0], 0), fields[0].type_expr)
		return MultiFieldStruct([(_member(f, i), f.type_expr) for i, f in enumerate(fields)])

	def visit_TypeDeclaration(self, decl:syntax.TypeDeclaration):
		raise ShapeError(
			"delegation works for single-payload enums and for structs, but %s is a %s" % (decl.nom.text, decl.keyword),
			decl,
		)

def classify(decl:syntax.TypeDeclaration) -> ImplementerDescription:
	return Classifier().visit(decl)

"""
Rendering impl blocks.

A struct gets a plain impl block. An enum's impl block goes inside a private
module of its own, along with whatever preamble its template wants, so that
two directives on the same enum cannot trip over each other's helper items.
"""
from typing import Optional, Sequence
from .ontology import ResolutionError
from .implementer import ImplementerDescription, EnumImplementer
from .directive import DelegationDirective
from .targeting import SelectedField
from .constraints import ImplGenerics
from .templates import Registry, BodyTemplate
from . import syntax

INDENT = "    "

def indent(text:str, prefix:str=INDENT) -> list[str]:
	return [prefix+line if line else line for line in text.splitlines()]

class ImplBlock:
	"""
	One generated implementation. `scope` names the enclosing module, if any.
	"""
	def __init__(self, interface_path:syntax.Path, implementer_name:str, generics:ImplGenerics, body:str, scope:Optional[str]=None, preamble:str=""):
		self.interface_path = interface_path
		self.implementer_name = implementer_name
		self.generics = generics
		self.body = body
		self.scope = scope
		self.preamble = preamble

	def interface_name(self) -> str: return self.interface_path.last().nom.text

	def header(self) -> str:
		g = self.generics
		return "impl%s %s for %s%s" % (g.impl_clause(), self.interface_path, self.implementer_name, g.type_clause())

	def where_clause(self) -> list[str]:
		if not self.generics.predicates: return []
		return ["where"] + [INDENT+"%s," % p for p in self.generics.predicates]

	def impl_text(self) -> str:
		predicates = self.where_clause()
		if predicates: lines = [self.header(), *predicates, "{"]
		else: lines = [self.header()+" {"]
		lines.extend(indent(self.body))
		lines.append("}")
		return "\n".join(lines)

	def render(self) -> str:
		if self.scope is None: return self.impl_text()
		lines = ["#[allow(non_snake_case)]", "mod %s {" % self.scope, INDENT+"use super::*;"]
		if self.preamble: lines.extend(indent(self.preamble))
		lines.extend(indent(self.impl_text()))
		lines.append("}")
		return "\n".join(lines)

	def __str__(self): return self.render()

def scope_name(implementer_name:str, interface_path:syntax.Path) -> str:
	""" Every segment of the path goes into the name, so that a::Greet and b::Greet stay apart. """
	return "delegate_%s_%s" % (implementer_name, "_".join(s.nom.text for s in interface_path.segments))

def resolve_template(registry:Registry, directive:DelegationDirective) -> BodyTemplate:
	name = directive.interface_name()
	template = registry.lookup(name)
	if template is None:
		raise ResolutionError("No body template is registered for interface \"%s\"" % name, directive.interface_path)
	return template

def emit_block(
		decl:syntax.TypeDeclaration,
		implementer:ImplementerDescription,
		directive:DelegationDirective,
		selected:Optional[SelectedField],
		template:BodyTemplate,
		generics:ImplGenerics,
) -> ImplBlock:
	name = decl.nom.text
	if isinstance(implementer, EnumImplementer):
		body = template.body_enum(implementer.canonical_type, implementer.other_types, implementer.variants)
		scope = scope_name(name, directive.interface_path)
		return ImplBlock(directive.interface_path, name, generics, body, scope, template.preamble())
	body = template.body_struct(selected.type_expr, selected.member)
	return ImplBlock(directive.interface_path, name, generics, body)

def render_blocks(blocks:Sequence[ImplBlock]) -> str:
	return "\n\n".join(b.render() for b in blocks)

"""
Generic parameters and where-predicates for one delegated impl block.

Parameter bounds move out of the parameter list and into the predicates,
so every constraint shows up in exactly one place. The predicates come in a
fixed order: first the declaration's own (inline bounds, then its where-clause),
then what delegation itself requires, then the directive's `where` values.
Nothing gets deduplicated, and nothing checks whether it can be satisfied.
The Rust compiler will have its say soon enough.
"""
from typing import NamedTuple, Optional, Sequence
from boozetools.support.foundation import Visitor
from .ontology import Nom
from .implementer import ImplementerDescription, EnumImplementer
from .directive import DelegationDirective
from .targeting import SelectedField
from . import syntax

class ImplGenerics(NamedTuple):
	params: list[str]
	type_args: list[str]
	predicates: list[syntax.Predicate]

	def impl_clause(self) -> str:
		return "<%s>" % ", ".join(self.params) if self.params else ""

	def type_clause(self) -> str:
		return "<%s>" % ", ".join(self.type_args) if self.type_args else ""

class _ParameterSplitter(Visitor):
	""" Each parameter becomes (impl parameter, type argument, inline predicates) """

	def visit_LifetimeParam(self, p:syntax.LifetimeParam):
		inline = [syntax.LifetimePredicate(p.nom, p.bounds)] if p.bounds else []
		return p.nom.text, p.nom.text, inline

	def visit_TypeParam(self, p:syntax.TypeParam):
		inline = [syntax.BoundPredicate(syntax.PathType(syntax.SimplePath(p.nom)), p.bounds)] if p.bounds else []
		return p.nom.text, p.nom.text, inline

	def visit_ConstParam(self, p:syntax.ConstParam):
		return str(p), p.nom.text, []

def own_constraints(decl:syntax.TypeDeclaration):
	params, type_args, predicates = [], [], []
	splitter = _ParameterSplitter()
	for p in decl.generics:
		param, arg, inline = splitter.visit(p)
		params.append(param)
		type_args.append(arg)
		predicates.extend(inline)
	predicates.extend(decl.where)
	return params, type_args, predicates

def relation_bound(interface_path:syntax.Path, relation:str, canonical:syntax.TypeExpression) -> syntax.TraitBound:
	""" The matching relation lives beside the interface and takes the canonical type as its parameter. """
	segment = syntax.Segment(Nom(relation, None), [canonical])
	return syntax.TraitBound(interface_path.with_last(segment))

def synthesized_constraints(implementer:ImplementerDescription, directive:DelegationDirective, selected:Optional[SelectedField], relation:Optional[str]) -> list[syntax.Predicate]:
	interface = syntax.TraitBound(directive.interface_path)
	if isinstance(implementer, EnumImplementer):
		canonical = implementer.canonical_type
		matching = relation_bound(directive.interface_path, relation, canonical)
		return [syntax.BoundPredicate(canonical, [interface])] + [
			syntax.BoundPredicate(other, [matching]) for other in implementer.other_types
		]
	assert selected is not None
	return [syntax.BoundPredicate(selected.type_expr, [interface])]

def build_constraints(
		decl:syntax.TypeDeclaration,
		implementer:ImplementerDescription,
		directive:DelegationDirective,
		selected:Optional[SelectedField],
		relation:Optional[str] = None,
) -> ImplGenerics:
	params, type_args, predicates = own_constraints(decl)
	predicates.extend(synthesized_constraints(implementer, directive, selected, relation))
	predicates.extend(directive.supplementary)
	return ImplGenerics(params, type_args, predicates)

"""
The whole pass for one declaration, and for a file of them.

Any DelegationError is fatal to the declaration at hand, and to nothing else.
The result of a pass is a Generation: either all the blocks, or the failure.
"""
from typing import NamedTuple, Optional, Sequence
from .ontology import DelegationError
from .implementer import classify, ImplementerDescription
from .directive import read_directives, DelegationDirective
from .targeting import select_field
from .constraints import build_constraints
from .emitter import ImplBlock, resolve_template, emit_block, render_blocks
from .templates import Registry
from .diagnostics import Report
from . import syntax

DERIVE_NAME = "Delegate"

class Generation(NamedTuple):
	declaration: syntax.TypeDeclaration
	blocks: list[ImplBlock]
	failure: Optional[DelegationError]

	def ok(self): return self.failure is None

def derives_delegate(decl:syntax.TypeDeclaration) -> bool:
	""" True if some #[derive(...)] on the declaration mentions Delegate, by any path. """
	for attr in decl.attrs:
		if attr.is_named("derive") and isinstance(attr.meta, syntax.MetaList):
			for item in attr.meta.items:
				if isinstance(item, syntax.MetaPath) and item.path.last().nom.text == DERIVE_NAME:
					return True
	return False

def delegate(decl:syntax.TypeDeclaration, implementer:ImplementerDescription, directive:DelegationDirective, registry:Registry) -> ImplBlock:
	selected = select_field(implementer, directive)
	template = resolve_template(registry, directive)
	generics = build_constraints(decl, implementer, directive, selected, template.relation)
	return emit_block(decl, implementer, directive, selected, template, generics)

def generate(decl:syntax.TypeDeclaration, registry:Registry) -> Generation:
	try:
		implementer = classify(decl)
		blocks = [delegate(decl, implementer, d, registry) for d in read_directives(decl)]
	except DelegationError as failure:
		return Generation(decl, [], failure)
	return Generation(decl, blocks, None)

def generate_module(module:syntax.Module, registry:Registry, report:Report) -> list[Generation]:
	generations = []
	for decl in module.type_declarations():
		if not derives_delegate(decl):
			report.info("Skipping %s %s, which does not derive %s." % (decl.keyword, decl.nom.text, DERIVE_NAME))
			continue
		generation = generate(decl, registry)
		if generation.ok():
			report.info("Delegated %s for %s." % (", ".join(b.interface_name() for b in generation.blocks), decl.nom.text))
		else:
			report.delegation_failed(decl, generation.failure)
		generations.append(generation)
	return generations

def output_text(generations:Sequence[Generation]) -> str:
	blocks = [b for g in generations if g.ok() for b in g.blocks]
	return render_blocks(blocks) + "\n" if blocks else ""

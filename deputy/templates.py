"""
The body template registry: how delegated method bodies actually get written.

Deputy itself knows nothing about the methods of any interface. For each
interface name, the registry supplies a template that can write the body of
an impl block in two forms:

	body_struct(field_type, member)
		forward every method to one field.
	body_enum(canonical, others, variants)
		forward every method to whichever variant is live.

Two kinds of template come in the box. A MacroTemplate writes calls to a
per-interface `deputy_impl_<Name>!` macro that you define next to the trait.
A MethodTemplate writes the forwarding methods out longhand from a list of
Operation signatures given in Python.

Registries are populated with `register`, or by loading a Python module which
provides a `deputy_init(registry)` function.
"""
from abc import ABC, abstractmethod
from importlib import import_module
from inspect import signature
from traceback import TracebackException
from typing import NamedTuple, Optional, Sequence

from .diagnostics import Report
from .implementer import VariantRef
from . import syntax

LINKAGE = "deputy_init"

def macro_name(interface_name:str) -> str: return "deputy_impl_%s" % interface_name
def match_name(interface_name:str) -> str: return "Match%s" % interface_name

class BodyTemplate(ABC):
	relation: str  # Name of the trait that says a payload type can stand in for the canonical one.

	@abstractmethod
	def body_struct(self, field_type:syntax.TypeExpression, member:syntax.Member) -> str: pass

	@abstractmethod
	def body_enum(self, canonical:syntax.TypeExpression, others:Sequence[syntax.TypeExpression], variants:Sequence[VariantRef]) -> str: pass

	def preamble(self) -> str:
		""" Text to place ahead of an enum's impl block, inside its private module. """
		return ""

class MacroTemplate(BodyTemplate):
	def __init__(self, interface_name:str):
		self.macro = macro_name(interface_name)
		self.relation = match_name(interface_name)

	def body_struct(self, field_type, member):
		return "%s!{body_struct(%s, %s)}" % (self.macro, field_type, member)

	def body_enum(self, canonical, others, variants):
		other_list = ", ".join(map(str, others))
		variant_list = ", ".join(v.path() for v in variants)
		return "%s!{body_enum(%s, (%s), (%s))}" % (self.macro, canonical, other_list, variant_list)

	def preamble(self):
		return "%s!{use_assoc_ty_bounds}" % self.macro

class Operation(NamedTuple):
	""" One method of an interface, as far as forwarding it is concerned. """
	name: str
	params: Sequence[tuple[str, str]] = ()
	returns: Optional[str] = None
	receiver: str = "&self"

	def signature(self) -> str:
		formals = [self.receiver] + ["%s: %s" % p for p in self.params]
		text = "fn %s(%s)" % (self.name, ", ".join(formals))
		if self.returns: text += " -> " + self.returns
		return text

	def call(self, subject:str) -> str:
		return "%s.%s(%s)" % (subject, self.name, ", ".join(p for p, t in self.params))

class MethodTemplate(BodyTemplate):
	BINDING = "inner"

	def __init__(self, interface_name:str, operations:Sequence[Operation], relation:Optional[str]=None, preamble:str=""):
		self.interface_name = interface_name
		self.operations = list(operations)
		self.relation = relation or match_name(interface_name)
		self._preamble = preamble

	def body_struct(self, field_type, member):
		subject = "self.%s" % member
		return "\n".join(_method(op, [op.call(subject)]) for op in self.operations)

	def body_enum(self, canonical, others, variants):
		def method(op:Operation):
			arms = ["    %s => %s," % (v.pattern(self.BINDING), op.call(self.BINDING)) for v in variants]
			return _method(op, ["match self {", *arms, "}"])
		return "\n".join(map(method, self.operations))

	def preamble(self): return self._preamble

def _method(op:Operation, body:list[str]) -> str:
	lines = [op.signature() + " {"]
	lines.extend("    "+line for line in body)
	lines.append("}")
	return "\n".join(lines)

class Registry:
	""" Interface names map to body templates. Lookup is by the last segment of the interface path. """

	def __init__(self):
		self._entries = {}

	def register(self, interface_name:str, template:BodyTemplate):
		self._entries[interface_name] = template

	def register_macro(self, interface_name:str):
		self.register(interface_name, MacroTemplate(interface_name))

	def register_methods(self, interface_name:str, operations:Sequence[Operation], **kwargs):
		self.register(interface_name, MethodTemplate(interface_name, operations, **kwargs))

	def lookup(self, interface_name:str) -> Optional[BodyTemplate]:
		return self._entries.get(interface_name)

	def names(self) -> list[str]: return sorted(self._entries)

	def load_module(self, name:str, report:Report):
		""" Import a Python module and let its deputy_init populate this registry. """
		try: py_module = import_module(name)
		except ModuleNotFoundError:
			report.missing_registry_module(name)
			return
		except ImportError as ex:
			tbx = TracebackException.from_exception(ex)
			report.broken_registry_module(name, tbx)
			return
		if not hasattr(py_module, LINKAGE):
			report.missing_registry_linkage(name)
			return
		linkage = getattr(py_module, LINKAGE)
		arity = len(signature(linkage).parameters)
		if arity != 1:
			report.wrong_linkage_arity(name, arity)
			return
		before = len(self._entries)
		linkage(self)
		report.info("Registry module %s supplied %d template(s)." % (name, len(self._entries) - before))

class MacroConvention(Registry):
	"""
	Assume every interface comes with a deputy_impl_<Name>! macro.
	Explicit registrations still take priority.
	"""
	def lookup(self, interface_name):
		return super().lookup(interface_name) or MacroTemplate(interface_name)

from pathlib import Path
import unittest
from unittest import mock

from deputy.diagnostics import Report
from deputy.front_end import parse_text
from deputy.directive import read_directives
from deputy.implementer import classify
from deputy.targeting import select_field
from deputy.constraints import build_constraints, own_constraints, relation_bound
from deputy import syntax

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

def _only(text:str) -> syntax.TypeDeclaration:
	report = Silence()
	module = parse_text(text, Path("test.rs"), report)
	assert module is not None, [i.as_text() for i in report.issues()]
	return module.type_declarations()[0]

def _generics(text, relation="MatchGreet"):
	decl = _only(text)
	implementer = classify(decl)
	directive = read_directives(decl)[0]
	return build_constraints(decl, implementer, directive, select_field(implementer, directive), relation)

class ConstraintTests(unittest.TestCase):

	def test_merge_order(self):
		g = _generics('#[delegate(Greet, where = "T: Debug")] struct S<T: Clone>(T);')
		self.assertEqual(["T: Clone", "T: Greet", "T: Debug"], [str(p) for p in g.predicates])
		self.assertEqual(["T"], g.params)
		self.assertEqual(["T"], g.type_args)

	def test_no_generics(self):
		g = _generics("#[delegate(Greet)] struct W(Inner);")
		self.assertEqual("", g.impl_clause())
		self.assertEqual("", g.type_clause())
		self.assertEqual(["Inner: Greet"], [str(p) for p in g.predicates])

	def test_inline_bounds_then_where_clause(self):
		g = _generics("""
			#[delegate(Greet, target = "items", where = "U: Send", where = "'a: 'static")]
			struct S<'a, 'b: 'a, T: Clone + ?Sized = u8, U, const N: usize>
			where T: 'a, U: Default,
			{ items: &'b [U; N], other: &'a T }
		""")
		self.assertEqual("<'a, 'b, T, U, const N: usize>", g.impl_clause())
		self.assertEqual("<'a, 'b, T, U, N>", g.type_clause())
		self.assertEqual([
			"'b: 'a",
			"T: Clone + ?Sized",
			"T: 'a",
			"U: Default",
			"&'b [U; N]: Greet",
			"U: Send",
			"'a: 'static",
		], [str(p) for p in g.predicates])

	def test_enum_matching_relation(self):
		g = _generics("#[delegate(Drawable)] enum Shape<T> { Circle(CircleImpl), Square(SquareImpl), Other(T) }", "MatchDrawable")
		self.assertEqual([
			"CircleImpl: Drawable",
			"SquareImpl: MatchDrawable<CircleImpl>",
			"T: MatchDrawable<CircleImpl>",
		], [str(p) for p in g.predicates])

	def test_relation_lives_beside_interface(self):
		decl = _only("#[delegate(gfx::Drawable)] enum Shape { A(Vec<u8>), B(B) }")
		directive = read_directives(decl)[0]
		implementer = classify(decl)
		bound = relation_bound(directive.interface_path, "SameShape", implementer.canonical_type)
		self.assertEqual("gfx::SameShape<Vec<u8>>", str(bound))
		self.assertEqual("gfx::Drawable", str(directive.interface_path))

	def test_own_constraints_leave_declaration_alone(self):
		decl = _only("struct S<T: Clone>(T) where T: Send;")
		own_constraints(decl)
		params, type_args, predicates = own_constraints(decl)
		self.assertEqual(2, len(predicates))
		self.assertEqual(1, len(decl.where))

	def test_no_deduplication(self):
		g = _generics('#[delegate(Greet, where = "T: Greet")] struct S<T: Greet>(T);')
		self.assertEqual(["T: Greet", "T: Greet", "T: Greet"], [str(p) for p in g.predicates])

if __name__ == '__main__':
	unittest.main()

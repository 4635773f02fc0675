"""
The worked scenarios, end to end through one declaration at a time.
"""
from pathlib import Path
import unittest
from unittest import mock

from deputy.diagnostics import Report
from deputy.front_end import parse_text
from deputy.ontology import TargetError, ShapeError
from deputy.templates import Registry, MacroConvention, Operation
from deputy.generator import generate, generate_module, output_text, derives_delegate
from deputy import syntax

base_folder = Path(__file__).parent.parent
zoo_ok = base_folder/"zoo/ok"

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

def _module(text:str) -> syntax.Module:
	report = Silence()
	module = parse_text(text, Path("test.rs"), report)
	assert module is not None, [i.as_text() for i in report.issues()]
	return module

def _only(text:str) -> syntax.TypeDeclaration:
	return _module(text).type_declarations()[0]

def _registry():
	registry = Registry()
	registry.register_methods("Greet", [Operation("greet", returns="String")])
	registry.register_methods("Farewell", [Operation("wave", [("times", "u32")])])
	registry.register_macro("Drawable")
	return registry

class ScenarioTests(unittest.TestCase):

	def _generate(self, text):
		generation = generate(_only(text), _registry())
		if not generation.ok(): raise generation.failure
		return generation.blocks

	def test_1_newtype_forwards_to_field_0(self):
		block, = self._generate("#[derive(Delegate)] #[delegate(Greet)] struct Wrapper(Inner);")
		self.assertEqual("\n".join([
			"impl Greet for Wrapper",
			"where",
			"    Inner: Greet,",
			"{",
			"    fn greet(&self) -> String {",
			"        self.0.greet()",
			"    }",
			"}",
		]), block.render())

	def test_2_several_fields_need_a_target(self):
		generation = generate(_only("#[derive(Delegate)] #[delegate(Greet)] struct Pair { a: A, b: B }"), _registry())
		self.assertFalse(generation.ok())
		self.assertEqual([], generation.blocks)
		self.assertIsInstance(generation.failure, TargetError)
		self.assertIn("target\" must be specified", generation.failure.message)

	def test_3_target_picks_the_field(self):
		block, = self._generate('#[derive(Delegate)] #[delegate(Greet, target = "b")] struct Pair { a: A, b: B }')
		text = block.render()
		self.assertIn("B: Greet,", text)
		self.assertIn("self.b.greet()", text)
		self.assertNotIn("self.a", text)
		self.assertNotIn("A:", text)

	def test_4_enum_dispatch(self):
		block, = self._generate("#[derive(Delegate)] #[delegate(Drawable)] enum Shape { Circle(CircleImpl), Square(SquareImpl) }")
		self.assertEqual(["CircleImpl: Drawable", "SquareImpl: MatchDrawable<CircleImpl>"], [str(p) for p in block.generics.predicates])
		text = block.render()
		self.assertEqual(1, text.count("Shape::Circle"))
		self.assertEqual(1, text.count("Shape::Square"))

	def test_4_enum_dispatch_covers_each_variant_once(self):
		registry = Registry()
		registry.register_methods("Drawable", [Operation("draw"), Operation("erase")])
		generation = generate(_only("#[derive(Delegate)] #[delegate(Drawable)] enum Shape { Circle(CircleImpl), Square(SquareImpl) }"), registry)
		text = generation.blocks[0].render()
		self.assertEqual(2, text.count("Shape::Circle(inner) => "))
		self.assertEqual(2, text.count("Shape::Square(inner) => "))

	def test_5_merged_constraints(self):
		block, = self._generate('#[derive(Delegate)] #[delegate(Greet, where = "T: Debug")] struct S<T: Clone>(T);')
		self.assertEqual(["T: Clone", "T: Greet", "T: Debug"], [str(p) for p in block.generics.predicates])
		self.assertTrue(block.render().startswith("impl<T> Greet for S<T>\nwhere\n    T: Clone,\n    T: Greet,\n    T: Debug,\n{"))

	def test_6_independent_blocks(self):
		both = self._generate("#[derive(Delegate)] #[delegate(Greet)] #[delegate(Farewell)] struct Wrapper(Inner);")
		self.assertEqual(["Greet", "Farewell"], [b.interface_name() for b in both])
		greet, = self._generate("#[derive(Delegate)] #[delegate(Greet)] struct Wrapper(Inner);")
		farewell, = self._generate("#[derive(Delegate)] #[delegate(Farewell)] struct Wrapper(Inner);")
		self.assertEqual(greet.render(), both[0].render())
		self.assertEqual(farewell.render(), both[1].render())
		self.assertNotIn("wave", both[0].render())
		self.assertNotIn("greet", both[1].render())

	def test_6_order_does_not_change_content(self):
		forward = self._generate("#[derive(Delegate)] #[delegate(Greet)] #[delegate(Farewell)] struct Wrapper(Inner);")
		backward = self._generate("#[derive(Delegate)] #[delegate(Farewell)] #[delegate(Greet)] struct Wrapper(Inner);")
		self.assertEqual([b.render() for b in forward], [b.render() for b in reversed(backward)])

	def test_same_interface_name_in_different_modules(self):
		generation = generate(_only("#[derive(Delegate)] #[delegate(a::Greet)] #[delegate(b::Greet)] enum E { X(A), Y(B) }"), _registry())
		self.assertTrue(generation.ok())
		self.assertEqual(["delegate_E_a_Greet", "delegate_E_b_Greet"], [b.scope for b in generation.blocks])
		first, second = [b.render().splitlines()[1] for b in generation.blocks]
		self.assertEqual("mod delegate_E_a_Greet {", first)
		self.assertEqual("mod delegate_E_b_Greet {", second)

	def test_determinism(self):
		text = "#[derive(Delegate)] #[delegate(Drawable)] #[delegate(Greet)] enum E<T: Copy> { A(T), B { b: Vec<T> } }"
		first = output_text([generate(_only(text), _registry())])
		second = output_text([generate(_only(text), _registry())])
		self.assertEqual(first, second)

	def test_one_bad_directive_spoils_the_declaration(self):
		generation = generate(_only("#[derive(Delegate)] #[delegate(Greet)] #[delegate(Salute)] struct Wrapper(Inner);"), _registry())
		self.assertFalse(generation.ok())
		self.assertEqual([], generation.blocks)

class ModuleTests(unittest.TestCase):

	def test_derives_delegate(self):
		self.assertTrue(derives_delegate(_only("#[derive(Debug, Delegate)] struct W(u8);")))
		self.assertTrue(derives_delegate(_only("#[derive(deputy::Delegate)] struct W(u8);")))
		self.assertFalse(derives_delegate(_only("#[derive(Debug)] #[delegate(Greet)] struct W(u8);")))
		self.assertFalse(derives_delegate(_only("#[derive = \"Delegate\"] struct W(u8);")))

	def test_failures_do_not_stop_the_rest(self):
		module = _module("""
			#[derive(Delegate)] #[delegate(Greet)] struct First(u8);
			#[derive(Delegate)] #[delegate(Greet)] struct Broken { a: A, b: B }
			#[derive(Debug)] struct Ignored;
			#[derive(Delegate)] #[delegate(Greet)] enum Empty {}
			#[derive(Delegate)] #[delegate(Farewell)] struct Last(u16);
		""")
		report = Silence()
		generations = generate_module(module, _registry(), report)
		self.assertEqual(["First", "Broken", "Empty", "Last"], [g.declaration.nom.text for g in generations])
		self.assertEqual([True, False, False, True], [g.ok() for g in generations])
		self.assertIsInstance(generations[2].failure, ShapeError)
		self.assertEqual([
			"Could not delegate for struct Broken while selecting a target field:",
			"Could not delegate for enum Empty while classifying the declaration:",
		], [pic.intro() for pic in report.issues()])
		text = output_text(generations)
		self.assertIn("impl Greet for First", text)
		self.assertIn("impl Farewell for Last", text)
		self.assertNotIn("Broken", text)
		self.assertTrue(text.endswith("}\n"))

	def test_failure_pictures_point_at_the_problem(self):
		report = Silence()
		module = parse_text('#[derive(Delegate)]\n#[delegate(Greet, target = "c")]\nstruct Pair { a: A, b: B }\n', Path("test.rs"), report)
		report.assert_no_issues("while parsing")
		generate_module(module, _registry(), report)
		pic, = report.issues()
		self.assertEqual(["this struct", 'Unknown field "c" specified as "target" value in #[delegate] attribute'], pic.captions())
		self.assertIn("target = \"c\"", pic.as_text())

	def test_nothing_to_do(self):
		module = _module("#[derive(Debug)] struct Ignored;")
		report = Silence()
		self.assertEqual([], generate_module(module, _registry(), report))
		self.assertEqual("", output_text([]))
		self.assertTrue(report.ok())

	def test_everything(self):
		path = zoo_ok/"everything.rs"
		report = Silence()
		module = parse_text(path.read_text(), path, report)
		generations = generate_module(module, _registry(), report)
		report.assert_no_issues("while generating for everything.rs")
		self.assertEqual(["Creature", "Team", "Badge"], [g.declaration.nom.text for g in generations])
		creature, team, badge = generations
		self.assertEqual([
			"T: 'a + ?Sized",
			"Box<dyn Greet + 'a>: Greet",
			"&'a mut T: MatchGreet<Box<dyn Greet + 'a>>",
			"Slot<[u8; 4]>: MatchGreet<Box<dyn Greet + 'a>>",
		], [str(p) for p in creature.blocks[0].generics.predicates])
		self.assertIn("Creature::Dog { inner: inner } => inner.greet(),", creature.blocks[0].render())
		self.assertEqual("impl<'b, T, const N: usize> Greet for Team<'b, T, N>", team.blocks[0].header())
		self.assertEqual([
			"T: Copy",
			"[T; N]: Farewell",
			"T: Default",
			"'b: 'static",
		], [str(p) for p in team.blocks[1].generics.predicates])
		self.assertEqual("impl self::manners::Greet for Badge", badge.blocks[0].header())
		self.assertIn("(String, Option<(u8,)>): self::manners::Greet,", badge.blocks[0].render())

	def test_macro_convention_needs_no_registrations(self):
		module = _module("#[derive(Delegate)] #[delegate(Anything)] struct W(u8);")
		report = Silence()
		generation, = generate_module(module, MacroConvention(), report)
		self.assertTrue(generation.ok())
		self.assertIn("deputy_impl_Anything!{body_struct(u8, 0)}", output_text([generation]))

if __name__ == '__main__':
	unittest.main()

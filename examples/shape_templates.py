"""
Body templates for the interfaces that examples/shapes.rs delegates.

Deputy loads this with `-r shape_templates` and calls deputy_init with its registry.
"""
from deputy.templates import Operation

def deputy_init(registry):
	registry.register_methods("Drawable", [
		Operation("draw", [("canvas", "&mut Canvas")]),
		Operation("bounding_box", returns="(f64, f64, f64, f64)"),
	])
	registry.register_methods("Area", [
		Operation("area", returns="f64"),
	], relation="SameAreaAs")

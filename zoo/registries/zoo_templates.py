"""
Templates for the interfaces that the zoo specimens delegate.
Salute and Bow are missing on purpose.
"""
from deputy.templates import Operation

def deputy_init(registry):
	registry.register_macro("Greet")
	registry.register_methods("Farewell", [
		Operation("wave", [("times", "u32")]),
		Operation("parting_words", returns="String"),
	])

from deputy.templates import Operation

def deputy_init(registry, verbosity):
	registry.register_methods("Greet", [Operation("greet")])

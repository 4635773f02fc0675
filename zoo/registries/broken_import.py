from deputy.templates import NoSuchTemplate

def deputy_init(registry):
	registry.register("Greet", NoSuchTemplate())

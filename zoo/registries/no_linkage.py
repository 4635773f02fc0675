"""
Looks like a registry module, but forgot the one thing that makes it one.
"""
from deputy.templates import Operation

GREET = [Operation("greet")]

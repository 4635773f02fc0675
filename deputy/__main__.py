"""
So that `python -m deputy` works the same as the `deputy` command.
"""
from deputy.cmdline import main

main()

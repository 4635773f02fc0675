"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

try:
	from boozetools.macroparse.runtime import make_tables
except ImportError:
	pass
else:
	make_tables(Path(__file__).parent / "deputy" / "Deputy.md")

setuptools.setup(
	name='deputy-delegate',
	version='0.1.0',
	packages=['deputy'],
	package_data={
		'deputy': ["Deputy.md", "Deputy.automaton"],
	},
	entry_points={
		'console_scripts': ["deputy = deputy.cmdline:main"],
	},
	license='MIT',
	description='Generates delegating trait implementations for Rust structs and enums',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Code Generators",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.3",
	],
	extras_require={
		'test': ["pytest"],
	},
)

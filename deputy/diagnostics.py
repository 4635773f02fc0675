import sys, random
from pathlib import Path
from typing import Any, Optional, Union
from traceback import TracebackException
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Phrase, DelegationError
from . import syntax

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm, ", "", ""]

	minced_oaths = [
		'Blast', 'Bother', 'Confound it', 'Crumbs', 'Darn',
		'Drat', 'Fiddlesticks', 'Gosh', 'Good Grief', 'Heavens',
		'Horsefeathers', 'Jeepers', 'Nuts', 'Phooey', 'Rats', 'Shucks',
	]

	resignations = [
		'This one will not delegate.',
		'I cannot forward that.',
		'Somebody else will have to take this call.',
		'The buck stops here.',
		'I need a supervisor.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects issues as they come up, so that one bad declaration does not
	keep the rest of a file from getting a fair hearing.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._source = SourceText("")

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def issues(self): return list(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def set_source(self, path:Optional[Path], text:str):
		""" Subsequent annotations point into this text. """
		self._source = SourceText(text, filename=None if path is None else str(path))

	def _ann(self, where:Union[Phrase, slice], caption:str="") -> "Annotation":
		return Annotation(self._source, where, caption)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def generic_parse_error(self, kind, where:slice, hint:str):
		intro = "Deputy got confused by %s." % kind
		problem = [self._ann(where, "Deputy got confused here")]
		self.issue(Pic(intro, problem, [hint]))

	def stuck_scanning(self, position:int):
		intro = "Deputy does not know what to make of this character."
		problem = [self._ann(slice(position, position+1), "here")]
		self.issue(Pic(intro, problem))

	# Methods the command line calls about files:

	def _file_error(self, path:Path, prefix:str, footer=()):
		intro = prefix+" "+str(path)
		self.issue(Pic(intro, [], footer))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path, ex:Exception):
		self._file_error(path, "Something went pear-shaped while trying to read", [str(ex)])

	# Methods the registry loader calls:
	def broken_registry_module(self, name:str, tbx:TracebackException):
		intro = "Attempting to import registry module '%s' threw an exception." % name
		text = ''.join(tbx.format())
		self.issue(Pic(intro, [], [text]))

	def missing_registry_module(self, name:str):
		intro = "Missing Registry Module"
		footer = ["The module '%s' could not be found." % name]
		self.issue(Pic(intro, [], footer))

	def missing_registry_linkage(self, name:str):
		intro = "Missing Registry Linkage Function"
		footer = ["The module '%s' has no 'deputy_init'." % name]
		self.issue(Pic(intro, [], footer))

	def wrong_linkage_arity(self, name:str, arity:int):
		intro = "Disagreeable Registry Linkage Function"
		footer = ["The module '%s' has a 'deputy_init' expecting %d argument(s), but it gets exactly one: the registry." % (name, arity)]
		self.issue(Pic(intro, [], footer))

	# Methods the generator calls:
	def delegation_failed(self, decl:syntax.TypeDeclaration, failure:DelegationError):
		intro = "Could not delegate for %s %s while %s:" % (decl.keyword, decl.nom.text, failure.phase)
		problem = []
		if failure.guilty is not None and failure.guilty is not decl:
			problem.append(self._ann(decl, "this %s" % decl.keyword))
		problem.append(self._ann(failure.guilty or decl, failure.message))
		self.issue(Pic(intro, problem))

class Annotation:
	path: Optional[str]
	slice: slice
	caption: str
	def __init__(self, source:SourceText, where:Union[Phrase, slice], caption:str=""):
		self._source = source
		self.path = source.filename
		self.slice = where if isinstance(where, slice) else where.span()
		self.caption = caption
	def illustrate(self):
		row, col = self._source.find_row_col(self.slice.start)
		single_line = self._source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	def intro(self): return self._intro
	def captions(self): return [ann.caption for ann in self._anns]
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()

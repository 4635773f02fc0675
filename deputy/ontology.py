"""
These most-fundamental classes are separate from the rest to avoid
circular imports. Syntax nodes, the implementer descriptions, and every
pass that complains about them all lean on what lives here.

Positions are plain character offsets into the text of the file being
processed. A phrase knows its leftmost and rightmost offsets; the report
knows which file is current.
"""
from typing import Optional

class Phrase:
	def left(self) -> int:
		""" Return the offset of the first character of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the offset just past the last character of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> slice: return slice(self.left(), self.right())

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str, where:Optional[slice]):
		assert isinstance(text, str)
		assert isinstance(where, slice) or where is None, type(where)
		self.text, self.where = text, where or slice(0, 0)
	def __repr__(self): return "<Name %r>" % self.text
	def __str__(self): return self.text
	def key(self): return self.text
	def left(self): return self.where.start
	def right(self): return self.where.stop

class Lifetime(Nom):
	""" A lifetime such as 'a, complete with its tick mark. """
	def __repr__(self): return "<Lifetime %s>" % self.text

class Anchor(Phrase):
	""" For things the grammar marks with punctuation or keywords rather than names. """
	def __init__(self, where:slice): self.where = where
	def left(self): return self.where.start
	def right(self): return self.where.stop

def stretch(first:Phrase, last:Phrase) -> Anchor:
	return Anchor(slice(first.left(), last.right()))

#######################################################################
#
#  Everything that can go wrong with one declaration's generation pass.
#  Each is fatal to that pass and to nothing else.
#

class DelegationError(Exception):
	"""
	The first argument is a human-readable explanation; the second is
	the phrase most to blame, if any. The phase is for reporting.
	"""
	phase = "generating delegation"
	def __init__(self, message:str, guilty:Optional[Phrase]=None):
		super().__init__(message, guilty)
		self.message, self.guilty = message, guilty
	def __str__(self): return self.message

class ShapeError(DelegationError):
	phase = "classifying the declaration"

class DirectiveSyntaxError(DelegationError):
	phase = "reading a delegate directive"

class TargetError(DelegationError):
	phase = "selecting a target field"

class ResolutionError(DelegationError):
	phase = "resolving an interface"

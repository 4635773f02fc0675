"""
The set of parse-nodes in simple form.
The parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
Every node can print itself back as Rust text, which is how the emitter splices
types, bounds, and predicates into generated code.

Punctuation arrives as plain slice objects; keywords and names arrive as `Nom`.
"""
from typing import Optional, Sequence, Union
from .ontology import Phrase, Nom, Lifetime

def _join(items, sep=", "): return sep.join(map(str, items))

class Literal(Phrase):
	"""
	String, integer, or boolean. For strings, `content_start` is the offset
	of the first character inside the quotes, so that text parsed out of a
	string can still point back into the file.
	"""
	def __init__(self, value, where:slice, kind:str, content_start:Optional[int]=None):
		self.value, self.where, self.kind = value, where, kind
		self.content_start = where.start if content_start is None else content_start
	def left(self): return self.where.start
	def right(self): return self.where.stop
	def is_string(self): return self.kind == "string"
	def __repr__(self): return "<Literal %r>" % (self.value,)
	def __str__(self):
		if self.kind == "string":
			return '"%s"' % self.value.replace("\\", "\\\\").replace('"', '\\"')
		if self.kind == "boolean":
			return "true" if self.value else "false"
		return str(self.value)

#######################################################################
#
#  Paths
#

class Segment(Phrase):
	def __init__(self, nom:Nom, args:Sequence=(), close:Optional[slice]=None):
		self.nom, self.args, self._close = nom, args or (), close
	def left(self): return self.nom.left()
	def right(self): return self._close.stop if self._close else self.nom.right()
	def __str__(self):
		if self.args: return "%s<%s>" % (self.nom.text, _join(self.args))
		return self.nom.text

class Path(Phrase):
	def __init__(self, segment:Segment, leading:Optional[slice]=None):
		self.segments = [segment]
		self._leading = leading
	def left(self): return self._leading.start if self._leading else self.segments[0].left()
	def right(self): return self.segments[-1].right()
	def last(self) -> Segment: return self.segments[-1]
	def is_plain(self): return not any(s.args for s in self.segments)
	def is_ident(self, text:str):
		return self._leading is None and len(self.segments) == 1 and self.segments[0].nom.text == text and not self.segments[0].args
	def with_last(self, segment:Segment) -> "Path":
		""" A copy of this path ending in a different segment. """
		other = Path(self.segments[0], self._leading)
		other.segments = self.segments[:-1] + [segment]
		return other
	def __repr__(self): return "<Path %s>" % self
	def __str__(self): return ("::" if self._leading else "") + _join(self.segments, "::")

def GlobalPath(colons:slice, segment:Segment): return Path(segment, colons)

def extend_path(path:Path, segment:Segment):
	path.segments.append(segment)
	return path

def SimplePath(nom:Nom): return Path(Segment(nom))

def GlobalSimplePath(colons:slice, nom:Nom): return Path(Segment(nom), colons)

def extend_simple_path(path:Path, nom:Nom): return extend_path(path, Segment(nom))

class Binding(Phrase):
	""" Associated-type binding within generic arguments, as in Iterator<Item = T> """
	def __init__(self, nom:Nom, type_expr:"TypeExpression"):
		self.nom, self.type_expr = nom, type_expr
	def left(self): return self.nom.left()
	def right(self): return self.type_expr.right()
	def __str__(self): return "%s = %s" % (self.nom.text, self.type_expr)

#######################################################################
#
#  Types
#

class TypeExpression(Phrase):
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class PathType(TypeExpression):
	def __init__(self, path:Path): self.path = path
	def left(self): return self.path.left()
	def right(self): return self.path.right()
	def __str__(self): return str(self.path)

class _Reference(TypeExpression):
	_keyword = ""
	def __init__(self, amp:slice, lifetime:Optional[Lifetime], referent:TypeExpression):
		self._amp, self.lifetime, self.referent = amp, lifetime, referent
	def left(self): return self._amp.start
	def right(self): return self.referent.right()
	def __str__(self):
		words = ["&"]
		if self.lifetime: words.append(self.lifetime.text+" ")
		words.append(self._keyword)
		words.append(str(self.referent))
		return "".join(words)

class SharedRef(_Reference): pass
class MutRef(_Reference): _keyword = "mut "

class _Pointer(TypeExpression):
	_keyword = ""
	def __init__(self, star:slice, referent:TypeExpression):
		self._star, self.referent = star, referent
	def left(self): return self._star.start
	def right(self): return self.referent.right()
	def __str__(self): return "*%s %s" % (self._keyword, self.referent)

class ConstPtr(_Pointer): _keyword = "const"
class MutPtr(_Pointer): _keyword = "mut"

class _Bracketed(TypeExpression):
	def __init__(self, open_:slice, close:slice):
		self._open, self._close = open_, close
	def left(self): return self._open.start
	def right(self): return self._close.stop

class UnitType(_Bracketed):
	def __str__(self): return "()"

class ParenType(_Bracketed):
	def __init__(self, open_, inner:TypeExpression, close):
		super().__init__(open_, close)
		self.inner = inner
	def __str__(self): return "(%s)" % self.inner

class OneTuple(_Bracketed):
	def __init__(self, open_, inner:TypeExpression, close):
		super().__init__(open_, close)
		self.inner = inner
	def __str__(self): return "(%s,)" % self.inner

class TupleType(_Bracketed):
	def __init__(self, open_, first:TypeExpression, rest:Sequence[TypeExpression], close):
		super().__init__(open_, close)
		self.elements = [first, *rest]
	def __str__(self): return "(%s)" % _join(self.elements)

class SliceType(_Bracketed):
	def __init__(self, open_, element:TypeExpression, close):
		super().__init__(open_, close)
		self.element = element
	def __str__(self): return "[%s]" % self.element

class ArrayType(_Bracketed):
	def __init__(self, open_, element:TypeExpression, length:Union[Literal, Path], close):
		super().__init__(open_, close)
		self.element, self.length = element, length
	def __str__(self): return "[%s; %s]" % (self.element, self.length)

class _TraitObject(TypeExpression):
	_keyword = ""
	def __init__(self, kw:Nom, bounds:Sequence["Bound"]):
		self._kw, self.bounds = kw, bounds
	def left(self): return self._kw.left()
	def right(self): return self.bounds[-1].right()
	def __str__(self): return "%s %s" % (self._keyword, _join(self.bounds, " + "))

class DynTrait(_TraitObject): _keyword = "dyn"
class ImplTrait(_TraitObject): _keyword = "impl"

#######################################################################
#
#  Bounds, generic parameters, and where-predicates
#

class TraitBound(Phrase):
	def __init__(self, path:Path): self.path = path
	def left(self): return self.path.left()
	def right(self): return self.path.right()
	def __str__(self): return str(self.path)

class MaybeBound(TraitBound):
	""" As in ?Sized """
	def __init__(self, hook:slice, path:Path):
		super().__init__(path)
		self._hook = hook
	def left(self): return self._hook.start
	def __str__(self): return "?%s" % self.path

Bound = Union[TraitBound, Lifetime]

class GenericParameter(Phrase):
	nom: Nom
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class LifetimeParam(GenericParameter):
	def __init__(self, lifetime:Lifetime, bounds:Sequence[Lifetime]):
		self.nom, self.bounds = lifetime, bounds or ()
	def __str__(self):
		if self.bounds: return "%s: %s" % (self.nom.text, _join(self.bounds, " + "))
		return self.nom.text

class TypeParam(GenericParameter):
	def __init__(self, nom:Nom, bounds:Sequence[Bound], default:Optional[TypeExpression]):
		self.nom, self.bounds, self.default = nom, bounds or (), default
	def __str__(self):
		text = self.nom.text
		if self.bounds: text += ": " + _join(self.bounds, " + ")
		if self.default is not None: text += " = " + str(self.default)
		return text

class ConstParam(GenericParameter):
	def __init__(self, kw:Nom, nom:Nom, type_expr:TypeExpression):
		self._kw, self.nom, self.type_expr = kw, nom, type_expr
	def left(self): return self._kw.left()
	def right(self): return self.type_expr.right()
	def __str__(self): return "const %s: %s" % (self.nom.text, self.type_expr)

class Predicate(Phrase):
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class BoundPredicate(Predicate):
	def __init__(self, subject:TypeExpression, bounds:Sequence[Bound]):
		self.subject, self.bounds = subject, bounds
	def left(self): return self.subject.left()
	def right(self): return self.bounds[-1].right()
	def __str__(self): return "%s: %s" % (self.subject, _join(self.bounds, " + "))

class LifetimePredicate(Predicate):
	def __init__(self, lifetime:Lifetime, bounds:Sequence[Lifetime]):
		self.lifetime, self.bounds = lifetime, bounds
	def left(self): return self.lifetime.left()
	def right(self): return self.bounds[-1].right()
	def __str__(self): return "%s: %s" % (self.lifetime.text, _join(self.bounds, " + "))

#######################################################################
#
#  Attributes, following the usual meta-item grammar.
#

class Meta(Phrase):
	path: Path

class MetaPath(Meta):
	def __init__(self, path:Path): self.path = path
	def left(self): return self.path.left()
	def right(self): return self.path.right()
	def __str__(self): return str(self.path)

class MetaList(Meta):
	def __init__(self, path:Path, items:Sequence[Union[Meta, Literal]], close:slice):
		self.path, self.items, self._close = path, items, close
	def left(self): return self.path.left()
	def right(self): return self._close.stop
	def __str__(self): return "%s(%s)" % (self.path, _join(self.items))

class MetaNameValue(Meta):
	def __init__(self, path:Path, value:Literal):
		self.path, self.value = path, value
	def left(self): return self.path.left()
	def right(self): return self.value.right()
	def __str__(self): return "%s = %s" % (self.path, self.value)

class Attribute(Phrase):
	def __init__(self, hash_:slice, meta:Meta, close:slice):
		self._hash, self.meta, self._close = hash_, meta, close
	def left(self): return self._hash.start
	def right(self): return self._close.stop
	def is_named(self, text:str): return self.meta.path.is_ident(text)
	def __str__(self): return "#[%s]" % self.meta

#######################################################################
#
#  Fields, variants, and the declarations themselves
#

class NamedField(Phrase):
	def __init__(self, attrs, nom:Nom, type_expr:TypeExpression):
		self.attrs, self.nom, self.type_expr = attrs, nom, type_expr
	def left(self): return self.nom.left()
	def right(self): return self.type_expr.right()
	def __repr__(self): return "<field %s: %s>" % (self.nom.text, self.type_expr)

class UnnamedField(Phrase):
	def __init__(self, attrs, type_expr:TypeExpression):
		self.attrs, self.type_expr = attrs, type_expr
	def left(self): return self.type_expr.left()
	def right(self): return self.type_expr.right()
	def __repr__(self): return "<field %s>" % self.type_expr

Field = Union[NamedField, UnnamedField]

class Variant(Phrase):
	nom: Nom
	fields: Sequence[Field] = ()
	def left(self): return self.nom.left()
	def right(self): return (self.fields[-1] if self.fields else self.nom).right()
	def __repr__(self): return "<variant %s>" % self.nom.text

class UnitVariant(Variant):
	def __init__(self, attrs, nom:Nom, discriminant:Optional[Literal]=None):
		self.attrs, self.nom, self.discriminant = attrs, nom, discriminant

class TupleVariant(Variant):
	def __init__(self, attrs, nom:Nom, fields:Sequence[UnnamedField]):
		self.attrs, self.nom, self.fields = attrs, nom, fields

class RecordVariant(Variant):
	def __init__(self, attrs, nom:Nom, fields:Sequence[NamedField]):
		self.attrs, self.nom, self.fields = attrs, nom, fields

class StructBody:
	where: Sequence[Predicate]
	fields: Sequence[Field] = ()

class RecordBody(StructBody):
	def __init__(self, where, fields): self.where, self.fields = where, fields

class TupleBody(StructBody):
	def __init__(self, fields, where): self.fields, self.where = fields, where

class UnitBody(StructBody):
	def __init__(self, where): self.where = where

class Declaration(Phrase):
	attrs: Sequence[Attribute]

class TypeDeclaration(Declaration):
	"""
	Points at its name for error reporting, since the name is what people
	will recognize. The attributes hold any delegation directives.
	"""
	nom: Nom
	generics: Sequence[GenericParameter]
	where: Sequence[Predicate]
	keyword = "type"
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()
	def __repr__(self): return "<%s %s>" % (self.keyword, self.nom.text)

class StructDecl(TypeDeclaration):
	keyword = "struct"
	def __init__(self, attrs, nom:Nom, generics, body:StructBody):
		self.attrs, self.nom, self.generics, self.body = attrs, nom, generics, body
		self.where = body.where

class EnumDecl(TypeDeclaration):
	keyword = "enum"
	def __init__(self, attrs, nom:Nom, generics, where, variants:Sequence[Variant]):
		self.attrs, self.nom, self.generics, self.where, self.variants = attrs, nom, generics, where, variants

class UnionDecl(TypeDeclaration):
	keyword = "union"
	def __init__(self, attrs, nom:Nom, generics, where, fields:Sequence[NamedField]):
		self.attrs, self.nom, self.generics, self.where, self.fields = attrs, nom, generics, where, fields

class UseTree(Phrase):
	path: Path
	def left(self): return self.path.left()
	def right(self): return self.path.right()

class UseName(UseTree):
	def __init__(self, path:Path): self.path = path
	def __str__(self): return str(self.path)

class UseAlias(UseTree):
	def __init__(self, path:Path, alias:Nom): self.path, self.alias = path, alias
	def right(self): return self.alias.right()
	def __str__(self): return "%s as %s" % (self.path, self.alias.text)

class UseGlob(UseTree):
	def __init__(self, path:Path): self.path = path
	def __str__(self): return "%s::*" % self.path

class UseGroup(UseTree):
	def __init__(self, path:Path, trees:Sequence[UseTree]): self.path, self.trees = path, trees
	def __str__(self): return "%s::{%s}" % (self.path, _join(self.trees))

class UseDecl(Declaration):
	""" Imports pass through untouched. They're only here so a whole file can parse. """
	def __init__(self, attrs, tree:UseTree): self.attrs, self.tree = attrs, tree
	def left(self): return self.tree.left()
	def right(self): return self.tree.right()
	def __str__(self): return "use %s;" % self.tree

class Module:
	def __init__(self, declarations:Sequence[Declaration]):
		self.declarations = declarations
	def type_declarations(self) -> list[TypeDeclaration]:
		return [d for d in self.declarations if isinstance(d, TypeDeclaration)]

#######################################################################
#
#  Field selectors, as given in `target = "..."` or implied by position.
#

class Member(Phrase):
	def key(self): raise NotImplementedError(type(self))
	def __eq__(self, other): return isinstance(other, Member) and self.key() == other.key()
	def __hash__(self): return hash(self.key())
	def __repr__(self): return "<member %s>" % self

class NamedMember(Member):
	def __init__(self, nom:Nom): self.nom = nom
	def key(self): return self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()
	def __str__(self): return self.nom.text

class IndexMember(Member):
	def __init__(self, index:Union[Literal, int]):
		if isinstance(index, Literal):
			self.index, self.where = index.value, index.where
		else:
			self.index, self.where = index, slice(0, 0)
	def key(self): return self.index
	def left(self): return self.where.start
	def right(self): return self.where.stop
	def __str__(self): return str(self.index)

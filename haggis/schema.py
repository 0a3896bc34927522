"""
Template schema: the template's shape, classified once per parse.

A template is a plain mapping whose values double as defaults and as a type
declaration. Schema reads it exactly once and records, per field, a FieldKind:

    bool          → FieldKind.FLAG      (may be switched on without a value)
    int           → FieldKind.COUNTER
    float         → FieldKind.NUMBER
    list / tuple  → FieldKind.LIST      (values accumulate)
    anything else → FieldKind.TEXT      (last value wins)

Short flags
- A short-flag letter resolves to the FIRST field (template insertion order)
  whose name starts with that letter. Field ordering is therefore meaningful:
  with {"size": 0, "source": []}, "-s" always means "size".
- Later fields sharing a letter are recorded in Schema.shadows so the parser
  can warn when an ambiguous letter is actually used.

The schema never holds on to mutable template state: blank() returns a fresh
deep copy of the defaults for every parse.
"""
import copy
from collections.abc import Mapping
from enum import Enum

from .utils import *


class FieldKind(Enum):
    """
    binding kind of a template field, derived from its default value.
    """
    FLAG = "flag"
    COUNTER = "counter"
    NUMBER = "number"
    LIST = "list"
    TEXT = "text"

    @classmethod
    def of(cls, value, /):
        # bool is checked first since it is an int subclass
        if isinstance(value, bool):
            return cls.FLAG
        if isinstance(value, int):
            return cls.COUNTER
        if isinstance(value, float):
            return cls.NUMBER
        if isinstance(value, (list, tuple)):
            return cls.LIST
        return cls.TEXT


class Field(metaclass=IntrospectableType):
    """
    one template entry: its name, its kind and its default value.
    """
    __introspectable__ = (
        "name",
        "kind",
        "default",
    )

    def __init__(self, name, default, /):
        if not isinstance(name, str):
            raise TypeError("field name must be a string")
        self._name = name
        self._kind = FieldKind.of(default)
        self._default = default


class Schema(metaclass=IntrospectableType):
    """
    Classified view of a template.

    Attributes (read-only)
    - fields: dict[str, Field] in template order.
    - shorthands: dict[str, str] mapping a letter to the field it resolves to.
    - shadows: dict[str, list[str]] mapping a letter to the fields it can never reach.

    Errors
    - TypeError when the template is not a mapping or has non-string keys.
    """
    __introspectable__ = (
        "fields",
        "shorthands",
        "shadows",
    )
    __displayable__ = (
        "fields",
        "shadows",
    )

    def __init__(self, template, /):
        if not isinstance(template, Mapping):
            raise TypeError("schema() argument must be a mapping")

        self._fields = {}
        self._shorthands = {}
        self._shadows = {}

        for name, default in template.items():
            if not isinstance(name, str):
                raise TypeError("schema() argument must have string keys, not %r" % type(name).__name__)
            self._fields[name] = Field(name, default)
            if not name:
                continue
            # first-defined field wins the letter
            if self._shorthands.setdefault(name[0], name) != name:
                self._shadows.setdefault(name[0], []).append(name)

    def __contains__(self, name, /):
        return name in self._fields

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def kind(self, name, /):
        """
        return the FieldKind of a field, or None when the template has no such field.
        """
        try:
            return self._fields[name].kind
        except KeyError:
            return None

    def resolve(self, letter, /):
        """
        return the field a short-flag letter resolves to, or None when no field starts with it.
        """
        return self._shorthands.get(letter)

    def shadowed(self, letter, /):
        """
        return the fields hidden behind a short-flag letter (empty when unambiguous).
        """
        return tuple(self._shadows.get(letter, ()))

    def blank(self):
        """
        return a fresh result mapping holding deep copies of every default.
        """
        return copy.deepcopy({name: field._default for name, field in self._fields.items()})


__all__ = (
    "FieldKind",
    "Field",
    "Schema",
)

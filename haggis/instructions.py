"""
Tokenizing the argument vector into instructions, then settling them.

An instruction is one flag occurrence plus the values that follow it:

    argv:  prog script  -s a.js b.js  -d /tmp  --exclude
                        └────┬────┘  └──┬──┘  └───┬───┘
    instructions: [positional] [source: a.js b.js] [destination: /tmp] [exclude]

Tokenizing rules
- the first two entries (interpreter, script) are always skipped.
- a synthetic leading instruction named after config.initial collects the
  values that precede the first flag.
- "--name" starts an instruction for the field "name" (verbatim, never resolved).
- "-abc" starts one instruction naming the fields resolved from "a", "b" and
  "c" (see Schema.resolve); a letter matching no field names itself.
- any other token is cast and appended to the most recent instruction.

Defaults (Policy.TYPED, the default)
- "--name" defaults to True only when "name" is a flag field.
- "-abc" defaults to True only when EVERY resolved field is a flag field;
  one non-flag field suppresses the default for the whole cluster.

Defaults (Policy.EAGER, opt-in)
- every short-flag cluster defaults to True whatever its fields are;
  long flags never default and valueless instructions are kept.

settle() then hoists defaults into empty instructions and, under the typed
policy, drops every instruction still left without values.
"""
from enum import StrEnum

from .casting import cast
from .faults import *
from .schema import FieldKind
from .utils import *


class Policy(StrEnum):
    """
    boolean-defaulting strategy for valueless flags.
    """
    TYPED = "typed"
    EAGER = "eager"


class Instruction(metaclass=IntrospectableType):
    """
    one parsed flag/positional group.

    Attributes (read-only)
    - name: list[str] field names targeted (several for a short-flag cluster).
    - data: list[None | bool | int | float | str] cast values, in token order.
    - default: True when a default is pending, None otherwise.
    - token: the raw flag token, or None for the leading positional group.
    - index: 1-based position of the flag token (0 for the leading group).
    """
    __introspectable__ = (
        "name",
        "data",
        "default",
        "token",
        "index",
    )
    __displayable__ = (
        "name",
        "data",
        "default",
    )

    def __init__(self, name=(), data=(), /, default=Unset, *, token=None, index=0):
        self._name = list(name)
        self._data = list(data)
        self._default = default
        self._token = token
        self._index = index

    @property
    def leading(self):
        return self._token is None

    def append(self, value, /):
        self._data.append(value)

    def hoist(self):
        """
        move a pending default into an empty instruction; explicit values always win.
        """
        if self._default is not Unset and not self._data:
            self._data = [self._default]
            self._default = Unset


def _resolve(letter, token, index, schema, faults):
    name = schema.resolve(letter)

    if name is None:
        faults.append(UnresolvedShorthandWarning(
            "shorthand %r in %r at %s position matches no field" % ("-" + letter, token, ordinal(index)),
            title="unresolved shorthand",
            code=FaultCode.UNRESOLVED_SHORTHAND,
            hint="it targets a field literally named %r; use a long flag to reach a template field" % letter,
            token=token,
            index=index,
            letter=letter,
            docs=getdoc(FaultCode.UNRESOLVED_SHORTHAND)
        ))
        return letter

    if shadowed := schema.shadowed(letter):
        faults.append(AmbiguousShorthandWarning(
            "shorthand %r in %r at %s position resolves to %r, shadowing %s" % (
                "-" + letter, token, ordinal(index), name, ", ".join(map(repr, shadowed))
            ),
            title="ambiguous shorthand",
            code=FaultCode.AMBIGUOUS_SHORTHAND,
            hint="use the long form to reach a shadowed field (for example: --%s)" % shadowed[0],
            token=token,
            index=index,
            letter=letter,
            name=name,
            shadowed=shadowed,
            docs=getdoc(FaultCode.AMBIGUOUS_SHORTHAND)
        ))

    return name


def tokenize(argv, schema, config, /, faults=Unset):
    """
    group an argument vector into ordered instructions.

    parameters
    - argv: Sequence[str] whole vector, including the two leading entries.
    - schema: Schema of the template.
    - config: Config (initial and policy are read).
    - faults: list collecting diagnostics (optional).

    returns
    - list[Instruction], the leading positional group first.
    """
    faults = coalesce(faults, [])
    instructions = [Instruction([config.initial])]

    for index, token in enumerate(argv[2:], start=1):
        if token.startswith("--"):
            name = token[2:]
            default = Unset
            if config.policy is Policy.TYPED and schema.kind(name) is FieldKind.FLAG:
                default = True
            instructions.append(Instruction([name], default=default, token=token, index=index))
        elif token.startswith("-"):
            names = [_resolve(letter, token, index, schema, faults) for letter in token[1:]]
            default = Unset
            if config.policy is Policy.EAGER or all(schema.kind(name) is FieldKind.FLAG for name in names):
                default = True
            instructions.append(Instruction(names, default=default, token=token, index=index))
        else:
            instructions[-1].append(cast(token))

    return instructions


def settle(instructions, config, /, faults=Unset):
    """
    hoist pending defaults, then drop instructions that carry no value.

    returns
    - list[Instruction] ready for binding (the input list is not modified,
      but its instructions are hoisted in place).
    """
    faults = coalesce(faults, [])

    for instruction in instructions:
        instruction.hoist()

    if config.policy is Policy.EAGER:
        return list(instructions)

    settled = []
    for instruction in instructions:
        if instruction.data:
            settled.append(instruction)
            continue
        if instruction.leading:
            continue
        token = instruction.token
        faults.append(ValuelessSwitchWarning(
            "%r at %s position has no value and %s, so it is ignored" % (
                token,
                ordinal(instruction.index),
                "is not a flag field" if token.startswith("--") else "not every field it names is a flag field"
            ),
            title="valueless switch",
            code=FaultCode.VALUELESS_SWITCH,
            hint="pass a value after it (for example: %s <value>)" % token,
            token=token,
            index=instruction.index,
            names=tuple(instruction.name),
            docs=getdoc(FaultCode.VALUELESS_SWITCH)
        ))
    return settled


__all__ = (
    "Policy",
    "Instruction",
    "tokenize",
    "settle",
)

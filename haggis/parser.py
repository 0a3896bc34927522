"""
Haggis parser layer: configure, run the pipeline, surface diagnostics.

What this module provides
- Config: immutable parse configuration (strict, initial, policy) plus the
  diagnostics switches (silent, shell, fancy, colorful).
- Outcome: the result mapping together with the settled instructions and the
  faults gathered on the way.
- analyze(template, config, argv): run the whole pipeline and return an Outcome.
- haggis(template, config, argv): the single-call entry point; returns the result.

Pipeline
    Schema(template) → tokenize() → settle() → bind() → trigger(faults)

Every call is independent: the template is never mutated, the result is a
fresh deep copy, and no state is kept between calls.

Quick start
    from haggis import haggis

    template = {"count": 10, "exclude": False, "source": [], "destination": ""}
    options = {"strict": True, "initial": "positional"}

    result = haggis(template, options)  # reads sys.argv
"""
import copy
import os.path
import sys
from collections.abc import Iterable, Mapping

from .binder import bind
from .faults import *
from .instructions import Policy, tokenize, settle
from .schema import Schema
from .utils import *


class Config(metaclass=IntrospectableType):
    """
    Parse configuration.

    Options
    - strict: bool (default True)
      drop every resolved field name that is not a template field.
    - initial: str (default "positional")
      field receiving the values that precede the first flag.
    - policy: Policy | "typed" | "eager" (default "typed")
      boolean-defaulting strategy for valueless flags (see haggis.instructions).
    - silent: bool (default True)
      record faults on the Outcome without surfacing them; set it to False
      to emit them as warnings (or render them, see shell).
    - shell: bool (default False)
      render faults on stderr via rich instead of emitting Python warnings.
    - fancy: bool (default False)
      render faults inside a rich Panel (shell mode).
    - colorful: bool (default True)
      colorize rendered faults (shell mode).

    Errors
    - TypeError for wrongly typed options (and unknown options).
    - ValueError for an empty initial or an unknown policy.
    """
    __introspectable__ = (
        "strict",
        "initial",
        "policy",
        "silent",
        "shell",
        "fancy",
        "colorful",
    )
    __displayable__ = (
        "strict",
        "initial",
        "policy",
    )

    def __init__(
            self,
            *,
            strict=True,
            initial="positional",
            policy=Policy.TYPED,
            silent=True,
            shell=False,
            fancy=False,
            colorful=True,
    ):
        for option, value in (
                ("strict", strict),
                ("silent", silent),
                ("shell", shell),
                ("fancy", fancy),
                ("colorful", colorful),
        ):
            if not isinstance(value, bool):
                raise TypeError("config %r option must be a boolean" % option)
        if not isinstance(initial, str):
            raise TypeError("config 'initial' option must be a string")
        if not initial:
            raise ValueError("config 'initial' option must be a non-empty string")
        if not isinstance(policy, str):
            raise TypeError("config 'policy' option must be a string")
        try:
            policy = Policy(policy)
        except ValueError:
            raise ValueError("config 'policy' option must be one of %s" % ", ".join(map(repr, map(str, Policy)))) from None

        self._strict = strict
        self._initial = initial
        self._policy = policy
        self._silent = silent
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful

    @classmethod
    def coerce(cls, config=Unset, /):
        """
        build a Config from Unset (defaults), a mapping of options, or a Config.
        """
        if config is Unset:
            return cls()
        if isinstance(config, cls):
            return config
        if isinstance(config, Mapping):
            return cls(**config)
        raise TypeError("config must be a mapping or a Config")


class Outcome(metaclass=IntrospectableType):
    """
    Everything a parse produced.

    Attributes (read-only)
    - result: dict, the bound result mapping (returned as-is, not copied).
    - instructions: list[Instruction] as they were bound.
    - faults: list[HaggisWarning] gathered during the parse, in pipeline order.
    """
    __introspectable__ = (
        "instructions",
        "faults",
    )
    __displayable__ = (
        "result",
        "instructions",
        "faults",
    )

    def __init__(self, result, instructions, faults, /):
        self._result = result
        self._instructions = list(instructions)
        self._faults = list(faults)

    @property
    def result(self):
        return self._result


def _sanitized(argv):
    """
    normalize the argument vector into a list[str].

    Unset reads the running process: sys.argv is prefixed with the interpreter
    path so that the two leading entries are (interpreter, script).
    """
    if argv is Unset:
        return [sys.executable, *sys.argv]
    if isinstance(argv, str) or not isinstance(argv, Iterable):
        raise TypeError("argv must be an iterable of strings")
    tokens = list(argv)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("argv must be an iterable of strings")
    return tokens


def analyze(template, config=Unset, argv=Unset, /):
    """
    Parse an argument vector against a template and keep every by-product.

    Parameters
    - template: Mapping[str, Any] whose values are defaults and type declarations.
    - config: Unset | Mapping | Config (see Config).
    - argv: Unset | Iterable[str]; the first two entries are always skipped.

    Returns
    - Outcome

    Behavior
    - never raises for argument content: unknown names, unresolved shorthands
      and valueless switches degrade to faults (see haggis.faults).
    - faults are only recorded on the Outcome by default; with silent=False
      they are triggered after binding.
    """
    config = Config.coerce(config)
    argv = _sanitized(argv)
    schema = Schema(template)

    faults = []
    instructions = settle(tokenize(argv, schema, config, faults), config, faults)
    result = bind(instructions, schema, config, faults)

    options = {
        "prog": os.path.basename(argv[1]) if len(argv) > 1 and argv[1] else "haggis",
        "shell": config.shell,
        "fancy": config.fancy,
        "colorful": config.colorful,
    }
    outcome = Outcome(result, instructions, (copy.replace(fault, **options) for fault in faults))

    if not config.silent:
        for fault in outcome._faults:
            trigger(fault)

    return outcome


def haggis(template, config=Unset, argv=Unset, /):
    """
    Parse an argument vector against a template and return the result mapping.

    Example
        >>> template = {"count": 10, "exclude": False, "source": [], "destination": ""}
        >>> argv = ["node", "test.js", "-s", "a.js", "b.js", "-d", "/tmp", "--exclude"]
        >>> haggis(template, {}, argv)
        {'count': 10, 'exclude': True, 'source': ['a.js', 'b.js'], 'destination': '/tmp'}
    """
    return analyze(template, config, argv).result


__all__ = (
    "Config",
    "Outcome",
    "analyze",
    "haggis",
)

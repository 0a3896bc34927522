"""
Folding settled instructions into a result mapping.

For every instruction (in token order) and every name it carries (in order):
- strict mode and the name is not a template field → skipped;
- list fields accumulate: the instruction's values are concatenated;
- any other field takes the instruction's LAST value (last write wins).

No coercion happens here: a text token bound to a counter field stays text.
"""
from .faults import *
from .schema import FieldKind
from .utils import *


def bind(instructions, schema, config, /, faults=Unset):
    """
    fold instructions into a fresh copy of the template defaults.

    parameters
    - instructions: Iterable[Instruction] settled instructions.
    - schema: Schema of the template (source of defaults and field kinds).
    - config: Config (strict is read).
    - faults: list collecting diagnostics (optional).

    returns
    - dict: the result mapping (never aliases the template).
    """
    faults = coalesce(faults, [])
    result = schema.blank()

    for instruction in instructions:
        data = instruction.data
        # an empty leading group survives settling under the eager policy
        if instruction.leading and not data:
            continue
        for name in instruction.name:
            if name not in schema:
                if config.strict:
                    faults.append(_discarded(instruction, name))
                    continue
                if data:
                    result[name] = data[-1]
                continue

            if schema.kind(name) is FieldKind.LIST:
                result[name] = result[name] + type(result[name])(data)
            elif data:
                result[name] = data[-1]

    return result


def _discarded(instruction, name):
    if instruction.leading:
        message = "values before the first flag target %r, which is not a template field" % name
        hint = "set the 'initial' option to a template field, or put a flag before the values"
    else:
        message = "field %r from %r at %s position is not in the template" % (
            name, instruction.token, ordinal(instruction.index)
        )
        hint = "add %r to the template or disable strict mode to keep it" % name

    return DiscardedFieldWarning(
        message,
        title="discarded field",
        code=FaultCode.DISCARDED_FIELD,
        hint=hint,
        token=instruction.token,
        index=instruction.index,
        name=name,
        docs=getdoc(FaultCode.DISCARDED_FIELD)
    )


__all__ = (
    "bind",
)

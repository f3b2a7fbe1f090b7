"""Argument binding: map raw invocation input onto declared arguments.

Two input shapes are supported:

* CLI tokens: each ``name=value`` (split on the first ``=``) or a bare
  positional value.  Bare tokens fill the unprefixed ("positional")
  definitions in order; surplus bare tokens are kept as extras.
* A name -> value mapping (MCP tool calls).  ``None`` means absent.

Per definition the value comes from, in order: an explicit assignment, a
positional slot, the declared default.  A required argument with none of
these fails binding.  Coercion is lenient: a value that does not parse as
its declared type is kept as the raw string.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from interop.domain.commands import ArgumentDefinition, ArgumentValue
from interop.domain.errors import ArgumentValidationError
from interop.domain.types import ArgumentSource, ArgumentType

_TRUE = frozenset({"1", "t", "true"})
_FALSE = frozenset({"0", "f", "false"})


@dataclass(frozen=True)
class BoundArguments:
    """Result of binding.

    Attributes:
        values: Declared argument name -> coerced value, in definition order.
        sources: Where each value in ``values`` came from.
        extras: Bare tokens left over after every positional slot was filled.
        undeclared: Assignments whose name matches no definition.
    """

    values: dict[str, ArgumentValue] = field(default_factory=dict)
    sources: dict[str, ArgumentSource] = field(default_factory=dict)
    extras: tuple[str, ...] = ()
    undeclared: dict[str, Any] = field(default_factory=dict)

    def supplied(self, name: str) -> bool:
        """True if the caller gave a value (explicitly or positionally)."""
        return self.sources.get(name) in (ArgumentSource.EXPLICIT, ArgumentSource.POSITIONAL)


def split_assignment(token: str) -> tuple[str, str] | None:
    """Split ``name=value`` on the first ``=``; None for bare tokens."""
    name, sep, value = token.partition("=")
    if sep and name:
        return name, value
    return None


def coerce_value(definition: ArgumentDefinition, raw: Any) -> ArgumentValue:
    """Coerce *raw* to the definition's declared type.

    Raises:
        ArgumentValidationError: *raw* is a list or table, which no declared
            type can hold.
    """
    if isinstance(raw, (list, tuple, dict, set)):
        msg = (
            f"argument '{definition.name}' expects a {definition.type} value, "
            f"got {type(raw).__name__}"
        )
        raise ArgumentValidationError(msg, argument=definition.name, type=str(definition.type))

    if definition.type == ArgumentType.BOOL:
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
        return raw

    if definition.type == ArgumentType.NUMBER:
        if isinstance(raw, str):
            try:
                return float(raw)
            except ValueError:
                return raw
        return raw

    return raw


def _bind(
    definitions: Sequence[ArgumentDefinition],
    explicit: Mapping[str, Any],
    bare: Sequence[str],
    undeclared: dict[str, Any],
) -> BoundArguments:
    pending = iter(bare)
    slots: dict[str, str] = {}
    for definition in definitions:
        if not definition.is_positional or definition.name in explicit:
            continue
        token = next(pending, None)
        if token is None:
            break
        slots[definition.name] = token
    extras = tuple(pending)

    values: dict[str, ArgumentValue] = {}
    sources: dict[str, ArgumentSource] = {}
    for definition in definitions:
        name = definition.name
        if name in explicit:
            raw, source = explicit[name], ArgumentSource.EXPLICIT
        elif name in slots:
            raw, source = slots[name], ArgumentSource.POSITIONAL
        elif definition.default is not None:
            raw, source = definition.default, ArgumentSource.DEFAULT
        elif definition.required:
            msg = f"required argument '{name}' not provided"
            raise ArgumentValidationError(msg, argument=name)
        else:
            continue
        values[name] = coerce_value(definition, raw)
        sources[name] = source

    return BoundArguments(values=values, sources=sources, extras=extras, undeclared=undeclared)


def bind_tokens(definitions: Sequence[ArgumentDefinition], tokens: Sequence[str]) -> BoundArguments:
    """Bind CLI tokens (``name=value`` or bare) onto *definitions*."""
    declared = {d.name for d in definitions}
    explicit: dict[str, str] = {}
    undeclared: dict[str, str] = {}
    bare: list[str] = []
    for token in tokens:
        pair = split_assignment(token)
        if pair is None:
            bare.append(token)
        elif pair[0] in declared:
            explicit[pair[0]] = pair[1]
        else:
            undeclared[pair[0]] = pair[1]
    return _bind(definitions, explicit, bare, undeclared)


def bind_mapping(
    definitions: Sequence[ArgumentDefinition], arguments: Mapping[str, Any] | None
) -> BoundArguments:
    """Bind a name -> value mapping onto *definitions*."""
    declared = {d.name for d in definitions}
    explicit: dict[str, Any] = {}
    undeclared: dict[str, Any] = {}
    for name, value in (arguments or {}).items():
        if value is None:
            continue
        if name in declared:
            explicit[name] = value
        else:
            undeclared[name] = value
    return _bind(definitions, explicit, (), undeclared)

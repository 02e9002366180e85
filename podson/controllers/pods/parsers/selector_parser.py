"""Selector parser - parses node label selectors and classifies CLI arguments.

Selectors follow the Kubernetes label selector syntax: comma-separated
requirements that must all hold, each one of ``key=value``, ``key==value``,
``key!=value``, ``key in (a,b)``, ``key notin (a,b)``, ``key``, ``!key``,
``key>N`` or ``key<N``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from podson.constants.enums import SelectorOperator
from podson.errors import PredicateSyntaxError

_NAME_PATTERN = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)?$")
_DNS_SUBDOMAIN_PATTERN = re.compile(
    r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$"
)
_INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")
_MAX_NAME_LENGTH = 63
_MAX_PREFIX_LENGTH = 253

# Token kinds
_IDENT = "identifier"
_BANG = "!"
_EQ = "="
_DOUBLE_EQ = "=="
_NOT_EQ = "!="
_IN = "in"
_NOT_IN = "notin"
_GT = ">"
_LT = "<"
_OPEN = "("
_CLOSE = ")"
_COMMA = ","
_END = "end of string"

_SPECIAL_CHARS = frozenset("!=(),<>")
_KEYWORDS = {"in": _IN, "notin": _NOT_IN}


@dataclass(frozen=True)
class LabelRequirement:
    """A single key/operator/values condition on node labels."""

    key: str
    operator: SelectorOperator
    values: tuple[str, ...] = ()

    def matches(self, labels: Mapping[str, str]) -> bool:
        """Return True when the labels satisfy this requirement."""
        op = self.operator
        if op in (SelectorOperator.EQUALS, SelectorOperator.DOUBLE_EQUALS, SelectorOperator.IN):
            return self.key in labels and labels[self.key] in self.values
        if op in (SelectorOperator.NOT_EQUALS, SelectorOperator.NOT_IN):
            return self.key not in labels or labels[self.key] not in self.values
        if op == SelectorOperator.EXISTS:
            return self.key in labels
        if op == SelectorOperator.DOES_NOT_EXIST:
            return self.key not in labels
        # Gt / Lt compare integers; non-integer label values never match.
        value = labels.get(self.key)
        if value is None or not _INTEGER_PATTERN.match(value):
            return False
        if op == SelectorOperator.GREATER_THAN:
            return int(value) > int(self.values[0])
        return int(value) < int(self.values[0])

    def __str__(self) -> str:
        op = self.operator
        if op == SelectorOperator.EXISTS:
            return self.key
        if op == SelectorOperator.DOES_NOT_EXIST:
            return f"!{self.key}"
        if op in (SelectorOperator.IN, SelectorOperator.NOT_IN):
            return f"{self.key} {op.value} ({','.join(self.values)})"
        if op == SelectorOperator.GREATER_THAN:
            return f"{self.key}>{self.values[0]}"
        if op == SelectorOperator.LESS_THAN:
            return f"{self.key}<{self.values[0]}"
        return f"{self.key}{op.value}{self.values[0]}"


@dataclass(frozen=True)
class LabelSelector:
    """A conjunction of label requirements. No requirements matches everything."""

    requirements: tuple[LabelRequirement, ...] = field(default_factory=tuple)

    def matches(self, labels: Mapping[str, str]) -> bool:
        """Return True when every requirement holds."""
        return all(requirement.matches(labels) for requirement in self.requirements)

    def __str__(self) -> str:
        return ",".join(str(requirement) for requirement in self.requirements)


def _validate_key(key: str, text: str) -> None:
    prefix, _, name = key.rpartition("/")
    if "/" in key and not prefix:
        raise PredicateSyntaxError(f"invalid label key {key!r} in selector {text!r}: empty prefix")
    if prefix and (
        len(prefix) > _MAX_PREFIX_LENGTH or not _DNS_SUBDOMAIN_PATTERN.match(prefix)
    ):
        raise PredicateSyntaxError(
            f"invalid label key {key!r} in selector {text!r}: prefix must be a DNS subdomain"
        )
    if not name or len(name) > _MAX_NAME_LENGTH or not _NAME_PATTERN.match(name):
        raise PredicateSyntaxError(
            f"invalid label key {key!r} in selector {text!r}: name must be 63 characters "
            "or less, begin and end with an alphanumeric character and contain only "
            "alphanumerics, '-', '_' or '.'"
        )


def _validate_value(value: str, text: str) -> None:
    if len(value) > _MAX_NAME_LENGTH or not _NAME_PATTERN.match(value):
        raise PredicateSyntaxError(
            f"invalid label value {value!r} in selector {text!r}: must be 63 characters "
            "or less and be empty or begin and end with an alphanumeric character"
        )


class SelectorParser:
    """Parses Kubernetes label selector strings."""

    def _tokenize(self, text: str) -> list[tuple[str, str]]:
        tokens: list[tuple[str, str]] = []
        i = 0
        while i < len(text):
            char = text[i]
            if char.isspace():
                i += 1
                continue
            if char in _SPECIAL_CHARS:
                pair = text[i : i + 2]
                if pair in (_NOT_EQ, _DOUBLE_EQ):
                    tokens.append((pair, pair))
                    i += 2
                else:
                    tokens.append((char, char))
                    i += 1
                continue
            start = i
            while i < len(text) and not text[i].isspace() and text[i] not in _SPECIAL_CHARS:
                i += 1
            word = text[start:i]
            tokens.append((_KEYWORDS.get(word, _IDENT), word))
        tokens.append((_END, ""))
        return tokens

    def parse(self, text: str) -> LabelSelector:
        """Parse one selector string.

        Raises:
            PredicateSyntaxError: The selector is malformed.
        """
        tokens = self._tokenize(text)
        pos = 0

        def peek() -> tuple[str, str]:
            return tokens[pos]

        def advance() -> tuple[str, str]:
            nonlocal pos
            token = tokens[pos]
            pos += 1
            return token

        def expect(kind: str, what: str) -> str:
            token_kind, token_text = advance()
            if token_kind != kind:
                found = token_text or _END
                raise PredicateSyntaxError(
                    f"failed to parse selector {text!r}: expected {what}, found {found!r}"
                )
            return token_text

        def parse_values() -> tuple[str, ...]:
            expect(_OPEN, "'('")
            values: list[str] = []
            if peek()[0] == _CLOSE:
                raise PredicateSyntaxError(
                    f"failed to parse selector {text!r}: values set cannot be empty"
                )
            while True:
                kind, word = peek()
                if kind in (_IDENT, _IN, _NOT_IN):
                    advance()
                    values.append(word)
                elif kind in (_COMMA, _CLOSE):
                    # "a,,b" and "a,)" carry an empty value
                    values.append("")
                else:
                    raise PredicateSyntaxError(
                        f"failed to parse selector {text!r}: unexpected {word or _END!r} in values"
                    )
                kind, word = advance()
                if kind == _CLOSE:
                    break
                if kind != _COMMA:
                    raise PredicateSyntaxError(
                        f"failed to parse selector {text!r}: expected ',' or ')', found {word or _END!r}"
                    )
            for value in values:
                _validate_value(value, text)
            return tuple(dict.fromkeys(values))

        def parse_requirement() -> LabelRequirement:
            if peek()[0] == _BANG:
                advance()
                key = expect(_IDENT, "a label key")
                _validate_key(key, text)
                return LabelRequirement(key, SelectorOperator.DOES_NOT_EXIST)

            key = expect(_IDENT, "a label key")
            _validate_key(key, text)
            kind, word = peek()
            if kind in (_COMMA, _END):
                return LabelRequirement(key, SelectorOperator.EXISTS)
            advance()
            if kind in (_EQ, _DOUBLE_EQ, _NOT_EQ):
                operator = SelectorOperator(kind)
                value = ""
                if peek()[0] in (_IDENT, _IN, _NOT_IN):
                    value = advance()[1]
                _validate_value(value, text)
                return LabelRequirement(key, operator, (value,))
            if kind in (_IN, _NOT_IN):
                operator = SelectorOperator.IN if kind == _IN else SelectorOperator.NOT_IN
                return LabelRequirement(key, operator, parse_values())
            if kind in (_GT, _LT):
                value = expect(_IDENT, "an integer")
                if not _INTEGER_PATTERN.match(value):
                    raise PredicateSyntaxError(
                        f"failed to parse selector {text!r}: {value!r} is not an integer"
                    )
                operator = (
                    SelectorOperator.GREATER_THAN if kind == _GT else SelectorOperator.LESS_THAN
                )
                return LabelRequirement(key, operator, (value,))
            raise PredicateSyntaxError(
                f"failed to parse selector {text!r}: unexpected {word or _END!r} after key {key!r}"
            )

        requirements: list[LabelRequirement] = []
        if peek()[0] == _END:
            return LabelSelector()
        while True:
            requirements.append(parse_requirement())
            kind, word = advance()
            if kind == _END:
                break
            if kind != _COMMA:
                raise PredicateSyntaxError(
                    f"failed to parse selector {text!r}: expected ',' found {word!r}"
                )
        return LabelSelector(tuple(requirements))


def is_node_name(arg: str) -> bool:
    """Return True when the argument names a node rather than a selector.

    Anything containing selector operators or whitespace is a selector.
    """
    return bool(arg) and not any(char in _SPECIAL_CHARS or char.isspace() for char in arg)


def split_node_args(
    args: Iterable[str], parser: SelectorParser | None = None
) -> tuple[list[str], list[LabelSelector]]:
    """Split positional arguments into explicit node names and selectors.

    Raises:
        PredicateSyntaxError: No arguments were given or a selector is malformed.
    """
    parser = parser or SelectorParser()
    node_names: list[str] = []
    selectors: list[LabelSelector] = []
    for arg in args:
        if is_node_name(arg):
            node_names.append(arg)
        else:
            selectors.append(parser.parse(arg))
    if not node_names and not selectors:
        raise PredicateSyntaxError(
            "no positional arguments specified. specify node names or node selectors"
        )
    return node_names, selectors

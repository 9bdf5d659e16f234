"""DocType parser — builds DocType trees from annotation text.

Doc-comment tooling normally hands typenorm an already parsed tree. This
parser covers the common annotation syntax so that plain strings such as
``"int|null"``, ``"?Foo"``, ``"string[]"`` or ``"Collection<string, \\App\\User>"``
can be normalized from the command line and in tests.

Grammar:

    union   := term ("|" term)*
    term    := "?" term | "(" union ")" "[]"* | name generic? "[]"*
    generic := "<" union ("," union)? ">"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from typenorm.doctype.models import DocType, GenericContainer, NullMarker, Scalar, Union


TOKEN_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<array>\[\])
  | (?P<name>[A-Za-z_\\\u0080-\uffff][A-Za-z0-9_\\\-.\u0080-\uffff]*)
  | (?P<punct>[|?()<>,])
    """,
    re.VERBOSE,
)

# Key type assumed when a generic only names its value type
DEFAULT_KEY_TYPE = Union((Scalar("int"), Scalar("string")))


class DocTypeSyntaxError(ValueError):
    """Raised when annotation text does not match the grammar."""

    def __init__(self, message: str, text: str, position: int):
        super().__init__(f"{message} at position {position} in {text!r}")
        self.text = text
        self.position = position


@dataclass
class Token:
    kind: str  # "name", "array" or the punctuation character itself
    value: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split annotation text into tokens, skipping whitespace."""
    tokens = []
    position = 0
    while position < len(text):
        match = TOKEN_PATTERN.match(text, position)
        if not match:
            raise DocTypeSyntaxError(f"Unexpected character {text[position]!r}", text, position)
        kind = match.lastgroup
        value = match.group()
        if kind == "punct":
            kind = value
        if kind != "ws":
            tokens.append(Token(kind=kind, value=value, position=position))
        position = match.end()
    return tokens


def parse_doctype(text: str) -> DocType:
    """Parse one annotation into a DocType tree."""
    parser = _Parser(text, tokenize(text))
    node = parser.parse_union()
    parser.expect_end()
    return node


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, text: str, tokens: list[Token]):
        self.text = text
        self.tokens = tokens
        self.index = 0

    def peek(self) -> str:
        if self.index < len(self.tokens):
            return self.tokens[self.index].kind
        return ""

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def expect(self, kind: str) -> Token:
        if self.peek() != kind:
            self.fail(f"Expected {kind!r}")
        return self.advance()

    def expect_end(self) -> None:
        if self.index < len(self.tokens):
            self.fail(f"Unexpected {self.tokens[self.index].value!r}")

    def fail(self, message: str):
        if self.index < len(self.tokens):
            position = self.tokens[self.index].position
        else:
            position = len(self.text)
        if not self.tokens:
            message = "Empty annotation"
        raise DocTypeSyntaxError(message, self.text, position)

    def parse_union(self) -> DocType:
        alternatives: list[DocType] = []
        while True:
            term = self.parse_term()
            # Groups and "?" shorthands are spliced into the enclosing union
            if isinstance(term, Union):
                alternatives.extend(term.alternatives)
            else:
                alternatives.append(term)
            if self.peek() != "|":
                break
            self.advance()

        if len(alternatives) == 1:
            return alternatives[0]
        return Union(tuple(alternatives))

    def parse_term(self) -> DocType:
        kind = self.peek()

        if kind == "?":
            self.advance()
            inner = self.parse_term()
            if isinstance(inner, Union):
                return Union((*inner.alternatives, NullMarker()))
            return Union((inner, NullMarker()))

        if kind == "(":
            self.advance()
            group = self.parse_union()
            self.expect(")")
            return self._wrap_arrays(group)

        if kind == "name":
            name = self.advance().value
            if self.peek() == "<":
                return self._wrap_arrays(self._parse_generic(name))
            while self.peek() == "array":
                name += self.advance().value
            if name.lower() == "null":
                return NullMarker()
            return Scalar(name)

        if kind == "array":
            # A bare "[]" is an array of unknown elements
            name = ""
            while self.peek() == "array":
                name += self.advance().value
            return Scalar(name)

        self.fail("Expected a type name")

    def _parse_generic(self, name: str) -> GenericContainer:
        self.expect("<")
        first = self.parse_union()
        if self.peek() == ",":
            self.advance()
            key_type, value_type = first, self.parse_union()
        else:
            key_type, value_type = DEFAULT_KEY_TYPE, first
        if self.peek() == ",":
            self.fail("Generics take at most a key and a value type")
        self.expect(">")
        return GenericContainer(qualified_name=name, key_type=key_type, value_type=value_type)

    def _wrap_arrays(self, node: DocType) -> DocType:
        while self.peek() == "array":
            self.advance()
            node = GenericContainer(qualified_name="array", key_type=Scalar("int"), value_type=node)
        return node

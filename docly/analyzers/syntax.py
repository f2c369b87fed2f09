"""Closed syntax variants lowered from tree-sitter nodes.

The extraction passes never look at raw tree-sitter nodes. Each construct
they care about is lowered into one of the frozen dataclasses below and
everything else becomes :class:`Opaque`, so downstream dispatch is a plain
``isinstance`` check over a fixed set of types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from tree_sitter import Node

from ..models import LiteralValue
from .tree_sitter import ParsedSource


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Literal:
    """String, number, boolean or null literal."""

    value: LiteralValue
    kind: str


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class Member:
    """Property access ``object.property`` or ``object["property"]``."""

    object: "Expression"
    property: Optional[str]
    computed: bool = False


@dataclass(frozen=True)
class Call:
    callee: "Expression"
    arguments: Tuple["Expression", ...] = ()


@dataclass(frozen=True)
class LogicalOr:
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class Function:
    """Function or arrow function expression; ``name`` is None when anonymous."""

    name: Optional[str] = None


@dataclass(frozen=True)
class Opaque:
    """Any construct the extractor does not interpret."""

    kind: str


Expression = Union[Literal, Identifier, Member, Call, LogicalOr, Function, Opaque]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Comment:
    value: str


@dataclass(frozen=True)
class Declarator:
    name: Optional[str]
    init: Optional[Expression]


@dataclass(frozen=True)
class VariableDeclaration:
    declarators: Tuple[Declarator, ...]


@dataclass(frozen=True)
class ImportDeclaration:
    alias: Optional[str]
    source: Optional[str]


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression
    leading_comments: Tuple[Comment, ...] = ()


Statement = Union[VariableDeclaration, ImportDeclaration, ExpressionStatement]


_FUNCTION_TYPES = {"arrow_function", "function_expression", "function", "generator_function"}
_DECLARATION_TYPES = {"lexical_declaration", "variable_declaration"}
_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def iter_statements(parsed: ParsedSource) -> Iterator[Statement]:
    """Yield recognised statements in source order, including nested ones."""
    stack: List[Node] = [parsed.root]
    while stack:
        node = stack.pop()
        statement = lower_statement(node, parsed)
        if statement is not None:
            yield statement
        stack.extend(reversed(node.named_children))


def lower_statement(node: Node, parsed: ParsedSource) -> Optional[Statement]:
    kind = node.type
    if kind in _DECLARATION_TYPES:
        declarators = tuple(
            _lower_declarator(child, parsed)
            for child in node.named_children
            if child.type == "variable_declarator"
        )
        return VariableDeclaration(declarators=declarators)
    if kind == "import_statement":
        return _lower_import(node, parsed)
    if kind == "expression_statement":
        children = _named(node)
        if not children:
            return None
        return ExpressionStatement(
            expression=lower_expression(children[0], parsed),
            leading_comments=_leading_comments(node, parsed),
        )
    return None


def lower_expression(node: Optional[Node], parsed: ParsedSource) -> Expression:
    if node is None:
        return Opaque("missing")
    kind = node.type
    if kind == "parenthesized_expression":
        inner = _named(node)
        return lower_expression(inner[0] if inner else None, parsed)
    if kind == "string":
        return Literal(_string_value(node, parsed), "string")
    if kind == "number":
        return Literal(_number_value(parsed.text(node)), "number")
    if kind in ("true", "false"):
        return Literal(kind == "true", "boolean")
    if kind == "null":
        return Literal(None, "null")
    if kind == "identifier":
        return Identifier(parsed.text(node))
    if kind == "member_expression":
        prop = node.child_by_field_name("property")
        return Member(
            object=lower_expression(node.child_by_field_name("object"), parsed),
            property=parsed.text(prop) if prop is not None else None,
        )
    if kind == "subscript_expression":
        index = lower_expression(node.child_by_field_name("index"), parsed)
        name = index.value if isinstance(index, Literal) and index.kind == "string" else None
        return Member(
            object=lower_expression(node.child_by_field_name("object"), parsed),
            property=name,
            computed=True,
        )
    if kind == "call_expression":
        arguments = node.child_by_field_name("arguments")
        if arguments is None or arguments.type != "arguments":
            # tagged template
            return Opaque(kind)
        return Call(
            callee=lower_expression(node.child_by_field_name("function"), parsed),
            arguments=tuple(lower_expression(arg, parsed) for arg in _named(arguments)),
        )
    if kind == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type == "||":
            return LogicalOr(
                left=lower_expression(node.child_by_field_name("left"), parsed),
                right=lower_expression(node.child_by_field_name("right"), parsed),
            )
        return Opaque(kind)
    if kind in _FUNCTION_TYPES:
        name = node.child_by_field_name("name")
        return Function(parsed.text(name) if name is not None else None)
    return Opaque(kind)


def _lower_declarator(node: Node, parsed: ParsedSource) -> Declarator:
    name_node = node.child_by_field_name("name")
    value_node = node.child_by_field_name("value")
    name = parsed.text(name_node) if name_node is not None and name_node.type == "identifier" else None
    init = lower_expression(value_node, parsed) if value_node is not None else None
    return Declarator(name=name, init=init)


def _lower_import(node: Node, parsed: ParsedSource) -> ImportDeclaration:
    source_node = node.child_by_field_name("source")
    source = _string_value(source_node, parsed) if source_node is not None else None
    alias: Optional[str] = None
    for child in node.named_children:
        if child.type == "import_clause":
            alias = _first_local_name(child, parsed)
            break
    return ImportDeclaration(alias=alias, source=source)


def _first_local_name(clause: Node, parsed: ParsedSource) -> Optional[str]:
    for child in clause.named_children:
        if child.type == "identifier":
            return parsed.text(child)
        if child.type == "namespace_import":
            for inner in child.named_children:
                if inner.type == "identifier":
                    return parsed.text(inner)
        if child.type == "named_imports":
            for specifier in child.named_children:
                if specifier.type != "import_specifier":
                    continue
                local = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                if local is not None:
                    return parsed.text(local)
    return None


def _leading_comments(node: Node, parsed: ParsedSource) -> Tuple[Comment, ...]:
    comments: List[Comment] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        comments.append(Comment(_comment_value(parsed.text(sibling))))
        sibling = sibling.prev_sibling
    comments.reverse()
    return tuple(comments)


def _comment_value(text: str) -> str:
    if text.startswith("//"):
        return text[2:]
    if text.startswith("/*") and text.endswith("*/"):
        return text[2:-2]
    return text


def _named(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _string_value(node: Node, parsed: ParsedSource) -> str:
    parts: List[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(parsed.text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(parsed.text(child)))
    return "".join(parts)


def _decode_escape(sequence: str) -> str:
    body = sequence[1:]
    if not body:
        return ""
    head = body[0]
    if head in ("u", "x"):
        digits = body[1:].strip("{}")
        try:
            return chr(int(digits, 16))
        except ValueError:
            return body
    if head in ("\n", "\r"):
        return ""
    return _ESCAPES.get(head, body)


def _number_value(text: str) -> LiteralValue:
    cleaned = text.replace("_", "")
    if cleaned.endswith("n"):
        cleaned = cleaned[:-1]
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    try:
        value = float(cleaned)
    except ValueError:
        return None
    return int(value) if value.is_integer() else value


__all__ = [
    "Call",
    "Comment",
    "Declarator",
    "Expression",
    "ExpressionStatement",
    "Function",
    "Identifier",
    "ImportDeclaration",
    "Literal",
    "LogicalOr",
    "Member",
    "Opaque",
    "Statement",
    "VariableDeclaration",
    "iter_statements",
    "lower_expression",
    "lower_statement",
]

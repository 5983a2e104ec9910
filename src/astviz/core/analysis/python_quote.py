from __future__ import annotations

"""
Python Source Quoter.

Parses Python source with the `ast` module and rewrites it into quoted
form: `{name, meta, nil}` triples for names and `{op, meta, [args]}`
triples for calls and operators, the same shape produced when quoting
Elixir code. The result feeds the renderer and the statistics
aggregator like any hand-built tree.
"""

import ast
import logging
import os
from typing import Any, List, Tuple

from astviz.domain.errors import QuoteError
from astviz.domain.nodes import Atom, Node, to_node

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# OPERATOR TABLES
# -----------------------------------------------------------------------------
_BIN_OPS = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
    ast.FloorDiv: "div",
    ast.Mod: "rem",
    ast.Pow: "**",
    ast.LShift: "<<<",
    ast.RShift: ">>>",
    ast.BitOr: "|||",
    ast.BitXor: "^^^",
    ast.BitAnd: "&&&",
    ast.MatMult: "@",
}

_UNARY_OPS = {
    ast.UAdd: "+",
    ast.USub: "-",
    ast.Not: "not",
    ast.Invert: "~~~",
}

_BOOL_OPS = {
    ast.And: "and",
    ast.Or: "or",
}

_COMPARE_OPS = {
    ast.Eq: "==",
    ast.NotEq: "!=",
    ast.Lt: "<",
    ast.LtE: "<=",
    ast.Gt: ">",
    ast.GtE: ">=",
    ast.Is: "===",
    ast.IsNot: "!==",
    ast.In: "in",
}

_DOT = Atom(".")
_ACCESS = Atom("Elixir.Access")
_MAPSET = Atom("Elixir.MapSet")
_KERNEL = Atom("Elixir.Kernel")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def quote_python(source: str, *, with_meta: bool = False) -> Node:
    """
    Convert Python source into a quoted tree.

    A single statement or expression yields its own quoted form; several
    statements are wrapped in a `__block__` call.

    Args:
        source: Python source text.
        with_meta: Attach `[line: n, column: c]` metadata to every call.

    Returns:
        Node: The quoted tree.

    Raises:
        QuoteError: On syntax errors or unsupported constructs.
    """
    try:
        tree = ast.parse(source, mode="exec")
    except SyntaxError as e:
        raise QuoteError(f"Invalid Python source: {e.msg}", e.lineno) from e

    quoted = _Quoter(with_meta).block(tree.body)
    logger.debug(f"Quoted {len(tree.body)} top-level statement(s)")
    return to_node(quoted)


def quote_file(path: str, *, with_meta: bool = False) -> Node:
    """
    Read and quote a Python source file.

    Raises:
        QuoteError: If the file cannot be read or quoted.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise QuoteError(f"Could not read '{os.path.basename(path)}': {e}") from e
    return quote_python(source, with_meta=with_meta)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

class _Quoter(ast.NodeVisitor):
    """
    Visitor returning native quoted values (tuples, lists, Atoms, scalars).

    Unsupported node types fall through to generic_visit, which rejects them.
    """

    def __init__(self, with_meta: bool):
        self.with_meta = with_meta

    # --- Helpers ---

    def meta(self, node: ast.AST) -> List[Tuple[Atom, int]]:
        if not self.with_meta or not hasattr(node, "lineno"):
            return []
        return [(Atom("line"), node.lineno), (Atom("column"), node.col_offset + 1)]

    def call(self, op: str, node: ast.AST, args: List[Any]) -> Tuple[Any, ...]:
        return (Atom(op), self.meta(node), args)

    def remote(self, module: Atom, fun: str, node: ast.AST, args: List[Any]) -> Tuple[Any, ...]:
        meta = self.meta(node)
        return ((_DOT, meta, [module, Atom(fun)]), meta, args)

    def block(self, statements: List[ast.stmt]) -> Any:
        quoted = [self.visit(stmt) for stmt in statements]
        if len(quoted) == 1:
            return quoted[0]
        return (Atom("__block__"), [], quoted)

    def generic_visit(self, node: ast.AST) -> Any:
        raise QuoteError(
            f"Unsupported Python syntax: {type(node).__name__}",
            getattr(node, "lineno", None),
        )

    # --- Statements ---

    def visit_Expr(self, node: ast.Expr) -> Any:
        return self.visit(node.value)

    def visit_Assign(self, node: ast.Assign) -> Any:
        quoted = self.visit(node.value)
        for target in reversed(node.targets):
            quoted = self.call("=", node, [self.visit(target), quoted])
        return quoted

    def visit_AugAssign(self, node: ast.AugAssign) -> Any:
        target = self.visit(node.target)
        op = _BIN_OPS[type(node.op)]
        return self.call("=", node, [target, self.call(op, node, [target, self.visit(node.value)])])

    def visit_AnnAssign(self, node: ast.AnnAssign) -> Any:
        if node.value is None:
            return self.generic_visit(node)
        return self.call("=", node, [self.visit(node.target), self.visit(node.value)])

    def visit_FunctionDef(self, node: ast.FunctionDef) -> Any:
        args = node.args
        if args.vararg or args.kwarg or args.kwonlyargs or args.posonlyargs:
            raise QuoteError(f"Unsupported signature in '{node.name}'", node.lineno)
        if node.decorator_list:
            logger.debug(f"Ignoring decorators of '{node.name}'")

        params: List[Any] = [(Atom(a.arg), self.meta(a), None) for a in args.args]
        offset = len(params) - len(args.defaults)
        for i, default in enumerate(args.defaults):
            params[offset + i] = self.call("\\\\", default, [params[offset + i], self.visit(default)])

        head = (Atom(node.name), self.meta(node), params)
        return self.call("def", node, [head, [(Atom("do"), self.block(node.body))]])

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_Return(self, node: ast.Return) -> Any:
        value = self.visit(node.value) if node.value is not None else None
        return self.call("return", node, [value])

    def visit_If(self, node: ast.If) -> Any:
        clauses: List[Any] = [(Atom("do"), self.block(node.body))]
        if node.orelse:
            clauses.append((Atom("else"), self.block(node.orelse)))
        return self.call("if", node, [self.visit(node.test), clauses])

    def visit_Pass(self, node: ast.Pass) -> Any:
        return (Atom("__block__"), [], [])

    # --- Expressions ---

    def visit_Name(self, node: ast.Name) -> Any:
        return (Atom(node.id), self.meta(node), None)

    def visit_Constant(self, node: ast.Constant) -> Any:
        if node.value is Ellipsis:
            return Atom("...")
        return node.value

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        op = _BIN_OPS[type(node.op)]
        return self.call(op, node, [self.visit(node.left), self.visit(node.right)])

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        return self.call(_UNARY_OPS[type(node.op)], node, [self.visit(node.operand)])

    def visit_BoolOp(self, node: ast.BoolOp) -> Any:
        op = _BOOL_OPS[type(node.op)]
        values = [self.visit(v) for v in node.values]
        quoted = values[-1]
        for value in reversed(values[:-1]):
            quoted = self.call(op, node, [value, quoted])
        return quoted

    def visit_Compare(self, node: ast.Compare) -> Any:
        operands = [self.visit(node.left)] + [self.visit(c) for c in node.comparators]
        checks = [
            self._compare(op, node, operands[i], operands[i + 1])
            for i, op in enumerate(node.ops)
        ]
        quoted = checks[-1]
        for check in reversed(checks[:-1]):
            quoted = self.call("and", node, [check, quoted])
        return quoted

    def _compare(self, op: ast.cmpop, node: ast.AST, left: Any, right: Any) -> Any:
        if isinstance(op, ast.NotIn):
            return self.call("not", node, [self.call("in", node, [left, right])])
        return self.call(_COMPARE_OPS[type(op)], node, [left, right])

    def visit_Call(self, node: ast.Call) -> Any:
        args = [self.visit(a) for a in node.args]
        if node.keywords:
            pairs = []
            for kw in node.keywords:
                if kw.arg is None:
                    raise QuoteError("Unsupported '**' argument unpacking", node.lineno)
                pairs.append((Atom(kw.arg), self.visit(kw.value)))
            args.append(pairs)

        func = node.func
        meta = self.meta(node)
        if isinstance(func, ast.Name):
            return (Atom(func.id), meta, args)
        if isinstance(func, ast.Attribute):
            return ((_DOT, meta, [self.visit(func.value), Atom(func.attr)]), meta, args)
        return ((_DOT, meta, [self.visit(func)]), meta, args)

    def visit_Attribute(self, node: ast.Attribute) -> Any:
        meta = self.meta(node)
        return ((_DOT, meta, [self.visit(node.value), Atom(node.attr)]), meta, [])

    def visit_Subscript(self, node: ast.Subscript) -> Any:
        return self.remote(_ACCESS, "get", node, [self.visit(node.value), self.visit(node.slice)])

    def visit_Slice(self, node: ast.Slice) -> Any:
        bounds = [
            self.visit(node.lower) if node.lower is not None else None,
            self.visit(node.upper) if node.upper is not None else None,
        ]
        if node.step is not None:
            return self.call("..//", node, bounds + [self.visit(node.step)])
        return self.call("..", node, bounds)

    def visit_List(self, node: ast.List) -> Any:
        return [self.visit(e) for e in node.elts]

    def visit_Tuple(self, node: ast.Tuple) -> Any:
        elements = [self.visit(e) for e in node.elts]
        if len(elements) == 2:
            return tuple(elements)
        return self.call("{}", node, elements)

    def visit_Set(self, node: ast.Set) -> Any:
        return self.remote(_MAPSET, "new", node, [[self.visit(e) for e in node.elts]])

    def visit_Dict(self, node: ast.Dict) -> Any:
        pairs = []
        for key, value in zip(node.keys, node.values):
            if key is None:
                raise QuoteError("Unsupported '**' dict unpacking", node.lineno)
            pairs.append((self.visit(key), self.visit(value)))
        return self.call("%{}", node, pairs)

    def visit_IfExp(self, node: ast.IfExp) -> Any:
        clauses = [(Atom("do"), self.visit(node.body)), (Atom("else"), self.visit(node.orelse))]
        return self.call("if", node, [self.visit(node.test), clauses])

    def visit_Lambda(self, node: ast.Lambda) -> Any:
        params = [(Atom(a.arg), self.meta(a), None) for a in node.args.args]
        clause = self.call("->", node, [params, self.visit(node.body)])
        return self.call("fn", node, [clause])

    def visit_NamedExpr(self, node: ast.NamedExpr) -> Any:
        return self.call("=", node, [self.visit(node.target), self.visit(node.value)])

    def visit_JoinedStr(self, node: ast.JoinedStr) -> Any:
        parts = [self.visit(v) for v in node.values]
        return self.call("<<>>", node, parts)

    def visit_FormattedValue(self, node: ast.FormattedValue) -> Any:
        return self.remote(_KERNEL, "to_string", node, [self.visit(node.value)])

import io
from typing import Any, Optional

from ast_nodes import *
from decorations import TreeDecoration


class ASTPrinter:
    """
    带注释的AST打印机
    支持：
    - 类型推导信息显示（来自 TreeDecoration）
    - 左值标记
    - 源码位置
    - 彩色输出（可选）
    """

    def __init__(self, decorations: Optional[TreeDecoration] = None, show_locations=False,
                 use_colors=False, indent_size=2):
        self.decorations = decorations
        self.show_locations = show_locations
        self.use_colors = use_colors
        self.indent_size = indent_size
        self.output = io.StringIO()

        if use_colors:
            self.colors = {
                'type': '\033[36m',
                'node': '\033[33m',
                'value': '\033[32m',
                'comment': '\033[90m',
                'reset': '\033[0m'
            }
        else:
            self.colors = {k: '' for k in ['type', 'node', 'value', 'comment', 'reset']}

    def print(self, node: Any) -> str:
        """打印AST并返回字符串"""
        self.output = io.StringIO()
        self._visit(node, 0)
        return self.output.getvalue()

    def _write(self, text: str):
        self.output.write(text)

    def _line(self, depth: int, text: str):
        self._write(" " * (depth * self.indent_size) + text + "\n")

    def _color(self, text: str, color: str) -> str:
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _annotation(self, node: Any) -> str:
        parts = []
        deco = self.decorations.get(node) if self.decorations else None
        if deco is not None:
            if deco.scope is not None:
                parts.append(self._color(f"scope={deco.scope}", 'comment'))
            if deco.type is not None:
                parts.append(self._color(f": {deco.type}", 'type'))
            if deco.is_lvalue:
                parts.append(self._color("lvalue", 'comment'))
        if self.show_locations:
            parts.append(self._color(f"@{node.line}:{node.col}", 'comment'))
        return (" " + " ".join(parts)) if parts else ""

    def _visit(self, node: Any, depth: int):
        method_name = f'_visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self._visit_generic)
        visitor(node, depth)

    def _visit_generic(self, node: Any, depth: int):
        """通用节点：节点名 + 注释，然后递归子节点"""
        self._line(depth, self._color(node.__class__.__name__, 'node') + self._annotation(node))
        for field_name, value in node.__dict__.items():
            if field_name in ('line', 'col'):
                continue
            if isinstance(value, list):
                for item in value:
                    if hasattr(item, '__dict__'):
                        self._visit(item, depth + 1)
            elif hasattr(value, '__dict__'):
                self._visit(value, depth + 1)

    def _visit_Function(self, node: Function, depth: int):
        params = ", ".join(f"{p.name}: {p.type_}" for p in node.params)
        ret = f" : {node.ret_type}" if node.ret_type else ""
        self._line(depth, self._color("func ", 'node') + self._color(node.name, 'value')
                   + f"({params}){ret}" + self._annotation(node))
        for decl in node.decls:
            self._line(depth + 1, repr(decl))
        for stmt in node.body:
            self._visit(stmt, depth + 1)

    def _visit_BinOp(self, node: BinOp, depth: int):
        self._line(depth, self._color(f"BinOp {node.op}", 'node') + self._annotation(node))
        self._visit(node.left, depth + 1)
        self._visit(node.right, depth + 1)

    def _visit_UnaryOp(self, node: UnaryOp, depth: int):
        self._line(depth, self._color(f"UnaryOp {node.op}", 'node') + self._annotation(node))
        self._visit(node.operand, depth + 1)

    def _visit_Ident(self, node: Ident, depth: int):
        self._line(depth, self._color(node.name, 'value') + self._annotation(node))

    def _visit_literal(self, node: Any, depth: int):
        self._line(depth, self._color(str(node.value), 'value') + self._annotation(node))

    _visit_IntLiteral = _visit_literal
    _visit_FloatLiteral = _visit_literal
    _visit_CharLiteral = _visit_literal
    _visit_BoolLiteral = _visit_literal

    def _visit_WriteString(self, node: WriteString, depth: int):
        self._line(depth, self._color("WriteString", 'node') + " " + self._color(repr(node.text), 'value'))


def print_ast(node: Any, decorations: Optional[TreeDecoration] = None, use_colors: bool = False) -> str:
    """
    便捷的AST打印函数

    用法:
        from visitors import print_ast
        print(print_ast(result.program, result.decorations))
    """
    printer = ASTPrinter(decorations, use_colors=use_colors)
    return printer.print(node)

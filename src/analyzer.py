import os
import sys
from typing import Any, Dict, Optional

from ast_nodes import *
from asl_types import *
from decorations import TreeDecoration
from scope import SymbolTable
from sem_errors import SemErrors


class ExpressionAnalyzer:
    """
    表达式分析 - 被 TypeChecker 组合使用

    后序遍历：先分析子表达式，再根据子节点的类型套用规则，
    结果（类型、是否左值）写入 decorations。
    出错时报告一次并返回 ERROR；操作数已经是 ERROR 时静默传播。
    """

    def __init__(self, symbols: SymbolTable, decorations: TreeDecoration, errors: SemErrors,
                 trace=None):
        self.symbols = symbols
        self.decorations = decorations
        self.errors = errors
        self.trace = trace

    def analyze(self, expr) -> TypeDesc:
        """表达式分析主入口"""
        if self.trace:
            self.trace(expr)
        method_name = f'_analyze_{expr.__class__.__name__}'
        method = getattr(self, method_name, self._analyze_generic)
        t, is_lvalue = method(expr)
        self.decorations.put_type(expr, t)
        self.decorations.put_is_lvalue(expr, is_lvalue)
        return t

    def _analyze_generic(self, expr):
        return ERROR, False

    # ---------- 字面量 ----------

    def _analyze_IntLiteral(self, expr: IntLiteral):
        return INT, False

    def _analyze_FloatLiteral(self, expr: FloatLiteral):
        return FLOAT, False

    def _analyze_CharLiteral(self, expr: CharLiteral):
        return CHAR, False

    def _analyze_BoolLiteral(self, expr: BoolLiteral):
        return BOOL, False

    # ---------- 标识符与数组访问 ----------

    def _analyze_Ident(self, expr: Ident):
        if not self.symbols.find_in_stack(expr.name):
            self.errors.undeclared_ident(expr)
            # 视为左值，避免后续再报 "不可引用"
            return ERROR, True
        t = self.symbols.get_type(expr.name)
        return t, not self.symbols.is_function_class(expr.name)

    def _analyze_IndexExpr(self, expr: IndexExpr):
        base_type = self.analyze(expr.base)
        index_type = self.analyze(expr.index)

        if base_type.is_error():
            t = ERROR
        elif not base_type.is_array():
            self.errors.non_array_in_array_access(expr.base)
            t = ERROR
        else:
            t = get_array_elem_type(base_type)

        if index_type.is_error():
            t = ERROR
        elif not index_type.is_numeric():
            self.errors.non_integer_index_in_array_access(expr.index)
            t = ERROR

        return t, self.decorations.get_is_lvalue(expr.base)

    def _analyze_Paren(self, expr: Paren):
        return self.analyze(expr.expr), False

    # ---------- 运算符 ----------

    def _analyze_UnaryOp(self, expr: UnaryOp):
        operand_type = self.analyze(expr.operand)
        if operand_type.is_error():
            return ERROR, False

        if expr.op == 'not':
            if not operand_type.is_boolean():
                self.errors.boolean_required(expr, 'not')
                return ERROR, False
            return BOOL, False

        if not operand_type.is_numeric():
            self.errors.incompatible_operator(expr, expr.op)
            return ERROR, False
        return operand_type, False

    def _analyze_BinOp(self, expr: BinOp):
        left_type = self.analyze(expr.left)
        right_type = self.analyze(expr.right)
        if left_type.is_error() or right_type.is_error():
            return ERROR, False

        if expr.op in ARITHMETIC_OPS:
            if not (left_type.is_numeric() and right_type.is_numeric()):
                self.errors.incompatible_operator(expr, expr.op)
                return ERROR, False
            if expr.op == '%' and not (left_type.is_integer() and right_type.is_integer()):
                self.errors.incompatible_operator(expr, expr.op)
                return ERROR, False
            if left_type.is_integer() and right_type.is_integer():
                return INT, False
            return FLOAT, False

        if expr.op in LOGICAL_OPS:
            if not (left_type.is_boolean() and right_type.is_boolean()):
                self.errors.incompatible_operator(expr, expr.op)
                return ERROR, False
            return BOOL, False

        if not comparable_types(left_type, right_type, expr.op):
            self.errors.incompatible_operator(expr, expr.op)
            return ERROR, False
        return BOOL, False

    # ---------- 调用 ----------

    def _analyze_CallExpr(self, expr: CallExpr):
        t = self.check_call(expr)
        if not t.is_error():
            func_type = self.decorations.get_type(expr.callee)
            if func_type.is_void_function():
                self.errors.is_not_function(expr.callee)
                t = ERROR
        return t, False

    def check_call(self, call: CallExpr) -> TypeDesc:
        """
        调用的公共规则（语句和表达式位置都用）：
        被调用者必须是函数，参数个数必须一致，每个实参必须与形参类型相同
        （允许 int -> float）。个数不一致时仍返回声明的返回类型。
        """
        func_type = self.analyze(call.callee)
        arg_types = [self.analyze(arg) for arg in call.args]

        if func_type.is_error():
            return ERROR
        if not func_type.is_function():
            self.errors.is_not_callable(call.callee)
            return ERROR

        if len(arg_types) != get_num_of_parameters(func_type):
            self.errors.number_of_parameters(call.callee)
        else:
            for i, (arg, arg_type) in enumerate(zip(call.args, arg_types)):
                param_type = get_parameter_type(func_type, i)
                if arg_type.is_error() or param_type.is_error():
                    continue
                if not equal_types(arg_type, param_type) and not widenable(param_type, arg_type):
                    self.errors.incompatible_parameter(arg, i + 1, call.callee.name)
        return get_func_return_type(func_type)


class TypeChecker:
    """
    类型检查器主类

    一次深度优先遍历：进入程序/函数时激活声明阶段分配的作用域，
    语句的子节点先检查，再套用语句规则。错误全部交给 SemErrors，
    遍历结束时统一输出一次。
    """

    def __init__(self, symbols: SymbolTable, decorations: TreeDecoration, errors: SemErrors,
                 config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.symbols = symbols
        self.decorations = decorations
        self.errors = errors

        self.main_name = self.config.get('main_name', 'main')
        self.print_errors = self.config.get('print_errors', True)
        self.debug = self.config.get('debug', bool(os.environ.get('ASLC_DEBUG')))

        self.expr_analyzer = ExpressionAnalyzer(
            symbols, decorations, errors, trace=self._trace if self.debug else None)

    def _trace(self, node):
        print(f"[typecheck] enter {node.__class__.__name__} "
              f"line {getattr(node, 'line', 0)}:{getattr(node, 'col', 0)}", file=sys.stderr)

    def analyze(self, expr) -> TypeDesc:
        return self.expr_analyzer.analyze(expr)

    def check(self, program: Program) -> TreeDecoration:
        """主入口：检查整个程序，返回填好的 decorations"""
        if self.debug:
            self._trace(program)
        with self.symbols.active(self.decorations.get_scope(program)):
            for func in program.functions:
                self.check_function(func)
            if self.symbols.no_main_properly_declared():
                self.errors.no_main_properly_declared(program, self.main_name)
        if self.print_errors:
            self.errors.print()
        return self.decorations

    def check_function(self, func: Function):
        """检查一个函数体；调用前全局作用域必须已经激活"""
        if self.debug:
            self._trace(func)
        with self.symbols.active(self.decorations.get_scope(func)):
            param_types = [self.decorations.get_type(p.type_) for p in func.params]
            ret = self.decorations.get_type(func.ret_type) if func.ret_type else VOID
            self.symbols.set_current_function_ty(create_function_ty(param_types, ret))
            self._check_block(func.body)

    def _check_block(self, stmts):
        for stmt in stmts:
            self._check_stmt(stmt)

    def _check_stmt(self, stmt):
        """语句分析分发"""
        if self.debug:
            self._trace(stmt)
        method_name = f'_check_{stmt.__class__.__name__}'
        method = getattr(self, method_name, self._check_generic)
        method(stmt)

    def _check_generic(self, stmt):
        """未知语句类：不检查，也不报错"""

    def _check_AssignStmt(self, node: AssignStmt):
        target_type = self.analyze(node.target)
        expr_type = self.analyze(node.expr)

        if target_type.is_error():
            return
        if not self.decorations.get_is_lvalue(node.target):
            self.errors.non_referenceable_left_expr(node.target)
        if not expr_type.is_error() and not copyable_types(target_type, expr_type):
            self.errors.incompatible_assignment(node)

    def _check_IfStmt(self, node: IfStmt):
        cond_type = self.analyze(node.cond)
        self._check_block(node.then_block)
        self._check_block(node.else_block)
        if not cond_type.is_error() and not cond_type.is_boolean():
            self.errors.boolean_required(node, 'if')

    def _check_WhileStmt(self, node: WhileStmt):
        cond_type = self.analyze(node.cond)
        self._check_block(node.block)
        if not cond_type.is_error() and not cond_type.is_boolean():
            self.errors.boolean_required(node, 'while')

    def _check_ProcCallStmt(self, node: ProcCallStmt):
        t = self.expr_analyzer.check_call(node.call)
        self.decorations.put_type(node.call, t)
        self.decorations.put_is_lvalue(node.call, False)
        self.decorations.put_type(node, t)

    def _check_ReadStmt(self, node: ReadStmt):
        t = self.analyze(node.target)
        if t.is_error():
            return
        if not t.is_primitive() and not t.is_function():
            self.errors.read_write_require_basic(node, 'read')
        if not self.decorations.get_is_lvalue(node.target):
            self.errors.non_referenceable_expression(node)

    def _check_WriteExpr(self, node: WriteExpr):
        t = self.analyze(node.expr)
        if not t.is_error() and not t.is_primitive():
            self.errors.read_write_require_basic(node, 'write')

    def _check_WriteString(self, node: WriteString):
        pass

    def _check_ReturnStmt(self, node: ReturnStmt):
        expr_type = self.analyze(node.expr) if node.expr is not None else None
        func_type = self.symbols.get_current_function_ty()

        if func_type.is_void_function():
            if expr_type is not None and not expr_type.is_error():
                self.errors.incompatible_return(node)
            return

        ret = get_func_return_type(func_type)
        if expr_type is None:
            self.errors.incompatible_return(node)
        elif expr_type.is_error():
            return
        elif not equal_types(expr_type, ret) and not widenable(ret, expr_type):
            self.errors.incompatible_return(node)

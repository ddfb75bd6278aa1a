from ast_nodes import Program, Function, TypeNode
from asl_types import (
    TypeDesc, INT, FLOAT, BOOL, CHAR, VOID, ERROR,
    create_array_ty, create_function_ty,
)
from decorations import TreeDecoration
from scope import SymbolTable, GLOBAL_SCOPE_NAME
from sem_errors import SemErrors

BASIC_TYPES = {'int': INT, 'float': FLOAT, 'bool': BOOL, 'char': CHAR}


class SymbolsCollector:
    """
    声明收集（类型检查之前的一遍）：
    - 为程序和每个函数创建作用域，并把作用域 id 记录到节点上
    - 为每个 TypeNode 记录类型
    - 参数、局部变量进入函数作用域，函数本身进入全局作用域
    """

    def __init__(self, symbols: SymbolTable, decorations: TreeDecoration, errors: SemErrors):
        self.symbols = symbols
        self.decorations = decorations
        self.errors = errors

    def collect(self, program: Program):
        sc = self.symbols.push_new_scope(GLOBAL_SCOPE_NAME)
        self.decorations.put_scope(program, sc)
        try:
            for func in program.functions:
                self._collect_function(func)
        finally:
            self.symbols.pop_scope()

    def _collect_function(self, func: Function):
        sc = self.symbols.push_new_scope(func.name)
        self.decorations.put_scope(func, sc)
        try:
            param_types = []
            for param in func.params:
                t = self._type_from_typenode(param.type_)
                param_types.append(t)
                if self.symbols.find_in_current_scope(param.name):
                    self.errors.declared_ident_twice(param, param.name)
                else:
                    self.symbols.add_parameter(param.name, t)

            for decl in func.decls:
                t = self._type_from_typenode(decl.type_)
                for ident in decl.names:
                    if self.symbols.find_in_current_scope(ident.name):
                        self.errors.declared_ident_twice(ident, ident.name)
                    else:
                        self.symbols.add_local_var(ident.name, t)

            ret = self._type_from_typenode(func.ret_type) if func.ret_type else VOID
        finally:
            self.symbols.pop_scope()

        func_ty = create_function_ty(param_types, ret)
        self.decorations.put_type(func, func_ty)
        if self.symbols.find_in_current_scope(func.name):
            self.errors.declared_ident_twice(func, func.name)
        else:
            self.symbols.add_function(func.name, func_ty)

    def _type_from_typenode(self, tn: TypeNode) -> TypeDesc:
        """TypeNode -> TypeDesc；数组类型每个声明创建一次"""
        t = BASIC_TYPES[tn.base]
        if tn.size is not None:
            try:
                t = create_array_ty(t, tn.size)
            except ValueError:
                self.errors.invalid_array_size(tn)
                t = ERROR
        self.decorations.put_type(tn, t)
        return t

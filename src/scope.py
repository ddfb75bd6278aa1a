from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from asl_types import TypeDesc

GLOBAL_SCOPE_NAME = '$global$'


@dataclass
class Symbol:
    """符号：kind 为 'variable', 'parameter' 或 'function'"""
    name: str
    type: TypeDesc
    kind: str


@dataclass
class Scope:
    """一个词法作用域（程序或函数体）"""
    scope_id: int
    name: str
    parent_id: Optional[int] = None
    symbols: Dict[str, Symbol] = field(default_factory=dict)

    def declare(self, name: str, t: TypeDesc, kind: str) -> Symbol:
        sym = Symbol(name, t, kind)
        self.symbols[name] = sym
        return sym

    def __contains__(self, name: str) -> bool:
        return name in self.symbols


class SymbolTable:
    """
    作用域管理器

    所有作用域由声明阶段创建并按 id 保存；类型检查阶段只维护一个
    当前激活作用域的栈，进入函数时 push，离开时 pop。
    查找失败不抛异常，由调用方决定是否报错。
    """

    def __init__(self, main_name: str = 'main'):
        self.main_name = main_name
        self.scopes: List[Scope] = []
        self.stack: List[int] = []
        self.current_function_ty: Optional[TypeDesc] = None

    # ---------- 作用域栈 ----------

    def push_new_scope(self, name: str) -> int:
        """创建当前作用域的子作用域并激活它"""
        parent = self.stack[-1] if self.stack else None
        scope = Scope(len(self.scopes), name, parent)
        self.scopes.append(scope)
        self.stack.append(scope.scope_id)
        return scope.scope_id

    def push_this_scope(self, scope_id: int):
        if not 0 <= scope_id < len(self.scopes):
            raise KeyError(f"unknown scope id {scope_id}")
        self.stack.append(scope_id)

    def pop_scope(self) -> int:
        return self.stack.pop()

    @contextmanager
    def active(self, scope_id: int):
        """push/pop 配对，任何退出路径都会 pop"""
        self.push_this_scope(scope_id)
        try:
            yield self.scopes[scope_id]
        finally:
            self.pop_scope()

    @property
    def depth(self) -> int:
        return len(self.stack)

    def get_scope(self, scope_id: int) -> Scope:
        return self.scopes[scope_id]

    def get_global_scope_id(self) -> Optional[int]:
        return 0 if self.scopes else None

    def current_scope(self) -> Scope:
        return self.scopes[self.stack[-1]]

    # ---------- 声明 ----------

    def add_local_var(self, name: str, t: TypeDesc) -> Symbol:
        return self.current_scope().declare(name, t, 'variable')

    def add_parameter(self, name: str, t: TypeDesc) -> Symbol:
        return self.current_scope().declare(name, t, 'parameter')

    def add_function(self, name: str, t: TypeDesc) -> Symbol:
        return self.current_scope().declare(name, t, 'function')

    # ---------- 查找 ----------

    def find_in_current_scope(self, name: str) -> bool:
        return bool(self.stack) and name in self.current_scope()

    def find_in_stack(self, name: str) -> bool:
        return self._lookup(name) is not None

    def _lookup(self, name: str) -> Optional[Symbol]:
        for scope_id in reversed(self.stack):
            scope = self.scopes[scope_id]
            if name in scope:
                return scope.symbols[name]
        return None

    def get_symbol(self, name: str) -> Symbol:
        sym = self._lookup(name)
        if sym is None:
            raise KeyError(name)
        return sym

    def get_type(self, name: str) -> TypeDesc:
        return self.get_symbol(name).type

    def is_function_class(self, name: str) -> bool:
        return self.get_symbol(name).kind == 'function'

    def is_parameter_class(self, name: str) -> bool:
        return self.get_symbol(name).kind == 'parameter'

    def is_local_var_class(self, name: str) -> bool:
        return self.get_symbol(name).kind == 'variable'

    # ---------- 当前函数 ----------

    def set_current_function_ty(self, t: TypeDesc):
        self.current_function_ty = t

    def get_current_function_ty(self) -> Optional[TypeDesc]:
        return self.current_function_ty

    def no_main_properly_declared(self) -> bool:
        """全局作用域中没有无参、无返回值的入口函数"""
        if not self.scopes:
            return True
        sym = self.scopes[0].symbols.get(self.main_name)
        if sym is None or sym.kind != 'function':
            return True
        return not (sym.type.is_void_function() and not sym.type.params)

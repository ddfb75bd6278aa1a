from dataclasses import dataclass, field
from typing import List, Optional, Any

# line 从 1 开始，col 从 0 开始；指向诊断信息定位用的词法单元


@dataclass(eq=False)
class Program:
    functions: List[Any]
    line: int = 1
    col: int = 0
    def __repr__(self): return f"Program({self.functions})"

@dataclass(eq=False)
class TypeNode:
    base: str                   # 'int', 'float', 'bool', 'char'
    size: Optional[int] = None  # 非 None 表示 array[size] of base
    line: int = 0
    col: int = 0
    def __repr__(self):
        if self.size is None:
            return f"Type({self.base})"
        return f"Type(array[{self.size}] of {self.base})"

@dataclass(eq=False)
class ParameterDecl:
    name: str
    type_: TypeNode
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Param({self.name}: {self.type_})"

@dataclass(eq=False)
class VariableDecl:
    names: List[Any]  # Ident 列表，保留每个名字的位置
    type_: TypeNode
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Var({', '.join(n.name for n in self.names)}: {self.type_})"

@dataclass(eq=False)
class Function:
    name: str
    params: List[ParameterDecl]
    ret_type: Optional[TypeNode]
    decls: List[VariableDecl]
    body: List[Any]
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Func({self.name}, params={self.params}, ret={self.ret_type}, body={self.body})"

# Statements
@dataclass(eq=False)
class AssignStmt:
    target: Any  # Ident 或 IndexExpr
    expr: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Assign({self.target} := {self.expr})"

@dataclass(eq=False)
class IfStmt:
    cond: Any
    then_block: List[Any]
    else_block: List[Any] = field(default_factory=list)
    line: int = 0
    col: int = 0
    def __repr__(self): return f"If({self.cond}, then={self.then_block}, else={self.else_block})"

@dataclass(eq=False)
class WhileStmt:
    cond: Any
    block: List[Any]
    line: int = 0
    col: int = 0
    def __repr__(self): return f"While({self.cond}, {self.block})"

@dataclass(eq=False)
class ProcCallStmt:
    call: Any  # CallExpr
    line: int = 0
    col: int = 0
    def __repr__(self): return f"ProcCall({self.call})"

@dataclass(eq=False)
class ReadStmt:
    target: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Read({self.target})"

@dataclass(eq=False)
class WriteExpr:
    expr: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Write({self.expr})"

@dataclass(eq=False)
class WriteString:
    text: str
    line: int = 0
    col: int = 0
    def __repr__(self): return f"WriteString({self.text!r})"

@dataclass(eq=False)
class ReturnStmt:
    expr: Optional[Any]
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Return({self.expr})"

# Expressions
@dataclass(eq=False)
class IntLiteral:
    value: int
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Int({self.value})"

@dataclass(eq=False)
class FloatLiteral:
    value: float
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Float({self.value})"

@dataclass(eq=False)
class CharLiteral:
    value: str  # 保留源码形式，如 'a' 或 '\n'
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Char({self.value})"

@dataclass(eq=False)
class BoolLiteral:
    value: bool
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Bool({self.value})"

@dataclass(eq=False)
class Ident:
    name: str
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Ident({self.name})"

@dataclass(eq=False)
class IndexExpr:
    base: Ident
    index: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Index({self.base}[{self.index}])"

@dataclass(eq=False)
class CallExpr:
    callee: Ident
    args: List[Any]
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Call({self.callee}({', '.join(map(str, self.args))}))"

@dataclass(eq=False)
class Paren:
    expr: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"Paren({self.expr})"

@dataclass(eq=False)
class BinOp:
    op: str  # '+', '-', '*', '/', '%', '==', '!=', '<', '<=', '>', '>=', 'and', 'or'
    left: Any
    right: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"BinOp({self.left} {self.op} {self.right})"

@dataclass(eq=False)
class UnaryOp:
    op: str  # 'not', '+', '-'
    operand: Any
    line: int = 0
    col: int = 0
    def __repr__(self): return f"UnaryOp({self.op} {self.operand})"


ARITHMETIC_OPS = ('+', '-', '*', '/', '%')
LOGICAL_OPS = ('and', 'or')
RELATIONAL_OPS = ('==', '!=', '<', '<=', '>', '>=')

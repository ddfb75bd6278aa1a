import sys
import warnings
from dataclasses import dataclass, field
from typing import Any, Iterator, List


@dataclass(frozen=True)
class SemanticError:
    line: int
    col: int
    kind: str
    message: str
    node: Any = field(default=None, compare=False, repr=False)

    def __str__(self):
        return f"Line {self.line}:{self.col} error: {self.message}"


def _pos(node):
    return getattr(node, 'line', 0), getattr(node, 'col', 0)


class SemErrors:
    """
    语义错误收集器

    每个报告方法追加一条错误并立即返回，从不抛异常。
    print() 在遍历结束后调用一次，之后收集器关闭。
    """

    def __init__(self):
        self.errors: List[SemanticError] = []
        self.closed = False

    def _add(self, node, kind: str, message: str):
        if self.closed:
            warnings.warn(
                f"semantic error reported after print(): {message}",
                RuntimeWarning,
                stacklevel=3,
            )
            return
        line, col = _pos(node)
        self.errors.append(SemanticError(line, col, kind, message, node))

    # ---------- 错误目录 ----------

    def undeclared_ident(self, node):
        self._add(node, 'undeclaredIdent', f"Identifier '{node.name}' is undeclared.")

    def declared_ident_twice(self, node, name: str):
        self._add(node, 'declaredIdentTwice', f"Identifier '{name}' already declared.")

    def invalid_array_size(self, node):
        self._add(node, 'invalidArraySize', "Array size must be a positive integer.")

    def non_array_in_array_access(self, node):
        self._add(node, 'nonArrayInArrayAccess', "Array access to a non array operand.")

    def non_integer_index_in_array_access(self, node):
        self._add(node, 'nonIntegerIndexInArrayAccess', "Array access with non integer index.")

    def non_referenceable_left_expr(self, node):
        self._add(node, 'nonReferenceableLeftExpr',
                  "Left expression of assignment is not referenceable.")

    def non_referenceable_expression(self, node):
        self._add(node, 'nonReferenceableExpression', "Referenceable expression required in 'read'.")

    def incompatible_assignment(self, node):
        self._add(node, 'incompatibleAssignment', "Assignment with incompatible types.")

    def boolean_required(self, node, instruction: str):
        self._add(node, 'booleanRequired',
                  f"Instruction '{instruction}' requires a boolean condition.")

    def incompatible_operator(self, node, op: str):
        self._add(node, 'incompatibleOperator', f"Operator '{op}' with incompatible types.")

    def incompatible_return(self, node):
        self._add(node, 'incompatibleReturn', "Return with incompatible type.")

    def read_write_require_basic(self, node, instruction: str):
        self._add(node, 'readWriteRequireBasic', f"Basic type required in '{instruction}'.")

    def is_not_callable(self, node):
        self._add(node, 'isNotCallable', f"Identifier '{node.name}' is not a callable.")

    def is_not_function(self, node):
        self._add(node, 'isNotFunction', f"Identifier '{node.name}' is not a function.")

    def number_of_parameters(self, node):
        self._add(node, 'numberOfParameters',
                  f"The number of parameters in the call to '{node.name}' does not match.")

    def incompatible_parameter(self, node, index: int, func_name: str):
        self._add(node, 'incompatibleParameter',
                  f"Parameter #{index} with incompatible types in call to '{func_name}'.")

    def no_main_properly_declared(self, node, main_name: str = 'main'):
        self._add(node, 'noMainProperlyDeclared',
                  f"There is no '{main_name}' function properly declared.")

    # ---------- 输出 ----------

    def print(self, file=None):
        """按发现顺序输出所有错误，然后关闭收集器"""
        out = file if file is not None else sys.stdout
        for err in self.errors:
            print(err, file=out)
        self.closed = True

    def count(self) -> int:
        return len(self.errors)

    def kinds(self) -> List[str]:
        return [e.kind for e in self.errors]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def __len__(self):
        return len(self.errors)

    def __iter__(self) -> Iterator[SemanticError]:
        return iter(self.errors)

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(eq=False)
class TypeDesc:
    """
    类型描述符：
    - kind: 'int', 'float', 'bool', 'char', 'void', 'array', 'function', 'error'
    - elem/size: 对于 'array' 是元素类型和长度
    - params/ret: 对于 'function' 是参数类型列表和返回类型

    eq=False：Python 层面按对象身份比较，语言层面的相等请用 equal_types。
    每个数组声明都是一个独立对象，ERROR 与任何类型（包括自身）都不相等。
    """
    kind: str
    elem: Optional['TypeDesc'] = None
    size: Optional[int] = None
    params: List['TypeDesc'] = field(default_factory=list)
    ret: Optional['TypeDesc'] = None

    def __repr__(self):
        if self.kind == 'array':
            return f"array<{self.size},{self.elem}>"
        if self.kind == 'function':
            params = ",".join(str(p) for p in self.params)
            return f"function<{params}:{self.ret}>"
        return self.kind

    __str__ = __repr__

    def is_integer(self) -> bool:
        return self.kind == 'int'

    def is_float(self) -> bool:
        return self.kind == 'float'

    def is_boolean(self) -> bool:
        return self.kind == 'bool'

    def is_character(self) -> bool:
        return self.kind == 'char'

    def is_void(self) -> bool:
        return self.kind == 'void'

    def is_error(self) -> bool:
        return self.kind == 'error'

    def is_array(self) -> bool:
        return self.kind == 'array'

    def is_function(self) -> bool:
        return self.kind == 'function'

    def is_void_function(self) -> bool:
        return self.kind == 'function' and self.ret is not None and self.ret.is_void()

    def is_primitive(self) -> bool:
        return self.kind in ('int', 'float', 'bool', 'char')

    def is_numeric(self) -> bool:
        return self.kind in ('int', 'float')


# 基础类型常量
INT = TypeDesc('int')
FLOAT = TypeDesc('float')
BOOL = TypeDesc('bool')
CHAR = TypeDesc('char')
VOID = TypeDesc('void')
ERROR = TypeDesc('error')

COMPARISON_OPS = ('==', '!=', '<', '<=', '>', '>=')
EQUALITY_OPS = ('==', '!=')


def create_integer_ty() -> TypeDesc:
    return INT


def create_float_ty() -> TypeDesc:
    return FLOAT


def create_boolean_ty() -> TypeDesc:
    return BOOL


def create_character_ty() -> TypeDesc:
    return CHAR


def create_void_ty() -> TypeDesc:
    return VOID


def create_error_ty() -> TypeDesc:
    return ERROR


def create_array_ty(elem: TypeDesc, size: int) -> TypeDesc:
    """创建数组类型，每次调用都返回新对象（不做驻留）"""
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"数组长度必须是正整数，得到 {size!r}")
    return TypeDesc('array', elem=elem, size=size)


def create_function_ty(params: List[TypeDesc], ret: TypeDesc) -> TypeDesc:
    return TypeDesc('function', params=list(params), ret=ret)


def get_array_elem_type(t: TypeDesc) -> TypeDesc:
    assert t.is_array(), f"不是数组类型: {t}"
    return t.elem


def get_func_return_type(t: TypeDesc) -> TypeDesc:
    assert t.is_function(), f"不是函数类型: {t}"
    return t.ret


def get_num_of_parameters(t: TypeDesc) -> int:
    assert t.is_function(), f"不是函数类型: {t}"
    return len(t.params)


def get_parameter_type(t: TypeDesc, i: int) -> TypeDesc:
    assert t.is_function(), f"不是函数类型: {t}"
    assert 0 <= i < len(t.params), f"参数下标越界: {i}"
    return t.params[i]


def equal_types(a: TypeDesc, b: TypeDesc) -> bool:
    """结构相等；ERROR 不等于任何类型，调用方需先单独处理"""
    if a is None or b is None:
        return False
    if a.is_error() or b.is_error():
        return False
    if a.kind != b.kind:
        return False
    if a.is_array():
        return a.size == b.size and equal_types(a.elem, b.elem)
    if a.is_function():
        if len(a.params) != len(b.params):
            return False
        if not all(equal_types(p, q) for p, q in zip(a.params, b.params)):
            return False
        return equal_types(a.ret, b.ret)
    return True


def widenable(dst: TypeDesc, src: TypeDesc) -> bool:
    """唯一的隐式转换：int -> float"""
    return dst.is_float() and src.is_integer()


def copyable_types(dst: TypeDesc, src: TypeDesc) -> bool:
    """检查 src 能否赋值给 dst；数组和函数都不能按值复制"""
    if not dst.is_primitive() or not src.is_primitive():
        return False
    return equal_types(dst, src) or widenable(dst, src)


def comparable_types(a: TypeDesc, b: TypeDesc, op: str) -> bool:
    """
    比较运算合法性：
    - 两个数值类型：六种比较都允许（int 自动提升为 float）
    - 否则必须是同一种基本类型：== / != 接受任意基本类型，
      < <= > >= 只接受 char（bool 没有顺序）
    """
    if op not in COMPARISON_OPS:
        return False
    if a.is_numeric() and b.is_numeric():
        return True
    if not a.is_primitive() or not equal_types(a, b):
        return False
    if op in EQUALITY_OPS:
        return True
    return a.is_character()

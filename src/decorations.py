from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from asl_types import TypeDesc


@dataclass
class Decoration:
    scope: Optional[int] = None
    type: Optional[TypeDesc] = None
    is_lvalue: Optional[bool] = None


class TreeDecoration:
    """
    AST 节点的附加信息表（作用域 id、类型、是否左值），按节点身份索引。

    读取尚未写入的字段属于调用顺序错误，直接抛 KeyError。
    """

    def __init__(self):
        # id(node) -> (node, Decoration)；保留 node 引用以免 id 被复用
        self._table: Dict[int, Tuple[Any, Decoration]] = {}

    def _record(self, node) -> Decoration:
        entry = self._table.get(id(node))
        if entry is None:
            entry = (node, Decoration())
            self._table[id(node)] = entry
        return entry[1]

    def get(self, node) -> Optional[Decoration]:
        entry = self._table.get(id(node))
        return entry[1] if entry else None

    def _field(self, node, name: str):
        deco = self.get(node)
        value = getattr(deco, name) if deco else None
        if value is None:
            raise KeyError(f"{name} not decorated on {node.__class__.__name__}")
        return value

    def put_scope(self, node, scope_id: int):
        if scope_id is None:
            raise ValueError("scope decoration cannot be None")
        self._record(node).scope = scope_id

    def put_type(self, node, t: TypeDesc):
        if t is None:
            raise ValueError("type decoration cannot be None")
        self._record(node).type = t

    def put_is_lvalue(self, node, b: bool):
        if b is None:
            raise ValueError("lvalue decoration cannot be None")
        self._record(node).is_lvalue = bool(b)

    def get_scope(self, node) -> int:
        return self._field(node, 'scope')

    def get_type(self, node) -> TypeDesc:
        return self._field(node, 'type')

    def get_is_lvalue(self, node) -> bool:
        return self._field(node, 'is_lvalue')

    def has_type(self, node) -> bool:
        deco = self.get(node)
        return deco is not None and deco.type is not None

    def __contains__(self, node) -> bool:
        return id(node) in self._table

    def __len__(self):
        return len(self._table)

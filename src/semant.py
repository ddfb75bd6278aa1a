"""
语义分析流水线：声明收集 -> 类型检查

用法:
    from semant import check_source
    result = check_source(open("prog.asl").read())
    if not result.ok: ...
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ast_nodes import Program
from asl_parser import parse
from analyzer import TypeChecker
from decorations import TreeDecoration
from scope import SymbolTable
from sem_errors import SemErrors
from symbols import SymbolsCollector

DEFAULT_CONFIG = {
    "main_name": "main",
    "print_errors": True,
}


@dataclass
class CheckResult:
    program: Program
    symbols: SymbolTable
    decorations: TreeDecoration
    errors: SemErrors

    @property
    def ok(self) -> bool:
        return not self.errors.has_errors


def check_program(program: Program, config: Optional[Dict[str, Any]] = None) -> CheckResult:
    """对已解析的 AST 运行两遍语义分析"""
    cfg = dict(DEFAULT_CONFIG)
    cfg.update(config or {})
    cfg.setdefault("debug", bool(os.environ.get("ASLC_DEBUG")))

    symbols = SymbolTable(main_name=cfg["main_name"])
    decorations = TreeDecoration()
    errors = SemErrors()

    SymbolsCollector(symbols, decorations, errors).collect(program)
    TypeChecker(symbols, decorations, errors, cfg).check(program)
    return CheckResult(program, symbols, decorations, errors)


def check_source(source: str, config: Optional[Dict[str, Any]] = None) -> CheckResult:
    """解析并检查源码；语法错误以 AslSyntaxError 抛出"""
    program = parse(source)
    return check_program(program, config)

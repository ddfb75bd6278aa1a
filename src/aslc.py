#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ASL 语义检查器命令行
用法: aslc <源文件路径> [--dump-ast] [--quiet]

示例:
    aslc prog.asl
    aslc prog.asl --dump-ast
    ASLC_DEBUG=1 aslc prog.asl
"""

import os
import sys
from pathlib import Path

from asl_parser import AslSyntaxError
from semant import check_source
from visitors import print_ast


def print_usage():
    print(__doc__)
    print("\n参数说明:")
    print("  source      - ASL 源文件路径 (.asl)")
    print("  --dump-ast  - 输出带类型注释的 AST")
    print("  --quiet     - 不输出汇总行")


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    flags = {a for a in args if a.startswith('--')}
    positional = [a for a in args if not a.startswith('--')]
    unknown = flags - {'--dump-ast', '--quiet', '--help'}

    if '--help' in flags:
        print_usage()
        return 0
    if len(positional) != 1 or unknown:
        print_usage()
        return 1

    source_path = Path(positional[0])
    if not source_path.is_file():
        print(f"✗ 错误: 源文件不存在: {source_path}")
        return 1

    config = {
        "main_name": "main",
        "print_errors": True,
        "debug": bool(os.environ.get("ASLC_DEBUG")),
    }

    try:
        source = source_path.read_text(encoding="utf-8")
        result = check_source(source, config)
    except AslSyntaxError as e:
        for msg in e.errors:
            print(msg)
        print(f"There are {len(e.errors)} syntax errors in {source_path.name}")
        return 1
    except OSError as e:
        print(f"✗ 错误: 无法读取 {source_path}: {e}")
        if config["debug"]:
            import traceback
            traceback.print_exc()
        return 1
    except Exception as e:
        print(f"✗ 检查失败: {e}")
        if config["debug"]:
            import traceback
            traceback.print_exc()
        return 1

    if '--dump-ast' in flags:
        print(print_ast(result.program, result.decorations))

    if '--quiet' not in flags:
        if result.ok:
            print(f"Type checking {source_path.name}: OK")
        else:
            print(f"There are {result.errors.count()} semantic errors in {source_path.name}")

    return 0 if result.ok else 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()

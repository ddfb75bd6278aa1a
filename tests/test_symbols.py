from asl_parser import parse
from asl_types import INT, FLOAT, BOOL, CHAR, ERROR, VOID
from decorations import TreeDecoration
from scope import SymbolTable, GLOBAL_SCOPE_NAME
from sem_errors import SemErrors
from symbols import SymbolsCollector


def collect(source):
    program = parse(source)
    symbols, decorations, errors = SymbolTable(), TreeDecoration(), SemErrors()
    SymbolsCollector(symbols, decorations, errors).collect(program)
    return program, symbols, decorations, errors


SOURCE = """\
func f(a : int, b : float) : bool
  var x, y : array [4] of char
  var z : array [4] of char
  return true;
endfunc

func main()
endfunc
"""


def test_scopes_are_assigned():
    program, symbols, decorations, errors = collect(SOURCE)
    assert errors.count() == 0
    assert symbols.depth == 0
    assert decorations.get_scope(program) == 0
    assert symbols.get_scope(0).name == GLOBAL_SCOPE_NAME

    f, main = program.functions
    f_scope = symbols.get_scope(decorations.get_scope(f))
    assert f_scope.name == 'f'
    assert f_scope.parent_id == 0
    assert decorations.get_scope(main) != decorations.get_scope(f)


def test_symbols_and_kinds():
    program, symbols, decorations, _ = collect(SOURCE)
    f = program.functions[0]
    f_scope = symbols.get_scope(decorations.get_scope(f))
    assert f_scope.symbols['a'].kind == 'parameter'
    assert f_scope.symbols['a'].type is INT
    assert f_scope.symbols['b'].type is FLOAT
    assert f_scope.symbols['x'].kind == 'variable'

    gscope = symbols.get_scope(0)
    assert gscope.symbols['f'].kind == 'function'
    assert str(gscope.symbols['f'].type) == 'function<int,float:bool>'
    assert gscope.symbols['main'].type.ret is VOID
    assert decorations.get_type(f) is gscope.symbols['f'].type


def test_one_array_type_per_declaration():
    program, symbols, decorations, _ = collect(SOURCE)
    f = program.functions[0]
    syms = symbols.get_scope(decorations.get_scope(f)).symbols
    assert syms['x'].type is syms['y'].type
    assert syms['x'].type is not syms['z'].type
    assert syms['z'].type.elem is CHAR
    assert decorations.get_type(f.decls[0].type_) is syms['x'].type


def test_type_nodes_are_decorated():
    program, _, decorations, _ = collect(SOURCE)
    f = program.functions[0]
    assert decorations.get_type(f.params[0].type_) is INT
    assert decorations.get_type(f.ret_type) is BOOL


def test_declared_twice():
    source = """\
func f(a : int)
  var a : float
  var b, b : int
endfunc
func f()
endfunc
func main()
endfunc
"""
    program, symbols, decorations, errors = collect(source)
    assert errors.kinds() == ['declaredIdentTwice'] * 3
    assert [str(e) for e in errors] == [
        "Line 2:6 error: Identifier 'a' already declared.",
        "Line 3:9 error: Identifier 'b' already declared.",
        "Line 5:5 error: Identifier 'f' already declared.",
    ]
    f_scope = symbols.get_scope(decorations.get_scope(program.functions[0]))
    assert f_scope.symbols['a'].type is INT
    # 保留第一个定义
    assert symbols.get_scope(0).symbols['f'].type.params == [INT]


def test_invalid_array_size():
    program, symbols, decorations, errors = collect("func main()\n  var v : array [0] of int\nendfunc\n")
    assert errors.kinds() == ['invalidArraySize']
    scope = symbols.get_scope(decorations.get_scope(program.functions[0]))
    assert scope.symbols['v'].type is ERROR

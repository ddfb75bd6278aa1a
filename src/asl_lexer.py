from ply import lex

reserved = {
    'func': 'FUNC',
    'endfunc': 'ENDFUNC',
    'var': 'VAR',
    'array': 'ARRAY',
    'of': 'OF',
    'int': 'INT',
    'float': 'FLOAT',
    'bool': 'BOOL',
    'char': 'CHAR',
    'if': 'IF',
    'then': 'THEN',
    'else': 'ELSE',
    'endif': 'ENDIF',
    'while': 'WHILE',
    'do': 'DO',
    'endwhile': 'ENDWHILE',
    'return': 'RETURN',
    'read': 'READ',
    'write': 'WRITE',
    'and': 'AND',
    'or': 'OR',
    'not': 'NOT',
    'true': 'BOOLVAL',
    'false': 'BOOLVAL',
}

tokens = [
    'ID', 'INTVAL', 'FLOATVAL', 'CHARVAL', 'STRING',
    'ASSIGN',
    'EQ', 'NE', 'LE', 'GE', 'LT', 'GT',
    'PLUS', 'MINUS', 'MUL', 'DIV', 'MOD',
    'LPAREN', 'RPAREN', 'LBRACKET', 'RBRACKET',
    'COMMA', 'SEMI', 'COLON',
] + sorted(set(reserved.values()))

t_ASSIGN = r':='
t_EQ = r'=='
t_NE = r'!='
t_LE = r'<='
t_GE = r'>='
t_LT = r'<'
t_GT = r'>'

t_PLUS = r'\+'
t_MINUS = r'-'
t_MUL = r'\*'
t_DIV = r'/'
t_MOD = r'%'

t_LPAREN = r'\('
t_RPAREN = r'\)'
t_LBRACKET = r'\['
t_RBRACKET = r'\]'
t_COMMA = r','
t_SEMI = r';'
t_COLON = r':'


def find_column(lexdata: str, lexpos: int) -> int:
    """从 0 开始的列号"""
    return lexpos - (lexdata.rfind('\n', 0, lexpos) + 1)


def t_comment(t):
    r'//[^\n]*'
    pass

def t_FLOATVAL(t):
    r'\d+\.\d+'
    t.value = float(t.value)
    return t

def t_INTVAL(t):
    r'\d+'
    t.value = int(t.value)
    return t

def t_CHARVAL(t):
    r"'(\\.|[^'\\])'"
    return t

def t_STRING(t):
    r'"([^"\\]|\\.)*"'
    t.value = t.value[1:-1]
    return t

def t_ID(t):
    r'[A-Za-z][A-Za-z0-9_]*'
    t.type = reserved.get(t.value, 'ID')
    if t.type == 'BOOLVAL':
        t.value = t.value == 'true'
    return t

t_ignore = ' \t\r'

def t_newline(t):
    r'\n+'
    t.lexer.lineno += t.value.count('\n')

def t_error(t):
    col = find_column(t.lexer.lexdata, t.lexpos)
    t.lexer.errors.append(f"Line {t.lineno}:{col} error: illegal character {t.value[0]!r}")
    t.lexer.skip(1)

lexer = lex.lex()
lexer.errors = []


def tokenize(data: str):
    """返回词法单元列表，调试和测试用"""
    lx = lexer.clone()
    lx.lineno = 1
    lx.errors = []
    lx.input(data)
    return list(lx)

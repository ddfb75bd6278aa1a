from typing import List

from ply import yacc

from ast_nodes import *
from asl_lexer import lexer, tokens, find_column

start = 'program'

precedence = (
    ('left', 'OR'),
    ('left', 'AND'),
    ('nonassoc', 'EQ', 'NE', 'LT', 'LE', 'GT', 'GE'),
    ('left', 'PLUS', 'MINUS'),
    ('left', 'MUL', 'DIV', 'MOD'),
    ('right', 'NOT', 'UPLUS', 'UMINUS'),
)

# 一次 parse 过程中的词法/语法错误
_errors: List[str] = []


class AslSyntaxError(SyntaxError):
    """源文件存在词法或语法错误，语义分析不会运行"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


def _pos(p, n):
    """第 n 个终结符的 (行, 列)"""
    return p.lineno(n), find_column(p.lexer.lexdata, p.lexpos(n))


# ==================== 程序结构 ====================

def p_program(p):
    "program : function_list"
    p[0] = Program(p[1])

def p_function_list_multi(p):
    "function_list : function_list function"
    p[0] = p[1] + [p[2]]

def p_function_list_single(p):
    "function_list : function"
    p[0] = [p[1]]

def p_function(p):
    "function : FUNC ID LPAREN parameters RPAREN ret_type declarations statements ENDFUNC"
    line, col = _pos(p, 2)
    p[0] = Function(p[2], p[4], p[6], p[7], p[8], line=line, col=col)

def p_ret_type(p):
    "ret_type : COLON basic_type"
    p[0] = p[2]

def p_ret_type_empty(p):
    "ret_type : empty"
    p[0] = None

def p_parameters(p):
    "parameters : param_list"
    p[0] = p[1]

def p_parameters_empty(p):
    "parameters : empty"
    p[0] = []

def p_param_list_multi(p):
    "param_list : param_list COMMA parameter_decl"
    p[0] = p[1] + [p[3]]

def p_param_list_single(p):
    "param_list : parameter_decl"
    p[0] = [p[1]]

def p_parameter_decl(p):
    "parameter_decl : ID COLON type"
    line, col = _pos(p, 1)
    p[0] = ParameterDecl(p[1], p[3], line=line, col=col)

def p_declarations_multi(p):
    "declarations : declarations variable_decl"
    p[0] = p[1] + [p[2]]

def p_declarations_empty(p):
    "declarations : empty"
    p[0] = []

def p_variable_decl(p):
    "variable_decl : VAR id_list COLON type"
    line, col = _pos(p, 1)
    p[0] = VariableDecl(p[2], p[4], line=line, col=col)

def p_id_list_multi(p):
    "id_list : id_list COMMA ident"
    p[0] = p[1] + [p[3]]

def p_id_list_single(p):
    "id_list : ident"
    p[0] = [p[1]]

# ==================== 类型 ====================

def p_type_basic(p):
    "type : basic_type"
    p[0] = p[1]

def p_type_array(p):
    "type : ARRAY LBRACKET INTVAL RBRACKET OF basic_type"
    line, col = _pos(p, 1)
    p[0] = TypeNode(p[6].base, p[3], line=line, col=col)

def p_basic_type(p):
    """basic_type : INT
                  | FLOAT
                  | BOOL
                  | CHAR"""
    line, col = _pos(p, 1)
    p[0] = TypeNode(p[1], line=line, col=col)

# ==================== 语句 ====================

def p_statements_multi(p):
    "statements : statements statement"
    p[0] = p[1] + [p[2]]

def p_statements_empty(p):
    "statements : empty"
    p[0] = []

def p_statement_assign(p):
    "statement : left_expr ASSIGN expr SEMI"
    line, col = _pos(p, 2)
    p[0] = AssignStmt(p[1], p[3], line=line, col=col)

def p_statement_if(p):
    "statement : IF expr THEN statements else_opt ENDIF"
    line, col = _pos(p, 1)
    p[0] = IfStmt(p[2], p[4], p[5], line=line, col=col)

def p_else_opt(p):
    "else_opt : ELSE statements"
    p[0] = p[2]

def p_else_opt_empty(p):
    "else_opt : empty"
    p[0] = []

def p_statement_while(p):
    "statement : WHILE expr DO statements ENDWHILE"
    line, col = _pos(p, 1)
    p[0] = WhileStmt(p[2], p[4], line=line, col=col)

def p_statement_proc_call(p):
    "statement : procedure SEMI"
    p[0] = ProcCallStmt(p[1], line=p[1].line, col=p[1].col)

def p_statement_read(p):
    "statement : READ left_expr SEMI"
    line, col = _pos(p, 1)
    p[0] = ReadStmt(p[2], line=line, col=col)

def p_statement_write_expr(p):
    "statement : WRITE expr SEMI"
    line, col = _pos(p, 1)
    p[0] = WriteExpr(p[2], line=line, col=col)

def p_statement_write_string(p):
    "statement : WRITE STRING SEMI"
    line, col = _pos(p, 1)
    p[0] = WriteString(p[2], line=line, col=col)

def p_statement_return(p):
    """statement : RETURN expr SEMI
                 | RETURN SEMI"""
    line, col = _pos(p, 1)
    expr = p[2] if len(p) == 4 else None
    p[0] = ReturnStmt(expr, line=line, col=col)

def p_left_expr(p):
    "left_expr : ident"
    p[0] = p[1]

def p_left_expr_index(p):
    "left_expr : ident LBRACKET expr RBRACKET"
    p[0] = IndexExpr(p[1], p[3], line=p[1].line, col=p[1].col)

def p_procedure(p):
    "procedure : ident LPAREN args RPAREN"
    p[0] = CallExpr(p[1], p[3], line=p[1].line, col=p[1].col)

def p_args(p):
    "args : arg_list"
    p[0] = p[1]

def p_args_empty(p):
    "args : empty"
    p[0] = []

def p_arg_list_multi(p):
    "arg_list : arg_list COMMA expr"
    p[0] = p[1] + [p[3]]

def p_arg_list_single(p):
    "arg_list : expr"
    p[0] = [p[1]]

def p_ident(p):
    "ident : ID"
    line, col = _pos(p, 1)
    p[0] = Ident(p[1], line=line, col=col)

# ==================== 表达式 ====================

def p_expr_paren(p):
    "expr : LPAREN expr RPAREN"
    line, col = _pos(p, 1)
    p[0] = Paren(p[2], line=line, col=col)

def p_expr_not(p):
    "expr : NOT expr"
    line, col = _pos(p, 1)
    p[0] = UnaryOp('not', p[2], line=line, col=col)

def p_expr_uplus(p):
    "expr : PLUS expr %prec UPLUS"
    line, col = _pos(p, 1)
    p[0] = UnaryOp('+', p[2], line=line, col=col)

def p_expr_uminus(p):
    "expr : MINUS expr %prec UMINUS"
    line, col = _pos(p, 1)
    p[0] = UnaryOp('-', p[2], line=line, col=col)

def p_expr_binop(p):
    """expr : expr MUL expr
            | expr DIV expr
            | expr MOD expr
            | expr PLUS expr
            | expr MINUS expr
            | expr EQ expr
            | expr NE expr
            | expr LT expr
            | expr LE expr
            | expr GT expr
            | expr GE expr
            | expr AND expr
            | expr OR expr"""
    line, col = _pos(p, 2)
    p[0] = BinOp(p[2], p[1], p[3], line=line, col=col)

def p_expr_int(p):
    "expr : INTVAL"
    line, col = _pos(p, 1)
    p[0] = IntLiteral(p[1], line=line, col=col)

def p_expr_float(p):
    "expr : FLOATVAL"
    line, col = _pos(p, 1)
    p[0] = FloatLiteral(p[1], line=line, col=col)

def p_expr_char(p):
    "expr : CHARVAL"
    line, col = _pos(p, 1)
    p[0] = CharLiteral(p[1], line=line, col=col)

def p_expr_bool(p):
    "expr : BOOLVAL"
    line, col = _pos(p, 1)
    p[0] = BoolLiteral(p[1], line=line, col=col)

def p_expr_call(p):
    "expr : procedure"
    p[0] = p[1]

def p_expr_ident(p):
    "expr : ident"
    p[0] = p[1]

def p_expr_index(p):
    "expr : ident LBRACKET expr RBRACKET"
    p[0] = IndexExpr(p[1], p[3], line=p[1].line, col=p[1].col)

def p_empty(p):
    "empty :"
    p[0] = None

def p_error(p):
    if p:
        col = find_column(p.lexer.lexdata, p.lexpos)
        _errors.append(f"Line {p.lineno}:{col} error: syntax error at '{p.value}'")
    else:
        _errors.append("syntax error at EOF")


def parse(data: str, debug=False) -> Program:
    """解析 ASL 源码；存在任何词法/语法错误时抛出 AslSyntaxError"""
    del _errors[:]
    lx = lexer.clone()
    lx.lineno = 1
    lx.errors = _errors
    parser = yacc.yacc(debug=debug, write_tables=False)
    program = parser.parse(data, lexer=lx)
    if _errors or program is None:
        raise AslSyntaxError(_errors or ["empty program"])
    return program

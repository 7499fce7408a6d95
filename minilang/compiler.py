"""
compiler.py
MiniLang compiler pipeline (lexer → recursive-descent parser → define-before-use
check → constant folding → TAC listing → tree-walking interpreter).

Every phase takes an optional trace sink and raises a CompileError subclass on
failure; only the driver decides what to do with the error.
"""

import re
import sys
from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, Optional, Union

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# =====================================================
# ERRORS
# =====================================================
class CompileError(Exception):
    """Fatal error raised by any phase of the pipeline."""

    phase = "Compile"

    def __init__(self, message, lineno=None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno

    def __str__(self):
        if self.lineno is not None:
            return f"{self.phase} error (line {self.lineno}): {self.message}"
        return f"{self.phase} error: {self.message}"


class LexError(CompileError):
    phase = "Lexical"


class ParseError(CompileError):
    phase = "Syntax"


class SemanticError(CompileError):
    phase = "Semantic"

    def __init__(self, name, lineno=None):
        super().__init__(f"variable '{name}' used before assignment", lineno)
        self.name = name


class MiniLangRuntimeError(CompileError):
    phase = "Runtime"


class SourceError(CompileError):
    phase = "I/O"

# =====================================================
# TRACE SINKS
# =====================================================
class Trace:
    """Trace sink that discards every event."""

    enabled = False

    def emit(self, phase, message):
        pass


class PrintTrace(Trace):
    enabled = True

    def __init__(self, stream=None):
        self.stream = stream

    def emit(self, phase, message):
        print(f"[{phase}] {message}", file=self.stream or sys.stdout)


class CollectTrace(Trace):
    enabled = True

    def __init__(self):
        self.events = []

    def emit(self, phase, message):
        self.events.append((phase, message))

    def lines(self):
        return [f"[{phase}] {message}" for phase, message in self.events]

# =====================================================
# 64-BIT INTEGER ARITHMETIC
# =====================================================
def wrap(value):
    """Wrap an unbounded int into the signed 64-bit range."""
    return (value - INT64_MIN) % (2 ** 64) + INT64_MIN


def trunc_div(a, b):
    q = abs(a) // abs(b)
    return wrap(q if (a < 0) == (b < 0) else -q)


def trunc_mod(a, b):
    # sign follows the dividend
    return wrap(a - b * trunc_div(a, b))


OPERATORS = {
    '+': lambda x, y: wrap(x + y),
    '-': lambda x, y: wrap(x - y),
    '*': lambda x, y: wrap(x * y),
    '/': trunc_div,
    '%': trunc_mod,
    '==': lambda x, y: 1 if x == y else 0,
    '!=': lambda x, y: 1 if x != y else 0,
    '<': lambda x, y: 1 if x < y else 0,
    '>': lambda x, y: 1 if x > y else 0,
    '<=': lambda x, y: 1 if x <= y else 0,
    '>=': lambda x, y: 1 if x >= y else 0,
}

# =====================================================
# LEXER
# =====================================================
Token = namedtuple('Token', ['type', 'value', 'number', 'lineno'])


class Lexer:
    KEYWORDS = {'print', 'if', 'else', 'while'}
    token_specification = [
        ("COMMENT",   r'//[^\n]*'),
        ("INT",       r'[0-9]+'),
        ("ID",        r'[A-Za-z_][A-Za-z0-9_]*'),
        ("EQ",        r'=='),
        ("NE",        r'!='),
        ("LE",        r'<='),
        ("GE",        r'>='),
        ("PLUS",      r'\+'),
        ("MINUS",     r'-'),
        ("MUL",       r'\*'),
        ("DIV",       r'/'),
        ("MOD",       r'%'),
        ("ASSIGN",    r'='),
        ("LT",        r'<'),
        ("GT",        r'>'),
        ("LPAREN",    r'\('),
        ("RPAREN",    r'\)'),
        ("LBRACE",    r'\{'),
        ("RBRACE",    r'\}'),
        ("SEMI",      r';'),
        ("NEWLINE",   r'\n'),
        ("SKIP",      r'[ \t\r\f\v]+'),
        ("MISMATCH",  r'.'),
    ]
    tok_regex = '|'.join(f'(?P<{n}>{p})' for n, p in token_specification)
    master_re = re.compile(tok_regex)

    def __init__(self, code, trace=None):
        self.code = code
        self.pos = 0
        self.lineno = 1
        self.trace = trace or Trace()
        self.seen = []
        self.trace.emit("LEXER", f"Initialized with source length: {len(code)}")

    def next_token(self):
        tok = self.scan()
        # EOF is recorded once even though it repeats
        if not self.seen or self.seen[-1].type != 'EOF':
            self.seen.append(tok)
        return tok

    def scan(self):
        while self.pos < len(self.code):
            mo = self.master_re.match(self.code, self.pos)
            kind = mo.lastgroup
            val = mo.group()
            self.pos = mo.end()
            if kind == "NEWLINE":
                self.lineno += 1
                continue
            if kind == "SKIP":
                continue
            if kind == "COMMENT":
                self.trace.emit("LEXER", "Skipping comment")
                continue
            if kind == "MISMATCH":
                raise LexError(f"unexpected character {val!r}", self.lineno)
            if kind == "INT":
                number = int(val)
                if number > INT64_MAX:
                    raise LexError(f"integer literal {val} out of range", self.lineno)
                self.trace.emit("LEXER", f"Integer literal: {val} (value: {number})")
                return Token('INT', val, number, self.lineno)
            if kind == "ID":
                if val in Lexer.KEYWORDS:
                    self.trace.emit("LEXER", f"Keyword: {val}")
                    return Token(val.upper(), val, 0, self.lineno)
                self.trace.emit("LEXER", f"Identifier: {val}")
                return Token('ID', val, 0, self.lineno)
            self.trace.emit("LEXER", f"Token: {kind} '{val}'")
            return Token(kind, val, 0, self.lineno)
        return Token('EOF', '', 0, self.lineno)

    def tokens(self):
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == 'EOF':
                return


def tokenize(code):
    return list(Lexer(code).tokens())

# =====================================================
# AST NODES
# =====================================================
class Node:
    pass


@dataclass
class IntLiteral(Node):
    value: int


@dataclass
class Variable(Node):
    name: str
    lineno: Optional[int] = field(default=None, compare=False)


@dataclass
class Binary(Node):
    op: str
    left: "Expr"
    right: "Expr"
    lineno: Optional[int] = field(default=None, compare=False)


Expr = Union[IntLiteral, Variable, Binary]


@dataclass
class Print(Node):
    expr: Expr


@dataclass
class Assign(Node):
    name: str
    expr: Expr


@dataclass
class Block(Node):
    statements: List["Stmt"] = field(default_factory=list)


@dataclass
class If(Node):
    cond: Expr
    then_block: Block
    else_block: Optional[Block] = None


@dataclass
class While(Node):
    cond: Expr
    body: Block


Stmt = Union[Print, Assign, Block, If, While]


def format_ast(node, indent=0):
    """Render a node as an indented, human readable dump."""
    pad = "  " * indent
    match node:
        case IntLiteral(value=value):
            return f"IntLit({value})"
        case Variable(name=name):
            return f"VarExpr({name})"
        case Binary(op=op, left=left, right=right):
            return f"Binary({op}, {format_ast(left)}, {format_ast(right)})"
        case Print(expr=expr):
            return f"{pad}PrintStmt({format_ast(expr)})"
        case Assign(name=name, expr=expr):
            return f"{pad}AssignStmt({name}, {format_ast(expr)})"
        case Block(statements=statements):
            inner = "".join(format_ast(s, indent + 1) + "\n" for s in statements)
            return f"{pad}BlockStmt[\n{inner}{pad}]"
        case If(cond=cond, then_block=then_block, else_block=else_block):
            text = f"{pad}IfStmt({format_ast(cond)},\n{format_ast(then_block, indent + 1)}"
            if else_block is not None:
                text += f",\n{pad}  else\n{format_ast(else_block, indent + 1)}"
            return text + ")"
        case While(cond=cond, body=body):
            return f"{pad}WhileStmt({format_ast(cond)},\n{format_ast(body, indent + 1)})"
    raise TypeError(f"not an AST node: {node!r}")

# =====================================================
# PARSER (recursive-descent, one token of lookahead)
# =====================================================
class Parser:
    def __init__(self, source, trace=None):
        self.trace = trace or Trace()
        self.lexer = source if isinstance(source, Lexer) else Lexer(source, self.trace)
        self.current = self.lexer.next_token()
        self.trace.emit("PARSER", f"Initialized, first token: {self.current.type}")

    def eat(self, ttype):
        tok = self.current
        if tok.type != ttype:
            raise ParseError(f"expected {ttype} but got {tok.type} ({tok.value!r})", tok.lineno)
        self.trace.emit("PARSER", f"Consumed token: {ttype}")
        self.current = self.lexer.next_token()
        return tok

    def parse_program(self):
        self.trace.emit("PARSER", "Starting program parsing")
        root = Block()
        while self.current.type != 'EOF':
            root.statements.append(self.statement())
        if self.trace.enabled:
            self.trace.emit("PARSER", "Program parsing complete. AST:\n" + format_ast(root))
        return root

    def statement(self):
        tok = self.current
        self.trace.emit("PARSER", f"Parsing statement, current token: {tok.type}")
        if tok.type == 'PRINT':
            return self.print_statement()
        if tok.type == 'ID':
            return self.assignment()
        if tok.type == 'IF':
            return self.if_statement()
        if tok.type == 'WHILE':
            return self.while_statement()
        if tok.type == 'LBRACE':
            self.trace.emit("PARSER", "Found block statement")
            return self.block()
        raise ParseError(f"unexpected token {tok.type} ({tok.value!r})", tok.lineno)

    def print_statement(self):
        self.trace.emit("PARSER", "Found print statement")
        self.eat('PRINT')
        self.eat('LPAREN')
        expr = self.expression()
        self.eat('RPAREN')
        self.eat('SEMI')
        return Print(expr)

    def assignment(self):
        name = self.eat('ID').value
        self.trace.emit("PARSER", f"Found assignment to variable: {name}")
        self.eat('ASSIGN')
        expr = self.expression()
        self.eat('SEMI')
        return Assign(name, expr)

    def if_statement(self):
        self.trace.emit("PARSER", "Found if statement")
        self.eat('IF')
        self.eat('LPAREN')
        cond = self.expression()
        self.eat('RPAREN')
        then_block = self.block()
        else_block = None
        if self.current.type == 'ELSE':
            self.trace.emit("PARSER", "Found else clause")
            self.eat('ELSE')
            else_block = self.block()
        return If(cond, then_block, else_block)

    def while_statement(self):
        self.trace.emit("PARSER", "Found while statement")
        self.eat('WHILE')
        self.eat('LPAREN')
        cond = self.expression()
        self.eat('RPAREN')
        body = self.block()
        return While(cond, body)

    def block(self):
        self.eat('LBRACE')
        stmts = []
        while self.current.type not in ('RBRACE', 'EOF'):
            stmts.append(self.statement())
        self.eat('RBRACE')
        return Block(stmts)

    # Expressions: one method per precedence level, left-folded
    def expression(self):
        return self.equality()

    def equality(self):
        node = self.comparison()
        while self.current.type in ('EQ', 'NE'):
            tok = self.eat(self.current.type)
            self.trace.emit("PARSER", f"Equality operator: {tok.value}")
            node = Binary(tok.value, node, self.comparison(), tok.lineno)
        return node

    def comparison(self):
        node = self.term()
        while self.current.type in ('LT', 'GT', 'LE', 'GE'):
            tok = self.eat(self.current.type)
            self.trace.emit("PARSER", f"Comparison operator: {tok.value}")
            node = Binary(tok.value, node, self.term(), tok.lineno)
        return node

    def term(self):
        node = self.factor()
        while self.current.type in ('PLUS', 'MINUS'):
            tok = self.eat(self.current.type)
            self.trace.emit("PARSER", f"Term operator: {tok.value}")
            node = Binary(tok.value, node, self.factor(), tok.lineno)
        return node

    def factor(self):
        node = self.unary()
        while self.current.type in ('MUL', 'DIV', 'MOD'):
            tok = self.eat(self.current.type)
            self.trace.emit("PARSER", f"Factor operator: {tok.value}")
            node = Binary(tok.value, node, self.unary(), tok.lineno)
        return node

    def unary(self):
        if self.current.type == 'PLUS':
            self.trace.emit("PARSER", "Unary plus")
            self.eat('PLUS')
            return self.unary()
        if self.current.type == 'MINUS':
            self.trace.emit("PARSER", "Unary minus")
            tok = self.eat('MINUS')
            return Binary('-', IntLiteral(0), self.unary(), tok.lineno)
        return self.primary()

    def primary(self):
        tok = self.current
        if tok.type == 'INT':
            self.trace.emit("PARSER", f"Integer literal: {tok.number}")
            self.eat('INT')
            return IntLiteral(tok.number)
        if tok.type == 'ID':
            self.trace.emit("PARSER", f"Variable: {tok.value}")
            self.eat('ID')
            return Variable(tok.value, tok.lineno)
        if tok.type == 'LPAREN':
            self.trace.emit("PARSER", "Parenthesized expression")
            self.eat('LPAREN')
            node = self.expression()
            self.eat('RPAREN')
            return node
        raise ParseError(f"unexpected token {tok.type} ({tok.value!r}) in expression", tok.lineno)


def parse(code, trace=None):
    return Parser(code, trace).parse_program()

# =====================================================
# SEMANTIC ANALYZER (define-before-use)
# =====================================================
def referenced_variables(expr):
    """Yield every Variable node inside expr, left to right."""
    stack = [expr]
    while stack:
        node = stack.pop()
        match node:
            case Variable():
                yield node
            case Binary(left=left, right=right):
                stack.append(right)
                stack.append(left)


class SemanticAnalyzer:
    """Checks that every variable is assigned before it is read.

    Branches of an if and the body of a while are analyzed against copies of
    the defined set, so names they assign are never visible afterwards, even
    when both arms of an if assign the same name.
    """

    def __init__(self, trace=None):
        self.trace = trace or Trace()

    def analyze(self, program):
        self.trace.emit("SEMANTIC", "Starting semantic analysis...")
        defined = set()
        self.check_block(program, defined, 0)
        self.trace.emit("SEMANTIC", "Semantic analysis completed successfully!")
        return defined

    def check_block(self, block, defined, depth):
        for stmt in block.statements:
            self.check_stmt(stmt, defined, depth)

    def check_stmt(self, stmt, defined, depth):
        indent = "  " * depth
        match stmt:
            case Assign(name=name, expr=expr):
                self.trace.emit("SEMANTIC", f"{indent}Checking assignment to: {name}")
                self.check_expr(expr, defined, depth)
                defined.add(name)
                self.trace.emit("SEMANTIC", f"{indent}Variable defined: {name}")
            case Print(expr=expr):
                self.trace.emit("SEMANTIC", f"{indent}Checking print statement")
                self.check_expr(expr, defined, depth)
            case If(cond=cond, then_block=then_block, else_block=else_block):
                self.trace.emit("SEMANTIC", f"{indent}Checking if statement condition")
                self.check_expr(cond, defined, depth)
                self.trace.emit("SEMANTIC", f"{indent}Checking then block...")
                self.check_block(then_block, set(defined), depth + 1)
                if else_block is not None:
                    self.trace.emit("SEMANTIC", f"{indent}Checking else block...")
                    self.check_block(else_block, set(defined), depth + 1)
            case While(cond=cond, body=body):
                self.trace.emit("SEMANTIC", f"{indent}Checking while statement condition")
                self.check_expr(cond, defined, depth)
                self.trace.emit("SEMANTIC", f"{indent}Checking while loop body...")
                self.check_block(body, set(defined), depth + 1)
            case Block():
                self.trace.emit("SEMANTIC", f"{indent}Checking nested block...")
                self.check_block(stmt, defined, depth + 1)
            case _:
                raise TypeError(f"not a statement: {stmt!r}")

    def check_expr(self, expr, defined, depth):
        for var in referenced_variables(expr):
            if var.name not in defined:
                raise SemanticError(var.name, var.lineno)
            self.trace.emit("SEMANTIC", f"{'  ' * depth}Valid use of variable: {var.name}")

# =====================================================
# OPTIMIZER: Constant Folding
# =====================================================
def fold_expr(expr, trace=None):
    """Fold constant subtrees of expr, returning the (possibly new) root."""
    trace = trace or Trace()
    if not isinstance(expr, Binary):
        return expr
    expr.left = fold_expr(expr.left, trace)
    expr.right = fold_expr(expr.right, trace)
    match expr:
        case Binary(op=op, left=IntLiteral(value=a), right=IntLiteral(value=b)):
            if op in ('/', '%') and b == 0:
                # leave it for the interpreter to report
                return expr
            result = OPERATORS[op](a, b)
            trace.emit("OPTIMIZATION", f"Constant folded: {a} {op} {b} = {result}")
            return IntLiteral(result)
    return expr


def fold_block(block, trace):
    for stmt in block.statements:
        match stmt:
            case Assign() | Print():
                stmt.expr = fold_expr(stmt.expr, trace)
            case If(then_block=then_block, else_block=else_block):
                stmt.cond = fold_expr(stmt.cond, trace)
                fold_block(then_block, trace)
                if else_block is not None:
                    fold_block(else_block, trace)
            case While(body=body):
                stmt.cond = fold_expr(stmt.cond, trace)
                fold_block(body, trace)
            case Block():
                fold_block(stmt, trace)


def fold_constants(program, trace=None):
    trace = trace or Trace()
    trace.emit("OPTIMIZATION", "Starting constant folding...")
    fold_block(program, trace)
    trace.emit("OPTIMIZATION", "Constant folding completed!")
    return program

# =====================================================
# IR (TAC) GENERATION
# =====================================================
class TACInstruction:
    def __init__(self, op, dest=None, arg1=None, arg2=None):
        self.op = op
        self.dest = dest
        self.arg1 = arg1
        self.arg2 = arg2

    def __repr__(self):
        if self.op == 'label':
            return f"{self.dest}:"
        if self.op == 'goto':
            return f"goto {self.dest}"
        if self.op == 'ifz':
            return f"ifz {self.arg1} goto {self.dest}"
        if self.op == 'print':
            return f"print {self.arg1}"
        if self.op == 'assign':
            return f"{self.dest} = {self.arg1}"
        # binary operator
        return f"{self.dest} = {self.arg1} {self.op} {self.arg2}"


class IRGenerator:
    """Lowers the AST to a flat three-address-code listing."""

    def __init__(self, trace=None):
        self.tac = []
        self.temp_count = 0
        self.trace = trace or Trace()

    def new_temp(self):
        self.temp_count += 1
        tmp = f"t{self.temp_count}"
        self.trace.emit("TAC", f"New temporary: {tmp}")
        return tmp

    def new_labels(self):
        n = len(self.tac)
        return f"L{n}a", f"L{n}b"

    def emit(self, instr):
        self.tac.append(instr)
        if instr.op == 'label':
            self.trace.emit("TAC", f"Generated label: {instr!r}")
        else:
            self.trace.emit("TAC", f"Generated: {instr!r}")

    def generate(self, program):
        self.gen(program)
        return self.tac

    def listing(self):
        return [repr(t) for t in self.tac]

    def gen(self, node):
        match node:
            case Assign(name=name, expr=expr):
                self.emit(TACInstruction('assign', dest=name, arg1=self.gen_expr(expr)))
            case Print(expr=expr):
                self.emit(TACInstruction('print', arg1=self.gen_expr(expr)))
            case If(cond=cond, then_block=then_block, else_block=else_block):
                tcond = self.gen_expr(cond)
                l_else, l_end = self.new_labels()
                self.emit(TACInstruction('ifz', dest=l_else, arg1=tcond))
                self.gen(then_block)
                self.emit(TACInstruction('goto', dest=l_end))
                self.emit(TACInstruction('label', dest=l_else))
                if else_block is not None:
                    self.gen(else_block)
                self.emit(TACInstruction('label', dest=l_end))
            case While(cond=cond, body=body):
                l_start, l_end = self.new_labels()
                self.emit(TACInstruction('label', dest=l_start))
                tcond = self.gen_expr(cond)
                self.emit(TACInstruction('ifz', dest=l_end, arg1=tcond))
                self.gen(body)
                self.emit(TACInstruction('goto', dest=l_start))
                self.emit(TACInstruction('label', dest=l_end))
            case Block(statements=statements):
                self.trace.emit("TAC", f"Generating code for block with {len(statements)} statements")
                for s in statements:
                    self.gen(s)
            case _:
                raise TypeError(f"not a statement: {node!r}")

    def gen_expr(self, expr):
        match expr:
            case IntLiteral(value=value):
                return str(value)
            case Variable(name=name):
                return name
            case Binary(op=op, left=left, right=right):
                a = self.gen_expr(left)
                b = self.gen_expr(right)
                dest = self.new_temp()
                self.emit(TACInstruction(op, dest=dest, arg1=a, arg2=b))
                return dest
        raise TypeError(f"not an expression: {expr!r}")

# =====================================================
# INTERPRETER (tree-walking)
# =====================================================
class Interpreter:
    def __init__(self, stream=None):
        self.stream = stream
        self.env = {}
        self.output = []

    def run(self, program):
        self.env = {}
        self.exec_stmt(program)
        return self.env

    def exec_stmt(self, stmt):
        match stmt:
            case Block(statements=statements):
                for s in statements:
                    self.exec_stmt(s)
            case Assign(name=name, expr=expr):
                self.env[name] = self.eval_expr(expr)
            case Print(expr=expr):
                self.write(self.eval_expr(expr))
            case If(cond=cond, then_block=then_block, else_block=else_block):
                if self.eval_expr(cond) != 0:
                    self.exec_stmt(then_block)
                elif else_block is not None:
                    self.exec_stmt(else_block)
            case While(cond=cond, body=body):
                while self.eval_expr(cond) != 0:
                    self.exec_stmt(body)
            case _:
                raise TypeError(f"not a statement: {stmt!r}")

    def eval_expr(self, expr):
        match expr:
            case IntLiteral(value=value):
                return value
            case Variable(name=name, lineno=lineno):
                if name not in self.env:
                    raise MiniLangRuntimeError(f"use of undefined variable '{name}'", lineno)
                return self.env[name]
            case Binary(op=op, left=left, right=right, lineno=lineno):
                a = self.eval_expr(left)
                b = self.eval_expr(right)
                if op == '/' and b == 0:
                    raise MiniLangRuntimeError("division by zero", lineno)
                if op == '%' and b == 0:
                    raise MiniLangRuntimeError("modulo by zero", lineno)
                return OPERATORS[op](a, b)
        raise TypeError(f"not an expression: {expr!r}")

    def write(self, value):
        line = str(value)
        self.output.append(line)
        if self.stream is not None:
            print(line, file=self.stream)

# =====================================================
# COMPILER DRIVER
# =====================================================
# AST walks recurse once per nesting level; allow about as deep as a native stack
RECURSION_LIMIT = 10000


def ensure_recursion_limit(limit=RECURSION_LIMIT):
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)


PHASES = (
    "PHASE 1: LEXICAL ANALYSIS",
    "PHASE 2: SYNTAX ANALYSIS",
    "PHASE 3: SEMANTIC ANALYSIS",
    "PHASE 5: OPTIMIZATION",
    "PHASE 4 & 6: INTERMEDIATE CODE GENERATION",
    "PHASE 6: EXECUTION",
)


def compile_source(code, trace=None, stream=None, on_phase=None):
    """Run the whole pipeline over code and collect every artifact.

    The first CompileError stops the pipeline; its message lands in
    result['errors'] and the artifacts of later phases stay empty. Output
    printed before a runtime error is kept. on_phase(title, result) is
    called as each of PHASES begins.
    """
    trace = trace or Trace()
    result = {
        'tokens': [],
        'ast': None,
        'tac': [],
        'output': [],
        'errors': [],
        'environment': {},
    }
    lex, syntax, semantic, optimize, ir, execute = PHASES

    def phase(title):
        if on_phase is not None:
            on_phase(title, result)

    ensure_recursion_limit()
    interp = Interpreter(stream)
    try:
        phase(lex)
        lexer = Lexer(code, trace)
        parser = Parser(lexer, trace)

        phase(syntax)
        ast = parser.parse_program()
        result['tokens'] = list(lexer.seen)
        result['ast'] = ast

        phase(semantic)
        SemanticAnalyzer(trace).analyze(ast)

        phase(optimize)
        fold_constants(ast, trace)

        phase(ir)
        irgen = IRGenerator(trace)
        irgen.generate(ast)
        result['tac'] = irgen.listing()

        phase(execute)
        interp.run(ast)
    except CompileError as e:
        result['errors'].append(str(e))
    except RecursionError:
        result['errors'].append(str(CompileError("program nested too deeply")))
    result['output'] = interp.output
    result['environment'] = dict(interp.env)
    return result

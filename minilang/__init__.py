"""MiniLang: a small integer language compiled to an AST, checked, folded and interpreted."""

from minilang.compiler import (
    CompileError, LexError, ParseError, SemanticError, MiniLangRuntimeError, SourceError,
    Lexer, Parser, SemanticAnalyzer, IRGenerator, Interpreter,
    compile_source, fold_constants, parse, tokenize,
)

__version__ = "0.1.0"

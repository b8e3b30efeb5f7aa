"""
Dummy Language Compiler Package.

This package contains the front end and the semantic checkers:
- Lexer: Tokenizes Dummy source code
- Parser: Produces an Abstract Syntax Tree from tokens
- AST: Node definitions for the syntax tree
- VariableLifecycleChecker: Declaration, initialization and use of variables
- FunctionSignatureChecker: Call sites against (name, arity) declarations
- ReturnCoverageChecker: Return coverage, kind consistency, unreachable code
- DummyLanguageAnalyzer: Runs all checkers against one diagnostic reporter
"""

from dummylang.compiler.analyzer import (
    CHECKERS,
    DummyLanguageAnalyzer,
    analyze_file,
    analyze_source,
)
from dummylang.compiler.ast_nodes import (
    Assignment,
    ASTNode,
    ASTVisitor,
    BaseASTVisitor,
    Block,
    BooleanConst,
    Expression,
    File,
    FunctionCall,
    FunctionDeclaration,
    IfStatement,
    IntegerConst,
    ReturnStatement,
    Statement,
    VariableAccess,
    VariableDeclaration,
)
from dummylang.compiler.checker import AbstractChecker
from dummylang.compiler.diagnostics import (
    Diagnostic,
    DiagnosticReporter,
    DiagnosticSeverity,
    find_best_match,
    find_similar_names,
    levenshtein_distance,
)
from dummylang.compiler.function_checker import FunctionInfo, FunctionSignatureChecker
from dummylang.compiler.lexer import Lexer, tokenize
from dummylang.compiler.parser import Parser, transform, transform_source
from dummylang.compiler.return_checker import ReturnCoverageChecker, ReturnKind, ReturnStatus
from dummylang.compiler.rules import (
    ALL_RULES,
    RULES_BY_NAME,
    CheckCategory,
    CheckConfiguration,
    CheckLevel,
    CheckRule,
    get_rule_by_code,
    get_rule_by_name,
    get_rules_by_category,
)
from dummylang.compiler.scope import (
    ArgumentOrigin,
    Binding,
    ExplicitOrigin,
    LeveledScope,
    VariableStatus,
)
from dummylang.compiler.tokens import Token, TokenType
from dummylang.compiler.variable_checker import VariableLifecycleChecker

__all__ = [
    # Driver
    "CHECKERS",
    "DummyLanguageAnalyzer",
    "analyze_file",
    "analyze_source",
    # Front end
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "tokenize",
    "transform",
    "transform_source",
    # AST
    "ASTNode",
    "ASTVisitor",
    "BaseASTVisitor",
    "File",
    "FunctionDeclaration",
    "Block",
    "Statement",
    "Expression",
    "Assignment",
    "IfStatement",
    "VariableDeclaration",
    "ReturnStatement",
    "VariableAccess",
    "FunctionCall",
    "IntegerConst",
    "BooleanConst",
    # Checkers
    "AbstractChecker",
    "VariableLifecycleChecker",
    "FunctionSignatureChecker",
    "FunctionInfo",
    "ReturnCoverageChecker",
    "ReturnKind",
    "ReturnStatus",
    "LeveledScope",
    "Binding",
    "VariableStatus",
    "ExplicitOrigin",
    "ArgumentOrigin",
    # Diagnostics and rules
    "Diagnostic",
    "DiagnosticReporter",
    "DiagnosticSeverity",
    "levenshtein_distance",
    "find_similar_names",
    "find_best_match",
    "ALL_RULES",
    "RULES_BY_NAME",
    "CheckRule",
    "CheckLevel",
    "CheckCategory",
    "CheckConfiguration",
    "get_rule_by_code",
    "get_rule_by_name",
    "get_rules_by_category",
]

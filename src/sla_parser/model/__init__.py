"""Immutable document model produced by the SLA parser.

Key Components:
    Document: Root of a parsed document
    SymbolTable: Scopes, headers and the closed symbol hierarchy
    PatternExpression: Recursive pattern expression tree
    DecisionNode: Recursive constructor decision tree
    Constructor: One decoding rule with its p-code templates
"""

from .constructors import (
    Constructor,
    ContextChange,
    ContextCommit,
    ContextOperation,
    OperandPrint,
    PrintPiece,
    PrintText,
    SourceLocation,
)
from .document import (
    AddressSpace,
    AddressSpaceEntry,
    Document,
    SourceFile,
    SpaceKind,
    SpaceTable,
)
from .expressions import (
    BinaryExpression,
    BinaryOperator,
    ConstantValue,
    ContextField,
    EndInstructionValue,
    Next2InstructionValue,
    OperandValue,
    PatternExpression,
    PatternValue,
    StartInstructionValue,
    TokenField,
    UnaryExpression,
    UnaryOperator,
)
from .patterns import (
    CombinePattern,
    ContextPattern,
    DecisionNode,
    DecisionPair,
    DisjointPattern,
    InstructionPattern,
    MaskWord,
    PatternBlock,
)
from .symbols import (
    ContextSymbol,
    EndSymbol,
    EpsilonSymbol,
    FamilySymbol,
    FlowDestSymbol,
    FlowRefSymbol,
    NameSymbol,
    Next2Symbol,
    OperandSymbol,
    PatternlessSymbol,
    Scope,
    SpecificSymbol,
    StartSymbol,
    SubtableSymbol,
    Symbol,
    SymbolHeader,
    SymbolHeaderKind,
    SymbolTable,
    TripleSymbol,
    UserOpSymbol,
    ValueMapSymbol,
    ValueSymbol,
    VarNodeListSymbol,
    VarNodeSymbol,
)
from .templates import (
    ConstantTemplate,
    ConstructorTemplate,
    ContextualConstant,
    ContextualKind,
    HandleConstant,
    HandleSelector,
    HandleTemplate,
    OpCode,
    OperationTemplate,
    RealConstant,
    RelativeConstant,
    SpaceIdConstant,
    VarNodeTemplate,
)

__all__ = [
    # Document
    "AddressSpace",
    "AddressSpaceEntry",
    "Document",
    "SourceFile",
    "SpaceKind",
    "SpaceTable",
    # Expressions
    "BinaryExpression",
    "BinaryOperator",
    "ConstantValue",
    "ContextField",
    "EndInstructionValue",
    "Next2InstructionValue",
    "OperandValue",
    "PatternExpression",
    "PatternValue",
    "StartInstructionValue",
    "TokenField",
    "UnaryExpression",
    "UnaryOperator",
    # Constructors
    "Constructor",
    "ContextChange",
    "ContextCommit",
    "ContextOperation",
    "OperandPrint",
    "PrintPiece",
    "PrintText",
    "SourceLocation",
    # Patterns and decision trees
    "CombinePattern",
    "ContextPattern",
    "DecisionNode",
    "DecisionPair",
    "DisjointPattern",
    "InstructionPattern",
    "MaskWord",
    "PatternBlock",
    # Symbols
    "ContextSymbol",
    "EndSymbol",
    "EpsilonSymbol",
    "FamilySymbol",
    "FlowDestSymbol",
    "FlowRefSymbol",
    "NameSymbol",
    "Next2Symbol",
    "OperandSymbol",
    "PatternlessSymbol",
    "Scope",
    "SpecificSymbol",
    "StartSymbol",
    "SubtableSymbol",
    "Symbol",
    "SymbolHeader",
    "SymbolHeaderKind",
    "SymbolTable",
    "TripleSymbol",
    "UserOpSymbol",
    "ValueMapSymbol",
    "ValueSymbol",
    "VarNodeListSymbol",
    "VarNodeSymbol",
    # Templates
    "ConstantTemplate",
    "ConstructorTemplate",
    "ContextualConstant",
    "ContextualKind",
    "HandleConstant",
    "HandleSelector",
    "HandleTemplate",
    "OpCode",
    "OperationTemplate",
    "RealConstant",
    "RelativeConstant",
    "SpaceIdConstant",
    "VarNodeTemplate",
]

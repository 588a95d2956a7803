"""SINGULARIS PRIME parser.

A forgiving, position-based scanner that turns source text into a list of
AST nodes. It never raises on malformed input: unknown characters are
skipped and missing delimiters are tolerated, so the editor can show a
best-effort tree while the user is still typing.
"""

import logging

from singularis.language.ast import (
    AI_OPTIMIZATION_DIRECTIVES,
    AIOptimizationDirective,
    Annotation,
    AnnotationNode,
    Argument,
    Condition,
    ContractDeclaration,
    ContractStatement,
    Declaration,
    DeployModelDeclaration,
    EnforceStatement,
    ExecuteStatement,
    FallbackStatement,
    FunctionCall,
    FunctionDeclaration,
    ImportDeclaration,
    NamedArgument,
    QuantumKeyDeclaration,
    RequireStatement,
    ResolveParadoxDeclaration,
    SyncLedgerDeclaration,
)

logger = logging.getLogger(__name__)

# Two-character operators must be tried before their one-character prefixes
_CONDITION_OPERATORS = (">=", "<=", "==", "!=", ">", "<")


def _is_ident_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def parse_arguments(text: str) -> tuple[Argument, ...]:
    """Split an argument list on commas; ``name=value`` becomes a NamedArgument."""
    args: list[Argument] = []
    for piece in text.split(","):
        piece = piece.strip()
        if not piece:
            continue
        if "=" in piece:
            name, _, value = piece.partition("=")
            args.append(NamedArgument(name=name.strip(), value=value.strip()))
        else:
            args.append(piece)
    return tuple(args)


def parse_condition(text: str) -> Condition:
    """Split ``left OP right`` on the first operator found."""
    for operator in _CONDITION_OPERATORS:
        if operator in text:
            left, _, right = text.partition(operator)
            return Condition(left=left.strip(), operator=operator, right=right.strip())
    return Condition(left=text.strip())


class SingularisParser:
    """Parse SINGULARIS PRIME source into AST nodes."""

    def __init__(self) -> None:
        self._code = ""
        self.position = 0
        self.line = 1
        self.column = 1

    def parse(self, code: str) -> list[Declaration]:
        self._code = code
        self.position = 0
        self.line = 1
        self.column = 1

        nodes: list[Declaration] = []
        self._skip_whitespace()
        while not self._at_end():
            if self._match_keyword("import"):
                nodes.append(self._parse_import())
            elif self._peek() == "@":
                node = self._parse_annotated()
                if node is not None:
                    nodes.append(node)
            elif self._match_keyword("quantumKey"):
                nodes.append(self._parse_quantum_key())
            elif self._match_keyword("contract"):
                nodes.append(self._parse_contract())
            elif self._match_keyword("deployModel"):
                nodes.append(self._parse_deploy_model())
            elif self._match_keyword("syncLedger"):
                nodes.append(self._parse_sync_ledger())
            elif self._match_keyword("resolveParadox"):
                nodes.append(self._parse_resolve_paradox())
            elif self._match_keyword("function"):
                nodes.append(self._parse_function())
            elif self._match("//"):
                self._skip_line()
            else:
                self._advance()
            self._skip_whitespace()

        logger.debug("Parsed %d top-level nodes over %d lines", len(nodes), self.line)
        return nodes

    # ═══════════════════════════════════════════════════════════════
    # SCANNER PRIMITIVES
    # ═══════════════════════════════════════════════════════════════

    def _at_end(self) -> bool:
        return self.position >= len(self._code)

    def _peek(self) -> str:
        return "" if self._at_end() else self._code[self.position]

    def _advance(self, count: int = 1) -> None:
        for _ in range(count):
            if self._at_end():
                return
            if self._code[self.position] == "\n":
                self.line += 1
                self.column = 1
            elif self._code[self.position] != "\r":
                self.column += 1
            self.position += 1

    def _match(self, text: str) -> bool:
        if self._code.startswith(text, self.position):
            self._advance(len(text))
            return True
        return False

    def _match_keyword(self, word: str) -> bool:
        """Match ``word`` only when it is not the prefix of a longer identifier."""
        if not self._code.startswith(word, self.position):
            return False
        end = self.position + len(word)
        if end < len(self._code) and _is_ident_char(self._code[end]):
            return False
        self._advance(len(word))
        return True

    def _expect(self, char: str) -> bool:
        """Consume ``char`` if it is next. Absence is tolerated."""
        if self._peek() == char:
            self._advance()
            return True
        return False

    def _skip_whitespace(self) -> None:
        while self._peek() in (" ", "\t", "\r", "\n") and not self._at_end():
            self._advance()

    def _skip_line(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _read_until(self, char: str) -> str:
        start = self.position
        while not self._at_end() and self._peek() != char:
            self._advance()
        return self._code[start:self.position]

    def _skip_statement(self) -> None:
        """Skip to and past the next ``;``."""
        self._read_until(";")
        self._advance()

    def _identifier(self) -> str:
        start = self.position
        while not self._at_end() and _is_ident_char(self._peek()):
            self._advance()
        return self._code[start:self.position]

    def _string(self) -> str:
        delimiter = self._peek()
        self._advance()
        chars: list[str] = []
        while not self._at_end() and self._peek() != delimiter:
            if self._peek() == "\\":
                self._advance()
                if self._at_end():
                    break
            chars.append(self._peek())
            self._advance()
        self._advance()
        return "".join(chars)

    def _balanced(self, open_char: str, close_char: str) -> str:
        """Read a balanced group after its opening delimiter has been consumed."""
        start = self.position
        depth = 1
        while not self._at_end():
            char = self._peek()
            if char == open_char:
                depth += 1
            elif char == close_char:
                depth -= 1
                if depth == 0:
                    text = self._code[start:self.position]
                    self._advance()
                    return text
            self._advance()
        return self._code[start:self.position]

    def _call_arguments(self) -> tuple[Argument, ...]:
        if not self._expect("("):
            return ()
        text = self._read_until(")")
        self._expect(")")
        return parse_arguments(text)

    # ═══════════════════════════════════════════════════════════════
    # DECLARATIONS
    # ═══════════════════════════════════════════════════════════════

    def _parse_annotation(self) -> AnnotationNode:
        line, column = self.line, self.column
        self._expect("@")
        name = self._identifier()
        self._skip_whitespace()
        parameters = None
        if self._expect("("):
            parameters = self._balanced("(", ")")

        if name in AI_OPTIMIZATION_DIRECTIVES:
            return AIOptimizationDirective(
                directive=name, parameters=parameters, line=line, column=column
            )
        return Annotation(name=name, parameters=parameters)

    def _parse_annotated(self) -> Declaration | None:
        annotations: list[AnnotationNode] = []
        while self._peek() == "@":
            annotations.append(self._parse_annotation())
            self._skip_whitespace()
            # Comments between annotations and their target are allowed
            while self._match("//"):
                self._skip_line()
                self._skip_whitespace()

        attached = tuple(annotations)
        if self._match_keyword("quantumKey"):
            node = self._parse_quantum_key()
            return QuantumKeyDeclaration(node.name, node.parameters, attached)
        if self._match_keyword("contract"):
            contract = self._parse_contract()
            return ContractDeclaration(contract.name, contract.body, attached)
        if self._match_keyword("deployModel"):
            deploy = self._parse_deploy_model()
            return DeployModelDeclaration(deploy.name, deploy.location, deploy.body, attached)
        if self._match_keyword("function"):
            func = self._parse_function()
            return FunctionDeclaration(func.name, func.parameters, attached)

        logger.debug("Dropping annotations with no declaration at line %d", self.line)
        self._skip_statement()
        return None

    def _parse_import(self) -> ImportDeclaration:
        self._skip_whitespace()
        path = ""
        if self._peek() in ('"', "'"):
            path = self._string()
        self._skip_statement()
        return ImportDeclaration(path=path)

    def _parse_quantum_key(self) -> QuantumKeyDeclaration:
        self._skip_whitespace()
        name = self._identifier()
        self._skip_whitespace()
        self._expect("=")
        self._skip_whitespace()

        parameters: list[str] = []
        if self._match_keyword("entangle"):
            self._skip_whitespace()
            if self._expect("("):
                self._skip_whitespace()
                parameters.append(self._identifier())
                self._skip_whitespace()
                self._expect(",")
                self._skip_whitespace()
                parameters.append(self._identifier())
                self._skip_whitespace()
                self._expect(")")
        self._skip_statement()
        return QuantumKeyDeclaration(name=name, parameters=tuple(parameters))

    def _parse_function_call(self) -> FunctionCall:
        name = self._identifier()
        self._skip_whitespace()
        arguments = self._call_arguments()
        self._skip_statement()
        return FunctionCall(name=name, arguments=arguments)

    def _parse_block_start(self) -> str:
        self._skip_whitespace()
        name = self._identifier()
        self._skip_whitespace()
        return name

    def _parse_contract(self) -> ContractDeclaration:
        name = self._parse_block_start()
        self._expect("{")
        self._skip_whitespace()

        body: list[ContractStatement] = []
        while not self._at_end() and self._peek() != "}":
            if self._match_keyword("enforce"):
                self._skip_whitespace()
                body.append(EnforceStatement(function_call=self._parse_function_call()))
            elif self._match_keyword("require"):
                self._skip_whitespace()
                body.append(RequireStatement(identifier=self._identifier()))
                self._skip_statement()
            elif self._match_keyword("execute"):
                self._skip_whitespace()
                body.append(ExecuteStatement(function_call=self._parse_function_call()))
            elif self._match("//"):
                self._skip_line()
            else:
                self._advance()
            self._skip_whitespace()

        self._expect("}")
        return ContractDeclaration(name=name, body=tuple(body))

    def _parse_deploy_model(self) -> DeployModelDeclaration:
        name = self._parse_block_start()
        if self._match_keyword("to"):
            self._skip_whitespace()
        location = self._identifier()
        self._skip_whitespace()
        self._expect("{")
        self._skip_whitespace()

        body: list[FunctionCall | FallbackStatement] = []
        while not self._at_end() and self._peek() != "}":
            if self._match_keyword("monitorAuditTrail"):
                self._skip_whitespace()
                self._call_arguments()
                self._skip_statement()
                body.append(FunctionCall(name="monitorAuditTrail"))
            elif self._match_keyword("fallbackToHuman"):
                self._skip_whitespace()
                if self._match_keyword("if"):
                    self._skip_whitespace()
                condition = parse_condition(self._read_until(";"))
                self._skip_statement()
                body.append(FallbackStatement(condition=condition))
            elif self._match("//"):
                self._skip_line()
            else:
                self._advance()
            self._skip_whitespace()

        self._expect("}")
        return DeployModelDeclaration(name=name, location=location, body=tuple(body))

    def _parse_sync_ledger(self) -> SyncLedgerDeclaration:
        name = self._parse_block_start()
        self._expect("{")
        self._skip_whitespace()

        body: list[FunctionCall] = []
        while not self._at_end() and self._peek() != "}":
            if self._match_keyword("adaptiveLatency"):
                self._skip_whitespace()
                arguments = self._call_arguments()
                self._skip_statement()
                body.append(FunctionCall(name="adaptiveLatency", arguments=arguments))
            elif self._match_keyword("validateZeroKnowledgeProofs"):
                self._skip_whitespace()
                self._call_arguments()
                self._skip_statement()
                body.append(FunctionCall(name="validateZeroKnowledgeProofs"))
            elif self._match("//"):
                self._skip_line()
            else:
                self._advance()
            self._skip_whitespace()

        self._expect("}")
        return SyncLedgerDeclaration(name=name, body=tuple(body))

    def _parse_resolve_paradox(self) -> ResolveParadoxDeclaration:
        data_name = self._parse_block_start()
        if self._match_keyword("using"):
            self._skip_whitespace()
        method_name = self._identifier()
        self._skip_whitespace()
        arguments = self._call_arguments()
        self._skip_statement()
        return ResolveParadoxDeclaration(
            data_name=data_name,
            method=FunctionCall(name=method_name, arguments=arguments),
        )

    def _parse_function(self) -> FunctionDeclaration:
        name = self._parse_block_start()
        if not self._expect("("):
            return FunctionDeclaration(name=name)

        params = tuple(p.strip() for p in self._read_until(")").split(",") if p.strip())
        self._expect(")")
        self._skip_whitespace()
        if self._expect("{"):
            self._balanced("{", "}")
        return FunctionDeclaration(name=name, parameters=params)


def parse_program(code: str) -> list[Declaration]:
    """Parse source text with a fresh parser."""
    return SingularisParser().parse(code)

"""
SimpleLang Recursive Descent Parser and Code Generator
======================================================

Parsing and code generation happen in a single pass. There is no syntax
tree: each grammar procedure consumes tokens from the lexer and, as it
recognises a construct, resolves symbols, allocates labels and appends
instructions to the emitter.

Grammar (EBNF)
--------------
program     ::= statement* EOF
statement   ::= 'int' IDENTIFIER ';'
              | IDENTIFIER '=' expression ';'
              | 'if' '(' IDENTIFIER '==' (IDENTIFIER | NUMBER) ')'
                '{' statement* '}'
              | ';'
expression  ::= operand (('+' | '-') operand)?
operand     ::= NUMBER | IDENTIFIER

Code Shapes
-----------
Assignment ``t = a + b`` (first operand, optional operator, store):

    LDI n | LDA a_v
    [ADDI m | SUBI m | ADD a_w | SUB a_w]
    STA a_t

If statement ``if (x == y) { body }``:

    LDA a_x
    SUBI n | SUB a_y
    JZ Ltrue
    JMP Lend
    Ltrue:
    ...body...
    Lend:

Addresses are resolved in the order they are emitted, so in ``a = b;``
with neither name seen before, ``b`` is allocated first.

Error Handling
--------------
The first token that does not fit raises an UnexpectedTokenError naming
the expected construct; end of input inside a block raises an
UnterminatedBlockError. There is no recovery.
"""

from typing import Optional

from simplelang.emitter import (
    AssemblyEmitter,
    LDI,
    LDA,
    STA,
    ADD,
    ADDI,
    SUB,
    SUBI,
    JZ,
    JMP,
)
from simplelang.errors import UnexpectedTokenError, UnterminatedBlockError
from simplelang.lexer import Lexer, Token, TokenType
from simplelang.symbols import SymbolTable


# Register-operand and immediate forms of each arithmetic operator
OPERATOR_MNEMONICS: dict[TokenType, tuple[str, str]] = {
    TokenType.PLUS: (ADD, ADDI),
    TokenType.MINUS: (SUB, SUBI),
}


class Parser:
    """
    Single-pass recursive descent compiler for SimpleLang.

    The parser owns no state of its own beyond references to the
    per-compilation lexer, symbol table and emitter it is given.

    Attributes:
        lexer: Token source (with one-token pushback)
        symbols: Symbol table for address allocation
        emitter: Destination for generated assembly
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        lexer: Lexer,
        symbols: SymbolTable,
        emitter: AssemblyEmitter,
        source_lines: Optional[list[str]] = None,
    ):
        self.lexer = lexer
        self.symbols = symbols
        self.emitter = emitter
        self.source_lines = source_lines or []

    def parse(self) -> None:
        """
        Compile every statement up to end of input.

        Raises:
            SimpleLangSyntaxError: On the first malformed construct
            CapacityError: If a variable or output limit is exceeded
        """
        while True:
            token = self.lexer.next_token()
            if token.type == TokenType.EOF:
                return
            self.lexer.push_back(token)
            self._compile_statement()

    # =========================================================================
    # Token Helpers
    # =========================================================================

    def _get_source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _unexpected(self, token: Token, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            expected,
            token.describe(),
            token.location,
            self._get_source_line(token.line),
        )

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        """
        Consume the next token, which must be of ``token_type``.

        Raises:
            UnexpectedTokenError: Naming ``expected`` and the token found
        """
        token = self.lexer.next_token()
        if token.type != token_type:
            raise self._unexpected(token, expected)
        return token

    def _resolve(self, token: Token) -> int:
        """Address of the variable named by ``token``."""
        return self.symbols.resolve(
            token.text,
            token.location,
            self._get_source_line(token.line),
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def _compile_statement(self) -> None:
        token = self.lexer.next_token()

        if token.type == TokenType.INT:
            self._compile_declaration()
        elif token.type == TokenType.IDENTIFIER:
            self._compile_assignment(token)
        elif token.type == TokenType.IF:
            self._compile_if()
        elif token.type == TokenType.SEMICOLON:
            pass  # empty statement
        else:
            raise self._unexpected(token, "statement")

    def _compile_declaration(self) -> None:
        """'int' IDENTIFIER ';' -- allocates storage, emits nothing."""
        name = self._expect(TokenType.IDENTIFIER, "identifier after 'int'")
        self._resolve(name)
        self._expect(TokenType.SEMICOLON, "';' after variable declaration")

    def _compile_assignment(self, target: Token) -> None:
        """IDENTIFIER '=' expression ';'"""
        self._expect(TokenType.ASSIGN, "'=' after identifier")
        self._compile_expression(target)
        self._expect(TokenType.SEMICOLON, "';' after assignment")

    def _compile_expression(self, target: Token) -> None:
        """Evaluate an expression into the accumulator and store it to ``target``."""
        first = self.lexer.next_token()
        if first.type == TokenType.NUMBER:
            self.emitter.emit_instruction(LDI, first.text)
        elif first.type == TokenType.IDENTIFIER:
            self.emitter.emit_instruction(LDA, self._resolve(first))
        else:
            raise self._unexpected(first, "identifier or number in expression")

        operator = self.lexer.next_token()
        if operator.type in OPERATOR_MNEMONICS:
            self._compile_operand(operator)
        else:
            # Belongs to the enclosing statement
            self.lexer.push_back(operator)

        self.emitter.emit_instruction(STA, self._resolve(target))

    def _compile_operand(self, operator: Token) -> None:
        """Right-hand operand of '+' or '-'."""
        register_form, immediate_form = OPERATOR_MNEMONICS[operator.type]
        operand = self.lexer.next_token()
        if operand.type == TokenType.NUMBER:
            self.emitter.emit_instruction(immediate_form, operand.text)
        elif operand.type == TokenType.IDENTIFIER:
            self.emitter.emit_instruction(register_form, self._resolve(operand))
        else:
            raise self._unexpected(operand, "number or identifier after operator")

    def _compile_if(self) -> None:
        """
        'if' '(' IDENTIFIER '==' (IDENTIFIER | NUMBER) ')' '{' statement* '}'

        The comparison subtracts the right side from the left; a zero
        result jumps into the body, anything else jumps past it.
        """
        self._expect(TokenType.LPAREN, "'(' after 'if'")
        lhs = self._expect(TokenType.IDENTIFIER, "identifier in if condition")
        self._expect(TokenType.EQUAL, "'==' in if condition")

        rhs = self.lexer.next_token()
        if rhs.type not in (TokenType.IDENTIFIER, TokenType.NUMBER):
            raise self._unexpected(rhs, "identifier or number in if condition")

        self._expect(TokenType.RPAREN, "')' after if condition")
        self._expect(TokenType.LBRACE, "'{' after if condition")

        true_label, end_label = self.emitter.new_label_pair()

        self.emitter.emit_instruction(LDA, self._resolve(lhs))
        if rhs.type == TokenType.NUMBER:
            self.emitter.emit_instruction(SUBI, rhs.text)
        else:
            self.emitter.emit_instruction(SUB, self._resolve(rhs))
        self.emitter.emit_instruction(JZ, true_label)
        self.emitter.emit_instruction(JMP, end_label)
        self.emitter.emit_label(true_label)

        self._compile_block()

        self.emitter.emit_label(end_label)

    def _compile_block(self) -> None:
        """statement* '}' -- the opening brace has already been consumed."""
        while True:
            token = self.lexer.next_token()
            if token.type == TokenType.RBRACE:
                return
            if token.type == TokenType.EOF:
                raise UnterminatedBlockError(
                    token.location,
                    self._get_source_line(token.line),
                )
            self.lexer.push_back(token)
            self._compile_statement()

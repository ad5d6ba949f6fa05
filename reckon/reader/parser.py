"""
  reckon Reader: recursive-descent parser

- No separate token buffer: the parser advances a cursor over the source and
  recognises tokens on demand.
- Spaces and tabs separate tokens inside a statement; newlines, carriage
  returns and ';' separate statements; '#' starts a comment running to the
  end of the line.
- Emits the frozen node classes of reckon.types.ast:

    - 42, 3.5              -> Number
    - pi e tau true false  -> Constant
    - name                 -> Variable
    - f(a, b)              -> FuncCall
    - x => body            -> Lambda (shorthand, one parameter)
    - (x, y) => body       -> Lambda (decided by lookahead, else a group)
    - if c then a else b   -> Conditional
    - name = expr          -> Assignment
    - def f(x) = expr      -> FuncDef

Every ReckonSyntaxError carries the byte offset of the offending token.
"""

from __future__ import annotations

import re
from typing import Optional

from reckon.errors import ReckonSyntaxError
from reckon.types.ast import (
    Expr, Stmt, Program,
    Number, Constant, Variable, BinOp, UnaryOp, FuncCall, Conditional, Lambda,
    Assignment, FuncDef, ExprStmt,
)
from reckon.types.operators import BinaryOperator, UnaryOperator
from reckon.builtin.env_builtin import CONSTANTS


IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")

KEYWORDS = frozenset({"if", "then", "else", "def", "and", "or", "not", "true", "false"})

INLINE_SPACE = " \t"
STATEMENT_SEPARATORS = "\n\r;"

COMPARISONS = [
    ("<=", BinaryOperator.LE),
    (">=", BinaryOperator.GE),
    ("<", BinaryOperator.LT),
    (">", BinaryOperator.GT),
]


class Parser:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    # ----------------------
    # Entry points
    # ----------------------
    def parse(self) -> Expr:
        """Parse the whole source as a single expression."""
        self._skip_all_whitespace()
        if self._at_end():
            raise self._error("Empty expression")
        expr = self.expression()
        self._skip_all_whitespace()
        if not self._at_end():
            raise self._error(f"Unexpected character {self._current()!r}")
        return expr

    def parse_program(self) -> Program:
        """Parse statements separated by newlines or semicolons."""
        statements: list[Stmt] = []
        self._skip_separators()
        while not self._at_end():
            statements.append(self.statement())
            self._skip_inline()
            current = self._current()
            if current is None:
                break
            if current in STATEMENT_SEPARATORS:
                self._skip_separators()
                continue
            if current == "=":
                raise self._error("Unexpected '='; use '==' to compare values")
            raise self._error(f"Unexpected {current!r} after statement")
        if not statements:
            raise ReckonSyntaxError("Empty program", 0)
        return Program(tuple(statements))

    # ----------------------
    # Statements
    # ----------------------
    def statement(self) -> Stmt:
        self._skip_inline()
        start = self.pos
        if self._match_keyword("def"):
            return self._funcdef()

        name = self._identifier()
        if name is not None:
            self._skip_inline()
            if self._at_assign():
                if name in KEYWORDS:
                    raise self._error_at(start, f"Keyword '{name}' cannot be used as a name")
                self.pos += 1
                return Assignment(name, self.expression())
            self.pos = start

        return ExprStmt(self.expression())

    def _funcdef(self) -> FuncDef:
        # funcdef ::= 'def' ident '(' [ idlist ] ')' '=' expr
        self._skip_inline()
        name = self._expect_name("function name")
        self._skip_inline()
        if not self._consume("("):
            raise self._error("Expected '(' after function name")
        params = self._parameters()
        self._skip_inline()
        if self._startswith("=>"):
            raise self._error("'=>' cannot introduce a def body; use '='")
        if not self._at_assign():
            raise self._error("Expected '=' after parameter list")
        self.pos += 1
        return FuncDef(name, params, self.expression())

    def _parameters(self) -> tuple[str, ...]:
        """Strict idlist after '(' up to and including ')'."""
        params: list[str] = []
        self._skip_inline()
        if self._consume(")"):
            return ()
        while True:
            self._skip_inline()
            pos = self.pos
            name = self._expect_name("parameter name")
            self._check_parameter(name, params, pos)
            params.append(name)
            self._skip_inline()
            if self._consume(","):
                continue
            if self._consume(")"):
                return tuple(params)
            raise self._error("Expected ',' or ')' in parameter list")

    def _check_parameter(self, name: str, seen: list[str], pos: int) -> None:
        if name in seen:
            raise self._error_at(pos, f"Duplicate parameter name '{name}'")
        if name in CONSTANTS:
            raise self._error_at(pos, f"Constant '{name}' cannot be used as a parameter")

    # ----------------------
    # Expressions, lowest precedence first
    # ----------------------
    def expression(self) -> Expr:
        return self._logical_or()

    def _logical_or(self) -> Expr:
        left = self._logical_and()
        while True:
            self._skip_inline()
            if self._consume("||") or self._match_keyword("or"):
                left = BinOp(BinaryOperator.OR, left, self._logical_and())
            else:
                return left

    def _logical_and(self) -> Expr:
        left = self._equality()
        while True:
            self._skip_inline()
            if self._consume("&&") or self._match_keyword("and"):
                left = BinOp(BinaryOperator.AND, left, self._equality())
            else:
                return left

    def _equality(self) -> Expr:
        left = self._compare()
        while True:
            self._skip_inline()
            if self._consume("=="):
                left = BinOp(BinaryOperator.EQ, left, self._compare())
            elif self._consume("!="):
                left = BinOp(BinaryOperator.NE, left, self._compare())
            else:
                return left

    def _compare(self) -> Expr:
        left = self._term()
        while True:
            self._skip_inline()
            for text, op in COMPARISONS:
                if self._consume(text):
                    left = BinOp(op, left, self._term())
                    break
            else:
                return left

    def _term(self) -> Expr:
        left = self._factor()
        while True:
            self._skip_inline()
            if self._consume("+"):
                left = BinOp(BinaryOperator.ADD, left, self._factor())
            elif self._consume("-"):
                left = BinOp(BinaryOperator.SUB, left, self._factor())
            else:
                return left

    def _factor(self) -> Expr:
        left = self._power()
        while True:
            self._skip_inline()
            if self._current() == "*" and not self._startswith("**"):
                self.pos += 1
                left = BinOp(BinaryOperator.MUL, left, self._power())
            elif self._consume("/"):
                left = BinOp(BinaryOperator.DIV, left, self._power())
            elif self._consume("%"):
                left = BinOp(BinaryOperator.MOD, left, self._power())
            else:
                return left

    def _power(self) -> Expr:
        # power ::= unary [ ('^' | '**') power ]   (right-associative)
        base = self._unary()
        self._skip_inline()
        if self._consume("^") or self._consume("**"):
            return BinOp(BinaryOperator.POW, base, self._power())
        return base

    def _unary(self) -> Expr:
        self._skip_inline()
        if self._match_keyword("not"):
            return UnaryOp(UnaryOperator.NOT, self._unary())
        if self._current() == "!" and not self._startswith("!="):
            self.pos += 1
            return UnaryOp(UnaryOperator.NOT, self._unary())
        if self._consume("-"):
            return UnaryOp(UnaryOperator.NEG, self._unary())
        return self._call()

    def _call(self) -> Expr:
        self._skip_inline()
        start = self.pos
        name = self._identifier()
        if name is None:
            return self._primary()

        if name in KEYWORDS:
            if name == "if":
                return self._conditional()
            if name in ("true", "false"):
                return Constant(name)
            raise self._error_at(start, f"Unexpected keyword '{name}'")

        self._skip_inline()
        if self._consume("("):
            return FuncCall(name, self._arguments(start))
        if self._startswith("=>"):
            self._check_parameter(name, [], start)
            self.pos += 2
            return Lambda((name,), self.expression())
        if name in CONSTANTS:
            return Constant(name)
        return Variable(name)

    def _arguments(self, call_start: int) -> tuple[Expr, ...]:
        args: list[Expr] = []
        self._skip_inline()
        if self._consume(")"):
            return ()
        while True:
            args.append(self.expression())
            self._skip_inline()
            if self._consume(","):
                continue
            if self._consume(")"):
                return tuple(args)
            if self._at_statement_end():
                raise self._error_at(call_start, "Unterminated argument list")
            raise self._error(f"Expected ',' or ')' but found {self._current()!r}")

    def _conditional(self) -> Conditional:
        # conditional ::= 'if' expr 'then' expr 'else' expr
        cond = self.expression()
        self._skip_inline()
        if not self._match_keyword("then"):
            raise self._error("Expected 'then' in conditional")
        then = self.expression()
        self._skip_inline()
        if not self._match_keyword("else"):
            raise self._error("Expected 'else' in conditional")
        return Conditional(cond, then, self.expression())

    def _primary(self) -> Expr:
        self._skip_inline()
        current = self._current()
        if current is None or current in STATEMENT_SEPARATORS:
            raise self._error("Unexpected end of expression")

        if m := NUMBER_RE.match(self.source, self.pos):
            self.pos = m.end()
            return Number(float(m.group()))

        if current == "(":
            open_pos = self.pos
            self.pos += 1
            params = self._lambda_parameters()
            if params is not None:
                return Lambda(params, self.expression())
            self._skip_inline()
            if self._current() == ")":
                raise self._error("Empty parentheses are only allowed before '=>'")
            expr = self.expression()
            self._skip_inline()
            if self._consume(")"):
                return expr
            if self._at_statement_end():
                raise self._error_at(open_pos, "Unterminated parenthesis")
            raise self._error(f"Expected ')' but found {self._current()!r}")

        raise self._error(f"Unexpected character {current!r}")

    def _lambda_parameters(self) -> Optional[tuple[str, ...]]:
        """Tentatively read `[idlist] ')' '=>'` after '('.

        Returns None and rewinds when the parenthesis turns out to be an
        ordinary group.
        """
        start = self.pos
        params: list[tuple[str, int]] = []
        self._skip_inline()
        if not self._consume(")"):
            while True:
                self._skip_inline()
                pos = self.pos
                name = self._identifier()
                if name is None or name in KEYWORDS:
                    self.pos = start
                    return None
                params.append((name, pos))
                self._skip_inline()
                if self._consume(","):
                    continue
                if self._consume(")"):
                    break
                self.pos = start
                return None
        self._skip_inline()
        if not self._consume("=>"):
            self.pos = start
            return None

        names: list[str] = []
        for name, pos in params:
            self._check_parameter(name, names, pos)
            names.append(name)
        return tuple(names)

    # ----------------------
    # Tokens
    # ----------------------
    def _identifier(self) -> Optional[str]:
        m = IDENT_RE.match(self.source, self.pos)
        if not m:
            return None
        self.pos = m.end()
        return m.group()

    def _expect_name(self, what: str) -> str:
        start = self.pos
        name = self._identifier()
        if name is None:
            raise self._error(f"Expected {what}")
        if name in KEYWORDS:
            raise self._error_at(start, f"Keyword '{name}' cannot be used as a name")
        return name

    def _match_keyword(self, word: str) -> bool:
        m = IDENT_RE.match(self.source, self.pos)
        if m and m.group() == word:
            self.pos = m.end()
            return True
        return False

    def _at_assign(self) -> bool:
        # a single '=' that is neither '==' nor '=>'
        return (self._current() == "="
                and not self._startswith("==")
                and not self._startswith("=>"))

    def _consume(self, text: str) -> bool:
        if self.source.startswith(text, self.pos):
            self.pos += len(text)
            return True
        return False

    def _startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def _current(self) -> Optional[str]:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _at_statement_end(self) -> bool:
        current = self._current()
        return current is None or current in STATEMENT_SEPARATORS

    # ----------------------
    # Whitespace and comments
    # ----------------------
    def _skip_comment(self) -> bool:
        if self._current() != "#":
            return False
        end = self.source.find("\n", self.pos)
        self.pos = len(self.source) if end == -1 else end
        return True

    def _skip_inline(self) -> None:
        while not self._at_end():
            if self.source[self.pos] in INLINE_SPACE:
                self.pos += 1
            elif not self._skip_comment():
                return

    def _skip_separators(self) -> None:
        while not self._at_end():
            if self.source[self.pos] in INLINE_SPACE or self.source[self.pos] in STATEMENT_SEPARATORS:
                self.pos += 1
            elif not self._skip_comment():
                return

    def _skip_all_whitespace(self) -> None:
        while not self._at_end():
            if self.source[self.pos] in " \t\r\n":
                self.pos += 1
            elif not self._skip_comment():
                return

    # ----------------------
    # Errors
    # ----------------------
    def _byte_offset(self, pos: int) -> int:
        return len(self.source[:pos].encode("utf-8"))

    def _error_at(self, pos: int, message: str) -> ReckonSyntaxError:
        return ReckonSyntaxError(message, self._byte_offset(pos))

    def _error(self, message: str) -> ReckonSyntaxError:
        return self._error_at(self.pos, message)


def parse(source: str) -> Expr:
    return Parser(source).parse()


def parse_program(source: str) -> Program:
    return Parser(source).parse_program()

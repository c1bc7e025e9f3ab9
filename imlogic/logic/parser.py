"""
Parser for textual constraint logic such as ``"A and (B or C) and D"``.

Grammar, with AND binding tighter than OR::

    expr    := term (OR term)*
    term    := factor (AND factor)*
    factor  := CODE | '(' expr ')'

Keywords are case-insensitive; ``&``/``&&`` and ``|``/``||`` are accepted as
AND and OR. Codes are upper-case letters.
"""

import re
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional

from imlogic.errors import LogicSyntaxError, UnknownConstraintCodeError
from imlogic.logging_config import get_logger

from .codes import is_valid_code
from .nodes import And, Leaf, LogicNode, Or

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"\s*(?:(\()|(\))|(&&?)|(\|\|?)|([A-Za-z0-9_]+)|(\S))")


class TokenKind(str, Enum):
    CODE = "code"
    AND = "and"
    OR = "or"
    LPAREN = "("
    RPAREN = ")"
    END = "end"


class Token(NamedTuple):
    kind: TokenKind
    value: str
    position: int


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into tokens, raising LogicSyntaxError on invalid input."""
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            # only trailing whitespace remains
            break
        lparen, rparen, amp, bar, word, other = match.groups()
        start = match.start(match.lastindex)
        pos = match.end()
        if lparen:
            tokens.append(Token(TokenKind.LPAREN, lparen, start))
        elif rparen:
            tokens.append(Token(TokenKind.RPAREN, rparen, start))
        elif amp:
            tokens.append(Token(TokenKind.AND, amp, start))
        elif bar:
            tokens.append(Token(TokenKind.OR, bar, start))
        elif word:
            lowered = word.lower()
            if lowered == "and":
                tokens.append(Token(TokenKind.AND, word, start))
            elif lowered == "or":
                tokens.append(Token(TokenKind.OR, word, start))
            elif is_valid_code(word):
                tokens.append(Token(TokenKind.CODE, word, start))
            else:
                raise LogicSyntaxError(f"Invalid constraint code {word!r}", text, start)
        else:
            raise LogicSyntaxError(f"Unexpected character {other!r}", text, start)
    tokens.append(Token(TokenKind.END, "", len(text)))
    return tokens


_PRECEDENCE = {TokenKind.OR: 1, TokenKind.AND: 2}
_NODE_TYPES = {TokenKind.OR: Or, TokenKind.AND: And}


class _Parser:
    """
    Operator-precedence parser over a token list.

    Operands and pending operators live on explicit stacks, so parenthesis
    nesting depth is not limited by the interpreter's recursion limit.
    """

    def __init__(self, text: str, tokens: List[Token]):
        self.text = text
        self.tokens = tokens
        self.operands: List[LogicNode] = []
        self.operators: List[Token] = []

    def error(self, message: str, token: Token) -> LogicSyntaxError:
        return LogicSyntaxError(message, self.text, token.position)

    def reduce(self) -> None:
        operator = self.operators.pop()
        right = self.operands.pop()
        left = self.operands.pop()
        self.operands.append(_NODE_TYPES[operator.kind](left, right))

    def push_operator(self, token: Token) -> None:
        # left-associative: reduce anything of equal or higher precedence
        while (
            self.operators
            and self.operators[-1].kind != TokenKind.LPAREN
            and _PRECEDENCE[self.operators[-1].kind] >= _PRECEDENCE[token.kind]
        ):
            self.reduce()
        self.operators.append(token)

    def parse(self) -> LogicNode:
        expect_operand = True
        previous = None
        for token in self.tokens:
            if expect_operand:
                if token.kind == TokenKind.CODE:
                    self.operands.append(Leaf(token.value))
                    expect_operand = False
                elif token.kind == TokenKind.LPAREN:
                    self.operators.append(token)
                elif token.kind in (TokenKind.AND, TokenKind.OR):
                    raise self.error(f"Dangling operator {token.value!r}", token)
                elif token.kind == TokenKind.RPAREN:
                    raise self.error("Expected a constraint code before ')'", token)
                elif previous is not None and previous.kind in (TokenKind.AND, TokenKind.OR):
                    raise self.error(f"Dangling operator {previous.value!r}", previous)
                else:
                    raise self.error("Unexpected end of expression", token)
            elif token.kind in (TokenKind.AND, TokenKind.OR):
                self.push_operator(token)
                expect_operand = True
            elif token.kind == TokenKind.RPAREN:
                while self.operators and self.operators[-1].kind != TokenKind.LPAREN:
                    self.reduce()
                if not self.operators:
                    raise self.error("Unmatched ')'", token)
                self.operators.pop()
            elif token.kind == TokenKind.END:
                while self.operators:
                    if self.operators[-1].kind == TokenKind.LPAREN:
                        raise self.error("Unmatched '('", self.operators[-1])
                    self.reduce()
                return self.operands[0]
            else:
                raise self.error(f"Missing operator before {token.value!r}", token)
            previous = token
        raise self.error("Unexpected end of expression", self.tokens[-1])


def parse_logic(text: str, codes: Optional[Iterable[str]] = None) -> LogicNode:
    """
    Parse a textual logic expression into a logic tree.

    Args:
        text: Expression such as ``"A and (B or C)"``
        codes: Optional set of known constraint codes to check against

    Returns:
        The root logic node

    Raises:
        LogicSyntaxError: If the expression is malformed
        UnknownConstraintCodeError: If ``codes`` is given and the expression
            references codes outside it
    """
    if not isinstance(text, str):
        raise LogicSyntaxError(f"Logic expression must be a string, not {type(text).__name__}")
    if not text.strip():
        raise LogicSyntaxError("Empty logic expression", text, 0)

    try:
        node = _Parser(text, tokenize(text)).parse()
    except LogicSyntaxError as e:
        logger.debug("Rejected logic expression: %s", e)
        raise

    if codes is not None:
        known = set(codes)
        unknown = [code for code in node.codes() if code not in known]
        if unknown:
            raise UnknownConstraintCodeError(unknown, text)

    logger.debug("Parsed logic expression %r", text)
    return node

"""Lexer for EDN-style function arguments."""

import ply.lex as lex


class ArgLexer:
    """Lexer for tokenizing function argument lists like ``[?x :foo/bar 42]``."""

    # Token list
    tokens = [
        "INST_TAG",
        "UUID_TAG",
        "VARIABLE",
        "SRC_VAR",
        "KEYWORD",
        "TRUE",
        "FALSE",
        "FLOAT",
        "BIGINT",
        "INTEGER",
        "STRING",
        "LBRACKET",
        "RBRACKET",
    ]

    # Simple tokens
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"

    # Commas are whitespace in EDN
    t_ignore = " \t\r,"

    t_ignore_COMMENT = r";[^\n]*"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_INST_TAG(self, t: lex.LexToken) -> lex.LexToken:
        r"\#inst\b"
        return t

    def t_UUID_TAG(self, t: lex.LexToken) -> lex.LexToken:
        r"\#uuid\b"
        return t

    def t_VARIABLE(self, t: lex.LexToken) -> lex.LexToken:
        r"\?[a-zA-Z_*!<>=+.-][a-zA-Z0-9_*!?<>=+./-]*"
        return t

    def t_SRC_VAR(self, t: lex.LexToken) -> lex.LexToken:
        r"\$[a-zA-Z0-9_*!?<>=+.-]*"
        return t

    def t_KEYWORD(self, t: lex.LexToken) -> lex.LexToken:
        r":[a-zA-Z_*!?<>=+.-][a-zA-Z0-9_*!?<>=+./-]*"
        return t

    def t_TRUE(self, t: lex.LexToken) -> lex.LexToken:
        r"true\b"
        t.value = True
        return t

    def t_FALSE(self, t: lex.LexToken) -> lex.LexToken:
        r"false\b"
        t.value = False
        return t

    def t_FLOAT(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+]?\d+(?:\.\d+(?:[eE][-+]?\d+)?|[eE][-+]?\d+)"
        t.value = float(t.value)
        return t

    def t_BIGINT(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+]?\d+N"
        t.value = int(t.value[:-1])
        return t

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+]?\d+"
        t.value = int(t.value)
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"'
        # Remove quotes and handle escapes
        t.value = t.value[1:-1].encode("latin-1", "backslashreplace").decode("unicode_escape")
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens

"""
Parser and packer for the dialogue script text format.

A script is a sequence of entries. Each entry starts with a ``[KEY]`` header
line, followed by its body up to the next header:

    [MID_TALK_01]
    $Window(PID_001)Hello there.$Wait(30)
    $Animation(PID_002, Nod)Fine.

In bodies, ``$Name(arg, ...)`` is a command and everything else is text.
``\\`` escapes the next character in text. Arguments are bare words or
double-quoted strings with ``\\"``, ``\\\\`` and ``\\n`` escapes.
"""

import re
from typing import List, Tuple

from .tokens import (
    ALIAS_COMMAND,
    ANIMATION_COMMAND,
    WINDOW_COMMAND,
    Alias,
    Animation,
    Other,
    Token,
    TokenStream,
    Window,
)

COMMAND_SIGIL = "$"
ESCAPE = "\\"
QUOTE = '"'
BOM = "\ufeff"

RE_COMMAND_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
RE_BARE_ARG = re.compile(r"[A-Za-z0-9_.+\-]+")

# Characters that end a bare argument
_BARE_STOP = frozenset(",()\"\n \t")
_ARG_SPACE = " \t"


class ScriptParseError(ValueError):
    """Raised when script text does not follow the script grammar."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} (line {line}, column {column})")
        self.message = message
        self.line = line
        self.column = column


# =============================================================================
# Parsing
# =============================================================================

def parse(source: str) -> TokenStream:
    """Parse script text into a token stream.

    A leading byte order mark is dropped and CRLF line endings are read as
    LF, so packing a parsed Windows file yields LF text.

    Raises:
        ScriptParseError: If the text is malformed
    """
    if source.startswith(BOM):
        source = source[len(BOM):]
    source = source.replace("\r\n", "\n")

    # The final newline terminates the last entry
    if source.endswith("\n"):
        source = source[:-1]

    stream = TokenStream()
    if not source:
        return stream

    current_key: str | None = None
    body_lines: List[str] = []
    body_line = 0

    for line_no, line in enumerate(source.split("\n"), start=1):
        if line.startswith("["):
            if current_key is not None:
                stream.entries[current_key] = _tokenize("\n".join(body_lines), body_line)
            current_key = _parse_header(line, line_no, stream)
            body_lines = []
            body_line = line_no + 1
        elif current_key is None:
            if line.strip():
                raise ScriptParseError("text outside of an entry", line_no, 1)
        else:
            body_lines.append(line)

    if current_key is not None:
        stream.entries[current_key] = _tokenize("\n".join(body_lines), body_line)
    return stream


def _parse_header(line: str, line_no: int, stream: TokenStream) -> str:
    if len(line) < 2 or not line.endswith("]"):
        raise ScriptParseError("unterminated entry header", line_no, len(line) + 1)
    key = line[1:-1]
    if not key:
        raise ScriptParseError("empty entry key", line_no, 2)
    if key in stream.entries:
        raise ScriptParseError(f"duplicate entry '{key}'", line_no, 2)
    return key


def _tokenize(body: str, first_line: int) -> List[Token]:
    """Split an entry body into tokens."""
    tokens: List[Token] = []
    pos = 0
    text_start = 0
    end = len(body)

    while pos < end:
        char = body[pos]
        if char == ESCAPE:
            if pos + 1 >= end:
                raise _error(body, pos, first_line, "dangling escape")
            pos += 2
        elif char == COMMAND_SIGIL:
            if pos > text_start:
                tokens.append(Other(body[text_start:pos]))
            token, pos = _read_command(body, pos, first_line)
            tokens.append(token)
            text_start = pos
        else:
            pos += 1

    if text_start < end:
        tokens.append(Other(body[text_start:]))
    return tokens


def _read_command(body: str, start: int, first_line: int) -> Tuple[Token, int]:
    """Read ``$Name`` or ``$Name(args)`` starting at the sigil."""
    match = RE_COMMAND_NAME.match(body, start + 1)
    if not match:
        raise _error(body, start, first_line, "expected command name after '$'")

    name = match.group()
    pos = match.end()
    args: Tuple[str, ...] = ()
    if pos < len(body) and body[pos] == "(":
        args, pos = _read_args(body, pos + 1, first_line)

    return _make_token(name, args, body[start:pos], body, start, first_line), pos


def _read_args(body: str, pos: int, first_line: int) -> Tuple[Tuple[str, ...], int]:
    """Read a comma separated argument list up to and including ``)``."""
    args: List[str] = []
    end = len(body)

    pos = _skip_space(body, pos)
    if pos < end and body[pos] == ")":
        return (), pos + 1

    while True:
        pos = _skip_space(body, pos)
        if pos >= end:
            raise _error(body, pos, first_line, "unterminated argument list")

        if body[pos] == QUOTE:
            arg, pos = _read_quoted(body, pos, first_line)
        else:
            arg_start = pos
            while pos < end and body[pos] not in _BARE_STOP:
                pos += 1
            if pos == arg_start:
                raise _error(body, pos, first_line, "empty argument")
            arg = body[arg_start:pos]
        args.append(arg)

        pos = _skip_space(body, pos)
        if pos >= end:
            raise _error(body, pos, first_line, "unterminated argument list")
        if body[pos] == ")":
            return tuple(args), pos + 1
        if body[pos] != ",":
            raise _error(body, pos, first_line, f"unexpected '{body[pos]}' in argument list")
        pos += 1


def _read_quoted(body: str, start: int, first_line: int) -> Tuple[str, int]:
    chars: List[str] = []
    pos = start + 1
    end = len(body)
    while pos < end:
        char = body[pos]
        if char == ESCAPE:
            if pos + 1 >= end:
                break
            escaped = body[pos + 1]
            chars.append("\n" if escaped == "n" else escaped)
            pos += 2
        elif char == QUOTE:
            return "".join(chars), pos + 1
        else:
            chars.append(char)
            pos += 1
    raise _error(body, start, first_line, "unterminated string")


def _skip_space(body: str, pos: int) -> int:
    while pos < len(body) and body[pos] in _ARG_SPACE:
        pos += 1
    return pos


def _make_token(
    name: str, args: Tuple[str, ...], raw: str, body: str, start: int, first_line: int
) -> Token:
    if name in (WINDOW_COMMAND, ANIMATION_COMMAND, ALIAS_COMMAND) and not args:
        raise _error(body, start, first_line, f"${name} needs an identifier argument")

    if name == WINDOW_COMMAND:
        return Window(args[0], args[1:])
    if name == ANIMATION_COMMAND:
        return Animation(args[0], args[1:])
    if name == ALIAS_COMMAND:
        return Alias(args[0], args[1:])
    return Other(raw)


def _error(body: str, pos: int, first_line: int, message: str) -> ScriptParseError:
    """Build a parse error with the line/column of ``pos`` inside ``body``."""
    line = first_line + body.count("\n", 0, pos)
    column = pos - (body.rfind("\n", 0, pos) + 1) + 1
    return ScriptParseError(message, line, column)


# =============================================================================
# Packing
# =============================================================================

def pack(stream: TokenStream) -> str:
    """Serialize a token stream back to script text. Never fails."""
    parts: List[str] = []
    for key, tokens in stream.entries.items():
        parts.append(f"[{key}]\n")
        parts.extend(pack_token(token) for token in tokens)
        parts.append("\n")
    return "".join(parts)


def pack_token(token: Token) -> str:
    """Serialize a single token."""
    if isinstance(token, Window):
        return _pack_command(WINDOW_COMMAND, (token.speaker, *token.body))
    if isinstance(token, Animation):
        return _pack_command(ANIMATION_COMMAND, (token.target, *token.rest))
    if isinstance(token, Alias):
        return _pack_command(ALIAS_COMMAND, (token.actual, *token.rest))
    return token.raw


def _pack_command(name: str, args: Tuple[str, ...]) -> str:
    return f"{COMMAND_SIGIL}{name}({', '.join(_pack_arg(arg) for arg in args)})"


def _pack_arg(arg: str) -> str:
    if RE_BARE_ARG.fullmatch(arg):
        return arg
    escaped = (
        arg.replace(ESCAPE, ESCAPE * 2)
        .replace(QUOTE, ESCAPE + QUOTE)
        .replace("\n", ESCAPE + "n")
    )
    return f"{QUOTE}{escaped}{QUOTE}"

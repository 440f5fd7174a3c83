r"""
Overture tokenizer: one line of text into an ordered list of string tokens.

Rules
- whitespace separates tokens outside of double quotes.
- "..." groups text (whitespace included) into one token; the quotes are
  dropped and a closed pair always yields a token, even an empty one.
- \x takes x literally (a quote, a backslash or whitespace); the backslash
  itself is dropped.
- an unterminated quote keeps accumulating until the end of the line, where
  the pending text becomes the last token.

Examples
    >>> tokenize(r'cmd "a b" c\ d')
    ['cmd', 'a b', 'c d']
    >>> tokenize('""')
    ['']
"""


def tokenize(text, /):
    """
    Split `text` into tokens honoring "-quoting and \\-escaping.

    Single left-to-right pass; state is the string/escape flags plus the
    buffer of the token under construction.

    Parameters
    - text: str
      The (already substituted) line to split.

    Returns
    - list[str]: tokens in input order.

    Raises
    - TypeError: when text is not a string.
    """
    if not isinstance(text, str):
        raise TypeError("tokenize() argument must be a string")

    tokens = []
    buffer = []
    quoted = False
    escaped = False

    for char in text:
        if not escaped and char == '"':
            # closing quote completes the token even when it is empty
            if quoted:
                tokens.append("".join(buffer))
                buffer.clear()
            quoted = not quoted
            continue

        if not escaped and char == "\\":
            escaped = True
            continue

        if not quoted and not escaped and char.isspace():
            if buffer:
                tokens.append("".join(buffer))
                buffer.clear()
            continue

        buffer.append(char)
        escaped = False

    if buffer:
        tokens.append("".join(buffer))

    return tokens


__all__ = (
    "tokenize",
)

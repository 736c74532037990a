"""Single-line CSV tokenizer with double-quote handling.

The stdlib csv module treats a quote that appears mid-field as a literal
character; upstream files here rely on it toggling quoted state instead,
so lines are tokenized by hand.
"""

_QUOTE = '"'
_COMMA = ","


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV record into its fields.

    - A quote opens or closes a quoted section; inside it, commas are literal.
    - A doubled quote inside a quoted section decodes to one literal quote.
    - Malformed quoting never fails: characters keep accumulating.
    - Fields are not trimmed. At least one field is always returned.

    Examples:
        >>> parse_csv_line('a,"b,c",d')
        ['a', 'b,c', 'd']
        >>> parse_csv_line('a,"b""c",d')
        ['a', 'b"c', 'd']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == _QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == _QUOTE:
                current.append(_QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == _COMMA and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current))
    return fields


def iter_data_lines(text: str) -> list[str]:
    """Return the trimmed, non-blank lines of a response body."""
    return [stripped for stripped in (raw.strip() for raw in text.splitlines()) if stripped]

"""Splitting of record argument strings into parameter tokens."""

QUOTE = "'"
ESCAPE = "\\"


def split_parameters(param_string: str) -> list[str]:
    """Split a record's argument string on top-level commas.

    Commas inside quoted strings and inside parenthesized lists do not
    split. Quote characters are kept in the tokens, surrounding whitespace
    is removed. An empty argument string yields an empty list.

    Parameters
    ----------
    param_string : str
        Everything between the opening and closing parenthesis of a record

    Returns
    -------
    list[str]
        Ordered parameter tokens
    """
    params: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False
    depth = 0

    for char in param_string:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == ESCAPE and in_quotes:
            current.append(char)
            escaped = True
            continue
        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
            continue
        if not in_quotes:
            if char == "(":
                depth += 1
            elif char == ")" and depth > 0:
                depth -= 1
            elif char == "," and depth == 0:
                params.append("".join(current).strip())
                current = []
                continue
        current.append(char)

    token = "".join(current).strip()
    if token:
        params.append(token)
    return params


def unquote(token: str) -> str:
    """Remove surrounding whitespace and quote characters of a token."""
    return token.strip().strip(QUOTE).strip()


def split_list(token: str) -> list[str]:
    """Split a parenthesized list token like ``(1.0,2.0)`` into its items."""
    inner = unquote(token).strip("()")
    if not inner.strip():
        return []
    return [unquote(item) for item in inner.split(",")]

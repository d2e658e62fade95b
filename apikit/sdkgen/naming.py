"""Conversions between identifier styles used in generated code."""

from __future__ import annotations

_SEPARATORS = frozenset("_- .")

COMMON_INITIALISMS = frozenset(
    {
        "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML", "HTTP",
        "HTTPS", "ID", "IP", "JSON", "LHS", "OK", "QPS", "RAM", "RHS", "RPC",
        "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP", "UI", "UID",
        "URI", "URL", "UTF8", "UUID", "VM", "XML", "XMPP", "XSS", "YAML",
        "SDK", "HMAC", "JWT", "RSA", "PIX", "ACH", "BRL", "MXN", "ARS", "COP",
        "USD", "BTC", "ETH", "USDT", "KYC",
    }
)


def split_words(s: str) -> list[str]:
    """Split on separators (underscore, hyphen, space, dot) and camelCase boundaries."""
    words: list[str] = []
    current: list[str] = []

    def flush() -> None:
        if current:
            words.append("".join(current))
            current.clear()

    for i, char in enumerate(s):
        if char in _SEPARATORS:
            flush()
            continue
        if char.isupper() and i > 0:
            prev = s[i - 1]
            if not prev.isupper() and prev not in _SEPARATORS:
                flush()
            elif prev.isupper() and i + 1 < len(s) and s[i + 1].islower():
                # "HTTPClient" -> "HTTP", "Client"
                flush()
        current.append(char)
    flush()
    return words


def to_pascal_case(s: str) -> str:
    """Convert to PascalCase, keeping common initialisms in capitals."""
    parts = []
    for word in split_words(s):
        upper = word.upper()
        if upper in COMMON_INITIALISMS:
            parts.append(upper)
        else:
            parts.append(word[0].upper() + word[1:].lower())
    return "".join(parts)


def to_camel_case(s: str) -> str:
    """Convert to camelCase; a leading initialism is lowered as a whole."""
    pascal = to_pascal_case(s)
    if len(pascal) <= 1:
        return pascal.lower()
    if pascal[0].isupper() and pascal[1].isupper():
        end = 0
        while end < len(pascal) and pascal[end].isupper():
            end += 1
        if end < len(pascal):
            end -= 1
        return pascal[:end].lower() + pascal[end:]
    return pascal[0].lower() + pascal[1:]


def to_snake_case(s: str) -> str:
    """Convert to snake_case."""
    out: list[str] = []
    for i, char in enumerate(s):
        if char.isupper():
            if i > 0 and not s[i - 1].isupper():
                out.append("_")
            elif i > 0 and i + 1 < len(s) and s[i - 1].isupper() and not s[i + 1].isupper():
                out.append("_")
            out.append(char.lower())
        elif char in "- ":
            out.append("_")
        else:
            out.append(char)
    return "".join(out)
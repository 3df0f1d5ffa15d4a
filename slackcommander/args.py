from __future__ import annotations

from .errors import UnterminatedQuote

SMART_QUOTES = {
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
}

# Unicode Quotation_Mark property
QUOTATION_MARKS = frozenset(
    "\"'«»‘’‚‛“”„‟‹›"
    "⹂「」『』〝〞〟﹁﹂﹃﹄"
    "＂＇｢｣"
)


def normalize_quotes(text: str) -> str:
    for smart, plain in SMART_QUOTES.items():
        text = text.replace(smart, plain)
    return text


def parse_args(text: str) -> list[str]:
    """Split a command line into arguments, grouping quoted runs.

    Double, single and smart quotes group words into one argument; the quote
    characters themselves are dropped. Runs of whitespace outside quotes are
    collapsed. Raises UnterminatedQuote when a quote is left open.
    """
    text = normalize_quotes(text.strip() + " ")

    args: list[str] = []
    buf: list[str] = []
    quote: str | None = None
    after_space = False
    for i, c in enumerate(text):
        if c == quote:
            quote = None
        elif quote is not None:
            buf.append(c)
        elif c in QUOTATION_MARKS:
            after_space = False
            quote = c
        elif c.isspace():
            if i == 0 or after_space:
                continue
            after_space = True
            args.append("".join(buf))
            buf = []
        else:
            after_space = False
            buf.append(c)

    if quote is not None:
        raise UnterminatedQuote(code="UNTERMINATED_QUOTE", message="quotes did not terminate")
    return args


FORMATTING_MARKERS = frozenset("*~_")


def strip_formatting(text: str) -> str:
    """Remove matching emphasis markers wrapping the whole text, outside in."""
    while len(text) > 1 and text[0] == text[-1] and text[0] in FORMATTING_MARKERS:
        text = text[1:-1]
    return text

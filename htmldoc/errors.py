"""Exception hierarchy for htmldoc."""


class HtmlDocError(Exception):
    """Base class for htmldoc errors."""


class ParseError(HtmlDocError):
    """The document could not be parsed. No partial result is produced."""


class TokenizeError(ParseError):
    """The HTML tokenizer failed on the input."""


class DepthLimitError(ParseError):
    """Element nesting exceeded the configured maximum depth."""

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Element nesting depth {depth} exceeds limit of {max_depth}")

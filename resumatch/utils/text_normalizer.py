import re


def normalize_text(text: str) -> str:
    """Normalize text by standardizing line breaks and whitespace.

    Converts different line break formats to standard newlines, replaces
    non-breaking spaces, collapses runs of spaces/tabs into one space, strips
    trailing whitespace from every line and reduces excessive blank lines.

    Args:
        text: Raw extracted text.

    Returns:
        str: Normalized and trimmed text.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\u00a0", " ").replace("\ufeff", "")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" +\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def collapse_blank_runs(text: str) -> str:
    """Collapse runs of three or more blank lines to a single blank line."""
    return re.sub(r"\n(?:[ \t]*\n){3,}", "\n\n", text)

from typing import Optional


def to_title_case(value: Optional[str]) -> str:
    """Title-case each space separated word: "  mary ann " -> "Mary Ann".

    Runs of spaces are preserved as empty words, matching how names were
    normalized when the records were first entered.
    """
    if not value:
        return ""
    words = value.strip().lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)

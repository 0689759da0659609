"""Page title helpers."""

import re

# First 15 characters plus the rest of the (ASCII) word they end in
_TRUNCATE_PATTERN = re.compile(r"^(.{15}[\w.]*)(.*)", re.MULTILINE | re.ASCII)

_ACRONYMS = (("Faq", "FAQ"), ("Tos", "TOS"), ("Dmca", "DMCA"))

DEFAULT_TITLE_FORMAT = "{title} - {author} - {fandom}"


def truncate_title_piece(text: str) -> str:
    """Cut text after 15 characters at the next word boundary, marking the cut."""
    return _TRUNCATE_PATTERN.sub(
        lambda m: m.group(1) + "..." if m.group(2) else m.group(1),
        text,
    )


def get_page_title(
    fandom: str,
    author: str,
    title: str,
    *,
    app_name: str,
    truncate: bool = False,
    omit_archive_name: bool = False,
    title_format: str | None = None,
) -> str:
    """Build a work page title.

    Args:
        fandom: Fandom name(s).
        author: Creator name(s).
        title: Work title.
        app_name: Site name appended as `` [app_name]``.
        truncate: Shorten each piece with truncate_title_piece.
        omit_archive_name: Leave the site name off.
        title_format: The signed-in user's preferred pattern using the
            placeholders FANDOM, AUTHOR and TITLE. Blank means default order.
    """
    if truncate:
        fandom = truncate_title_piece(fandom)
        author = truncate_title_piece(author)
        title = truncate_title_piece(title)

    if title_format and title_format.strip():
        page_title = (
            title_format.replace("FANDOM", fandom)
            .replace("AUTHOR", author)
            .replace("TITLE", title)
        )
    else:
        page_title = DEFAULT_TITLE_FORMAT.format(title=title, author=author, fandom=fandom)

    if not omit_archive_name:
        page_title += f" [{app_name}]"
    return page_title


def process_title(string: str) -> str:
    """Turn a controller/page name like ``archive_faqs`` into ``Archive FAQs``."""
    text = re.sub(r"_id$", "", string)
    text = re.sub(r"[_\-\s]+", " ", text).strip().lower()
    text = re.sub(r"\b('?[a-z])", lambda m: m.group(1).upper(), text)
    for plain, acronym in _ACRONYMS:
        text = text.replace(plain, acronym, 1)
    return text

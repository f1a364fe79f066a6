"""Message templating helpers."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

DEFAULT_TOKEN = "%"


def render_template(template: Optional[str], args: Sequence[Any] = (), token: str = DEFAULT_TOKEN) -> str:
    """Substitute ``args`` into ``template`` one placeholder at a time.

    Each value replaces the next ``token`` occurrence, left to right.
    Placeholders without a value stay literal and surplus values are ignored.
    Substituted text is never rescanned, so a value containing the token does
    not consume a later argument.
    """

    if template is None:
        return ""
    if not args or not token:
        return template

    pieces = template.split(token)
    rendered: List[str] = [pieces[0]]
    for index, piece in enumerate(pieces[1:]):
        if index < len(args):
            rendered.append(str(args[index]))
        else:
            rendered.append(token)
        rendered.append(piece)
    return "".join(rendered)

"""
Human-readable rendering of structures for terminal output.
"""

from typing import Any, Optional

from rich.console import Console
from rich.pretty import Pretty, pretty_repr

RENDER_WIDTH = 100


def inspect(value: Any, depth: Optional[int] = None, colors: bool = False) -> str:
    """
    Render ``value`` as indented, depth-limited text.

    Containers nested deeper than ``depth`` are abbreviated to ``...``.
    With ``colors`` the text carries ANSI styling for a terminal; without
    it the text is plain, which is what log collectors want.
    """
    if not colors:
        return pretty_repr(value, max_width=RENDER_WIDTH, max_depth=depth)

    console = Console(
        force_terminal=True,
        color_system="standard",
        width=RENDER_WIDTH,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(Pretty(value, max_depth=depth), end="")
    return capture.get().rstrip("\n")

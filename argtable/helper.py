"""
argtable help rendering.

render(table) builds a rich renderable out of a declaration table:

    <description>
        help : --help, -h display help information  FLAG
        add  : --add, -a  add the given value
        test : --test, -t test flag                  FLAG
                          default = false

Palette keys
- description, identifier, name, separator, argument-description
- flag-badge, flag-default, value-default, default-label
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False strips every style; fancy=True wraps the output in a panel.
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .utils import *
from .values import Flag

PALETTE = {
    # === Head ===
    "description": "bold #3B82F6",  # BLUE headline

    # === Rows ===
    "identifier": "bold #22D3EE",  # CYAN ids
    "name": "dim #EAB308",  # dim YELLOW spellings
    "separator": "#6B7280",  # Slate punctuation
    "argument-description": "#9CA3AF",  # Muted gray

    # === Markers ===
    "flag-badge": "bold #FFFFFF on #A21CAF",  # white on MAGENTA
    "default-label": "#9CA3AF",
    "flag-default": "bold #D946EF",  # MAGENTA booleans
    "value-default": "bold #EAB308",  # YELLOW values

    # === Fancy panel ===
    "panel-title": "bold #FF4D94",
}


def _format_default(default):
    if isinstance(default, Flag):
        return str(default.state).lower()
    return repr(default.value)


def render(table, /, *, prog=Unset, colorful=True, fancy=False):
    """
    Build the help screen for `table`.

    Parameters
    - table: DeclarationTable (read-only access: description and iteration).
    - prog: panel title when fancy=True; defaults to the table's prog attribute.
    - colorful: apply the palette when True.
    - fancy: wrap the output in a rich Panel.

    Returns
    - rich renderable (Group or Panel).
    """
    styles = defaultdict(str, PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styler(style))

    rows = Table.grid(padding=(0, 1))
    rows.add_column(no_wrap=True)  # indent
    rows.add_column(no_wrap=True)  # identifier
    rows.add_column(no_wrap=True)  # names
    rows.add_column()  # description + markers

    for declaration in table:
        names = Text.assemble(
            text(declaration.long, "name"),
            text(",", "separator"),
            " ",
            text(declaration.short, "name"),
        )

        body = Text.assemble(text(declaration.descr, "argument-description"))
        if declaration.flag:
            body.append(" ")
            body.append_text(text(" FLAG ", "flag-badge"))
        if declaration.default is not None:
            body.append("\n")
            body.append_text(Text.assemble(
                text("default = ", "default-label"),
                text(
                    _format_default(declaration.default),
                    "flag-default" if isinstance(declaration.default, Flag) else "value-default"
                ),
            ))

        rows.add_row(
            "   ",
            Text.assemble(text(declaration.id, "identifier"), text(" :", "separator")),
            names,
            body,
        )

    renderable = Group(text(table.description, "description"), rows)

    if fancy:
        title = coalesce(prog, getattr(table, "prog", None))
        return Panel(
            renderable,
            title=text(title, "panel-title") if title else None,
            title_align="left",
        )

    return renderable


__all__ = (
    "PALETTE",
    "render",
)

"""
Hashparse help renderer.

render_help(parser) turns the template metadata of a parser into a listing:

    calc: hashparse example calculator program.
    Author: Example
    Usage:
        $ calc -[-command] [value/s...]
    Arguments:
        -c | --compute            Compute something.
            --add [2 values]      Add two numbers.
        -h, --help                Print this help message!

Layout
- Templates appear in registration order; subcommands are indented four
  spaces per level under their parent.
- Aliases are joined by " | "; a non-zero arity adds "[N values]" or
  "[N optional values]".
- Help strings share one column.
- A custom help string set on the parser replaces the generated listing.

Palette keys (override through a __styles__ mapping in __main__)
- program-name, description, section-label, alias, arity, help-text
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

HELP_ALIASES = ("-h", "--help")
HELP_TEXT = "Print this help message!"

_INDENT = " " * 4


def _label(template):
    label = " | ".join(template.aliases)
    if template.arity > 0:
        label += " [%d%s values]" % (template.arity, " optional" if template.optional else "")
    return label


def render_help(parser, /):
    """
    Build the help listing of `parser` as a rich Text (use .plain for a str).
    """
    if parser.help is not None:
        return Text(parser.help)

    styles = defaultdict(str, {
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description": "italic #A3A3A3",  # Neutral gray
        "section-label": "bold #00E6FF",  # CYAN headers
        "alias": "bold #22C55E",  # GREEN flags
        "arity": "bold #FFD600",  # AMBER values
        "help-text": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if parser.colorful else ""

    registry = parser.registry
    rows = [(_INDENT * depth, registry[identity]) for identity, depth in registry.walk()]
    column = max((len(indent) + len(_label(template)) for indent, template in rows), default=0)
    column = max(column, len(", ".join(HELP_ALIASES))) + 4

    lines = []

    header = Text()
    if parser.name:
        header.append(parser.name, styler("program-name"))
    if parser.description:
        if parser.name:
            header.append(": ")
        header.append(parser.description, styler("description"))
    if header:
        lines.append(header)

    if parser.author:
        lines.append(Text.assemble(("Author:", styler("section-label")), " ", parser.author))

    lines.append(Text("Usage:", styler("section-label")))
    lines.append(Text(_INDENT + (parser.usage or "$ %s -[-command] [value/s...]" % parser.name)))

    lines.append(Text("Arguments:", styler("section-label")))
    for indent, template in rows:
        line = Text(_INDENT + indent)
        line.append_text(Text(" | ").join(Text(alias, styler("alias")) for alias in template.aliases))
        if template.arity > 0:
            line.append(" ")
            line.append("[%d%s values]" % (template.arity, " optional" if template.optional else ""), styler("arity"))
        line.append(" " * (column - len(indent) - len(_label(template))))
        line.append(template.help, styler("help-text"))
        lines.append(line)

    helpers = Text(", ").join(Text(alias, styler("alias")) for alias in HELP_ALIASES)
    lines.append(Text.assemble(
        _INDENT,
        helpers,
        " " * (column - len(helpers)),
        (HELP_TEXT, styler("help-text")),
    ))

    for line in lines:
        line.rstrip()
    return Text("\n").join(lines)


def print_help(parser, /, console=None):
    """
    Print the help listing of `parser` on stdout (or on the given console).
    """
    console = console or Console(highlight=False)
    console.print(render_help(parser), soft_wrap=True)


__all__ = (
    "HELP_ALIASES",
    "HELP_TEXT",
    "render_help",
    "print_help",
)

import os

from rich.pretty import pprint

from termspec import *
from termspec import manpage


tool = Term(
    "tool",
    doc="Build and ship things.",
    version="1.0.0",
    man=[manpage.Section(manpage.DESCRIPTION), manpage.Paragraph("$(tname) builds and ships things.")],
)
tool_args = [
    Argument("v", "verbose", doc="Print more."),
    Argument("color", env=Env("TOOL_COLOR"), metavar="WHEN").make_option(Default("auto"), Valued),
]

build = Term("build", doc="Build things.")
build_args = [
    Argument("j", "jobs", metavar="N").make_option(Default(lambda: str(os.cpu_count())), Valued),
    Argument(doc="Targets to build.").make_positional(Position(0)),
    Argument(doc="Output directory.").make_positional_with_absence(Required, Position(0, 1, rev=True)),
]


if __name__ == '__main__':
    context = Context((tool, tool_args), (tool, tool_args), [(tool, tool_args), (build, build_args)], os.environ.get)
    pprint(context)
    pprint(context.classify())

    context = context.rebind(build, build_args)
    pprint(positionals(context.term_args))
    pprint(context.classify())

"""
Monet-Explorer command line, runnable with `python -m cmdline`.

Declares the surface of the explorer client (host, port, credentials, the
database operand and the connection switches), prints the help screen when
asked and otherwise shows the parsed values.

Set CMDLINE_LOG_LEVEL=DEBUG to follow the parser and the layout engine.
"""
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import pprint

from cmdline import Parser, Unset

__prog__ = "monet-explorer"

INTRODUCTION = (
    "This application helps you to experiment with the text-based \033[1mMAPI protocol\033[0m "
    "that is used by client applications to communicate with MonetDB."
)

EXAMPLE = (
    "\033[1m./monet-explorer\033[0m -h \033[2m\033[4m127.0.0.1\033[0m "
    "-u \033[2m\033[4mmonetdb\033[0m -p \033[2m\033[4m50000\033[0m -P "
    "\033[2m\033[4mmonetdb\033[0m \033[2m\033[4mMyDatabase\033[0m"
)


def configure_logging():
    logging.basicConfig(
        level=os.environ.get("CMDLINE_LOG_LEVEL", "WARNING").upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def declare(argv=Unset, /):
    """Build the explorer parser."""
    parser = Parser(argv)

    parser.argument.string(
        "host", "h", "host_name",
        "The host name or IP add|ress of the \033[1mMonetDB server\033[0m.",
        default="127.0.0.1",
    )
    parser.argument.int("port", "p", "port", "The port of the \033[1mMonetDB server\033[0m.", default=50000)
    parser.argument.string("user", "u", "user_name", "User name for the database login.", default="monetdb")
    parser.argument.string("password", "P", "password", "User password for the database login.", default="monetdb")
    parser.define_operand("database", "The name of the data|base to connect to.")
    parser.define_option(
        "unix-domain-socket", "x",
        "Use a unix domain socket for con|nect|ing to the \033[1mMonetDB server\033[0m, instead of "
        "con|nect|ing through TCP/IP. If pro|vi|ded, then the host and port ar|gu|ments are ig|no|red.",
    )
    parser.define_option("file-transfer", "t", "Enable the file trans|fer pro|to|col for the con|nec|tion.")
    parser.argument.string(
        "auth-algo", "a", "algo",
        "The hash al|go|rithm to be used for the 'salted hashing'. The \033[1mMonetDB server\033[0m has "
        "to support it. This is typi|cally a weaker hash al|go|rithm, which is used to|gether with a "
        "stron|ger 'pass|word hash' that is currently SHA512.",
        default="SHA1",
    )
    parser.define_option("help", "?", "Display the usage instructions.")
    parser.restrict_operands()
    return parser


def prologue(parser, /):
    """Title, introduction and example printed above the generated documentation."""
    return "".join((
        "\nMonet-Explorer\n\n",
        parser.wrap_text(INTRODUCTION, 2, 2),
        "\nExample:\n\n",
        parser.wrap_text(EXAMPLE, 1, 1),
        "\n",
    ))


def explore(arguments, /):
    pprint(arguments)
    return 0


def main(argv=Unset, /):
    configure_logging()
    parser = declare(argv)
    return parser.run(explore, prologue=prologue(parser))


if __name__ == "__main__":
    sys.exit(main())

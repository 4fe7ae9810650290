"""
Hashparse parse engine: declare templates, then scan argument vectors.

What this module provides
- Parser: owns a Registry (reserving "-h"/"--help"), the program identity
  shown in help (name, author, description, usage) and the runtime options
  that decide how faults surface (shell, fancy, colorful).
  • add/add_template: declare top-level templates.
  • add_subcommand/add_subcommand_template: declare templates nested under a
    parent identity.
  • parse(prompt): one linear scan producing a Results or triggering a fault.

The scan
- Every token is either a registered alias or a value consumed by the flag
  before it; anything else is an unrecognized argument.
- Each token costs one dict lookup and the cursor always moves forward, so a
  parse is O(n) in the number of tokens, without backtracking.
- The active context is the chain of subcommand-bearing templates matched
  most recently, root first. A top-level match resets it; a subcommand is only
  legal while its parent is on the chain (siblings may follow each other:
  "-c --add 1 2 --sub 3 1"), and the chain is cut back to that parent.
- Values are taken greedily up to the template's arity, stopping at the first
  token that is itself an alias; a help alias in a value slot ends the scan
  with help, as anywhere else.
- Callbacks run inline, once per occurrence, before the cursor advances.
- The first fault ends the parse; no partial result is ever returned.

Quick start
    from hashparse import Parser

    parser = Parser("calc", description="tiny calculator")
    parser.add("--say", 1, "Repeat something")
    compute = parser.add("-c", 0, "Compute something")
    parser.add_subcommand(compute, "--add", 2, "Add two numbers")

    results = parser.parse(["-c", "--add", "2", "2"])
    results.values("--add")  # ("2", "2")
"""
import difflib
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable

from .faults import *
from .helper import HELP_ALIASES, print_help
from .registry import Registry
from .results import Occurrence, Results
from .templates import Template
from .utils import *

logger = logging.getLogger(__name__)


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens.

    - Unset: the process arguments, without the program path (sys.argv[1:]).
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: used as-is (items are not trimmed; "" is a valid value).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


def _aliases(aliases):
    # one alias or an iterable of aliases
    if isinstance(aliases, str):
        return (aliases,)
    if not isinstance(aliases, Iterable):
        raise TypeError("aliases must be a string or an iterable of strings")
    return tuple(aliases)


class Parser:
    """
    Template registry front-end and single-pass argument scanner.

    Options
    - name: program name used in help and fault headers (defaults to the file
      name of sys.argv[0]).
    - author, description, usage: help metadata ("" hides the line).
    - help: custom help text replacing the generated listing.
    - exit_on_help: exit with status 0 after printing help (default True);
      otherwise parse() returns a Results with helped=True.
    - shell: print faults on stderr and exit with status 1 instead of raising.
    - fancy: render faults inside a panel.
    - colorful: color help and faults.
    """

    def __init__(
            self,
            name=Unset,
            /,
            author="",
            description="",
            usage="",
            help=Unset,
            *,
            exit_on_help=True,
            shell=False,
            fancy=False,
            colorful=True,
    ):
        name = coalesce(name, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "")
        for option, value in (("name", name), ("author", author), ("description", description), ("usage", usage)):
            if not isinstance(value, str):
                raise TypeError(f"parser {option!r} must be a string")
        if not isinstance(help, str | Unset):
            raise TypeError("parser 'help' must be a string")
        for option, value in (("exit_on_help", exit_on_help), ("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(value, bool):
                raise TypeError(f"parser {option!r} must be a boolean")

        self._name = name
        self._author = author
        self._description = description
        self._usage = usage
        self._help = coalesce(help)
        self._exit_on_help = exit_on_help
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful
        self._registry = Registry(reserved=HELP_ALIASES)

    name = mirror("name")
    author = mirror("author")
    description = mirror("description")
    usage = mirror("usage")
    help = mirror("help")
    exit_on_help = mirror("exit_on_help")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    registry = mirror("registry")

    def add(self, aliases, arity=0, help="", /, *, optional=False, callback=Unset):
        """
        Declare a top-level template and return its identity.

        `aliases` is one alias or an iterable of aliases.
        """
        return self._registry.register(
            Template(*_aliases(aliases), arity=arity, optional=optional, help=help, callback=callback)
        )

    def add_template(self, template, /):
        return self._registry.register(template)

    def add_subcommand(self, parent, aliases, arity=0, help="", /, *, optional=False, callback=Unset):
        """
        Declare a template nested under `parent` and return its identity.
        """
        return self._registry.attach_child(
            parent,
            Template(*_aliases(aliases), arity=arity, optional=optional, help=help, callback=callback)
        )

    def add_subcommand_template(self, parent, template, /):
        return self._registry.attach_child(parent, template)

    def print_help(self):
        print_help(self)

    def trigger(self, fault, /, **options):
        """
        Surface a parse fault with this parser's runtime options.

        Raises the fault, or prints it and exits with status 1 in shell mode.
        """
        logger.debug("parse fault %s: %s", type(fault).__name__, fault.message)
        trigger(
            fault,
            **options,
            prog=self._name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def _route(self):
        return "%s --help" % self._name if self._name else "--help"

    def _unrecognized(self, token, position):
        suggestions = difflib.get_close_matches(token, [*self._registry.aliases, *HELP_ALIASES], 5)
        try:
            hint = "did you mean %r? you can also run '%s' to see all arguments" % (suggestions[0], self._route())
        except IndexError:
            hint = "run '%s' to see all available arguments" % self._route()
        return self.trigger(UnrecognizedArgumentError(
            "unknown argument %r at %s position" % (token, ordinal(position + 1)),
            title="unknown argument",
            code=FaultCode.UNRECOGNIZED_ARGUMENT,
            token=token,
            position=position,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNRECOGNIZED_ARGUMENT),
        ))

    def _out_of_context(self, token, position, parent):
        expected = self._registry[parent].aliases[0]
        return self.trigger(OutOfContextError(
            "%r at %s position is a subcommand of %r, which is not present before it" % (
                token, ordinal(position + 1), expected
            ),
            title="out of context argument",
            code=FaultCode.OUT_OF_CONTEXT,
            token=token,
            position=position,
            alias=token,
            expected_parent=expected,
            hint="place %r after %r (for example: %s %s ...)" % (token, expected, expected, token),
            docs=getdoc(FaultCode.OUT_OF_CONTEXT),
        ))

    def _missing_values(self, token, position, template, found):
        missing = template.arity - found
        return self.trigger(MissingValuesError(
            "%r at %s position expects %d value%s but received %d" % (
                token, ordinal(position + 1), template.arity, "" if template.arity == 1 else "s", found
            ),
            title="not enough values",
            code=FaultCode.MISSING_VALUES,
            token=token,
            position=position,
            alias=token,
            expected=template.arity,
            found=found,
            hint="pass %d more value%s after %r" % (missing, "" if missing == 1 else "s", token),
            docs=getdoc(FaultCode.MISSING_VALUES),
        ))

    def _delegate(self, token, position, exception):
        fault = DelegatedError(
            "something occurred in %r at %s position" % (token, ordinal(position + 1)),
            title="delegated error",
            code=FaultCode.DELEGATED_ERROR,
            token=token,
            position=position,
            alias=token,
            exception=exception,
            hint="check additional logs for more details",
            docs=getdoc(FaultCode.DELEGATED_ERROR),
        )
        fault.__cause__ = exception
        return self.trigger(fault)

    def _helped(self, occurrences, position):
        logger.debug("help requested at position %d", position)
        self.print_help()
        if self._exit_on_help:
            sys.exit(0)
        return self._results(occurrences, helped=True)

    def _results(self, occurrences, *, helped=False):
        registry = self._registry
        matched = {occurrence.identity for occurrence in occurrences}
        aliases = {alias: identity for identity in matched for alias in registry[identity].aliases}
        return Results(occurrences, aliases, helped=helped)

    def parse(self, prompt=Unset, /):
        """
        Scan `prompt` once and return the Results.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Raises (outside shell mode)
        - UnrecognizedArgumentError, OutOfContextError, MissingValuesError,
          DelegatedError (a callback raised).
        - TypeError: invalid prompt.
        """
        tokens = _tokenize(prompt)
        registry = self._registry

        occurrences = []
        counts = {}
        # active subcommand chain, root first; `active` mirrors it for O(1) membership
        context = []
        active = set()

        position = 0
        while position < len(tokens):
            token = tokens[position]

            if token in HELP_ALIASES:
                return self._helped(occurrences, position)

            if (identity := registry.lookup(token)) is None:
                return self._unrecognized(token, position)
            template = registry[identity]

            if (parent := registry.parent_of(identity)) is None:
                context.clear()
                active.clear()
            elif parent in active:
                while context[-1] != parent:
                    active.discard(context.pop())
            else:
                return self._out_of_context(token, position, parent)

            if registry.has_children(identity):
                context.append(identity)
                active.add(identity)

            values = []
            cursor = position + 1
            while len(values) < template.arity and cursor < len(tokens):
                value = tokens[cursor]
                # help wins over the pending flag, which is not recorded
                if value in HELP_ALIASES:
                    return self._helped(occurrences, cursor)
                if registry.lookup(value) is not None:
                    break
                values.append(value)
                cursor += 1

            if len(values) < template.arity and not template.optional:
                return self._missing_values(token, position, template, len(values))

            logger.debug("matched %r (template %d) at position %d with values %r", token, identity, position, values)

            try:
                template(values)
            except Exception as exception:
                return self._delegate(token, position, exception)

            index = counts.get(identity, 0)
            counts[identity] = index + 1
            occurrences.append(Occurrence(identity, token, values, index, position))
            position = cursor

        return self._results(occurrences)

    def __repr__(self):
        return "parser(name=%r, templates=%d)" % (self._name, len(self._registry))


__all__ = (
    "Parser",
)

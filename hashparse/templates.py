"""
Hashparse templates: declarations of recognizable flags.

Overview
- Template: one recognizable flag, spelled by one or more aliases
  (e.g., "-n"/"--new"), consuming a fixed number of trailing values (arity),
  optionally tolerating fewer of them, with a help string and an optional
  parse-time callback.
- template(...): decorator factory that builds a Template and binds the
  decorated function as its callback.

Metadata (sanitized on construction)
- aliases: non-empty strings without surrounding whitespace; at least one, no
  duplicates. Global uniqueness across a parser is enforced by the registry.
- arity: non-negative integer (bools are rejected).
- optional: bool; when True, fewer than `arity` values is not an error.
- help: string (defaults to "", trimmed).
- callback: Unset | callable, invoked with the tuple of values of each occurrence.

Templates are immutable; use copy.replace(template, arity=2) to derive a new one.
A template does not know its identity nor its children: both belong to the
registry that owns it.

Quick example:
    >>> from hashparse.templates import Template, template
    >>> say = Template("-s", "--say", arity=1, help="Repeat something")
    ...
    >>> @template("--add", arity=2, help="Add two numbers")
    >>> def add(values): ...
    ...
"""
import functools
import operator

from .utils import *


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate template metadata in place.

    Raises
    - TypeError: wrong types (non-string alias, non-int arity, non-bool optional,
      non-string help, non-callable callback, explicit None anywhere) and no
      aliases at all.
    - ValueError: empty or padded aliases, duplicate aliases, negative arity.
    """
    name = cls.__name__.lower()

    aliases = []
    if not metadata["aliases"]:
        raise TypeError(f"{name} must specify at least one alias")
    for alias in metadata["aliases"]:
        if not isinstance(alias, str):
            raise TypeError(f"{name} aliases must be strings")
        elif not alias.strip():
            raise ValueError(f"{name} aliases cannot be empty-strings")
        elif alias != alias.strip():
            raise ValueError(f"{name} aliases cannot have surrounding whitespace")
        elif alias in aliases:
            raise ValueError(f"{name} aliases cannot contain duplicates")
        aliases.append(alias)
    metadata["aliases"] = aliases

    # bool is an int subclass
    if not isinstance(arity := metadata["arity"], int) or isinstance(arity, bool):
        raise TypeError(f"{name} 'arity' must be an integer")
    elif arity < 0:
        raise ValueError(f"{name} 'arity' must be a non-negative integer")

    if not isinstance(metadata["optional"], bool):
        raise TypeError(f"{name} 'optional' must be a boolean")

    if not isinstance(help := metadata["help"], str):
        raise TypeError(f"{name} 'help' must be a string")
    metadata["help"] = help.strip()

    if (callback := metadata["callback"]) is not Unset and not callable(callback):
        raise TypeError(f"{name} 'callback' must be callable")


class Template:
    """
    Declaration of one recognizable flag.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes, mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "aliases",
        "arity",
        "optional",
        "help",
        "callback",
    )

    __slots__ = tuple("_" + name for name in __introspectable__)

    def __init__(self, *aliases, arity=0, optional=False, help="", callback=Unset):
        """
        Construct a template with the provided metadata.

        Parameters
        - *aliases: str
          Every spelling by which the flag is recognized. At least one.
        - arity: int
          Number of trailing values consumed when matched.
        - optional: bool
          If True, fewer than `arity` values (possibly zero) is accepted.
        - help: str
          Short description shown in the help listing.
        - callback: Unset | Callable[[tuple[str, ...]], Any]
          Invoked once per occurrence, at match time, with the values.
        """
        metadata = {
            "aliases": aliases,
            "arity": arity,
            "optional": optional,
            "help": help,
            "callback": callback,
        }
        _sanitize_metadata(type(self), metadata)
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)

    aliases = mirror("aliases")
    arity = mirror("arity")
    optional = mirror("optional")
    help = mirror("help")
    callback = mirror("callback")

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__.lower()} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__.lower()} is read-only")

    def __call__(self, values, /):
        """
        Forward the values of one occurrence to the bound callback.

        No-ops (returns None) when no callback is bound.
        """
        if self._callback is Unset:
            return
        return self._callback(tuple(values))

    def __replace__(self, *unused, **changes):
        assert not unused, "positional arguments are not allowed"
        metadata = dict(self.__rich_repr__())
        aliases = changes.pop("aliases", metadata.pop("aliases"))
        # one alias or an iterable of aliases
        if isinstance(aliases, str):
            aliases = (aliases,)
        return type(self)(*aliases, **(metadata | changes))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__name__.lower()}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


def template(*aliases, arity=0, optional=False, help=""):
    """
    Build a Template and bind the decorated function as its callback.

    The returned decorator can only be applied once; applying it again raises
    TypeError, so one declaration never silently backs two templates.

    Example
        @template("--add", arity=2, help="Add two numbers")
        def add(values):
            print(sum(map(float, values)))
    """
    # validate eagerly so mistakes surface at the decorator line
    Template(*aliases, arity=arity, optional=optional, help=help)
    used = False

    @rename("template")
    def wrapper(callback, /):
        nonlocal used
        if used:
            raise TypeError("@template() can only be applied once")
        if not callable(callback):
            raise TypeError("@template() must be applied to a callable")
        used = True
        return Template(*aliases, arity=arity, optional=optional, help=help, callback=callback)

    return wrapper


__all__ = (
    "Template",
    "template",
)

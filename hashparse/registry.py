"""
Hashparse template registry.

What this module provides
- Registry: owner of every template of a parser, indexed two ways with plain
  dicts so that every lookup is O(1):
  • alias → identity (one global namespace, subcommands included)
  • identity → template
  plus the parent/child forest (children in registration order, and a reverse
  parent index for constant-time context checks).

Core ideas
- One global alias namespace: a token is resolved to an identity without
  knowing the current subcommand context; whether the match is legal in that
  context is decided afterwards, by the parse engine.
- Identities are small positive integers handed out sequentially from 1, in
  registration order. They are the stable handles used to attach subcommands
  and to query results.
- Children are always registered through attach_child(), which creates the
  parent link at the same time as the identity, so the relation is a forest by
  construction (no cycles, one parent per child).
- Reserved aliases (e.g. "-h"/"--help" owned by a Parser) belong to the
  namespace without belonging to any template.

The registry is mutated only while templates are being declared. Parsing only
reads it, so one registry can serve any number of sequential parses.
"""
import logging

from .faults import DuplicateAliasError, UnknownParentError
from .templates import Template
from .utils import mirror

logger = logging.getLogger(__name__)


class Registry:
    """
    Alias and identity index over a forest of templates.

    Read-only views
    - aliases: Mapping[str, int] (alias → identity)
    - templates: Mapping[int, Template] (identity → template)
    - reserved: frozenset[str]
    """

    def __init__(self, reserved=()):
        self._aliases = {}
        self._templates = {}
        self._parents = {}
        self._children = {}
        self._reserved = frozenset(reserved)
        self._last = 0

    aliases = mirror("aliases")
    templates = mirror("templates")
    reserved = mirror("reserved")

    def _admit(self, template, parent=None):
        if not isinstance(template, Template):
            raise TypeError("registry accepts only templates")

        for alias in template.aliases:
            if alias in self._reserved:
                raise DuplicateAliasError(f"alias {alias!r} is reserved", alias=alias)
            if (owner := self._aliases.get(alias)) is not None:
                raise DuplicateAliasError(
                    f"alias {alias!r} is already in use by template {owner}",
                    alias=alias,
                    identity=owner,
                )

        self._last += 1
        identity = self._last
        self._templates[identity] = template
        self._aliases.update(dict.fromkeys(template.aliases, identity))
        self._children[identity] = []
        if parent is not None:
            self._parents[identity] = parent
            self._children[parent].append(identity)

        logger.debug("registered template %d %s (parent: %s)", identity, template.aliases, parent)
        return identity

    def register(self, template, /):
        """
        Register a top-level template and return its fresh identity.

        Raises
        - DuplicateAliasError: an alias is reserved or already owned by any
          template, at any depth.
        """
        return self._admit(template)

    def attach_child(self, parent, template, /):
        """
        Register a template as a subcommand of `parent` and return its identity.

        Raises
        - UnknownParentError: `parent` is not a registered identity.
        - DuplicateAliasError: as register().
        """
        if parent not in self._templates:
            raise UnknownParentError(f"no template is registered with identity {parent!r}", parent=parent)
        return self._admit(template, parent)

    def lookup(self, alias, /):
        """
        Return the identity owning `alias`, or None.
        """
        return self._aliases.get(alias)

    def is_child_of(self, child, parent, /):
        return child in self._parents and self._parents[child] == parent

    def parent_of(self, identity, /):
        """
        Return the parent identity of a subcommand, or None for top-level templates.
        """
        return self._parents.get(identity)

    def children_of(self, identity, /):
        return tuple(self._children[identity])

    def has_children(self, identity, /):
        return bool(self._children[identity])

    def roots(self):
        return tuple(identity for identity in self._templates if identity not in self._parents)

    def walk(self):
        """
        Yield (identity, depth) pairs depth-first, in registration order.

        Top-level templates have depth 0, their subcommands depth 1, and so on.
        """
        stack = [(identity, 0) for identity in reversed(self.roots())]
        while stack:
            identity, depth = stack.pop()
            yield identity, depth
            stack.extend((child, depth + 1) for child in reversed(self._children[identity]))

    def __getitem__(self, identity, /):
        return self._templates[identity]

    def __contains__(self, identity, /):
        return identity in self._templates

    def __iter__(self):
        return iter(self._templates)

    def __len__(self):
        return len(self._templates)

    def __repr__(self):
        return f"registry(templates={len(self._templates)}, aliases={len(self._aliases)})"


__all__ = (
    "Registry",
)

"""
Hashparse parse results.

- Occurrence: one match of a template during a parse (identity, the alias as
  spelled on the command line, the consumed values, its occurrence index and
  the position of the flag token).
- Results: the write-once outcome of a successful parse. Every alias of every
  matched template, and its identity, resolve to the most recent occurrence.

Results never reference the registry: the alias index is copied out for the
matched templates only, so a result set stays valid and unchanged whatever
happens to the parser afterwards.
"""
from types import MappingProxyType

from .utils import mirror


class Occurrence:
    """
    One instance of a template being matched.

    Attributes (read-only)
    - identity: int, identity of the matched template.
    - alias: str, spelling used on the command line.
    - values: tuple[str, ...], consumed value tokens in encounter order.
    - index: int, 0-based count of earlier occurrences of the same template.
    - position: int, 0-based index of the flag token in the argument sequence.
    """

    __slots__ = ("_identity", "_alias", "_values", "_index", "_position")

    def __init__(self, identity, alias, values, index, position):
        self._identity = identity
        self._alias = alias
        self._values = tuple(values)
        self._index = index
        self._position = position

    identity = mirror("identity")
    alias = mirror("alias")
    values = mirror("values")
    index = mirror("index")
    position = mirror("position")

    @property
    def number_of_values(self):
        return len(self._values)

    def __eq__(self, other, /):
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.__rich_repr__() == other.__rich_repr__()

    def __hash__(self):
        return hash(self.__rich_repr__())

    def __rich_repr__(self):
        return (
            ("identity", self._identity),
            ("alias", self._alias),
            ("values", self._values),
            ("index", self._index),
            ("position", self._position),
        )

    def __repr__(self):
        return "occurrence(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


class Results:
    """
    Read-only view over the last occurrence of each matched template.

    Keys are aliases (any alias of a matched template) or template identities.

    Attributes
    - helped: bool, True when the scan stopped on a help alias.
    """

    __slots__ = ("_aliases", "_occurrences", "_helped")

    def __init__(self, occurrences=(), aliases=None, *, helped=False):
        """
        Build a result set.

        Parameters
        - occurrences: Iterable[Occurrence], last one per identity wins.
        - aliases: Mapping[str, int] | None, alias → identity for the matched
          templates (when None, each occurrence's own alias is indexed).
        - helped: bool
        """
        latest = {}
        for occurrence in occurrences:
            latest[occurrence.identity] = occurrence
        if aliases is None:
            aliases = {occurrence.alias: occurrence.identity for occurrence in latest.values()}
        self._occurrences = MappingProxyType(latest)
        self._aliases = MappingProxyType({
            alias: identity for alias, identity in aliases.items() if identity in latest
        })
        self._helped = helped

    helped = mirror("helped")

    def _resolve(self, key):
        if isinstance(key, str):
            return self._aliases.get(key)
        if isinstance(key, int) and not isinstance(key, bool):
            return key
        raise TypeError("results keys must be aliases (str) or identities (int)")

    def has(self, key, /):
        """
        True iff some occurrence of the template owning `key` was recorded.
        """
        return self._resolve(key) in self._occurrences

    def get(self, key, default=None, /):
        """
        Return the most recent Occurrence for `key`, or `default`.
        """
        return self._occurrences.get(self._resolve(key), default)

    def values(self, key, /):
        """
        Return the values of the most recent occurrence, or () when never matched.
        """
        if (occurrence := self.get(key)) is None:
            return ()
        return occurrence.values

    def __contains__(self, key, /):
        return self.has(key)

    def __getitem__(self, key, /):
        if (occurrence := self.get(key)) is None:
            raise KeyError(key)
        return occurrence

    def __iter__(self):
        return iter(sorted(self._occurrences.values(), key=lambda occurrence: occurrence.position))

    def __len__(self):
        return len(self._occurrences)

    def __repr__(self):
        return "results(%s)" % ", ".join(
            "%s=%r" % (occurrence.alias, occurrence.values) for occurrence in self
        )


__all__ = (
    "Occurrence",
    "Results",
)

"""Schema class mapping idents to entids and attributes to value types."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from query_algebrizer.parsing import ArgParser
from query_algebrizer.query import EntidOrInteger, IdentOrKeyword, Vector
from query_algebrizer.types import Keyword, ValueType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attribute:
    """An attribute's declared value type."""

    entid: int
    value_type: ValueType


class Schema:
    """A read-only snapshot of the store's idents and attributes.

    Lookups never mutate the schema, so one instance can be shared by any
    number of algebrizer passes.
    """

    def __init__(self) -> None:
        self._entids: dict[Keyword, int] = {}
        self._idents: dict[int, Keyword] = {}
        self._attributes: dict[int, Attribute] = {}

    @classmethod
    def parse(cls, definitions: str) -> Schema:
        """Parse schema definitions and create a schema.

        Each definition is a vector: ``[:db/ident 1]`` declares an ident, and
        ``[:person/name 65 :db.type/string]`` declares an attribute.

        Args:
            definitions: Definitions in argument syntax.

        Returns:
            A new Schema instance.

        Raises:
            ValueError: If a definition is malformed or conflicts with another.
            SyntaxError: If the text cannot be parsed.
        """
        parser = ArgParser()
        schema = cls()

        for entry in parser.parse(definitions):
            if not isinstance(entry, Vector) or len(entry.items) not in (2, 3):
                raise ValueError(f"Schema entries must be [ident entid] or [ident entid type]: {entry!r}")
            ident, entid = entry.items[0], entry.items[1]
            if not isinstance(ident, IdentOrKeyword):
                raise ValueError(f"Expected a keyword ident, got {ident!r}")
            if not isinstance(entid, EntidOrInteger) or not ValueType.REF.accommodates_integer(entid.value):
                raise ValueError(f"Expected an entid for {ident.keyword}, got {entid!r}")

            if len(entry.items) == 2:
                schema.add_ident(ident.keyword, entid.value)
                continue

            type_arg = entry.items[2]
            if not isinstance(type_arg, IdentOrKeyword):
                raise ValueError(f"Expected a value type keyword for {ident.keyword}, got {type_arg!r}")
            value_type = ValueType.from_keyword(str(type_arg.keyword))
            schema.add_attribute(ident.keyword, entid.value, value_type)

        logger.debug("Parsed schema with %d idents", len(schema))
        return schema

    def add_ident(self, keyword: Keyword, entid: int) -> None:
        """Register an ident.

        Raises:
            ValueError: If the keyword or entid is already mapped elsewhere.
        """
        existing = self._entids.get(keyword)
        if existing is not None and existing != entid:
            raise ValueError(f"Ident {keyword} is already entid {existing}")
        other = self._idents.get(entid)
        if other is not None and other != keyword:
            raise ValueError(f"Entid {entid} is already ident {other}")
        self._entids[keyword] = entid
        self._idents[entid] = keyword

    def add_attribute(self, keyword: Keyword, entid: int, value_type: ValueType) -> None:
        """Register an attribute and its value type."""
        self.add_ident(keyword, entid)
        existing = self._attributes.get(entid)
        if existing is not None and existing.value_type is not value_type:
            raise ValueError(f"Attribute {keyword} already has type {existing.value_type}")
        self._attributes[entid] = Attribute(entid=entid, value_type=value_type)

    def get_entid(self, keyword: Keyword) -> int | None:
        """Look up the entid for an ident, or None if it isn't known."""
        return self._entids.get(keyword)

    def get_ident(self, entid: int) -> Keyword | None:
        return self._idents.get(entid)

    def attribute_for_ident(self, keyword: Keyword) -> Attribute | None:
        entid = self._entids.get(keyword)
        if entid is None:
            return None
        return self._attributes.get(entid)

    def is_attribute(self, entid: int) -> bool:
        return entid in self._attributes

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._entids

    def __len__(self) -> int:
        return len(self._entids)

"""Reference table data model."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .exceptions import DecodeError


@dataclass(frozen=True)
class AttributeEntry:
    """One named bucket of a category, e.g. color 红 and its member numbers."""
    
    id: int
    number_type: str
    year: int
    category: str
    category_code: str
    name: str
    member_numbers: Tuple[str, ...]
    secondary_content: str = ''
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any], category_code: str, name: str) -> 'AttributeEntry':
        """Build an entry from one raw item of a decoded payload."""
        if not isinstance(data, Mapping):
            raise DecodeError(f"Entry {name!r} under code {category_code} is not an object")
        content = data.get('content1')
        if content is None:
            raise DecodeError(f"Entry {name!r} under code {category_code} has no member numbers")
        members = tuple(part.strip() for part in str(content).split(',') if part.strip())
        try:
            year = int(data.get('year') or 0)
            entry_id = int(data.get('id') or 0)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Entry {name!r} under code {category_code} has a bad id/year: {e}") from e
        return cls(
            id=entry_id,
            number_type=str(data.get('number_type', '')),
            year=year,
            category=str(data.get('type', '')),
            category_code=str(data.get('type_code', category_code)),
            name=str(data.get('name', name)),
            member_numbers=members,
            secondary_content=str(data.get('content2') or ''),
        )
    
    def contains(self, number: str) -> bool:
        return number in self.member_numbers


class AttributeTable:
    """
    Reference table for one (year, range) pair.
    
    Maps category code -> entry name -> AttributeEntry. Read-only once built;
    a refresh builds a new table instead of editing this one.
    """
    
    def __init__(self, sections: Optional[Mapping[str, Mapping[str, AttributeEntry]]] = None):
        frozen = {
            str(code): MappingProxyType(dict(entries))
            for code, entries in (sections or {}).items()
        }
        self._sections = MappingProxyType(frozen)
    
    @classmethod
    def from_payload(cls, payload: Any) -> 'AttributeTable':
        """
        Parse a decoded payload of shape {code: {name: item}}.
        
        Raises:
            DecodeError: If the payload does not have that shape
        """
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Reference payload must be an object, got {type(payload).__name__}")
        sections: Dict[str, Dict[str, AttributeEntry]] = {}
        for code, items in payload.items():
            if not isinstance(items, Mapping):
                raise DecodeError(f"Section {code!r} must be an object, got {type(items).__name__}")
            sections[str(code)] = {
                str(name): AttributeEntry.from_dict(item, str(code), str(name))
                for name, item in items.items()
            }
        return cls(sections)
    
    def section(self, category_code: str) -> Mapping[str, AttributeEntry]:
        """Entries under one category code, keyed by entry name (empty if absent)."""
        return self._sections.get(str(category_code), MappingProxyType({}))
    
    def get(self, category_code: str, name: str) -> Optional[AttributeEntry]:
        return self.section(category_code).get(name)
    
    def codes(self) -> Iterator[str]:
        return iter(self._sections)
    
    def __bool__(self) -> bool:
        return bool(self._sections)
    
    def __len__(self) -> int:
        return sum(len(entries) for entries in self._sections.values())
    
    def __repr__(self) -> str:
        return f"AttributeTable(codes={list(self._sections)}, entries={len(self)})"


EMPTY_TABLE = AttributeTable()

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from features.escaping.escaping_context import EscapingContext


@dataclass(frozen = True)
class Dialect:
    """
    A Markdown flavor: its features and, per context name, the tokens it treats as special
    together with their replacements. Contexts the dialect doesn't list fall back to the
    dialect-wide defaults. Replacements never depend on the surrounding text.
    """

    name: str
    features: frozenset[str] = frozenset()
    character_mappings: Mapping[str, Mapping[str, str]] = field(default_factory = dict)
    default_special_characters: tuple[str, ...] = ()
    default_character_mappings: Mapping[str, str] = field(default_factory = dict)

    def __post_init__(self):
        frozen_mappings = {
            context_name: MappingProxyType(dict(mapping))
            for context_name, mapping in self.character_mappings.items()
        }
        object.__setattr__(self, "features", frozenset(self.features))
        object.__setattr__(self, "character_mappings", MappingProxyType(frozen_mappings))
        object.__setattr__(self, "default_special_characters", tuple(self.default_special_characters))
        object.__setattr__(self, "default_character_mappings", MappingProxyType(dict(self.default_character_mappings)))

    def special_characters(self, context: EscapingContext) -> tuple[str, ...]:
        mapping = self.character_mappings.get(context.name)
        if mapping is None:
            return self.default_special_characters
        return tuple(mapping.keys())

    def escape_character(self, token: str, context: EscapingContext) -> str:
        mapping = self.character_mappings.get(context.name, {})
        if token in mapping:
            return mapping[token]
        if token in self.default_character_mappings:
            return self.default_character_mappings[token]
        return f"\\{token}"

    def supports_feature(self, feature: str) -> bool:
        return feature in self.features


def custom_dialect(
    name: str,
    features: Iterable[str] = (),
    character_mappings: Mapping[str, Mapping[str, str]] | None = None,
    default_special_characters: Iterable[str] | None = None,
    default_character_mappings: Mapping[str, str] | None = None,
) -> Dialect:
    default_character_mappings = default_character_mappings or {}
    if default_special_characters is None:
        default_special_characters = default_character_mappings.keys()
    return Dialect(
        name = name,
        features = frozenset(features),
        character_mappings = character_mappings or {},
        default_special_characters = tuple(default_special_characters),
        default_character_mappings = default_character_mappings,
    )

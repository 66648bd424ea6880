"""Data model of a save file: header, body, levels, objects and properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class SaveFormatError(Exception):
    """Raised when save data does not match the expected layout."""


@dataclass
class ObjectReference:
    """A reference to an object by level name and path name."""

    level_name: str = ""
    path_name: str = ""


@dataclass
class Property:
    """A named, typed property value of a saved object."""

    name: str = ""
    type: str = ""
    value: Any = None


@dataclass
class SaveFileHeader:
    """The uncompressed header at the start of a save file."""

    save_header_version: int = 0
    save_version: int = 0
    build_version: int = 0
    session_name: str = ""
    map_name: str = ""
    map_options: str = ""
    save_name: str = ""
    played_seconds: int = 0
    save_timestamp_ticks: int = 0
    session_visibility: int = 0
    editor_object_version: int = 0
    mod_metadata: str = ""
    mod_flags: int = 0
    save_identifier: str = ""
    unknown1: int = 0
    unknown2: int = 0
    session_random1: int = 0
    session_random2: int = 0
    cheat_flag: int = 0


@dataclass
class LevelInfo:
    """One level entry of a level grouping grid."""

    string_value: str = ""
    int_value: int = 0


@dataclass
class LevelGroupingGrid:
    """A named grid of level entries."""

    grid_name: str = ""
    unknown1: int = 0
    unknown2: int = 0
    level_count: int = 0
    level_infos: list[LevelInfo] = field(default_factory=list)


@dataclass
class ActorHeader:
    """Header of an actor object: identity and transform."""

    type_path: str = ""
    root: str = ""
    name: str = ""
    flags: int = 0
    need_transform: int = 0
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    rotation_z: float = 0.0
    rotation_w: float = 0.0
    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    scale_x: float = 0.0
    scale_y: float = 0.0
    scale_z: float = 0.0
    was_placed: int = 0


@dataclass
class ComponentHeader:
    """Header of a component object."""

    type_path: str = ""
    root: str = ""
    name: str = ""
    flags: int = 0
    parent_actor_name: str = ""


def _ends_with_terminator(properties: list[Property]) -> bool:
    if not properties:
        return False
    last = properties[-1]
    return last.name == "None" and last.type == ""


@dataclass
class ActorObject:
    """Saved state of an actor."""

    save_version: int = 0
    flag: int = 0
    size: int = 0
    parent_reference: ObjectReference = field(default_factory=ObjectReference)
    component_count: int = 0
    components: list[ObjectReference] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)

    def is_valid(self) -> bool:
        """Check the flag, size and the terminating "None" property."""
        return (
            self.flag in (0, 1)
            and self.size > 0
            and _ends_with_terminator(self.properties)
        )


@dataclass
class ComponentObject:
    """Saved state of a component."""

    save_version: int = 0
    flag: int = 0
    size: int = 0
    properties: list[Property] = field(default_factory=list)
    zero: int = 0

    def is_valid(self) -> bool:
        """Check the flag, size, zero field and the terminating "None" property."""
        return (
            self.flag in (0, 1)
            and self.size > 0
            and self.zero == 0
            and _ends_with_terminator(self.properties)
        )


@dataclass
class LevelData:
    """Headers, objects and collectables of one level."""

    name: str = ""
    size: int = 0
    header_count: int = 0
    actor_headers: list[ActorHeader] = field(default_factory=list)
    component_headers: list[ComponentHeader] = field(default_factory=list)
    collectable_count: int = 0
    collectables: list[ObjectReference] = field(default_factory=list)
    object_size: int = 0
    object_count: int = 0
    actor_objects: list[ActorObject] = field(default_factory=list)
    component_objects: list[ComponentObject] = field(default_factory=list)
    second_collectable_count: int = 0
    second_collectables: list[ObjectReference] = field(default_factory=list)


@dataclass
class SaveFileBody:
    """The decompressed body of a save file."""

    uncompressed_size: int = 0
    value6: int = 0
    none_string1: str = ""
    value0: int = 0
    unknown1: int = 0
    value1: int = 0
    none_string2: str = ""
    unknown2: int = 0
    level_grouping_grids: list[LevelGroupingGrid] = field(default_factory=list)
    sub_level_count: int = 0
    levels: list[LevelData] = field(default_factory=list)
    zero: int = 0
    reference_list_count: int = 0
    references: list[ObjectReference] = field(default_factory=list)

    def is_valid(self) -> bool:
        """Check the fixed marker values at the start of the body."""
        return (
            self.value6 == 6
            and self.value0 == 0
            and self.value1 == 1
            and self.none_string1 == "None"
            and self.none_string2 == "None"
        )


@dataclass
class ArrayStructProperty:
    """The struct header and elements of an array of structs."""

    name: str = ""
    type: str = ""
    size: int = 0
    padding: int = 0
    element_type: str = ""
    padding1: int = 0
    padding2: int = 0
    padding3: int = 0
    padding4: int = 0
    padding_byte: int = 0
    value: list[Any] = field(default_factory=list)


@dataclass
class InventoryItem:
    """An item stack entry of an inventory."""

    reference: ObjectReference = field(default_factory=ObjectReference)
    item_has_properties: int = 0
    item_type: ObjectReference = field(default_factory=ObjectReference)
    property_size: int = 0
    properties: list[Property] = field(default_factory=list)
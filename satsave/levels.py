"""Reading the headers, objects and collectables of one level."""

from __future__ import annotations

from functools import partial

from .properties import read_all_properties
from .reader import CountingReader, read_and_skip
from .saveformat import (
    ActorHeader,
    ActorObject,
    ComponentHeader,
    ComponentObject,
    LevelData,
    SaveFormatError,
)

COMPONENT_HEADER = 0
ACTOR_HEADER = 1
FLAGS_SAVE_VERSION = 51

# Save version, flag and size precede every object and are not counted in its size.
_OBJECT_PREFIX_SIZE = 12
_U64_MOD = 1 << 64


def read_level_header(
    reader: CountingReader, level_data: LevelData, version: int
) -> list[int]:
    """Read ``level_data.header_count`` object headers into ``level_data``.

    Returns the header type of each header, in order.
    """
    has_flags = version >= FLAGS_SAVE_VERSION
    header_types: list[int] = []
    for _ in range(level_data.header_count):
        header_type = reader.u32()
        header_types.append(header_type)
        if header_type == COMPONENT_HEADER:
            component = ComponentHeader(
                type_path=reader.string(), root=reader.string(), name=reader.string()
            )
            if has_flags:
                component.flags = reader.u32()
            component.parent_actor_name = reader.string()
            level_data.component_headers.append(component)
        elif header_type == ACTOR_HEADER:
            actor = ActorHeader(
                type_path=reader.string(), root=reader.string(), name=reader.string()
            )
            if has_flags:
                actor.flags = reader.u32()
            actor.need_transform = reader.u32()
            actor.rotation_x = reader.f32()
            actor.rotation_y = reader.f32()
            actor.rotation_z = reader.f32()
            actor.rotation_w = reader.f32()
            actor.position_x = reader.f32()
            actor.position_y = reader.f32()
            actor.position_z = reader.f32()
            actor.scale_x = reader.f32()
            actor.scale_y = reader.f32()
            actor.scale_z = reader.f32()
            actor.was_placed = reader.u32()
            level_data.actor_headers.append(actor)
        else:
            raise SaveFormatError(f"Unknown header type: {header_type}")
    return header_types


def read_level_object(
    reader: CountingReader, level_data: LevelData, header_type: int
) -> int:
    """Read one object of the given header type into ``level_data``.

    Returns the size the object declares for the data after its prefix.
    """
    if header_type == COMPONENT_HEADER:
        component = ComponentObject(
            save_version=reader.u32(), flag=reader.u32(), size=reader.u32()
        )
        component.properties = read_all_properties(reader)
        if not component.is_valid():
            raise SaveFormatError("Invalid component object")
        level_data.component_objects.append(component)
        return component.size
    if header_type == ACTOR_HEADER:
        actor = ActorObject(
            save_version=reader.u32(),
            flag=reader.u32(),
            size=reader.u32(),
            parent_reference=reader.object_reference(),
            component_count=reader.u32(),
        )
        actor.components = [
            reader.object_reference() for _ in range(actor.component_count)
        ]
        actor.properties = read_all_properties(reader)
        if not actor.is_valid():
            raise SaveFormatError("Invalid actor object")
        level_data.actor_objects.append(actor)
        return actor.size
    return 0


def _read_sized_object(
    reader: CountingReader, level_data: LevelData, header_type: int
) -> int:
    return read_level_object(reader, level_data, header_type) + _OBJECT_PREFIX_SIZE


def read_level_data(
    reader: CountingReader, version: int, is_persistent_level: bool
) -> LevelData:
    """Read a level: headers, collectables, objects and trailing collectables."""
    level = LevelData()
    if not is_persistent_level:
        level.name = reader.string()
    level.size = reader.u64()
    level.header_count = reader.u32()

    start = reader.position()
    header_types = read_level_header(reader, level, version)
    bytes_read = reader.position() - start

    # The declared size is unsigned; a shortfall wraps around like it does on disk.
    if (level.size - bytes_read) % _U64_MOD > 4:
        level.collectable_count = reader.u32()
        if level.collectable_count > 0 and is_persistent_level:
            reader.string()
            level.collectable_count = reader.u32()
        level.collectables = [
            reader.object_reference() for _ in range(level.collectable_count)
        ]

    level.object_size = reader.u64()
    level.object_count = reader.u32()
    if level.object_count > len(header_types):
        raise SaveFormatError(
            f"object count {level.object_count} exceeds header count {len(header_types)}"
        )
    for header_type in header_types[: level.object_count]:
        read_and_skip(reader, partial(_read_sized_object, reader, level, header_type))

    if not is_persistent_level and version >= FLAGS_SAVE_VERSION:
        reader.u32()

    level.second_collectable_count = reader.u32()
    level.second_collectables = [
        reader.object_reference() for _ in range(level.second_collectable_count)
    ]
    return level
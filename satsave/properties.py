"""Reading typed object properties and the struct values they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .reader import CountingReader, read_and_skip
from .saveformat import (
    ArrayStructProperty,
    InventoryItem,
    ObjectReference,
    Property,
    SaveFormatError,
)

NONE_NAME = "None"


@dataclass
class ArraySoftObjectProperty:
    """An element of an array of soft object references."""

    reference: ObjectReference = field(default_factory=ObjectReference)
    value: int = 0


@dataclass
class Box:
    """An axis-aligned bounding box."""

    min_x: float = 0.0
    min_y: float = 0.0
    min_z: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0
    max_z: float = 0.0
    is_valid: int = 0


@dataclass
class FluidBox:
    """The fluid content of a pipe or container."""

    value: float = 0.0


@dataclass
class LinearColor:
    """An RGBA colour with float channels."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


@dataclass
class Quat:
    """A rotation quaternion."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0


@dataclass
class RailroadTrackPosition:
    """A position along a railroad track."""

    object_ref: ObjectReference = field(default_factory=ObjectReference)
    offset: float = 0.0
    forward: float = 0.0


@dataclass
class Vector:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class DateTime:
    """A timestamp in ticks."""

    timestamp: int = 0


@dataclass
class Identity:
    """One online identity of a client."""

    type: int = 0
    data_size: int = 0
    data: bytes = b""


@dataclass
class ClientIdentityInfo:
    """A client's UUID and its online identities."""

    uuid: str = ""
    identity_count: int = 0
    identities: list[Identity] = field(default_factory=list)


_SCALAR_READERS: dict[str, Callable[[CountingReader], Any]] = {
    "IntProperty": CountingReader.i32,
    "FloatProperty": CountingReader.f32,
    "DoubleProperty": CountingReader.f64,
    "Int8Property": CountingReader.i8,
    "Int64Property": CountingReader.i64,
    "UInt32Property": CountingReader.u32,
    "StrProperty": CountingReader.string,
    "NameProperty": CountingReader.string,
}


def _read_array_soft_object(reader: CountingReader) -> ArraySoftObjectProperty:
    reference = reader.object_reference()
    return ArraySoftObjectProperty(reference=reference, value=reader.u32())


_ARRAY_ELEMENT_READERS: dict[str, Callable[[CountingReader], Any]] = {
    "ByteProperty": CountingReader.u8,
    "EnumProperty": CountingReader.string,
    "StrProperty": CountingReader.string,
    "ObjectProperty": CountingReader.object_reference,
    "InterfaceProperty": CountingReader.object_reference,
    "IntProperty": CountingReader.i32,
    "Int64Property": CountingReader.i64,
    "FloatProperty": CountingReader.f32,
    "SoftObjectProperty": _read_array_soft_object,
}


def read_all_properties(reader: CountingReader) -> list[Property]:
    """Read properties up to and including the terminating "None" entry."""
    properties: list[Property] = []
    while True:
        name = reader.string()
        if name == NONE_NAME:
            properties.append(Property(name=name))
            return properties
        if name == "":
            # An inventory item may carry a stray empty name before the real one.
            name = reader.string()
        property_type = reader.string()
        value = read_property_data(reader, property_type)
        properties.append(Property(name=name, type=property_type, value=value))


def _skip_header(reader: CountingReader) -> int:
    """Read size, index and padding byte; return the size."""
    size = reader.u32()
    reader.u32()
    reader.u8()
    return size


def read_property_data(reader: CountingReader, property_type: str) -> Any:
    """Read the data of one property of the given type and return its value.

    Set, enum, map and text properties are skipped and yield None.
    """
    scalar = _SCALAR_READERS.get(property_type)
    if scalar is not None:
        _skip_header(reader)
        return scalar(reader)

    if property_type == "BoolProperty":
        reader.u32()
        reader.u32()
        value = reader.u8()
        reader.u8()
        return value
    if property_type == "ByteProperty":
        reader.u32()
        reader.u32()
        enum_type = reader.string()
        reader.u8()
        if enum_type == NONE_NAME:
            return reader.u8()
        return reader.string()
    if property_type == "ObjectProperty":
        _skip_header(reader)
        return reader.object_reference()
    if property_type == "SoftObjectProperty":
        _skip_header(reader)
        reader.object_reference()
        return reader.u32()
    if property_type in ("SetProperty", "EnumProperty"):
        size = reader.u32()
        reader.u32()
        reader.string()
        reader.u8()
        reader.skip(size)
        return None
    if property_type == "StructProperty":
        reader.u32()
        reader.u32()
        struct_type = reader.string()
        reader.i64()
        reader.i64()
        reader.u8()
        return read_typed_data(reader, struct_type)
    if property_type == "ArrayProperty":
        return read_array_property(reader)
    if property_type == "MapProperty":
        size = reader.u32()
        reader.u32()
        reader.string()
        reader.string()
        reader.u8()
        reader.skip(size)
        return None
    if property_type == "TextProperty":
        size = reader.u32()
        reader.skip(size + 5)
        return None
    raise SaveFormatError(f"not implemented property type: {property_type}")


def _read_inventory_item(reader: CountingReader) -> InventoryItem:
    item = InventoryItem(reference=reader.object_reference())
    item.item_has_properties = reader.u32()
    if item.item_has_properties != 0:
        item.item_type = reader.object_reference()
        item.property_size = reader.u32()
        item.properties = read_all_properties(reader)
    return item


def _read_client_identity_info(reader: CountingReader) -> ClientIdentityInfo:
    info = ClientIdentityInfo(uuid=reader.string(), identity_count=reader.u32())
    for _ in range(info.identity_count):
        id_type = reader.u8()
        data_size = reader.u32()
        data = reader.read_exact(data_size)
        info.identities.append(Identity(type=id_type, data_size=data_size, data=data))
    return info


def _read_guid(reader: CountingReader) -> int:
    first = reader.i64()
    reader.i64()
    return first


_TYPED_READERS: dict[str, Callable[[CountingReader], Any]] = {
    "Box": lambda r: Box(r.f64(), r.f64(), r.f64(), r.f64(), r.f64(), r.f64(), r.u8()),
    "FluidBox": lambda r: FluidBox(r.f32()),
    "Vector": lambda r: Vector(r.f64(), r.f64(), r.f64()),
    "DateTime": lambda r: DateTime(r.i64()),
    "InventoryItem": _read_inventory_item,
    "LinearColor": lambda r: LinearColor(r.f32(), r.f32(), r.f32(), r.f32()),
    "Quat": lambda r: Quat(r.f64(), r.f64(), r.f64(), r.f64()),
    "RailroadTrackPosition": lambda r: RailroadTrackPosition(
        r.object_reference(), r.f32(), r.f32()
    ),
    "Guid": _read_guid,
    "ClientIdentityInfo": _read_client_identity_info,
}


def read_typed_data(reader: CountingReader, element_type: str) -> Any:
    """Read a struct value of the given type.

    Types without a known layout are read as a nested property list.
    """
    typed = _TYPED_READERS.get(element_type)
    if typed is not None:
        return typed(reader)
    return read_all_properties(reader)


def read_array_struct_property(
    reader: CountingReader, length: int
) -> ArrayStructProperty:
    """Read the struct header of an array of structs and its ``length`` elements."""
    prop = ArrayStructProperty(
        name=reader.string(),
        type=reader.string(),
        size=reader.u32(),
        padding=reader.u32(),
        element_type=reader.string(),
        padding1=reader.u32(),
        padding2=reader.u32(),
        padding3=reader.u32(),
        padding4=reader.u32(),
        padding_byte=reader.u8(),
    )

    def read_elements() -> int:
        for _ in range(length):
            prop.value.append(read_typed_data(reader, prop.element_type))
        return prop.size

    read_and_skip(reader, read_elements)
    return prop


def read_array_property(reader: CountingReader) -> Any:
    """Read an array property and return its elements.

    Arrays of element types without a known layout are skipped and yield None.
    """
    size = reader.u32()
    reader.u32()
    element_type = reader.string()
    reader.u8()
    length = reader.u32()

    if element_type == "StructProperty":
        return read_array_struct_property(reader, length)
    element_reader = _ARRAY_ELEMENT_READERS.get(element_type)
    if element_reader is not None:
        return [element_reader(reader) for _ in range(length)]
    if size < 4:
        raise SaveFormatError(f"array property size too small: {size}")
    reader.skip(size - 4)
    return None
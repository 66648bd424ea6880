import io
import struct

import pytest

from satsave.properties import (
    ArraySoftObjectProperty,
    Box,
    ClientIdentityInfo,
    DateTime,
    FluidBox,
    Identity,
    LinearColor,
    Quat,
    RailroadTrackPosition,
    Vector,
    read_all_properties,
    read_array_property,
    read_array_struct_property,
    read_property_data,
    read_typed_data,
)
from satsave.reader import CountingReader
from satsave.saveformat import (
    ArrayStructProperty,
    InventoryItem,
    ObjectReference,
    Property,
    SaveFormatError,
)


def s(text):
    data = text.encode("utf-8") + b"\x00"
    return struct.pack("<i", len(data)) + data


def u8(v):
    return struct.pack("<B", v)


def u32(v):
    return struct.pack("<I", v)


def i32(v):
    return struct.pack("<i", v)


def i64(v):
    return struct.pack("<q", v)


def f32(v):
    return struct.pack("<f", v)


def f64(v):
    return struct.pack("<d", v)


def ref(level, path):
    return s(level) + s(path)


def header(size=0, index=0):
    return u32(size) + u32(index) + u8(0)


def make_reader(data):
    return CountingReader(io.BytesIO(data))


def test_read_all_properties_until_none():
    data = s("Health") + s("IntProperty") + header(4) + i32(42) + s("None")
    reader = make_reader(data)
    props = read_all_properties(reader)
    assert props == [
        Property(name="Health", type="IntProperty", value=42),
        Property(name="None", type="", value=None),
    ]
    assert reader.position() == len(data)


def test_read_all_properties_skips_empty_name():
    data = s("") + s("Count") + s("UInt32Property") + header(4) + u32(9) + s("None")
    props = read_all_properties(make_reader(data))
    assert props[0] == Property(name="Count", type="UInt32Property", value=9)
    assert props[-1].name == "None"


@pytest.mark.parametrize(
    "ptype, payload, expected",
    [
        ("IntProperty", i32(-7), -7),
        ("FloatProperty", f32(1.5), 1.5),
        ("DoubleProperty", f64(2.25), 2.25),
        ("Int8Property", struct.pack("<b", -3), -3),
        ("Int64Property", i64(-1234567890123), -1234567890123),
        ("UInt32Property", u32(4000000000), 4000000000),
        ("StrProperty", s("hello"), "hello"),
        ("NameProperty", s("name"), "name"),
    ],
)
def test_scalar_properties(ptype, payload, expected):
    data = header(len(payload)) + payload
    reader = make_reader(data)
    assert read_property_data(reader, ptype) == expected
    assert reader.position() == len(data)


def test_bool_property():
    data = u32(0) + u32(0) + u8(1) + u8(0)
    reader = make_reader(data)
    assert read_property_data(reader, "BoolProperty") == 1
    assert reader.position() == len(data)


def test_byte_property_plain_byte():
    data = u32(1) + u32(0) + s("None") + u8(0) + u8(200)
    assert read_property_data(make_reader(data), "ByteProperty") == 200


def test_byte_property_enum_string():
    data = u32(10) + u32(0) + s("EColor") + u8(0) + s("Red")
    assert read_property_data(make_reader(data), "ByteProperty") == "Red"


def test_object_property():
    data = header() + ref("Persistent_Level", "Path.Obj")
    value = read_property_data(make_reader(data), "ObjectProperty")
    assert value == ObjectReference("Persistent_Level", "Path.Obj")


def test_soft_object_property_returns_trailing_value():
    data = header() + ref("L", "P") + u32(77)
    reader = make_reader(data)
    assert read_property_data(reader, "SoftObjectProperty") == 77
    assert reader.position() == len(data)


@pytest.mark.parametrize("ptype", ["SetProperty", "EnumProperty"])
def test_skipped_set_and_enum(ptype):
    data = u32(6) + u32(0) + s("Inner") + u8(0) + b"\xaa" * 6 + b"tail"
    reader = make_reader(data)
    assert read_property_data(reader, ptype) is None
    assert reader.read_rest() == b"tail"


def test_skipped_map():
    data = u32(3) + u32(0) + s("Key") + s("Val") + u8(0) + b"xyz" + b"tail"
    reader = make_reader(data)
    assert read_property_data(reader, "MapProperty") is None
    assert reader.read_rest() == b"tail"


def test_skipped_text():
    data = u32(4) + b"\x00" * 9 + b"tail"
    reader = make_reader(data)
    assert read_property_data(reader, "TextProperty") is None
    assert reader.read_rest() == b"tail"


def test_unknown_property_type_raises():
    with pytest.raises(SaveFormatError):
        read_property_data(make_reader(b""), "WeirdProperty")


def test_truncated_property_raises():
    with pytest.raises(SaveFormatError):
        read_property_data(make_reader(header(4) + b"\x01"), "IntProperty")


def struct_header(struct_type):
    return u32(0) + u32(0) + s(struct_type) + i64(0) + i64(0) + u8(0)


def test_struct_property_vector():
    data = struct_header("Vector") + f64(1.0) + f64(2.0) + f64(3.0)
    reader = make_reader(data)
    assert read_property_data(reader, "StructProperty") == Vector(1.0, 2.0, 3.0)
    assert reader.position() == len(data)


def test_struct_property_unknown_type_reads_properties():
    data = struct_header("Custom") + s("A") + s("IntProperty") + header(4) + i32(5) + s("None")
    value = read_property_data(make_reader(data), "StructProperty")
    assert value == [Property("A", "IntProperty", 5), Property("None")]


def test_typed_box():
    data = f64(1) + f64(2) + f64(3) + f64(4) + f64(5) + f64(6) + u8(1)
    assert read_typed_data(make_reader(data), "Box") == Box(1, 2, 3, 4, 5, 6, 1)


def test_typed_small_structs():
    assert read_typed_data(make_reader(f32(0.5)), "FluidBox") == FluidBox(0.5)
    assert read_typed_data(make_reader(i64(99)), "DateTime") == DateTime(99)
    color = f32(0.25) + f32(0.5) + f32(0.75) + f32(1.0)
    assert read_typed_data(make_reader(color), "LinearColor") == LinearColor(0.25, 0.5, 0.75, 1.0)
    quat = f64(0) + f64(0) + f64(0) + f64(1)
    assert read_typed_data(make_reader(quat), "Quat") == Quat(0, 0, 0, 1)


def test_typed_railroad_position():
    data = ref("L", "Track") + f32(12.5) + f32(1.0)
    value = read_typed_data(make_reader(data), "RailroadTrackPosition")
    assert value == RailroadTrackPosition(ObjectReference("L", "Track"), 12.5, 1.0)


def test_typed_guid_returns_first_half():
    reader = make_reader(i64(11) + i64(22))
    assert read_typed_data(reader, "Guid") == 11
    assert reader.position() == 16


def test_typed_client_identity_info():
    data = s("uuid-1") + u32(2) + u8(1) + u32(3) + b"abc" + u8(6) + u32(0)
    value = read_typed_data(make_reader(data), "ClientIdentityInfo")
    assert value == ClientIdentityInfo(
        uuid="uuid-1",
        identity_count=2,
        identities=[Identity(1, 3, b"abc"), Identity(6, 0, b"")],
    )


def test_typed_inventory_item_without_properties():
    data = ref("", "Desc_Ore") + u32(0)
    item = read_typed_data(make_reader(data), "InventoryItem")
    assert item == InventoryItem(reference=ObjectReference("", "Desc_Ore"))


def test_typed_inventory_item_with_properties():
    props = s("X") + s("IntProperty") + header(4) + i32(3) + s("None")
    data = ref("", "Desc") + u32(1) + ref("", "Type") + u32(len(props)) + props
    reader = make_reader(data)
    item = read_typed_data(reader, "InventoryItem")
    assert item.item_type == ObjectReference("", "Type")
    assert item.property_size == len(props)
    assert item.properties == [Property("X", "IntProperty", 3), Property("None")]
    assert reader.position() == len(data)


def array_header(element_type, length, size=0):
    return u32(size) + u32(0) + s(element_type) + u8(0) + u32(length)


@pytest.mark.parametrize(
    "element_type, payload, expected",
    [
        ("IntProperty", i32(1) + i32(-2), [1, -2]),
        ("Int64Property", i64(5) + i64(6), [5, 6]),
        ("FloatProperty", f32(0.5) + f32(2.0), [0.5, 2.0]),
        ("ByteProperty", u8(1) + u8(2), [1, 2]),
        ("StrProperty", s("a") + s("b"), ["a", "b"]),
        ("EnumProperty", s("x") + s("y"), ["x", "y"]),
        (
            "ObjectProperty",
            ref("L", "A") + ref("L", "B"),
            [ObjectReference("L", "A"), ObjectReference("L", "B")],
        ),
        (
            "InterfaceProperty",
            ref("L", "A") + ref("M", "B"),
            [ObjectReference("L", "A"), ObjectReference("M", "B")],
        ),
        (
            "SoftObjectProperty",
            ref("L", "A") + u32(3) + ref("L", "B") + u32(4),
            [
                ArraySoftObjectProperty(ObjectReference("L", "A"), 3),
                ArraySoftObjectProperty(ObjectReference("L", "B"), 4),
            ],
        ),
    ],
)
def test_array_property_elements(element_type, payload, expected):
    data = array_header(element_type, 2) + payload
    reader = make_reader(data)
    assert read_array_property(reader) == expected
    assert reader.position() == len(data)


def test_array_property_unknown_type_skipped():
    data = array_header("MapProperty", 1, size=4 + 5) + b"\x01" * 5 + b"tail"
    reader = make_reader(data)
    assert read_array_property(reader) is None
    assert reader.read_rest() == b"tail"


def test_array_property_via_property_data():
    data = array_header("IntProperty", 1) + i32(8)
    assert read_property_data(make_reader(data), "ArrayProperty") == [8]


def struct_array_header(element_type, size):
    return (
        s("mItems") + s("StructProperty") + u32(size) + u32(0) + s(element_type)
        + u32(0) + u32(0) + u32(0) + u32(0) + u8(0)
    )


def test_array_struct_property_reads_and_skips_trailing():
    elements = f64(1) + f64(2) + f64(3)
    data = struct_array_header("Vector", len(elements) + 4) + elements + b"\x00" * 4 + b"tail"
    reader = make_reader(data)
    prop = read_array_struct_property(reader, 1)
    assert isinstance(prop, ArrayStructProperty)
    assert prop.name == "mItems"
    assert prop.element_type == "Vector"
    assert prop.value == [Vector(1.0, 2.0, 3.0)]
    assert reader.read_rest() == b"tail"


def test_array_struct_property_size_too_small_raises():
    elements = f64(1) + f64(2) + f64(3)
    data = struct_array_header("Vector", 8) + elements
    with pytest.raises(SaveFormatError):
        read_array_struct_property(make_reader(data), 1)


def test_array_property_of_structs():
    elements = f32(0.5) + f32(1.5)
    data = array_header("StructProperty", 2) + struct_array_header("FluidBox", len(elements)) + elements
    reader = make_reader(data)
    prop = read_array_property(reader)
    assert prop.value == [FluidBox(0.5), FluidBox(1.5)]
    assert reader.position() == len(data)
# satsave

`satsave` reads Satisfactory save files (`.sav`). It decodes the uncompressed
save header and inflates the zlib-compressed chunks of the body. It then reads
the level grouping grids, every sub-level, the persistent level and the
trailing object reference list. The result is plain Python dataclasses. The
package uses only the standard library.

## Installation

```
pip install .
```

To run the tests, install with the test extra and run pytest:

```
pip install .[test]
pytest
```

## Command line

```
satsave path/to/save.sav
```

The command logs its progress at INFO level to standard error:

- the session name and the save, header and build versions;
- a notice that the body is being decompressed;
- a `Progress ...% ETA: ...s` line once a second while the body is read;
- the time the reading took.

When reading is done, it prints `Save file parsed successfully!` to standard
output, followed by the uncompressed size recorded in the body, and exits
with 0. If the file cannot be opened or is malformed, it prints
`Error: <reason>` to standard error and exits with 1.

## Library use

```python
from satsave.parser import parse_save_file

body = parse_save_file("my_factory.sav")
print(body.uncompressed_size)

for level in body.levels:
    print(level.name or "<persistent>", len(level.actor_headers), len(level.actor_objects))
```

`satsave.parser.parse_save_file` opens the file and returns a `SaveFileBody`
from `satsave.saveformat`, which holds:

- `level_grouping_grids`: five `LevelGroupingGrid` entries, each with its
  `LevelInfo` list.
- `levels`: one `LevelData` per sub-level. The persistent level comes last
  and has an empty `name`. Each `LevelData` holds `actor_headers`,
  `component_headers`, `actor_objects`, `component_objects` and its
  collectable references.
- `references`: the trailing list of `ObjectReference` values. If this list
  is damaged, a warning is logged and the entries read before the damage are
  kept.

Each `ActorObject` and `ComponentObject` keeps its properties as a list of
`Property(name, type, value)` entries. The list ends with the `None`
terminator. Struct values are dataclasses from `satsave.properties`:
`Vector`, `Quat`, `Box`, `FluidBox`, `LinearColor`, `DateTime`,
`RailroadTrackPosition`, `ClientIdentityInfo`, and `InventoryItem` and
`ArrayStructProperty` from `satsave.saveformat`. A struct type without a
known layout is read as a nested property list.

Lower-level entry points:

- `satsave.readsave.read_save(stream)` reads a save from an open binary stream.
- `satsave.readsave.read_header(stream)` reads only the `SaveFileHeader`.
- `satsave.compressed.decompress_body(stream)` inflates the compressed chunks
  that follow the header. It returns the data and the total declared size.
- `satsave.reader.CountingReader` is the little-endian reader that the other
  modules build on. It reads integers, floats, length-prefixed UTF-8 or
  UTF-16 strings and object references, and tracks the byte position.

A malformed or unsupported file raises `satsave.saveformat.SaveFormatError`.

## Limitations

- The package only reads save files. It cannot write or modify them.
- The contents of set, enum, map and text properties are skipped, and their
  value is `None`. Arrays whose element type has no known layout are skipped
  the same way.
- For a `Guid` struct, only the first 64-bit half is kept as the value.
- A property type that the reader does not know raises `SaveFormatError`.
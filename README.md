# bdmodel

Building blocks for a block-diagram or schematic data model:

- `bdmodel.object_type`: `TypeId` and `ObjectType`, which name each kind of model object (`Node`, `Pin`, `Net` and so on).
- `bdmodel.objects`: `ModelObject`, the base object. It has an optional parent and a set of named properties.
- `bdmodel.layered_options`: `LayeredOptions`, the spacing and direction settings for a layered layout, with built-in defaults.
- `bdmodel.rtree` and `bdmodel.rtree_rect`: an n-dimensional R-tree of bounding boxes (`RTree`) and its box type (`Rect`).
- `bdmodel.rtree_store`: `save` and `load`, which write an R-tree to a binary file and read it back.

The package needs nothing outside the standard library.

## Installation

```
pip install bdmodel
```

## Object types

```python
from bdmodel.object_type import ObjectType, TypeId

t = ObjectType("Node")
assert t.type == TypeId.NODE
assert ObjectType(TypeId.PIN).name == "Pin"
assert ObjectType(500).type == TypeId.UNKNOWN   # ids out of range become UNKNOWN
assert ObjectType("Pin") == 50                  # compares equal to the plain id
```

The id `TypeId.LIB_SYMBOL` has no name entry, so its `name` is `"Unknown"`.

## Model objects

`ModelObject(parent)` holds properties by name:

- `add_property(prop)` accepts any object that has `owner` and `name` attributes and a `value_string()` method.
- A property is ignored when its `owner` is not this object or when its value text is empty.
- `find_property(name)` returns the property with that name, or `None`.
- `properties()` lists the properties ordered by name.
- `delete_property(name)` removes one property.
- `delete()` drops every property, and afterwards `is_alive()` returns `False`.
- `clone()` copies the parent but not the properties.

## Layout options

```python
from bdmodel.layered_options import LayeredOptions, instance

options = instance()                  # shared object holding the defaults
print(options.node_and_node_h)        # 20
print(options.layout_direction)       # 2  (1: up, 2: right, 3: down, 4: left)
print(options.get("SpacingOptions", "PortAndPort"))  # 5

from_file = LayeredOptions.from_ini("LayeredOptions.ini")
```

`from_ini` reads INI sections as setting groups. If the file is missing, it issues a warning and returns the defaults. The built-in defaults always win for the keys they define, so settings from a file only add keys that have no default. The typed attributes convert their values:

- The boolean settings (`spacing_individual`, `unzipping_layer_split`, `inside_self_loops`) convert to `bool`.
- The other settings convert to unsigned integers. A value that is missing, not a number or out of range reads as 0.

## R-tree

```python
from bdmodel.rtree import RTree
from bdmodel import rtree_store

tree = RTree(2, 8, 4)                 # dimensions, max and min branches per node
tree.insert((0, 0), (10, 10), 1)
tree.insert((20, 20), (30, 30), 2)

found = []
count = tree.search((5, 5), (25, 25), lambda item: found.append(item) or True)
print(count, sorted(found))           # 2 [1, 2]
print(sorted(tree.iter_overlapping((0, 0), (5, 5))))  # [1]
print(len(tree), sorted(tree))        # 2 [1, 2]

print(tree.nearest_neighbors((0, 0)))  # [(0, 1), (28, 2)]

tree.remove((0, 0), (10, 10), 1)      # True if an entry equal to 1 was removed
```

Query behaviour:

- Boxes whose edges touch count as overlapping.
- If the `search` callback returns a false value, the search stops.
- `nearest_neighbors(point, terminate, accept, squared_dist)` returns `(distance, data)` pairs in best-first order.
- By default, each entry is measured by the rounded distance from the point to its box.
- `terminate(count, next_distance)` ends the search when it returns true.
- `accept(data)` filters the results.

### Saving and loading

```python
rtree_store.save(tree, "index.rtree")
other = RTree(2, 8, 4)
rtree_store.load(other, "index.rtree")
```

Only integer data that fits in 64 bits can be saved. `load` empties the tree first. It then raises `ValueError` in two cases:

- the file was written for a tree with different dimensions or node limits;
- the file is truncated.

## What the package does not provide

- **No property value type.** `ModelObject` stores any object that has the attributes it checks, but the package has no typed property class of its own.
- **No shared enumerations.** Object flags, label types, connection modes, pin shapes and directions are not defined.
- **No diagram element classes.** Nodes, pins, nets, symbols, shapes and the like have type ids, but no classes.
- **No layout engine.** Only the layout settings are included.
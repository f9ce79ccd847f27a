# brushkit

Pure-Python helpers for Quake-style level data. There are no runtime
dependencies.

## Modules

- **`brushkit.brush`**: convex brushes built from half-space planes.
  - `BrushPlane`: a frozen plane with `normal` and `distance`.
    `from_triangle`, `point_side`, `project`,
    `calculate_intersection_point` (returns `None` for parallel planes) and
    unary minus.
  - `BrushUV` and `BrushSurface`: texture alignment and a textured plane.
    `BrushSurface.inverted()` flips the plane.
  - `ConvexHull`: the base for hulls. It provides `contains_point`,
    `calculate_vertices`, `contains_plane` and `center`.
  - `Brush`: a hull made of `BrushSurface`s. `cut(along)` cuts it along a
    surface. `polygonize()` yields one `BrushSurfacePolygon` per face.
  - `BrushSurfacePolygon`: sorted, de-duplicated face vertices with
    triangle-fan `indices`. `vertices` and `indices` are properties.
  - `generate_mesh_from_brush_polygons(polygons, scale, texture_size)`
    returns a `BrushMesh` with `positions`, `normals`, `uvs` and `indices`.
- **`brushkit.bsp`**:
  - `BspBrush`: a hull given as a plain list of planes, held in
    `brush_planes`.
  - `get_model_idx(classname, model_property)`: returns `0` for
    `worldspawn`. For a `"*N"` model property it returns `N`, and otherwise
    it returns `None`.
  - The `GENERIC_MATERIAL_PREFIX` and `TEXTURE_PREFIX` label prefixes.
- **`brushkit.lighting`**:
  - `LightingAnimator`: a sequence of up to 64 RGB frames, with `speed` and
    `interpolate`. It has `new`, `unanimated`, `sample(seconds)`,
    `to_dict`, `from_dict` and `from_sequence`.
  - `LightingAnimators`: a mapping from a style number (0–255) to an
    animator, with `to_dict` and `from_dict`.
  - `AnimatedLightingType`.
- **`brushkit.irradiance`**:
  - `IrradianceVolumeBuilder`: lays out six directional sub-grids
    (`IrradianceVolumeDirection`). It has `put`, `put_all`, `linearize`,
    `delinearize` and `full_size`. `build()` returns a `VolumeImage` with
    RGBA8 bytes.
  - `IrradianceVolumeMultipliers`: per-direction scaling, with the presets
    `IDENTITY` and `SLIGHT_SHADOW`.
  - `flood_non_filled(...)`: fills each empty cell with the average of its
    filled neighbours, per style.
- **`brushkit.fgd`**: FGD `choices` properties from Python enums.
  - `property_type_choices` returns `(ChoicesKey, title)` pairs.
  - `fgd_parse` raises `FgdChoiceError` on an unknown value.
  - `fgd_to_string_unquoted`.
  - With `number_key=True`, the member values are the keys.
- **`brushkit.classinfo`**: entity class metadata.
  - `QuakeClassType`.
  - `Size.parse("-8 -8 -8, 8 8 8")` and `str(size)`.
  - `extract_doc`.
  - The case converters `to_snake_case`, `to_shouty_snake_case`,
    `to_lower_camel_case` and `to_pascal_case`.
  - `convert_classname`, `class_name` and `compare_path`.

## Installation

```
pip install .
```

To run the tests, install the extra with `pip install .[test]` and then run
`pytest`.

## Example

```python
from brushkit.brush import Brush, BrushPlane, BrushSurface

brush = Brush()
for normal in [(1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1)]:
    brush.surfaces.append(BrushSurface(plane=BrushPlane(normal=normal, distance=-16.0)))

assert brush.contains_point((0.0, 0.0, 0.0))
assert not brush.contains_point((32.0, 0.0, 0.0))

for polygon in brush.polygonize():
    print(polygon.surface.texture, polygon.vertices, polygon.indices)
```

```python
from brushkit.lighting import LightingAnimator

flicker = LightingAnimator.new(0.5, 1.0, [(0.0, 0.0, 0.0), (1.0, 1.0, 1.0)])
print(flicker.sample(1.0))  # (0.5, 0.5, 0.5)
```

## What it does not do

brushkit works only on data that is already in memory. It does not:

- read or write `.map`, `.bsp`, `.lit` or `.fgd` files;
- load textures or palettes;
- render meshes or lighting, or write images to disk.

There is no command-line program.
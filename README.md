# cubraycaster

A small first-person maze viewer. It reads a `.cub` scene file describing
wall textures, floor and ceiling colours and a grid map, checks it, and
shows the maze in a raycast 3-D view with a minimap in the top-left corner.
The window is drawn with pygame; textures are read with Pillow.

## Installing

```
pip install .
```

## Running

```
cubraycaster maps/level.cub
```

Exactly one argument is expected: the path to a file ending in `.cub`.
Any problem with the file or its textures is written to standard error as a
coloured `Error: ...` line and the command exits with status 1.

### Controls

| Key                 | Action              |
|---------------------|---------------------|
| `W` / Up arrow      | move forward        |
| `S` / Down arrow    | move backward       |
| Left / Right arrow  | turn left / right   |
| `Esc`               | quit                |

Closing the window also quits. Held keys repeat.

## Scene files

The first six non-empty lines set the scene elements, in any order:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0
```

* `NO`, `SO`, `WE`, `EA`: the image used for walls facing each direction.
  Any image format Pillow can open is accepted.
* `F`, `C`: floor and ceiling colour as three `R,G,B` components, each
  0–255, with no spaces.

Each identifier must appear exactly once, and an element line may hold only
one gap between the identifier and its value. Blank lines may come before the
map. The map follows, made of:

* `1` wall, `0` floor, space for empty space;
* exactly one of `N`, `S`, `E`, `W`: the player's start cell and the
  direction it faces.

The map must be closed: no floor cell or player cell may lie on the edge of
the map or next to a space or a missing cell. Once the map has started, an
empty line is an error. A scene needs at least three map rows.

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0

111111
100001
10N001
100001
111111
```

## Using it as a library

```python
from cubraycaster.validate import load_scene
from cubraycaster.raycast import Player, cast_ray

scene = load_scene("maps/level.cub")
player = Player.from_grid(scene.grid, scene.direction)
hit = cast_ray(scene.grid, player.x, player.y, player.angle + 0.1)
print(hit.distance, hit.facing, hit.vertical)
```

* `cubraycaster.validate.load_scene` reads and checks a scene file and
  returns a `cubraycaster.scene.Scene`; it raises
  `cubraycaster.scene.SceneError` when the file is invalid.
* `Player.from_grid` places the player at the centre of the spawn cell.
  `Player.move_forward`, `Player.move_backward` and `Player.rotate` move it,
  refusing steps into walls.
* `cast_ray` returns a `RayHit` with the distance to the nearest wall, the
  face it hit and where along that face. A ray cast exactly along an axis
  hits nothing and has distance 0.
* `cubraycaster.render` draws into a `Frame` of packed `0xRRGGBB` pixels:
  `draw_view`, `draw_minimap` and `draw_rays` (a top-down overview of the map
  with every ray). `Frame.to_rgb` returns an `(height, width, 3)` byte array.
  `Texture.load` reads an image file into a texture.
* `cubraycaster.app.Game.from_scene(scene, textures)` builds a game;
  `Game.render` returns a fresh frame without opening a window, and
  `Game.handle_key` applies a key code and redraws.

## What it does not do

There is no side-stepping: `A` and `D` do nothing. There are no sprites,
doors, sounds or mouse control; the view only walks and turns.
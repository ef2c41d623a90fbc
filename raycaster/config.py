import math
import sys

# Screen settings
SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
FPS = 60
WINDOW_TITLE = "Raycast Renderer"

# Player settings
# Movement speed in map units per second
MOVE_SPEED = 3.0
# Rotation speed in radians per second
ROT_SPEED = math.pi
# Displacements at or below this are treated as no movement
MOVE_EPSILON = sys.float_info.epsilon
# Minimum distance kept between the player and a wall (map units)
CLEARANCE = 0.1
# Length of the collision ray cast along the movement direction (map units)
COLLISION_PROBE_DISTANCE = 1.0
# Start position and facing (unit vector)
PLAYER_START = (2.0, 2.0)
PLAYER_DIRECTION = (1.0, 0.0)

# Map settings
MAP_WIDTH = 8
MAP_HEIGHT = 8
# Interior wall cells placed inside the bordered room
INTERIOR_WALLS = ((3, 3),)

# Tile kinds
TILE_EMPTY = 0
TILE_WALL = 1

# Raycasting settings
# Field of view angle (in radians)
FOV = math.radians(60.0)

# Lighting
# Distance falloff is kept but switched off: every hit is fully lit
LIGHT_FALLOFF = False
# Distance at which falloff starts dimming walls (map units)
LIGHT_FALLOFF_RANGE = 10.0
MIN_LIGHT = 0.1

# Colors (RGB)
WALL_COLOR = (0xF9, 0xD4, 0xA4)
CEILING_COLOR = (0xFF, 0xFF, 0xFF)
FLOOR_COLOR = (0xBC, 0x78, 0xA2)
CROSSHAIR_COLOR = (0xFF, 0x00, 0x00)
# Draw the centre column of wall pixels in CROSSHAIR_COLOR
SHOW_CROSSHAIR = False

# Number of worker threads for the column and shading passes
RENDER_WORKERS = 4

# Root logging level used by the entry point
LOG_LEVEL = "INFO"

# Arena League Configuration Constants

# Surface dimensions (logical units)
SCREEN_W = 500
SCREEN_H = 400
FPS = 60

# Arena settings
ARENA_RADIUS = 180.0
BODY_RADIUS = 12.0
GAP_HALF_ANGLE = 0.28  # ~100 unit goal mouth at ARENA_RADIUS
ROTATION_RATE = 0.008  # radians per physics step
START_ROTATION = 0.0

# Match clock
MATCH_DURATION = 90  # clock ticks
TICK_SECONDS = 1.0
GOAL_PAUSE_SECONDS = 1.5
FINAL_WHISTLE_SECONDS = 2.0

# Kickoff layout, relative to the arena center: (dx, dy, vx, vy)
KICKOFF_A = (-50.0, 0.0, 3.0, 2.0)
KICKOFF_B = (90.0, 60.0, -2.5, -3.0)

# Colors
PALETTE = {
    "background": (240, 253, 244),
    "arena_ring": (55, 0, 60),
    "goal_mouth": (0, 255, 65),
    "goal_post": (255, 255, 255),
    "body_outline": (255, 255, 255),
    "initial": (255, 255, 255),
    "hud_text": (88, 28, 135),
    "banner": (22, 163, 74),
}

BG = PALETTE["background"]
ARENA_RING = PALETTE["arena_ring"]
GOAL_MOUTH = PALETTE["goal_mouth"]
HUD_TEXT = PALETTE["hud_text"]

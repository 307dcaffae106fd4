# --- Display ---
WIDTH = 500
HEIGHT = 600
TICK_MS = 20                # one simulation tick every 20 ms (~50 ticks/s)
FPS = 1000 // TICK_MS
RENDER_FPS = 120            # event loop polling rate, independent of the tick driver

# --- Physics ---
GRAVITY_BASE = 0.25         # px/tick^2, positive pulls down
GRAVITY_ASCEND = -0.4       # applied while the ascend key is held

# --- Player ---
PLAYER_X = 50
PLAYER_Y = 150
PLAYER_W = 40
PLAYER_H = 30

# --- Obstacles ---
OBSTACLE_W = 50
OBSTACLE_SPEED = 2          # px moved left per tick
OBSTACLE_GAP = 120          # vertical opening between a top/bottom pair
OBSTACLE_MIN_H = 20         # neither obstacle of a pair is shorter than this
SPAWN_PERIOD = 120          # ticks between pairs (~2.4 s)

# --- Scoring ---
SCORE_DIVISOR = 10          # one point every 10 ticks
SEED_DEFAULT = None         # None -> random seed per launch

# --- Text ---
FONT_FAMILY = "sans-serif"
SCORE_FONT_PX = 24
SCORE_POS = (10, 30)
SCORE_LABEL = "Score: "
GAME_OVER_FONT_PX = 40
GAME_OVER_TEXT = "GAME OVER"
GAME_OVER_POS = (WIDTH // 2 - 120, HEIGHT // 2)

# --- Assets ---
ASSET_DIR = "images"
ASSET_FILES = {
    "background": "bg.png",
    "player": "flappy.png",
    "obstacle_top": "obstacle_top.png",
    "obstacle_bottom": "obstacle_bottom.png",
}

# --- Colors (RGB) ---
COLOR_TEXT = (0, 0, 0)
COLOR_DANGER = (220, 30, 30)
COLOR_FG = (245, 245, 245)
COLOR_BUTTON = (40, 60, 90)
COLOR_BUTTON_EDGE = (90, 130, 180)
# placeholders drawn when an image file is missing
COLOR_SKY = (112, 197, 206)
COLOR_BIRD = (250, 210, 40)
COLOR_PIPE = (84, 170, 60)

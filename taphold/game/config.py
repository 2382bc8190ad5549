# --- Display / playable band ---
SCREEN_HEIGHT = 768
GROUND_HEIGHT = 50            # ground panel at the bottom of the screen
PLAYABLE_TOP = 60             # ceiling band (HUD lives above it)
PLAYABLE_HEIGHT = SCREEN_HEIGHT - PLAYABLE_TOP - GROUND_HEIGHT
GROUND_Y = SCREEN_HEIGHT - GROUND_HEIGHT
PLAYER_X_OFFSET = 200         # player sits this far ahead of the scrolled world x

# --- Player ---
PLAYER_SIZE = 40
PLAYER_HITBOX = 32            # smaller than the drawn cube, forgiving collisions
PLAYER_GROUND_Y = GROUND_Y - PLAYER_SIZE / 2   # centre y when resting on the ground
PLAYER_CEILING_Y = PLAYABLE_TOP + PLAYER_SIZE / 2
GROUND_DETECTION_THRESHOLD = 5.0               # "touching ground" tolerance while holding
WAVE_FALL_SPEED = 300.0       # downward speed in wave mode when released (units/s)

# --- Simulation ---
FPS = 60
SIM_DT = 1.0 / FPS            # windows are tuned against exactly this step
SIM_MAX_TIME_S = 10.0         # runaway guard for the trajectory simulator

# --- Clearance solver ---
CLEARANCE_MARGIN = 10.0       # extra room above the obstacle top
HOLD_SEARCH_STEP_S = 0.1
HOLD_SEARCH_MAX_S = 1.0
FALLBACK_FIRST_OFFSET = 50.0  # used when no sample clears the obstacle
FALLBACK_LAST_OFFSET = 150.0

# --- Gravity-mode generation ---
START_SAFE_ZONE = 600.0
END_SAFE_ZONE = 400.0
WINDOW_BASE_WIDTH = 220.0
WINDOW_WIDTH_STEP = 12.0      # per difficulty tier
WINDOW_MIN_WIDTH = 60.0
WINDOW_SHRINK_START = 0.3     # share of the excess taken off the early side
WINDOW_SHRINK_END = 0.7       # share taken off the late side
WINDOW_CLAMP_WIDTH = 30.0
SPACING_BASE = 400.0
SPACING_STEP = 15.0
SPACING_MIN = 180.0
SPACING_RANGE = 150.0
OBSTACLE_BASE_HEIGHT = 45.0
OBSTACLE_HEIGHT_STEP = 3.0
OBSTACLE_HEIGHT_JITTER = 15.0
HOLD_OBSTACLE_EXTRA = 30.0
HOLD_OBSTACLE_JITTER = 20.0
HOLD_CHANCE_BASE = 0.1
HOLD_CHANCE_STEP = 0.04
HOLD_CHANCE_MAX = 0.5
HOLD_MIN_RANDOM_DIFFICULTY = 2       # random hold obstacles start at this tier
FORCED_HOLD_AFTER = 2                # tier 1 teaches the hold after this many obstacles
FORCED_HOLD_DEFAULT_S = 0.2
SPIKE_CHANCE = 0.5                   # cumulative thresholds on one uniform draw
BLOCK_CHANCE = 0.85
GAP_DEPTH = 100.0
GAP_WINDOW_LEAD = 120.0              # gap window = [x - LEAD, x - TRAIL]
GAP_WINDOW_TRAIL = 20.0

# --- Wave-mode generation ---
WAVE_END_SAFE_ZONE = 200.0
WAVE_SPACING_BASE = 180.0
WAVE_SPACING_STEP = 8.0
WAVE_SPACING_MIN = 100.0
WAVE_SPACING_JITTER = 80.0
WAVE_GAP_BASE = 0.42
WAVE_GAP_STEP = 0.015
WAVE_GAP_MIN = 0.22
WAVE_GAP_JITTER = 0.08
WAVE_GAP_Y_MIN = 0.2
WAVE_GAP_Y_RANGE = 0.5
WAVE_HOLD_BELOW = 0.4                # gaps above this line ask the player to fly up
WAVE_WINDOW_LEAD = 100.0

# --- Level table ---
LEVEL_COUNT = 15
MAX_DIFFICULTY = 15

# --- Colors (0xRRGGBB) ---
# (bg1, bg2, obstacle, player) per tier
PALETTES = (
    (0x667EEA, 0x764BA2, 0xFF6B6B, 0xFFD93D),  # purple dream
    (0x11998E, 0x38EF7D, 0xFF4757, 0xFFA502),  # mint fresh
    (0xFE8C00, 0xF83600, 0x2D3436, 0x00CEC9),  # sunset fire
    (0x6DD5FA, 0x2980B9, 0xE74C3C, 0xF1C40F),  # ocean blue
    (0xF093FB, 0xF5576C, 0x2C3E50, 0x1ABC9C),  # pink sunset
    (0x4776E6, 0x8E54E9, 0xE91E63, 0x00BCD4),  # royal purple
    (0x00C6FF, 0x0072FF, 0xFF5722, 0xFFEB3B),  # sky blue
    (0xF12711, 0xF5AF19, 0x1A1A2E, 0x16A085),  # fire orange
    (0x7F00FF, 0xE100FF, 0x2ECC71, 0xF39C12),  # neon purple
    (0x00D2D3, 0x54A0FF, 0xEE5A24, 0xFFC312),  # aqua splash
    (0x20BF6B, 0x26DE81, 0xEB3B5A, 0xF7B731),  # green meadow
    (0xFF6B81, 0xEE5A52, 0x2D3436, 0x00D2D3),  # coral pink
    (0xA55EEA, 0x8854D0, 0x20BF6B, 0xFED330),  # grape purple
    (0x1DD1A1, 0x10AC84, 0xFF6B6B, 0xFECA57),  # emerald
    (0xFF9FF3, 0xF368E0, 0x341F97, 0x00D2D3),  # bubblegum
)

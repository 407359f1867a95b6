DEFAULT_DURATION_MS = 10000
RESET_DURATION_MS = 1000

# one extra full revolution per second of spin
TURNS_PER_SECOND = 1.0

# pointer position, degrees clockwise from the top of the wheel
POINTER_OFFSET_DEG = 0.0

FRAME_INTERVAL_MS = 16

TEXT_ANGLES: tuple[str, ...] = ("horizontal", "vertical")

DEFAULT_TEXT_COLOR = "#fff"
DEFAULT_TEXT_ANGLE = "horizontal"
DEFAULT_BACKGROUND_COLOR = "#fff"
DEFAULT_BORDER_COLOR = "#fff"
DEFAULT_BORDER_WIDTH = 2
DEFAULT_INNER_RADIUS = 100
DEFAULT_KNOB_SIZE = 30


DEFAULT_COLORS: list[str] = [
    "#E07026",
    "#E8C22E",
    "#ABC937",
    "#4F991D",
    "#22AFD3",
    "#5858D0",
    "#7B48C8",
    "#D843B9",
    "#E23B80",
    "#D82B2B",
]


DEMO_OPTIONS: dict[str, object] = {
    "rewards": [
        "Reward 1",
        "Reward 2",
        "Reward 3",
        "Reward 4",
        "Reward 5",
        "Reward 6",
    ],
    "weights": [0, 0, 0, 0, 60, 0],
    "colors": ["#bc244a", "#bc244a", "#bc244a", "#bc244a", "#bc244a"],
    "inner_radius": 50,
    "text_angle": "horizontal",
    "border_color": "#fff",
    "border_width": 2,
    "background_color": "#FFD700",
    "text_color": "#fff",
    "duration_ms": 4000,
}

"""
Configuration constants for the blockly interpreter.

The line syntax below is the wire format emitted by the blockly front end;
keep it in sync with the block generators there.
"""

import os
import tempfile

# Scope keywords
IF_KEYWORD = "falls"
ELSE_KEYWORD = "sonst"
WHILE_KEYWORD = "solange"
REPEAT_KEYWORD = "wiederhole"
REPEAT_SUFFIX = "Mal"
FUNCTION_PREFIX = "public void"
SCOPE_CLOSE = "}"

# Scope kinds (values pushed onto the scope stack)
SCOPE_IF = "if"
SCOPE_WHILE = "while"
SCOPE_REPEAT = "repeat"
SCOPE_FUNCTION = "function"

# Wall-proximity predicates usable inside conditions
WALL_PREDICATES = (
    "naheWand",
    "WandOben",
    "WandUnten",
    "WandLinks",
    "WandRechts",
)

# Leaf action names (call syntax without "();")
MOVE_UP_NAME = "oben"
MOVE_DOWN_NAME = "unten"
MOVE_LEFT_NAME = "links"
MOVE_RIGHT_NAME = "rechts"
FIRE_UP_NAME = "feuerballOben"
FIRE_DOWN_NAME = "feuerballUnten"
FIRE_LEFT_NAME = "feuerballLinks"
FIRE_RIGHT_NAME = "feuerballRechts"

LEAF_ACTION_NAMES = (
    MOVE_UP_NAME,
    MOVE_DOWN_NAME,
    MOVE_LEFT_NAME,
    MOVE_RIGHT_NAME,
    FIRE_UP_NAME,
    FIRE_DOWN_NAME,
    FIRE_LEFT_NAME,
    FIRE_RIGHT_NAME,
)

# Names never resolved as user-defined functions
RESERVED_FUNCTIONS = frozenset(LEAF_ACTION_NAMES + WALL_PREDICATES)

# Integer semantics (signed 32-bit, like the game side)
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1
INT_BITS = 32

# Largest array a program may create (elements)
MAX_ARRAY_LENGTH = 1_000_000

# Condition parser (lark cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "blocklyvm_condition_parser.cache")

# Headless world
DEFAULT_FRAME_DELAY = 0.0  # seconds slept per leaf action (one frame in the game)
DEFAULT_HERO_START = (0, 0)

# Session responses
STATUS_OK = 200
STATUS_INTERRUPTED = 205
STATUS_FAILED = 400
RESPONSE_OK = "OK"
RESPONSE_INTERRUPTED = "Execution interrupted"
RESPONSE_ACTION_PREFIX = "Anweisung: "
RESPONSE_MESSAGE_PREFIX = "Fehlermeldung: "

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

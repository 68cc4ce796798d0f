"""
Game-world boundaries: actuator (leaf actions, wall sensing) and HUD.
"""

from .actuator import Direction, LeafAction, World, RecordingWorld
from .hud import HudNotifier, RecordingHud

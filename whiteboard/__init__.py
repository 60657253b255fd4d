"""Whiteboard duel - a pass-the-device football strategy game.

Both sides secretly draw their plan, then a simultaneous reveal animates the
play and decides the down.
"""

__version__ = "0.1.0"

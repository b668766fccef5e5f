"""
slidedeck: animated slide navigation engine

Two coordinated position animators (slide index, fragment index), a
navigation state machine routing actions between them, and a compositor
that turns the state into a render tree at any animation instant.
"""

__version__ = "0.3.0"

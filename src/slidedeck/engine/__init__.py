"""
Navigation/animation engine

position_animator → navigation → compositor, leaves first.
"""

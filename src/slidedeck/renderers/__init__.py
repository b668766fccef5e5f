from slidedeck.renderers.text_renderer import TextRenderer

__all__ = ["TextRenderer"]

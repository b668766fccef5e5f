from slidedeck.managers.config_manager import ConfigManager

__all__ = ["ConfigManager"]

from research_navigator.config.settings import Settings, settings

__all__ = ["Settings", "settings"]

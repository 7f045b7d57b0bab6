from floco.config.settings import FloatFormatName, FlocoSettings, get_settings, reset_settings

__all__ = ["FloatFormatName", "FlocoSettings", "get_settings", "reset_settings"]

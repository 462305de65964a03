from .config_loader import PromptloomSettings, get_config_path, get_settings, load_settings

__all__ = ["PromptloomSettings", "get_config_path", "get_settings", "load_settings"]

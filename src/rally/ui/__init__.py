from .main_window import MainWindowFactory, launch_ui

__all__ = ["MainWindowFactory", "launch_ui"]
